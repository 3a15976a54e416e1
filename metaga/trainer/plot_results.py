import argparse
import os
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

def load_history(log_file="training_log.json") -> pd.DataFrame:
    return pd.read_json(log_file)

def plot_training_results(log_file="training_log.json", output_dir="."):
    if not os.path.exists(log_file):
        print(f"File {log_file} not found!")
        return []

    df = load_history(log_file)
    print(df[["held_out", "loss", "examples"]].describe())

    sns.set_theme(style="whitegrid")
    saved = []

    # 1. Held-out score against the fixed-parameter baseline
    plt.figure(figsize=(12, 6))
    sns.lineplot(x="round", y="held_out", data=df, label="Network")
    if "baseline" in df.columns:
        plt.axhline(y=df["baseline"].iloc[0], color='r', linestyle='--', label="Fixed parameters")
    plt.title("Score on Held-Out Problems")
    plt.ylabel("Total Score")
    plt.legend()
    path = os.path.join(output_dir, "held_out_score.png")
    plt.savefig(path)
    plt.close()
    saved.append(path)
    print(f"Saved {path}")

    # 2. Fit loss and exploration coefficient
    fig, ax_loss = plt.subplots(figsize=(12, 6))
    sns.lineplot(x="round", y="loss", data=df, ax=ax_loss, color="tab:blue")
    ax_loss.set_ylabel("Fit Loss (MSE)")
    ax_coef = ax_loss.twinx()
    sns.lineplot(x="round", y="coef", data=df, ax=ax_coef, color="tab:orange")
    ax_coef.set_ylabel("Exploration Coefficient")
    plt.title("Fit Loss and Exploration")
    path = os.path.join(output_dir, "loss_and_coef.png")
    fig.savefig(path)
    plt.close(fig)
    saved.append(path)
    print(f"Saved {path}")

    return saved

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--log", default="training_log.json")
    parser.add_argument("--out", default=".")
    args = parser.parse_args()
    plot_training_results(args.log, args.out)
