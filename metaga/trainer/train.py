import argparse
import json
import numpy as np
import torch

import metaga.config as config
from metaga.ai.model import PolicyNetwork
from metaga.genetic.engine import GenerationEngine
from metaga.problems.compilation import get_problem_class
from metaga.trainer.evaluator import Evaluator
from metaga.trainer.reilearn import LearnParams, MetaTrainer

def train(problem="turnaround", rounds=100, learn_params=None, seed=0, log_file="training_log.json"):
    """
    Creates a network, makes it learn to supervise genetic algorithms and prints
    its score on the held-out problems after every round.
    """
    learn_params = learn_params or LearnParams()
    problem_cls = get_problem_class(problem)
    rng = np.random.default_rng(seed)
    torch.manual_seed(int(rng.integers(2**31 - 1)))

    print(f"Starting Training: Problem={problem}, Rounds={rounds}, "
          f"Problems/Round={learn_params.nb_problems}, Trials/Problem={learn_params.test_per_prob}")

    net = PolicyNetwork()
    trainer = MetaTrainer(net, problem_cls, learn_params, rng, verbose=True)
    scale = config.SCORE_SCALE * max(1, learn_params.test_data_size)

    baseline = Evaluator(rng).evaluate_fixed_params(trainer.get_test_problems())
    print(f"total score on test data without network is : {baseline / scale}")

    trainer.demonstrate_on(GenerationEngine.initiate(problem_cls, learn_params.prob_conf, rng))

    training_history = []
    for r in range(1, rounds + 1):
        held_out = trainer.evaluate_held_out()
        print(f"Round {r}: score on test data with network : {held_out / scale}")

        stats = trainer.training_round()
        stats["held_out"] = float(held_out)
        stats["baseline"] = float(baseline)
        training_history.append(stats)

        # Save Log to File (Overwrite each time for safety)
        with open(log_file, "w") as f:
            json.dump(training_history, f, indent=4)

    trainer.demonstrate_on(GenerationEngine.initiate(problem_cls, learn_params.prob_conf, rng))
    return trainer

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--problem", default="turnaround")
    parser.add_argument("--rounds", type=int, default=100)
    parser.add_argument("--problems", type=int, default=config.NB_EXAMPLE_PROBLEMS)
    parser.add_argument("--trials", type=int, default=config.TESTS_PER_PROBLEM)
    parser.add_argument("--held-out", type=int, default=config.TEST_DATA_SIZE)
    parser.add_argument("--conf-size", type=int, default=config.PROB_CONF_SIZE)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log", default="training_log.json")
    args = parser.parse_args()

    params = LearnParams(
        nb_problems=args.problems,
        test_per_prob=args.trials,
        test_data_size=args.held_out,
        prob_conf=args.conf_size,
    )
    train(problem=args.problem, rounds=args.rounds, learn_params=params, seed=args.seed, log_file=args.log)
