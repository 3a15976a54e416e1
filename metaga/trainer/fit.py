import copy
import numpy as np
import torch
import torch.nn as nn
import torch.optim as optim
from torch.utils.data import DataLoader, TensorDataset

import metaga.config as config

def fit_policy(model, tests, rng: np.random.Generator, max_iter=config.MAX_GEN,
               learning_rate=config.FIT_LEARNING_RATE, target_loss=config.FIT_TARGET_LOSS,
               batch_divisor=config.FIT_BATCH_DIVISOR, epochs_per_iter=config.FIT_EPOCHS_PER_ITER,
               verbose=False):
    """
    Fits a copy of the policy network on (inputs, outputs) examples.
    :param tests: Training examples with `inputs` and `outputs` vectors.
    :param max_iter: Fit iterations, each one is `epochs_per_iter` passes over the examples.
    :param target_loss: Stops early once the epoch loss (MSE) goes below it.
    :param batch_divisor: One mini-batch per `batch_divisor` examples (at least one batch).
    :return: (new model, last epoch loss). The loss is None when there was nothing to fit.
    """
    net = copy.deepcopy(model)
    if len(tests) == 0:
        return net, None

    states = torch.FloatTensor(np.array([t.inputs for t in tests]))
    targets = torch.FloatTensor(np.array([t.outputs for t in tests]))

    nb_batches = max(1, len(tests) // batch_divisor)
    batch_size = int(np.ceil(len(tests) / nb_batches))

    # Shuffling stays reproducible through the shared generator
    generator = torch.Generator()
    generator.manual_seed(int(rng.integers(2**31 - 1)))
    dataset = TensorDataset(states, targets)
    dataloader = DataLoader(dataset, batch_size=batch_size, shuffle=True, generator=generator)

    criterion = nn.MSELoss()
    optimizer = optim.Adam(net.parameters(), lr=learning_rate)

    avg_loss = None
    total_epochs = max_iter * epochs_per_iter
    for epoch in range(total_epochs):
        net.train()
        total_loss = 0
        for batch_states, batch_targets in dataloader:
            optimizer.zero_grad()
            outputs = net(batch_states)
            loss = criterion(outputs, batch_targets)
            loss.backward()
            optimizer.step()

            total_loss += loss.item()

        avg_loss = total_loss / len(dataloader)

        if verbose and (epoch + 1) % 5 == 0:
            print(f"Epoch {epoch+1}/{total_epochs}: Loss {avg_loss:.4f}")

        if avg_loss < target_loss:
            if verbose:
                print(f"Target loss reached at epoch {epoch+1}")
            break

    net.eval()
    return net, avg_loss
