import torch
import torch.nn as nn

import metaga.config as config

class PolicyNetwork(nn.Module):
    """Maps a normalized GenResult to a ParamChoice proposal, every component in [0, 1]."""
    def __init__(self, input_size=config.GEN_RESULT_SIZE, output_size=config.PARAM_CHOICE_SIZE,
                 hidden_sizes=config.HIDDEN_SIZES):
        super(PolicyNetwork, self).__init__()
        layers = []
        previous = input_size
        for hidden_size in hidden_sizes:
            layers.append(nn.Linear(previous, hidden_size))
            layers.append(nn.Sigmoid())
            previous = hidden_size
        layers.append(nn.Linear(previous, output_size))
        layers.append(nn.Sigmoid())
        self.network = nn.Sequential(*layers)

    def forward(self, x):
        return self.network(x)
