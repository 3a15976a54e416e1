import torch
import numpy as np

class PolicyAgent:
    def __init__(self, model):
        self.model = model
        self.model.eval() # Always eval mode, inference only

    def infer(self, state) -> np.ndarray:
        """
        Feeds the state through the network and returns the raw proposal.
        Pure: no gradients, no change to the model.
        """
        with torch.no_grad():
            x = torch.tensor(np.asarray(state), dtype=torch.float32)
            outputs = self.model(x)
        return outputs.numpy().astype(np.float64)
