import numpy as np
import metaga.config as config
from metaga.genetic.engine import GenerationEngine
from metaga.genetic.params import ParamChoice

class Evaluator:
    """Runs genetic algorithms with hand-crafted (fixed) parameters, as a baseline for the network."""
    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def evaluate_fixed_params(self, problems, generations=config.FIXED_PARAM_GENERATIONS,
                              choice: ParamChoice = None) -> float:
        """
        Runs an engine on every problem for a fixed number of generations and sums the scores.
        :param choice: Proposal applied every generation. Defaults to "change nothing".
        """
        total_score = 0.0
        for problem in problems:
            engine = GenerationEngine(problem, self.rng)
            for _ in range(generations):
                engine.advance(choice if choice is not None else ParamChoice.same())
            total_score += engine.evaluate()
        return total_score
