import numpy as np
from metaga.problems.base import Problem

class EasyProblem(Problem):
    """
    The simplest possible problem: get as close as possible to a series of numbers.
    Score: 100 minus the distance (L1) to the numbers.
    """
    def __init__(self, numbers):
        super().__init__()
        self.numbers = np.asarray(numbers, dtype=np.float64)

    @classmethod
    def random(cls, rng, conf=10):
        return cls(rng.random(conf) * 10.0)

    def solution_size(self):
        return len(self.numbers)

    def evaluate(self, solution):
        return float(100.0 - np.abs(self.numbers - solution.genes).sum())

    def demonstrate(self, solution):
        print(f"diff : {np.abs(self.numbers - solution.genes).sum()}")

    def __repr__(self):
        return f"EasyProblem({self.numbers})"
