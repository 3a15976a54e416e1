import numpy as np
from metaga.problems.base import Problem

MAT_SIZE = 50

class LinearEquationProblem(Problem):
    """
    Solve Ax = y for a random system.
    Score: MAT_SIZE^2 minus the L1 residual.
    Level: Easy
    """
    def __init__(self, matrix_a, vector_y):
        super().__init__()
        self.matrix_a = np.asarray(matrix_a, dtype=np.float64)
        self.vector_y = np.asarray(vector_y, dtype=np.float64)

    @classmethod
    def random(cls, rng, conf=None):
        return cls(rng.random((MAT_SIZE, MAT_SIZE)), rng.random(MAT_SIZE))

    def solution_size(self):
        return len(self.vector_y)

    def evaluate(self, solution):
        residual = self.matrix_a @ solution.genes - self.vector_y
        return float(len(self.vector_y) ** 2 - np.abs(residual).sum())

    def demonstrate(self, solution):
        print(f"expected : {self.vector_y}, got : {self.matrix_a @ solution.genes}")

    def __repr__(self):
        return f"LinearEquationProblem(size={len(self.vector_y)})"
