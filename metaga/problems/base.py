import numpy as np
from typing import List
from metaga.genetic.genetics import crossover, mutate

class GenericSolution:
    """A candidate answer: a gene vector and the score accumulated during evaluation."""
    def __init__(self, genes, score=0.0):
        self.genes = np.asarray(genes, dtype=np.float64)
        self.score = float(score)

    @classmethod
    def random(cls, rng: np.random.Generator, size: int):
        return cls(rng.random(size))

    def add_score(self, score: float):
        self.score += score

    def reset_score(self):
        self.score = 0.0

    def get_score(self) -> float:
        return self.score

    def mutate(self, mutation_rate: float, rng: np.random.Generator):
        mutate(self.genes, rng, mutation_rate=mutation_rate)

    def child(self, other: "GenericSolution", rng: np.random.Generator) -> "GenericSolution":
        return GenericSolution(crossover(self.genes, other.genes, rng))

    def __len__(self):
        return len(self.genes)

    def __repr__(self):
        return f"GenericSolution(score={self.score:.3f}, genes={len(self.genes)})"


class Problem:
    """
    A problem the genetic algorithm can optimise.
    Problems are immutable once created: evaluate() must not change them.
    """
    def __init__(self):
        pass

    @classmethod
    def random(cls, rng: np.random.Generator, conf: int) -> "Problem":
        raise NotImplementedError

    def solution_size(self) -> int:
        raise NotImplementedError

    def random_solution(self, rng: np.random.Generator) -> GenericSolution:
        return GenericSolution.random(rng, self.solution_size())

    def evaluate(self, solution: GenericSolution) -> float:
        """Returns the score earned by the solution."""
        raise NotImplementedError

    def add_scores_all(self, population: List[GenericSolution]):
        """Evaluates every solution once. Problems running several trials per solution override this."""
        for sol in population:
            sol.add_score(self.evaluate(sol))

    def demonstrate(self, solution: GenericSolution):
        print(f"score : {self.evaluate(solution)}")

    def print_state(self):
        print(self)

    def get_frames(self, solution: GenericSolution) -> list:
        return []
