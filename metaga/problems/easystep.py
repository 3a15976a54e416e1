import numpy as np

class EasyStep:
    """
    A step by step problem: visit every cell of a line in as few moves as possible.
    Unlike the genetic problems, it is driven directly by the meta-training loop.
    The state gives two values per cell, [on it, still unvisited]:
    [0 1, 0 1, 1 1, 0 1] -> standing on the third cell, nothing visited yet.
    """
    def __init__(self, visited, my_pos):
        self.visited = np.asarray(visited, dtype=np.float64)  # 1.0 until visited
        self.my_pos = int(my_pos)

    @classmethod
    def random(cls, rng: np.random.Generator, conf=10):
        return cls(np.ones(conf), rng.integers(conf))

    @classmethod
    def start(cls, problem: "EasyStep", rng=None) -> "EasyStep":
        """A fresh walk over the same line. The given problem is left untouched."""
        return cls(problem.visited.copy(), problem.my_pos)

    def get_state(self) -> np.ndarray:
        here = np.zeros(len(self.visited))
        here[self.my_pos] = 1.0
        return np.stack([here, self.visited], axis=1).ravel().astype(np.float32)

    def make_step(self, choice):
        """Moves right if the first component wins, left otherwise. Walls stop the walker."""
        if choice[0] > choice[1]:
            if self.my_pos < len(self.visited) - 1:
                self.my_pos += 1
        elif self.my_pos > 0:
            self.my_pos -= 1
        self.visited[self.my_pos] = 0.0

    def max_step(self) -> int:
        return int(len(self.visited) * 1.5)

    def evaluate(self) -> float:
        """Minus the number of cells left to visit."""
        return -float(self.visited.sum())

    def is_solved(self) -> bool:
        return self.visited.sum() < 1.0

    def state_size(self) -> int:
        return 2 * len(self.visited)

    def choice_size(self) -> int:
        return 2

    def print_state(self):
        cells = []
        for i, val in enumerate(self.visited):
            if i == self.my_pos:
                cells.append(".#.")
            elif val == 1.0:
                cells.append(". .")
            else:
                cells.append(".|.")
        print("".join(cells))

    def get_frames(self) -> list:
        return []

    def __repr__(self):
        return f"EasyStep(pos={self.my_pos}, left={int(self.visited.sum())})"
