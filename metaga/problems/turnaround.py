import numpy as np
from metaga.problems.base import Problem, GenericSolution
from metaga.genetic.frames import WorldSize, Frame

ARENA_SIZE = 100.0
POD_SIZE = ARENA_SIZE / 10.0
NB_STEPS = 14

class TurnAroundProblem(Problem):
    """
    A pod starts somewhere with some speed and must come back to its starting position.
    Every step the solution pushes the speed by (gene - 0.5) on each axis.
    Score: 1000 minus the distance (L1) to the starting position at the end.
    Level: Very Easy
    """
    def __init__(self, initial_pos, initial_speed):
        super().__init__()
        self.initial_pos = np.asarray(initial_pos, dtype=np.float64)
        self.initial_speed = np.asarray(initial_speed, dtype=np.float64)

    @classmethod
    def random(cls, rng, conf=None):
        # Position between 0 and 10, speed between -5 and 0
        return cls(rng.random(2) * 10.0, rng.random(2) * 5.0 - 5.0)

    def solution_size(self):
        return 28 * 2

    def play(self, solution: GenericSolution, frames=None, verbose=False) -> float:
        genes = solution.genes
        pos = self.initial_pos.copy()
        speed = self.initial_speed.copy()
        for i in range(NB_STEPS):
            if frames is not None:
                frames.append(self.get_frame(pos))
            if verbose:
                print(f"pos : {pos}, speed : {speed}")
            pos += speed
            speed[0] += genes[i] - 0.5
            speed[1] += genes[2 * i] - 0.5
        return float(1000.0 - np.abs(pos - self.initial_pos).sum())

    def evaluate(self, solution):
        return self.play(solution)

    def demonstrate(self, solution):
        self.print_state()
        print(f"score : {self.play(solution, verbose=True)}")

    def get_frame(self, pos) -> Frame:
        return Frame([
            (pos[0] + ARENA_SIZE, pos[1] + ARENA_SIZE, POD_SIZE, POD_SIZE, 0.0, 1.0, 0.0),
            (self.initial_pos[0] + ARENA_SIZE, self.initial_pos[1] + ARENA_SIZE, POD_SIZE, POD_SIZE, 1.0, 0.0, 0.0),
        ])

    def get_frames(self, solution):
        frames = [WorldSize(int(ARENA_SIZE) * 2, int(ARENA_SIZE) * 2)]
        self.play(solution, frames=frames)
        return frames

    def __repr__(self):
        return f"TurnAroundProblem(pos={self.initial_pos}, speed={self.initial_speed})"
