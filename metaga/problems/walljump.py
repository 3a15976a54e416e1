import numpy as np
from metaga.problems.base import Problem

NB_MOVES = 25
JUMP_SPEED = 5.0
GRAVITY = 1.5

class WallJumpProblem(Problem):
    """
    A little creature must jump over a wall and go as far right as possible.
    Each move reads a push to the right (gene i, clamped to [0, 2]) and a jump flag (gene 2i > 0.5).
    Jumping only works from the ground; the wall can only be passed from above its height.
    Score: the final horizontal position.
    Level: Very Easy
    """
    def __init__(self, wall_pos, wall_height):
        super().__init__()
        self.wall_pos = float(wall_pos)
        self.wall_height = float(wall_height)

    @classmethod
    def random(cls, rng, conf=None):
        return cls(2.0 + rng.random() * 10.0, 5.0 + rng.random() * 10.0)

    def solution_size(self):
        return NB_MOVES * 2

    def play(self, solution, verbose=False) -> float:
        genes = solution.genes
        x, y = 0.0, 0.0
        speed_up = 0.0
        mv_r = 0.0
        for i in range(NB_MOVES):
            if verbose:
                print(f"pos : ({x:.2f}, {y:.2f})")
            mv_r += float(np.clip(genes[i], 0.0, 2.0)) / 2.0
            mv_r *= 0.9
            # Check if we hit the wall
            if x < self.wall_pos < x + mv_r and y <= self.wall_height:
                x = self.wall_pos - 0.1
            else:
                x += mv_r
            if genes[2 * i] > 0.5 and y == 0.0:
                speed_up = JUMP_SPEED
            y += speed_up
            # Landing
            if y < 0.0:
                y = 0.0
                speed_up = 0.0
            if y > 0.0:
                speed_up -= GRAVITY
        return float(x)

    def evaluate(self, solution):
        return self.play(solution)

    def demonstrate(self, solution):
        self.print_state()
        print(f"score : {self.play(solution, verbose=True)}")

    def __repr__(self):
        return f"WallJumpProblem(wall at {self.wall_pos:.2f}, height : {self.wall_height:.2f})"
