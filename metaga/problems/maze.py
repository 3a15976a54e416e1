import numpy as np
from metaga.problems.base import Problem
from metaga.genetic.frames import WorldSize, Frame

SOL_SIZE = 10  # Moves per maze cell

MOVES = [(0, 1), (0, -1), (-1, 0), (1, 0)]

class MazeProblem(Problem):
    """
    Find the way from the top-left corner to the end of a random maze.
    Each move reads two genes: the larger (in absolute value) picks the axis, its sign the direction.
    Score: 2 * maze_size minus the distance (L1) between the final position and the end.
    Level: Easy
    """
    def __init__(self, maze, end):
        super().__init__()
        self.maze = np.asarray(maze, dtype=bool)
        self.maze_size = self.maze.shape[0]
        self.end = tuple(end)

    @classmethod
    def random(cls, rng, conf=10):
        maze = np.zeros((conf, conf), dtype=bool)
        end = cls.create_maze(maze, rng)
        maze[0, 0] = True
        return cls(maze, end)

    @staticmethod
    def create_maze(maze, rng):
        """
        Carves the maze with a random DFS starting from (0, 0).
        A cell is carved only if at most one of its neighbours is already open,
        so corridors never merge. Returns the last carved cell, which becomes the end.
        """
        stack = [(0, 0)]
        end = (0, 0)
        while stack:
            cell = stack.pop()
            if not MazeProblem.is_explorable(maze, cell):
                continue
            maze[cell] = True
            end = cell
            candidates = [c for c in MazeProblem.neighbours(maze, cell) if MazeProblem.is_explorable(maze, c)]
            for idx in rng.permutation(len(candidates)):
                stack.append(candidates[idx])
        return end

    @staticmethod
    def neighbours(maze, cell):
        size = maze.shape[0]
        for dx, dy in MOVES:
            x, y = cell[0] + dx, cell[1] + dy
            if 0 <= x < size and 0 <= y < size:
                yield (x, y)

    @staticmethod
    def is_explorable(maze, cell):
        if maze[cell]:
            return False
        opened = sum(1 for c in MazeProblem.neighbours(maze, cell) if maze[c])
        return opened < 2

    def solution_size(self):
        return self.maze_size * SOL_SIZE * 2

    def play(self, solution, frames=None, verbose=False) -> float:
        genes = solution.genes
        pos = (0, 0)
        for i in range(self.maze_size * SOL_SIZE):
            if frames is not None:
                frames.append(self.get_frame(pos))
            if verbose:
                self.print_pos(pos)
            mv_x = float(np.clip(genes[i], -1.0, 1.0))
            mv_y = float(np.clip(genes[2 * i], -1.0, 1.0))
            if abs(mv_x) > abs(mv_y):
                mv_y = 0.0
            else:
                mv_x = 0.0
            target = (
                int(np.clip(pos[0] + np.sign(mv_x), 0, self.maze_size - 1)),
                int(np.clip(pos[1] + np.sign(mv_y), 0, self.maze_size - 1)),
            )
            if self.maze[target]:
                pos = target
        distance = abs(pos[0] - self.end[0]) + abs(pos[1] - self.end[1])
        return float(2 * self.maze_size - distance)

    def evaluate(self, solution):
        return self.play(solution)

    def demonstrate(self, solution):
        print(f"score : {self.play(solution, verbose=True)}")

    def print_pos(self, pos):
        print("\n----")
        for x in range(self.maze_size):
            row = ""
            for y in range(self.maze_size):
                if (x, y) == pos:
                    row += "xx"
                elif (x, y) == self.end:
                    row += "TT"
                elif self.maze[x, y]:
                    row += "  "
                else:
                    row += "##"
            print(row)
        print("----\n")

    def get_frame(self, pos) -> Frame:
        entities = []
        for x in range(self.maze_size):
            for y in range(self.maze_size):
                if (x, y) == pos:
                    color = (0.0, 1.0, 0.0)
                elif (x, y) == self.end:
                    color = (1.0, 0.0, 0.0)
                elif self.maze[x, y]:
                    color = (1.0, 1.0, 1.0)
                else:
                    color = (0.0, 0.0, 0.0)
                entities.append((float(x), float(y), 1.0, 1.0) + color)
        return Frame(entities)

    def get_frames(self, solution):
        frames = [WorldSize(self.maze_size, self.maze_size)]
        self.play(solution, frames=frames)
        return frames

    def __repr__(self):
        return f"MazeProblem(size={self.maze_size}, end={self.end})"
