from metaga.problems.easy import EasyProblem
from metaga.problems.lineareq import LinearEquationProblem
from metaga.problems.maze import MazeProblem
from metaga.problems.turnaround import TurnAroundProblem
from metaga.problems.walljump import WallJumpProblem

PROBLEM_KINDS = {
    "maze": MazeProblem,
    "walljump": WallJumpProblem,
    "easy": EasyProblem,
    "lineareq": LinearEquationProblem,
    "turnaround": TurnAroundProblem,
}

class AllProblems:
    """
    Compilation of all problems: random() picks one kind uniformly and returns an instance of it.
    Usable anywhere a problem class is expected.
    """
    KINDS = list(PROBLEM_KINDS.values())

    @classmethod
    def random(cls, rng, conf):
        kind = cls.KINDS[rng.integers(len(cls.KINDS))]
        return kind.random(rng, conf)

def get_problem_class(name: str):
    if name == "all":
        return AllProblems
    if name not in PROBLEM_KINDS:
        raise ValueError(f"Unknown problem '{name}'. Choose from: all, {', '.join(PROBLEM_KINDS)}")
    return PROBLEM_KINDS[name]
