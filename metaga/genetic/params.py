import numpy as np
import metaga.config as config

class ParamChoice:
    """
    The hyperparameters driving one generation of the genetic algorithm.
    The engine keeps one of these and merges every new proposal into it.
    """
    FIELDS = ("global_scale", "mutation_rate", "elite_count", "kill_count", "birth_rate")

    def __init__(self, global_scale=1.0, mutation_rate=config.MUT_START, elite_count=config.ELITE_KEEP_START,
                 kill_count=config.DEATH_START, birth_rate=config.CHILD_PER_COUPLE_START):
        self.global_scale = float(global_scale)
        self.mutation_rate = float(mutation_rate)
        self.elite_count = float(elite_count)
        self.kill_count = float(kill_count)
        self.birth_rate = float(birth_rate)

    @classmethod
    def initial(cls):
        """Starting values of a fresh engine."""
        return cls()

    @classmethod
    def same(cls):
        """A proposal that leaves every hyperparameter unchanged."""
        return cls(0.0, 0.5, 0.5, 0.5, 0.5)

    def update(self, other: "ParamChoice"):
        """
        Merges a proposal into the current values.
        0.5 means no change. With the global scale at 1 every 0.1 above 0.5 is +10%,
        with the global scale at 2 every 0.1 is +20%, and so on.
        The global scale itself is replaced, not merged.
        """
        self.global_scale = other.global_scale
        self.mutation_rate += self.mutation_rate * (other.mutation_rate - 0.5) * other.global_scale
        self.elite_count += self.elite_count * (other.elite_count - 0.5) * other.global_scale
        self.kill_count += self.kill_count * (other.kill_count - 0.5) * other.global_scale
        self.birth_rate += self.birth_rate * (other.birth_rate - 0.5) * other.global_scale

    @classmethod
    def from_vector(cls, vector):
        """
        Reads (global, mutation, elite, kills, birth rate) positionally.
        Extra trailing components are ignored.
        """
        values = [float(v) for v in vector]
        if len(values) < config.PARAM_CHOICE_SIZE:
            raise ValueError(f"Expected {config.PARAM_CHOICE_SIZE} values, got {len(values)}")
        return cls(*values[:config.PARAM_CHOICE_SIZE])

    def to_vector(self) -> np.ndarray:
        return np.array([getattr(self, f) for f in self.FIELDS], dtype=np.float64)

    def __repr__(self):
        inner = ", ".join(f"{f}={getattr(self, f):.4f}" for f in self.FIELDS)
        return f"ParamChoice({inner})"


class RollingWindow:
    """Fixed-size circular buffer, oldest value dropped on every push."""
    def __init__(self, size=config.HISTORY_SIZE):
        self.size = size
        self.buffer = np.zeros(size, dtype=np.float64)
        self.head = 0  # Index of the oldest slot

    def push(self, value: float):
        self.buffer[self.head] = value
        self.head = (self.head + 1) % self.size

    def values(self) -> np.ndarray:
        """Oldest to newest."""
        return np.roll(self.buffer, -self.head)


class GenResult:
    """Score distribution of the current generation plus rolling max/median histories."""
    def __init__(self):
        self.max = 0.0
        self.min = 0.0
        self.q1 = 0.0
        self.median = 0.0
        self.q3 = 0.0
        self.max_history = RollingWindow()
        self.median_history = RollingWindow()

    def update(self, max_score, min_score, q1, median, q3):
        """
        Updates the result with a new generation.
        The histories receive the previous generation's max/median, so they lag one generation behind.
        """
        self.max_history.push(self.max)
        self.median_history.push(self.median)
        self.max = float(max_score)
        self.min = float(min_score)
        self.q1 = float(q1)
        self.median = float(median)
        self.q3 = float(q3)

    def to_vector(self) -> np.ndarray:
        """
        Min-max scaled state fed to the policy network.
        Size: 5 (Stats) + 5 (Max History) + 5 (Median History) = 15 floats.
        A uniform population (max == min) maps to all zeros.
        """
        if self.max == self.min:
            return np.zeros(config.GEN_RESULT_SIZE, dtype=np.float32)

        spread = self.max - self.min
        stats = (np.array([self.max, self.median, self.q1, self.q3, self.min]) - self.min) / spread
        # Prior extremes can fall outside the current range
        max_hist = np.clip((self.max_history.values() - self.min) / spread, 0.0, 1.0)
        med_hist = np.clip((self.median_history.values() - self.min) / spread, 0.0, 1.0)
        return np.concatenate([stats, max_hist, med_hist]).astype(np.float32)

    def __repr__(self):
        return (f"GenResult(max={self.max}, min={self.min}, q1={self.q1}, "
                f"median={self.median}, q3={self.q3})")
