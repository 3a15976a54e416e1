"""
Teaches a policy network to supervise genetic algorithms.

This is not usual reinforcement learning: the network does not choose among discrete
options. Playouts on the same problem are ranked, the choices of the worst ones are
turned into "do the opposite" examples, those of the best ones into "do it again"
examples, and the network is refitted on them as a plain regression.
"""
from dataclasses import dataclass
from typing import List, Tuple
import numpy as np

import metaga.config as config
from metaga.ai.agent import PolicyAgent
from metaga.genetic.engine import GenerationEngine
from metaga.trainer.fit import fit_policy

@dataclass
class Test:
    """A training example handed to the network fitter."""
    __test__ = False  # Not a pytest class

    inputs: np.ndarray
    outputs: np.ndarray

@dataclass
class Choice:
    """A choice made by the network in a given situation."""
    inputs: np.ndarray
    outputs: np.ndarray  # Raw network proposal
    choice: np.ndarray   # Perturbed action actually applied

    def into_good_test(self) -> Test:
        """The move was good: keep making these choices."""
        return Test(self.inputs, self.choice)

    def into_bad_test(self) -> Test:
        """The move was bad: do the opposite next time."""
        return Test(self.inputs, 1.0 - self.choice)

@dataclass
class LearnParams:
    nb_problems: int = config.NB_EXAMPLE_PROBLEMS
    test_per_prob: int = config.TESTS_PER_PROBLEM
    max_gen: int = config.MAX_GEN
    starting_coef: float = config.STARTING_COEF
    coef_mod: float = config.COEF_MODIFICATOR
    percent_elite: float = config.PERCENT_ELITE
    test_data_size: int = config.TEST_DATA_SIZE
    prob_conf: int = config.PROB_CONF_SIZE

class MetaTrainer:
    """
    Trains the network on any step by step environment: something with get_state(),
    make_step(choice), max_step(), evaluate(), is_solved() and print_state().
    `env_factory(problem, rng)` builds a fresh environment over a problem, by default a
    GenerationEngine evolving a population on it.
    """
    def __init__(self, net, problem_cls, learn_params: LearnParams, rng: np.random.Generator, held_out_seed=None,
                 env_factory=GenerationEngine, verbose=False):
        self.net = net
        self.problem_cls = problem_cls
        self.env_factory = env_factory
        self.verbose = verbose  # Prints the fit loss
        self.params = learn_params
        self.rng = rng
        self.coef = learn_params.starting_coef
        self.rounds = 0
        self.history = []

        # Held-out problems, only used to measure progress
        self.test_problems = [problem_cls.random(rng, learn_params.prob_conf)
                              for _ in range(learn_params.test_data_size)]
        if held_out_seed is None:
            held_out_seed = int(rng.integers(2**31 - 1))
        self.held_out_seed = held_out_seed

    def get_net(self):
        return self.net

    def get_test_problems(self):
        return self.test_problems

    def new_engine(self, problem, rng=None):
        return self.env_factory(problem, self.rng if rng is None else rng)

    # --- Measuring ---

    def run_greedy(self, engine, verbose=False, frames=None) -> float:
        """Lets the network drive the engine without exploration noise. Returns the final score."""
        agent = PolicyAgent(self.net)
        for _ in range(engine.max_step()):
            if verbose:
                engine.print_state()
            engine.make_step(agent.infer(engine.get_state()))
            if engine.is_solved():
                break
            if frames is not None:
                frames.extend(engine.get_frames())
        if verbose:
            engine.print_state()
        return engine.evaluate()

    def evaluate_held_out(self) -> float:
        """Sums the scores of the unperturbed network over the held-out problems."""
        rng = np.random.default_rng(self.held_out_seed)
        score = 0.0
        for problem in self.test_problems:
            score += self.run_greedy(self.new_engine(problem, rng))
        return score

    def demonstrate(self) -> List[float]:
        """Demonstrates the unperturbed network on every held-out problem."""
        rng = np.random.default_rng(self.held_out_seed)
        return [self.demonstrate_on(self.new_engine(problem, rng)) for problem in self.test_problems]

    def demonstrate_on(self, engine) -> float:
        score = self.run_greedy(engine, verbose=True)
        print(f"demo score : {score}\n")
        return score

    def get_frames(self) -> list:
        """Draw instructions of an unperturbed run on the first held-out problem."""
        if not self.test_problems:
            return []
        frames = []
        rng = np.random.default_rng(self.held_out_seed)
        self.run_greedy(self.new_engine(self.test_problems[0], rng), frames=frames)
        return frames

    # --- Training ---

    def training_round(self) -> dict:
        """
        Performs one iteration of testing -> reinforcing the network.
        :return: The statistics of the round (also appended to history).
        """
        tests = []
        for _ in range(self.params.nb_problems):
            problem = self.problem_cls.random(self.rng, self.params.prob_conf)
            tests.extend(self.gen_tests_for_prob(problem))
        print(f"training on {len(tests)} examples")

        loss = self.reinforce(tests)
        self.coef *= self.params.coef_mod
        self.rounds += 1

        stats = {
            "round": self.rounds,
            "examples": len(tests),
            "loss": loss,
            "coef": self.coef,
        }
        self.history.append(stats)
        return stats

    def reinforce(self, tests: List[Test]):
        """Refits the network on the shuffled examples and replaces it."""
        order = self.rng.permutation(len(tests))
        shuffled = [tests[i] for i in order]
        self.net, loss = fit_policy(self.net, shuffled, self.rng, max_iter=self.params.max_gen,
                                    verbose=self.verbose)
        return loss

    def gen_tests_for_prob(self, problem) -> List[Test]:
        """Plays the problem several times and returns the reinforcement examples for it."""
        games = [self.play_problem(problem) for _ in range(self.params.test_per_prob)]
        return self.gen_tests_from_choices(games)

    def gen_tests_from_choices(self, games: List[Tuple[float, List[Choice]]]) -> List[Test]:
        """
        Ranks playouts by score (ascending). The choices of the worst `percent_elite` become
        bad examples, those of the best `percent_elite` good ones, the rest is dropped.
        """
        ranked = sorted(games, key=lambda g: g[0])
        size = len(ranked)
        nb_elite = int(size * self.params.percent_elite)
        tests = []
        for index, (_, choices) in enumerate(ranked):
            if index < nb_elite:
                tests.extend(c.into_bad_test() for c in choices)
            elif index >= size - nb_elite:
                tests.extend(c.into_good_test() for c in choices)
        return tests

    def play_problem(self, problem) -> Tuple[float, List[Choice]]:
        """
        Asks the network to drive a fresh environment on the problem until it is solved.
        Returns the score obtained and the choices made.
        """
        engine = self.new_engine(problem)
        agent = PolicyAgent(self.net)
        choices = []
        for _ in range(engine.max_step()):
            choices.append(self.make_choice(engine, agent))
            if engine.is_solved():
                break
        return engine.evaluate(), choices

    def make_choice(self, engine, agent: PolicyAgent) -> Choice:
        inputs = engine.get_state()
        outputs = agent.infer(inputs)
        choice = self.perturb(outputs)
        engine.make_step(choice)
        return Choice(inputs, outputs, choice)

    def perturb(self, outputs: np.ndarray) -> np.ndarray:
        """Adds uniform noise in [-coef/2, coef/2] and clamps to [0, 1]."""
        noise = (self.rng.random(len(outputs)) - 0.5) * self.coef
        return np.clip(outputs + noise, 0.0, 1.0)
