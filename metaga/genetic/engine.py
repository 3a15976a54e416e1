import numpy as np
from typing import List
import metaga.config as config
from metaga.genetic.params import ParamChoice, GenResult

class GenerationEngine:
    """
    Evolves a population on one problem, one generation per advance() call.
    The hyperparameters of every generation are proposed from outside (by a policy network
    or by hand) and merged into the engine's current ParamChoice.
    """
    def __init__(self, problem, rng: np.random.Generator, pop_size=config.POP_START):
        self.problem = problem
        self.rng = rng
        self.population = [problem.random_solution(rng) for _ in range(int(pop_size))]
        self.params = ParamChoice.initial()
        self.last_res = GenResult()
        self.individuals_played = 0

    @classmethod
    def initiate(cls, problem_cls, prob_conf, rng: np.random.Generator, pop_size=config.POP_START):
        """Samples a random problem and builds an engine over it."""
        return cls(problem_cls.random(rng, prob_conf), rng, pop_size=pop_size)

    def advance(self, choice: ParamChoice) -> GenResult:
        """
        Runs one generation. At the start the population is sorted best first.
        - kill the required amount of the worst individuals.
        - mutate the rest, keeping the elite unchanged.
        - form couples between neighbours (1&2, 2&3 etc...) and make children
          from the best couple onwards, wrapping around, until enough are born.
        - evaluate every individual and sort them by score.
        :param choice: The proposed hyperparameters, merged into the current ones.
        :return: The updated statistics (the engine's own GenResult object).
        """
        self.apply_params(choice)
        self.kill_last()
        self.mutate_average()
        self.make_childs()
        self.sort_pop()
        return self.update_res()

    def apply_params(self, choice: ParamChoice):
        """
        Merges the proposal and clamps the result so that:
        - at least 2 individuals survive and no more than MAX_CHILDREN,
        - between 4 and 200 children are born,
        - the next population never exceeds MAX_POPULATION,
        - the elite is smaller than the survivors.
        Out-of-range requests are rescaled, never rejected.
        The birth bounds apply to the survivors actually left after kill_last().
        """
        p = self.params
        p.update(choice)
        pop = len(self.population)

        if p.kill_count > pop - config.MIN_SURVIVORS:
            p.kill_count = float(pop - config.MIN_SURVIVORS)
        if p.kill_count < max(0, pop - config.MAX_CHILDREN):
            p.kill_count = float(max(0, pop - config.MAX_CHILDREN))

        survivors = pop - int(p.kill_count)
        if survivors * p.birth_rate > config.MAX_CHILDREN:
            p.birth_rate = config.MAX_CHILDREN / survivors
        if survivors * p.birth_rate < config.MIN_CHILDREN:
            p.birth_rate = config.MIN_CHILDREN / survivors

        if survivors + round(p.birth_rate * survivors) > config.MAX_POPULATION:
            p.birth_rate = (config.MAX_POPULATION - survivors) / survivors

        if int(p.elite_count) >= survivors:
            p.elite_count = float(survivors - 1)

    def kill_last(self):
        """Drops the worst performers (the tail of the sorted population)."""
        to_keep = len(self.population) - int(self.params.kill_count)
        del self.population[to_keep:]

    def mutate_average(self):
        """Mutates the average performers, the leading elite stays untouched."""
        size = len(self.population)
        elite = int(self.params.elite_count)
        for i in range(max(size - elite, elite), size):
            self.population[i].mutate(self.params.mutation_rate, self.rng)

    def make_childs(self):
        """Makes children from consecutive couples until the birth quota is reached."""
        size = len(self.population)
        nb_childs = int(round(self.params.birth_rate * size))
        childs = []
        cur_index = 0
        while len(childs) < nb_childs:
            if cur_index + 1 == size:
                cur_index = 0
            childs.append(self.population[cur_index].child(self.population[cur_index + 1], self.rng))
            cur_index += 1
        self.population.extend(childs)

    def sort_pop(self):
        """Evaluates the population and sorts it to get the worst individuals at the end."""
        for sol in self.population:
            sol.reset_score()
        self.problem.add_scores_all(self.population)
        self.individuals_played += len(self.population)
        self.population.sort(key=lambda sol: sol.get_score(), reverse=True)

    def update_res(self) -> GenResult:
        pop = self.population
        size = len(pop)
        self.last_res.update(
            pop[0].get_score(),
            pop[-1].get_score(),
            pop[size // 4].get_score(),
            pop[size // 2].get_score(),
            pop[3 * size // 4].get_score(),
        )
        return self.last_res

    def best(self):
        """Returns the best performing individual, whatever the order of the population."""
        if not self.population:
            raise ValueError("Cannot pick the best individual of an empty population")
        return max(self.population, key=lambda sol: sol.get_score())

    # --- Environment view used by the meta-training loop ---

    def get_state(self) -> np.ndarray:
        return self.last_res.to_vector()

    def make_step(self, choice):
        self.advance(ParamChoice.from_vector(choice))

    def max_step(self) -> int:
        return config.MAX_STEPS

    def evaluate(self) -> float:
        """Rewards a high best score reached with few evaluations."""
        if self.individuals_played == 0:
            return 0.0
        return self.last_res.max ** 2 / self.individuals_played

    def is_solved(self) -> bool:
        return self.individuals_played > config.SOLVED_AFTER

    def state_size(self) -> int:
        return config.GEN_RESULT_SIZE

    def choice_size(self) -> int:
        return config.PARAM_CHOICE_SIZE

    # --- Diagnostics ---

    def demonstrate(self):
        self.problem.demonstrate(self.population[0])

    def print_state(self):
        print(f"best : {self.last_res.max}\tmin : {self.last_res.min}\t pop : {len(self.population)}\n")

    def get_frames(self) -> List:
        """Draw instructions for the leading individual followed by the trailing one."""
        frames = []
        frames.extend(self.problem.get_frames(self.population[0]))
        frames.extend(self.problem.get_frames(self.population[-1]))
        return frames
