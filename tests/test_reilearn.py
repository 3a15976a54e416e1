import numpy as np
import pytest
import torch

from metaga.ai.model import PolicyNetwork
from metaga.genetic.engine import GenerationEngine
from metaga.problems.easy import EasyProblem
from metaga.problems.easystep import EasyStep
from metaga.trainer.reilearn import Choice, LearnParams, MetaTrainer, Test


def _trainer(seed=0, env_factory=GenerationEngine, verbose=False, **overrides):
    params = dict(nb_problems=1, test_per_prob=2, max_gen=1, starting_coef=1.0,
                  coef_mod=0.9, percent_elite=0.05, test_data_size=2, prob_conf=4)
    params.update(overrides)
    torch.manual_seed(seed)
    return MetaTrainer(PolicyNetwork(), EasyProblem, LearnParams(**params), np.random.default_rng(seed),
                       env_factory=env_factory, verbose=verbose)


def _choice(marker):
    return Choice(np.full(15, marker), np.full(5, 0.5), np.full(5, marker))


def test_choice_into_tests():
    choice = Choice(np.zeros(15), np.full(5, 0.4), np.array([0.0, 0.25, 0.5, 0.75, 1.0]))
    good = choice.into_good_test()
    bad = choice.into_bad_test()
    assert isinstance(good, Test) and isinstance(bad, Test)
    assert np.array_equal(good.outputs, choice.choice)
    assert np.allclose(bad.outputs, [1.0, 0.75, 0.5, 0.25, 0.0])
    assert np.array_equal(bad.inputs, choice.inputs)


def test_ranking_labels_only_the_extremes():
    trainer = _trainer(percent_elite=0.05)
    rng = np.random.default_rng(3)
    scores = rng.permutation(50).astype(float)
    games = [(score, [_choice(score / 100.0)]) for score in scores]
    tests = trainer.gen_tests_from_choices(games)
    assert len(tests) == 4

    markers = sorted(round(float(t.inputs[0]) * 100) for t in tests)
    assert markers == [0, 1, 48, 49]
    for t in tests:
        marker = t.inputs[0]
        if marker < 0.1:
            # Bad playouts are inverted
            assert np.allclose(t.outputs, 1.0 - marker)
        else:
            assert np.allclose(t.outputs, marker)


def test_perturb_stays_in_unit_range():
    trainer = _trainer()
    outputs = np.array([0.0, 0.2, 0.5, 0.8, 1.0])
    for _ in range(20):
        perturbed = trainer.perturb(outputs)
        assert np.all(perturbed >= 0.0) and np.all(perturbed <= 1.0)
        assert np.all(np.abs(perturbed - outputs) <= 0.5)
    trainer.coef = 0.0
    assert np.array_equal(trainer.perturb(outputs), outputs)


def test_play_problem_records_every_step():
    trainer = _trainer()
    score, choices = trainer.play_problem(trainer.get_test_problems()[0])
    assert score > 0.0
    assert 1 <= len(choices) <= 20
    for c in choices:
        assert c.inputs.shape == (15,)
        assert c.outputs.shape == (5,)
        assert np.all((c.choice >= 0.0) & (c.choice <= 1.0))


def test_coef_anneals_geometrically():
    trainer = _trainer()
    for _ in range(3):
        trainer.training_round()
    assert trainer.coef == pytest.approx(1.0 * 0.9 ** 3)
    assert [h["round"] for h in trainer.history] == [1, 2, 3]


def test_training_round_replaces_the_network():
    trainer = _trainer(test_per_prob=4, percent_elite=0.25)
    old_net = trainer.get_net()
    stats = trainer.training_round()
    assert stats["examples"] > 0
    assert stats["loss"] is not None
    assert trainer.get_net() is not old_net


def test_held_out_evaluation_is_repeatable_and_pure():
    trainer = _trainer()
    coef = trainer.coef
    first = trainer.evaluate_held_out()
    second = trainer.evaluate_held_out()
    assert first == second
    assert trainer.coef == coef
    assert trainer.history == []


def test_frames_of_the_first_held_out_problem():
    trainer = _trainer()
    # EasyProblem draws nothing
    assert trainer.get_frames() == []


class CountdownEnv:
    """Solved after `solve_after` steps; counts the steps played once already solved."""

    def __init__(self, solve_after=3, steps=10):
        self.solve_after = solve_after
        self.steps = steps
        self.played = 0
        self.played_when_solved = 0

    def get_state(self):
        return np.full(15, self.played / 10.0, dtype=np.float32)

    def make_step(self, choice):
        if self.is_solved():
            self.played_when_solved += 1
        self.played += 1

    def max_step(self):
        return self.steps

    def evaluate(self):
        return float(self.played)

    def is_solved(self):
        return self.played >= self.solve_after

    def print_state(self):
        print(f"played : {self.played}")

    def get_frames(self):
        return []


def _recording_factory(created, **env_kwargs):
    def factory(problem, rng):
        env = CountdownEnv(**env_kwargs)
        created.append(env)
        return env
    return factory


def test_play_problem_stops_once_solved():
    created = []
    trainer = _trainer(env_factory=_recording_factory(created))
    score, choices = trainer.play_problem(trainer.get_test_problems()[0])
    env = created[-1]
    assert len(choices) == 3
    assert score == 3.0
    assert env.is_solved()
    assert env.played_when_solved == 0


def test_play_problem_stops_at_the_step_horizon():
    created = []
    trainer = _trainer(env_factory=_recording_factory(created, solve_after=100, steps=7))
    _, choices = trainer.play_problem(trainer.get_test_problems()[0])
    assert len(choices) == 7
    assert not created[-1].is_solved()


def test_play_problem_on_an_engine_stops_when_solved():
    engines = []

    def factory(problem, rng):
        engines.append(GenerationEngine(problem, rng))
        return engines[-1]

    trainer = _trainer(env_factory=factory)
    _, choices = trainer.play_problem(trainer.get_test_problems()[0])
    engine = engines[-1]
    assert len(choices) == engine.max_step() or engine.is_solved()
    # The last generation is the first one past the solved threshold
    assert engine.individuals_played - len(engine.population) <= 150


def test_greedy_runs_stop_once_solved():
    created = []
    trainer = _trainer(env_factory=_recording_factory(created))
    assert trainer.run_greedy(CountdownEnv()) == 3.0

    created.clear()
    assert trainer.evaluate_held_out() == 6.0
    assert len(created) == 2
    assert all(env.played == 3 and env.played_when_solved == 0 for env in created)


def test_demonstrate_every_held_out_problem(capsys):
    created = []
    trainer = _trainer(env_factory=_recording_factory(created))
    scores = trainer.demonstrate()
    assert scores == [3.0, 3.0]
    assert capsys.readouterr().out.count("demo score") == 2


def test_verbose_trainer_prints_the_fit_loss(capsys):
    trainer = _trainer(verbose=True, test_per_prob=4, percent_elite=0.25)
    trainer.training_round()
    out = capsys.readouterr().out
    assert "Epoch" in out or "Target loss reached" in out


def test_training_round_on_a_step_by_step_walk():
    torch.manual_seed(0)
    params = LearnParams(nb_problems=2, test_per_prob=4, max_gen=1, percent_elite=0.25,
                         test_data_size=2, prob_conf=5)
    trainer = MetaTrainer(PolicyNetwork(input_size=10, output_size=2), EasyStep, params,
                          np.random.default_rng(0), env_factory=EasyStep.start)
    stats = trainer.training_round()
    assert stats["examples"] > 0
    assert stats["loss"] is not None
    assert -10.0 <= trainer.evaluate_held_out() <= 0.0
    # Held-out walks are copied, never walked on
    assert all(p.visited.sum() == 5.0 for p in trainer.get_test_problems())
