import numpy as np
import pytest

from metaga.genetic.params import GenResult, ParamChoice, RollingWindow


def test_same_choice_is_identity_over_many_updates():
    params = ParamChoice.initial()
    before = params.to_vector()
    for _ in range(50):
        params.update(ParamChoice.same())
    after = params.to_vector()
    # global scale is replaced, the rest is untouched
    assert params.global_scale == 0.0
    assert np.array_equal(before[1:], after[1:])


def test_zero_global_ignores_other_fields():
    params = ParamChoice.initial()
    params.update(ParamChoice(0.0, 1.0, 0.0, 1.0, 0.0))
    assert params.mutation_rate == 0.5
    assert params.elite_count == 1.0
    assert params.kill_count == 20.0
    assert params.birth_rate == 4.0


def test_relative_update():
    params = ParamChoice(1.0, 0.5, 1.0, 20.0, 4.0)
    params.update(ParamChoice(2.0, 1.0, 0.5, 0.0, 0.75))
    assert params.global_scale == 2.0
    assert params.mutation_rate == pytest.approx(0.5 + 0.5 * 0.5 * 2.0)
    assert params.elite_count == pytest.approx(1.0)
    assert params.kill_count == pytest.approx(20.0 - 20.0 * 0.5 * 2.0)
    assert params.birth_rate == pytest.approx(4.0 + 4.0 * 0.25 * 2.0)


def test_from_vector_is_positional_and_exact():
    values = [0.1, 0.2, 0.3, 0.4, 0.5]
    params = ParamChoice.from_vector(values)
    assert params.global_scale == 0.1
    assert params.mutation_rate == 0.2
    assert params.elite_count == 0.3
    assert params.kill_count == 0.4
    assert params.birth_rate == 0.5
    assert list(params.to_vector()) == values


def test_from_vector_rejects_short_vectors():
    with pytest.raises(ValueError):
        ParamChoice.from_vector([0.1, 0.2])


def test_rolling_window_matches_shift_and_append():
    window = RollingWindow(5)
    shifted = [0.0] * 5
    for value in range(1, 13):
        window.push(float(value))
        shifted = shifted[1:] + [float(value)]
        assert list(window.values()) == shifted


def test_history_lags_one_generation():
    res = GenResult()
    res.update(10.0, 0.0, 2.0, 5.0, 8.0)
    assert list(res.max_history.values()) == [0.0] * 5
    res.update(20.0, 1.0, 3.0, 6.0, 9.0)
    assert list(res.max_history.values()) == [0.0, 0.0, 0.0, 0.0, 10.0]
    assert list(res.median_history.values()) == [0.0, 0.0, 0.0, 0.0, 5.0]
    assert res.max == 20.0 and res.median == 6.0


def test_uniform_population_normalizes_to_zero():
    res = GenResult()
    res.update(3.0, 3.0, 3.0, 3.0, 3.0)
    vec = res.to_vector()
    assert vec.shape == (15,)
    assert np.all(vec == 0.0)


def test_normalized_vector_in_unit_range():
    res = GenResult()
    res.update(100.0, -50.0, 0.0, 10.0, 60.0)
    res.update(40.0, 10.0, 15.0, 20.0, 30.0)
    vec = res.to_vector()
    assert vec.shape == (15,)
    assert np.all(np.isfinite(vec))
    assert np.all(vec >= 0.0) and np.all(vec <= 1.0)
    # max, median, q1, q3, min
    assert vec[:5] == pytest.approx([1.0, 1.0 / 3.0, 1.0 / 6.0, 2.0 / 3.0, 0.0])
