import pytest

from upraze.core.errors import ValidationError
from upraze.features.momentum.smoothing import acceleration, ema, velocity


def test_constant_series_is_flat():
    values = [5.0] * 10
    e = ema(values, alpha=0.3)
    assert e == [5.0] * 10
    assert velocity(e) == [0.0] * 10
    assert acceleration(velocity(e)) == [0.0] * 10


@pytest.mark.parametrize("values", [[1.0], [3.0, -2.0], [0.5, 9.0, 4.0, 4.0]])
def test_ema_seeded_with_first_value(values):
    assert ema(values)[0] == values[0]


def test_ema_recursion():
    assert ema([0.0, 10.0, 10.0], alpha=0.3) == pytest.approx([0.0, 3.0, 5.1])


def test_alpha_one_tracks_input():
    assert ema([1.0, 4.0, 2.0], alpha=1.0) == [1.0, 4.0, 2.0]


@pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5, float("nan")])
def test_invalid_alpha_rejected(alpha):
    with pytest.raises(ValidationError):
        ema([1.0, 2.0], alpha=alpha)


def test_velocity_and_acceleration():
    v = velocity([1.0, 3.0, 6.0])
    assert v == [0.0, 2.0, 3.0]
    assert acceleration(v) == [0.0, 2.0, 1.0]


@pytest.mark.parametrize("values", [[], [2.0], [1.0, 2.0, 4.0, 8.0, 16.0]])
def test_lengths_preserved(values):
    e = ema(values)
    v = velocity(e)
    a = acceleration(v)
    assert len(e) == len(v) == len(a) == len(values)


def test_velocity_uses_only_adjacent_ema():
    e = ema([2.0, 8.0, 3.0, 7.0])
    v = velocity(e)
    for i in range(1, len(e)):
        assert v[i] == e[i] - e[i - 1]


def test_velocity_overflow_rejected():
    with pytest.raises(ValidationError):
        velocity([-1e308, 1e308])


def test_acceleration_overflow_rejected():
    with pytest.raises(ValidationError):
        acceleration([0.0, 1.5e308, -1.5e308])
