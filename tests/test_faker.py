from unittest.mock import patch

import pytest

from slisko.faker import (
    Blinker,
    Fake,
    Interval,
    RandomBlinker,
    RandomInterval,
    SteppedBlinker,
)


class _Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class _Constant(Fake):
    def __init__(self, value):
        self.value = value

    def trig(self):
        return self.value


@pytest.fixture
def clock():
    c = _Clock()
    with patch("time.monotonic", side_effect=c):
        yield c


def test_fake_is_abstract():
    with pytest.raises(TypeError):
        Fake()


def test_blinker_follows_sign_of_sine(clock):
    b = Blinker(1.0)
    clock.now += 1.0
    assert b.trig() == 1.0
    clock.now += 3.0
    assert b.trig() == 0.0


def test_interval_gates_blinker(clock):
    iv = Interval(1.0, 0.5, _Constant(1.0))
    clock.now += 0.25
    assert iv.trig() == 1.0
    clock.now += 0.5
    assert iv.trig() == 0.0
    clock.now += 0.5
    assert iv.trig() == 1.0


def test_interval_rejects_zero_interval():
    with pytest.raises(ValueError):
        Interval(0.0, 0.5, Blinker(1.0))


def test_random_blinker_draws_within_bounds(clock):
    rb = RandomBlinker(15, 40, 1.0, 10.0)
    assert 15 <= rb.speed < 40
    assert 1.0 <= rb.interval < 10.0


def test_random_blinker_output_is_binary(clock):
    rb = RandomBlinker(15, 40, 1.0, 10.0)
    for _ in range(100):
        clock.now += 0.013
        assert rb.trig() in (0.0, 1.0)


def test_random_blinker_restarts_after_interval(clock):
    rb = RandomBlinker(15, 40, 1.0, 2.0)
    clock.now += 5.0
    assert rb.trig() == 0.0
    assert 15 <= rb.speed < 40
    assert 1.0 <= rb.interval < 2.0


def test_random_interval_is_quiet_then_blinks(clock):
    ri = RandomInterval(1.0, 2.0, 0.5, 0.6, _Constant(1.0))
    assert 1.0 <= ri.interval < 2.0
    assert 0.5 <= ri.blink_length < 0.6
    clock.now += 0.5
    assert ri.trig() == 0.0
    clock.now += 1.55
    assert ri.trig() == 1.0


def test_random_interval_redraws_after_cycle(clock):
    ri = RandomInterval(1.0, 2.0, 0.5, 0.6, _Constant(1.0))
    clock.now += 3.0
    assert ri.trig() == 0.0
    assert 1.0 <= ri.interval < 2.0


def test_random_interval_empty_range_raises():
    with pytest.raises(ValueError):
        RandomInterval(1.0, 1.0, 0.1, 0.2, _Constant(1.0))


def test_stepped_blinker_is_always_off(clock):
    sb = SteppedBlinker([1.0, 2.0, 3.0])
    assert sb.steps == [1.0, 2.0, 3.0]
    for _ in range(10):
        clock.now += 0.37
        assert sb.trig() == 0.0