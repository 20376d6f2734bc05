import math

import pytest

from starseed.core.prng import Prng


def test_equal_seeds_give_equal_streams():
    a = Prng(2024)
    b = Prng(2024)
    assert [a.next_int() for _ in range(100)] == [b.next_int() for _ in range(100)]


def test_different_seeds_diverge():
    a = Prng(1)
    b = Prng(2)
    assert [a.next_int() for _ in range(8)] != [b.next_int() for _ in range(8)]


def test_next_float_range():
    rng = Prng(99)
    values = [rng.next_float() for _ in range(10000)]
    assert min(values) >= 0.0
    assert max(values) < 1.0
    assert sum(values) / len(values) == pytest.approx(0.5, abs=0.02)


def test_next_int_range_is_inclusive_and_covers_range():
    rng = Prng(7)
    seen = set()
    for _ in range(2000):
        value = rng.next_int_range(3, 12)
        assert 3 <= value <= 12
        seen.add(value)
    assert seen == set(range(3, 13))


def test_reversed_int_range_returns_low_and_consumes_a_draw():
    a = Prng(5)
    b = Prng(5)
    assert a.next_int_range(10, 3) == 10
    b.next_int()
    assert a.state == b.state


def test_state_round_trip_replays_the_stream():
    rng = Prng(31337)
    rng.next_int()
    saved = rng.state
    first = [rng.next_float() for _ in range(5)]
    rng.set_state(saved)
    assert [rng.next_float() for _ in range(5)] == first


def test_weighted_index_skips_zero_weights():
    rng = Prng(12)
    picks = {rng.weighted_index([0.0, 3.0, 0.0, 1.0]) for _ in range(500)}
    assert picks == {1, 3}


def test_weighted_index_follows_weights():
    rng = Prng(13)
    counts = [0, 0]
    for _ in range(5000):
        counts[rng.weighted_index([1.0, 9.0])] += 1
    assert counts[1] / 5000 == pytest.approx(0.9, abs=0.03)


def test_empty_inputs_raise():
    rng = Prng(1)
    with pytest.raises(ValueError):
        rng.weighted_index([])
    with pytest.raises(ValueError):
        rng.pick([])
    with pytest.raises(ValueError):
        rng.weighted_choice(["a", "b"], [1.0])


def test_pick_n_and_shuffle():
    rng = Prng(77)
    items = list(range(20))
    rng.shuffle(items)
    assert sorted(items) == list(range(20))
    chosen = rng.pick_n("abcdef", 4)
    assert len(chosen) == 4
    assert len(set(chosen)) == 4
    assert sorted(rng.pick_n("ab", 5)) == ["a", "b"]
    assert rng.pick_n("ab", 0) == []


def test_geometric_samples():
    rng = Prng(4242)
    for _ in range(300):
        assert rng.point_in_circle(5.0).length() <= 5.0 + 1e-9
        assert rng.point_in_sphere(2.0).length() <= 2.0 + 1e-9
        assert rng.direction_on_sphere().length() == pytest.approx(1.0)


def test_gaussian_moments():
    rng = Prng(8)
    samples = [rng.gaussian(10.0, 2.0) for _ in range(5000)]
    mean = sum(samples) / len(samples)
    variance = sum((s - mean) ** 2 for s in samples) / len(samples)
    assert mean == pytest.approx(10.0, abs=0.15)
    assert math.sqrt(variance) == pytest.approx(2.0, abs=0.15)
    assert all(math.isfinite(s) for s in samples)


def test_fork_is_deterministic_and_does_not_advance():
    rng = Prng(500)
    before = rng.state
    child_a = rng.fork("terrain")
    child_b = rng.fork("terrain")
    assert rng.state == before
    assert child_a.next_int() == child_b.next_int()
    assert rng.fork("terrain").next_int() != rng.fork("names").next_int()
