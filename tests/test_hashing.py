import numpy as np
import pytest
from pygame.math import Vector2, Vector3

from starseed.core.hashing import (
    MASK64,
    finalize,
    float_bits,
    hash_combine,
    hash_coords,
    hash_string,
    mix,
    to_float,
    to_float_range,
    to_int_range,
    to_signed,
)
from starseed.terrain.noise import lattice_hash, lattice_value, value_noise


def _in_int64(value: int) -> bool:
    return -(1 << 63) <= value < (1 << 63)


def test_mix_and_finalize_are_pure_and_signed():
    assert mix(123, 456) == mix(123, 456)
    assert finalize(987654321) == finalize(987654321)
    assert mix(123, 456) != mix(123, 457)
    for state in (0, 1, -1, MASK64, 1 << 63):
        assert _in_int64(mix(state, 99))
        assert _in_int64(finalize(state))


def test_negative_and_unsigned_inputs_share_a_domain():
    assert mix(-1, 5) == mix(MASK64, 5)
    assert finalize(-2) == finalize(MASK64 - 1)


def test_hash_combine_is_order_sensitive():
    assert hash_combine(7, [1, 2, 3]) == hash_combine(7, (1, 2, 3))
    assert hash_combine(7, [1, 2, 3]) != hash_combine(7, [3, 2, 1])
    assert hash_combine(7, [1, 2, 3]) != hash_combine(8, [1, 2, 3])


def test_strings_hash_over_utf8_bytes():
    assert hash_combine(0, ["naïve"]) == hash_combine(0, ["naïve".encode("utf-8")])
    assert hash_string("alpha") == hash_combine(0, ["alpha"])
    assert hash_string("alpha") != hash_string("alphb")
    # the length terminator keeps adjacent strings from running together
    assert hash_combine(0, ["ab", "c"]) != hash_combine(0, ["a", "bc"])


def test_floats_hash_by_bit_pattern():
    assert hash_combine(3, [1.5]) == hash_combine(3, [float_bits(1.5)])
    assert hash_combine(3, [1.0]) != hash_combine(3, [1])
    assert hash_combine(3, [0.0]) != hash_combine(3, [-0.0])


def test_vectors_hash_component_wise():
    assert hash_combine(11, [Vector2(1.5, -2.0)]) == hash_combine(11, [1.5, -2.0])
    assert hash_combine(11, [Vector3(1.0, 2.0, 3.0)]) == hash_combine(11, [(1.0, 2.0, 3.0)])
    assert hash_coords(11, 4, 5) == hash_combine(11, [(4, 5)])


@pytest.mark.parametrize("value", [None, {"a": 1}, object(), {1, 2}])
def test_unsupported_values_raise_type_error(value):
    with pytest.raises(TypeError):
        hash_combine(0, [1, value])


def test_to_float_uses_positive_half():
    assert to_float(0) == 0.0
    assert to_float(-1) < 1.0
    assert to_float(-1) == to_float((1 << 63) - 1)
    for seed in range(500):
        value = to_float(hash_coords(42, seed))
        assert 0.0 <= value < 1.0


def test_hash_floats_fill_deciles_evenly():
    buckets = [0] * 10
    for index in range(10000):
        buckets[int(to_float(hash_combine(2024, (index,))) * 10)] += 1
    for count in buckets:
        assert 850 <= count <= 1150


def test_range_helpers_stay_in_bounds():
    for seed in range(500):
        hashed = hash_coords(9, seed)
        assert -3.0 <= to_float_range(hashed, -3.0, 2.0) < 2.0
        assert 10 <= to_int_range(hashed, 10, 20) <= 20
    assert to_int_range(12345, 5, 5) == 5
    assert to_int_range(12345, 9, 2) == 9


def test_to_signed_wraps():
    assert to_signed(MASK64) == -1
    assert to_signed(1 << 64) == 0
    assert to_signed(5) == 5


def test_lattice_hash_matches_scalar_hash():
    xs, ys = np.meshgrid(np.arange(-6, 7), np.arange(-4, 5))
    for seed in (0, 1, -77, 0x7FFFFFFFFFFFFFFF):
        hashed = lattice_hash(seed, xs.ravel(), ys.ravel())
        for h, ix, iy in zip(hashed, xs.ravel(), ys.ravel()):
            assert to_signed(int(h)) == hash_combine(seed, (int(ix), int(iy)))


def test_lattice_values_are_in_unit_interval():
    xs = np.arange(-500, 500)
    values = lattice_value(1234, xs, xs * 3)
    assert values.min() >= -1.0
    assert values.max() < 1.0


def test_value_noise_hits_lattice_values_on_integer_points():
    xs = np.array([-3.0, 0.0, 2.0, 17.0])
    ys = np.array([5.0, -1.0, 0.0, 4.0])
    expected = lattice_value(55, xs.astype(np.int64), ys.astype(np.int64))
    assert value_noise(55, xs, ys) == pytest.approx(expected)
