import itertools
import json
import math
from collections import Counter

import pytest

from starseed.core.seeds import galaxy_seed, sector_seed
from starseed.data.stars import SpectralClass
from starseed.world.galaxy import (
    MAX_STARS,
    MIN_SEPARATION,
    MIN_STARS,
    generate_sector,
    generate_star,
    get_star,
    sector_density,
    target_star_count,
)
from starseed.world.names import moon_name, planet_name, roman_numeral

GALAXY = galaxy_seed(1337)


@pytest.fixture(scope="module")
def core_sector():
    return generate_sector(GALAXY, (0, 0, 0))


def test_sector_generation_is_deterministic(core_sector):
    assert generate_sector(GALAXY, (0, 0, 0)).to_dict() == core_sector.to_dict()
    assert generate_sector(GALAXY, (1, 0, 0)).seed != core_sector.seed


def test_density_falls_off_towards_the_rim():
    assert sector_density((0, 0, 0)) == pytest.approx(1.0)
    assert sector_density((40, 0, 0)) == pytest.approx(0.2, abs=1e-3)
    assert target_star_count((0, 0, 0)) == MAX_STARS
    assert target_star_count((60, 60, 60)) == MIN_STARS


def test_star_count_and_placement(core_sector):
    assert MIN_STARS <= len(core_sector.stars) <= MAX_STARS
    assert len(core_sector.stars) == core_sector.target_count
    assert not core_sector.underfilled
    for star in core_sector.stars:
        assert all(0.0 <= c < 1.0 for c in star.position)
    for a, b in itertools.combinations(core_sector.stars, 2):
        assert math.dist(a.position, b.position) >= MIN_SEPARATION


def test_star_attributes_in_range(core_sector):
    for index, star in enumerate(core_sector.stars):
        assert star.index == index
        assert 0 <= star.danger <= 5
        assert 0 <= star.planet_count <= 12
        assert star.name
        assert star.luminosity > 0.0
        assert star.mass > 0.0


def test_spectral_classes_follow_weights(core_sector):
    classes = [star.spectral_class for star in core_sector.stars]
    assert classes.count(SpectralClass.M) > classes.count(SpectralClass.G)
    assert classes.count(SpectralClass.M) > len(classes) // 3


def test_o_class_stars_are_rarer_than_m_class():
    counts = Counter()
    for x in range(4):
        coords = (x, 0, 0)
        seed = sector_seed(GALAXY, *coords)
        for index in range(1000):
            counts[generate_star(seed, coords, index, (0.0, 0.0, 0.0)).spectral_class] += 1
    assert counts[SpectralClass.O] * 20 < counts[SpectralClass.M]
    assert counts[SpectralClass.B] < counts[SpectralClass.K]
    assert counts[SpectralClass.M] / 4000 == pytest.approx(0.62, abs=0.03)


def test_get_star_matches_full_sector(core_sector):
    for index in (0, 17, len(core_sector.stars) - 1):
        assert get_star(GALAXY, (0, 0, 0), index) == core_sector.stars[index]
    with pytest.raises(IndexError):
        get_star(GALAXY, (0, 0, 0), 10_000)


def test_sector_serialises(core_sector):
    data = json.loads(core_sector.to_json())
    assert data["coords"] == [0, 0, 0]
    assert len(data["stars"]) == len(core_sector.stars)
    assert data["stars"][0]["spectral_class"] == core_sector.stars[0].spectral_class.value


def test_name_helpers():
    assert roman_numeral(4) == "IV"
    assert roman_numeral(9) == "IX"
    assert roman_numeral(12) == "XII"
    with pytest.raises(ValueError):
        roman_numeral(0)
    assert planet_name("Sol", 2) == "Sol III"
    assert moon_name("Sol III", 0) == "Sol IIIa"
    assert moon_name("Sol III", 9) == "Sol IIIb2"
