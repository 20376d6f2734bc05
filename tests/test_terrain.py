import dataclasses

import numpy as np
import pytest

from starseed.data.biomes import Biome
from starseed.data.planets import PlanetType
from starseed.terrain.biomes import classify_biome, latitude
from starseed.terrain.config import TerrainConfig, create_terrain_config
from starseed.terrain.generator import (
    HEIGHT_SCALE,
    TileScratch,
    compute_normals,
    generate_tile,
    get_biome_at_world,
    get_height_at_world,
    get_normal_at_world,
    sample_heights,
)
from starseed.terrain.lod import (
    LOD_LEVELS,
    cell_span,
    plan_tiles,
    resolution_for_lod,
    select_lod,
    tile_for_world,
    tile_size_for_lod,
    tiles_in_radius,
)
from starseed.terrain.noise import fbm
from starseed.world.planet_detail import generate_planet_detail

PLANET_SEED = 77777


def _config(planet_type=PlanetType.TEMPERATE, seed=PLANET_SEED) -> TerrainConfig:
    return create_terrain_config(seed, planet_type)


def _fixed_config(**overrides) -> TerrainConfig:
    values = dict(
        seed=1,
        planet_type=PlanetType.TEMPERATE,
        sea_level=0.4,
        mountain_threshold=0.7,
        base_temperature=15.0,
        water_coverage=0.6,
        roughness=1.0,
        continental_scale=1.0,
        height_multiplier=1.0,
        erosion_strength=0.5,
        circumference=40000.0,
        volcanic=False,
    )
    values.update(overrides)
    return TerrainConfig(**values)


def test_config_is_deterministic_and_ordered():
    config = _config()
    assert config == _config()
    assert config != _config(seed=PLANET_SEED + 1)
    for planet_type in PlanetType:
        rolled = _config(planet_type)
        assert rolled.mountain_threshold >= rolled.sea_level + 0.1 - 1e-12
        assert rolled.circumference > 0


def test_config_requires_planet_type():
    with pytest.raises(ValueError):
        create_terrain_config(PLANET_SEED, None)


def test_config_follows_planet_detail():
    detail = generate_planet_detail(PLANET_SEED, PlanetType.TEMPERATE)
    config = create_terrain_config(PLANET_SEED, PlanetType.TEMPERATE, detail)
    assert config.water_coverage == detail.water_coverage
    assert config.base_temperature == detail.mean_temperature
    assert 0.02 <= config.sea_level <= 0.7


def test_tile_generation_is_deterministic():
    config = _config()
    a = generate_tile(config, (3, -2), resolution=17)
    b = generate_tile(config, (3, -2), resolution=17, scratch=TileScratch())
    assert a.same_content(b)
    assert a.heights.shape == (17, 17)
    assert a.normals.shape == (17, 17, 3)


@pytest.mark.parametrize("resolution", [5, 9, 17, 33])
def test_neighbouring_tiles_share_edges(resolution):
    config = _config()
    centre = generate_tile(config, (0, 0), resolution=resolution)
    east = generate_tile(config, (1, 0), resolution=resolution)
    north = generate_tile(config, (0, 1), resolution=resolution)
    np.testing.assert_array_equal(centre.heights[:, -1], east.heights[:, 0])
    np.testing.assert_array_equal(centre.heights[-1, :], north.heights[0, :])
    np.testing.assert_array_equal(centre.biomes[:, -1], east.biomes[:, 0])


def test_seams_hold_for_negative_tiles_and_coarser_lods():
    config = _config(PlanetType.ICE)
    west = generate_tile(config, (-1, -1), lod=2, resolution=9)
    east = generate_tile(config, (0, -1), lod=2, resolution=9)
    np.testing.assert_array_equal(west.heights[:, -1], east.heights[:, 0])
    assert west.world_position(8, 0) == east.world_position(0, 0)


def test_heights_stay_normalised_for_every_planet_type():
    for planet_type in PlanetType:
        for seed in (1, 90210):
            tile = generate_tile(_config(planet_type, seed), (2, 5), resolution=9)
            assert tile.heights.min() >= 0.0
            assert tile.heights.max() <= 1.0


def test_point_queries_are_deterministic():
    config = _config(PlanetType.TEMPERATE, seed=12345)
    point = (12345.67, -9876.54)
    height = get_height_at_world(config, point)
    assert 0.0 <= height <= 1.0
    rebuilt = create_terrain_config(12345, PlanetType.TEMPERATE)
    assert get_height_at_world(rebuilt, point) == pytest.approx(height, abs=1e-4)
    assert get_height_at_world(config, point) == height
    assert get_biome_at_world(config, point) == get_biome_at_world(config, point)


def test_point_queries_match_tile_samples():
    config = _config()
    tile = generate_tile(config, (1, 1), resolution=33)
    for x, y in ((0, 0), (4, 7), (32, 32)):
        world = tile.world_position(x, y)
        assert get_height_at_world(config, world) == pytest.approx(tile.height_at(x, y), abs=1e-12)
        assert get_biome_at_world(config, world) is tile.biome_at(x, y)


def test_normals_are_unit_and_point_up():
    config = _config(PlanetType.VOLCANIC)
    tile = generate_tile(config, (0, 0), resolution=17)
    lengths = np.linalg.norm(tile.normals, axis=-1)
    assert lengths == pytest.approx(np.ones_like(lengths))
    assert (tile.normals[..., 1] > 0.0).all()
    normal = get_normal_at_world(config, (10.0, 20.0))
    assert sum(c * c for c in normal) == pytest.approx(1.0)


def test_flat_heights_give_vertical_normals():
    normals = compute_normals(np.full((4, 4), 0.5), step=2.0)
    assert normals[..., 1] == pytest.approx(np.ones((4, 4)))
    assert HEIGHT_SCALE > 0


def test_generate_tile_validates_inputs():
    with pytest.raises(ValueError):
        generate_tile(None, (0, 0))
    with pytest.raises(ValueError):
        generate_tile(_config(), (0, 0), resolution=1)
    with pytest.raises(ValueError):
        sample_heights(None, np.zeros(1), np.zeros(1))


def test_fbm_is_bounded():
    xs = np.linspace(-5000.0, 5000.0, 400)
    values = fbm(3, xs, xs[::-1], frequency=1.0 / 90.0, octaves=5, persistence=0.5)
    assert values.min() >= -1.0
    assert values.max() <= 1.0


def test_latitude_folds_into_range():
    config = _fixed_config()
    ys = np.array([0.0, 10000.0, -10000.0, 20000.0, 30000.0])
    lat = latitude(config, ys)
    assert lat == pytest.approx([0.0, 90.0, -90.0, 0.0, -90.0])


@pytest.mark.parametrize(
    "height, temp, wetness, expected",
    [
        (0.20, 10.0, 0.5, Biome.DEEP_OCEAN),
        (0.35, 10.0, 0.5, Biome.SHALLOW_OCEAN),
        (0.35, -20.0, 0.5, Biome.FROZEN_OCEAN),
        (0.41, 20.0, 0.5, Biome.BEACH),
        (0.41, -20.0, 0.5, Biome.SNOW),
        (0.75, 10.0, 0.5, Biome.MOUNTAIN),
        (0.85, 10.0, 0.5, Biome.SNOW),
        (0.75, -6.0, 0.5, Biome.SNOW),
        (0.50, -15.0, 0.5, Biome.SNOW),
        (0.50, 0.0, 0.5, Biome.TUNDRA),
        (0.50, 20.0, 0.1, Biome.DESERT),
        (0.50, 20.0, 0.3, Biome.GRASSLAND),
        (0.50, 20.0, 0.5, Biome.FOREST),
        (0.50, 25.0, 0.7, Biome.JUNGLE),
        (0.50, 15.0, 0.7, Biome.FOREST),
        (0.50, 30.0, 0.9, Biome.JUNGLE),
        (0.50, 15.0, 0.9, Biome.SWAMP),
    ],
)
def test_biome_decisions(height, temp, wetness, expected):
    assert classify_biome(height, temp, wetness, _fixed_config()) is expected


def test_volcanic_and_barren_land():
    volcanic = _fixed_config(volcanic=True, planet_type=PlanetType.VOLCANIC)
    assert classify_biome(0.5, 60.0, 0.3, volcanic) is Biome.VOLCANIC
    assert classify_biome(0.5, 60.0, 0.6, volcanic) is Biome.BARREN
    barren = dataclasses.replace(_fixed_config(), planet_type=PlanetType.BARREN)
    assert classify_biome(0.5, 20.0, 0.5, barren) is Biome.BARREN
    assert classify_biome(0.2, 20.0, 0.5, barren) is Biome.DEEP_OCEAN


def test_lod_selection():
    assert select_lod((0, 0), (0, 0)).lod == 0
    assert select_lod((1, -1), (0, 0)).lod == 0
    assert select_lod((2, 0), (0, 0)).resolution == 17
    assert select_lod((5, 5), (0, 0)).lod == 2
    assert select_lod((10, 0), (0, 0)).resolution == 5
    assert [level.resolution for level in LOD_LEVELS] == [33, 17, 9, 5]
    with pytest.raises(ValueError):
        resolution_for_lod(4)
    with pytest.raises(ValueError):
        tile_size_for_lod(-1)


def test_tile_helpers():
    assert tile_size_for_lod(0) == 64.0
    assert tile_size_for_lod(2) == 256.0
    assert tile_for_world(-1.0, 64.0) == (-1, 1)
    ring = tiles_in_radius((3, 3), 1)
    assert len(ring) == 9
    assert ring[0] == (3, 3)
    assert ring[1] == (2, 2)


def test_biome_histogram_counts_every_sample():
    tile = generate_tile(_config(), (0, 0), resolution=9)
    histogram = tile.biome_histogram()
    assert sum(histogram.values()) == 81
    assert all(isinstance(biome, Biome) for biome in histogram)


def test_tile_plan_partitions_the_focus_area():
    center, radius = (3, -2), 7
    planned = plan_tiles(center, radius)
    owners = {}
    for coords, level in planned:
        x0, y0, x1, y1 = cell_span(coords, level.lod)
        for cy in range(y0, y1 + 1):
            for cx in range(x0, x1 + 1):
                assert (cx, cy) not in owners
                owners[(cx, cy)] = level.lod
    for cy in range(center[1] - radius, center[1] + radius + 1):
        for cx in range(center[0] - radius, center[0] + radius + 1):
            # Never coarser than the distance asks for.
            assert owners[(cx, cy)] <= select_lod((cx, cy), center).lod
    assert {level.lod for _, level in planned} == {0, 1, 2, 3}
    assert planned[0] == ((3, -2), LOD_LEVELS[0])


def test_tile_plan_near_focus_is_full_detail():
    planned = plan_tiles((0, 0), 1)
    assert sorted(coords for coords, _ in planned) == sorted(tiles_in_radius((0, 0), 1))
    assert all(level.lod == 0 for _, level in planned)
    assert cell_span((-1, 2), 1) == (-2, 4, -1, 5)
    with pytest.raises(ValueError):
        plan_tiles((0, 0), -1)
