import logging

import pytest

import starseed.terrain.streaming as streaming
from starseed.data.planets import PlanetType
from starseed.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig
from starseed.engine.settings import GenerationSettings
from starseed.terrain.config import create_terrain_config
from starseed.terrain.generator import generate_tile
from starseed.terrain.lod import BASE_TILE_SIZE
from starseed.terrain.streaming import TileStreamer, TileWorkerPool


def _quiet_logger() -> GameLogger:
    channels = {name: False for name in DEFAULT_CHANNELS}
    return GameLogger(LoggerConfig(level=logging.CRITICAL, channels=channels))


def _config():
    return create_terrain_config(4242, PlanetType.DESERT)


def _covering(tiles, world_x, world_y):
    return [
        tile
        for tile in tiles
        if tile.origin[0] <= world_x < tile.origin[0] + tile.tile_size
        and tile.origin[1] <= world_y < tile.origin[1] + tile.tile_size
    ]


def test_sync_streamer_respects_tick_budget():
    settings = GenerationSettings(tiles_per_tick=2)
    streamer = TileStreamer(_config(), settings, logger=_quiet_logger().channel("streaming"))
    streamer.focus((0, 0), 1)
    assert streamer.pending_count == 9
    finished = streamer.tick(0.016)
    assert len(finished) == 2
    assert finished[0].coords == (0, 0)
    assert streamer.telemetry.generated == 2
    assert streamer.telemetry.deferred == 7
    streamer.generate_all()
    assert streamer.pending_count == 0
    assert len(streamer.loaded) == 9


def test_streamed_tiles_match_direct_generation():
    config = _config()
    streamer = TileStreamer(config, GenerationSettings(tiles_per_tick=4))
    streamer.focus((0, 0), 2)
    streamer.generate_all()
    assert {tile.lod for tile in streamer.loaded.values()} == {0, 1}
    for key, tile in streamer.loaded.items():
        assert key == (tile.coords[0], tile.coords[1], tile.lod)
        direct = generate_tile(config, tile.coords, tile.lod, tile.resolution)
        assert tile.same_content(direct)


def test_focus_covers_area_without_gaps():
    streamer = TileStreamer(_config(), GenerationSettings(tiles_per_tick=64))
    streamer.focus((0, 0), 2)
    streamer.generate_all()
    tiles = list(streamer.loaded.values())
    for cy in range(-2, 3):
        for cx in range(-2, 3):
            centre = ((cx + 0.5) * BASE_TILE_SIZE, (cy + 0.5) * BASE_TILE_SIZE)
            assert len(_covering(tiles, *centre)) == 1, (cx, cy)
    # Row y=0 runs edge to edge across mixed LODs.
    row = sorted(
        (tile for tile in tiles if tile.origin[1] <= 0.0 < tile.origin[1] + tile.tile_size),
        key=lambda tile: tile.origin[0],
    )
    for left, right in zip(row, row[1:]):
        assert left.origin[0] + left.tile_size == right.origin[0]
    assert row[0].origin[0] <= -2 * BASE_TILE_SIZE
    assert row[-1].origin[0] + row[-1].tile_size >= 3 * BASE_TILE_SIZE


def test_duplicate_requests_and_cancel():
    streamer = TileStreamer(_config())
    assert streamer.request((1, 1), 0, 5)
    assert not streamer.request((1, 1), 0, 5)
    assert streamer.request((1, 1), 1, 5)
    assert streamer.cancel((1, 1))
    assert not streamer.cancel((1, 1))
    assert streamer.pending_keys() == [(1, 1, 1)]
    assert streamer.cancel((1, 1), 1)
    assert streamer.pending_count == 0
    assert streamer.tick() == []


def test_requests_are_checked_up_front():
    streamer = TileStreamer(_config())
    with pytest.raises(ValueError):
        streamer.request((0, 0), 0, 1)
    with pytest.raises(ValueError):
        streamer.request((0, 0), -1, 9)
    pool = TileWorkerPool(_config(), workers=1)
    with pytest.raises(ValueError):
        pool.request((0, 0), 0, 1)
    with pytest.raises(ValueError):
        pool.request((0, 0), 9, 9)
    assert pool.pending_count == 0
    assert streamer.pending_count == 0


def test_focus_moves_unload_distant_tiles():
    streamer = TileStreamer(_config(), GenerationSettings(tiles_per_tick=9))
    streamer.focus((0, 0), 1)
    streamer.tick()
    assert len(streamer.loaded) == 9
    streamer.focus((1, 0), 1)
    assert (-1, 0, 0) not in streamer.loaded
    assert (0, 0, 0) in streamer.loaded
    assert set(streamer.pending_keys()) == {(2, -1, 0), (2, 0, 0), (2, 1, 0)}
    streamer.focus((10, 10), 0)
    assert streamer.loaded == {}
    assert streamer.pending_keys() == [(10, 10, 0)]


def test_nearest_loaded():
    streamer = TileStreamer(_config(), GenerationSettings(tiles_per_tick=9))
    assert streamer.nearest_loaded((0, 0)) is None
    streamer.request((3, 0), 2, 5)
    streamer.request((0, 5), 2, 5)
    streamer.tick()
    assert streamer.nearest_loaded((1, 0)).coords == (3, 0)
    assert streamer.nearest_loaded((1, 21)).coords == (0, 5)


def test_threaded_streamer_matches_sync():
    config = _config()
    settings = GenerationSettings(use_worker_thread=True, worker_count=2)
    threaded = TileStreamer(config, settings)
    try:
        assert threaded.threaded
        threaded.focus((0, 0), 1)
        threaded.generate_all()
    finally:
        threaded.close()
    sync = TileStreamer(config, GenerationSettings(tiles_per_tick=9))
    sync.focus((0, 0), 1)
    sync.generate_all()
    assert set(threaded.loaded) == set(sync.loaded)
    for key, tile in sync.loaded.items():
        assert threaded.loaded[key].same_content(tile)


def test_threaded_results_for_abandoned_focus_are_dropped():
    streamer = TileStreamer(_config(), GenerationSettings(use_worker_thread=True))
    try:
        streamer.focus((0, 0), 0)
        assert streamer.wait_idle(timeout=60.0)
        # (0, 0) has finished but not been polled when the focus moves on.
        streamer.focus((5, 5), 0)
        assert streamer.wait_idle(timeout=60.0)
        finished = streamer.tick()
    finally:
        streamer.close()
    assert [tile.coords for tile in finished] == [(5, 5)]
    assert list(streamer.loaded) == [(5, 5, 0)]


def test_worker_pool_cancellation_before_start():
    pool = TileWorkerPool(_config(), workers=1)
    assert pool.request((0, 0), 0, 9)
    assert pool.request((1, 0), 0, 9)
    assert not pool.request((0, 0), 0, 9)
    assert pool.cancel((1, 0))
    assert not pool.cancel((1, 0))
    assert pool.pending_count == 1
    pool.start()
    try:
        assert pool.wait_idle(timeout=60.0)
        results = pool.poll()
    finally:
        pool.shutdown()
    assert [result.request.coords for result in results] == [(0, 0)]
    assert results[0].tile.resolution == 9
    assert pool.poll() == []


def test_worker_survives_generation_error(monkeypatch):
    real_generate = streaming.generate_tile

    def flaky_generate(config, coords, lod, resolution, **kwargs):
        if tuple(coords) == (0, 0):
            raise RuntimeError("noise backend unavailable")
        return real_generate(config, coords, lod, resolution, **kwargs)

    monkeypatch.setattr(streaming, "generate_tile", flaky_generate)
    pool = TileWorkerPool(_config(), workers=1, logger=_quiet_logger().channel("streaming"))
    pool.request((0, 0), 0, 5)
    pool.request((1, 0), 0, 5)
    pool.start()
    try:
        assert pool.wait_idle(timeout=60.0)
        assert pool.alive_workers == 1
        results = pool.poll()
        failures = pool.failures()
    finally:
        pool.shutdown()
    assert [result.request.coords for result in results] == [(1, 0)]
    assert [failure.request.coords for failure in failures] == [(0, 0)]
    assert isinstance(failures[0].error, RuntimeError)
    assert pool.failures() == []


def test_streamer_forgets_failed_tiles(monkeypatch):
    def broken_generate(*args, **kwargs):
        raise RuntimeError("noise backend unavailable")

    monkeypatch.setattr(streaming, "generate_tile", broken_generate)
    streamer = TileStreamer(_config(), GenerationSettings(use_worker_thread=True))
    try:
        streamer.focus((0, 0), 0)
        assert streamer.generate_all() == []
    finally:
        streamer.close()
    assert streamer.loaded == {}
    assert streamer.pending_count == 0


def test_worker_pool_wait_idle_times_out_when_not_started():
    pool = TileWorkerPool(_config(), workers=1)
    pool.request((0, 0), 0, 5)
    assert not pool.wait_idle(timeout=0.02)
    pool.shutdown()
