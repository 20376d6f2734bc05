"""Background and budgeted terrain tile generation.

``TileWorkerPool`` moves tile generation onto worker threads. Requests go
into a deque and results into a list, each guarded by its own lock; a
semaphore wakes the workers. Cancellation is cooperative: a cancelled
request is dropped from the queue if it is still waiting, and an in-flight
one has its result discarded when the worker tries to publish it. A request
whose generation raises is recorded as a ``TileFailure`` and leaves the
pending set, so the worker keeps serving the queue.

``TileStreamer`` is the front end used by the streaming layer. It either
generates at most ``tiles_per_tick`` tiles synchronously per tick or hands
work to a pool, and keeps the tiles planned around a focus cell loaded.
Tiles are keyed by ``(x, y, lod)`` on their own LOD grid.
"""
from __future__ import annotations

import itertools
import time
from collections import deque
from dataclasses import dataclass
from threading import Lock, Semaphore, Thread
from typing import Deque, Dict, List, Optional, Set

from starseed.engine.logger import ChannelLogger
from starseed.engine.settings import GenerationSettings
from starseed.engine.telemetry import TileTelemetry
from starseed.terrain.config import TerrainConfig
from starseed.terrain.generator import TerrainTile, TileScratch, generate_tile
from starseed.terrain.lod import (
    TileCoords,
    TileKey,
    distance_to_tile,
    lod_level,
    plan_tiles,
    tile_key,
)


def check_request(lod: int, resolution: int) -> None:
    """Reject tile requests that could never be generated."""

    lod_level(lod)
    if resolution < 2:
        raise ValueError(f"resolution must be at least 2, got {resolution}")


@dataclass(frozen=True)
class TileRequest:
    coords: TileCoords
    lod: int
    resolution: int
    ticket: int = 0

    @property
    def key(self) -> TileKey:
        return tile_key(self.coords, self.lod)


@dataclass
class TileResult:
    request: TileRequest
    tile: TerrainTile


@dataclass
class TileFailure:
    request: TileRequest
    error: Exception


class TileWorkerPool:
    """Worker threads that turn tile requests into tiles."""

    def __init__(
        self,
        config: TerrainConfig,
        workers: int = 1,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        if config is None:
            raise ValueError("a TerrainConfig is required")
        self.config = config
        self._logger = logger
        self._requests: Deque[TileRequest] = deque()
        self._pending: Dict[TileKey, TileRequest] = {}
        self._request_lock = Lock()
        self._results: List[TileResult] = []
        self._failures: List[TileFailure] = []
        self._result_lock = Lock()
        self._signal = Semaphore(0)
        self._tickets = itertools.count(1)
        self._running = False
        self._threads: List[Thread] = [
            Thread(target=self._run, args=(TileScratch(),), name=f"tile-worker-{index}", daemon=True)
            for index in range(max(1, workers))
        ]

    @property
    def pending_count(self) -> int:
        with self._request_lock:
            return len(self._pending)

    @property
    def alive_workers(self) -> int:
        return sum(1 for thread in self._threads if thread.is_alive())

    def pending_keys(self) -> List[TileKey]:
        with self._request_lock:
            return list(self._pending)

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        for thread in self._threads:
            thread.start()

    def shutdown(self) -> None:
        if not self._running:
            return
        self._running = False
        for _ in self._threads:
            self._signal.release()
        for thread in self._threads:
            thread.join()

    def request(self, coords: TileCoords, lod: int, resolution: int) -> bool:
        """Queue a tile. Returns False if the tile is already pending."""

        check_request(lod, resolution)
        coords = (int(coords[0]), int(coords[1]))
        key = tile_key(coords, lod)
        with self._request_lock:
            if key in self._pending:
                return False
            request = TileRequest(coords, lod, resolution, next(self._tickets))
            self._pending[key] = request
            self._requests.append(request)
        self._signal.release()
        return True

    def cancel(self, coords: TileCoords, lod: int = 0) -> bool:
        with self._request_lock:
            request = self._pending.pop(tile_key(coords, lod), None)
            if request is None:
                return False
            try:
                self._requests.remove(request)
            except ValueError:
                # Already picked up by a worker; its result is dropped on publish.
                pass
        return True

    def poll(self) -> List[TileResult]:
        with self._result_lock:
            results = self._results
            self._results = []
        return results

    def failures(self) -> List[TileFailure]:
        with self._result_lock:
            failures = self._failures
            self._failures = []
        return failures

    def wait_idle(self, poll_interval: float = 0.005, timeout: Optional[float] = None) -> bool:
        """Spin until nothing is pending. Returns False on timeout."""

        deadline = None if timeout is None else time.perf_counter() + timeout
        while self.pending_count > 0:
            if deadline is not None and time.perf_counter() >= deadline:
                return False
            time.sleep(poll_interval)
        return True

    def _next_request(self) -> Optional[TileRequest]:
        with self._request_lock:
            while self._requests:
                request = self._requests.popleft()
                if self._pending.get(request.key) is request:
                    return request
        return None

    def _run(self, scratch: TileScratch) -> None:
        while True:
            self._signal.acquire()
            if not self._running:
                return
            request = self._next_request()
            if request is None:
                continue
            try:
                tile = generate_tile(
                    self.config,
                    request.coords,
                    request.lod,
                    request.resolution,
                    scratch=scratch,
                )
            except Exception as exc:
                if self._logger:
                    self._logger.error("Tile %s lod=%d failed: %s", request.coords, request.lod, exc)
                with self._request_lock:
                    with self._result_lock:
                        self._failures.append(TileFailure(request, exc))
                    if self._pending.get(request.key) is request:
                        del self._pending[request.key]
                continue
            with self._request_lock:
                if self._pending.get(request.key) is not request:
                    if self._logger:
                        self._logger.debug("Discarded cancelled tile %s", request.coords)
                    continue
                with self._result_lock:
                    self._results.append(TileResult(request, tile))
                del self._pending[request.key]


class TileStreamer:
    """Keeps the tiles around a focus cell loaded."""

    def __init__(
        self,
        config: TerrainConfig,
        settings: Optional[GenerationSettings] = None,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        if config is None:
            raise ValueError("a TerrainConfig is required")
        self.config = config
        self.settings = settings or GenerationSettings()
        self._logger = logger
        self.telemetry = TileTelemetry(budget_ms=self.settings.tile_ms_budget)
        self.loaded: Dict[TileKey, TerrainTile] = {}
        self._requested: Set[TileKey] = set()
        self._queue: Deque[TileRequest] = deque()
        self._queued: Dict[TileKey, TileRequest] = {}
        self._scratch = TileScratch()
        self._tick = 0
        self._pool: Optional[TileWorkerPool] = None
        if self.settings.use_worker_thread:
            self._pool = TileWorkerPool(config, self.settings.worker_count, logger)
            self._pool.start()

    @property
    def threaded(self) -> bool:
        return self._pool is not None

    @property
    def pending_count(self) -> int:
        if self._pool is not None:
            return self._pool.pending_count
        return len(self._queued)

    def pending_keys(self) -> List[TileKey]:
        if self._pool is not None:
            return self._pool.pending_keys()
        return list(self._queued)

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown()

    def request(self, coords: TileCoords, lod: int, resolution: Optional[int] = None) -> bool:
        resolution = resolution or self.settings.default_resolution
        check_request(lod, resolution)
        coords = (int(coords[0]), int(coords[1]))
        key = tile_key(coords, lod)
        if self._pool is not None:
            queued = self._pool.request(coords, lod, resolution)
        elif key in self._queued:
            queued = False
        else:
            request = TileRequest(coords, lod, resolution)
            self._queued[key] = request
            self._queue.append(request)
            queued = True
        if queued:
            self._requested.add(key)
        return queued

    def cancel(self, coords: TileCoords, lod: int = 0) -> bool:
        key = tile_key(coords, lod)
        self._requested.discard(key)
        if self._pool is not None:
            return self._pool.cancel(coords, lod)
        request = self._queued.pop(key, None)
        if request is None:
            return False
        self._queue.remove(request)
        return True

    def focus(self, center: TileCoords, radius: int) -> None:
        """Request the tiles planned around ``center`` and drop the rest."""

        planned = plan_tiles(center, radius)
        wanted = {tile_key(coords, level.lod) for coords, level in planned}
        for key in list(self.loaded):
            if key not in wanted:
                del self.loaded[key]
        for key in list(self._requested):
            if key not in wanted:
                self.cancel(key[:2], key[2])
        for coords, level in planned:
            if tile_key(coords, level.lod) in self.loaded:
                continue
            self.request(coords, level.lod, level.resolution)
        if self._logger:
            self._logger.debug(
                "Focus %s radius=%d loaded=%d pending=%d",
                center,
                radius,
                len(self.loaded),
                self.pending_count,
            )

    def _accept(self, tile: TerrainTile) -> bool:
        if tile.key not in self._requested:
            if self._logger:
                self._logger.debug("Dropped stale tile %s lod=%d", tile.coords, tile.lod)
            return False
        self._requested.discard(tile.key)
        return True

    def tick(self, dt: float = 0.0) -> List[TerrainTile]:
        """Advance one scheduling tick and return the tiles finished in it."""

        self._tick += 1
        self.telemetry.begin_tick(self._tick)
        if self._pool is not None:
            for failure in self._pool.failures():
                self._requested.discard(failure.request.key)
            finished = [result.tile for result in self._pool.poll() if self._accept(result.tile)]
        else:
            finished = []
            for _ in range(min(self.settings.tiles_per_tick, len(self._queue))):
                request = self._queue.popleft()
                del self._queued[request.key]
                self._requested.discard(request.key)
                finished.append(
                    generate_tile(
                        self.config,
                        request.coords,
                        request.lod,
                        request.resolution,
                        scratch=self._scratch,
                    )
                )
            self.telemetry.record_deferred(len(self._queue))
        for tile in finished:
            self.telemetry.record_tile(tile.generation_time_ms)
            self.loaded[tile.key] = tile
        self.telemetry.advance_time(dt, self._logger)
        return finished

    def wait_idle(self, poll_interval: float = 0.005, timeout: Optional[float] = None) -> bool:
        """Wait for the workers to finish every pending tile without loading them."""

        if self._pool is None:
            return True
        return self._pool.wait_idle(poll_interval, timeout)

    def generate_all(self, poll_interval: float = 0.005) -> List[TerrainTile]:
        """Block until every requested tile is generated."""

        finished: List[TerrainTile] = []
        if self._pool is not None:
            self._pool.wait_idle(poll_interval)
            return self.tick()
        while self._queue:
            finished.extend(self.tick())
        return finished

    def nearest_loaded(self, cell: TileCoords) -> Optional[TerrainTile]:
        """Loaded tile closest to a LOD 0 cell, finer tiles first on ties."""

        if not self.loaded:
            return None
        best = min(
            self.loaded.values(),
            key=lambda tile: (
                distance_to_tile(cell, tile.coords, tile.lod),
                tile.lod,
                tile.coords[1],
                tile.coords[0],
            ),
        )
        return best


__all__ = [
    "TileFailure",
    "TileRequest",
    "TileResult",
    "TileStreamer",
    "TileWorkerPool",
    "check_request",
]
