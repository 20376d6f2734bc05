"""Lightweight runtime telemetry for tile generation."""
from __future__ import annotations

from dataclasses import dataclass

from starseed.engine.logger import ChannelLogger


@dataclass
class TileTelemetrySnapshot:
    tick: int
    generated: int
    deferred: int
    total_ms: float
    max_ms: float
    over_budget: int

    @property
    def average_ms(self) -> float:
        if self.generated <= 0:
            return 0.0
        return self.total_ms / self.generated


@dataclass
class TileTelemetry:
    """Aggregates per-tick tile generation statistics."""

    budget_ms: float = 5000.0
    tick: int = -1
    generated: int = 0
    deferred: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0
    over_budget: int = 0
    _log_accumulator: float = 0.0

    def begin_tick(self, tick: int) -> None:
        if tick != self.tick:
            self.tick = tick
            self.generated = 0
            self.deferred = 0
            self.total_ms = 0.0
            self.max_ms = 0.0
            self.over_budget = 0

    def record_tile(self, duration_ms: float) -> None:
        self.generated += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)
        if duration_ms > self.budget_ms:
            self.over_budget += 1

    def record_deferred(self, count: int) -> None:
        self.deferred += count

    def advance_time(self, dt: float, logger: ChannelLogger | None = None) -> None:
        self._log_accumulator += dt
        if self._log_accumulator >= 2.5:
            self._log_accumulator = 0.0
            if logger and logger.enabled:
                logger.info(
                    "Tiles: generated=%d deferred=%d avg=%.2fms max=%.2fms over_budget=%d",
                    self.generated,
                    self.deferred,
                    self.snapshot().average_ms,
                    self.max_ms,
                    self.over_budget,
                )

    def snapshot(self) -> TileTelemetrySnapshot:
        return TileTelemetrySnapshot(
            tick=self.tick,
            generated=self.generated,
            deferred=self.deferred,
            total_ms=self.total_ms,
            max_ms=self.max_ms,
            over_budget=self.over_budget,
        )


__all__ = ["TileTelemetry", "TileTelemetrySnapshot"]
