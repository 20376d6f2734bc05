"""Generation settings loaded from settings.json."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

SETTINGS_PATH = Path("settings.json")


@dataclass(frozen=True)
class GenerationSettings:
    """Runtime knobs for the procgen core.

    None of these values influence generated content; they only control how
    and when generation work is scheduled.
    """

    universe_seed: Union[int, str] = 1
    tiles_per_tick: int = 2
    use_worker_thread: bool = False
    worker_count: int = 1
    default_resolution: int = 33
    tile_ms_budget: float = 5000.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationSettings":
        defaults = cls()
        return cls(
            universe_seed=data.get("universeSeed", defaults.universe_seed),
            tiles_per_tick=max(1, int(data.get("tilesPerTick", defaults.tiles_per_tick))),
            use_worker_thread=bool(data.get("useWorkerThread", defaults.use_worker_thread)),
            worker_count=max(1, int(data.get("workerCount", defaults.worker_count))),
            default_resolution=max(2, int(data.get("defaultResolution", defaults.default_resolution))),
            tile_ms_budget=float(data.get("tileMsBudget", defaults.tile_ms_budget)),
        )

    @classmethod
    def from_settings(cls, settings_path: Optional[Path] = None) -> "GenerationSettings":
        settings_path = settings_path or SETTINGS_PATH
        data = load_settings(settings_path)
        procgen = data.get("procgen", {})
        if not isinstance(procgen, dict):
            return cls()
        return cls.from_dict(procgen)


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    settings_path = settings_path or SETTINGS_PATH
    if not settings_path.exists():
        return {}
    try:
        data = json.loads(settings_path.read_text())
    except json.JSONDecodeError:
        return {}
    if not isinstance(data, dict):
        return {}
    return data


__all__ = ["GenerationSettings", "SETTINGS_PATH", "load_settings"]
