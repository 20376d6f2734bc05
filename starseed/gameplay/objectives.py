"""Exploration session state layered over the generated POIs."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from pygame.math import Vector2

from starseed.engine.logger import ChannelLogger
from starseed.world.poi import POI, Artifact


class ObjectiveStage(Enum):
    EXPLORE = "explore"
    COLLECT = "collect"
    RETURN_TO_SHIP = "return_to_ship"
    COMPLETE = "complete"


_STAGE_ORDER = list(ObjectiveStage)


@dataclass(frozen=True)
class ObjectiveEvent:
    kind: str
    stage: ObjectiveStage
    message: str
    poi_index: Optional[int] = None


ObjectiveListener = Callable[[ObjectiveEvent], None]


class ObjectiveTracker:
    """Moves through the exploration stages and notifies listeners."""

    STAGE_TEXT = {
        ObjectiveStage.EXPLORE: "Explore the surface",
        ObjectiveStage.COLLECT: "Recover an artifact",
        ObjectiveStage.RETURN_TO_SHIP: "Return to your ship",
        ObjectiveStage.COMPLETE: "Exploration complete",
    }

    def __init__(self) -> None:
        self._stage = ObjectiveStage.EXPLORE
        self._listeners: List[ObjectiveListener] = []

    @property
    def stage(self) -> ObjectiveStage:
        return self._stage

    @property
    def text(self) -> str:
        return self.STAGE_TEXT[self._stage]

    def add_listener(self, listener: ObjectiveListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ObjectiveListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: ObjectiveEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _advance(self, stage: ObjectiveStage) -> None:
        if _STAGE_ORDER.index(stage) <= _STAGE_ORDER.index(self._stage):
            return
        self._stage = stage
        self._emit(ObjectiveEvent("stage", stage, self.STAGE_TEXT[stage]))

    def on_poi_discovered(self, poi: POI) -> None:
        self._emit(ObjectiveEvent("discovered", self._stage, f"Discovered {poi.info.name}", poi.index))
        self._advance(ObjectiveStage.COLLECT)

    def on_artifact_collected(self, poi: POI) -> None:
        self._emit(ObjectiveEvent("collected", self._stage, f"Recovered {poi.artifact.name}", poi.index))
        self._advance(ObjectiveStage.RETURN_TO_SHIP)

    def on_departure(self) -> None:
        if self._stage is ObjectiveStage.RETURN_TO_SHIP:
            self._advance(ObjectiveStage.COMPLETE)


class PlanetExploration:
    """Tracks the player on a planet surface: discovery, collection, departure."""

    SHIP_RADIUS = 15.0

    def __init__(
        self,
        pois: Sequence[POI],
        spawn_point: Sequence[float] = (0.0, 0.0),
        tracker: Optional[ObjectiveTracker] = None,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self._pois = list(pois)
        self._spawn = Vector2(spawn_point[0], spawn_point[1])
        self._player = Vector2(self._spawn)
        self._collected: List[Artifact] = []
        self.tracker = tracker or ObjectiveTracker()
        self._logger = logger

    @property
    def pois(self) -> List[POI]:
        return self._pois

    @property
    def spawn_point(self) -> Vector2:
        return Vector2(self._spawn)

    @property
    def player_position(self) -> Vector2:
        return Vector2(self._player)

    @property
    def collected(self) -> List[str]:
        return [artifact.name for artifact in self._collected]

    def update_player_position(self, position: Sequence[float]) -> List[POI]:
        """Move the player and return the POIs discovered by the move."""

        self._player = Vector2(position[0], position[1])
        found: List[POI] = []
        for poi in self._pois:
            if poi.in_discovery_range(self._player) and poi.discover():
                found.append(poi)
                if self._logger:
                    self._logger.info("Discovered %s #%d", poi.info.name, poi.index)
                self.tracker.on_poi_discovered(poi)
        return found

    def nearest_collectable(self) -> Optional[POI]:
        candidates = [
            poi
            for poi in self._pois
            if poi.discovered and not poi.artifact_collected and poi.in_collect_range(self._player)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda poi: poi.get_world_artifact_position().distance_to(self._player))

    def try_collect(self) -> Optional[Artifact]:
        poi = self.nearest_collectable()
        if poi is None or not poi.collect_artifact():
            return None
        self._collected.append(poi.artifact)
        if self._logger:
            self._logger.info("Collected %s", poi.artifact.name)
        self.tracker.on_artifact_collected(poi)
        return poi.artifact

    def near_ship(self) -> bool:
        return self._player.distance_to(self._spawn) <= self.SHIP_RADIUS

    def can_leave_planet(self) -> bool:
        return bool(self._collected) and self.near_ship()

    def leave_planet(self) -> bool:
        if not self.can_leave_planet():
            return False
        self.tracker.on_departure()
        return True


__all__ = [
    "ObjectiveEvent",
    "ObjectiveStage",
    "ObjectiveTracker",
    "PlanetExploration",
]
