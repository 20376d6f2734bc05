"""Structure grammars that lay out the buildings of a point of interest.

Layouts are expressed in POI-local coordinates: ``x``/``z`` on the ground
plane around the POI centre, ``y`` up. Rotations are degrees about ``y``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

from pygame.math import Vector2

from starseed.core.hashing import hash_combine
from starseed.core.prng import Prng
from starseed.data.pois import POIType


class StructureKind(Enum):
    PILLAR = "pillar"
    ARCH = "arch"
    ALTAR = "altar"
    STATUE = "statue"
    RUBBLE = "rubble"
    PEDESTAL = "pedestal"
    HULL_SECTION = "hull_section"
    ENGINE = "engine"
    DEBRIS = "debris"
    CRATER = "crater"
    WALL = "wall"
    BUILDING = "building"
    ANTENNA = "antenna"
    CRATE = "crate"
    CRYSTAL = "crystal"
    ROCK = "rock"
    CAVE_ENTRANCE = "cave_entrance"


class LayoutStyle(Enum):
    CIRCULAR = "circular"
    LINEAR = "linear"
    CLUSTERED = "clustered"
    CRASH_SITE = "crash_site"
    COMPOUND = "compound"
    CRYSTAL_FIELD = "crystal_field"
    CAVE_MOUTH = "cave_mouth"


RUINS_STYLES: Tuple[LayoutStyle, ...] = (LayoutStyle.CIRCULAR, LayoutStyle.LINEAR, LayoutStyle.CLUSTERED)
RUINS_STYLE_WEIGHTS: Tuple[float, ...] = (0.4, 0.35, 0.25)

CLUSTER_KINDS: Tuple[StructureKind, ...] = (
    StructureKind.PILLAR,
    StructureKind.RUBBLE,
    StructureKind.STATUE,
    StructureKind.PEDESTAL,
)
CLUSTER_KIND_WEIGHTS: Tuple[float, ...] = (4.0, 3.0, 2.0, 1.0)

RUINS_DAMAGE_CHANCE = 0.35
WRECK_DAMAGE_CHANCE = 0.8
OUTPOST_DAMAGE_CHANCE = 0.5
WEATHERING_CHANCE = 0.6
MAX_WEATHERING_RUBBLE = 3


@dataclass(frozen=True)
class StructureElement:
    kind: StructureKind
    position: Tuple[float, float, float]
    rotation: float
    scale: float
    damaged: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "position": list(self.position),
            "rotation": self.rotation,
            "scale": self.scale,
            "damaged": self.damaged,
        }


@dataclass
class StructureLayout:
    poi_type: POIType
    style: LayoutStyle
    size: float
    entrance_direction: float
    elements: List[StructureElement] = field(default_factory=list)

    def count(self, kind: StructureKind) -> int:
        return sum(1 for element in self.elements if element.kind is kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "poi_type": self.poi_type.value,
            "style": self.style.value,
            "size": self.size,
            "entrance_direction": self.entrance_direction,
            "elements": [element.to_dict() for element in self.elements],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


class _LayoutBuilder:
    """Collects elements for one layout while sharing a single stream."""

    def __init__(self, rng: Prng, size: float, entrance: float) -> None:
        self.rng = rng
        self.size = size
        self.entrance = entrance
        self.elements: List[StructureElement] = []

    def polar(self, angle: float, radius: float) -> Vector2:
        return Vector2(radius, 0.0).rotate(angle)

    def add(
        self,
        kind: StructureKind,
        offset: Vector2,
        rotation: float,
        scale: float,
        damage_chance: float = 0.0,
    ) -> StructureElement:
        damaged = damage_chance > 0.0 and self.rng.next_bool(damage_chance)
        element = StructureElement(
            kind=kind,
            position=(offset.x, 0.0, offset.y),
            rotation=rotation % 360.0,
            scale=scale,
            damaged=damaged,
        )
        self.elements.append(element)
        return element

    def weather(self) -> None:
        """Scatter rubble around the damaged elements placed so far."""

        for element in [element for element in self.elements if element.damaged]:
            if not self.rng.next_bool(WEATHERING_CHANCE):
                continue
            for _ in range(self.rng.next_int_range(1, MAX_WEATHERING_RUBBLE)):
                scatter = self.rng.point_in_circle(element.scale * 1.5)
                origin = Vector2(element.position[0], element.position[2])
                self.add(
                    StructureKind.RUBBLE,
                    origin + scatter,
                    self.rng.next_float_range(0.0, 360.0),
                    self.rng.next_float_range(0.2, 0.6) * element.scale,
                )


def _ruins_centerpiece(poi_type: POIType) -> StructureKind:
    if poi_type is POIType.TEMPLE:
        return StructureKind.ALTAR
    if poi_type is POIType.ANCIENT_MONUMENT:
        return StructureKind.STATUE
    return StructureKind.PEDESTAL


def _circular_ruins(builder: _LayoutBuilder, centerpiece: StructureKind) -> None:
    rng = builder.rng
    ring = builder.size * 0.4
    count = rng.next_int_range(6, 12)
    step = 360.0 / count
    builder.add(StructureKind.ARCH, builder.polar(builder.entrance, ring), builder.entrance + 90.0, 1.4, RUINS_DAMAGE_CHANCE)
    for i in range(1, count):
        angle = builder.entrance + i * step
        builder.add(StructureKind.PILLAR, builder.polar(angle, ring), angle, rng.next_float_range(0.8, 1.2), RUINS_DAMAGE_CHANCE)
    builder.add(centerpiece, Vector2(), builder.entrance + 180.0, 1.0)
    for _ in range(rng.next_int_range(0, 2)):
        angle = rng.next_float_range(0.0, 360.0)
        builder.add(StructureKind.STATUE, builder.polar(angle, ring * 0.5), angle + 180.0, 0.9, RUINS_DAMAGE_CHANCE)


def _linear_ruins(builder: _LayoutBuilder, centerpiece: StructureKind) -> None:
    rng = builder.rng
    pairs = rng.next_int_range(3, 6)
    length = builder.size * 0.8
    spacing = length / pairs
    half_width = builder.size * 0.12
    forward = builder.polar(builder.entrance + 180.0, 1.0)
    side = builder.polar(builder.entrance + 90.0, 1.0)
    start = builder.polar(builder.entrance, length * 0.5)
    builder.add(StructureKind.ARCH, start, builder.entrance + 90.0, 1.4, RUINS_DAMAGE_CHANCE)
    for i in range(pairs):
        along = start + forward * (spacing * (i + 0.5))
        for sign in (-1.0, 1.0):
            builder.add(
                StructureKind.PILLAR,
                along + side * (sign * half_width),
                builder.entrance,
                rng.next_float_range(0.8, 1.2),
                RUINS_DAMAGE_CHANCE,
            )
    end = start + forward * length
    builder.add(centerpiece, end, builder.entrance, 1.0)
    if rng.next_bool(0.5):
        for sign in (-1.0, 1.0):
            builder.add(StructureKind.STATUE, end + side * (sign * half_width), builder.entrance, 0.9, RUINS_DAMAGE_CHANCE)


def _clustered_ruins(builder: _LayoutBuilder, centerpiece: StructureKind) -> None:
    rng = builder.rng
    builder.add(StructureKind.ARCH, builder.polar(builder.entrance, builder.size * 0.45), builder.entrance + 90.0, 1.3, RUINS_DAMAGE_CHANCE)
    builder.add(centerpiece, Vector2(), rng.next_float_range(0.0, 360.0), 1.0)
    for _ in range(rng.next_int_range(2, 4)):
        center = rng.point_in_circle(builder.size * 0.35)
        for _ in range(rng.next_int_range(2, 5)):
            kind = rng.weighted_choice(CLUSTER_KINDS, CLUSTER_KIND_WEIGHTS)
            offset = center + rng.point_in_circle(builder.size * 0.1)
            builder.add(kind, offset, rng.next_float_range(0.0, 360.0), rng.next_float_range(0.6, 1.2), RUINS_DAMAGE_CHANCE)


def _ruins(builder: _LayoutBuilder, poi_type: POIType) -> LayoutStyle:
    style = builder.rng.weighted_choice(RUINS_STYLES, RUINS_STYLE_WEIGHTS)
    centerpiece = _ruins_centerpiece(poi_type)
    if style is LayoutStyle.CIRCULAR:
        _circular_ruins(builder, centerpiece)
    elif style is LayoutStyle.LINEAR:
        _linear_ruins(builder, centerpiece)
    else:
        _clustered_ruins(builder, centerpiece)
    return style


def _crash_site(builder: _LayoutBuilder, poi_type: POIType) -> LayoutStyle:
    rng = builder.rng
    heading = builder.entrance + 180.0
    skid = builder.polar(heading, 1.0)
    length = builder.size * 0.7
    builder.add(StructureKind.CRATER, skid * (length * 0.5), heading, rng.next_float_range(1.5, 2.5))
    sections = rng.next_int_range(1, 3)
    for i in range(sections):
        along = skid * (length * (0.4 - i * 0.3))
        builder.add(StructureKind.HULL_SECTION, along, heading + rng.next_float_range(-30.0, 30.0), rng.next_float_range(1.0, 2.0), WRECK_DAMAGE_CHANCE)
    for _ in range(rng.next_int_range(1, 2)):
        offset = skid * rng.next_float_range(-length * 0.5, 0.0) + rng.point_in_circle(builder.size * 0.1)
        builder.add(StructureKind.ENGINE, offset, rng.next_float_range(0.0, 360.0), 1.0, WRECK_DAMAGE_CHANCE)
    for _ in range(rng.next_int_range(4, 10)):
        offset = skid * rng.next_float_range(-length * 0.5, length * 0.5) + rng.point_in_circle(builder.size * 0.2)
        builder.add(StructureKind.DEBRIS, offset, rng.next_float_range(0.0, 360.0), rng.next_float_range(0.3, 0.8))
    return LayoutStyle.CRASH_SITE


def _compound(builder: _LayoutBuilder, poi_type: POIType) -> LayoutStyle:
    rng = builder.rng
    half = builder.size * 0.4
    for side in range(4):
        angle = builder.entrance + side * 90.0
        normal = builder.polar(angle, half)
        tangent = builder.polar(angle + 90.0, 1.0)
        segments = 4
        for i in range(segments):
            # the gate leaves the two middle segments of the entrance wall open
            if side == 0 and i in (1, 2):
                continue
            along = (i + 0.5) / segments * 2.0 - 1.0
            builder.add(StructureKind.WALL, normal + tangent * (along * half), angle + 90.0, 1.0, OUTPOST_DAMAGE_CHANCE)
    for _ in range(rng.next_int_range(2, 4)):
        offset = rng.point_in_circle(half * 0.6)
        builder.add(StructureKind.BUILDING, offset, builder.entrance + rng.pick((0.0, 90.0, 180.0, 270.0)), rng.next_float_range(1.0, 1.8), OUTPOST_DAMAGE_CHANCE)
    builder.add(StructureKind.ANTENNA, rng.point_in_circle(half * 0.8), 0.0, rng.next_float_range(1.5, 3.0), OUTPOST_DAMAGE_CHANCE)
    for _ in range(rng.next_int_range(2, 6)):
        builder.add(StructureKind.CRATE, rng.point_in_circle(half * 0.8), rng.next_float_range(0.0, 360.0), rng.next_float_range(0.4, 0.7))
    return LayoutStyle.COMPOUND


def _crystal_field(builder: _LayoutBuilder, poi_type: POIType) -> LayoutStyle:
    rng = builder.rng
    for _ in range(rng.next_int_range(5, 14)):
        offset = rng.point_in_circle(builder.size * 0.45)
        # crystals grow larger toward the centre
        falloff = 1.0 - offset.length() / (builder.size * 0.45)
        builder.add(StructureKind.CRYSTAL, offset, rng.next_float_range(0.0, 360.0), 0.5 + 1.5 * falloff * rng.next_float())
    for _ in range(rng.next_int_range(2, 6)):
        builder.add(StructureKind.ROCK, rng.point_in_circle(builder.size * 0.5), rng.next_float_range(0.0, 360.0), rng.next_float_range(0.5, 1.5))
    return LayoutStyle.CRYSTAL_FIELD


def _cave_mouth(builder: _LayoutBuilder, poi_type: POIType) -> LayoutStyle:
    rng = builder.rng
    builder.add(StructureKind.CAVE_ENTRANCE, Vector2(), builder.entrance, builder.size * 0.2)
    rocks = rng.next_int_range(3, 8)
    for i in range(rocks):
        # rocks frame the mouth on the side away from the entrance
        angle = builder.entrance + 90.0 + (i + 0.5) * 180.0 / rocks
        offset = builder.polar(angle, builder.size * rng.next_float_range(0.2, 0.35))
        builder.add(StructureKind.ROCK, offset, rng.next_float_range(0.0, 360.0), rng.next_float_range(0.6, 1.6))
    return LayoutStyle.CAVE_MOUTH


_GRAMMARS: Dict[POIType, Callable[[_LayoutBuilder, POIType], LayoutStyle]] = {
    POIType.ANCIENT_RUINS: _ruins,
    POIType.TEMPLE: _ruins,
    POIType.ANCIENT_MONUMENT: _ruins,
    POIType.CRASHED_SHIP: _crash_site,
    POIType.ABANDONED_OUTPOST: _compound,
    POIType.CRYSTAL_FORMATION: _crystal_field,
    POIType.CAVE_SYSTEM: _cave_mouth,
}


def generate_structure_layout(
    poi_seed: int,
    size: float,
    poi_type: POIType = POIType.ANCIENT_RUINS,
) -> StructureLayout:
    """Lay out the structures of one POI from its seed and footprint size."""

    if size <= 0:
        raise ValueError(f"structure size must be positive, got {size}")
    rng = Prng(hash_combine(poi_seed, ("structure",)))
    builder = _LayoutBuilder(rng, float(size), rng.next_float_range(0.0, 360.0))
    style = _GRAMMARS[poi_type](builder, poi_type)
    builder.weather()
    return StructureLayout(
        poi_type=poi_type,
        style=style,
        size=float(size),
        entrance_direction=builder.entrance,
        elements=builder.elements,
    )


__all__ = [
    "LayoutStyle",
    "RUINS_STYLES",
    "RUINS_STYLE_WEIGHTS",
    "StructureElement",
    "StructureKind",
    "StructureLayout",
    "generate_structure_layout",
]
