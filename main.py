"""Entry point for the Starseed generation demo."""
from __future__ import annotations

import cProfile
import io
import json
import pstats
from typing import Any, Dict, Optional, Tuple

from starseed.core.seeds import initialize_universe
from starseed.data.biomes import BIOMES
from starseed.data.planets import HABITABLE_TYPES
from starseed.engine.logger import GameLogger, init_logger
from starseed.engine.settings import SETTINGS_PATH, GenerationSettings
from starseed.terrain.config import create_terrain_config
from starseed.terrain.streaming import TileStreamer
from starseed.world.galaxy import generate_sector
from starseed.world.planet_detail import generate_planet_detail
from starseed.world.poi import generate_planet_pois
from starseed.world.structures import generate_structure_layout
from starseed.world.system import OrbitalBody, StarSystem, generate_system

HOME_SECTOR = (0, 0, 0)
SYSTEMS_TO_SCAN = 16
STREAM_RADIUS = 2


def find_landing_site(
    galaxy_seed: int,
    sector_stars: int,
    logger: GameLogger,
) -> Tuple[StarSystem, Optional[OrbitalBody]]:
    """First planet in the home sector, preferring habitable ones."""

    fallback: Optional[Tuple[StarSystem, OrbitalBody]] = None
    system = None
    for index in range(min(SYSTEMS_TO_SCAN, sector_stars)):
        system = generate_system(galaxy_seed, HOME_SECTOR, index, logger=logger.channel("systems"))
        for body in system.planets:
            if body.planet_type in HABITABLE_TYPES:
                return system, body
            if fallback is None:
                fallback = (system, body)
    if fallback is not None:
        return fallback
    return system, None


def run_demo(settings: GenerationSettings, logger: GameLogger) -> Dict[str, Any]:
    universe = initialize_universe(settings.universe_seed)
    logger.channel("seeds").info("Universe root seed %d", universe.root_seed)
    sector = generate_sector(universe.galaxy_seed, HOME_SECTOR, logger=logger.channel("galaxy"))
    system, body = find_landing_site(universe.galaxy_seed, len(sector.stars), logger)
    summary: Dict[str, Any] = {
        "universe_seed": universe.root_seed,
        "sector": {"coords": list(sector.coords), "stars": len(sector.stars), "density": sector.density},
        "system": system.to_dict() if system else None,
    }
    if body is None or body.planet_type is None:
        return summary

    detail = generate_planet_detail(body.seed, body.planet_type)
    config = create_terrain_config(body.seed, body.planet_type, detail)
    pois = generate_planet_pois(body.seed, body.planet_type, config, detail, logger=logger.channel("poi"))
    layouts = [generate_structure_layout(poi.seed, poi.size, poi.poi_type) for poi in pois]

    streamer = TileStreamer(config, settings, logger=logger.channel("streaming"))
    try:
        streamer.focus((0, 0), STREAM_RADIUS)
        streamer.generate_all()
        tiles = list(streamer.loaded.values())
        biome_cells: Dict[str, int] = {}
        for tile in tiles:
            for biome, count in tile.biome_histogram().items():
                name = BIOMES[biome].name
                biome_cells[name] = biome_cells.get(name, 0) + count
    finally:
        streamer.close()

    summary.update(
        {
            "planet": body.to_dict(),
            "detail": detail.to_dict(),
            "terrain": config.to_dict(),
            "pois": [poi.to_dict() for poi in pois],
            "structures": [
                {"poi": poi.index, "style": layout.style.value, "elements": len(layout.elements)}
                for poi, layout in zip(pois, layouts)
            ],
            "tiles": {
                "loaded": len(tiles),
                "max_ms": max((tile.generation_time_ms for tile in tiles), default=0.0),
                "over_budget": sum(1 for tile in tiles if tile.generation_time_ms > settings.tile_ms_budget),
                "biomes": biome_cells,
            },
        }
    )
    return summary


def main() -> None:
    settings = GenerationSettings.from_settings(SETTINGS_PATH)
    logger = init_logger(SETTINGS_PATH)

    profiler = cProfile.Profile()
    try:
        profiler.enable()
        summary = run_demo(settings, logger)
    finally:
        profiler.disable()

    print(json.dumps(summary, indent=2))
    stats_stream = io.StringIO()
    stats = pstats.Stats(profiler, stream=stats_stream)
    stats.strip_dirs().sort_stats("cumulative").print_stats(15)
    print("\nProfiler results (top 15 cumulative):")
    print(stats_stream.getvalue())


if __name__ == "__main__":
    main()
