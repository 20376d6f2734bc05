import json
import logging

from starseed.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig, init_logger
from starseed.engine.settings import GenerationSettings, load_settings
from starseed.engine.telemetry import TileTelemetry


def test_missing_settings_use_defaults(tmp_path):
    settings = GenerationSettings.from_settings(tmp_path / "missing.json")
    assert settings == GenerationSettings()
    assert settings.tiles_per_tick == 2
    assert settings.default_resolution == 33
    assert settings.tile_ms_budget == 5000.0


def test_bad_json_uses_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(path) == {}
    assert GenerationSettings.from_settings(path) == GenerationSettings()
    assert LoggerConfig.from_settings(path).channels == DEFAULT_CHANNELS


def test_procgen_block_is_read(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "procgen": {
                    "universeSeed": "andromeda",
                    "tilesPerTick": 0,
                    "useWorkerThread": True,
                    "workerCount": 3,
                    "defaultResolution": 17,
                    "tileMsBudget": 12.5,
                }
            }
        )
    )
    settings = GenerationSettings.from_settings(path)
    assert settings.universe_seed == "andromeda"
    assert settings.tiles_per_tick == 1
    assert settings.use_worker_thread
    assert settings.worker_count == 3
    assert settings.default_resolution == 17
    assert settings.tile_ms_budget == 12.5


def test_logger_channels_from_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "warning", "logChannels": {"poi": False, "seeds": True}}))
    config = LoggerConfig.from_settings(path)
    assert config.level == logging.WARNING
    logger = GameLogger(config)
    assert not logger.channel("poi").enabled
    assert logger.channel("seeds").enabled
    assert logger.channel("terrain").enabled


def test_unknown_channels_start_disabled(tmp_path):
    logger = init_logger(tmp_path / "missing.json")
    assert not logger.channel("mystery").enabled
    logger.set_enabled("mystery", True)
    assert logger.channel("mystery").enabled


def test_disabled_channel_emits_nothing(caplog):
    channels = {name: False for name in DEFAULT_CHANNELS}
    logger = GameLogger(LoggerConfig(level=logging.DEBUG, channels=channels))
    with caplog.at_level(logging.DEBUG, logger="starseed"):
        logger.channel("galaxy").info("hidden")
        logger.set_enabled("galaxy", True)
        logger.channel("galaxy").info("shown")
    messages = [record.getMessage() for record in caplog.records]
    assert "shown" in messages
    assert "hidden" not in messages


def test_tile_telemetry_tracks_budget():
    telemetry = TileTelemetry(budget_ms=10.0)
    telemetry.begin_tick(1)
    telemetry.record_tile(4.0)
    telemetry.record_tile(16.0)
    telemetry.record_deferred(3)
    snapshot = telemetry.snapshot()
    assert snapshot.generated == 2
    assert snapshot.deferred == 3
    assert snapshot.max_ms == 16.0
    assert snapshot.average_ms == 10.0
    assert snapshot.over_budget == 1
    telemetry.begin_tick(2)
    assert telemetry.snapshot().generated == 0
    assert telemetry.snapshot().average_ms == 0.0


def test_tile_telemetry_logs_periodically(caplog):
    logger = GameLogger(LoggerConfig(level=logging.INFO, channels={"streaming": True}))
    telemetry = TileTelemetry()
    telemetry.begin_tick(1)
    telemetry.record_tile(2.0)
    with caplog.at_level(logging.INFO, logger="starseed"):
        telemetry.advance_time(1.0, logger.channel("streaming"))
        assert not caplog.records
        telemetry.advance_time(2.0, logger.channel("streaming"))
    assert any("Tiles: generated=1" in record.getMessage() for record in caplog.records)
