from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from fdentry.core import config

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and log files at a temp dir and reset global state."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "SETTINGS_FILE", config_dir / "settings.json")
    monkeypatch.setattr(config, "CACHE_DIR", tmp_path / "cache")
    monkeypatch.setattr(config.Config, "_instance", None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)

    logger = logging.getLogger("fdentry")
    handlers = list(logger.handlers)
    level = logger.level
    yield config_dir
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR
