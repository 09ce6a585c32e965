"""Shared pytest fixtures."""

import pytest

from ranged_text import config as config_module
from ranged_text.config import ConfigManager
from ranged_text.core.range_model import RangeModel
from ranged_text.core.tree import SoupTreeAdapter


@pytest.fixture
def adapter() -> SoupTreeAdapter:
    return SoupTreeAdapter()


@pytest.fixture
def formatted_model() -> RangeModel:
    return RangeModel(
        text="hello brave new world",
        blocks={
            "bold": [0, 5, 12, 15],
            "emphasis": [6, 15],
            "link": [{"start": 6, "end": 11, "href": "https://example.com", "title": "brave"}],
            "soft return": [11, 21],
        },
    )


@pytest.fixture
def isolated_config(tmp_path, monkeypatch) -> ConfigManager:
    for name in ("RANGED_TEXT_PARSER", "RANGED_TEXT_INDENT", "RANGED_TEXT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    manager = ConfigManager(config_dir=tmp_path / "config")
    monkeypatch.setattr(config_module, "_config_manager", manager)
    return manager
