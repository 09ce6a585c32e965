"""Unit tests for configuration loading."""

from __future__ import annotations

import yaml

from ranged_text.config import ConfigManager, RangedTextConfig, load_config


def test_defaults_without_file_or_env(isolated_config):
    config = isolated_config.load_config()

    assert config.parser == "html.parser"
    assert config.json_indent == 2
    assert config.log_level == "WARNING"
    assert config.aliases == {}


def test_file_values_are_loaded(isolated_config):
    isolated_config.config_dir.mkdir(parents=True)
    isolated_config.config_file.write_text(
        yaml.safe_dump(
            {
                "parser": "lxml",
                "json_indent": None,
                "log_level": "debug",
                "aliases": {"mark": "b"},
                "opaque_tags": ["noscript"],
            }
        )
    )

    config = isolated_config.load_config()

    assert config.parser == "lxml"
    assert config.json_indent is None
    assert config.log_level == "DEBUG"
    registry = config.build_registry()
    assert registry.classify("mark").name == "bold"
    assert registry.is_opaque("noscript")


def test_environment_overrides_file(isolated_config, monkeypatch):
    isolated_config.config_dir.mkdir(parents=True)
    isolated_config.config_file.write_text("parser: lxml\njson_indent: 4\n")
    monkeypatch.setenv("RANGED_TEXT_PARSER", "html5lib")
    monkeypatch.setenv("RANGED_TEXT_INDENT", "not-a-number")
    monkeypatch.setenv("RANGED_TEXT_LOG_LEVEL", "info")

    config = isolated_config.load_config()

    assert config.parser == "html5lib"
    assert config.json_indent == 4
    assert config.log_level == "INFO"


def test_broken_or_odd_files_fall_back_to_defaults(isolated_config):
    isolated_config.config_dir.mkdir(parents=True)
    isolated_config.config_file.write_text("- just\n- a list\n")

    assert isolated_config.load_config().parser == "html.parser"

    fresh = ConfigManager(config_dir=isolated_config.config_dir)
    fresh.config_file.write_text("parser: [unclosed\n")
    assert fresh.load_config().parser == "html.parser"


def test_save_and_reload(tmp_path, monkeypatch):
    monkeypatch.delenv("RANGED_TEXT_PARSER", raising=False)
    manager = ConfigManager(config_dir=tmp_path / "cfg")
    manager.save_config(RangedTextConfig(parser="lxml", aliases={"mark": "em"}))

    reloaded = ConfigManager(config_dir=tmp_path / "cfg").load_config()

    assert reloaded.parser == "lxml"
    assert reloaded.aliases == {"mark": "em"}


def test_default_config_file_and_info(isolated_config):
    path = isolated_config.create_default_config()

    info = isolated_config.get_config_info()

    assert path.exists()
    assert info["config_exists"] is True
    assert info["parser"] == "html.parser"


def test_module_level_loader_uses_global_manager(isolated_config):
    assert load_config() is isolated_config.load_config()


def test_default_config_builds_default_registry():
    from ranged_text.core.tag_registry import DEFAULT_REGISTRY

    assert RangedTextConfig().build_registry() is DEFAULT_REGISTRY
