# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

import json

import pytest
from pydantic import ValidationError

import kvlog.options as options_module
from kvlog import Format, Level, Options, StdlibSink, StructlogSink, load_config, new_logger


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookup at an empty temporary directory."""
    monkeypatch.delenv(options_module.LOGGER_CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(options_module, "LOGGER_CONFIG_JSON_PATH", tmp_path / "logger_cfg.json")
    return tmp_path / "logger_cfg.json"


class TestOptions:
    def test_defaults(self):
        options = Options()
        assert options.name == ""
        assert options.level == ""
        assert options.format == Format.JSON
        assert options.tags == {}
        assert options.static_fields() == []

    def test_frozen(self):
        options = Options(name="api")
        with pytest.raises(ValidationError):
            options.name = "other"

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            Options(nmae="api")

    def test_any_level_text_accepted(self):
        assert Options(level="LOUD").level == "LOUD"

    def test_format_from_text(self):
        assert Options.model_validate({"format": "console"}).format == Format.CONSOLE

    def test_static_fields_order(self):
        options = Options(region="r", name="n", environment="e", tags={"b": "2", "a": "1"})
        assert options.static_fields() == [
            ("logger", "n"),
            ("environment", "e"),
            ("region", "r"),
            ("b", "2"),
            ("a", "1"),
        ]


class TestLoadConfig:
    def test_defaults_without_config(self):
        assert load_config() == (None, Options())

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(
            options_module.LOGGER_CONFIG_ENV_VAR,
            json.dumps({"engine": "stdlib", "name": "api", "level": "debug", "tags": {"team": "core"}}),
        )
        engine, options = load_config()

        assert engine == "stdlib"
        assert options == Options(name="api", level="debug", tags={"team": "core"})

    def test_from_file(self, isolated_config):
        isolated_config.write_text(json.dumps({"environment": "prod", "format": "console"}))
        engine, options = load_config()

        assert engine is None
        assert options.environment == "prod"
        assert options.format == Format.CONSOLE

    def test_env_wins_over_file(self, isolated_config, monkeypatch):
        isolated_config.write_text(json.dumps({"name": "from-file"}))
        monkeypatch.setenv(options_module.LOGGER_CONFIG_ENV_VAR, json.dumps({"name": "from-env"}))

        assert load_config()[1].name == "from-env"

    def test_malformed_json(self, monkeypatch):
        monkeypatch.setenv(options_module.LOGGER_CONFIG_ENV_VAR, "{not json")
        with pytest.raises(json.JSONDecodeError):
            load_config()

    def test_not_an_object(self, monkeypatch):
        monkeypatch.setenv(options_module.LOGGER_CONFIG_ENV_VAR, "[1, 2]")
        with pytest.raises(ValueError, match="must be a JSON object"):
            load_config()

    def test_invalid_field(self, monkeypatch):
        monkeypatch.setenv(options_module.LOGGER_CONFIG_ENV_VAR, json.dumps({"format": "xml"}))
        with pytest.raises(ValidationError):
            load_config()


class TestNewLoggerFromConfig:
    def test_uses_loaded_config(self, monkeypatch, stream):
        monkeypatch.setenv(
            options_module.LOGGER_CONFIG_ENV_VAR,
            json.dumps({"engine": "stdlib", "name": "api", "level": "warn"}),
        )
        log = new_logger(stream=stream)

        assert isinstance(log.sink, StdlibSink)
        assert log.get_level() == Level.WARN

    def test_defaults_to_structlog(self, stream):
        log = new_logger(stream=stream)

        assert isinstance(log.sink, StructlogSink)
        assert log.get_level() == Level.INFO

    def test_explicit_options_skip_config(self, monkeypatch, stream):
        monkeypatch.setenv(options_module.LOGGER_CONFIG_ENV_VAR, "{not json")
        log = new_logger(Options(level="error"), stream=stream)

        assert log.get_level() == Level.ERROR
