# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

import json
import os
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field

from kvlog.diagnostics import get_logger
from kvlog.levels import Format

logger = get_logger(__name__)

LOGGER_CONFIG_ENV_VAR = "KVLOG_LOGGER_CONFIG"
LOGGER_CONFIG_JSON_PATH = Path(user_config_dir("kvlog")) / "logger_cfg.json"


class Options(BaseModel):
    """
    Configuration consumed once, when a logger is constructed.

    ``level`` is free text and is parsed with :func:`kvlog.parse_level`, so it
    never fails validation. ``tags`` are merged verbatim into every record.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ""
    environment: str = ""
    region: str = ""
    level: str = ""
    format: Format = Format.JSON
    tags: dict[str, str] = Field(default_factory=dict)

    def static_fields(self) -> list[tuple[str, str]]:
        """Fields baked into every record, after timestamp and caller."""
        fields = []
        if self.name != "":
            fields.append(("logger", self.name))
        if self.environment != "":
            fields.append(("environment", self.environment))
        if self.region != "":
            fields.append(("region", self.region))
        fields.extend(self.tags.items())
        return fields


def load_config() -> tuple[str | None, Options]:
    """Resolve the engine name and options for :func:`kvlog.new_logger`.

    Looks at the ``KVLOG_LOGGER_CONFIG`` environment variable first, then at
    ``logger_cfg.json`` in the user config directory. Both hold a JSON object
    of :class:`Options` fields plus an optional ``"engine"`` key. Falls back
    to default options when neither is present.
    """
    env_json = os.getenv(LOGGER_CONFIG_ENV_VAR, None)
    if env_json is not None:
        config = json.loads(env_json)
        source = LOGGER_CONFIG_ENV_VAR
    elif LOGGER_CONFIG_JSON_PATH.exists():
        with open(LOGGER_CONFIG_JSON_PATH, "r") as f:
            config = json.load(f)
        source = str(LOGGER_CONFIG_JSON_PATH)
    else:
        logger.debug("No logger configuration found, using defaults", path=str(LOGGER_CONFIG_JSON_PATH))
        return None, Options()

    if not isinstance(config, dict):
        raise ValueError(f"Logger configuration in {source} must be a JSON object, got {type(config).__name__}")
    engine = config.pop("engine", None)
    options = Options.model_validate(config)
    logger.debug("Loaded logger configuration", source=source, engine=engine)
    return engine, options
