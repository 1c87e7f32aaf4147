import os
import logging
import yaml

from settings_schema import EngineSettings, validate_settings

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


class YamlConfig:
    """Load and save engine settings to a YAML file."""

    ENV_PATH = "SETWISE_SETTINGS"

    def __init__(self, path: str | None = None) -> None:
        self.path = path or os.environ.get(self.ENV_PATH, "settings.yaml")

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        return data

    def save(self, data: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f, sort_keys=True)


def load_engine_settings(path: str | None = None) -> EngineSettings:
    """Return validated settings, falling back to defaults when no file exists."""
    cfg = YamlConfig(path)
    data = cfg.load()
    if not data:
        logger.debug("no settings found at %s, using defaults", cfg.path)
    return validate_settings(data)


def save_engine_settings(settings: EngineSettings, path: str | None = None) -> None:
    YamlConfig(path).save(settings.model_dump())
