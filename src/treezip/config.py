from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .fileutil import DEFAULT_BUFFER_SIZE

logger = logging.getLogger(__name__)

TREEZIP_DIR = os.path.expanduser(os.getenv("TREEZIP_HOME", "~/.treezip"))
CONFIG_PATH = os.path.join(TREEZIP_DIR, "config.json")

ENV_OVERRIDES: dict[str, str] = {
    "compress_level": "TREEZIP_COMPRESS_LEVEL",
    "buffer_size": "TREEZIP_BUFFER_SIZE",
    "safe_extract": "TREEZIP_SAFE_EXTRACT",
}


class ArchiveSettings(BaseModel):
    """Tunables shared by the archiver, the extractor and the CLI."""

    compress_level: int | None = Field(default=None, ge=0, le=9)
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    extension: str = ".zip"
    safe_extract: bool = False

    @field_validator("extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("extension must not be empty")
        if not value.startswith("."):
            value = f".{value}"
        return value


def _default_path() -> Path:
    home = os.getenv("TREEZIP_HOME")
    if home:
        return Path(os.path.expanduser(home)) / "config.json"
    return Path(CONFIG_PATH)


class ConfigStore:
    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path else _default_path()

    def _ensure(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {self.path} must contain a JSON object")
        return raw

    def _write(self, data: dict[str, Any]) -> None:
        self._ensure()
        tmp = self.path.with_suffix(".tmp")
        with tmp.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
        tmp.replace(self.path)

    def load(self, *, use_env: bool = True) -> ArchiveSettings:
        """Return settings from the config file with environment overrides applied."""

        raw = self._read()
        if use_env:
            for key, env_name in ENV_OVERRIDES.items():
                value = os.getenv(env_name)
                if value is not None and value != "":
                    logger.debug("Using %s from %s", key, env_name)
                    raw[key] = value
        try:
            return ArchiveSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid treezip configuration: {exc}") from exc

    def save(self, settings: ArchiveSettings) -> None:
        self._write(settings.model_dump())

    def set_value(self, key: str, value: str) -> ArchiveSettings:
        """Persist a single setting given as a string, as typed on the command line."""

        if key not in ArchiveSettings.model_fields:
            raise ConfigError(f"Unknown setting '{key}'")
        data = self.load(use_env=False).model_dump()
        data[key] = None if value.lower() in {"", "none", "null"} else value
        try:
            settings = ArchiveSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid value for '{key}': {exc}") from exc
        self.save(settings)
        return settings

    def reset(self) -> ArchiveSettings:
        settings = ArchiveSettings()
        self.save(settings)
        return settings


__all__ = [
    "ArchiveSettings",
    "CONFIG_PATH",
    "ConfigStore",
    "ENV_OVERRIDES",
    "TREEZIP_DIR",
]
