"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

API_KEY_ENV = "GEMINI_API_KEY"
MODEL_ENV = "GEMINI_MODEL"


@dataclass
class Config:
    """Settings from .gcmrc. The API key is deliberately not part of it."""
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    timeout: Optional[float] = None  # None: leave it to the socket defaults
    copy: bool = True

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.model, str) or not self.model.strip():
            warnings.append(f"Invalid model '{self.model}', using '{defaults.model}'")
            self.model = defaults.model

        if not isinstance(self.api_base, str) or not self.api_base.startswith(('http://', 'https://')):
            warnings.append(f"Invalid api_base '{self.api_base}', using '{defaults.api_base}'")
            self.api_base = defaults.api_base

        if self.timeout is not None and (
            isinstance(self.timeout, bool)
            or not isinstance(self.timeout, (int, float))
            or self.timeout <= 0
        ):
            warnings.append(f"Invalid timeout '{self.timeout}', using no explicit timeout")
            self.timeout = defaults.timeout

        if not isinstance(self.copy, bool):
            warnings.append(f"Invalid copy '{self.copy}', using {str(defaults.copy).lower()}")
            self.copy = defaults.copy

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads .gcmrc from the current directory, falling back to the home directory."""

    CONFIG_FILENAME = ".gcmrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


def load_env_file() -> Optional[str]:
    """Preload variables from the nearest .env, never overriding ones already set.

    Returns the path that was loaded, or None when there is no .env file.
    """
    path = find_dotenv(usecwd=True)
    if not path:
        return None
    load_dotenv(path, override=False)
    return path


def resolve_api_key(cli_value: Optional[str] = None, environ=None) -> Optional[str]:
    """Command-line value first, then GEMINI_API_KEY. Blank values count as missing."""
    if cli_value and cli_value.strip():
        return cli_value.strip()
    environ = os.environ if environ is None else environ
    value = environ.get(API_KEY_ENV, "")
    return value.strip() or None


def resolve_model(cli_value: Optional[str], config: Config, environ=None) -> str:
    """Precedence: CLI args > environment variables > config file"""
    environ = os.environ if environ is None else environ
    return cli_value or environ.get(MODEL_ENV) or config.model


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "load_env_file",
    "resolve_api_key",
    "resolve_model",
    "DEFAULT_MODEL",
    "DEFAULT_API_BASE",
    "API_KEY_ENV",
    "MODEL_ENV",
]
