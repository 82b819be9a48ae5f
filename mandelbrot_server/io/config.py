"""
Configuration management for the Mandelbrot server.

Settings are layered: dataclass defaults, then an optional JSON file, then
MANDELBROT_* environment variables.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..api import RenderConfig
from ..errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "MANDELBROT_"


@dataclass
class ServerConfig:
    """Configuration for the HTTP service."""

    host: str = "127.0.0.1"
    port: int = 3000
    render: RenderConfig = field(default_factory=RenderConfig)

    def validate(self):
        """Validate configuration parameters."""
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be in 1..65535, got {self.port}")
        self.render.validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigManager:
    """Loads and merges configuration sources."""

    # environment variable suffix -> (section, key, type)
    ENV_KEYS = {
        "HOST": (None, "host", str),
        "PORT": (None, "port", int),
        "WORKERS": ("render", "workers", int),
        "TIMEOUT": ("render", "timeout", float),
        "MAX_PIXELS": ("render", "max_pixels", int),
    }

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def load_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a JSON configuration file."""
        path = Path(path)
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"could not load config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"config file {path} must contain a JSON object")

        logger.info(f"Loaded configuration from {path}")
        return data

    def env_overrides(self) -> Dict[str, Any]:
        """Collect overrides from MANDELBROT_* environment variables."""
        overrides: Dict[str, Any] = {}
        for suffix, (section, key, kind) in self.ENV_KEYS.items():
            raw = self.environ.get(ENV_PREFIX + suffix)
            if raw is None:
                continue
            try:
                value = kind(raw)
            except ValueError as e:
                raise ConfigError(f"invalid {ENV_PREFIX}{suffix}={raw!r}") from e

            target = overrides.setdefault(section, {}) if section else overrides
            target[key] = value
        return overrides

    def create_server_config(self, data: Optional[Dict[str, Any]] = None) -> ServerConfig:
        """Build a validated ServerConfig from a config dictionary."""
        data = dict(data or {})
        render_data = dict(data.pop("render", None) or {})

        unknown = set(data) - {"host", "port"}
        unknown |= {f"render.{k}" for k in set(render_data) - {"workers", "timeout", "max_pixels"}}
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")

        config = ServerConfig(render=RenderConfig(**render_data), **data)
        try:
            config.validate()
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return config

    def load(self, path: Optional[Union[str, Path]] = None) -> ServerConfig:
        """Load defaults, then `path` if given, then environment overrides."""
        data = self.load_file(path) if path else {}

        env = self.env_overrides()
        render_data = dict(data.get("render") or {})
        render_data.update(env.pop("render", {}))
        data.update(env)
        data["render"] = render_data

        return self.create_server_config(data)


def load_config(config_file: Optional[Union[str, Path]] = None,
                environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Load server configuration from an optional file and the environment."""
    return ConfigManager(environ).load(config_file)
