"""Configuration management for Tabrelay.

Supports TOML configuration format with auto-discovery and a PORT
environment variable override.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "tabrelay.toml"
PORT_ENV_VAR = "PORT"
DEFAULT_PORT = 9001


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT


@dataclass
class BrowserConfig:
    """Identity of the browser to drive on each platform."""

    name: str = "Firefox"
    process_name: str = "firefox"
    executable: str = "firefox"
    window_class: str = "Firefox"
    app_name: str = "Firefox"
    image_name: str = "firefox.exe"


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    config_path: Path | None = None

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Config:
        """Load configuration from file and environment.

        If config_path is provided, loads from that file.
        Otherwise, searches for tabrelay.toml in current directory and parents.
        A non-empty PORT environment variable overrides server.port.

        Args:
            config_path: Optional explicit path to config file
            environ: Environment mapping (default: os.environ)

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            config = cls._load_from_file(config_path)
        else:
            discovered_path = cls._discover_config()
            config = cls() if discovered_path is None else cls._load_from_file(discovered_path)

        port = _port_from_env(os.environ if environ is None else environ)
        if port is not None:
            config = config.with_overrides(port=port)
        return config

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        return cls(
            server=cls._parse_server(data.get("server")),
            browser=cls._parse_browser(data.get("browser")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", DEFAULT_PORT)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_browser(cls, data: object) -> BrowserConfig:
        """Parse browser configuration section.

        Every key is optional and falls back to the Firefox defaults.
        """
        if data is None:
            return BrowserConfig()

        if not isinstance(data, dict):
            raise ValueError("browser section must be a dictionary")

        defaults = BrowserConfig()
        values: dict[str, str] = {}
        for key in (
            "name",
            "process_name",
            "executable",
            "window_class",
            "app_name",
            "image_name",
        ):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, str) or not value:
                raise ValueError(f"browser.{key} must be a non-empty string")
            values[key] = value

        return BrowserConfig(**values)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.
        """
        server = self.server
        if host is not None:
            server = replace(server, host=host)
        if port is not None:
            server = replace(server, port=port)
        return replace(self, server=server)


def _port_from_env(environ: Mapping[str, str]) -> int | None:
    """Read the listening port from the environment.

    Returns:
        Port number, or None when the variable is unset or empty

    Raises:
        ValueError: If the variable is not an integer
    """
    raw = environ.get(PORT_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{PORT_ENV_VAR} must be an integer, got {raw!r}") from None
