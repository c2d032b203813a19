"""Configuration management for govanity.

Supports TOML configuration format with auto-discovery. Packages are
validated and provisioned while loading, so a loaded Config only ever holds
registrations that are ready to serve.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from jinja2 import Template

from govanity.core.directives import parse_directives
from govanity.core.registration import PackageRegistration
from govanity.core.resolver import covers
from govanity.core.templates import compile_template
from govanity.errors import ConfigurationError

CONFIG_FILENAME = "govanity.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    packages: list[PackageRegistration] = field(default_factory=list)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for govanity.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with provisioned packages

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ConfigurationError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

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
    def _default(cls) -> Config:
        return cls(server=ServerConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"{path}: {e}") from e

        config_dir = path.parent

        server = cls._parse_server(data.get("server"))
        packages = cls._parse_directives(data.get("directives"), config_dir)
        packages.extend(cls._parse_packages(data.get("packages"), config_dir))

        return cls(
            server=server,
            packages=cls._provision(packages),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ConfigurationError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ConfigurationError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ConfigurationError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_directives(
        cls, data: object, config_dir: Path
    ) -> list[PackageRegistration]:
        """Parse packages declared in a gopkg directive file.

        Args:
            data: Raw directives value (file path relative to config dir)
            config_dir: Directory containing config file

        Returns:
            Unprovisioned registrations
        """
        if data is None:
            return []

        if not isinstance(data, str):
            raise ConfigurationError("directives must be a string")

        directives_path = config_dir / data
        if not directives_path.exists():
            raise ConfigurationError(f"directives file not found: {directives_path}")

        return parse_directives(directives_path.read_text(encoding="utf-8"))

    @classmethod
    def _parse_packages(
        cls, data: object, config_dir: Path
    ) -> list[PackageRegistration]:
        """Parse packages array.

        Args:
            data: Raw packages array
            config_dir: Directory containing config file (for template files)

        Returns:
            Unprovisioned registrations
        """
        if data is None:
            return []

        if not isinstance(data, list):
            raise ConfigurationError("packages must be an array of tables")

        packages: list[PackageRegistration] = []
        for i, item in enumerate(data):
            key = f"packages[{i}]"
            template = None
            if isinstance(item, dict) and "template_file" in item:
                template = cls._load_template(item["template_file"], config_dir, key)
            packages.append(
                PackageRegistration.from_dict(item, key=key, template=template)
            )
        return packages

    @classmethod
    def _load_template(cls, value: object, config_dir: Path, key: str) -> Template:
        if not isinstance(value, str):
            raise ConfigurationError(f"{key}.template_file must be a string")

        template_path = config_dir / value
        if not template_path.exists():
            raise ConfigurationError(
                f"{key}.template_file not found: {template_path}"
            )

        return compile_template(
            template_path.read_text(encoding="utf-8"), name=template_path.name
        )

    @classmethod
    def _provision(
        cls, packages: list[PackageRegistration]
    ) -> list[PackageRegistration]:
        """Provision packages, rejecting duplicate mount paths."""
        provisioned: list[PackageRegistration] = []
        seen: set[str] = set()
        for package in packages:
            if package.path in seen:
                raise ConfigurationError(f"duplicate package path {package.path}")
            seen.add(package.path)
            provisioned.append(package.provision())
        return provisioned

    def find_package(self, request_path: str) -> PackageRegistration | None:
        """Return the registration mounted closest to request_path.

        Mirrors the routing done by the server: the longest mount path
        covering the request wins.
        """
        matches = [
            p for p in self.packages if covers(p.path.rstrip("/"), request_path)
        ]
        if not matches:
            return None
        return max(matches, key=lambda p: len(p.path))

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port

        Returns:
            New Config instance with overrides applied
        """
        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
        )
        return replace(self, server=server)
