"""Shared test fixtures."""

from pathlib import Path

import pytest
from govanity.config import Config, ServerConfig
from govanity.core.registration import PackageRegistration, Submodule


@pytest.fixture
def registration() -> PackageRegistration:
    """Provisioned package with a single overriding submodule."""
    return PackageRegistration(
        path="/pkg",
        url="https://host/a",
        submodules=(Submodule(path="/sub", url="https://host/b"),),
    ).provision()


@pytest.fixture
def test_config(registration: PackageRegistration) -> Config:
    """Configuration serving the shared registration."""
    return Config(server=ServerConfig(), packages=[registration])


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a govanity.toml into tmp_path and return its path."""

    def _write(content: str) -> Path:
        config_file = tmp_path / "govanity.toml"
        config_file.write_text(content)
        return config_file

    return _write
