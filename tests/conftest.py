# favsync Test Fixtures
# Pytest fixtures for favsync tests

import logging
import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

from favsync.config.schema import SyncConfiguration
from favsync.remote.client import FavClient


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def restore_cwd() -> Generator[None, None, None]:
    """Keep a failing test from leaking a working-directory change."""
    original = os.getcwd()
    yield
    os.chdir(original)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo setup_logging so caplog keeps seeing favsync records."""
    yield
    logger = logging.getLogger("favsync")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def collection_dirs(temp_dir: Path) -> dict[str, Path]:
    """Create two favorite-list directories."""
    dirs = {"100": temp_dir / "a", "200": temp_dir / "b"}
    for path in dirs.values():
        path.mkdir()
    return dirs


@pytest.fixture
def sample_config(collection_dirs: dict[str, Path]) -> dict:
    """Create sample configuration dict."""
    return {
        "interval": 60,
        "credential": {
            "sessdata": "sess",
            "bili_jct": "jct",
            "buvid3": "buvid",
            "dedeuserid": "42",
            "ac_time_value": "ac",
        },
        "smtp": {
            "url": "smtps://smtp.example.com:465",
            "sender_email": "sender@example.com",
            "sender_password": "secret",
            "recipient_email": "me@example.com",
        },
        "favorite_list": {key: str(path) for key, path in collection_dirs.items()},
    }


@pytest.fixture
def sync_config(sample_config: dict) -> SyncConfiguration:
    """Validated configuration."""
    return SyncConfiguration.model_validate(sample_config)


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


@pytest.fixture
def fav_client() -> MagicMock:
    """FavClient mock that records the working directory of every call.

    ``fav_client.calls`` holds (method, args, cwd) tuples in call order.
    """
    client = MagicMock(spec=FavClient)
    client.calls = []

    def recorder(name: str):
        def record(*args, **kwargs):
            client.calls.append((name, args, os.getcwd()))

        return record

    for name in (
        "establish_session",
        "check_session",
        "refresh_metadata",
        "activate_collection",
        "deactivate_collection",
        "pull_content",
    ):
        getattr(client, name).side_effect = recorder(name)

    return client
