"""Shared pytest configuration and fixtures for the test suite."""

import atexit
import os
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="mm-tests-"))
os.environ["MM_DATA_PATH"] = str(_TEST_DATA_DIR)
_TEST_CONFIG_FILE = _TEST_DATA_DIR / "config.yaml"

_TEST_CONFIG_FILE.write_text(
    yaml.safe_dump(
        {
            "log_level": "DEBUG",
            "max_workers": 4,
            "movie": {
                "search": "tmdb",
                "fields": {"title": "tmdb", "plot": "imdb"},
                "fallback_scrapers": ["tmdb", "imdb"],
            },
        },
        sort_keys=False,
    ),
    encoding="utf-8",
)

from mediamerge.config import settings as settings_module  # noqa: E402

settings_module.get_config.cache_clear()


@pytest.fixture
def test_data_dir() -> Path:
    """The temporary data directory the test session runs against."""
    return _TEST_DATA_DIR


@atexit.register
def _cleanup_test_data_dir() -> None:
    """Remove the temporary test data directory after the test session."""
    shutil.rmtree(_TEST_DATA_DIR, ignore_errors=True)
