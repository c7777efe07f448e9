"""Tests for version utility helpers."""

import tomllib
from pathlib import Path

from mediamerge.utils.version import get_pyproject_version


def test_get_pyproject_version_matches_project_file() -> None:
    """The default path points at the project's own pyproject.toml."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    with pyproject.open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]

    assert get_pyproject_version() == expected


def test_get_pyproject_version_reads_custom_file(tmp_path: Path) -> None:
    """A version is read from any pyproject.toml path."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "x"\nversion = "2.3.4"\n', encoding="utf-8")

    assert get_pyproject_version(pyproject) == "2.3.4"


def test_get_pyproject_version_unknown_when_missing(tmp_path: Path) -> None:
    """Missing files or missing versions yield "unknown"."""
    assert get_pyproject_version(tmp_path / "absent.toml") == "unknown"

    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text("[tool.other]\nkey = 1\n", encoding="utf-8")
    assert get_pyproject_version(pyproject) == "unknown"
