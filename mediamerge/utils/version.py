"""Project version helpers."""

from pathlib import Path

import tomlkit

__all__ = ["get_pyproject_version"]

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_pyproject_version(pyproject_path: Path = _PYPROJECT) -> str:
    """Read the project version from a pyproject.toml file.

    Args:
        pyproject_path (Path): Location of the pyproject.toml file.

    Returns:
        str: The declared version, or "unknown" when it cannot be read.
    """
    if not pyproject_path.is_file():
        return "unknown"

    with pyproject_path.open(encoding="utf-8") as f:
        toml_data = tomlkit.load(f)

    project = toml_data.get("project")
    if project is not None and "version" in project:
        return str(project["version"])

    return "unknown"
