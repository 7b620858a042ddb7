"""
Version information for the ContractKit SDK.

The distribution metadata is authoritative. A source checkout that was never
installed reads ``[project].version`` from the neighbouring pyproject.toml.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION = "contractkit-sdk"
DEFAULT_VERSION = "0.1.0"
PYPROJECT = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return None


def _source_version(pyproject: pathlib.Path = PYPROJECT) -> Optional[str]:
    try:
        with pyproject.open("rb") as f:
            project = tomli.load(f).get("project", {})
    except (FileNotFoundError, tomli.TOMLDecodeError):
        return None
    return project.get("version")


__version__ = _installed_version() or _source_version() or DEFAULT_VERSION
