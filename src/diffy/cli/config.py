#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/cli/config.py
"""Configuration discovery and loading for the diffy CLI.

A configuration file is a flat mapping of :class:`~diffy.options.DiffOptions`
fields plus the CLI keys ``format`` and ``color``::

    # .diffy.toml
    context_lines = 5
    format = "side-by-side"

Files are looked up in the directory tree above the working directory and
then in the home directory. Within one directory the names in
``CONFIG_FILENAMES`` are tried in order, then a ``pyproject.toml`` carrying a
``[tool.diffy]`` table. Every loading problem is reported as
:class:`argparse.ArgumentTypeError`, which the CLI turns into a usage error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from diffy.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

PYPROJECT_FILENAME = "pyproject.toml"

ConfigDict = Dict[str, Any]


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, tuple[str, Callable[[Path], Any]]] = {
    ".toml": ("TOML", _read_toml),
    ".yaml": ("YAML", _read_yaml),
    ".yml": ("YAML", _read_yaml),
    ".json": ("JSON", _read_json),
}

_DECODE_ERRORS = (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError)


def _read_mapping(path: Path, kind: str, reader: Callable[[Path], Any]) -> ConfigDict:
    """Read ``path`` and check that the document is a mapping.

    An empty document (YAML ``null``) counts as an empty mapping.
    """
    try:
        data = reader(path)
    except _DECODE_ERRORS as e:
        raise argparse.ArgumentTypeError(f"Invalid {kind} in config file {path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {path} must contain a {kind} mapping at the top level, got {type(data).__name__}"
        )
    return data


def _pyproject_section(path: Path) -> ConfigDict:
    """Return the ``[tool.diffy]`` table of a pyproject.toml (empty if absent)."""
    data = _read_mapping(path, "TOML", _read_toml)
    tool = data.get("tool")
    section = tool.get(PYPROJECT_TOOL_SECTION) if isinstance(tool, dict) else None

    if section is None:
        return {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {path} must be a table, got {type(section).__name__}"
        )
    return section


def _has_pyproject_section(path: Path) -> bool:
    if not path.is_file():
        return False
    try:
        return bool(_pyproject_section(path))
    except argparse.ArgumentTypeError:
        # a broken pyproject.toml belonging to something else
        return False


def _config_files_in(directory: Path) -> Iterator[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            yield candidate


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search ``start_dir`` and each of its parents for a configuration file.

    Parameters
    ----------
    start_dir : Path, optional
        First directory searched; defaults to the working directory

    Returns
    -------
    Path or None
        The nearest configuration file, or None

    """
    start = (start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        found = next(_config_files_in(directory), None)
        if found is not None:
            return found

        pyproject = directory / PYPROJECT_FILENAME
        if _has_pyproject_section(pyproject):
            return pyproject

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file that applies to ``start_dir``.

    The directory tree is searched first; the home directory is the
    fallback (only the dedicated file names, not ``pyproject.toml``).
    """
    found = find_config_in_parents(start_dir)
    if found is None:
        found = next(_config_files_in(Path.home()), None)
    return found


def load_config_file(config_path: Path | str) -> ConfigDict:
    """Load one configuration file, choosing the format from its name.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``, ``.yml`` or ``.json`` file, or a
        ``pyproject.toml`` (only its ``[tool.diffy]`` table is returned)

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, has an unknown extension, cannot be parsed
        or is not a mapping

    Examples
    --------
    >>> load_config_file(".diffy.toml")
    {'context_lines': 5, 'format': 'side-by-side'}

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _pyproject_section(config_path)

    suffix = config_path.suffix.lower()
    if suffix not in _READERS:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file format: {suffix or config_path.name}. Use .toml, .yaml, .yml or .json"
        )

    kind, reader = _READERS[suffix]
    return _read_mapping(config_path, kind, reader)


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> ConfigDict:
    """Load the configuration the CLI should use.

    The first source present wins: the ``--config`` path, then the
    ``DIFFY_CONFIG`` path, then a discovered file. No source at all yields
    an empty mapping.

    Raises
    ------
    argparse.ArgumentTypeError
        If the chosen file cannot be loaded

    """
    for path in (explicit_path, env_var_path):
        if path:
            return load_config_file(path)

    discovered = discover_config_file(start_dir)
    return load_config_file(discovered) if discovered is not None else {}
