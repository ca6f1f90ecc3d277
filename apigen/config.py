"""Discover the apigen configuration.

Searches the working directory and its parents (stopping at the home
directory) for the first of:
  package.json          "apigen" key
  .apigenrc             YAML or JSON
  .apigenrc.json / .apigenrc.yaml / .apigenrc.yml
  apigen.config.json / apigen.config.yaml
  pyproject.toml        [tool.apigen]

Only output.path is read.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

NAMESPACE = "apigen"
DEFAULT_OUTPUT_PATH = "./generated"

SEARCH_PLACES = (
    "package.json",
    f".{NAMESPACE}rc",
    f".{NAMESPACE}rc.json",
    f".{NAMESPACE}rc.yaml",
    f".{NAMESPACE}rc.yml",
    f"{NAMESPACE}.config.json",
    f"{NAMESPACE}.config.yaml",
    "pyproject.toml",
)


@dataclass(frozen=True)
class GeneratorConfig:
    """Resolved generator settings and the file they came from."""

    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    source: Path | None = None


def _load_file(path: Path) -> Any:
    """Parse a candidate file, returning None if it has no apigen section."""
    try:
        text = path.read_text(encoding="utf-8")
        if path.name == "package.json":
            package = json.loads(text)
            return package.get(NAMESPACE) if isinstance(package, dict) else None
        if path.name == "pyproject.toml":
            return tomllib.loads(text).get("tool", {}).get(NAMESPACE)
        if path.suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse configuration file {path}: {exc}") from exc


def _iter_directories(start: Path) -> list[Path]:
    stop = Path.home()
    directories = []
    for directory in (start, *start.parents):
        directories.append(directory)
        if directory == stop:
            break
    return directories


def find_config_file(start: Path | None = None) -> tuple[Path, Any] | None:
    """Return the first configuration file with an apigen section and its content."""
    start = (start or Path.cwd()).resolve()
    for directory in _iter_directories(start):
        for name in SEARCH_PLACES:
            candidate = directory / name
            if not candidate.is_file():
                continue
            content = _load_file(candidate)
            if content is not None:
                return candidate, content
    return None


def parse_config(content: Any, source: Path | None = None) -> GeneratorConfig:
    """Validate raw configuration content."""
    if content is None:
        content = {}
    if not isinstance(content, Mapping):
        raise ConfigurationError(f"Configuration in {source} must be a mapping.")

    output = content.get("output") or {}
    if not isinstance(output, Mapping):
        raise ConfigurationError(f"'output' in {source} must be a mapping.")

    output_path = output.get("path", DEFAULT_OUTPUT_PATH)
    if not isinstance(output_path, str) or not output_path:
        raise ConfigurationError(f"'output.path' in {source} must be a non-empty string.")

    return GeneratorConfig(output_path=Path(output_path), source=source)


def load_config(start: Path | None = None) -> GeneratorConfig:
    """Search for the configuration, falling back to defaults."""
    found = find_config_file(start)
    if found is None:
        logger.debug("No %s configuration found, using defaults", NAMESPACE)
        return GeneratorConfig()
    path, content = found
    logger.debug("Using configuration from %s", path)
    return parse_config(content, source=path)
