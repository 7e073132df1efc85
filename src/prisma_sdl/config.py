"""Configuration management for prisma-sdl.

Two kinds of configuration live here:

- The project config, a ``prisma-sdl.yml`` file found by walking up from the
  working directory. It names the schema file, the remote endpoint and the
  datasource/generator used when a document does not declare its own.
- The last run record in ``~/.prisma-sdl/last_run.json``, which lets
  ``prisma-sdl regenerate`` repeat the last successful ``format``.

Example ``prisma-sdl.yml``:

    schema: prisma/schema.prisma
    endpoint: http://localhost:3000
    endpoint_path: /schema

    datasource:
      provider: mysql
      url: env("DATABASE_URL")

    generator:
      provider: prisma-client-js
      previewFeatures: [fullTextSearch]
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.console import Console

from prisma_sdl.constants import DEFAULT_SCHEMA_ENDPOINT, DEFAULT_SCHEMA_FILENAME
from prisma_sdl.errors import ConfigError
from prisma_sdl.schemas.config import Datasource, Generator

console = Console(stderr=True)

LAST_RUN_VERSION = "1.0"


class ProjectConfig(BaseModel):
    """Root configuration for a prisma-sdl project (``prisma-sdl.yml``)."""

    schema_path: str = Field(default=DEFAULT_SCHEMA_FILENAME, alias="schema")
    endpoint: str = ""  # Server root, e.g. http://localhost:3000
    endpoint_path: str = DEFAULT_SCHEMA_ENDPOINT

    datasource: Datasource = Field(default_factory=Datasource)
    generator: Generator = Field(default_factory=Generator)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Normalize the endpoint URL."""
        if not v:
            return v
        v = v.rstrip("/")
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v

    @field_validator("endpoint_path")
    @classmethod
    def validate_endpoint_path(cls, v: str) -> str:
        return "/" + v.lstrip("/")

    @property
    def schema_file(self) -> Path:
        """Get the schema path as a Path."""
        return Path(self.schema_path)

    @classmethod
    def from_yaml(cls, content: str) -> ProjectConfig:
        """Parse config from a YAML string.

        Raises:
            ConfigError: If the YAML is malformed or fails validation.
        """
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping of settings")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config: {e}") from e

    @classmethod
    def from_file(cls, path: Path | str) -> ProjectConfig:
        """Load config from a YAML file."""
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        return cls.from_yaml(content)


# Config file discovery
CONFIG_FILENAMES = [
    "prisma-sdl.yml",
    "prisma-sdl.yaml",
    ".prisma-sdl.yml",
    ".prisma-sdl.yaml",
]


def find_config(start_dir: Path | str | None = None) -> Path | None:
    """Find a prisma-sdl.yml config file.

    Searches start_dir (default: the current working directory), then each
    parent directory up to the root.

    Args:
        start_dir: Directory to start search from

    Returns:
        Path to config file, or None if not found
    """
    current = (Path(start_dir) if start_dir else Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | str | None = None) -> ProjectConfig:
    """Load the project configuration.

    With no explicit path, a missing config file is not an error: the
    defaults are returned.

    Args:
        path: Explicit path to config file

    Returns:
        Parsed ProjectConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigError: If the config is invalid
    """
    if path is None:
        found = find_config()
        if found is None:
            return ProjectConfig()
        return ProjectConfig.from_file(found)

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    return ProjectConfig.from_file(path)


def get_config_dir() -> Path:
    """Get the user configuration directory (``~/.prisma-sdl``)."""
    return Path.home() / ".prisma-sdl"


def get_last_run_path() -> Path:
    """Get the path to the last run file (``~/.prisma-sdl/last_run.json``)."""
    return get_config_dir() / "last_run.json"


def load_last_run() -> dict[str, Any] | None:
    """Load the last run record from disk.

    Returns:
        Dictionary containing last run parameters, or None if:
        - File doesn't exist
        - File is corrupted/invalid JSON
        - Record version is incompatible

    Example return value:
        {
            "version": "1.0",
            "input": "/path/to/schema.prisma",
            "output": "/path/to/schema.prisma",
            "strict": false,
            "timestamp": "2026-01-18T12:34:56Z"
        }
    """
    config_path = get_last_run_path()

    if not config_path.exists():
        return None

    try:
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)

        if not isinstance(config, dict):
            console.print(
                "[yellow]Warning: Invalid last run format, ignoring it[/yellow]",
                highlight=False,
            )
            return None

        version = config.get("version", LAST_RUN_VERSION)
        if version != LAST_RUN_VERSION:
            console.print(
                f"[yellow]Warning: Last run version {version} not supported, "
                f"ignoring it[/yellow]",
                highlight=False,
            )
            return None

        return config

    except (json.JSONDecodeError, OSError) as e:
        console.print(
            f"[yellow]Warning: Could not load last run: {e}[/yellow]",
            highlight=False,
        )
        return None


def save_last_run(
    input_path: str | Path,
    output_path: str | Path,
    strict: bool = False,
) -> None:
    """Save the last successful format run to disk.

    Dry runs and ``--check`` runs are not saved.

    Args:
        input_path: Schema file that was read
        output_path: File the canonical text was written to
        strict: Whether the parser ran in strict mode
    """
    config_dir = get_config_dir()

    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        console.print(
            f"[yellow]Warning: Could not create config directory: {e}[/yellow]",
            highlight=False,
        )
        return

    config = {
        "version": LAST_RUN_VERSION,
        "input": str(Path(input_path).resolve()),
        "output": str(Path(output_path).resolve()),
        "strict": strict,
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }

    try:
        with open(get_last_run_path(), "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        console.print(
            f"[yellow]Warning: Could not save last run: {e}[/yellow]",
            highlight=False,
        )


def clear_last_run() -> None:
    """Delete the saved last run record, if any."""
    config_path = get_last_run_path()
    if config_path.exists():
        try:
            config_path.unlink()
        except OSError as e:
            console.print(
                f"[yellow]Warning: Could not clear last run: {e}[/yellow]",
                highlight=False,
            )
