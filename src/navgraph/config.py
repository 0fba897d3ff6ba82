"""
Configuration and defaults.

Settings live in a `[navgraph]` table of navgraph.toml:

    [navgraph]
    registry = "ui/windows.yaml"
    providers = ["ui/scenes/arena.yaml", "ui/scenes/hub.yaml"]
    snapshot = ".navgraph/graph.json"
    start_window = "MainMenu"
    strict = false

Relative paths are resolved against the directory holding the file.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.errors import ConfigError

DEFAULT_CONFIG_FILE = "navgraph.toml"
DEFAULT_REGISTRY_FILE = "windows.yaml"
DEFAULT_SNAPSHOT_PATH = ".navgraph/graph.json"

CONFIG_TABLE = "navgraph"


@dataclass
class NavGraphConfig:
    """
    Resolved settings for a build.

    Attributes:
        registry: Registry document describing the declared windows.
        providers: Supplementary transition documents, applied in order.
        snapshot: Where the built graph is written.
        start_window: Start window carried into every build.
        strict: Treat warnings as failures in the CLI.
    """

    registry: Path = field(default_factory=lambda: Path(DEFAULT_REGISTRY_FILE))
    providers: List[Path] = field(default_factory=list)
    snapshot: Path = field(default_factory=lambda: Path(DEFAULT_SNAPSHOT_PATH))
    start_window: Optional[str] = None
    strict: bool = False
    source: Optional[Path] = None

    @classmethod
    def load(cls, path: Path | str = DEFAULT_CONFIG_FILE) -> NavGraphConfig:
        """
        Load configuration from a TOML file.

        A missing file yields defaults resolved against the file's directory.
        """
        path = Path(path)
        base = path.parent

        if not path.exists():
            return cls._from_table({}, base, source=None)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        table = data.get(CONFIG_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"{path}: [{CONFIG_TABLE}] must be a table")
        return cls._from_table(table, base, source=path)

    @classmethod
    def _from_table(cls, table: Dict[str, Any], base: Path, source: Optional[Path]) -> NavGraphConfig:
        providers = table.get("providers", [])
        if isinstance(providers, str):
            providers = [providers]
        if not isinstance(providers, list):
            raise ConfigError("'providers' must be a list of paths")

        start = table.get("start_window")
        if start is not None and not isinstance(start, str):
            raise ConfigError("'start_window' must be a string")

        return cls(
            registry=_resolve(base, table.get("registry", DEFAULT_REGISTRY_FILE)),
            providers=[_resolve(base, p) for p in providers],
            snapshot=_resolve(base, table.get("snapshot", DEFAULT_SNAPSHOT_PATH)),
            start_window=start or None,
            strict=bool(table.get("strict", False)),
            source=source,
        )


def _resolve(base: Path, value: Any) -> Path:
    if not isinstance(value, str):
        raise ConfigError(f"Expected a path string, got {value!r}")
    path = Path(value)
    return path if path.is_absolute() else base / path
