"""
Error taxonomy for navgraph.

Data errors (duplicate ids, conflicting edges, dangling targets) are returned
inside Err and turned into findings by the builder. Only programmer errors and
I/O boundary failures are raised.
"""

from typing import Optional


class NavGraphError(Exception):
    """Base class for every navgraph error."""


class DuplicateIdError(NavGraphError):
    """A window id was registered twice in one build pass."""

    def __init__(self, window_id: str):
        self.window_id = window_id
        super().__init__(f"Duplicate window ID: {window_id!r}")


class ConflictError(NavGraphError):
    """A transition with the same identity already exists and override was not allowed."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"Transition already registered: {description}")


class DanglingTargetError(NavGraphError):
    """A transition points at a window that does not exist."""

    def __init__(self, target_id: str, source: Optional[str] = None):
        self.target_id = target_id
        self.source = source
        where = f" (from {source})" if source else ""
        super().__init__(f"Transition target {target_id!r} not found{where}")


class GraphFinalizedError(NavGraphError, RuntimeError):
    """Structural mutation was attempted on a finalized graph."""


class GraphNotFinalizedError(NavGraphError, RuntimeError):
    """Analysis was attempted on a graph that was never finalized."""


class RegistryLoadError(NavGraphError):
    """A registry or provider file is missing or malformed."""


class SnapshotError(NavGraphError):
    """A persisted snapshot could not be read or written."""


class ConfigError(NavGraphError):
    """navgraph.toml is malformed."""
