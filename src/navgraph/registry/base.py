"""
Provider interfaces consumed by the graph builder.

A registry supplies the declared windows and their transitions. A transition
provider supplies extra wiring discovered elsewhere (per-scene setups, level
scripts); it may reference windows but never create them.
"""

from typing import Iterable, Protocol, runtime_checkable

from ..core.types import TransitionDescriptor, WindowDescriptor


@runtime_checkable
class RegistryProvider(Protocol):
    """Source of declared windows and their transitions."""

    def windows(self) -> Iterable[WindowDescriptor]:
        ...

    def transitions(self) -> Iterable[TransitionDescriptor]:
        ...


@runtime_checkable
class TransitionProvider(Protocol):
    """Source of supplementary transitions, applied with override allowed."""

    @property
    def name(self) -> str:
        """Shown in findings and logs."""
        ...

    def transitions(self) -> Iterable[TransitionDescriptor]:
        ...
