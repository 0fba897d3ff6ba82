"""
Core type definitions for navgraph.

Descriptors are what a registry hands to the builder; nodes and edges are
what the graph stores. All of them are pydantic models so they can be dumped
straight into a snapshot.
"""

from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WindowKind(StrEnum):
    """How a window stacks relative to the ones below it."""
    NORMAL = "normal"
    MODAL = "modal"
    OVERLAY = "overlay"


class WindowLayer(StrEnum):
    """Coarse z-ordering group. Compare with `rank`, not the string value."""
    BACKGROUND = "background"
    HUD = "hud"
    WINDOWS = "windows"
    MODALS = "modals"
    TOOLTIPS = "tooltips"
    NOTIFICATIONS = "notifications"
    SYSTEM = "system"

    @property
    def rank(self) -> int:
        return _LAYER_RANKS[self]


_LAYER_RANKS: Dict[WindowLayer, int] = {
    WindowLayer.BACKGROUND: 0,
    WindowLayer.HUD: 100,
    WindowLayer.WINDOWS: 200,
    WindowLayer.MODALS: 300,
    WindowLayer.TOOLTIPS: 400,
    WindowLayer.NOTIFICATIONS: 500,
    WindowLayer.SYSTEM: 1000,
}


class TransitionAnimation(StrEnum):
    """Transition style tag. Passed through to the controller untouched."""
    NONE = "none"
    FADE = "fade"
    SLIDE_LEFT = "slide_left"
    SLIDE_RIGHT = "slide_right"
    SLIDE_UP = "slide_up"
    SLIDE_DOWN = "slide_down"
    SCALE = "scale"
    CUSTOM = "custom"


class CursorMode(StrEnum):
    """Cursor state the controller applies while the window is on top."""
    VISIBLE = "visible"
    HIDDEN = "hidden"
    LOCKED = "locked"
    CONFINED = "confined"


# (from_id, to_id, trigger); from_id is None for global edges
EdgeIdentity = Tuple[Optional[str], str, str]


class WindowDescriptor(BaseModel):
    """
    Immutable facts about one window, as supplied by a registry.
    """
    id: str
    content_handle: str | None = None
    kind: WindowKind = WindowKind.NORMAL
    layer: WindowLayer = WindowLayer.WINDOWS
    level: int = 0
    pause_host: bool = False
    hide_below: bool = True
    allow_back: bool = True
    cursor_mode: CursorMode = CursorMode.VISIBLE
    type_name: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    def to_node(self) -> "WindowNode":
        return WindowNode(**self.model_dump())


class TransitionDescriptor(BaseModel):
    """
    Immutable facts about one edge, as supplied by a registry or provider.

    Registry files spell the endpoints `from`/`to`; both spellings load.
    """
    from_id: str | None = Field(default=None, alias="from")
    to_id: str = Field(alias="to")
    trigger: str
    animation: TransitionAnimation = TransitionAnimation.FADE

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @field_validator("from_id", mode="before")
    @classmethod
    def _empty_source_is_global(cls, value: Any) -> Any:
        return value or None

    @property
    def is_global(self) -> bool:
        return self.from_id is None

    def to_edge(self) -> "TransitionEdge":
        return TransitionEdge(
            from_id=self.from_id,
            to_id=self.to_id,
            trigger=self.trigger,
            animation=self.animation,
        )


class WindowNode(BaseModel):
    """
    One window in the navigation graph.

    `editor_position` belongs to graph editors; nothing in navgraph reads it.
    Use `NavigationGraph.set_editor_position` to move a window.
    """
    id: str
    content_handle: str | None = None
    kind: WindowKind = WindowKind.NORMAL
    layer: WindowLayer = WindowLayer.WINDOWS
    level: int = 0
    pause_host: bool = False
    hide_below: bool = True
    allow_back: bool = True
    cursor_mode: CursorMode = CursorMode.VISIBLE
    type_name: str | None = None
    editor_position: Tuple[float, float] = (0.0, 0.0)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def has_content(self) -> bool:
        return bool(self.content_handle)

    @property
    def sort_key(self) -> Tuple[int, int]:
        """Stacking order: layer rank first, then level."""
        return (self.layer.rank, self.level)


class TransitionEdge(BaseModel):
    """
    Directed, triggerable move between windows.

    A missing source makes the edge global: usable from every window.
    """
    from_id: str | None = None
    to_id: str
    trigger: str
    animation: TransitionAnimation = TransitionAnimation.FADE

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("from_id", mode="before")
    @classmethod
    def _empty_source_is_global(cls, value: Any) -> Any:
        return value or None

    @property
    def is_global(self) -> bool:
        return self.from_id is None

    @property
    def identity(self) -> EdgeIdentity:
        return (self.from_id, self.to_id, self.trigger)

    def describe(self) -> str:
        source = self.from_id if self.from_id is not None else "*"
        return f"{source} --({self.trigger})--> {self.to_id}"
