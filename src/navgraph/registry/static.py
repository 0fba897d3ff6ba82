"""
In-process window registry.

Windows are registered explicitly, either with method calls or with the
`window` class decorator:

    registry = StaticRegistry()

    @registry.window("MainMenu", transitions=[("play", "Game")])
    class MainMenuWindow:
        ...
"""

from typing import Any, Callable, Iterable, List, Sequence, Tuple, TypeVar

from ..core.types import TransitionAnimation, TransitionDescriptor, WindowDescriptor

C = TypeVar("C")

# (trigger, to_id) or (trigger, to_id, animation)
TransitionSpec = Tuple[Any, ...]


class StaticRegistry:
    """Registry filled by explicit calls; order of registration is preserved."""

    def __init__(self):
        self._windows: List[WindowDescriptor] = []
        self._transitions: List[TransitionDescriptor] = []

    def register_window(self, descriptor: WindowDescriptor | None = None, **fields: Any) -> WindowDescriptor:
        if descriptor is None:
            descriptor = WindowDescriptor(**fields)
        self._windows.append(descriptor)
        return descriptor

    def register_transition(
        self,
        from_id: str,
        trigger: str,
        to_id: str,
        animation: TransitionAnimation = TransitionAnimation.FADE,
    ) -> TransitionDescriptor:
        descriptor = TransitionDescriptor(from_id=from_id, to_id=to_id, trigger=trigger, animation=animation)
        self._transitions.append(descriptor)
        return descriptor

    def register_global_transition(
        self,
        trigger: str,
        to_id: str,
        animation: TransitionAnimation = TransitionAnimation.FADE,
    ) -> TransitionDescriptor:
        descriptor = TransitionDescriptor(from_id=None, to_id=to_id, trigger=trigger, animation=animation)
        self._transitions.append(descriptor)
        return descriptor

    def window(
        self,
        window_id: str,
        transitions: Sequence[TransitionSpec] = (),
        global_transitions: Sequence[TransitionSpec] = (),
        **fields: Any,
    ) -> Callable[[C], C]:
        """Class decorator declaring a window and the transitions it owns."""

        def decorator(cls: C) -> C:
            fields.setdefault("type_name", getattr(cls, "__qualname__", None))
            self.register_window(id=window_id, **fields)
            for spec in transitions:
                self.register_transition(window_id, *spec)
            for spec in global_transitions:
                self.register_global_transition(*spec)
            return cls

        return decorator

    def windows(self) -> Iterable[WindowDescriptor]:
        return list(self._windows)

    def transitions(self) -> Iterable[TransitionDescriptor]:
        return list(self._transitions)

    def clear(self) -> None:
        self._windows.clear()
        self._transitions.clear()


class StaticTransitionProvider:
    """A named, fixed list of supplementary transitions."""

    def __init__(self, name: str, transitions: Iterable[TransitionDescriptor] = ()):
        self._name = name
        self._transitions = list(transitions)

    @property
    def name(self) -> str:
        return self._name

    def add(
        self,
        from_id: str | None,
        trigger: str,
        to_id: str,
        animation: TransitionAnimation = TransitionAnimation.FADE,
    ) -> TransitionDescriptor:
        descriptor = TransitionDescriptor(from_id=from_id, to_id=to_id, trigger=trigger, animation=animation)
        self._transitions.append(descriptor)
        return descriptor

    def transitions(self) -> Iterable[TransitionDescriptor]:
        return list(self._transitions)
