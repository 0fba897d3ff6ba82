"""
File-backed registry and transition providers.

Registry document (YAML or JSON):

    windows:
      - id: MainMenu
        content_handle: ui/main_menu
        transitions:
          - {trigger: play, to: Game}
        global_transitions:
          - {trigger: quit, to: QuitDialog}
      - id: Game
        layer: hud
    transitions:
      - {from: Game, trigger: pause, to: PauseMenu}

Provider document:

    transitions:
      - {from: Game, trigger: shop, to: Shop, animation: slide_up}
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml
from pydantic import ValidationError

from ..core.errors import RegistryLoadError
from ..core.types import TransitionDescriptor, WindowDescriptor

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise RegistryLoadError(f"File not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RegistryLoadError(f"Failed to parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RegistryLoadError(f"{path}: expected a mapping at the top level")
    return data


def _as_list(value: Any, what: str, path: Path) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise RegistryLoadError(f"{path}: '{what}' must be a list")
    return value


class FileRegistry:
    """Registry loaded from a YAML/JSON document. Parsed once, on first use."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._windows: List[WindowDescriptor] | None = None
        self._transitions: List[TransitionDescriptor] = []

    def load(self) -> None:
        data = _read_document(self.path)
        windows: List[WindowDescriptor] = []
        transitions: List[TransitionDescriptor] = []

        try:
            for entry in _as_list(data.get("windows"), "windows", self.path):
                entry = dict(entry)
                local = _as_list(entry.pop("transitions", None), "transitions", self.path)
                global_ = _as_list(entry.pop("global_transitions", None), "global_transitions", self.path)

                window = WindowDescriptor.model_validate(entry)
                windows.append(window)

                for t in local:
                    transitions.append(TransitionDescriptor.model_validate({**t, "from": window.id}))
                for t in global_:
                    transitions.append(TransitionDescriptor.model_validate({**t, "from": None}))

            for t in _as_list(data.get("transitions"), "transitions", self.path):
                transitions.append(TransitionDescriptor.model_validate(t))
        except (ValidationError, ValueError, TypeError) as e:
            raise RegistryLoadError(f"{self.path}: invalid entry: {e}") from e

        logger.debug(f"Loaded {len(windows)} windows and {len(transitions)} transitions from {self.path}")
        self._windows = windows
        self._transitions = transitions

    def windows(self) -> Iterable[WindowDescriptor]:
        if self._windows is None:
            self.load()
        return list(self._windows)

    def transitions(self) -> Iterable[TransitionDescriptor]:
        if self._windows is None:
            self.load()
        return list(self._transitions)


class FileTransitionProvider:
    """Supplementary transitions loaded from a YAML/JSON document."""

    def __init__(self, path: str | Path, name: str | None = None):
        self.path = Path(path)
        self._name = name or self.path.stem

    @property
    def name(self) -> str:
        return self._name

    def transitions(self) -> Iterable[TransitionDescriptor]:
        data = _read_document(self.path)
        try:
            return [
                TransitionDescriptor.model_validate(t)
                for t in _as_list(data.get("transitions"), "transitions", self.path)
            ]
        except (ValidationError, ValueError, TypeError) as e:
            raise RegistryLoadError(f"{self.path}: invalid entry: {e}") from e
