"""
Window registries and supplementary transition providers.
"""

from .base import RegistryProvider, TransitionProvider
from .files import FileRegistry, FileTransitionProvider
from .static import StaticRegistry, StaticTransitionProvider

__all__ = [
    "FileRegistry",
    "FileTransitionProvider",
    "RegistryProvider",
    "StaticRegistry",
    "StaticTransitionProvider",
    "TransitionProvider",
]
