"""Core logic: configuration, application state, menu building and polling"""

from .app_state import AppState, AppStateHolder, build_state
from .config import ConfigStore, Configuration

__all__ = ["AppState", "AppStateHolder", "build_state", "ConfigStore", "Configuration"]
