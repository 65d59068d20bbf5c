"""Application state - configuration and the client built from it

The state is an immutable value. Saving a new configuration produces
a new AppState (new client, next generation) that replaces the old one
under a lock, so a poll always works with one consistent client.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from ..utils import LogCategory, app_logger
from .config.configuration import Configuration
from .interfaces.cloud import ICloudClient

ClientFactory = Callable[[Configuration], ICloudClient]


@dataclass(frozen=True)
class AppState:
    config: Configuration
    client: Optional[ICloudClient] = None
    generation: int = 0

    @property
    def configured(self) -> bool:
        return self.client is not None


def build_state(
    config: Configuration, client_factory: ClientFactory, generation: int = 0
) -> AppState:
    """Build a state, with a client only when the configuration is complete"""
    client = client_factory(config) if config.is_complete() else None
    return AppState(config=config, client=client, generation=generation)


class AppStateHolder:
    """Thread-safe owner of the current AppState"""

    def __init__(self, initial: AppState, client_factory: ClientFactory):
        self._lock = threading.Lock()
        self._state = initial
        self._client_factory = client_factory

    @property
    def current(self) -> AppState:
        with self._lock:
            return self._state

    def replace_config(self, config: Configuration) -> AppState:
        """Swap in a new configuration and client, bumping the generation"""
        with self._lock:
            new_state = build_state(
                config, self._client_factory, self._state.generation + 1
            )
            self._state = new_state

        app_logger.info(
            "Application state replaced",
            LogCategory.CONFIG,
            {"generation": new_state.generation, "configured": new_state.configured},
            "app_state",
        )
        return new_state
