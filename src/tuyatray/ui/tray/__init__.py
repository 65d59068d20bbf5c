"""System tray component module

Separates UI rendering (TrayWidget) from business logic
(TrayController).
"""

from .tray_controller import TrayController
from .tray_widget import TrayWidget

__all__ = [
    "TrayWidget",
    "TrayController",
]
