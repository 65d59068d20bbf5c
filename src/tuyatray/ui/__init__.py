"""Qt user interface: tray and configuration dialog"""

from .dialogs import ConfigDialog
from .tray import TrayController, TrayWidget

__all__ = ["ConfigDialog", "TrayController", "TrayWidget"]
