"""Dialogs"""

from .config_dialog import ConfigDialog

__all__ = ["ConfigDialog"]
