#!/usr/bin/env python3
"""
TuyaTray - Application Entry Point

Runs the tray application from a source checkout without installing it.

Usage:
  python app.py
"""

import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from tuyatray.app import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
