#!/usr/bin/env python3
"""Entry point for the Photo Fusion GUI."""

import os
import sys

HERE = os.path.dirname(os.path.abspath(__file__))
if HERE not in sys.path:
    sys.path.insert(0, HERE)

from photofusion.ui.main_window import run

if __name__ == "__main__":
    run()
