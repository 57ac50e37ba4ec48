"""Textual 终端界面"""

from .app import SolfegePianoApp, run_tui

__all__ = ["SolfegePianoApp", "run_tui"]
