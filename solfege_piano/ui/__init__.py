"""交互式用户界面模块"""

from .interactive import InteractiveManager
from .drill import DictationDrill, NoteCompleter, render_exercise

__all__ = [
    "InteractiveManager",
    "DictationDrill",
    "NoteCompleter",
    "render_exercise",
]
