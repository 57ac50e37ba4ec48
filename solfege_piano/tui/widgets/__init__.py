"""TUI widgets"""

from .piano_keyboard import PianoKeyboard, PianoKeyButton
from .exercise_strip import ExerciseStrip

__all__ = ["PianoKeyboard", "PianoKeyButton", "ExerciseStrip"]
