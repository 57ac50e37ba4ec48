"""核心模块 - 音高模型、听写练习、键盘布局、播放参数与控制器"""

from .pitch import frequency_of, resolve_degree, note_frequency, parse_note
from .exercise import DictationExercise
from .keyboard import PianoKey, build_keyboard
from .playback import AudioEngine, PlaybackParams, ReferenceSample, compute_playback
from .controller import PianoController, PressResult

__all__ = [
    "frequency_of",
    "resolve_degree",
    "note_frequency",
    "parse_note",
    "DictationExercise",
    "PianoKey",
    "build_keyboard",
    "AudioEngine",
    "PlaybackParams",
    "ReferenceSample",
    "compute_playback",
    "PianoController",
    "PressResult",
]
