"""数据模块"""

from .music_theory import (
    CHROMATIC,
    DEGREES,
    DEGREE_OFFSETS,
    ExerciseItem,
    ExercisePhase,
    ExerciseSummary,
    ItemStatus,
    Note,
)

__all__ = [
    "CHROMATIC",
    "DEGREES",
    "DEGREE_OFFSETS",
    "ExerciseItem",
    "ExercisePhase",
    "ExerciseSummary",
    "ItemStatus",
    "Note",
]
