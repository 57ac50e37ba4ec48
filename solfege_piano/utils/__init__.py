"""工具模块"""

from .logger import get_logger, setup_logging
from .exceptions import (
    SolfegePianoError,
    ValidationError,
    InvalidPitchClassError,
    InvalidDegreeError,
    ExerciseLengthError,
    PlaybackError,
    ConfigError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "SolfegePianoError",
    "ValidationError",
    "InvalidPitchClassError",
    "InvalidDegreeError",
    "ExerciseLengthError",
    "PlaybackError",
    "ConfigError",
]
