"""音乐理论模块 - 音名、唱名与练习数据结构"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum


# 十二平均律音名（以升号记写）
CHROMATIC: Tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)

# 黑键音名
BLACK_KEYS = frozenset({"C#", "D#", "F#", "G#", "A#"})

# 各音名相对 A 的半音距离（同一八度内）
SEMITONES_FROM_A: Dict[str, int] = {
    "C": -9, "C#": -8, "D": -7, "D#": -6,
    "E": -5, "F": -4, "F#": -3, "G": -2,
    "G#": -1, "A": 0, "A#": 1, "B": 2,
}

# 唱名到主音的半音偏移（大调）
DEGREE_OFFSETS: Dict[str, int] = {
    "do": 0,
    "re": 2,
    "mi": 4,
    "fa": 5,
    "sol": 7,
    "la": 9,
    "si": 11,
}

DEGREES: Tuple[str, ...] = tuple(DEGREE_OFFSETS)

# 标准音 A4
REFERENCE_NOTE = "A4"
REFERENCE_FREQUENCY = 440.0
REFERENCE_OCTAVE = 4

# 原声大钢琴 C4 采样
DEFAULT_SAMPLE_SOURCE = (
    "https://cdn.jsdelivr.net/gh/gleitz/midi-js-soundfonts@master/"
    "MusyngKite/acoustic_grand_piano-mp3/C4.mp3"
)
DEFAULT_SAMPLE_NOTE = "C4"


class ItemStatus(Enum):
    """练习音符状态"""

    PENDING = "pending"
    CORRECT = "correct"
    WRONG = "wrong"


class ExercisePhase(Enum):
    """练习阶段"""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def finished(self) -> bool:
        return self in (ExercisePhase.COMPLETED, ExercisePhase.FAILED)


@dataclass(frozen=True)
class Note:
    """音符 - 音名加八度，如 C#4"""

    pitch_class: str
    octave: int

    @property
    def name(self) -> str:
        return f"{self.pitch_class}{self.octave}"

    @property
    def is_black(self) -> bool:
        return self.pitch_class in BLACK_KEYS

    def __str__(self) -> str:
        return self.name


@dataclass
class ExerciseItem:
    """练习中的单个目标音"""

    degree: str  # 唱名，如 "mi"
    note: str  # 解析后的音名，如 "E"
    status: ItemStatus = ItemStatus.PENDING

    @property
    def pending(self) -> bool:
        return self.status is ItemStatus.PENDING


@dataclass
class ExerciseSummary:
    """练习结果摘要"""

    key: Optional[str]
    phase: ExercisePhase
    length: int
    correct: int
    degrees: List[str]
    notes: List[str]

    @property
    def accuracy(self) -> float:
        """正确率（按练习总长度计算）"""
        if self.length == 0:
            return 0.0
        return self.correct / self.length
