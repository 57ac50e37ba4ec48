"""钢琴键盘布局"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..data.music_theory import CHROMATIC, REFERENCE_FREQUENCY, Note
from ..utils.exceptions import ValidationError
from .pitch import frequency_of

# 电脑键盘映射：下两排对应低八度，上两排对应高八度
LOWER_ROW_SHORTCUTS = ("z", "s", "x", "d", "c", "v", "g", "b", "h", "n", "j", "m")
UPPER_ROW_SHORTCUTS = ("q", "2", "w", "3", "e", "r", "5", "t", "6", "y", "7", "u")


@dataclass(frozen=True)
class PianoKey:
    """键盘上的一个琴键"""

    note: Note
    frequency: float
    shortcut: Optional[str] = None

    @property
    def name(self) -> str:
        return self.note.name

    @property
    def pitch_class(self) -> str:
        return self.note.pitch_class

    @property
    def octave(self) -> int:
        return self.note.octave

    @property
    def is_black(self) -> bool:
        return self.note.is_black


def build_keyboard(
    first_octave: int = 3,
    last_octave: int = 4,
    reference: float = REFERENCE_FREQUENCY,
) -> List[PianoKey]:
    """按半音顺序生成琴键

    只有最低两个八度分配电脑键盘快捷键。
    """
    if first_octave > last_octave:
        raise ValidationError(
            f"first_octave {first_octave} is above last_octave {last_octave}"
        )

    shortcut_rows = [LOWER_ROW_SHORTCUTS, UPPER_ROW_SHORTCUTS]
    keys = []
    for row, octave in enumerate(range(first_octave, last_octave + 1)):
        shortcuts = shortcut_rows[row] if row < len(shortcut_rows) else None
        for index, pitch_class in enumerate(CHROMATIC):
            keys.append(
                PianoKey(
                    note=Note(pitch_class, octave),
                    frequency=frequency_of(pitch_class, octave, reference),
                    shortcut=shortcuts[index] if shortcuts else None,
                )
            )
    return keys


def shortcut_map(keys: List[PianoKey]) -> Dict[str, PianoKey]:
    """快捷键 -> 琴键"""
    return {key.shortcut: key for key in keys if key.shortcut}
