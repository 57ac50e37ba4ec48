"""音高模型 - 音名/八度到频率、唱名到音名的换算

所有函数都是纯函数，非法的音名或唱名会抛出 ValidationError 的子类。
"""

import re
from typing import List

from ..data.music_theory import (
    CHROMATIC,
    DEGREE_OFFSETS,
    REFERENCE_FREQUENCY,
    REFERENCE_OCTAVE,
    SEMITONES_FROM_A,
    Note,
)
from ..utils.exceptions import InvalidDegreeError, InvalidPitchClassError

# 降号写法到升号写法
FLAT_ALIASES = {
    "DB": "C#",
    "EB": "D#",
    "GB": "F#",
    "AB": "G#",
    "BB": "A#",
}

NOTE_PATTERN = re.compile(r"^\s*([A-Ga-g][#b]?)\s*(-?\d+)\s*$")


def normalize_pitch_class(pitch_class: str) -> str:
    """规范化音名（大小写、降号），未知音名抛出 InvalidPitchClassError"""
    if not isinstance(pitch_class, str):
        raise InvalidPitchClassError(pitch_class)

    text = pitch_class.strip()
    if not text:
        raise InvalidPitchClassError(pitch_class)

    upper = text[0].upper() + text[1:]
    if upper in SEMITONES_FROM_A:
        return upper

    alias = FLAT_ALIASES.get(text.upper())
    if alias is not None and text[1:] == "b":
        return alias

    raise InvalidPitchClassError(pitch_class)


def chromatic_index(pitch_class: str) -> int:
    """音名在 C 起始的半音序列中的位置 (0-11)"""
    return CHROMATIC.index(normalize_pitch_class(pitch_class))


def semitones_from_a4(pitch_class: str, octave: int) -> int:
    """相对 A4 的半音距离"""
    return SEMITONES_FROM_A[normalize_pitch_class(pitch_class)] + (
        octave - REFERENCE_OCTAVE
    ) * 12


def frequency_of(
    pitch_class: str, octave: int, reference: float = REFERENCE_FREQUENCY
) -> float:
    """计算音高频率 (Hz)

    Args:
        pitch_class: 音名，如 "C#"
        octave: 八度编号，A4 = 440Hz
        reference: A4 的频率

    Returns:
        float: reference * 2^(n/12)，n 为相对 A4 的半音数
    """
    n = semitones_from_a4(pitch_class, octave)
    return reference * 2 ** (n / 12)


def parse_note(name: str) -> Note:
    """解析 "C#4" 形式的音符名"""
    if not isinstance(name, str):
        raise InvalidPitchClassError(name)

    match = NOTE_PATTERN.match(name)
    if not match:
        raise InvalidPitchClassError(name)

    pitch_class, octave = match.groups()
    return Note(normalize_pitch_class(pitch_class), int(octave))


def note_frequency(name: str, reference: float = REFERENCE_FREQUENCY) -> float:
    """按完整音符名计算频率，如 note_frequency("C4")"""
    note = parse_note(name)
    return frequency_of(note.pitch_class, note.octave, reference)


def strip_octave(name: str) -> str:
    """去掉八度数字，只保留音名；按键输入交给练习判定前使用"""
    return parse_note(name).pitch_class


def resolve_degree(key: str, degree: str) -> str:
    """把唱名解析为给定调上的音名

    Args:
        key: 主音音名
        degree: 唱名 (do/re/mi/fa/sol/la/si)

    Returns:
        str: 十二个音名之一
    """
    if not isinstance(degree, str):
        raise InvalidDegreeError(degree)

    offset = DEGREE_OFFSETS.get(degree.strip().lower())
    if offset is None:
        raise InvalidDegreeError(degree)

    return CHROMATIC[(chromatic_index(key) + offset) % 12]


def scale_of(key: str) -> List[str]:
    """给定调上七个唱名对应的音名"""
    return [resolve_degree(key, degree) for degree in DEGREE_OFFSETS]
