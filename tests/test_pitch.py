"""音高模型测试"""

import pytest

from solfege_piano.core.pitch import (
    frequency_of,
    note_frequency,
    normalize_pitch_class,
    parse_note,
    resolve_degree,
    scale_of,
    semitones_from_a4,
    strip_octave,
)
from solfege_piano.data.music_theory import CHROMATIC, DEGREES, Note
from solfege_piano.utils.exceptions import (
    InvalidDegreeError,
    InvalidPitchClassError,
    ValidationError,
)


def test_a4_is_440():
    """A4 = 440Hz"""
    assert frequency_of("A", 4) == 440


def test_middle_c():
    assert frequency_of("C", 4) == pytest.approx(261.6256, rel=1e-6)
    assert note_frequency("C4") == frequency_of("C", 4)


@pytest.mark.parametrize("pitch_class", CHROMATIC)
def test_octave_doubles_frequency(pitch_class):
    """高一个八度频率加倍"""
    for octave in range(0, 8):
        assert frequency_of(pitch_class, octave + 1) == pytest.approx(
            2 * frequency_of(pitch_class, octave)
        )


def test_frequency_monotonic_in_semitones():
    """频率随半音距离单调递增"""
    notes = [(pc, octave) for octave in range(0, 9) for pc in CHROMATIC]
    notes.sort(key=lambda n: semitones_from_a4(*n))
    frequencies = [frequency_of(pc, octave) for pc, octave in notes]
    assert all(a < b for a, b in zip(frequencies, frequencies[1:]))


def test_custom_reference():
    assert frequency_of("A", 4, reference=442.0) == 442.0
    assert frequency_of("A", 3, reference=442.0) == pytest.approx(221.0)


def test_unknown_pitch_class_rejected():
    with pytest.raises(InvalidPitchClassError):
        frequency_of("H", 4)
    with pytest.raises(ValidationError):
        frequency_of("E#", 4)


def test_normalize_pitch_class():
    assert normalize_pitch_class("c#") == "C#"
    assert normalize_pitch_class(" g ") == "G"
    assert normalize_pitch_class("Bb") == "A#"
    assert normalize_pitch_class("Eb") == "D#"
    with pytest.raises(InvalidPitchClassError):
        normalize_pitch_class("")
    with pytest.raises(InvalidPitchClassError):
        normalize_pitch_class(None)


def test_parse_note():
    """解析音符名"""
    assert parse_note("C#4") == Note("C#", 4)
    assert parse_note("a0") == Note("A", 0)
    assert parse_note("Db3") == Note("C#", 3)
    assert parse_note("C#4").name == "C#4"
    assert parse_note("F#3").is_black
    for bad in ("C", "4", "X4", "C##4", ""):
        with pytest.raises(InvalidPitchClassError):
            parse_note(bad)


def test_strip_octave():
    assert strip_octave("C#3") == "C#"
    assert strip_octave("B4") == "B"


@pytest.mark.parametrize("key", CHROMATIC)
def test_resolve_degree_properties(key):
    """解析结果总是合法音名，do 即主音"""
    assert resolve_degree(key, "do") == key
    for degree in DEGREES:
        assert resolve_degree(key, degree) in CHROMATIC


def test_resolve_degree_examples():
    assert [resolve_degree("C", d) for d in ("do", "mi", "sol")] == ["C", "E", "G"]
    assert resolve_degree("D", "mi") == "F#"
    assert resolve_degree("A", "si") == "G#"
    # 跨越 B -> C
    assert resolve_degree("B", "re") == "C#"
    assert resolve_degree("G", "Fa") == "C"


def test_resolve_unknown_degree():
    with pytest.raises(InvalidDegreeError) as exc_info:
        resolve_degree("C", "ti")
    assert exc_info.value.degree == "ti"
    with pytest.raises(InvalidPitchClassError):
        resolve_degree("X", "do")


def test_scale_of():
    assert scale_of("C") == ["C", "D", "E", "F", "G", "A", "B"]
    assert scale_of("F") == ["F", "G", "A", "A#", "C", "D", "E"]


if __name__ == "__main__":
    pytest.main([__file__])
