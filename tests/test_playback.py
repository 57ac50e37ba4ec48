"""键盘布局与播放参数测试"""

import pytest

from solfege_piano.core.keyboard import build_keyboard, shortcut_map
from solfege_piano.core.pitch import note_frequency
from solfege_piano.core.playback import (
    AudioEngine,
    PlaybackParams,
    ReferenceSample,
    compute_playback,
)
from solfege_piano.utils.exceptions import (
    InvalidPitchClassError,
    PlaybackError,
    ValidationError,
)


def test_default_keyboard_layout():
    """默认两个八度 C3-B4"""
    keys = build_keyboard()
    assert len(keys) == 24
    assert keys[0].name == "C3"
    assert keys[-1].name == "B4"
    assert sum(1 for key in keys if key.is_black) == 10
    assert keys[1].is_black and keys[1].pitch_class == "C#"
    assert keys[21].frequency == 440


def test_keyboard_shortcuts():
    mapping = shortcut_map(build_keyboard())
    assert mapping["z"].name == "C3"
    assert mapping["s"].name == "C#3"
    assert mapping["m"].name == "B3"
    assert mapping["q"].name == "C4"
    assert mapping["u"].name == "B4"
    assert len(mapping) == 24


def test_keyboard_extra_octaves_have_no_shortcuts():
    keys = build_keyboard(2, 4)
    assert len(keys) == 36
    assert all(key.shortcut is None for key in keys if key.octave == 4)


def test_keyboard_invalid_range():
    with pytest.raises(ValidationError):
        build_keyboard(5, 4)


def test_playback_rate():
    """回放速率 = 目标频率 / 采样频率"""
    c4 = note_frequency("C4")
    params = compute_playback(note_frequency("C5"), c4)
    assert params.playback_rate == pytest.approx(2.0)
    assert params.start_gain == 2.5
    assert params.end_gain == 0.001
    assert params.decay_seconds == 3.0


def test_gain_envelope():
    params = PlaybackParams(frequency=440.0, playback_rate=1.0)
    assert params.gain_at(0) == 2.5
    assert params.gain_at(-1) == 2.5
    assert params.gain_at(3.0) == 0.001
    assert params.gain_at(10.0) == 0.001
    midpoint = params.gain_at(1.5)
    assert midpoint == pytest.approx((2.5 * 0.001) ** 0.5)
    assert params.gain_at(1.0) > params.gain_at(2.0)


def test_compute_playback_rejects_bad_input():
    with pytest.raises(ValidationError):
        compute_playback(0, 261.63)
    with pytest.raises(ValidationError):
        compute_playback(440, -1)
    with pytest.raises(ValidationError):
        compute_playback(440, 440, start_gain=0.001, end_gain=2.5)


def test_engine_ignores_playback_until_ready():
    """采样未加载时静默忽略"""
    played = []
    engine = AudioEngine(sink=played.append)

    assert not engine.ready
    assert engine.play(440.0) is None
    assert played == []
    assert not engine.activated

    engine.attach_sample(ReferenceSample("piano-c4.mp3", "C4"))
    params = engine.play(note_frequency("C4"))

    assert engine.ready
    assert engine.activated
    assert params.playback_rate == pytest.approx(1.0)
    assert played == [params]


def test_engine_rejects_bad_reference_note():
    engine = AudioEngine()
    with pytest.raises(InvalidPitchClassError):
        engine.attach_sample(ReferenceSample("piano.mp3", "H4"))
    assert not engine.ready


def test_engine_wraps_sink_failures():
    def broken_sink(params):
        raise RuntimeError("device busy")

    engine = AudioEngine(sink=broken_sink)
    engine.attach_sample(ReferenceSample())
    with pytest.raises(PlaybackError):
        engine.play(440.0)


if __name__ == "__main__":
    pytest.main([__file__])
