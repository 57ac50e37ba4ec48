"""命令行与文本练习测试"""

import io
import json

import pytest
from rich.console import Console

import cli
from solfege_piano.core.controller import PianoController
from solfege_piano.core.exercise import sequence_degree_picker
from solfege_piano.data.music_theory import ExercisePhase, ExerciseItem, ItemStatus
from solfege_piano.ui import DictationDrill, InteractiveManager, NoteCompleter, render_exercise


@pytest.fixture
def ui():
    return InteractiveManager(Console(file=io.StringIO(), width=120, color_system=None))


def output(ui):
    return ui.console.file.getvalue()


@pytest.fixture
def drill(config, ui):
    controller = PianoController(config, degree_picker=sequence_degree_picker(["do", "re"]))
    controller.set_length(2)
    return DictationDrill(controller, ui)


def test_drill_correct_sequence(drill, ui):
    first, second = drill.exercise.expected_notes
    assert drill.handle_input(first)
    assert drill.handle_input(f"{second.lower()}4")
    assert drill.exercise.phase is ExercisePhase.COMPLETED
    assert "练习完成" in output(ui)


def test_drill_wrong_note_then_reset(drill, ui):
    drill.handle_input("E")  # 只会出 C 或 D
    assert drill.exercise.phase is ExercisePhase.FAILED

    drill.handle_input("C")
    assert "练习已结束" in output(ui)

    drill.handle_input("r")
    assert drill.exercise.phase is ExercisePhase.IN_PROGRESS
    assert drill.exercise.cursor == 0


def test_drill_commands(drill, ui):
    drill.handle_input("-")
    assert drill.controller.note_count == 2
    assert "音符数必须在" in output(ui)

    drill.handle_input("+")
    assert drill.controller.note_count == 3

    drill.handle_input("k G")
    assert drill.controller.current_key == "G"

    drill.handle_input("k nope")
    assert drill.controller.current_key == "G"

    drill.handle_input("?")
    assert drill.reveal
    drill.handle_input("n")
    assert not drill.reveal

    assert not drill.handle_input("q")
    assert drill.handle_input("   ")


def test_drill_plays_bare_a(config, ui):
    """单独输入 A 是音名，不是命令"""
    controller = PianoController(config, degree_picker=sequence_degree_picker(["la"]))
    drill = DictationDrill(controller, ui)
    assert drill.exercise.expected_notes[0] == "A"

    for text in ("A", "a"):
        drill.handle_input(text)

    assert not drill.reveal
    assert drill.exercise.cursor == 2
    assert [item.status for item in drill.exercise.items[:2]] == [
        ItemStatus.CORRECT,
        ItemStatus.CORRECT,
    ]


def test_drill_invalid_note_reported(drill, ui):
    drill.handle_input("mi")
    assert drill.exercise.phase is ExercisePhase.IN_PROGRESS
    assert "Unknown pitch class" in output(ui)


def test_render_exercise_reveals_judged_notes():
    items = [
        ExerciseItem("do", "C", ItemStatus.CORRECT),
        ExerciseItem("mi", "E", ItemStatus.WRONG),
        ExerciseItem("sol", "G"),
    ]
    assert render_exercise(items, 1).plain == "do(C)  mi(E)  sol"
    assert render_exercise(items, 1, reveal=True).plain == "do(C)  mi(E)  sol(G)"


def test_note_completer():
    from prompt_toolkit.document import Document

    completions = list(NoteCompleter().get_completions(Document("c"), None))
    assert [c.text for c in completions] == ["C", "C#"]


def test_freq_command(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "c.json"), "freq", "A4", "C#3"]) == 0
    out = capsys.readouterr().out
    assert "440.00" in out
    assert "138.59" in out


def test_resolve_command(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "c.json"), "resolve", "D", "do", "mi"]) == 0
    assert "F#" in capsys.readouterr().out


def test_resolve_unknown_degree(tmp_path):
    assert cli.main(["--config", str(tmp_path / "c.json"), "resolve", "D", "ti"]) == 1


def test_scale_command(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "c.json"), "scale", "F"]) == 0
    assert "A#" in capsys.readouterr().out


def test_bad_config_type_reported(tmp_path, capsys):
    path = tmp_path / "c.json"
    path.write_text(json.dumps({"exercise": {"default_length": "five"}}), encoding="utf-8")
    assert cli.main(["--config", str(path), "scale", "C"]) == 1
    assert "配置错误" in capsys.readouterr().out


def test_drill_rejects_bad_length(tmp_path, ui):
    assert not cli.run_drill(cli.AppConfig(tmp_path / "c.json"), length=12, ui=ui)
    assert "outside" in output(ui)


if __name__ == "__main__":
    pytest.main([__file__])
