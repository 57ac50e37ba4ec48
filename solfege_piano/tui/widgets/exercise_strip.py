"""Exercise strip widget"""

from typing import List

from rich.text import Text
from textual.widgets import Static

from ...data.music_theory import ExerciseItem, ExercisePhase
from ...ui.drill import render_exercise


PHASE_LABELS = {
    ExercisePhase.IDLE: "[dim]No exercise[/dim]",
    ExercisePhase.IN_PROGRESS: "[cyan]Play the degrees in order[/cyan]",
    ExercisePhase.COMPLETED: "[bold green]✨ Completed![/bold green]",
    ExercisePhase.FAILED: "[bold red]✗ Wrong note - reset or start a new exercise[/bold red]",
}


class ExerciseStrip(Static):
    """Shows the solfège sequence with per-item status"""

    DEFAULT_CSS = """
    ExerciseStrip {
        border: solid #ff00ff;
        border-title-color: #ff00ff;
        border-title-style: bold;
        height: 5;
        width: 1fr;
        padding: 0 1;
        content-align: center middle;
    }
    """

    def __init__(self, **kwargs):
        super().__init__("", **kwargs)
        self.border_title = "🎼 Dictation"

    def update_exercise(
        self,
        items: List[ExerciseItem],
        cursor: int,
        phase: ExercisePhase,
        reveal: bool = False,
    ) -> None:
        text = render_exercise(items, cursor, reveal)
        text.append("\n")
        text.append_text(Text.from_markup(PHASE_LABELS[phase]))
        self.update(text)
