"""Solfège Piano TUI 主应用程序"""

from typing import Optional

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Label, Select, Static

from ..config import AppConfig, get_app_config
from ..core.controller import PianoController
from ..core.keyboard import shortcut_map
from ..core.playback import ReferenceSample
from ..data.music_theory import CHROMATIC
from ..utils.exceptions import SolfegePianoError
from ..utils.logger import get_logger, setup_logging
from .widgets import ExerciseStrip, PianoKeyboard

logger = get_logger(__name__)


class SolfegePianoApp(App):
    """Virtual piano with a solfège dictation exercise"""

    TITLE = "Solfège Piano"
    SUB_TITLE = "视唱听写练习"

    CSS = """
    #controls {
        height: 5;
        padding: 0 1;
    }

    #controls Button {
        min-width: 5;
        margin: 0 1;
    }

    #key_select {
        width: 16;
    }

    #note_count {
        width: 8;
        content-align: center middle;
        height: 3;
    }

    #status {
        height: 3;
        padding: 0 1;
        color: #808080;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "退出", priority=True),
        Binding("ctrl+n", "new_exercise", "新练习"),
        Binding("ctrl+r", "reset_exercise", "重来"),
        Binding("plus", "more_notes", "+音符"),
        Binding("minus", "fewer_notes", "-音符"),
        Binding("f2", "toggle_answer", "答案"),
    ]

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        controller: Optional[PianoController] = None,
    ):
        """初始化应用程序"""
        super().__init__()

        self.config = config or get_app_config()
        setup_logging(self.config.log_level, tui_mode=True, log_file=self.config.log_file_path)
        self.controller = controller or PianoController(self.config)
        self.shortcuts = shortcut_map(self.controller.keys)
        self.reveal = False

    def compose(self) -> ComposeResult:
        """构建应用程序界面"""
        yield Header(show_clock=True)
        with Vertical():
            with Horizontal(id="controls"):
                yield Select(
                    [(name, name) for name in CHROMATIC],
                    value=self.controller.current_key,
                    allow_blank=False,
                    id="key_select",
                )
                yield Button("−", id="fewer_btn")
                yield Label(str(self.controller.note_count), id="note_count")
                yield Button("+", id="more_btn")
                yield Button("🎲 New", id="new_btn", variant="primary")
                yield Button("↺ Reset", id="reset_btn")
            yield ExerciseStrip(id="exercise")
            yield PianoKeyboard(self.controller.keys, id="keyboard")
            yield Static("⏳ Registering reference sample...", id="status")
        yield Footer()

    def on_mount(self) -> None:
        """应用程序启动时的初始化"""
        self.theme = "tokyo-night"
        self._refresh_exercise()
        self.load_sample()

    @work(exclusive=True)
    async def load_sample(self) -> None:
        """登记参考采样

        实际解码与发声由外部 sink 负责；未传入 sink 时只显示回放参数。
        登记完成前按键只判题不计算回放参数。
        """
        sample = ReferenceSample(
            source=self.config.sample_source,
            reference_note=self.config.sample_reference_note,
        )
        try:
            self.controller.engine.attach_sample(sample)
        except SolfegePianoError as e:
            logger.error(f"Failed to load sample {sample.source}: {e}")
            self._set_status(f"⚠️ Sample unavailable: {e}")
            return
        self._set_status(
            f"✅ Reference sample registered ({sample.reference_note}), "
            "playback parameters are shown on each key press"
        )

    def _set_status(self, message: str) -> None:
        self.query_one("#status", Static).update(message)

    def _refresh_exercise(self) -> None:
        exercise = self.controller.exercise
        self.query_one(ExerciseStrip).update_exercise(
            exercise.items, exercise.cursor, exercise.phase, self.reveal
        )
        self.query_one("#note_count", Label).update(str(self.controller.note_count))

    def on_key(self, event: events.Key) -> None:
        """电脑键盘快捷键弹奏"""
        key = self.shortcuts.get(event.character or "")
        if key is not None:
            event.stop()
            self.query_one(PianoKeyboard).play(key)

    def on_piano_keyboard_key_pressed(self, message: PianoKeyboard.KeyPressed) -> None:
        try:
            result = self.controller.press(message.key.name)
        except SolfegePianoError as e:
            logger.error(f"Key press {message.key.name} failed: {e}")
            self.notify(str(e), severity="error")
            return

        if result.params is not None:
            self._set_status(
                f"♪ {result.note}  {result.params.frequency:.2f}Hz  "
                f"rate={result.params.playback_rate:.3f}"
            )
        else:
            self._set_status(f"♪ {result.note} (sample not ready)")
        self._refresh_exercise()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "key_select" or event.value == self.controller.current_key:
            return
        try:
            self.controller.select_key(str(event.value))
        except SolfegePianoError as e:
            self.notify(str(e), severity="error")
            return
        self.reveal = False
        self._refresh_exercise()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "fewer_btn": self.action_fewer_notes,
            "more_btn": self.action_more_notes,
            "new_btn": self.action_new_exercise,
            "reset_btn": self.action_reset_exercise,
        }
        action = actions.get(event.button.id or "")
        if action is not None:
            action()

    def action_new_exercise(self) -> None:
        self.reveal = False
        self.controller.new_exercise()
        self._refresh_exercise()

    def action_reset_exercise(self) -> None:
        self.reveal = False
        self.controller.reset_exercise()
        self._refresh_exercise()

    def action_more_notes(self) -> None:
        self._change_length(1)

    def action_fewer_notes(self) -> None:
        self._change_length(-1)

    def action_toggle_answer(self) -> None:
        self.reveal = not self.reveal
        self._refresh_exercise()

    def _change_length(self, delta: int) -> None:
        exercise = self.controller.exercise
        if not self.controller.change_length(delta):
            self.notify(
                f"Note count must stay within {exercise.min_length}-{exercise.max_length}",
                severity="warning",
            )
            return
        self.reveal = False
        self._refresh_exercise()


def run_tui(config: Optional[AppConfig] = None) -> int:
    """运行TUI应用程序"""
    app = SolfegePianoApp(config)
    app.run()
    return app.return_code or 0
