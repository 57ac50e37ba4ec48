"""命令行听写练习"""

from typing import Iterable, List, Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import Completer, Completion
from rich.text import Text

from ..core.controller import PianoController
from ..data.music_theory import CHROMATIC, ExercisePhase, ExerciseItem, ItemStatus
from ..utils.exceptions import ValidationError
from ..utils.logger import get_logger
from .interactive import InteractiveManager

logger = get_logger(__name__)

STATUS_STYLES = {
    ItemStatus.PENDING: "dim",
    ItemStatus.CORRECT: "bold green",
    ItemStatus.WRONG: "bold red reverse",
}

COMMANDS = {
    "n": "新练习",
    "r": "重来",
    "+": "增加音符",
    "-": "减少音符",
    "k <音名>": "切换调",
    "?": "显示答案",
    "q": "退出",
}


class NoteCompleter(Completer):
    """音名自动补全"""

    def __init__(self, names: Iterable[str] = CHROMATIC):
        self.names = list(names)

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor.strip()
        if not text:
            return
        for name in self.names:
            if name.lower().startswith(text.lower()):
                yield Completion(name, start_position=-len(text))


def render_exercise(items: List[ExerciseItem], cursor: int, reveal: bool = False) -> Text:
    """把练习渲染为一行带状态颜色的唱名"""
    text = Text()
    for index, item in enumerate(items):
        label = item.degree
        if reveal or item.status is not ItemStatus.PENDING:
            label = f"{item.degree}({item.note})"
        style = STATUS_STYLES[item.status]
        if index == cursor and item.status is ItemStatus.PENDING:
            style = "bold cyan underline"
        text.append(label, style=style)
        if index < len(items) - 1:
            text.append("  ")
    return text


class DictationDrill:
    """文本模式的视唱听写练习"""

    def __init__(
        self,
        controller: PianoController,
        ui: Optional[InteractiveManager] = None,
    ):
        self.controller = controller
        self.ui = ui or InteractiveManager()
        self.reveal = False

    @property
    def exercise(self):
        return self.controller.exercise

    def show_status(self):
        """显示当前练习"""
        exercise = self.exercise
        header = (
            f"[bold]调: {self.controller.current_key}[/bold]  "
            f"[dim]音符数: {self.controller.note_count}[/dim]"
        )
        self.ui.console.print(header)
        self.ui.console.print(render_exercise(exercise.items, exercise.cursor, self.reveal))

    def show_help(self):
        self.ui.console.print(
            "[dim]" + "  ".join(f"{key}={desc}" for key, desc in COMMANDS.items()) + "[/dim]"
        )

    def handle_input(self, text: str) -> bool:
        """处理一行输入

        Returns:
            bool: 是否继续练习
        """
        command = text.strip()
        if not command:
            return True

        lowered = command.lower()
        if lowered in ("q", "quit", "exit"):
            return False

        if lowered == "n":
            self.reveal = False
            self.controller.new_exercise()
            self.ui.show_info("已生成新练习")
        elif lowered == "r":
            self.reveal = False
            self.controller.reset_exercise()
            self.ui.show_info("练习已重置")
        elif lowered in ("+", "-"):
            delta = 1 if lowered == "+" else -1
            if self.controller.change_length(delta):
                self.reveal = False
                self.ui.show_info(f"音符数: {self.controller.note_count}")
            else:
                exercise = self.exercise
                self.ui.show_warning(
                    f"音符数必须在 {exercise.min_length}-{exercise.max_length} 之间"
                )
        elif lowered == "?":
            self.reveal = True
        elif lowered.startswith("k "):
            try:
                self.controller.select_key(command[2:].strip())
                self.reveal = False
                self.ui.show_info(f"已切换到 {self.controller.current_key} 调")
            except ValidationError as e:
                self.ui.show_error(str(e))
        else:
            self._play(command)

        return True

    def _play(self, text: str):
        """把输入当作音名提交；不带八度时默认使用键盘最低八度"""
        name = text if text[-1].isdigit() else f"{text}{self.controller.keys[0].octave}"
        try:
            result = self.controller.press(name)
        except ValidationError as e:
            self.ui.show_error(str(e))
            return

        item = result.item
        if item is None:
            self.ui.show_warning("练习已结束，输入 r 重来或 n 开始新练习")
            return

        phase = self.exercise.phase
        if item.status is ItemStatus.CORRECT:
            self.ui.show_success(f"{item.degree} = {item.note}")
        else:
            self.ui.show_error(f"错误！{item.degree} 应为 {item.note}")

        if phase is ExercisePhase.COMPLETED:
            self.ui.show_success("全部正确，练习完成！")
        elif phase is ExercisePhase.FAILED:
            self.ui.show_warning("练习失败，输入 r 重来或 n 开始新练习")

    def run(self):
        """运行交互式练习循环"""
        self.ui.show_welcome()
        self.show_help()
        completer = NoteCompleter()

        while True:
            self.show_status()
            try:
                text = prompt("🎹 > ", completer=completer)
            except (KeyboardInterrupt, EOFError):
                break
            if not self.handle_input(text):
                break

        logger.debug("Drill finished: %s", self.exercise.summary())
        self.ui.console.print("\n[cyan]再见！[/cyan]")
