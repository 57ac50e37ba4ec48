"""Piano keyboard widget"""

from typing import List

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button

from ...core.keyboard import PianoKey


class PianoKeyButton(Button):
    """A single piano key"""

    def __init__(self, key: PianoKey, **kwargs):
        label = key.name
        if key.shortcut:
            label = f"{key.name}\n({key.shortcut})"
        super().__init__(
            label,
            id=f"key-{key.name.replace('#', 's')}",
            classes="black-key" if key.is_black else "white-key",
            **kwargs,
        )
        self.piano_key = key


class PianoKeyboard(Horizontal):
    """Row of piano keys in chromatic order"""

    DEFAULT_CSS = """
    PianoKeyboard {
        height: 7;
        width: 1fr;
        border: solid #00ffff;
        border-title-color: #00ffff;
        border-title-style: bold;
    }

    PianoKeyboard Button {
        min-width: 5;
        width: 1fr;
        height: 5;
        border: none;
        padding: 0;
    }

    PianoKeyboard .white-key {
        background: #e0e0e0;
        color: #1a1f38;
    }

    PianoKeyboard .black-key {
        background: #1a1f38;
        color: #c0c0c0;
        height: 3;
    }

    PianoKeyboard .pressed {
        background: #00ffff;
        color: #000000;
        text-style: bold;
    }
    """

    class KeyPressed(Message):
        """Posted when a piano key is played"""

        def __init__(self, key: PianoKey) -> None:
            self.key = key
            super().__init__()

    def __init__(self, keys: List[PianoKey], **kwargs):
        super().__init__(**kwargs)
        self.keys = keys
        self.border_title = "🎹 Piano"

    def compose(self) -> ComposeResult:
        for key in self.keys:
            yield PianoKeyButton(key)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, PianoKeyButton):
            event.stop()
            self.play(event.button.piano_key)

    def play(self, key: PianoKey) -> None:
        """Highlight the key briefly and announce it"""
        button = self.query_one(f"#key-{key.name.replace('#', 's')}", PianoKeyButton)
        button.add_class("pressed")
        self.set_timer(0.2, lambda: button.remove_class("pressed"))
        self.post_message(self.KeyPressed(key))
