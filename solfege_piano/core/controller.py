"""钢琴控制器 - 持有调、练习长度、练习状态与音频引擎

界面层（CLI/TUI）只把用户事件翻译成这里的方法调用。
"""

from dataclasses import dataclass
from typing import List, Optional

from ..config import AppConfig, get_app_config
from ..data.music_theory import ExerciseItem
from ..utils.exceptions import ExerciseLengthError
from ..utils.logger import get_logger
from .exercise import DegreePicker, DictationExercise
from .keyboard import PianoKey, build_keyboard
from .pitch import normalize_pitch_class, note_frequency, strip_octave
from .playback import AudioEngine, PlaybackParams

logger = get_logger(__name__)


@dataclass
class PressResult:
    """一次按键的处理结果"""

    note: str
    item: Optional[ExerciseItem]  # 被判定的练习音，练习未进行时为 None
    params: Optional[PlaybackParams]  # 回放参数，采样未就绪时为 None


class PianoController:
    """钢琴与听写练习的控制器"""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        degree_picker: Optional[DegreePicker] = None,
        engine: Optional[AudioEngine] = None,
    ):
        self.config = config or get_app_config()
        self.config.validate()

        self.reference = self.config.reference_frequency
        audio = self.config.get_section("audio")
        self.engine = engine or AudioEngine(
            reference=self.reference,
            start_gain=float(audio.get("start_gain", 2.5)),
            end_gain=float(audio.get("end_gain", 0.001)),
            decay_seconds=float(audio.get("decay_seconds", 3.0)),
        )
        self.keys: List[PianoKey] = build_keyboard(
            self.config.first_octave, self.config.last_octave, self.reference
        )

        self.exercise = DictationExercise(
            degree_picker,
            min_length=self.config.min_length,
            max_length=self.config.max_length,
        )
        self.current_key = normalize_pitch_class(self.config.default_key)
        self.note_count = self.config.default_length

        self.new_exercise()
        logger.debug(
            "PianoController initialized: key=%s, length=%d",
            self.current_key,
            self.note_count,
        )

    def new_exercise(self) -> List[ExerciseItem]:
        """按当前调与长度重新生成练习"""
        return self.exercise.generate(self.current_key, self.note_count)

    def reset_exercise(self) -> None:
        self.exercise.reset()

    def select_key(self, key: str) -> List[ExerciseItem]:
        """切换主音并重新生成练习"""
        self.current_key = normalize_pitch_class(key)
        logger.info("Key changed to %s", self.current_key)
        return self.new_exercise()

    def change_length(self, delta: int) -> bool:
        """调整练习长度，超出范围时拒绝并保持原状态

        Returns:
            bool: 是否发生了变化
        """
        new_count = self.note_count + delta
        if not self.exercise.is_valid_length(new_count):
            logger.debug("Rejected exercise length %d", new_count)
            return False

        self.note_count = new_count
        self.new_exercise()
        return True

    def set_length(self, length: int) -> None:
        """直接设置练习长度，非法值抛出 ExerciseLengthError"""
        if not self.exercise.is_valid_length(length):
            raise ExerciseLengthError(
                length, self.exercise.min_length, self.exercise.max_length
            )
        self.note_count = length
        self.new_exercise()

    def press(self, note_name: str) -> PressResult:
        """处理一次按键：播放声音并提交给练习

        Args:
            note_name: 带八度的音符名，如 "C#4"
        """
        frequency = note_frequency(note_name, self.reference)
        pitch_class = strip_octave(note_name)

        params = self.engine.play(frequency)
        item = self.exercise.submit(pitch_class)

        return PressResult(note=note_name, item=item, params=params)
