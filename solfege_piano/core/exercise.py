"""听写练习状态机

IDLE → IN_PROGRESS → COMPLETED / FAILED

弹错一个音即结束练习（FAILED），不允许在出错位置重试。
"""

import random
from typing import Callable, List, Optional

from ..data.music_theory import (
    DEGREES,
    ExerciseItem,
    ExercisePhase,
    ExerciseSummary,
    ItemStatus,
)
from ..utils.exceptions import ExerciseLengthError, ValidationError
from ..utils.logger import get_logger
from .pitch import normalize_pitch_class, resolve_degree

logger = get_logger(__name__)

DegreePicker = Callable[[], str]

MIN_LENGTH = 2
MAX_LENGTH = 10


def random_degree_picker(rng: Optional[random.Random] = None) -> DegreePicker:
    """均匀随机（可重复）抽取唱名"""
    rng = rng or random.Random()

    def pick() -> str:
        return rng.choice(DEGREES)

    return pick


def sequence_degree_picker(degrees: List[str]) -> DegreePicker:
    """按给定顺序循环返回唱名，用于可重现的练习"""
    if not degrees:
        raise ValidationError("degrees must not be empty")
    index = 0

    def pick() -> str:
        nonlocal index
        degree = degrees[index % len(degrees)]
        index += 1
        return degree

    return pick


class DictationExercise:
    """视唱听写练习"""

    def __init__(
        self,
        degree_picker: Optional[DegreePicker] = None,
        min_length: int = MIN_LENGTH,
        max_length: int = MAX_LENGTH,
    ):
        if min_length < 1 or min_length > max_length:
            raise ValueError(
                f"invalid length bounds [{min_length}, {max_length}]"
            )
        self.degree_picker = degree_picker or random_degree_picker()
        self.min_length = min_length
        self.max_length = max_length

        self.key: Optional[str] = None
        self._items: List[ExerciseItem] = []
        self._cursor = 0
        self._phase = ExercisePhase.IDLE

    @property
    def items(self) -> List[ExerciseItem]:
        return list(self._items)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def phase(self) -> ExercisePhase:
        return self._phase

    @property
    def finished(self) -> bool:
        return self._phase.finished

    @property
    def length(self) -> int:
        return len(self._items)

    @property
    def current_item(self) -> Optional[ExerciseItem]:
        """下一个期望的音，练习未进行时为 None"""
        if self._phase is not ExercisePhase.IN_PROGRESS:
            return None
        return self._items[self._cursor]

    @property
    def expected_notes(self) -> List[str]:
        return [item.note for item in self._items]

    @property
    def score(self) -> int:
        return sum(1 for item in self._items if item.status is ItemStatus.CORRECT)

    def is_valid_length(self, length: int) -> bool:
        return self.min_length <= length <= self.max_length

    def generate(self, key: str, length: int) -> List[ExerciseItem]:
        """生成新练习

        Args:
            key: 主音音名
            length: 音符数量，必须在 [min_length, max_length] 内

        Returns:
            List[ExerciseItem]: 新生成的练习音符
        """
        if not isinstance(length, int) or not self.is_valid_length(length):
            raise ExerciseLengthError(length, self.min_length, self.max_length)

        key = normalize_pitch_class(key)
        items = []
        for _ in range(length):
            degree = self.degree_picker()
            items.append(ExerciseItem(degree=degree, note=resolve_degree(key, degree)))

        # 全部解析成功后才替换状态
        self.key = key
        self._items = items
        self._cursor = 0
        self._phase = ExercisePhase.IN_PROGRESS

        logger.debug(
            "Generated exercise key=%s degrees=%s",
            key,
            [item.degree for item in items],
        )
        return self.items

    def submit(self, pitch_class: str) -> Optional[ExerciseItem]:
        """提交弹奏的音名

        Returns:
            被判定的练习音符；练习未在进行中时返回 None 且不改变状态
        """
        if self._phase is not ExercisePhase.IN_PROGRESS:
            return None

        played = normalize_pitch_class(pitch_class)
        target = self._items[self._cursor]

        if played == target.note:
            target.status = ItemStatus.CORRECT
            self._cursor += 1
            if self._cursor >= len(self._items):
                self._phase = ExercisePhase.COMPLETED
                logger.info("Exercise completed (%d notes)", len(self._items))
        else:
            target.status = ItemStatus.WRONG
            self._phase = ExercisePhase.FAILED
            logger.info(
                "Exercise failed at %d: expected %s, played %s",
                self._cursor,
                target.note,
                played,
            )

        return target

    def reset(self) -> None:
        """重置进度，保留原有音符序列"""
        if self._phase is ExercisePhase.IDLE:
            return

        for item in self._items:
            item.status = ItemStatus.PENDING
        self._cursor = 0
        self._phase = ExercisePhase.IN_PROGRESS

    def summary(self) -> ExerciseSummary:
        return ExerciseSummary(
            key=self.key,
            phase=self._phase,
            length=len(self._items),
            correct=self.score,
            degrees=[item.degree for item in self._items],
            notes=self.expected_notes,
        )
