"""采样播放参数与音频引擎

实际的音频渲染不在本模块范围内：引擎只计算播放参数并交给外部 sink。
参考采样未就绪时，播放请求被静默忽略（降级模式）。
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ..data.music_theory import (
    DEFAULT_SAMPLE_NOTE,
    DEFAULT_SAMPLE_SOURCE,
    REFERENCE_FREQUENCY,
)
from ..utils.exceptions import PlaybackError, ValidationError
from ..utils.logger import get_logger
from .pitch import note_frequency

logger = get_logger(__name__)

START_GAIN = 2.5
END_GAIN = 0.001
DECAY_SECONDS = 3.0


@dataclass(frozen=True)
class PlaybackParams:
    """一次采样回放的参数"""

    frequency: float
    playback_rate: float
    start_gain: float = START_GAIN
    end_gain: float = END_GAIN
    decay_seconds: float = DECAY_SECONDS

    def gain_at(self, seconds: float) -> float:
        """指数衰减包络在 t 秒时的增益"""
        if seconds <= 0:
            return self.start_gain
        if seconds >= self.decay_seconds:
            return self.end_gain
        ratio = self.end_gain / self.start_gain
        return self.start_gain * ratio ** (seconds / self.decay_seconds)


@dataclass(frozen=True)
class ReferenceSample:
    """参考采样（已解码的音频来源及其音高）"""

    source: str = DEFAULT_SAMPLE_SOURCE
    reference_note: str = DEFAULT_SAMPLE_NOTE

    def reference_frequency(self, reference: float = REFERENCE_FREQUENCY) -> float:
        return note_frequency(self.reference_note, reference)


def compute_playback(
    target_frequency: float,
    reference_frequency: float,
    start_gain: float = START_GAIN,
    end_gain: float = END_GAIN,
    decay_seconds: float = DECAY_SECONDS,
) -> PlaybackParams:
    """根据目标频率和采样原始频率计算回放参数"""
    if target_frequency <= 0 or reference_frequency <= 0:
        raise ValidationError(
            f"frequencies must be positive: target={target_frequency}, "
            f"reference={reference_frequency}"
        )
    if not (0 < end_gain < start_gain) or decay_seconds <= 0:
        # 指数包络要求增益为正且单调衰减
        raise ValidationError(
            f"invalid envelope: {start_gain} -> {end_gain} over {decay_seconds}s"
        )

    return PlaybackParams(
        frequency=target_frequency,
        playback_rate=target_frequency / reference_frequency,
        start_gain=start_gain,
        end_gain=end_gain,
        decay_seconds=decay_seconds,
    )


PlaybackSink = Callable[[PlaybackParams], None]


class AudioEngine:
    """采样播放引擎"""

    def __init__(
        self,
        sink: Optional[PlaybackSink] = None,
        reference: float = REFERENCE_FREQUENCY,
        start_gain: float = START_GAIN,
        end_gain: float = END_GAIN,
        decay_seconds: float = DECAY_SECONDS,
    ):
        self.sink = sink
        self.reference = reference
        self.start_gain = start_gain
        self.end_gain = end_gain
        self.decay_seconds = decay_seconds
        self.sample: Optional[ReferenceSample] = None
        self.activated = False

    @property
    def ready(self) -> bool:
        return self.sample is not None

    def attach_sample(self, sample: ReferenceSample) -> None:
        """采样加载完成后调用"""
        # 提前校验参考音名，避免每次播放时才报错
        sample.reference_frequency(self.reference)
        self.sample = sample
        logger.info(
            "Reference sample ready: %s (%s)", sample.source, sample.reference_note
        )

    def activate(self) -> None:
        """首次用户交互时激活音频输出"""
        if not self.activated:
            self.activated = True
            logger.debug("Audio output activated")

    def play(self, frequency: float) -> Optional[PlaybackParams]:
        """播放指定频率；采样未就绪时返回 None"""
        if self.sample is None:
            logger.debug("Sample not loaded, ignoring playback of %.2fHz", frequency)
            return None

        self.activate()
        params = compute_playback(
            frequency,
            self.sample.reference_frequency(self.reference),
            self.start_gain,
            self.end_gain,
            self.decay_seconds,
        )

        if self.sink is not None:
            try:
                self.sink(params)
            except Exception as e:
                raise PlaybackError(f"Playback of {frequency:.2f}Hz failed: {e}") from e

        return params
