"""自定义异常类"""


class SolfegePianoError(Exception):
    """项目基础异常类"""

    pass


class ValidationError(SolfegePianoError):
    """输入校验错误"""

    pass


class InvalidPitchClassError(ValidationError):
    """未知音名"""

    def __init__(self, pitch_class):
        self.pitch_class = pitch_class
        super().__init__(f"Unknown pitch class: {pitch_class!r}")


class InvalidDegreeError(ValidationError):
    """未知唱名"""

    def __init__(self, degree):
        self.degree = degree
        super().__init__(f"Unknown solfege degree: {degree!r}")


class ExerciseLengthError(ValidationError):
    """练习长度超出范围"""

    def __init__(self, length, min_length: int, max_length: int):
        self.length = length
        self.min_length = min_length
        self.max_length = max_length
        super().__init__(
            f"Exercise length {length} outside [{min_length}, {max_length}]"
        )


class PlaybackError(SolfegePianoError):
    """播放错误"""

    pass


class ConfigError(SolfegePianoError):
    """配置错误"""

    pass
