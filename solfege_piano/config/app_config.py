"""应用配置管理系统 - 集中管理所有可调参数"""

from typing import Dict, Any, Optional
from pathlib import Path
import copy
import json
import os

from ..data.music_theory import DEFAULT_SAMPLE_SOURCE
from ..utils.exceptions import ConfigError, SolfegePianoError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class AppConfig:
    """应用配置管理器"""

    # 默认配置
    DEFAULT_CONFIG = {
        # 音高相关
        "pitch": {
            "reference_frequency": 440.0,
        },
        # 练习相关
        "exercise": {
            "default_key": "C",
            "default_length": 5,
            "min_length": 2,
            "max_length": 10,
        },
        # 键盘布局
        "keyboard": {
            "first_octave": 3,
            "last_octave": 4,
        },
        # 音频相关
        "audio": {
            "sample_source": DEFAULT_SAMPLE_SOURCE,
            "sample_reference_note": "C4",
            "start_gain": 2.5,
            "end_gain": 0.001,
            "decay_seconds": 3.0,
        },
        # 日志相关
        "logging": {
            "default_level": "INFO",
            "log_file_path": "logs/tui.log",
        },
    }

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = Path(config_file) if config_file else Path("config.json")
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self._load_config()
        self._load_env_overrides()

    def _load_config(self) -> None:
        """从配置文件加载配置"""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    user_config = json.load(f)
                self._merge_config(self.config, user_config)
                logger.info(f"Loaded configuration from {self.config_file}")
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load config file {self.config_file}: {e}")
                logger.info("Using default configuration")

    def _load_env_overrides(self) -> None:
        """从环境变量加载覆盖配置"""
        env_mappings = {
            "SOLFEGE_PIANO_DEFAULT_KEY": ("exercise", "default_key", str),
            "SOLFEGE_PIANO_DEFAULT_LENGTH": ("exercise", "default_length", int),
            "SOLFEGE_PIANO_REFERENCE_FREQUENCY": ("pitch", "reference_frequency", float),
            "SOLFEGE_PIANO_LOG_LEVEL": ("logging", "default_level", str),
        }

        for env_key, (section, key, value_type) in env_mappings.items():
            env_value = os.getenv(env_key)
            if env_value is not None:
                try:
                    converted_value = value_type(env_value)
                    self.config.setdefault(section, {})[key] = converted_value
                    logger.debug(
                        f"Override from env {env_key}: {section}.{key} = {converted_value}"
                    )
                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid environment variable {env_key}={env_value}: {e}")

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """递归合并配置"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """获取配置值

        Args:
            section: 配置段名
            key: 配置键名
            default: 默认值

        Returns:
            配置值
        """
        return self.config.get(section, {}).get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """获取整个配置段"""
        return self.config.get(section, {})

    def set(self, section: str, key: str, value: Any) -> None:
        """设置配置值"""
        self.config.setdefault(section, {})[key] = value
        logger.debug(f"Set config {section}.{key} = {value}")

    def save_config(self, file_path: Optional[Path] = None) -> None:
        """保存配置到文件

        Args:
            file_path: 保存路径，为None时使用默认路径
        """
        save_path = Path(file_path) if file_path else self.config_file
        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(save_path, "w", encoding="utf-8") as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved configuration to {save_path}")
        except OSError as e:
            raise ConfigError(f"Failed to save config to {save_path}: {e}") from e

    def reset_to_defaults(self) -> None:
        """重置为默认配置"""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def validate(self) -> None:
        """校验配置取值，出错时抛出 ConfigError"""
        from ..core.pitch import normalize_pitch_class, parse_note

        try:
            min_length = self.min_length
            max_length = self.max_length
            default_length = self.default_length
            first_octave = self.first_octave
            last_octave = self.last_octave
            reference_frequency = self.reference_frequency
            envelope = self.get_section("audio")
            start_gain = float(envelope.get("start_gain", 0))
            end_gain = float(envelope.get("end_gain", 0))
            decay_seconds = float(envelope.get("decay_seconds", 0))
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"invalid value in {self.config_file}: {e}") from e

        if min_length < 1 or min_length > max_length:
            raise ConfigError(
                f"exercise length bounds [{min_length}, {max_length}] are invalid"
            )
        if not min_length <= default_length <= max_length:
            raise ConfigError(
                f"exercise.default_length {default_length} outside "
                f"[{min_length}, {max_length}]"
            )
        if first_octave > last_octave:
            raise ConfigError(
                f"keyboard octaves {first_octave}..{last_octave} are invalid"
            )
        if reference_frequency <= 0:
            raise ConfigError("pitch.reference_frequency must be positive")
        if not 0 < end_gain < start_gain:
            raise ConfigError("audio.end_gain must be positive and below start_gain")
        if decay_seconds <= 0:
            raise ConfigError("audio.decay_seconds must be positive")

        try:
            normalize_pitch_class(self.default_key)
            parse_note(self.sample_reference_note)
        except SolfegePianoError as e:
            raise ConfigError(str(e)) from e

    # 便捷访问方法
    @property
    def reference_frequency(self) -> float:
        """A4 频率"""
        return float(self.get("pitch", "reference_frequency", 440.0))

    @property
    def default_key(self) -> str:
        """默认主音"""
        return self.get("exercise", "default_key", "C")

    @property
    def default_length(self) -> int:
        """默认练习长度"""
        return int(self.get("exercise", "default_length", 5))

    @property
    def min_length(self) -> int:
        return int(self.get("exercise", "min_length", 2))

    @property
    def max_length(self) -> int:
        return int(self.get("exercise", "max_length", 10))

    @property
    def first_octave(self) -> int:
        return int(self.get("keyboard", "first_octave", 3))

    @property
    def last_octave(self) -> int:
        return int(self.get("keyboard", "last_octave", 4))

    @property
    def sample_source(self) -> str:
        """参考采样来源"""
        return self.get("audio", "sample_source", DEFAULT_SAMPLE_SOURCE)

    @property
    def sample_reference_note(self) -> str:
        return self.get("audio", "sample_reference_note", "C4")

    @property
    def log_level(self) -> str:
        """日志级别"""
        return self.get("logging", "default_level", "INFO")

    @property
    def log_file_path(self) -> str:
        return self.get("logging", "log_file_path", "logs/tui.log")


# 全局配置实例
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """获取全局应用配置实例"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


def reload_config(config_file: Optional[Path] = None) -> AppConfig:
    """重新加载配置

    Args:
        config_file: 配置文件路径

    Returns:
        新的配置实例
    """
    global _app_config
    _app_config = AppConfig(config_file)
    return _app_config
