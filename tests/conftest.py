"""测试公共夹具"""

import pytest

from solfege_piano.config import AppConfig


@pytest.fixture
def config(tmp_path, monkeypatch):
    """不读取工作目录和环境变量的默认配置"""
    for name in (
        "SOLFEGE_PIANO_DEFAULT_KEY",
        "SOLFEGE_PIANO_DEFAULT_LENGTH",
        "SOLFEGE_PIANO_REFERENCE_FREQUENCY",
        "SOLFEGE_PIANO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return AppConfig(tmp_path / "config.json")
