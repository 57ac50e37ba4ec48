"""日志系统"""

import logging
import sys
from pathlib import Path
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """获取配置好的日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别，为None时继承根日志器的级别

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))

    # 不添加处理器，让日志器继承根日志器的配置
    return logger


def setup_logging(
    level: str = "INFO", tui_mode: bool = False, log_file: str = "logs/tui.log"
) -> None:
    """设置全局日志配置

    Args:
        level: 日志级别
        tui_mode: 是否为TUI模式，如果是则不输出到控制台
        log_file: TUI模式下错误日志的文件路径
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if tui_mode:
        # TUI模式：控制台输出会破坏界面，只把错误写入文件
        root_logger.addHandler(logging.NullHandler())
        try:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setLevel(logging.ERROR)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"⚠️ 无法创建日志文件 {log_file}: {e}", file=sys.stderr)
    else:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)
