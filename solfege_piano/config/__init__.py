"""配置管理模块"""

from .app_config import AppConfig, get_app_config, reload_config

__all__ = ["AppConfig", "get_app_config", "reload_config"]
