"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .models.constants import (
    API_KEYS_ENV,
    LOG_LEVEL_ENV,
    MAX_FREE_COUNT,
    PROJECT_ROOT_ENV,
)


@dataclass(frozen=True)
class CompressionDefaults:
    """压缩相关的默认配置"""

    # 免费额度上限，达到后切换到下一个 Key
    FREE_QUOTA_LIMIT: int = MAX_FREE_COUNT


@dataclass(frozen=True)
class CredentialDefaults:
    """API Key 相关的默认配置"""

    API_KEYS: tuple[str, ...] = field(default_factory=tuple)
    PROJECT_ROOT: str | None = None


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_api_keys(raw: str | None) -> tuple[str, ...]:
    """解析逗号分隔的 Key 列表，去除空白和空项"""
    if not raw:
        return ()
    return tuple(key.strip() for key in raw.split(",") if key.strip())


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.compression = CompressionDefaults()
        self.credentials = CredentialDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if api_keys := os.getenv(API_KEYS_ENV):
            object.__setattr__(self.credentials, "API_KEYS", parse_api_keys(api_keys))

        if project_root := os.getenv(PROJECT_ROOT_ENV):
            object.__setattr__(self.credentials, "PROJECT_ROOT", project_root)

        if log_level := os.getenv(LOG_LEVEL_ENV):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

    def get_project_root(self) -> Path:
        """项目根目录，未配置时使用当前工作目录"""
        if self.credentials.PROJECT_ROOT:
            return Path(self.credentials.PROJECT_ROOT)
        return Path.cwd()


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
