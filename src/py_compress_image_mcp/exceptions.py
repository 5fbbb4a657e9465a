"""图片压缩异常处理模块。

定义统一的异常类和远程服务错误的转换装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

import tinify

from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class CompressionError(Exception):
    """压缩相关错误基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(CompressionError):
    """配置错误，如未提供任何 API Key"""

    pass


class ValidationError(CompressionError):
    """API Key 被远程服务拒绝"""

    pass


class QuotaExhaustedError(CompressionError):
    """所有 API Key 的免费额度都已用尽"""

    def __init__(self, compressed: int):
        super().__init__(MessageFormatter.quota_exhausted(compressed))
        self.compressed = compressed


class ProcessingError(CompressionError):
    """单个文件处理失败（文件读写或远程服务错误）"""

    pass


class StagedFilesError(CompressionError):
    """读取 git 暂存区失败"""

    pass


def handle_remote_errors(func: Callable[..., T]) -> Callable[..., T]:
    """统一的远程压缩异常转换装饰器

    把 Tinify 错误和文件读写错误转换为 ProcessingError，日志由调用方记录。
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except CompressionError:
            raise
        except tinify.AccountError as e:
            raise ProcessingError(f"账户错误: {e}") from e
        except tinify.ClientError as e:
            raise ProcessingError(f"请求被拒绝: {e}") from e
        except tinify.Error as e:
            raise ProcessingError(f"远程服务错误: {e}") from e
        except OSError as e:
            raise ProcessingError(f"文件操作失败: {e}") from e

    return wrapper


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误日志记录和诊断信息。
    """

    @staticmethod
    def _log_error(
        operation: str, path: str | Path, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def handle_file_error(
        error: CompressionError, path: str, operation: str = "图片压缩"
    ) -> str:
        """以 WARNING 级别记录单个文件的失败并返回诊断信息"""
        ErrorHandler._log_error(operation, path, error, "warning")
        return MessageFormatter.file_error(path, error.message)
