"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

from .file_helpers import (
    filter_image_paths,
    get_all_image_files,
    resolve_under_root,
)
from .logging_helpers import get_logger, setup_logging
from .message_formatter import MessageFormatter


__all__ = [
    "MessageFormatter",
    "filter_image_paths",
    "get_all_image_files",
    "get_logger",
    "resolve_under_root",
    "setup_logging",
]
