"""数据模型包。

包含运行结果、进度事件和常量定义。
"""

from .constants import IMAGE_EXTENSIONS, MAX_FREE_COUNT
from .run_result import FileTask, ProgressEvent, RunResult


__all__ = [
    "IMAGE_EXTENSIONS",
    "MAX_FREE_COUNT",
    "FileTask",
    "ProgressEvent",
    "RunResult",
]
