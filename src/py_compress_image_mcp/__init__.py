"""Tinify 批量图片压缩库。

递归查找图片，按顺序调用 Tinify 压缩，并在多个 API Key 之间轮换免费额度。
"""

__version__ = "1.0.0"
__author__ = "crper"
__description__ = "基于 Tinify 的批量图片压缩 MCP 服务"

# 核心功能导出
from .compressor import ImageCompressor
from .engine.batch import BatchProcessor, compress_image_list
from .models.run_result import ProgressEvent, RunResult
from .utils.file_helpers import get_all_image_files


__all__ = [
    "BatchProcessor",
    "ImageCompressor",
    "ProgressEvent",
    "RunResult",
    "compress_image_list",
    "get_all_image_files",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
