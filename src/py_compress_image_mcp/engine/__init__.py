"""批量压缩引擎模块。

包含按顺序压缩、Key 轮换和结果汇总的核心逻辑。
"""

from .aggregator import ResultAggregator
from .batch import BatchProcessor, compress_image_list


__all__ = [
    "BatchProcessor",
    "ResultAggregator",
    "compress_image_list",
]
