"""压缩相关常量定义。

Tinify 免费额度、支持的图片扩展名等固定值集中在这里。
"""

from typing import Final


# Tinify 免费档每个 Key 每月可压缩的次数
MAX_FREE_COUNT: Final[int] = 500

# 支持的图片扩展名（小写，匹配时忽略大小写）
IMAGE_EXTENSIONS: Final[tuple[str, ...]] = (".jpg", ".png", ".gif", ".webp")

# 环境变量名
API_KEYS_ENV: Final[str] = "COMPRESS_IMAGE_API_KEYS"
PROJECT_ROOT_ENV: Final[str] = "COMPRESS_IMAGE_PROJECT_ROOT"
LOG_LEVEL_ENV: Final[str] = "COMPRESS_IMAGE_LOG_LEVEL"


def is_image_name(name: str) -> bool:
    """判断文件名是否为支持的图片类型"""
    return name.lower().endswith(IMAGE_EXTENSIONS)


def mask_credential(credential: str) -> str:
    """掩码显示 API Key，只保留末尾 4 位"""
    if len(credential) <= 4:
        return "*" * len(credential)
    return f"***{credential[-4:]}"
