"""文件查找工具模块。

提供图片文件的递归查找和路径过滤功能。
"""

import os
from collections.abc import Iterable
from pathlib import Path

from ..models.constants import is_image_name
from .logging_helpers import get_logger


logger = get_logger()


def resolve_under_root(path: str | Path, project_root: str | Path) -> Path:
    """绝对路径原样返回，相对路径按项目根目录解析"""
    path = Path(path)
    return path if path.is_absolute() else Path(project_root) / path


def get_all_image_files(dir_path: str | Path, project_root: str | Path) -> list[str]:
    """递归查找目录下的所有图片文件（jpg/png/gif/webp）。

    使用显式栈做深度优先遍历，同一目录内按名称排序，结果顺序稳定。
    无法读取状态的条目（如失效的符号链接）直接跳过，通过符号链接
    形成的目录环只访问一次。

    Args:
        dir_path: 目录路径（绝对路径，或相对 project_root）
        project_root: 项目根目录

    Returns:
        list[str]: 相对 project_root 的图片路径列表，目录不存在时为空
    """
    root = resolve_under_root(dir_path, project_root)
    if not root.is_dir():
        logger.debug(f"目录不存在，跳过: {root}")
        return []

    file_list: list[str] = []
    visited: set[tuple[int, int]] = set()
    stack: list[Path] = [root]

    while stack:
        current = stack.pop()
        try:
            stat = current.stat()
        except OSError:
            continue

        if current.is_dir():
            key = (stat.st_dev, stat.st_ino)
            if key in visited:
                continue
            visited.add(key)
            try:
                children = sorted(current.iterdir(), key=lambda p: p.name)
            except OSError as e:
                logger.warning(f"读取目录失败 {current}: {e}")
                continue
            # 逆序入栈，保证出栈顺序与名称顺序一致
            stack.extend(reversed(children))
        elif current.is_file() and is_image_name(current.name):
            file_list.append(os.path.relpath(current, project_root))

    return file_list


def filter_image_paths(paths: Iterable[str]) -> list[str]:
    """按扩展名过滤出图片路径，保持原有顺序"""
    return [path for path in paths if path and is_image_name(path)]
