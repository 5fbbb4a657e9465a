"""Git 工具模块。

读取 git 暂存区中新增或修改过的图片文件。
"""

import subprocess
from pathlib import Path

from ..exceptions import StagedFilesError
from .file_helpers import filter_image_paths
from .logging_helpers import get_logger


logger = get_logger()

STAGED_FILES_COMMAND = (
    "git",
    "diff",
    "--staged",
    "--diff-filter=ACMR",
    "--name-only",
    "-z",
)


def get_staged_image_files(project_root: str | Path) -> list[str]:
    """获取暂存区中的图片文件

    Args:
        project_root: 项目根目录（git 工作区）

    Returns:
        list[str]: 相对项目根目录的图片路径

    Raises:
        StagedFilesError: git 命令执行失败
    """
    try:
        completed = subprocess.run(
            STAGED_FILES_COMMAND,
            cwd=project_root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
    except subprocess.CalledProcessError as e:
        message = (e.stderr or "").strip() or str(e)
        raise StagedFilesError(message) from e
    except OSError as e:
        raise StagedFilesError(str(e)) from e

    output = completed.stdout.strip("\x00\n")
    paths = output.split("\x00") if output else []
    image_paths = filter_image_paths(paths)
    logger.debug(f"暂存区共 {len(paths)} 个文件，其中图片 {len(image_paths)} 个")
    return image_paths
