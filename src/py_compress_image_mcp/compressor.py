"""图片压缩器接口。

在批量压缩引擎之上解析 API Key 和项目根目录，
提供按目录、按 git 暂存区、按路径列表三种压缩入口。
"""

from collections.abc import Sequence
from pathlib import Path

from .config import get_config
from .core.remote import SessionFactory
from .engine.batch import BatchProcessor, ProgressCallback
from .exceptions import ConfigurationError
from .models import RunResult
from .utils.file_helpers import get_all_image_files
from .utils.git_helpers import get_staged_image_files
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()


class ImageCompressor:
    """Tinify 图片压缩器。

    Key 优先使用调用方传入的列表，否则读取环境变量配置。
    """

    def __init__(
        self,
        api_keys: Sequence[str] | None = None,
        project_root: str | Path | None = None,
        session_factory: SessionFactory | None = None,
    ):
        """初始化压缩器。

        Args:
            api_keys: Tinify API Key 列表（可选）
            project_root: 项目根目录（可选，默认取配置或当前目录）
            session_factory: 远程会话工厂（可选，主要用于测试）
        """
        app_config = get_config()
        keys = [key.strip() for key in api_keys or [] if key and key.strip()]
        self.api_keys = keys or list(app_config.credentials.API_KEYS)
        self.project_root = (
            Path(project_root) if project_root else app_config.get_project_root()
        )
        self.session_factory = session_factory

    def _processor(self) -> BatchProcessor:
        if not self.api_keys:
            raise ConfigurationError(MessageFormatter.missing_api_keys())
        return BatchProcessor(self.api_keys, session_factory=self.session_factory)

    def find_folder_images(self, folder_path: str | Path) -> list[str]:
        """查找目录下的图片，返回相对项目根目录的路径"""
        return get_all_image_files(folder_path, self.project_root)

    def find_staged_images(self) -> list[str]:
        """查找 git 暂存区中的图片

        Raises:
            StagedFilesError: git 命令执行失败
        """
        return get_staged_image_files(self.project_root)

    def compress_paths(
        self,
        paths: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        """压缩指定的图片列表

        Raises:
            ConfigurationError: 没有可用的 API Key
        """
        processor = self._processor()
        logger.info(f"开始压缩 {len(paths)} 张图片，共 {len(self.api_keys)} 个 Key")
        return processor.process_files(self.project_root, paths, on_progress)

    def compress_folder(
        self,
        folder_path: str | Path,
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        """压缩目录下的所有图片"""
        return self._processor().process_directory(
            self.project_root, folder_path, on_progress
        )

    def compress_staged(self, on_progress: ProgressCallback | None = None) -> RunResult:
        """压缩 git 暂存区中的图片"""
        return self.compress_paths(self.find_staged_images(), on_progress)
