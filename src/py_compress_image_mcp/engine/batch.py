"""批量压缩驱动模块。

按输入顺序逐个压缩文件，在 API Key 额度将满时切换到下一个 Key。
同一时刻只有一个文件在处理中，Key 的额度估算依赖这一点。
"""

import os
import shutil
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

from ..config import get_config
from ..core.ledger import CredentialLedger
from ..core.remote import CompressionSession, SessionFactory
from ..exceptions import (
    CompressionError,
    ConfigurationError,
    ErrorHandler,
    QuotaExhaustedError,
    ValidationError,
    handle_remote_errors,
)
from ..models.run_result import FileTask, ProgressEvent, RunResult
from ..utils.file_helpers import get_all_image_files, resolve_under_root
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .aggregator import ResultAggregator


logger = get_logger()

ProgressCallback = Callable[[ProgressEvent], None]


@handle_remote_errors
def compress_file_in_place(
    session: CompressionSession, file_path: Path
) -> tuple[int, int]:
    """读取文件、远程压缩并覆盖原文件

    压缩结果先写入同目录的临时文件再替换原文件，写入失败时原文件不变。

    Returns:
        tuple[int, int]: (原始大小, 压缩后大小)
    """
    data = file_path.read_bytes()
    compressed = session.compress(data)
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent
    )
    try:
        with os.fdopen(fd, "wb") as temp_file:
            temp_file.write(compressed)
        shutil.copymode(file_path, temp_name)
        os.replace(temp_name, file_path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return len(data), len(compressed)


class BatchProcessor:
    """批量压缩处理器

    状态只有 (文件位置, Key 位置) 两个下标，用循环推进：
    额度将满时只推进 Key 位置并重试同一个文件。
    """

    def __init__(
        self,
        credentials: Sequence[str],
        session_factory: SessionFactory | None = None,
        quota_limit: int | None = None,
    ):
        """初始化批量处理器

        Args:
            credentials: 按优先级排列的 API Key
            session_factory: 根据 Key 创建远程会话，默认使用 Tinify
            quota_limit: 每个 Key 的免费额度上限

        Raises:
            ConfigurationError: Key 列表为空
        """
        if not credentials:
            raise ConfigurationError(MessageFormatter.missing_api_keys())
        self.credentials = list(credentials)
        self.session_factory = session_factory
        if quota_limit is None:
            quota_limit = get_config().compression.FREE_QUOTA_LIMIT
        self.quota_limit = quota_limit

    def process_directory(
        self,
        project_root: str | Path,
        directory: str | Path,
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        """压缩目录下的所有图片"""
        paths = get_all_image_files(directory, project_root)
        logger.info(f"在 {directory} 中找到 {len(paths)} 张图片")
        return self.process_files(project_root, paths, on_progress)

    def process_files(
        self,
        project_root: str | Path,
        relative_paths: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        """按顺序压缩文件列表

        Args:
            project_root: 项目根目录
            relative_paths: 相对项目根目录的图片路径
            on_progress: 每个文件处理完成后同步调用的回调

        Returns:
            RunResult: 汇总结果；Key 验证失败或额度用尽时为部分结果
        """
        total = len(relative_paths)
        aggregator = ResultAggregator(total)
        if total == 0:
            return aggregator.finish()

        ledger = CredentialLedger(self.credentials, self.session_factory)
        try:
            self._run(ledger, project_root, relative_paths, aggregator, on_progress)
        finally:
            ledger.close()

        result = aggregator.finish()
        logger.info(
            f"压缩结束: 成功 {result.compressed}，失败 {result.get_failure_count()}，"
            f"共 {total}"
        )
        return result

    def _run(
        self,
        ledger: CredentialLedger,
        project_root: str | Path,
        relative_paths: Sequence[str],
        aggregator: ResultAggregator,
        on_progress: ProgressCallback | None,
    ) -> None:
        """状态机主循环，遇到验证失败或额度用尽时提前结束"""
        total = len(relative_paths)
        file_index = 0

        while file_index < total:
            task = FileTask(index=file_index, path=relative_paths[file_index])

            try:
                ledger.ensure_validated()
            except ValidationError as e:
                aggregator.add_error(
                    MessageFormatter.key_validation_failed(ledger.current_index, e)
                )
                break

            # 假设本 Key 激活后每个已尝试的文件都让远程计数加一
            estimated = ledger.snapshot + task.index + 1
            if estimated >= self.quota_limit:
                logger.info(
                    f"keyIndex={ledger.current_index} 预计用量 {estimated} "
                    f"达到上限 {self.quota_limit}"
                )
                if not ledger.advance():
                    exhausted = QuotaExhaustedError(aggregator.compressed)
                    aggregator.add_error(exhausted.message)
                    break
                continue

            success = self._process_task(
                ledger.session, project_root, task, aggregator
            )
            self._notify(on_progress, task, total, success)
            file_index += 1

    def _process_task(
        self,
        session: CompressionSession,
        project_root: str | Path,
        task: FileTask,
        aggregator: ResultAggregator,
    ) -> bool:
        """压缩单个文件，失败只记录不中断"""
        file_path = resolve_under_root(task.path, project_root)
        try:
            original_size, compressed_size = compress_file_in_place(session, file_path)
        except CompressionError as e:
            message = ErrorHandler.handle_file_error(e, task.path)
            aggregator.record_failure(task.path, message)
            return False

        aggregator.record_success(task.path, original_size, compressed_size)
        logger.debug(f"已压缩 {task.path}: {original_size} -> {compressed_size} 字节")
        return True

    @staticmethod
    def _notify(
        on_progress: ProgressCallback | None,
        task: FileTask,
        total: int,
        success: bool,
    ) -> None:
        if on_progress is None:
            return
        on_progress(
            ProgressEvent(
                current=task.index + 1, total=total, path=task.path, success=success
            )
        )


def compress_image_list(
    project_root: str | Path,
    relative_paths: Sequence[str],
    credentials: Sequence[str],
    on_progress: ProgressCallback | None = None,
    session_factory: SessionFactory | None = None,
) -> RunResult:
    """压缩图片列表，支持多个 API Key 轮换

    Raises:
        ConfigurationError: Key 列表为空
    """
    processor = BatchProcessor(credentials, session_factory=session_factory)
    return processor.process_files(project_root, relative_paths, on_progress)
