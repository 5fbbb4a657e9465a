"""消息格式化工具模块。

提供统一的错误消息、结果文本格式化功能。
"""

from collections.abc import Sequence
from pathlib import Path

from ..models.constants import API_KEYS_ENV


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_error(path: str | Path, error: Exception | str) -> str:
        """单个文件压缩失败的诊断信息"""
        return f"{path}: {error}"

    @staticmethod
    def key_validation_failed(key_index: int, error: Exception | str) -> str:
        """API Key 验证失败消息"""
        return f"API Key 验证失败 (keyIndex={key_index}): {error}"

    @staticmethod
    def quota_exhausted(compressed: int) -> str:
        """所有 Key 额度用尽消息"""
        return f"已达免费额度且无更多 Key，已压缩 {compressed} 张"

    @staticmethod
    def missing_api_keys() -> str:
        """未配置 API Key 消息"""
        return (
            f"未配置 Tinify API Key。请在环境变量 {API_KEYS_ENV} 中设置"
            "（逗号分隔），或调用时传入 api_key_list 参数。"
        )

    @staticmethod
    def no_images_in_folder(folder: str | Path) -> str:
        """目录中没有图片消息"""
        return f"路径不存在或该目录下没有 jpg/png/gif/webp 图片: {folder}"

    @staticmethod
    def no_staged_images() -> str:
        """暂存区没有图片消息"""
        return (
            "暂存区中没有 jpg/png/gif/webp 图片。"
            "请先 git add 图片文件，或传入 folder_path 指定目录。"
        )

    @staticmethod
    def staged_files_failed(error: Exception | str) -> str:
        """读取 git 暂存区失败消息"""
        return f"获取 git 暂存区文件失败: {error}。可传入 folder_path 指定目录压缩。"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def format_error(operation: str, path: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{path}]: {error}"

    @staticmethod
    def render_run(
        summary: str,
        failed: Sequence[str],
        errors: Sequence[str],
        progress_lines: Sequence[str] = (),
    ) -> str:
        """把运行结果渲染为面向用户的文本

        失败文件逐个列出，方便调用方只重试这些文件。
        """
        text = summary
        if failed:
            text += f"\n失败 {len(failed)} 张: {', '.join(failed)}"
        if errors:
            text += "\n" + "\n".join(errors)
        if progress_lines:
            text += "\n\n" + "\n".join(progress_lines)
        return text
