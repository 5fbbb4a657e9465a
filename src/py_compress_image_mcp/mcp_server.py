"""图片压缩 MCP 服务器。

提供 compress_image 工具：压缩指定目录或 git 暂存区中的图片。
"""

from typing import Any

from fastmcp import FastMCP

from .compressor import ImageCompressor
from .exceptions import ConfigurationError, StagedFilesError
from .models import ProgressEvent, RunResult
from .utils.logging_helpers import get_logger, setup_logging
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPCompressionResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "message": message,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def configuration_error(message: str) -> dict[str, Any]:
        """构建配置错误结果（如缺少 API Key）"""
        return MCPResponseBuilder.error(message=message, error_type="configuration")

    @staticmethod
    def file_error(message: str, file_path: str | None = None) -> dict[str, Any]:
        """构建文件相关错误结果。

        Args:
            message: 错误消息
            file_path: 相关文件路径

        Returns:
            dict: 文件错误响应
        """
        details = {"file_path": file_path} if file_path else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="file",
            details=details,
        )

    @staticmethod
    def git_error(message: str) -> dict[str, Any]:
        """构建 git 相关错误结果"""
        return MCPResponseBuilder.error(message=message, error_type="git")

    @staticmethod
    def run_result(result: RunResult, progress_lines: list[str]) -> dict[str, Any]:
        """构建压缩运行结果"""
        return {
            "success": not result.errors,
            "message": MessageFormatter.render_run(
                result.get_summary(), result.failed, result.errors, progress_lines
            ),
            "total": result.total,
            "compressed": result.compressed,
            "failed": list(result.failed),
            "errors": list(result.errors),
            "size_saved": result.get_size_saved(),
        }


logger = get_logger()

# 创建MCP应用
mcp = FastMCP("compress-image")


def handle_compress_image(
    folder_path: str | None = None,
    api_key_list: list[str] | None = None,
    compressor: ImageCompressor | None = None,
) -> MCPCompressionResponse:
    """compress_image 工具的实际处理逻辑"""
    compressor = compressor or ImageCompressor(api_keys=api_key_list)
    if not compressor.api_keys:
        return MCPResponseBuilder.configuration_error(
            MessageFormatter.missing_api_keys()
        )

    if folder_path:
        paths = compressor.find_folder_images(folder_path)
        if not paths:
            return MCPResponseBuilder.file_error(
                MessageFormatter.no_images_in_folder(folder_path), folder_path
            )
    else:
        try:
            paths = compressor.find_staged_images()
        except StagedFilesError as e:
            logger.error(MessageFormatter.operation_failed("读取暂存区", "git", e))
            return MCPResponseBuilder.git_error(
                MessageFormatter.staged_files_failed(e.message)
            )
        if not paths:
            return MCPResponseBuilder.file_error(MessageFormatter.no_staged_images())

    progress_lines: list[str] = []

    def on_progress(event: ProgressEvent) -> None:
        progress_lines.append(event.format_line())

    try:
        result = compressor.compress_paths(paths, on_progress=on_progress)
    except ConfigurationError as e:
        return MCPResponseBuilder.configuration_error(e.message)

    return MCPResponseBuilder.run_result(result, progress_lines)


@mcp.tool()
def compress_image(
    folder_path: str | None = None,
    api_key_list: list[str] | None = None,
) -> MCPCompressionResponse:
    """使用 Tinify 压缩项目中的图片（jpg/png/gif/webp）。

    指定 folder_path 时压缩该目录下的所有图片，不指定则压缩 git 暂存区中的图片。
    多个 API Key 会在免费额度将满时自动轮换。

    Args:
        folder_path: 要压缩的目录（相对项目根目录或绝对路径），可选
        api_key_list: Tinify API Key 列表，可选；
            不传时读取环境变量 COMPRESS_IMAGE_API_KEYS（逗号分隔）

    Returns:
        dict: 压缩结果，message 字段为可读文本，failed 列出失败的文件
    """
    return handle_compress_image(folder_path=folder_path, api_key_list=api_key_list)


# ============================================================================
# 应用入口
# ============================================================================


def main(log_level: str | None = None) -> None:
    """启动 MCP 服务器"""
    setup_logging(log_level)
    logger.info("启动图片压缩 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
