"""Entry point for python -m py_compress_image_mcp.

默认通过 stdio 启动 MCP 服务器。
"""

import argparse


def main(argv: list[str] | None = None) -> None:
    """主入口函数 - 解析参数并启动 MCP 服务器"""
    from . import __version__

    parser = argparse.ArgumentParser(
        prog="py-compress-image-mcp",
        description="基于 Tinify 的批量图片压缩 MCP 服务器",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="日志级别，默认读取 COMPRESS_IMAGE_LOG_LEVEL 或 INFO",
    )
    args = parser.parse_args(argv)

    from .mcp_server import main as server_main

    server_main(log_level=args.log_level)


if __name__ == "__main__":
    main()
