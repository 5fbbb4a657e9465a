"""远程压缩服务模块。

每个 API Key 对应一个独立的会话对象，Key 的切换是显式的，
不依赖 tinify 模块级别的全局 Key。
"""

from collections.abc import Callable
from typing import Protocol

import tinify

from ..exceptions import ValidationError, handle_remote_errors
from ..utils.logging_helpers import get_logger


logger = get_logger()


class CompressionSession(Protocol):
    """绑定单个 API Key 的远程压缩会话"""

    def validate(self) -> None:
        """验证 Key，失败时抛出 ValidationError"""
        ...

    def usage_snapshot(self) -> int:
        """该 Key 累计已使用的压缩次数"""
        ...

    def compress(self, data: bytes) -> bytes:
        """压缩图片字节，失败时抛出 ProcessingError"""
        ...

    def close(self) -> None:
        """释放底层连接"""
        ...


SessionFactory = Callable[[str], CompressionSession]


class TinifySession:
    """基于 tinify.Client 的压缩会话"""

    def __init__(self, api_key: str, app_identifier: str | None = None):
        self._client = tinify.Client(api_key, app_identifier)
        self._compression_count: int | None = None

    def validate(self) -> None:
        """发送空的 shrink 请求验证 Key。

        服务端返回 "缺少输入" 的 ClientError 说明 Key 有效；
        429 说明额度已满但 Key 本身有效。
        """
        tinify.compression_count = None
        try:
            self._client.request("post", "/shrink")
        except tinify.AccountError as e:
            if e.status != 429:
                raise ValidationError(str(e)) from e
        except tinify.ClientError:
            pass
        except tinify.Error as e:
            raise ValidationError(str(e)) from e
        self._compression_count = tinify.compression_count

    def usage_snapshot(self) -> int:
        """最近一次验证时服务端返回的 compression-count"""
        return self._compression_count or 0

    @handle_remote_errors
    def compress(self, data: bytes) -> bytes:
        response = self._client.request("post", "/shrink", data)
        location = response.headers.get("location")
        if not location:
            raise tinify.ServerError(
                "响应缺少 Location 头", "ServerError", response.status_code
            )
        return self._client.request("get", location).content

    def close(self) -> None:
        self._client.close()
