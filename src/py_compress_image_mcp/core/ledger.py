"""API Key 轮换账本。

按顺序持有一组 API Key，记录当前位置、当前会话和激活时的用量快照。
位置只增不减，越过列表末尾后本次运行不再可用。
"""

from collections.abc import Sequence

from ..exceptions import ConfigurationError, ValidationError
from ..models.constants import mask_credential
from ..utils.logging_helpers import get_logger
from .remote import CompressionSession, SessionFactory, TinifySession


logger = get_logger()


class CredentialLedger:
    """API Key 账本

    每个 Key 在首次使用时打开会话、验证一次并读取一次用量快照，
    之后直到切换前都复用这份快照。
    """

    def __init__(
        self,
        credentials: Sequence[str],
        session_factory: SessionFactory | None = None,
    ):
        if not credentials:
            raise ConfigurationError("API Key 列表为空")
        self._credentials = tuple(credentials)
        self._session_factory = session_factory or TinifySession
        self._index = 0
        self._session: CompressionSession | None = None
        self._snapshot: int | None = None

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_exhausted(self) -> bool:
        return self._index >= len(self._credentials)

    @property
    def current_credential(self) -> str:
        if self.is_exhausted:
            raise IndexError("API Key 已全部用尽")
        return self._credentials[self._index]

    @property
    def is_validated(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> CompressionSession:
        if self._session is None:
            raise RuntimeError("当前 API Key 尚未验证")
        return self._session

    @property
    def snapshot(self) -> int:
        """当前 Key 激活时的用量快照"""
        if self._snapshot is None:
            raise RuntimeError("当前 API Key 尚未验证")
        return self._snapshot

    def ensure_validated(self) -> None:
        """确保当前 Key 已验证，每次激活只验证一次

        Raises:
            ValidationError: Key 被远程服务拒绝
        """
        if self.is_validated:
            return

        credential = self.current_credential
        session = self._session_factory(credential)
        try:
            session.validate()
        except ValidationError as e:
            session.close()
            logger.error(
                f"API Key {mask_credential(credential)} 验证失败 "
                f"(keyIndex={self._index}): {e.message}"
            )
            raise
        self._session = session
        self._snapshot = session.usage_snapshot()
        logger.info(
            f"启用 API Key {mask_credential(credential)} "
            f"(keyIndex={self._index})，已用 {self._snapshot} 次"
        )

    def advance(self) -> bool:
        """切换到下一个 Key

        Returns:
            bool: 是否还有可用的 Key
        """
        self.close()
        self._index += 1
        if self.is_exhausted:
            logger.error("所有 API Key 的免费额度均已用尽")
            return False
        logger.info(f"切换到下一个 API Key (keyIndex={self._index})")
        return True

    def close(self) -> None:
        """关闭当前会话并清除快照，可重复调用"""
        if self._session is not None:
            self._session.close()
        self._session = None
        self._snapshot = None
