"""核心模块。

远程压缩会话与 API Key 轮换账本。
"""

from .ledger import CredentialLedger
from .remote import CompressionSession, SessionFactory, TinifySession


__all__ = [
    "CompressionSession",
    "CredentialLedger",
    "SessionFactory",
    "TinifySession",
]
