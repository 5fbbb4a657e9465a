"""测试配置文件。

提供测试所需的fixtures和一个可编排的假压缩服务。
"""

from pathlib import Path

import pytest

from py_compress_image_mcp.config import reset_config
from py_compress_image_mcp.exceptions import ProcessingError, ValidationError
from py_compress_image_mcp.models.constants import (
    API_KEYS_ENV,
    LOG_LEVEL_ENV,
    PROJECT_ROOT_ENV,
)


class FakeSession:
    """绑定单个 Key 的假会话"""

    def __init__(self, service: "FakeService", key: str):
        self.service = service
        self.key = key

    def validate(self) -> None:
        self.service.validated.append(self.key)
        if self.key in self.service.invalid:
            raise ValidationError("Credentials are invalid (HTTP 401/Unauthorized)")

    def usage_snapshot(self) -> int:
        return self.service.snapshots.get(self.key, 0)

    def compress(self, data: bytes) -> bytes:
        self.service.calls.append((self.key, data))
        if data in self.service.fail_on:
            raise ProcessingError("远程服务错误: Unsupported image")
        return data[: max(1, len(data) // 2)]

    def close(self) -> None:
        self.service.closed.append(self.key)


class FakeService:
    """假 Tinify 服务

    Args:
        snapshots: 每个 Key 的用量快照
        invalid: 验证会失败的 Key
        fail_on: 压缩会失败的文件内容
    """

    def __init__(
        self,
        snapshots: dict[str, int] | None = None,
        invalid: set[str] | None = None,
        fail_on: set[bytes] | None = None,
    ):
        self.snapshots = snapshots or {}
        self.invalid = invalid or set()
        self.fail_on = fail_on or set()
        self.validated: list[str] = []
        self.calls: list[tuple[str, bytes]] = []
        self.closed: list[str] = []

    def session(self, key: str) -> FakeSession:
        return FakeSession(self, key)

    def keys_used(self) -> list[str]:
        return [key for key, _ in self.calls]


def write_images(root: Path, names: list[str]) -> list[str]:
    """在 root 下创建图片文件，内容为其相对路径"""
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(name.encode() * 4)
    return names


def content_of(name: str) -> bytes:
    return name.encode() * 4


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """隔离环境变量，避免本机配置影响测试"""
    for name in (API_KEYS_ENV, PROJECT_ROOT_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fake_service() -> FakeService:
    return FakeService()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """项目根目录fixture"""
    root = tmp_path / "project"
    root.mkdir()
    return root
