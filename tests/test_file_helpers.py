"""文件查找与暂存区读取测试。"""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from py_compress_image_mcp.exceptions import StagedFilesError
from py_compress_image_mcp.utils import git_helpers
from py_compress_image_mcp.utils.file_helpers import (
    filter_image_paths,
    get_all_image_files,
    resolve_under_root,
)
from py_compress_image_mcp.utils.git_helpers import get_staged_image_files
from tests.conftest import write_images


class TestGetAllImageFiles:
    """递归查找图片测试"""

    @pytest.fixture
    def image_tree(self, project_root: Path) -> Path:
        write_images(
            project_root / "assets",
            [
                "a.jpg",
                "b.PNG",
                "e.jpeg",
                "notes.txt",
                "sub/c.gif",
                "sub/deep/d.webp",
                "sub/deep/archive.webp.bak",
            ],
        )
        return project_root

    def test_finds_images_at_any_depth(self, image_tree: Path):
        """测试只返回 jpg/png/gif/webp，扩展名忽略大小写"""
        files = get_all_image_files("assets", image_tree)

        assert files == [
            os.path.join("assets", "a.jpg"),
            os.path.join("assets", "b.PNG"),
            os.path.join("assets", "sub", "c.gif"),
            os.path.join("assets", "sub", "deep", "d.webp"),
        ]

    def test_absolute_directory(self, image_tree: Path):
        """测试绝对路径目录，结果仍相对项目根目录"""
        files = get_all_image_files(image_tree / "assets" / "sub", image_tree)

        assert files == [
            os.path.join("assets", "sub", "c.gif"),
            os.path.join("assets", "sub", "deep", "d.webp"),
        ]

    def test_missing_directory_returns_empty(self, project_root: Path):
        """测试目录不存在时返回空列表"""
        assert get_all_image_files("does/not/exist", project_root) == []

    def test_file_instead_of_directory_returns_empty(self, image_tree: Path):
        """测试传入文件路径时返回空列表"""
        assert get_all_image_files("assets/a.jpg", image_tree) == []

    def test_repeated_calls_are_stable(self, image_tree: Path):
        """测试对未修改的目录重复调用结果一致"""
        first = get_all_image_files("assets", image_tree)
        second = get_all_image_files("assets", image_tree)

        assert first == second

    def test_broken_symlink_is_skipped(self, image_tree: Path):
        """测试失效的符号链接被跳过"""
        (image_tree / "assets" / "broken.png").symlink_to(
            image_tree / "missing.png"
        )

        files = get_all_image_files("assets", image_tree)

        assert os.path.join("assets", "broken.png") not in files
        assert len(files) == 4

    def test_symlink_cycle_visited_once(self, image_tree: Path):
        """测试目录符号链接成环时不会无限遍历"""
        (image_tree / "assets" / "sub" / "loop").symlink_to(
            image_tree / "assets", target_is_directory=True
        )

        files = get_all_image_files("assets", image_tree)

        assert len(files) == 4

    def test_deep_tree(self, project_root: Path):
        """测试很深的目录层级"""
        deep = Path(*[f"d{i}" for i in range(200)])
        write_images(project_root, [str(deep / "x.png")])

        files = get_all_image_files(".", project_root)

        assert files == [str(deep / "x.png")]


class TestPathHelpers:
    """路径工具测试"""

    def test_filter_image_paths_keeps_order(self):
        paths = ["z.png", "readme.md", "", "img/A.JPG", "b.webp", "c.svg"]

        assert filter_image_paths(paths) == ["z.png", "img/A.JPG", "b.webp"]

    def test_resolve_under_root(self, project_root: Path):
        assert resolve_under_root("a/b.png", project_root) == project_root / "a/b.png"
        assert resolve_under_root("/abs/c.png", project_root) == Path("/abs/c.png")


class TestStagedImageFiles:
    """git 暂存区读取测试"""

    def test_parses_nul_separated_output(self, monkeypatch, project_root: Path):
        """测试解析 -z 输出并过滤图片"""

        def fake_run(cmd, **kwargs):
            assert kwargs["cwd"] == project_root
            return subprocess.CompletedProcess(
                cmd, 0, stdout="a.png\x00docs/readme.md\x00img/B.JPG\x00", stderr=""
            )

        monkeypatch.setattr(git_helpers.subprocess, "run", fake_run)

        assert get_staged_image_files(project_root) == ["a.png", "img/B.JPG"]

    def test_empty_output(self, monkeypatch, project_root: Path):
        monkeypatch.setattr(
            git_helpers.subprocess,
            "run",
            lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, "", ""),
        )

        assert get_staged_image_files(project_root) == []

    def test_git_failure_raises(self, monkeypatch, project_root: Path):
        """测试 git 命令失败时抛出 StagedFilesError"""

        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(
                128, cmd, stderr="fatal: not a git repository"
            )

        monkeypatch.setattr(git_helpers.subprocess, "run", fake_run)

        with pytest.raises(StagedFilesError, match="not a git repository"):
            get_staged_image_files(project_root)

    @pytest.mark.skipif(shutil.which("git") is None, reason="git 不可用")
    def test_real_repository(self, project_root: Path):
        """测试真实仓库中只返回暂存的图片"""

        def git(*args: str) -> None:
            subprocess.run(("git", *args), cwd=project_root, check=True)

        git("init", "-q")
        write_images(project_root, ["staged.png", "other.txt", "unstaged.jpg"])
        git("add", "staged.png", "other.txt")

        assert get_staged_image_files(project_root) == ["staged.png"]
