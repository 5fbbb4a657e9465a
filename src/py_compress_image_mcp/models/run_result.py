"""压缩运行结果模型。

定义一次批量压缩运行中的任务、进度事件和汇总结果。
"""

from humanize import naturalsize
from pydantic import BaseModel, Field


class FileTask(BaseModel):
    """待压缩的单个文件任务"""

    index: int = Field(ge=0, description="在输入列表中的位置（从 0 开始）")
    path: str = Field(description="相对项目根目录的路径")


class ProgressEvent(BaseModel):
    """单个文件处理完成时的进度通知"""

    current: int = Field(ge=1, description="当前位置（从 1 开始）")
    total: int = Field(ge=1, description="文件总数")
    path: str = Field(description="相对项目根目录的路径")
    success: bool = Field(True, description="该文件是否压缩成功")

    def format_line(self) -> str:
        """格式化为单行进度文本"""
        status = "已压缩" if self.success else "压缩失败"
        return f"[{self.current}/{self.total}] {status}: {self.path}"


class RunResult(BaseModel):
    """一次压缩运行的汇总结果"""

    total: int = Field(0, description="输入文件总数")
    compressed: int = Field(0, description="成功压缩的数量")
    failed: list[str] = Field(default_factory=list, description="压缩失败的文件")
    errors: list[str] = Field(default_factory=list, description="诊断信息")

    # 仅用于展示的体积统计
    original_bytes: int = Field(0, description="成功文件的原始总大小（字节）")
    compressed_bytes: int = Field(0, description="成功文件压缩后的总大小（字节）")

    def get_attempted_count(self) -> int:
        """实际尝试过的文件数量"""
        return self.compressed + len(self.failed)

    def get_failure_count(self) -> int:
        """失败数量"""
        return len(self.failed)

    def get_size_saved(self) -> int:
        """节省的字节数"""
        return max(0, self.original_bytes - self.compressed_bytes)

    def get_summary(self) -> str:
        """运行结果摘要"""
        summary = f"共处理 {self.total} 张，成功压缩 {self.compressed} 张"
        if self.compressed:
            saved = naturalsize(self.get_size_saved(), binary=True)
            summary += f"，节省 {saved}"
        return summary + "。"
