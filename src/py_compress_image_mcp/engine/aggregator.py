"""运行结果汇总器。"""

from ..models.run_result import RunResult


class ResultAggregator:
    """累计一次运行的成功数、失败文件和诊断信息

    只在运行结束时产出一次 RunResult。
    """

    def __init__(self, total: int):
        self._result = RunResult(total=total)
        self._finished = False

    @property
    def compressed(self) -> int:
        return self._result.compressed

    def record_success(
        self, path: str, original_size: int = 0, compressed_size: int = 0
    ) -> None:
        self._result.compressed += 1
        self._result.original_bytes += original_size
        self._result.compressed_bytes += compressed_size

    def record_failure(self, path: str, message: str) -> None:
        self._result.failed.append(path)
        self._result.errors.append(message)

    def add_error(self, message: str) -> None:
        self._result.errors.append(message)

    def finish(self) -> RunResult:
        if self._finished:
            raise RuntimeError("运行结果已经产出")
        self._finished = True
        return self._result
