"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

STATUS_SUCCESS = "success"
STATUS_SKIP_EXISTING = "skip-existing"


@dataclass(slots=True, frozen=True)
class OverlayTask:
    """描述单个图片的叠加任务。"""

    source_path: Path
    dest_path: Path
    force: bool = False


@dataclass(slots=True)
class FileOutcome:
    """记录单个文件的处理结果（用于输出与日志）。"""

    source_path: Path
    status: str
    output_path: Optional[Path] = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCESS

    @property
    def skipped(self) -> bool:
        return self.status == STATUS_SKIP_EXISTING

    def describe(self) -> str:
        """生成面向用户的一行结果描述。"""

        if self.succeeded:
            return f"[success] {self.output_path}"
        if self.skipped:
            return f"[already exists] {self.output_path}"
        return f"[{self.message or self.status}] {self.source_path}"


@dataclass(slots=True)
class BatchResult:
    """批处理的汇总结果。"""

    succeeded: list[FileOutcome] = field(default_factory=list)
    skipped: list[FileOutcome] = field(default_factory=list)
    failed: list[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        if outcome.succeeded:
            self.succeeded.append(outcome)
        elif outcome.skipped:
            self.skipped.append(outcome)
        else:
            self.failed.append(outcome)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.skipped) + len(self.failed)
