"""处理任务的配置模型与全局常量。"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from lgtmgen.core.exceptions import InvalidConfigurationError

NAME = "lgtmgen"
VERSION = "0.2.0"

# 内置水印资源的逻辑标识，相对于 lgtmgen 包目录。
MASK_ASSET = "images/lgtm_mask.png"

EXIT_CODE_OK = 0
EXIT_CODE_ERROR = 1


def default_workers() -> int:
    """默认并发数：与可用 CPU 数一致。"""

    return os.cpu_count() or 1


@dataclass(slots=True)
class JobConfig:
    """单次批处理任务的配置集合。"""

    input_dir: Path
    output_dir: Path
    force: bool = False
    max_workers: int = field(default_factory=default_workers)
    mask_asset: str = MASK_ASSET
    opacity: float = 1.0

    def validate(self) -> None:
        """检查配置取值，不合法时抛出 InvalidConfigurationError。"""

        if self.max_workers < 1:
            raise InvalidConfigurationError(f"并发数必须大于 0: {self.max_workers}")
        if not 0.0 <= self.opacity <= 1.0:
            raise InvalidConfigurationError(f"透明度必须位于 0.0~1.0: {self.opacity}")
