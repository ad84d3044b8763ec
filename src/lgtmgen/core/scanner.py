"""输入目录扫描逻辑。"""

from __future__ import annotations

import logging
from pathlib import Path

from lgtmgen.core.exceptions import InputDirectoryError

LOGGER = logging.getLogger(__name__)


def list_files(directory: Path) -> list[Path]:
    """列出目录下的普通文件（不递归、不按扩展名过滤），按文件名排序。

    是否为图片交给后续解码阶段逐个判断；目录本身无法读取时视为致命错误。
    """

    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise InputDirectoryError(f"无法读取输入目录: {directory}") from exc

    collected: list[Path] = []
    for entry in entries:
        if entry.is_dir():
            continue
        collected.append(entry)

    LOGGER.debug("目录 %s 下共 %d 个条目，其中 %d 个文件", directory, len(entries), len(collected))
    return collected
