"""并发处理的工作单元。"""

from __future__ import annotations

import logging
from typing import Optional

from PIL import Image

from lgtmgen.core.models import STATUS_SKIP_EXISTING, STATUS_SUCCESS, FileOutcome, OverlayTask
from lgtmgen.core.output_manager import DestinationLocks, ImageWriteError, save_image, should_write
from lgtmgen.processing.compositor import CompositeError, composite
from lgtmgen.processing.image_loader import ImageLoadingError

LOGGER = logging.getLogger(__name__)


def run_task(
    task: OverlayTask,
    mask: Image.Image,
    locks: Optional[DestinationLocks] = None,
    opacity: float = 1.0,
) -> FileOutcome:
    """执行单个文件的 合成 -> 覆盖检查 -> 写入 流程。

    单个文件的失败只体现在返回的 FileOutcome 中，不会向外抛出。
    """

    try:
        image = composite(task.source_path, mask, opacity)
    except ImageLoadingError as exc:
        return FileOutcome(source_path=task.source_path, status="error-load", message=str(exc))
    except CompositeError as exc:
        return FileOutcome(source_path=task.source_path, status="error-composite", message=str(exc))

    try:
        if locks is None:
            return _guard_and_write(task, image)
        with locks.for_path(task.dest_path):
            return _guard_and_write(task, image)
    finally:
        image.close()


def _guard_and_write(task: OverlayTask, image: Image.Image) -> FileOutcome:
    if not should_write(task.dest_path, task.force):
        LOGGER.info("跳过输出（已存在）：%s", task.dest_path)
        return FileOutcome(
            source_path=task.source_path,
            status=STATUS_SKIP_EXISTING,
            output_path=task.dest_path,
        )

    try:
        save_image(image, task.dest_path)
    except ImageWriteError as exc:
        return FileOutcome(source_path=task.source_path, status="error-write", message=str(exc))

    return FileOutcome(source_path=task.source_path, status=STATUS_SUCCESS, output_path=task.dest_path)
