"""处理流水线：加载水印、扫描输入、并发叠加并写出。"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Optional

from PIL import Image

from lgtmgen.core.config import JobConfig
from lgtmgen.core.models import BatchResult, FileOutcome, OverlayTask
from lgtmgen.core.output_manager import DestinationLocks, destination_for, prepare_output_dir
from lgtmgen.core.scanner import list_files
from lgtmgen.processing.mask_loader import load_mask
from lgtmgen.processing.worker import run_task

LOGGER = logging.getLogger(__name__)


OutcomeCallback = Optional[Callable[[FileOutcome], None]]


def process_batch(config: JobConfig, outcome_callback: OutcomeCallback = None) -> BatchResult:
    """批量处理入口。

    水印加载、输入扫描与输出目录创建的失败会以 LgtmgenError 直接抛出，
    此时不会派发任何任务；单个文件的失败只记录在返回的 BatchResult 中。
    """

    config.validate()

    mask = load_mask(config.mask_asset)
    try:
        LOGGER.info("开始扫描输入目录 %s", config.input_dir)
        sources = list_files(config.input_dir)
        LOGGER.info("发现 %d 个候选文件", len(sources))

        output_dir = prepare_output_dir(config.output_dir)
        tasks = [
            OverlayTask(
                source_path=source,
                dest_path=destination_for(source, output_dir),
                force=config.force,
            )
            for source in sources
        ]
        return _run_tasks(tasks, mask, config, outcome_callback)
    finally:
        mask.close()


def _run_tasks(
    tasks: list[OverlayTask],
    mask: Image.Image,
    config: JobConfig,
    outcome_callback: OutcomeCallback,
) -> BatchResult:
    result = BatchResult()
    locks = DestinationLocks()

    if not tasks:
        return result

    if config.max_workers <= 1:
        for task in tasks:
            try:
                outcome = run_task(task, mask, locks, config.opacity)
            except Exception as exc:  # noqa: BLE001
                outcome = _worker_failure(task, exc)
            _record_outcome(result, outcome, outcome_callback)
        return result

    LOGGER.info("以 %d 个线程派发 %d 个任务", config.max_workers, len(tasks))
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        future_map = {executor.submit(run_task, task, mask, locks, config.opacity): task for task in tasks}
        for future in as_completed(future_map):
            task = future_map[future]
            try:
                outcome = future.result()
            except Exception as exc:  # noqa: BLE001
                outcome = _worker_failure(task, exc)
            _record_outcome(result, outcome, outcome_callback)

    return result


def _worker_failure(task: OverlayTask, exc: Exception) -> FileOutcome:
    LOGGER.exception("任务执行异常：%s", exc)
    return FileOutcome(
        source_path=task.source_path,
        status="error-worker",
        message=str(exc) or type(exc).__name__,
    )


def _record_outcome(result: BatchResult, outcome: FileOutcome, callback: OutcomeCallback) -> None:
    result.record(outcome)
    if callback:
        callback(outcome)
