"""命令行入口。"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

import typer
from rich.console import Console

from lgtmgen.core.config import EXIT_CODE_ERROR, EXIT_CODE_OK, NAME, VERSION, JobConfig, default_workers
from lgtmgen.core.exceptions import LgtmgenError
from lgtmgen.core.models import FileOutcome
from lgtmgen.processing.pipeline import process_batch
from lgtmgen.utils.logging import setup_logging

app = typer.Typer(help="为目录中的每张图片居中叠加 LGTM 水印。", add_completion=False)

# 结果行中的 "[success]" 与路径不应被 rich 当作标记或 emoji 解析。
out_console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

STATUS_STYLES = {
    "success": "green",
    "skip-existing": "yellow",
}


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{NAME} version {VERSION}", err=True)
        raise typer.Exit(EXIT_CODE_OK)


def _print_outcome(outcome: FileOutcome) -> None:
    console = out_console if outcome.succeeded else err_console
    console.print(outcome.describe(), style=STATUS_STYLES.get(outcome.status, "red"), markup=False)


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(EXIT_CODE_ERROR)


@app.command()
def run_cli(
    output: Optional[Path] = typer.Option(None, "--output", "-output", "-o", help="输出目录"),
    directory: Optional[Path] = typer.Option(None, "--directory", "-directory", "-d", help="输入目录"),
    force: bool = typer.Option(False, "--force", "-force", "-f", help="输出文件已存在时强制覆盖"),
    max_workers: Optional[int] = typer.Option(None, "--workers", "-w", help="并发线程数量，默认与 CPU 数一致"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
    version: bool = typer.Option(
        False,
        "--version",
        "-version",
        callback=_version_callback,
        is_eager=True,
        help="打印版本信息并退出",
    ),
) -> None:
    """执行批量叠加。"""

    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if directory is None:
        _fail("input directory path is required.")
    if output is None:
        _fail("output directory path is required.")

    job = JobConfig(
        input_dir=directory.expanduser(),
        output_dir=output.expanduser(),
        force=force,
        max_workers=default_workers() if max_workers is None else max_workers,
    )
    logging.getLogger(__name__).debug("CLI 参数解析完成：%s", job)

    try:
        process_batch(job, outcome_callback=_print_outcome)
    except LgtmgenError as exc:
        _fail(f"fatal error {exc}.")


def main(args: Optional[Sequence[str]] = None) -> None:
    """控制台脚本入口：参数错误与致命错误统一以退出码 1 结束。"""

    try:
        app(args=args, prog_name=NAME)
    except SystemExit as exc:
        # 参数解析错误时 typer 以 2 退出。
        if exc.code not in (None, EXIT_CODE_OK):
            sys.exit(EXIT_CODE_ERROR)
        raise
    sys.exit(EXIT_CODE_OK)


if __name__ == "__main__":
    main()
