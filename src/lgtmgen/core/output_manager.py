"""输出写入与覆盖保护模块。"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from PIL import Image

from lgtmgen.core.exceptions import LgtmgenError, OutputDirectoryError

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
    ".gif": "GIF",
    ".bmp": "BMP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".webp": "WEBP",
}

# 这些格式不支持 Alpha 通道，写入前需转换为 RGB。
_OPAQUE_FORMATS = {"JPEG", "BMP"}


class ImageWriteError(LgtmgenError):
    """输出写入失败。"""


def prepare_output_dir(output_dir: Path) -> Path:
    """确保输出目录存在，返回其绝对路径。"""

    resolved = output_dir.resolve()
    try:
        resolved.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(f"无法创建输出目录: {output_dir}") from exc
    return resolved


def destination_for(source_path: Path, output_dir: Path) -> Path:
    """输出路径 = 输出目录 + 源文件名。"""

    return output_dir / source_path.name


def should_write(destination: Path, force: bool) -> bool:
    """目标已存在且未指定 force 时返回 False。"""

    if force:
        return True
    return not destination.exists()


def save_image(image: Image.Image, destination: Path) -> None:
    """按扩展名推断格式，将 PIL Image 保存到磁盘。"""

    suffix = destination.suffix.lower()
    image_format = SUPPORTED_FORMATS.get(suffix)
    if not image_format:
        raise ImageWriteError(f"不支持的输出格式: {suffix or destination.name}")

    save_params = {}
    image_to_save = image
    if image_format == "JPEG":
        save_params.update(quality=95, subsampling=1)
    if image_format in _OPAQUE_FORMATS and image.mode != "RGB":
        image_to_save = image.convert("RGB")

    try:
        image_to_save.save(destination, format=image_format, **save_params)
    except (OSError, ValueError) as exc:
        LOGGER.debug("写入 %s 失败: %s", destination, exc)
        raise ImageWriteError(f"写入文件失败: {destination}") from exc
    finally:
        if image_to_save is not image:
            image_to_save.close()


class DestinationLocks:
    """按输出路径分配互斥锁，使同一目标的检查与写入串行执行。"""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def for_path(self, destination: Path) -> threading.Lock:
        key = os.path.normcase(os.path.abspath(destination))
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
