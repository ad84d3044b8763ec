"""源图片加载实现。

加载时会按 EXIF Orientation 旋转图片，带旋转标记的照片输出尺寸可能与原始像素尺寸宽高互换。
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from lgtmgen.core.exceptions import LgtmgenError

LOGGER = logging.getLogger(__name__)


class ImageLoadingError(LgtmgenError):
    """图片加载失败。"""


def load_image(path: Path) -> Image.Image:
    """加载单张图片并执行 EXIF 旋转，统一为 RGBA 模式。

    返回值为新的 Image 对象，调用者负责关闭。
    """

    try:
        with Image.open(path) as img:
            img.load()

            # EXIF Orientation 校正
            img = ImageOps.exif_transpose(img)

            if img.mode != "RGBA":
                return img.convert("RGBA")
            return img.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", path, exc)
        raise ImageLoadingError(f"无法加载图像: {exc}") from exc
