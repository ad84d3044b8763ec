"""水印居中叠加。"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from lgtmgen.core.exceptions import LgtmgenError
from lgtmgen.processing.image_loader import load_image


class CompositeError(LgtmgenError):
    """叠加合成失败。"""


def composite(source_path: Path, mask: Image.Image, opacity: float = 1.0) -> Image.Image:
    """加载源图片并将水印居中叠加，返回新的 RGBA 图片。"""

    source = load_image(source_path)
    try:
        return overlay_center(source, mask, opacity)
    finally:
        source.close()


def overlay_center(background: Image.Image, foreground: Image.Image, opacity: float = 1.0) -> Image.Image:
    """将 foreground 居中绘制在 background 之上，不修改任何输入图片。

    opacity 为 1.0 时水印不透明区域完全覆盖底图；超出底图范围的部分被裁掉。
    """

    if not 0.0 <= opacity <= 1.0:
        raise CompositeError(f"透明度必须位于 0.0~1.0: {opacity}")

    result = background.convert("RGBA")
    overlay = foreground if foreground.mode == "RGBA" else foreground.convert("RGBA")
    if opacity < 1.0:
        overlay = _scale_alpha(overlay, opacity)

    offset_x, offset_y = centered_offset(result.size, overlay.size)

    # alpha_composite 不接受负坐标，先裁掉水印越界的部分。
    left = max(0, -offset_x)
    top = max(0, -offset_y)
    right = min(overlay.width, result.width - offset_x)
    bottom = min(overlay.height, result.height - offset_y)
    if right <= left or bottom <= top:
        return result

    try:
        result.alpha_composite(
            overlay,
            dest=(max(0, offset_x), max(0, offset_y)),
            source=(left, top, right, bottom),
        )
    except ValueError as exc:
        raise CompositeError(f"叠加失败: {exc}") from exc
    return result


def centered_offset(background_size: tuple[int, int], foreground_size: tuple[int, int]) -> tuple[int, int]:
    """计算居中放置的左上角坐标（向零取整）。"""

    bg_w, bg_h = background_size
    fg_w, fg_h = foreground_size
    return int((bg_w - fg_w) / 2), int((bg_h - fg_h) / 2)


def _scale_alpha(image: Image.Image, opacity: float) -> Image.Image:
    """返回 Alpha 通道按 opacity 缩放后的副本。"""

    pixels = np.array(image, dtype=np.float32)
    pixels[..., 3] *= opacity
    return Image.fromarray(np.clip(np.rint(pixels), 0, 255).astype(np.uint8))
