"""内置水印资源的加载。"""

from __future__ import annotations

import io
import logging
from importlib import resources

from PIL import Image, UnidentifiedImageError

from lgtmgen.core.config import MASK_ASSET
from lgtmgen.core.exceptions import MaskLoadError

LOGGER = logging.getLogger(__name__)

ASSET_PACKAGE = "lgtmgen"


def read_asset(asset_id: str) -> bytes:
    """按逻辑标识读取包内资源的原始字节。"""

    resource = resources.files(ASSET_PACKAGE).joinpath(asset_id)
    try:
        return resource.read_bytes()
    except OSError as exc:
        raise MaskLoadError(f"找不到水印资源: {asset_id}") from exc


def load_mask(asset_id: str = MASK_ASSET) -> Image.Image:
    """加载并解码水印图片，返回 RGBA 模式的独立副本。

    每次运行只调用一次，返回值在所有工作线程间只读共享。
    """

    data = read_asset(asset_id)
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            mask = img.convert("RGBA") if img.mode != "RGBA" else img.copy()
    except (UnidentifiedImageError, OSError) as exc:
        raise MaskLoadError(f"无法解码水印资源: {asset_id}") from exc

    LOGGER.debug("已加载水印 %s，尺寸 %s", asset_id, mask.size)
    return mask
