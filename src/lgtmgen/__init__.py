"""批量为图片叠加 LGTM 水印的工具。"""

from lgtmgen.core.config import NAME, VERSION

__version__ = VERSION

__all__ = ["NAME", "VERSION", "__version__"]
