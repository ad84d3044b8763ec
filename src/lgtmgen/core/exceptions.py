"""项目内使用的自定义异常定义。"""


class LgtmgenError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(LgtmgenError):
    """配置不合法时抛出。"""


class MaskLoadError(LgtmgenError):
    """水印资源缺失或无法解码。"""


class InputDirectoryError(LgtmgenError):
    """输入目录无法读取。"""


class OutputDirectoryError(LgtmgenError):
    """输出目录无法创建。"""
