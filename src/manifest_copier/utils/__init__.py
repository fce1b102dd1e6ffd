"""工具模組。"""

from . import file_ops, path_utils, reporting, time_utils
from .error_handler import ErrorHandler

__all__ = ["file_ops", "path_utils", "reporting", "time_utils", "ErrorHandler"]
