"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .formatter import CodeFormatter, FormatError, ParseError, reformat
from .line_differ import LineDiffer, diff_lines

__all__ = [
    "ConfigManager",
    "CodeFormatter",
    "FormatError",
    "ParseError",
    "reformat",
    "LineDiffer",
    "diff_lines",
]
