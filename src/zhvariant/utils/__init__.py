"""
工具模組

提供日誌、計時、延遲導入與多模式字串匹配等通用工具。
"""

from .aho_corasick import AhoCorasick, Match
from .lazy_imports import (
    TABLES_INSTALL_HINT,
    check_tables_dependencies,
    is_tables_available,
)
from .logger import (
    TimingContext,
    get_logger,
    log_timing,
)

__all__ = [
    # 字串匹配
    "AhoCorasick",
    "Match",

    # 日誌工具
    "get_logger",
    "log_timing",
    "TimingContext",

    # 依賴檢查
    "is_tables_available",
    "check_tables_dependencies",
    "TABLES_INSTALL_HINT",
]
