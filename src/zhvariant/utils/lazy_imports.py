"""
延遲導入 (Lazy Import)

內建轉換表由 hanziconv 的字元對照產生，只有在實際取用內建表時才載入。
轉換核心 (AhoCorasick / ZhConverter / 規則解析) 不依賴任何第三方套件。
"""

from __future__ import annotations

from typing import Any, Optional

TABLES_INSTALL_HINT = (
    "缺少內建轉換表依賴 (hanziconv)。請執行:\n"
    "  pip install hanziconv\n"
    "或重新安裝本套件:\n"
    "  pip install zhvariant"
)

_hanziconv: Optional[Any] = None


def get_hanziconv() -> Any:
    """
    延遲載入 hanziconv.HanziConv

    Raises:
        ImportError: 未安裝 hanziconv 時，附上安裝提示
    """
    global _hanziconv

    if _hanziconv is not None:
        return _hanziconv

    try:
        from hanziconv import HanziConv
    except ImportError as e:
        raise ImportError(TABLES_INSTALL_HINT) from e

    _hanziconv = HanziConv
    return _hanziconv


def is_tables_available() -> bool:
    """檢查內建轉換表所需依賴是否可用"""
    try:
        get_hanziconv()
    except ImportError:
        return False
    return True


def check_tables_dependencies() -> None:
    """確認內建轉換表依賴存在，否則拋出帶安裝提示的 ImportError"""
    get_hanziconv()
