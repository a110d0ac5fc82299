"""
轉換詞表

詞表格式 (Table) 可以是：
- {來源: 目標} 的 mapping
- (來源序列, 目標序列) 的平行序列
- ("來源1|來源2|...", "目標1|目標2|...") 以 "|" 分隔的精簡字串

內建詞表：
- ZH_HANT_TABLE / ZH_HANS_TABLE: 由 hanziconv 的字元對照產生的簡繁字表（延遲載入）
- ZH_TW_TABLE / ZH_HK_TABLE / ZH_CN_TABLE: 地區詞表
- ZH_MO_TABLE = ZH_HK_TABLE, ZH_SG_TABLE = ZH_MY_TABLE = ZH_CN_TABLE

注意：內建詞表只求涵蓋常見情境，不保證轉換結果的正確性。
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from zhvariant.utils.lazy_imports import get_hanziconv
from zhvariant.utils.logger import get_logger
from zhvariant.variant import Variant

Table = Union[Mapping[str, str], Tuple[Union[str, Sequence[str]], Union[str, Sequence[str]]]]

logger = get_logger(__name__)

# CJK 統一表意文字基本區
_CJK_UNIFIED_RANGE = (0x4E00, 0x9FFF)


def expand_table(table: Table) -> Iterator[Tuple[str, str]]:
    """
    將詞表展開為 (來源, 目標) 詞對

    Raises:
        ValueError: 平行序列長度不一致
    """
    if isinstance(table, Mapping):
        yield from table.items()
        return

    sources, targets = table
    if isinstance(sources, str):
        sources = sources.strip().split("|")
    if isinstance(targets, str):
        targets = targets.strip().split("|")
    if len(sources) != len(targets):
        raise ValueError(
            f"詞表來源與目標數量不一致: {len(sources)} != {len(targets)}"
        )
    yield from zip(sources, targets)


@lru_cache(maxsize=2)
def _build_script_table(to_traditional: bool) -> Dict[str, str]:
    """以 hanziconv 逐字轉換 CJK 基本區，保留有變化的字元"""
    hanziconv = get_hanziconv()
    chars = "".join(chr(code) for code in range(_CJK_UNIFIED_RANGE[0], _CJK_UNIFIED_RANGE[1] + 1))
    converted = hanziconv.toTraditional(chars) if to_traditional else hanziconv.toSimplified(chars)
    table = {source: target for source, target in zip(chars, converted) if source != target}
    logger.debug(
        f"Built {'zh-hant' if to_traditional else 'zh-hans'} script table: {len(table)} entries"
    )
    return table


# =============================================================================
# 地區詞表
# 來源詞同時收錄簡體與繁體寫法，讓詞表在字元轉換前後都能命中
# =============================================================================

ZH_TW_TABLE: Dict[str, str] = {
    "软件": "軟體",
    "軟件": "軟體",
    "硬件": "硬體",
    "网络": "網路",
    "網絡": "網路",
    "信息": "資訊",
    "出租车": "計程車",
    "出租車": "計程車",
    "鼠标": "滑鼠",
    "鼠標": "滑鼠",
    "打印机": "印表機",
    "打印機": "印表機",
    "内存": "記憶體",
    "內存": "記憶體",
    "激光": "雷射",
    "自行车": "腳踏車",
    "自行車": "腳踏車",
    "新西兰": "紐西蘭",
    "新西蘭": "紐西蘭",
    "阿拉伯联合酋长国": "阿拉伯聯合大公國",
    "阿拉伯聯合酋長國": "阿拉伯聯合大公國",
}

ZH_HK_TABLE: Dict[str, str] = {
    "软件": "軟件",
    "軟體": "軟件",
    "网络": "網絡",
    "網路": "網絡",
    "出租车": "的士",
    "出租車": "的士",
    "計程車": "的士",
    "计程车": "的士",
    "自行车": "單車",
    "自行車": "單車",
    "腳踏車": "單車",
    "打印机": "打印機",
    "印表機": "打印機",
    "纽西兰": "新西蘭",
    "紐西蘭": "新西蘭",
}

ZH_CN_TABLE: Dict[str, str] = {
    "軟體": "软件",
    "软体": "软件",
    "硬體": "硬件",
    "硬体": "硬件",
    "計程車": "出租车",
    "计程车": "出租车",
    "滑鼠": "鼠标",
    "印表機": "打印机",
    "印表机": "打印机",
    "記憶體": "内存",
    "记忆体": "内存",
    "雷射": "激光",
    "腳踏車": "自行车",
    "脚踏车": "自行车",
    "紐西蘭": "新西兰",
    "纽西兰": "新西兰",
    "阿拉伯聯合大公國": "阿拉伯联合酋长国",
    "阿拉伯联合大公国": "阿拉伯联合酋长国",
}

ZH_MO_TABLE = ZH_HK_TABLE
ZH_SG_TABLE = ZH_CN_TABLE
ZH_MY_TABLE = ZH_SG_TABLE

# =============================================================================
# 簡繁字表（延遲載入，需要 hanziconv）
# =============================================================================

_LAZY_TABLES = {
    "ZH_HANT_TABLE": True,
    "ZH_HANS_TABLE": False,
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_TABLES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = _build_script_table(_LAZY_TABLES[name])
    globals()[name] = value
    return value


def __dir__() -> List[str]:
    return sorted(set(list(globals().keys()) + list(_LAZY_TABLES.keys())))


def get_builtin_tables(variant: Variant) -> List[Table]:
    """
    取得目標變體使用的內建詞表，依套用順序排列（字表在前、地區詞表在後）

    Raises:
        ImportError: 需要簡繁字表但未安裝 hanziconv
    """
    variant = Variant(variant)
    if variant is Variant.ZH:
        return []
    if variant is Variant.ZH_HANS:
        return [_build_script_table(False)]
    if variant is Variant.ZH_HANT:
        return [_build_script_table(True)]

    regional: Dict[Variant, Tuple[bool, Table]] = {
        Variant.ZH_CN: (False, ZH_CN_TABLE),
        Variant.ZH_SG: (False, ZH_SG_TABLE),
        Variant.ZH_MY: (False, ZH_MY_TABLE),
        Variant.ZH_TW: (True, ZH_TW_TABLE),
        Variant.ZH_HK: (True, ZH_HK_TABLE),
        Variant.ZH_MO: (True, ZH_MO_TABLE),
    }
    to_traditional, region_table = regional[variant]
    return [_build_script_table(to_traditional), region_table]
