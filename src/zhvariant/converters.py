"""
內建轉換器

每個目標變體的轉換器在第一次使用時建立並快取，之後重複使用。
"""

from __future__ import annotations

from functools import lru_cache
from typing import Union

from zhvariant.converter import ZhConverter, ZhConverterBuilder
from zhvariant.tables import get_builtin_tables
from zhvariant.utils.logger import log_timing
from zhvariant.variant import Variant

VariantLike = Union[Variant, str]


@lru_cache(maxsize=None)
@log_timing("get_builtin_converter")
def _build_builtin_converter(variant: Variant) -> ZhConverter:
    return ZhConverterBuilder().target(variant).tables(get_builtin_tables(variant)).build()


def get_builtin_converter(variant: VariantLike) -> ZhConverter:
    """
    取得目標變體的內建轉換器

    Args:
        variant: Variant 或變體代碼，如 "zh-tw"、"zh-Hant"
    """
    return _build_builtin_converter(Variant(variant))


def zhconv(text: str, target: VariantLike) -> str:
    """
    以內建轉換器轉換文本

    範例:
        >>> zhconv("汉字", "zh-hant")
        '漢字'
    """
    return get_builtin_converter(target).convert(text)


def zhconv_mw(text: str, target: VariantLike) -> str:
    """
    以內建轉換器轉換文本，並套用文本中的 MediaWiki 轉換規則（含全域規則）

    範例:
        >>> zhconv_mw("天-{干}-物燥", "zh-hant")
        '天干物燥'
    """
    return get_builtin_converter(target).convert_as_wikitext_extended(text)
