"""
變體推測

以內建轉換器的 count_matched() 作為評分：
文本中需要被轉換成某變體的字詞越多，就越不像該變體。
"""

from __future__ import annotations

from typing import List, Tuple

from zhvariant.converters import get_builtin_converter
from zhvariant.variant import Variant


def is_hans_probability(text: str) -> float:
    """
    文本為簡體（相對於繁體）的可能性，範圍 [0, 1]

    接近 1 表示很可能是簡體，接近 0 表示很可能是繁體，
    0.5 表示無法判斷（包含兩者皆無命中的情況）。
    """
    non_hant_score = get_builtin_converter(Variant.ZH_HANT).count_matched(text)
    non_hans_score = get_builtin_converter(Variant.ZH_HANS).count_matched(text)
    total = non_hant_score + non_hans_score
    if total == 0:
        return 0.5
    return non_hant_score / total


def is_hans(text: str) -> bool:
    """等同 is_hans_probability(text) > 0.5"""
    return is_hans_probability(text) > 0.5


def infer_variant(text: str) -> Variant:
    """
    推測文本的地區變體

    Returns:
        Variant.ZH_CN、Variant.ZH_TW 或 Variant.ZH_HK 之一；同分時依此順序
    """
    non_cn_score = get_builtin_converter(Variant.ZH_CN).count_matched(text)
    non_tw_score = get_builtin_converter(Variant.ZH_TW).count_matched(text)
    non_hk_score = get_builtin_converter(Variant.ZH_HK).count_matched(text)

    if non_cn_score <= non_tw_score and non_cn_score <= non_hk_score:
        return Variant.ZH_CN
    if non_tw_score <= non_hk_score:
        return Variant.ZH_TW
    return Variant.ZH_HK


def infer_variant_confidence(text: str) -> List[Tuple[Variant, float]]:
    """
    推測文本變體並附上信心值

    Returns:
        五個 (變體, 信心值) 依信心值由高到低排列，信心值範圍 [0, 1]；
        沒有任何可供判斷的字詞時信心值皆為 0
    """
    scores = {
        variant: float(get_builtin_converter(variant).count_matched(text))
        for variant in (
            Variant.ZH_CN,
            Variant.ZH_TW,
            Variant.ZH_HK,
            Variant.ZH_HANS,
            Variant.ZH_HANT,
        )
    }
    total = scores[Variant.ZH_CN] + scores[Variant.ZH_TW] + scores[Variant.ZH_HK] - scores[Variant.ZH_HANT]

    if total <= 0:
        confidence = [(variant, 0.0) for variant in scores]
    else:
        confidence = [
            (variant, 1.0 - min(score, total) / total) for variant, score in scores.items()
        ]
    confidence.sort(key=lambda item: item[1], reverse=True)
    return confidence
