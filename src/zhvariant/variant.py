"""
中文變體 (Variant)

對應 MediaWiki ZhConverter 的變體代碼與 fallback 規則：
https://github.com/wikimedia/mediawiki/blob/master/includes/language/converters/ZhConverter.php
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Variant(Enum):
    """目標中文變體，值為小寫的變體代碼"""

    ZH = "zh"
    ZH_HANS = "zh-hans"
    ZH_HANT = "zh-hant"
    ZH_CN = "zh-cn"
    ZH_TW = "zh-tw"
    ZH_HK = "zh-hk"
    ZH_MO = "zh-mo"
    ZH_SG = "zh-sg"
    ZH_MY = "zh-my"

    @classmethod
    def _missing_(cls, value):
        # 允許 "zh-Hant"、"ZH_TW" 這類寫法
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @classmethod
    def parse(cls, code: str) -> "Variant":
        """
        解析變體代碼（大小寫不敏感）

        Raises:
            ValueError: 未知的變體代碼
        """
        return cls(code)

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def fallbacks(self) -> Tuple["Variant", ...]:
        """依優先順序排列的 fallback 變體（不含自身）"""
        return _FALLBACKS[self]

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES: Dict[Variant, str] = {
    Variant.ZH: "原文",
    Variant.ZH_HANS: "简体",
    Variant.ZH_HANT: "繁體",
    Variant.ZH_CN: "大陆简体",
    Variant.ZH_TW: "臺灣正體",
    Variant.ZH_HK: "香港繁體",
    Variant.ZH_MO: "澳門繁體",
    Variant.ZH_SG: "新加坡简体",
    Variant.ZH_MY: "大马简体",
}

# 地區變體最後都退回 zh（即原文）
_FALLBACKS: Dict[Variant, Tuple[Variant, ...]] = {
    Variant.ZH: (
        Variant.ZH_HANS,
        Variant.ZH_HANT,
        Variant.ZH_CN,
        Variant.ZH_TW,
        Variant.ZH_HK,
        Variant.ZH_SG,
        Variant.ZH_MO,
        Variant.ZH_MY,
    ),
    Variant.ZH_HANS: (Variant.ZH_CN, Variant.ZH_SG, Variant.ZH_MY, Variant.ZH),
    Variant.ZH_HANT: (Variant.ZH_TW, Variant.ZH_HK, Variant.ZH_MO, Variant.ZH),
    Variant.ZH_CN: (Variant.ZH_HANS, Variant.ZH_SG, Variant.ZH_MY, Variant.ZH),
    Variant.ZH_SG: (Variant.ZH_MY, Variant.ZH_HANS, Variant.ZH_CN, Variant.ZH),
    Variant.ZH_MY: (Variant.ZH_SG, Variant.ZH_HANS, Variant.ZH_CN, Variant.ZH),
    Variant.ZH_TW: (Variant.ZH_HANT, Variant.ZH_HK, Variant.ZH_MO, Variant.ZH),
    Variant.ZH_HK: (Variant.ZH_MO, Variant.ZH_HANT, Variant.ZH_TW, Variant.ZH),
    Variant.ZH_MO: (Variant.ZH_HK, Variant.ZH_HANT, Variant.ZH_TW, Variant.ZH),
}
