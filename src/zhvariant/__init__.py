"""
zhvariant - 中文變體轉換器 (Chinese Variant Converter)

核心概念：
- 以 leftmost-longest 的 Aho-Corasick automaton 做線性時間的字詞替換
- 內建簡繁字表（hanziconv）與兩岸四地地區詞表
- 支援 MediaWiki 轉換規則語法 -{ ... }-，包含巢狀區塊與全域規則

官方入口（穩定 API）：
- `zhvariant.zhconv` / `zhvariant.zhconv_mw`
- `zhvariant.ZhConverterBuilder` / `zhvariant.ZhConverter`
- `zhvariant.Variant`

範例:
    from zhvariant import zhconv, zhconv_mw, Variant

    zhconv("汉字", Variant.ZH_HANT)                 # '漢字'
    zhconv_mw("-{H|zh:馬;zh-cn:鹿;}-馬克思", "zh-cn")  # '鹿克思'
"""

# =============================================================================
# 轉換器
# =============================================================================
from zhvariant.converter import ZhConverter, ZhConverterBuilder
from zhvariant.converters import get_builtin_converter, zhconv, zhconv_mw
from zhvariant.shadow import ShadowOverlay
from zhvariant.variant import Variant

# =============================================================================
# 轉換規則
# =============================================================================
from zhvariant.pagerules import PageRules
from zhvariant.resolver import MediaWikiRuleResolver
from zhvariant.rule import Conv, ConvAction, ConvRule
from zhvariant.wikitext import NESTED_RULE_MAX_DEPTH, RuleBlockParser

# =============================================================================
# 詞表與變體推測
# =============================================================================
from zhvariant.inference import (
    infer_variant,
    infer_variant_confidence,
    is_hans,
    is_hans_probability,
)
from zhvariant.tables import get_builtin_tables

# =============================================================================
# 配置與日誌
# =============================================================================
from zhvariant.config import ConverterConfig
from zhvariant.utils.logger import enable_debug_logging, enable_timing_logging, get_logger

# =============================================================================
# Protocol / 事件（進階用途）
# =============================================================================
from zhvariant.core.events import ConversionEvent, ConversionEventHandler
from zhvariant.core.protocols.resolver import ConvAdd, ConvRemove, RuleResolverProtocol

__all__ = [
    # Converters
    "ZhConverter",
    "ZhConverterBuilder",
    "ShadowOverlay",
    "Variant",
    "get_builtin_converter",
    "zhconv",
    "zhconv_mw",
    # Rules
    "Conv",
    "ConvAction",
    "ConvRule",
    "PageRules",
    "MediaWikiRuleResolver",
    "RuleBlockParser",
    "NESTED_RULE_MAX_DEPTH",
    # Tables / inference
    "get_builtin_tables",
    "is_hans",
    "is_hans_probability",
    "infer_variant",
    "infer_variant_confidence",
    # Config / logging
    "ConverterConfig",
    "get_logger",
    "enable_debug_logging",
    "enable_timing_logging",
    # Protocols / events (advanced)
    "ConversionEvent",
    "ConversionEventHandler",
    "ConvAdd",
    "ConvRemove",
    "RuleResolverProtocol",
]

__version__ = "0.1.0"
