"""
核心抽象層

定義轉換核心與規則解析器之間的介面、事件模型。
"""

from .events import ConversionEvent, ConversionEventHandler
from .protocols import ConvAdd, ConvRemove, PageAction, RuleProtocol, RuleResolverProtocol

__all__ = [
    "ConversionEvent",
    "ConversionEventHandler",
    "ConvAdd",
    "ConvRemove",
    "PageAction",
    "RuleProtocol",
    "RuleResolverProtocol",
]
