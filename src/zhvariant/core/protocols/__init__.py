"""
Protocols

轉換核心與外部協作者之間的最小介面。
"""

from .resolver import ConvAdd, ConvRemove, PageAction, RuleProtocol, RuleResolverProtocol

__all__ = [
    "ConvAdd",
    "ConvRemove",
    "PageAction",
    "RuleProtocol",
    "RuleResolverProtocol",
]
