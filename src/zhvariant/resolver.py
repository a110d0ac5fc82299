"""
預設規則解析器

以 MediaWiki 語法實作 RuleResolverProtocol，供 RuleBlockParser 使用。
需要不同的區塊語法時，實作同樣兩個方法的物件即可替換。
"""

from __future__ import annotations

from typing import List

from zhvariant.core.protocols.resolver import PageAction
from zhvariant.pagerules import PageRules
from zhvariant.rule import ConvRule
from zhvariant.variant import Variant


class MediaWikiRuleResolver:
    def parse(self, text: str) -> ConvRule:
        return ConvRule.parse(text)

    def page_scan(self, text: str, variant: Variant) -> List[PageAction]:
        return PageRules.from_str(text, variant).page_scan(variant)


DEFAULT_RESOLVER = MediaWikiRuleResolver()
