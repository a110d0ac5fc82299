"""
Rule Resolver Protocol

轉換核心只透過這組最小介面使用規則解析器：
- parse(interior) -> Rule：解析 -{ ... }- 內部文字，永不拋錯
- Rule.render_for(variant) -> str：此處應輸出的文字
- page_scan(text, variant) -> [ConvAdd | ConvRemove]：整頁的全域規則
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from zhvariant.variant import Variant


@dataclass(frozen=True)
class ConvAdd:
    """全域規則：新增 source -> target"""

    source: str
    target: str


@dataclass(frozen=True)
class ConvRemove:
    """全域規則：停用 source"""

    source: str


PageAction = Union[ConvAdd, ConvRemove]


@runtime_checkable
class RuleProtocol(Protocol):
    def render_for(self, variant: "Variant") -> str:
        """此規則在目標變體下的輸出文字"""
        ...


@runtime_checkable
class RuleResolverProtocol(Protocol):
    def parse(self, text: str) -> RuleProtocol:
        """解析規則區塊內部文字（不可拋錯）"""
        ...

    def page_scan(self, text: str, variant: "Variant") -> List[PageAction]:
        """掃描整份文本，依出現順序回傳已對目標變體展開的全域規則"""
        ...
