"""
MediaWiki 字詞轉換規則

解析 -{ ... }- 區塊內部的語法：

    -{zh-hans:计算机;zh-hant:電腦;}-          雙向規則 (bidirectional)
    -{计算机=>zh-tw:電腦;}-                    單向規則 (unidirectional)
    -{H|zh-cn:鹿;zh:馬;}-                      帶旗標的規則

支援的旗標（參考 zh.wikipedia Help:高级字词转换语法）：
    A  新增全域規則並輸出        H  新增全域規則、不輸出
    -  移除全域規則、不輸出      R  原樣輸出 (raw)
    D  輸出規則描述              T  標題規則、不輸出
    N  輸出變體名稱              S  只輸出（預設）

解析永不拋錯：不是合法規則的內容原樣輸出。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from zhvariant.core.protocols.resolver import ConvAdd, ConvRemove, PageAction
from zhvariant.variant import Variant

KNOWN_FLAGS = frozenset({"A", "H", "-", "R", "D", "T", "N", "S"})
# 出現時會蓋掉其他旗標，依優先順序
_EXCLUSIVE_FLAGS = ("R", "N", "-", "T")
_HIDDEN_FLAGS = frozenset({"-", "H", "T"})

_VARIANT_CODES = "|".join(
    re.escape(v.value) for v in sorted(Variant, key=lambda v: len(v.value), reverse=True)
)
# 只在後面緊接「變體代碼:」或「xxx=>變體代碼:」的分號處切開，其他分號屬於文字本身
_VARIANT_SEPARATOR = re.compile(
    rf";\s*(?=(?:[^;]*?=>\s*)?(?:{_VARIANT_CODES})\s*:)", re.IGNORECASE
)


@dataclass
class Conv:
    """
    一條轉換規則的內容

    Attributes:
        bid: 雙向表 {變體: 文字}
        unid: 單向表 [(來源, 變體, 目標)]
    """

    bid: Dict[Variant, str] = field(default_factory=dict)
    unid: List[Tuple[str, Variant, str]] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "Conv":
        """
        解析 "zh-hans:A;zh-hant:B;" 或 "A=>zh-tw:B;" 形式的規則

        Raises:
            ValueError: 內容不是合法的轉換規則
        """
        rules = text.strip()
        if rules.endswith(";"):
            rules = rules[:-1]

        bid: Dict[Variant, str] = {}
        unid: List[Tuple[str, Variant, str]] = []
        for choice in _VARIANT_SEPARATOR.split(rules):
            head, sep, to = choice.partition(":")
            if not sep:
                # 語法錯誤，略過此段
                continue
            to = to.strip()
            source, arrow, code = head.partition("=>")
            if arrow:
                variant = Variant(code.strip())
                source = source.strip()
                if source:
                    unid.append((source, variant, to))
            else:
                variant = Variant(head.strip())
                if to:
                    bid[variant] = to

        if not bid and not unid:
            raise ValueError(f"不是合法的轉換規則: {text!r}")
        return cls(bid=bid, unid=unid)

    def get_text_by_target(self, variant: Variant) -> str:
        """
        取得目標變體應顯示的文字

        順序：雙向表（含 fallback）→ 該變體的單向規則 → 第一個雙向文字 → 第一個單向來源
        """
        for candidate in (variant, *variant.fallbacks()):
            text = self.bid.get(candidate)
            if text is not None:
                return text
        for source, target_variant, to in self.unid:
            if target_variant is variant:
                return to
        if self.bid:
            return next(iter(self.bid.values()))
        return self.unid[0][0] if self.unid else ""

    def get_conv_pairs(self, variant: Variant) -> List[Tuple[str, str]]:
        """
        展開為目標變體的 (來源, 目標) 詞對

        雙向表中其他變體的文字都轉成目標變體的文字；
        該變體的單向規則優先於雙向表。
        """
        pairs: Dict[str, str] = {}
        target = None
        for candidate in (variant, *variant.fallbacks()):
            if candidate in self.bid:
                target = self.bid[candidate]
                break
        if target is not None:
            for source_variant, source in self.bid.items():
                if source_variant is not variant:
                    pairs[source] = target
        for source, target_variant, to in self.unid:
            if target_variant is variant:
                pairs[source] = to
        return list(pairs.items())

    def describe(self) -> str:
        """D 旗標的輸出：列出規則中每個變體的文字"""
        parts = [f"{v.display_name}：{text}；" for v, text in self.bid.items()]
        parts.extend(f"{source}⇒{v.display_name}：{to}；" for source, v, to in self.unid)
        return "".join(parts)


@dataclass(frozen=True)
class ConvAction:
    """頁面全域規則：新增 (H/A) 或移除 (-) 一組 Conv"""

    adds: bool
    conv: Conv

    def resolve(self, variant: Variant) -> List[PageAction]:
        actions: List[PageAction] = []
        for source, target in self.conv.get_conv_pairs(variant):
            if not source:
                continue
            actions.append(ConvAdd(source, target) if self.adds else ConvRemove(source))
        return actions


def _split_flags(text: str) -> Tuple[FrozenSet[str], str]:
    head, sep, body = text.partition("|")
    if not sep:
        return frozenset(), text
    flags = {flag.strip() for flag in head.split(";") if flag.strip()}
    if not flags or not flags <= KNOWN_FLAGS:
        # 不是旗標，"|" 屬於文字本身
        return frozenset(), text
    for exclusive in _EXCLUSIVE_FLAGS:
        if exclusive in flags:
            return frozenset({exclusive}), body
    return frozenset(flags), body


@dataclass(frozen=True)
class ConvRule:
    """一個 -{ ... }- 區塊的解析結果"""

    text: str
    flags: FrozenSet[str] = frozenset()
    conv: Optional[Conv] = None

    @classmethod
    def parse(cls, text: str) -> "ConvRule":
        flags, body = _split_flags(text)
        try:
            conv = Conv.parse(body)
        except ValueError:
            conv = None
        return cls(text=body, flags=flags, conv=conv)

    @property
    def action(self) -> Optional[ConvAction]:
        if self.conv is None:
            return None
        if "-" in self.flags:
            return ConvAction(adds=False, conv=self.conv)
        if "H" in self.flags or "A" in self.flags:
            return ConvAction(adds=True, conv=self.conv)
        return None

    def render_for(self, variant: Variant) -> str:
        flags = self.flags
        if "R" in flags:
            return self.text
        if "N" in flags:
            try:
                return Variant(self.text.strip()).display_name
            except ValueError:
                return self.text
        if flags & _HIDDEN_FLAGS:
            return ""
        if self.conv is None:
            return self.text
        if "D" in flags:
            return self.conv.describe()
        return self.conv.get_text_by_target(variant)
