"""
頁面全域規則 (Page Rules)

收集文本中所有帶 H / A / - 旗標的 -{ ... }- 區塊。
這些規則影響整份文本的轉換，而不只是區塊本身。

區塊的辨識方式與 RuleBlockParser 相同：由內而外解析、最多巢狀 10 層、
未閉合的區塊不算數。外層區塊看到的是內層已輸出的文字，
因此本體含有巢狀區塊的全域規則也能被收集。
"""

from __future__ import annotations

import re
from typing import Iterator, List

from zhvariant.core.protocols.resolver import PageAction
from zhvariant.rule import ConvAction, ConvRule
from zhvariant.variant import Variant
from zhvariant.wikitext import NESTED_RULE_MAX_DEPTH, RULE_END, RULE_START

_PAT_START = re.compile(re.escape(RULE_START))
_PAT_MARKER = re.compile(f"{re.escape(RULE_START)}|{re.escape(RULE_END)}")


class PageRules:
    def __init__(self, conv_actions: List[ConvAction]) -> None:
        self._conv_actions = conv_actions

    @classmethod
    def from_str(cls, text: str, variant: Variant = Variant.ZH) -> "PageRules":
        """
        掃描文本，依區塊閉合的順序保留帶有動作的規則

        Args:
            text: 整份文本
            variant: 內層區塊併入外層時所用的目標變體
        """
        actions: List[ConvAction] = []
        frames: List[List[str]] = []
        pos = 0
        while True:
            pattern = _PAT_MARKER if frames else _PAT_START
            m = pattern.search(text, pos)
            if m is None:
                break

            if m.group() == RULE_START:
                if len(frames) >= NESTED_RULE_MAX_DEPTH:
                    frames[-1].append(text[pos : m.end()])
                else:
                    if frames:
                        frames[-1].append(text[pos : m.start()])
                    frames.append([])
                pos = m.end()
                continue

            piece = frames.pop()
            piece.append(text[pos : m.start()])
            rule = ConvRule.parse("".join(piece))
            if rule.action is not None:
                actions.append(rule.action)
            if frames:
                frames[-1].append(rule.render_for(variant))
            pos = m.end()
        return cls(actions)

    def __len__(self) -> int:
        return len(self._conv_actions)

    def __iter__(self) -> Iterator[ConvAction]:
        return iter(self._conv_actions)

    def as_conv_actions(self) -> List[ConvAction]:
        return list(self._conv_actions)

    def page_scan(self, variant: Variant) -> List[PageAction]:
        """展開為目標變體的 ConvAdd / ConvRemove 序列"""
        resolved: List[PageAction] = []
        for conv_action in self._conv_actions:
            resolved.extend(conv_action.resolve(variant))
        return resolved
