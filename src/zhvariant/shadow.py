"""
Shadow Overlay

單次呼叫範圍內、疊在 ZhConverter 之上的暫時規則層：
- 第二個 automaton（全域 ConvAdd 規則）
- 被停用的詞集合（全域 ConvRemove 規則）

編譯好的 automaton 不可變，因此「移除規則」是命中後的過濾，而不是修改詞表。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

from zhvariant.core.protocols.resolver import ConvRemove, PageAction
from zhvariant.utils.aho_corasick import AhoCorasick


@dataclass(frozen=True)
class ShadowOverlay:
    automaton: Optional[AhoCorasick[int]] = None
    target_words: Tuple[str, ...] = ()
    suppressed: FrozenSet[str] = frozenset()

    @classmethod
    def from_actions(cls, actions: Iterable[PageAction]) -> "ShadowOverlay":
        """
        由全域規則建立 overlay

        後出現的 ConvAdd 覆蓋先前同 source 的 ConvAdd；
        只有存在 ConvAdd 時才編譯第二個 automaton。
        """
        adds: Dict[str, str] = {}
        suppressed: Set[str] = set()
        for action in actions:
            if isinstance(action, ConvRemove):
                if action.source:
                    suppressed.add(action.source)
            elif action.source:
                adds[action.source] = action.target

        automaton = AhoCorasick.from_words(adds) if adds else None
        return cls(
            automaton=automaton,
            target_words=tuple(adds.values()),
            suppressed=frozenset(suppressed),
        )

    @property
    def is_empty(self) -> bool:
        return self.automaton is None and not self.suppressed

    @property
    def adds_count(self) -> int:
        return len(self.target_words)

    def suppresses(self, source: str, target: str) -> bool:
        """基礎詞表的命中 (source -> target) 是否被本次的移除規則停用"""
        return target in self.suppressed or source in self.suppressed
