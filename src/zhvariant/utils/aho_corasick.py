"""
Aho-Corasick 多模式字串匹配（leftmost-longest，無第三方依賴）

用途：
- ZhConverter 的詞表索引：一次線性掃描找出所有要替換的來源詞
- 匹配語義為 leftmost-longest：起點最靠左者優先，同起點取最長者
- 輸出的 matches 互不重疊，下一次搜尋從上一個 match 的結尾繼續

以 Python str 的索引為單位（code point），不會切開任何字元。
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, Iterator, List, NamedTuple, Optional, Tuple, TypeVar

T = TypeVar("T")


class Match(NamedTuple):
    start: int
    end: int
    value: Any


@dataclass
class _Node(Generic[T]):
    next: Dict[str, int] = field(default_factory=dict)
    fail: int = 0
    depth: int = 0
    # 以此狀態結尾的最長 pattern (含 fail link 繼承)；最長者起點最靠左
    output: Optional[Tuple[int, T]] = None


class AhoCorasick(Generic[T]):
    def __init__(self) -> None:
        self._nodes: List[_Node[T]] = [_Node()]
        self._size = 0
        self._built = False

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "AhoCorasick[int]":
        """依序以 0, 1, 2... 作為 value 建立並 build 完成的 automaton"""
        automaton: AhoCorasick[int] = cls()
        for index, word in enumerate(words):
            automaton.add(word, index)
        automaton.build()
        return automaton

    def __len__(self) -> int:
        return self._size

    def add(self, word: str, value: T) -> None:
        if self._built:
            raise RuntimeError("AhoCorasick 已 build()，不可再 add()")
        if not word:
            raise ValueError("AhoCorasick pattern 不可為空字串")

        node = 0
        for ch in word:
            nxt = self._nodes[node].next.get(ch)
            if nxt is None:
                nxt = len(self._nodes)
                self._nodes[node].next[ch] = nxt
                self._nodes.append(_Node(depth=self._nodes[node].depth + 1))
            node = nxt
        if self._nodes[node].output is not None:
            raise ValueError(f"重複的 pattern: {word!r}")
        self._nodes[node].output = (len(word), value)
        self._size += 1

    def build(self) -> None:
        if self._built:
            return

        queue: deque[int] = deque()
        for ch, nxt in self._nodes[0].next.items():
            self._nodes[nxt].fail = 0
            queue.append(nxt)

        while queue:
            r = queue.popleft()
            for ch, u in self._nodes[r].next.items():
                queue.append(u)

                v = self._nodes[r].fail
                while v != 0 and ch not in self._nodes[v].next:
                    v = self._nodes[v].fail
                self._nodes[u].fail = self._nodes[v].next.get(ch, 0)

                # 自身沒有輸出時，繼承 fail link 上最長的輸出
                if self._nodes[u].output is None:
                    self._nodes[u].output = self._nodes[self._nodes[u].fail].output

        self._built = True

    def find(self, text: str, start: int = 0) -> Optional[Match]:
        """
        從 start 開始找第一個 leftmost-longest match

        Returns:
            Match(start, end, value)，找不到時為 None
            - start: match 起始 index（含）
            - end: match 結束 index（不含）
        """
        if not self._built:
            self.build()

        nodes = self._nodes
        state = 0
        best: Optional[Match] = None
        for i in range(start, len(text)):
            ch = text[i]
            while state != 0 and ch not in nodes[state].next:
                state = nodes[state].fail
            state = nodes[state].next.get(ch, 0)
            node = nodes[state]

            # 目前狀態能延伸的最早起點已在 best 之後，不可能再有更好的 match
            if best is not None and i + 1 - node.depth > best.start:
                break

            if node.output is None:
                continue
            length, value = node.output
            s = i + 1 - length
            if best is None or s < best.start or (s == best.start and i + 1 > best.end):
                best = Match(s, i + 1, value)
        return best

    def find_iter(self, text: str, start: int = 0) -> Iterator[Match]:
        """
        逐一輸出互不重疊的 leftmost-longest matches

        每個 match 之後從其 end 繼續搜尋。
        """
        pos = start
        while pos < len(text):
            match = self.find(text, pos)
            if match is None:
                return
            yield match
            pos = match.end
