"""
規則區塊解析器 (Rule Block Parser)

在轉換文本的同時辨識 MediaWiki 的 -{ ... }- 轉換規則：
- 區塊以 "-{" 開始、以最近的 "}-" 結束，最多巢狀 10 層
- 區塊由內而外解析：外層區塊只會看到內層已輸出的文字
- 區塊以外的文字交給 ZhConverter 轉換（有全域規則時使用 shadow overlay）
- 未閉合的區塊原樣輸出
- 可選擇略過 <script>、<style>、<code>、<pre> 等 HTML 區塊

參考 MediaWiki LanguageConverter::recursiveConvertTopLevel 的行為，
但不對 XSS 提供任何保護。
"""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import TYPE_CHECKING, Callable, List, Optional

from zhvariant.config import TIMING_WIKITEXT
from zhvariant.core.events import ConversionEvent, ConversionEventHandler
from zhvariant.core.protocols.resolver import RuleResolverProtocol
from zhvariant.shadow import ShadowOverlay
from zhvariant.utils.logger import TimingContext, get_logger

if TYPE_CHECKING:
    from zhvariant.converter import ZhConverter

NESTED_RULE_MAX_DEPTH = 10

RULE_START = "-{"
RULE_END = "}-"

_PAT_RULE_START = re.compile(r"-\{")
_PAT_RULE_START_OR_HTML = re.compile(
    r"-\{|<script.*?>.*?</script>|<style.*?>.*?</style>|<code>.*?</code>|<pre.*?>.*?</pre>",
    re.DOTALL,
)
_PAT_RULE_INNER = re.compile(r"-\{|\}-")


class RuleBlockParser:
    """
    單次呼叫用的規則區塊解析器

    建立方式:
        通常透過 ZhConverter.convert_as_wikitext() 間接使用

    Args:
        converter: 基礎轉換器
        resolver: 規則解析器 (parse / page_scan)
        skip_html_code_blocks: 是否原樣保留 HTML 程式碼區塊
        apply_global_rules: 是否套用文本中的全域規則 (H / A / -)
        on_event: 事件回呼
    """

    def __init__(
        self,
        converter: "ZhConverter",
        resolver: RuleResolverProtocol,
        *,
        skip_html_code_blocks: bool = False,
        apply_global_rules: bool = False,
        on_event: Optional[ConversionEventHandler] = None,
    ) -> None:
        self._converter = converter
        self._resolver = resolver
        self._variant = converter.variant
        self._skip_html_code_blocks = skip_html_code_blocks
        self._apply_global_rules = apply_global_rules
        self._on_event = on_event
        self._logger = get_logger("wikitext")

    def convert(self, text: str) -> str:
        with TimingContext(
            TIMING_WIKITEXT,
            self._logger,
            logging.DEBUG,
            callback=self._converter.on_timing,
        ):
            convert_plain = self._select_conversion(text)
            pattern = _PAT_RULE_START_OR_HTML if self._skip_html_code_blocks else _PAT_RULE_START

            output: List[str] = []
            pos = 0
            while True:
                m1 = pattern.search(text, pos)
                if m1 is None:
                    break
                # 頂層 "-{" 之前的文字
                output.append(convert_plain(text[pos : m1.start()]))
                if m1.group() != RULE_START:
                    # HTML 程式碼區塊，原樣保留
                    output.append(m1.group())
                    pos = m1.end()
                    continue
                pos = self._scan_block(text, m1.start(), output)

            if pos < len(text):
                output.append(convert_plain(text[pos:]))
            return "".join(output)

    def _select_conversion(self, text: str) -> Callable[[str], str]:
        """有全域規則時建立本次呼叫的 shadow overlay，否則直接使用基礎轉換"""
        if not self._apply_global_rules:
            return self._converter.convert

        overlay = ShadowOverlay.from_actions(self._resolver.page_scan(text, self._variant))
        if overlay.is_empty:
            return self._converter.convert

        self._logger.debug(
            f"Global rules found: adds={overlay.adds_count}, removes={len(overlay.suppressed)}"
        )
        self._emit(
            {
                "type": "global_rules",
                "variant": self._variant.value,
                "adds": overlay.adds_count,
                "removes": len(overlay.suppressed),
            }
        )
        return partial(self._converter.convert_with_shadow, overlay=overlay)

    def _scan_block(self, text: str, start: int, output: List[str]) -> int:
        """
        從頂層 "-{" 開始掃描直到堆疊清空，回傳掃描結束的位置

        堆疊每層是一個字串片段列表；關閉時由 resolver 輸出，再併入上一層。
        """
        pieces: List[List[str]] = [[]]
        starts: List[int] = [start]
        pos = start + len(RULE_START)

        while True:
            m2 = _PAT_RULE_INNER.search(text, pos)
            if m2 is None:
                break

            if m2.group() == RULE_START:
                if len(pieces) >= NESTED_RULE_MAX_DEPTH:
                    # 超過巢狀上限，"-{" 當作一般文字
                    pieces[-1].append(text[pos : m2.end()])
                else:
                    pieces[-1].append(text[pos : m2.start()])
                    pieces.append([])
                    starts.append(m2.start())
                pos = m2.end()
                continue

            piece = pieces.pop()
            piece.append(text[pos : m2.start()])
            interior = "".join(piece)
            rendered = self._resolver.parse(interior).render_for(self._variant)
            self._emit(
                {
                    "type": "rule",
                    "variant": self._variant.value,
                    "start": starts.pop(),
                    "end": m2.end(),
                    "depth": len(pieces) + 1,
                    "original": interior,
                    "replacement": rendered,
                }
            )
            pos = m2.end()
            if pieces:
                pieces[-1].append(rendered)
            else:
                # 回到頂層
                output.append(rendered)
                return pos

        # 文本結束仍有未閉合的區塊：依原本由左到右的順序原樣輸出
        pieces[-1].append(text[pos:])
        self._logger.debug(f"Unterminated rule block at {starts[0]} (depth={len(pieces)})")
        self._emit(
            {
                "type": "unterminated",
                "variant": self._variant.value,
                "start": starts[0],
                "end": len(text),
                "depth": len(pieces),
            }
        )
        for piece in pieces:
            output.append(RULE_START)
            output.extend(piece)
        return len(text)

    def _emit(self, event: ConversionEvent) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            self._logger.exception("on_event 回呼執行失敗")
