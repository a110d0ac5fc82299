"""
轉換器模組

ZhConverter 以 leftmost-longest 的 Aho-Corasick automaton 對文本做一次線性掃描，
把詞表中的來源詞替換成目標詞。ZhConverterBuilder 負責彙整詞表與增刪規則。

使用方式:
    from zhvariant import ZhConverterBuilder, Variant

    converter = (
        ZhConverterBuilder()
        .target(Variant.ZH_TW)
        .table({"软件": "軟體", "鼠标": "滑鼠"})
        .conv_lines("zh-cn:雾都孤儿;zh-tw:孤雛淚;zh-hk:苦海孤雛;")
        .build()
    )
    converter.convert("鼠标与软件")
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from zhvariant.config import DEFAULT_CONFIG, TIMING_BUILD, ConverterConfig
from zhvariant.core.events import ConversionEventHandler
from zhvariant.core.protocols.resolver import RuleResolverProtocol
from zhvariant.pagerules import PageRules
from zhvariant.resolver import DEFAULT_RESOLVER
from zhvariant.rule import Conv, ConvAction
from zhvariant.shadow import ShadowOverlay
from zhvariant.tables import Table, expand_table
from zhvariant.utils.aho_corasick import AhoCorasick
from zhvariant.utils.logger import TimingContext, get_logger
from zhvariant.variant import Variant
from zhvariant.wikitext import RuleBlockParser


class ZhConverter:
    """
    中文變體轉換器

    建構後不可變，可在多執行緒間共用。一般透過 ZhConverterBuilder 建立。

    Args:
        automaton: 已 build 的 automaton，value 為 target_words 的索引
        target_words: 目標詞列表，與 automaton 的 value 對齊
        variant: 目標變體，解析轉換規則時使用
        config: 轉換器配置
    """

    def __init__(
        self,
        automaton: AhoCorasick[int],
        target_words: Sequence[str],
        variant: Variant = Variant.ZH,
        config: Optional[ConverterConfig] = None,
    ) -> None:
        self._automaton = automaton
        self._target_words: Tuple[str, ...] = tuple(target_words)
        self._variant = variant
        self._config = config or DEFAULT_CONFIG

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[str, str]],
        target: Variant = Variant.ZH,
    ) -> "ZhConverter":
        """由 (來源, 目標) 詞對建立轉換器，內部使用 ZhConverterBuilder"""
        builder = ZhConverterBuilder().target(target)
        for source, to in pairs:
            builder.add_conv_pair(source, to)
        return builder.build()

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def on_timing(self) -> Optional[Callable[[str, float], None]]:
        return self._config.on_timing

    def __len__(self) -> int:
        return len(self._target_words)

    def convert(self, text: str) -> str:
        """轉換文本：未命中的部分原樣保留，命中的來源詞替換為目標詞"""
        output: List[str] = []
        last = 0
        for start, end, index in self._automaton.find_iter(text):
            if start > last:
                output.append(text[last:start])
            output.append(self._target_words[index])
            last = end
        output.append(text[last:])
        return "".join(output)

    def convert_with_shadow(self, text: str, overlay: ShadowOverlay) -> str:
        """
        搭配 shadow overlay 轉換文本

        每一步比較基礎詞表與 overlay 的下一個 match：
        - overlay 的 (start, end) 不大於基礎詞表的 (start, end) 時，採用 overlay
        - 採用基礎詞表但該詞被 overlay 停用時，只輸出一個字元並從下一個字元重新比較

        最差時間複雜度為 O(n*m)，m 為 overlay 中最長來源詞的長度。
        兩邊的下一個 match 會保留到掃描位置越過其起點為止，不必每一步重新搜尋。
        """
        output: List[str] = []
        pos = 0
        length = len(text)
        shadow = overlay.automaton
        base_match = self._automaton.find(text, pos)
        shadow_match = shadow.find(text, pos) if shadow is not None else None
        while pos < length:
            # 從較早位置找到的 leftmost-longest match，起點不小於 pos 時仍然有效
            if base_match is not None and base_match.start < pos:
                base_match = self._automaton.find(text, pos)
            if shadow_match is not None and shadow_match.start < pos:
                shadow_match = shadow.find(text, pos)

            if shadow_match is not None and (
                base_match is None
                or (shadow_match.start, shadow_match.end) <= (base_match.start, base_match.end)
            ):
                start, end = shadow_match.start, shadow_match.end
                replacement = overlay.target_words[shadow_match.value]
            elif base_match is not None:
                start, end = base_match.start, base_match.end
                replacement = self._target_words[base_match.value]
                if overlay.suppresses(text[start:end], replacement):
                    # 降級：跳過一個字元後重新搜尋
                    output.append(text[pos])
                    pos += 1
                    continue
            else:
                output.append(text[pos:])
                break

            if start > pos:
                output.append(text[pos:start])
            output.append(replacement)
            pos = end
        return "".join(output)

    def convert_as_wikitext(
        self,
        text: str,
        skip_html_code_blocks: bool = False,
        apply_global_rules: bool = False,
        *,
        resolver: Optional[RuleResolverProtocol] = None,
        on_event: Optional[ConversionEventHandler] = None,
    ) -> str:
        """
        轉換文本，同時解析並套用其中的 MediaWiki 轉換規則

        Args:
            text: 輸入文本
            skip_html_code_blocks: 原樣保留 <script>、<style>、<code>、<pre> 區塊
            apply_global_rules: 套用 -{H|...}-、-{A|...}-、-{-|...}- 等全域規則
            resolver: 規則解析器，預設為 MediaWiki 語法
            on_event: 事件回呼

        不含任何規則區塊的文本，結果與 convert() 相同。
        """
        parser = RuleBlockParser(
            self,
            resolver or DEFAULT_RESOLVER,
            skip_html_code_blocks=skip_html_code_blocks,
            apply_global_rules=apply_global_rules,
            on_event=on_event,
        )
        return parser.convert(text)

    def convert_as_wikitext_basic(self, text: str) -> str:
        """
        只套用 -{FOO}- 與 -{zh-hans:A;zh-hant:B}- 這類區塊規則

        全域規則（如 -{H|...}-）不生效，也不略過 HTML 程式碼區塊。
        """
        return self.convert_as_wikitext(text, False, False)

    def convert_as_wikitext_extended(self, text: str) -> str:
        """
        套用區塊規則與全域規則，並略過 HTML 程式碼區塊

        因為全域規則需要額外的 overlay 比對，速度明顯慢於 convert()。
        """
        return self.convert_as_wikitext(text, True, True)

    def count_matched(self, text: str) -> int:
        """計算文本中會被替換的來源詞總長度"""
        return sum(end - start for start, end, _ in self._automaton.find_iter(text))


class ZhConverterBuilder:
    """
    ZhConverter 建構器

    優先順序：
    - 多個詞表之間，後加入的詞表覆蓋先加入者
    - add 系列規則覆蓋詞表
    - remove 系列規則最後套用，移除所有同來源詞的項目（與呼叫順序無關）

    範例:
        >>> converter = (
        ...     ZhConverterBuilder()
        ...     .target(Variant.ZH_CN)
        ...     .table({"X": "Y"})
        ...     .add_conv_pair("X", "W")
        ...     .build()
        ... )
        >>> converter.convert("X")
        'W'
    """

    def __init__(self, config: Optional[ConverterConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._target = Variant.ZH
        self._tables: List[Table] = []
        self._adds: Dict[str, str] = {}
        self._removes: Dict[str, str] = {}
        self._logger = get_logger("converter.builder")

    def target(self, variant: Variant) -> "ZhConverterBuilder":
        """
        設定目標變體

        只影響從轉換規則（Conv / conv_lines / 頁面規則）展開詞對；
        只使用詞表時目標變體沒有作用。
        """
        self._target = Variant(variant)
        return self

    def table(self, table: Table) -> "ZhConverterBuilder":
        """加入一個詞表，如 tables.get_builtin_tables() 的項目"""
        self._tables.append(table)
        return self

    def tables(self, tables: Iterable[Table]) -> "ZhConverterBuilder":
        self._tables.extend(tables)
        return self

    def add_conv_pair(self, source: str, target: str) -> "ZhConverterBuilder":
        """
        新增單一 source -> target 詞對，優先於詞表

        Raises:
            ValueError: source 為空字串
        """
        if not source:
            raise ValueError("Conv pair should have non-empty source.")
        self._adds[source] = target
        return self

    def remove_conv_pair(self, source: str, target: Optional[str] = None) -> "ZhConverterBuilder":
        """
        移除同 source 的所有詞對，不論來自詞表、add_conv_pair 或 conv_lines

        Raises:
            ValueError: source 為空字串
        """
        if not source:
            raise ValueError("Conv pair should have non-empty source.")
        self._removes[source] = target if target is not None else ""
        return self

    def add_conv(self, conv: Conv) -> "ZhConverterBuilder":
        """新增一條 Conv 規則，依目標變體展開後加入"""
        for source, target in conv.get_conv_pairs(self._target):
            self.add_conv_pair(source, target)
        return self

    def remove_conv(self, conv: Conv) -> "ZhConverterBuilder":
        """移除一條 Conv 規則展開後的所有來源詞"""
        for source, target in conv.get_conv_pairs(self._target):
            self.remove_conv_pair(source, target)
        return self

    def conv_lines(self, lines: str) -> "ZhConverterBuilder":
        """
        逐行加入轉換規則（如 CGroup 內容），無法解析的行略過

        範例:
            zh-cn:天堂执法者; zh-hk:夏威夷探案; zh-tw:檀島警騎2.0;
            zh-cn:史蒂芬·'史蒂夫'·麦格瑞特; zh-tw:史提夫·麥加雷; zh-hk:麥星帆;
        """
        for line in lines.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                conv = Conv.parse(line)
            except ValueError:
                self._logger.debug(f"Skipped invalid conv line: {line!r}")
                continue
            self.add_conv(conv)
        return self

    def page_rules(self, page_rules: PageRules) -> "ZhConverterBuilder":
        """加入從頁面收集的全域規則"""
        return self._conv_actions(page_rules.as_conv_actions())

    def rules_from_page(self, text: str) -> "ZhConverterBuilder":
        """從文本中收集全域規則並加入，page_rules() 的便捷版本"""
        return self.page_rules(PageRules.from_str(text, self._target))

    def _conv_actions(self, conv_actions: Iterable[ConvAction]) -> "ZhConverterBuilder":
        for conv_action in conv_actions:
            if conv_action.adds:
                self.add_conv(conv_action.conv)
            else:
                self.remove_conv(conv_action.conv)
        return self

    def build(self) -> ZhConverter:
        """
        彙整詞表與規則，建立 automaton 與目標詞表，產生 ZhConverter
        """
        with TimingContext(
            TIMING_BUILD,
            self._logger,
            logging.DEBUG,
            callback=self._config.on_timing,
        ):
            mapping: Dict[str, str] = {}
            for table in self._tables:
                for source, target in expand_table(table):
                    # 空來源詞無法放進 automaton
                    if source:
                        mapping[source] = target
            mapping.update(self._adds)
            for source in self._removes:
                mapping.pop(source, None)

            automaton = AhoCorasick.from_words(mapping)
            self._logger.debug(
                f"Building converter for {self._target.value}: tables={len(self._tables)}, "
                f"adds={len(self._adds)}, removes={len(self._removes)}, entries={len(mapping)}"
            )
            return ZhConverter(
                automaton,
                list(mapping.values()),
                self._target,
                config=self._config,
            )
