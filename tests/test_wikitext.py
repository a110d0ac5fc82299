"""
規則區塊解析 (convert_as_wikitext) 測試
"""
import pytest

from zhvariant import (
    NESTED_RULE_MAX_DEPTH,
    ConverterConfig,
    RuleResolverProtocol,
    Variant,
    ZhConverter,
    ZhConverterBuilder,
)


def _converter(pairs, target=Variant.ZH_CN):
    return ZhConverter.from_pairs(pairs, target=target)


class TestBlocks:
    """區塊辨識與輸出"""

    @pytest.mark.parametrize("text", ["", "abc", "aXbXc", "}-", "}-a-", "a-b{c", "a{-b"])
    def test_no_markers_equals_convert(self, text):
        """不含規則區塊時與 convert() 相同"""
        converter = _converter([("a", "A"), ("X", "Y")])
        assert converter.convert_as_wikitext(text) == converter.convert(text)

    def test_block_content_not_converted(self):
        converter = _converter([("干", "乾")])
        assert converter.convert_as_wikitext("天-{干}-物燥") == "天干物燥"
        assert converter.convert_as_wikitext("天干物燥") == "天乾物燥"

    def test_variant_choice(self):
        converter = _converter([], target=Variant.ZH_TW)
        text = "用-{zh-hans:计算机;zh-hant:電腦;}-上網"
        assert converter.convert_as_wikitext(text) == "用電腦上網"

    def test_hidden_rule_renders_nothing(self):
        converter = _converter([("馬", "马")])
        assert converter.convert_as_wikitext("-{H|zh:馬;zh-cn:鹿;}-馬克思") == "马克思"

    def test_unterminated_block(self):
        """'abc-{def' 輸出 convert('abc') + '-{def'"""
        converter = _converter([("a", "A"), ("d", "D")])
        assert converter.convert_as_wikitext("abc-{def") == "Abc-{def"

    def test_nested_unterminated_preserves_order(self):
        converter = _converter([])
        assert converter.convert_as_wikitext("x-{a-{b}-c-{d") == "x-{abc-{d"
        assert converter.convert_as_wikitext("x-{a-{b-{c") == "x-{a-{b-{c"

    def test_depth_cap(self):
        """第 11 層的 '-{' 當作一般文字"""
        assert NESTED_RULE_MAX_DEPTH == 10
        converter = _converter([])
        text = "-{" * 11 + "x" + "}-" * 11
        assert converter.convert_as_wikitext(text) == "-{x}-"

    def test_nested_bottom_up(self):
        """外層區塊只看得到內層已輸出的文字"""
        converter = _converter([])
        text = "-{zh-cn:-{zh-cn:甲;zh-tw:乙}-;zh-tw:丙}-"
        assert converter.convert_as_wikitext(text) == "甲"

    def test_text_between_blocks(self):
        converter = _converter([("a", "A")])
        assert converter.convert_as_wikitext("a-{a}-a-{a}-a") == "AaAaA"


class TestHtmlSkip:
    """略過 HTML 程式碼區塊"""

    def test_code_block_kept(self):
        converter = _converter([("a", "A")])
        text = "a<code>a-{b}-</code>a"
        assert converter.convert_as_wikitext(text, skip_html_code_blocks=True) == (
            "A<code>a-{b}-</code>A"
        )
        assert converter.convert_as_wikitext(text) == "A<code>Ab</code>A"

    @pytest.mark.parametrize(
        "block",
        [
            '<pre class="x">a</pre>',
            "<script>var a = 1;</script>",
            "<style type=\"text/css\">\na { }\n</style>",
        ],
    )
    def test_other_blocks_kept(self, block):
        converter = _converter([("a", "A")])
        result = converter.convert_as_wikitext("a" + block + "a", skip_html_code_blocks=True)
        assert result == "A" + block + "A"


class TestGlobalRules:
    """全域規則 (H / A / -)"""

    def test_hidden_add_rule(self):
        converter = _converter([("馬", "马"), ("義", "义")])
        text = "-{H|zh:馬;zh-cn:鹿;}-馬克思主義"
        assert converter.convert_as_wikitext(text, apply_global_rules=True) == "鹿克思主义"

    def test_add_rule_renders_and_applies(self):
        converter = _converter([])
        text = "-{A|zh-cn:鹿;zh-tw:馬;}-與馬"
        assert converter.convert_as_wikitext(text, apply_global_rules=True) == "鹿與鹿"
        assert converter.convert_as_wikitext(text) == "鹿與馬"

    def test_global_rule_applies_before_declaration(self):
        converter = _converter([])
        text = "馬-{H|zh-cn:鹿;zh-tw:馬;}-"
        assert converter.convert_as_wikitext(text, apply_global_rules=True) == "鹿"

    def test_remove_only_rule_suppresses(self):
        """只有移除規則時，被移除的詞原樣通過"""
        converter = _converter([("X", "Y")])
        text = "-{-|zh-cn:Y;zh-tw:X;}-aXbX"
        assert converter.convert_as_wikitext(text, apply_global_rules=True) == "aXbX"
        assert converter.convert_as_wikitext(text) == "aYbY"

    def test_global_rule_inside_nested_block(self):
        converter = _converter([])
        text = "-{R|-{H|zh-cn:鹿;zh-tw:馬;}-}-馬"
        assert converter.convert_as_wikitext(text, apply_global_rules=True) == "鹿"

    def test_global_rule_with_nested_block_in_body(self):
        converter = _converter([])
        text = "-{H|zh-cn:-{鹿}-;zh-tw:馬;}-馬"
        assert converter.convert_as_wikitext(text, apply_global_rules=True) == "鹿"

    def test_extended_skips_html_and_applies_rules(self):
        converter = _converter([("馬", "马")])
        text = "-{H|zh-cn:鹿;zh-tw:馬;}-馬<code>馬</code>"
        assert converter.convert_as_wikitext_extended(text) == "鹿<code>馬</code>"

    def test_basic_ignores_global_rules(self):
        converter = _converter([("馬", "马")])
        text = "-{H|zh-cn:鹿;zh-tw:馬;}-馬"
        assert converter.convert_as_wikitext_basic(text) == "马"


class TestResolverInjection:
    """自訂規則解析器"""

    class _UpperRule:
        def __init__(self, text):
            self.text = text

        def render_for(self, variant):
            return f"{self.text.upper()}@{variant}"

    class _UpperResolver:
        def __init__(self):
            self.parsed = []

        def parse(self, text):
            self.parsed.append(text)
            return TestResolverInjection._UpperRule(text)

        def page_scan(self, text, variant):
            return []

    def test_custom_resolver(self):
        resolver = self._UpperResolver()
        assert isinstance(resolver, RuleResolverProtocol)

        converter = _converter([], target=Variant.ZH_TW)
        result = converter.convert_as_wikitext("a-{b-{c}-}-d", resolver=resolver)

        assert resolver.parsed == ["c", "bC@zh-tw"]
        assert result == "aBC@ZH-TW@zh-tw" + "d"


class TestEvents:
    """事件回呼"""

    def test_rule_event(self):
        events = []
        converter = _converter([])
        converter.convert_as_wikitext("a-{b}-c", on_event=events.append)

        assert events == [
            {
                "type": "rule",
                "variant": "zh-cn",
                "start": 1,
                "end": 6,
                "depth": 1,
                "original": "b",
                "replacement": "b",
            }
        ]

    def test_nested_rule_depth(self):
        events = []
        _converter([]).convert_as_wikitext("-{a-{b}-}-", on_event=events.append)
        assert [(e["depth"], e["original"]) for e in events] == [(2, "b"), (1, "ab")]

    def test_unterminated_event(self):
        events = []
        _converter([]).convert_as_wikitext("ab-{c-{d", on_event=events.append)
        assert events == [
            {"type": "unterminated", "variant": "zh-cn", "start": 2, "end": 8, "depth": 2}
        ]

    def test_global_rules_event(self):
        events = []
        _converter([]).convert_as_wikitext(
            "-{H|zh-cn:鹿;zh-tw:馬;}--{-|zh-cn:Y;zh-tw:X;}-",
            apply_global_rules=True,
            on_event=events.append,
        )
        global_events = [e for e in events if e["type"] == "global_rules"]
        assert global_events == [
            {"type": "global_rules", "variant": "zh-cn", "adds": 1, "removes": 1}
        ]

    def test_handler_error_does_not_break_conversion(self):
        def handler(event):
            raise RuntimeError("boom")

        converter = _converter([("a", "A")])
        assert converter.convert_as_wikitext("a-{a}-a", on_event=handler) == "AaA"


class TestTiming:
    def test_on_timing_called_for_wikitext(self):
        calls = []
        config = ConverterConfig(on_timing=lambda op, elapsed: calls.append(op))
        converter = ZhConverterBuilder(config=config).table({"a": "b"}).build()
        converter.convert_as_wikitext("a-{a}-")

        assert calls == ["ZhConverterBuilder.build", "RuleBlockParser.convert"]

    def test_timing_names(self):
        from zhvariant.config import TIMING_BUILD, TIMING_WIKITEXT

        calls = []
        config = ConverterConfig(on_timing=lambda op, elapsed: calls.append(op))
        converter = ZhConverterBuilder(config).target(Variant.ZH_CN).build()
        converter.convert_as_wikitext_extended("-{H|zh-cn:鹿;zh-tw:馬;}-馬")

        assert calls == [TIMING_BUILD, TIMING_WIKITEXT]
