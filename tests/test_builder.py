"""
ZhConverterBuilder 測試
"""
import pytest

from zhvariant import Conv, Variant, ZhConverterBuilder


class TestPrecedence:
    """詞表、新增與移除規則的優先順序"""

    def test_remove_beats_table(self):
        """詞表 {'X': 'Y'} 加上 remove('X', 'Y')，'X' 原樣輸出"""
        converter = ZhConverterBuilder().table({"X": "Y"}).remove_conv_pair("X", "Y").build()
        assert converter.convert("X") == "X"

    def test_add_beats_table(self):
        """詞表 {'X': 'Y'} 加上 add('X', 'W')，'X' 轉為 'W'"""
        converter = ZhConverterBuilder().table({"X": "Y"}).add_conv_pair("X", "W").build()
        assert converter.convert("X") == "W"

    def test_remove_beats_add_regardless_of_order(self):
        """移除規則與呼叫順序無關"""
        first = ZhConverterBuilder().add_conv_pair("X", "W").remove_conv_pair("X").build()
        second = ZhConverterBuilder().remove_conv_pair("X").add_conv_pair("X", "W").build()
        assert first.convert("XX") == "XX"
        assert second.convert("XX") == "XX"

    def test_add_before_table_still_wins(self):
        converter = ZhConverterBuilder().add_conv_pair("X", "W").table({"X": "Y"}).build()
        assert converter.convert("X") == "W"

    def test_later_table_overrides_earlier(self):
        converter = ZhConverterBuilder().table({"X": "1"}).table({"X": "2", "Z": "3"}).build()
        assert converter.convert("XZ") == "23"

    def test_remove_ignores_target(self):
        """移除所有同來源詞的項目，不論目標詞"""
        converter = ZhConverterBuilder().table({"X": "Y"}).remove_conv_pair("X", "Q").build()
        assert converter.convert("X") == "X"

    def test_removed_source_reduces_size(self):
        converter = (
            ZhConverterBuilder()
            .tables([{"a": "1", "b": "2"}, {"c": "3"}])
            .remove_conv_pair("b")
            .build()
        )
        assert len(converter) == 2


class TestEmptySource:
    """空來源詞是配置錯誤"""

    def test_add_empty_source_raises(self):
        with pytest.raises(ValueError):
            ZhConverterBuilder().add_conv_pair("", "x")

    def test_remove_empty_source_raises(self):
        with pytest.raises(ValueError):
            ZhConverterBuilder().remove_conv_pair("")

    def test_empty_source_in_table_skipped(self):
        converter = ZhConverterBuilder().table({"": "x", "a": "b"}).build()
        assert converter.convert("a") == "b"
        assert len(converter) == 1


class TestTableFormats:
    """詞表格式"""

    def test_pipe_separated_strings(self):
        converter = ZhConverterBuilder().table(("汉|字", "漢|字")).build()
        assert converter.convert("汉字") == "漢字"

    def test_parallel_sequences(self):
        converter = ZhConverterBuilder().table((["鼠标", "软件"], ["滑鼠", "軟體"])).build()
        assert converter.convert("鼠标软件") == "滑鼠軟體"

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            ZhConverterBuilder().table(("a|b", "A")).build()


class TestRules:
    """由轉換規則加入詞對"""

    def test_conv_lines(self):
        """CGroup 形式的多行規則，無法解析的行略過"""
        lines = (
            "zh-cn:雾都孤儿;zh-tw:孤雛淚;zh-hk:苦海孤雛;\n"
            "這一行不是規則\n"
            "\n"
            "zh-cn:史蒂夫;zh-tw:史提夫;zh-hk:麥星帆;\n"
        )
        converter = ZhConverterBuilder().target(Variant.ZH_TW).conv_lines(lines).build()
        assert converter.convert("雾都孤儿") == "孤雛淚"
        assert converter.convert("苦海孤雛") == "孤雛淚"
        assert converter.convert("麥星帆") == "史提夫"

    def test_target_accepts_code(self):
        builder = ZhConverterBuilder().target("zh-HK")
        assert builder.build().variant is Variant.ZH_HK

    def test_add_conv_and_remove_conv(self):
        conv = Conv.parse("zh-hans:计算机;zh-hant:電腦;")
        converter = ZhConverterBuilder().target(Variant.ZH_HANT).add_conv(conv).build()
        assert converter.convert("计算机") == "電腦"

        converter = (
            ZhConverterBuilder()
            .target(Variant.ZH_HANT)
            .table({"计算机": "計算機"})
            .remove_conv(conv)
            .build()
        )
        assert converter.convert("计算机") == "计算机"

    def test_rules_from_page_adds(self):
        page = "前言-{H|zh-cn:鹿;zh-tw:馬;}-內文"
        converter = ZhConverterBuilder().target(Variant.ZH_CN).rules_from_page(page).build()
        assert converter.convert("馬") == "鹿"

    def test_rules_from_page_removes(self):
        page = "-{-|zh-cn:Y;zh-tw:X;}-"
        converter = (
            ZhConverterBuilder()
            .target(Variant.ZH_CN)
            .table({"X": "Y"})
            .rules_from_page(page)
            .build()
        )
        assert converter.convert("X") == "X"

    def test_rules_from_page_ignores_plain_blocks(self):
        page = "-{zh-cn:鹿;zh-tw:馬;}-"
        converter = ZhConverterBuilder().target(Variant.ZH_CN).rules_from_page(page).build()
        assert len(converter) == 0


class TestTiming:
    """build 的計時回呼"""

    def test_on_timing_called(self):
        from zhvariant import ConverterConfig

        calls = []
        config = ConverterConfig(on_timing=lambda op, elapsed: calls.append((op, elapsed)))
        ZhConverterBuilder(config=config).table({"a": "b"}).build()

        assert [op for op, _ in calls] == ["ZhConverterBuilder.build"]
        assert calls[0][1] >= 0
