"""
轉換器配置

ConverterConfig 由 ZhConverterBuilder 傳給它建立的 ZhConverter，
同一份配置會沿用到該轉換器的 wikitext 轉換。

計時回呼會收到的操作名稱：
- TIMING_BUILD ("ZhConverterBuilder.build")：彙整詞表並編譯 automaton
- TIMING_WIKITEXT ("RuleBlockParser.convert")：一次 convert_as_wikitext* 呼叫，
  包含全域規則掃描與 shadow overlay 的建立

範例:
    from zhvariant import ConverterConfig, ZhConverterBuilder, Variant

    timings = []
    config = ConverterConfig(on_timing=lambda op, sec: timings.append((op, sec)))
    converter = ZhConverterBuilder(config).target(Variant.ZH_TW).table(table).build()
    converter.convert_as_wikitext_extended(page)
    # timings == [("ZhConverterBuilder.build", ...), ("RuleBlockParser.convert", ...)]

日誌一律走 "zhvariant" logger；verbose=True 只是替它掛上 DEBUG 等級的輸出。
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .utils.logger import setup_logger

TIMING_BUILD = "ZhConverterBuilder.build"
TIMING_WIKITEXT = "RuleBlockParser.convert"

TimingCallback = Callable[[str, float], None]


def configure_logging(verbose: bool = False) -> None:
    """verbose 時為 "zhvariant" logger 掛上 DEBUG 輸出；否則不動使用者的 logging 設定"""
    if verbose:
        setup_logger(level=logging.DEBUG)


@dataclass
class ConverterConfig:
    """
    轉換器配置

    屬性:
        verbose: 輸出詞表大小、全域規則數量、未閉合區塊等 DEBUG 日誌
        on_timing: (操作名稱, 秒數) 回呼，見模組說明的 TIMING_* 名稱；
                   內建轉換器 (zhconv / zhconv_mw) 不帶回呼
    """

    verbose: bool = False
    on_timing: Optional[TimingCallback] = None

    def __post_init__(self):
        configure_logging(self.verbose)


DEFAULT_CONFIG = ConverterConfig()
