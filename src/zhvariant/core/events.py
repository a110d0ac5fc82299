"""
事件模型（Event Model）

轉換器預設不輸出到 stdout。
若需要取得「本次解析了哪些規則區塊」等資訊，請使用事件回呼（event handler）。

事件類型：
- rule: 一個 -{ ... }- 區塊被解析並替換成輸出文字
- unterminated: 文本結束時仍有未閉合的區塊，原樣輸出
- global_rules: 偵測到全域規則並建立了本次呼叫的 shadow overlay
"""

from __future__ import annotations

from typing import Callable, Literal, TypedDict


class ConversionEvent(TypedDict, total=False):
    type: Literal["rule", "unterminated", "global_rules"]
    variant: str

    # rule / unterminated
    start: int
    end: int
    depth: int
    original: str
    replacement: str

    # global_rules
    adds: int
    removes: int


ConversionEventHandler = Callable[[ConversionEvent], None]
