"""
日誌與計時工具

所有 logger 都掛在 "zhvariant" 之下，預設只掛 NullHandler，
不會主動輸出任何東西；需要時由使用者自行開啟：

    from zhvariant import enable_debug_logging
    enable_debug_logging()

或透過標準 logging 控制：

    import logging
    logging.getLogger("zhvariant").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Callable, Optional

ROOT_LOGGER_NAME = "zhvariant"
TIMING_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.timing"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())

# setup_logger() 掛上的 handler，重複呼叫時替換而不是累加
_stream_handler: Optional[logging.Handler] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得 zhvariant 底下的 logger

    Args:
        name: 子 logger 名稱，例如 "converter" 或 "wikitext"；
              已經帶有 "zhvariant." 前綴的名稱 (如 __name__) 原樣使用

    Returns:
        logging.Logger
    """
    if not name or name == ROOT_LOGGER_NAME:
        return _root_logger
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    為 zhvariant 根 logger 掛上 StreamHandler 並設定等級

    Args:
        level: 日誌等級
        fmt: 輸出格式

    Returns:
        zhvariant 根 logger
    """
    global _stream_handler

    if _stream_handler is not None:
        _root_logger.removeHandler(_stream_handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
    _stream_handler = handler
    return _root_logger


def enable_debug_logging() -> None:
    """開啟完整 DEBUG 日誌"""
    setup_logger(level=logging.DEBUG)


def enable_timing_logging() -> None:
    """只開啟計時日誌 (其餘維持 INFO)"""
    setup_logger(level=logging.INFO)
    logging.getLogger(TIMING_LOGGER_NAME).setLevel(logging.DEBUG)


class TimingContext:
    """
    計時 context manager

    離開區塊時以指定等級記錄耗時，並呼叫 callback(operation, elapsed_seconds)。

    範例:
        >>> with TimingContext("ZhConverterBuilder.build", logger) as timer:
        ...     converter = builder.build()
        >>> timer.elapsed
        0.0123
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[Callable[[str, float], None]] = None,
    ) -> None:
        self.operation = operation
        self.logger = logger or logging.getLogger(TIMING_LOGGER_NAME)
        self.level = level
        self.callback = callback
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start
        if self.logger.isEnabledFor(self.level):
            self.logger.log(
                self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.2f}ms"
            )
        if self.callback is not None:
            self.callback(self.operation, self.elapsed)
        return False


def log_timing(operation: Optional[str] = None, level: int = logging.DEBUG):
    """
    為函數加上計時日誌的裝飾器

    Args:
        operation: 記錄用的操作名稱，預設為函數的 __qualname__
        level: 日誌等級
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__
        timing_logger = logging.getLogger(TIMING_LOGGER_NAME)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with TimingContext(name, timing_logger, level):
                return func(*args, **kwargs)

        return wrapper

    return decorator
