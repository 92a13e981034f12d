"""structlog ベースのロガー設定"""

from __future__ import annotations

import logging
import sys

import structlog

DEFAULT_LOGGER_NAME = "k1s0_flag_engine"

_RENDERERS: dict[str, type] = {
    "json": structlog.processors.JSONRenderer,
    "text": structlog.dev.ConsoleRenderer,
}


def new_logger(
    level: str = "INFO",
    format: str = "json",
    name: str = DEFAULT_LOGGER_NAME,
) -> structlog.stdlib.BoundLogger:
    """structlog を設定し、フラグ評価用のロガーを返す。

    Args:
        level: ログレベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")。未知の値は INFO
        format: 出力形式 ("json" or "text")
        name: stdlib ロガー名

    Returns:
        設定済みの structlog.stdlib.BoundLogger
    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    renderer = _RENDERERS.get(format, structlog.processors.JSONRenderer)()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.stdlib.get_logger(name)
