"""structlog ベースのロガー設定"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import LogSection

_LIBRARY_LOGGER = "k1s0_toggle"


def new_logger(config: LogSection | None = None) -> structlog.stdlib.BoundLogger:
    """設定済みの structlog ロガーを返す。

    ライブラリ内部のモジュールは標準 logging の "k1s0_toggle.*" に出力する。
    そのレコードも ProcessorFormatter 経由で同じ形式に整形し、
    extra に渡したフィールドはキーとして出力する。

    Args:
        config: ログ設定。省略時は INFO / json。
    """
    config = config or LogSection()
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    renderer: structlog.types.Processor
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*shared, structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    # 再呼び出し時はハンドラーを置き換える
    library_logger = logging.getLogger(_LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(log_level)
    library_logger.propagate = False

    structlog.configure(
        processors=[
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger(_LIBRARY_LOGGER)
