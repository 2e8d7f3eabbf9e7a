"""Structlog configuration for the localization kit.

Records are rendered as JSON when `Settings.is_production` holds and with the
console renderer otherwise. Under pytest the root level is raised above
CRITICAL so nothing is emitted.

Module loggers are lazy proxies: they pick up the configuration current at
the time of each call, so `configure_logging()` may run after the modules
that log have been imported.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("language_preference_changed", persisted="zh-Hans")
"""

import inspect
import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import settings

_SILENT = logging.CRITICAL + 1

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
]


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _resolve_level(log_level: Optional[str]) -> int:
    if _is_test_environment():
        return _SILENT
    name = (log_level or settings.LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog over the standard library root logger.

    Args:
        log_level: Level name overriding `LOG_LEVEL`.
        is_production: Overrides `Settings.is_production` (JSON vs console).

    Returns:
        The package logger.
    """
    production = settings.is_production if is_production is None else is_production
    renderer = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*_PROCESSORS, renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    logging.basicConfig(format="%(message)s", level=_resolve_level(log_level), force=True)

    return structlog.stdlib.get_logger("infrastructure")


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger named after the calling module.

    The stdlib logger name is the module path, and every record carries
    `component` (last path segment) and `module_path`.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module_path = caller.f_globals.get("__name__", "") if caller is not None else ""
    if not module_path:
        return structlog.stdlib.get_logger("infrastructure", component="unknown")

    return structlog.stdlib.get_logger(
        module_path,
        component=module_path.rsplit(".", 1)[-1],
        module_path=module_path,
    )
