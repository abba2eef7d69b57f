"""
netkit.tier0_core.logging
──────────────────────────
Structured logs via structlog, bridged onto the stdlib ``logging`` tree so
host applications keep control of handlers and levels.

netkit never calls ``structlog.configure()``: its loggers carry their own
processor chain, so a host's structlog setup is left untouched. Records go
to the ``netkit`` stdlib logger and propagate to the host's handlers. A
stderr handler is attached to ``netkit`` only when the root logger has none.

The transport helpers emit DEBUG events only; with the default WARNING level
the library is silent unless the host opts in.

Configure via: NETKIT_LOG_LEVEL, NETKIT_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from netkit.tier0_core.config import get_config
from netkit.tier0_core.redact import structlog_redact_processor

PACKAGE_LOGGER = "netkit"


# ── Configuration ─────────────────────────────────────────────────────────────

def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog_redact_processor,
    ]


def _configure_package_logger() -> None:
    config = get_config()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, config.log_level, logging.WARNING))

    if logging.getLogger().handlers:
        return

    if config.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.debug("http.request", method="GET", url=url)
    """
    global _configured
    if not _configured:
        _configure_package_logger()
        _configured = True
    return structlog.wrap_logger(
        logging.getLogger(name or PACKAGE_LOGGER),
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


__sdk_export__ = {
    "exports": ["get_logger"],
    "description": "structlog-based structured logging with secret redaction",
    "tier": "tier0_core",
    "module": "logging",
}
