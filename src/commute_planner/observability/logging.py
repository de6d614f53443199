"""
commute_planner.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for leveled JSON events (geocode/leg/recompute transitions).
- Provide a small wrapper for obtaining bound loggers.
- Tag every event of a recompute run with its generation and trigger reason.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, level: str) -> None:
    """
    JSON logs, one event per engine transition.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_recompute_context(*, generation: int, reason: str) -> None:
    """
    Call inside the recompute task: the task owns a copy of the context, so the
    binding never leaks into the request that triggered it or into other runs.
    """

    structlog.contextvars.bind_contextvars(generation=generation, trigger=reason)


# --- Module Notes -----------------------------------------------------------
# Leg events carry no ids of their own; `bind_recompute_context` is what ties them to a
# generation when reproducing stale-commit races.
