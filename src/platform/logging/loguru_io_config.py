"""
Loguru sinks, shared context variables and stdlib logging interception

Every record carries:
- service_context: service@env:pid of the emitting process
- trace_id: current OpenTelemetry trace id ('-' outside a span)
- chain_start_time / call_target: filled by @Logger.io
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
from functools import lru_cache
import logging
import os
from pathlib import Path
import re
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger
from opentelemetry import trace


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings


SENSITIVE_KEYWORDS = {
    'password',
}
MAX_LOG_CONTENT_LENGTH = 1000

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    TRACE_ID = 'trace_id'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    return f'{service_name}@{deploy_env}:{os.getpid()}'


def _default_extra() -> dict[str, Any]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.TRACE_ID: '-',
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


def _attach_trace_id(record: Any) -> None:
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        record['extra'][ExtraField.TRACE_ID] = trace.format_trace_id(span_context.trace_id)


# =============================================================================
# stdlib logging -> loguru
# =============================================================================

# '127.0.0.1:52144 - "GET /movies/all HTTP/1.1" 200'
_ACCESS_LOG_STATUS = re.compile(r'" (\d{3})\b')

# Loggers whose DEBUG output is statement/selector chatter
_QUIET_DEBUG_LOGGERS = ('sqlalchemy', 'aiosqlite', 'asyncio')


def _access_log_level(message: str) -> str | None:
    """Level for an access-log line by HTTP status, None if it is not one."""
    if ' HTTP/' not in message or not (match := _ACCESS_LOG_STATUS.search(message)):
        return None

    status_code = int(match.group(1))
    if status_code >= 500:
        return 'CRITICAL'
    if status_code >= 400:
        return 'ERROR'
    if status_code >= 300:
        return 'WARNING'
    if status_code >= 200:
        return 'SUCCESS'
    return 'INFO'


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_QUIET_DEBUG_LOGGERS):
            return

        message = record.getMessage()
        level: str | int | None = _access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Walk out of the logging module so file/line point at the caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


# =============================================================================
# Sinks
# =============================================================================

io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<m>{{extra[{ExtraField.TRACE_ID}]}}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _configure_sinks(bound_logger: 'LoguruLogger') -> None:
    min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'
    bound_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

    # Hourly files in DEBUG mode only; production logs go to stdout
    if settings.DEBUG:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        bound_logger.add(
            str(log_dir / f'cinema_{datetime.now(timezone.utc):%Y-%m-%d_%H}.log'),
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=min_log_level,
        )


loguru_logger.remove()
loguru_logger.configure(patcher=_attach_trace_id)
custom_logger: 'LoguruLogger' = loguru_logger.bind(**_default_extra())
_configure_sinks(custom_logger)

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
