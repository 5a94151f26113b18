from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

# Argument names whose values never reach the log
SENSITIVE_KEYWORDS = {
    'password',
    'token',
    'secret',
    'authorization',
    'credentials',
}
DEPTH_LINE = '│'
MAX_CONTENT_LENGTH = 1000

# Stdlib loggers that are only noise at DEBUG (aiosqlite echoes every cursor call)
QUIET_DEBUG_LOGGERS = ('aiosqlite', 'asyncio')

chain_start_time_var: ContextVar[float] = ContextVar('first_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'


def _build_custom_logger() -> 'LoguruLogger':
    """Bind the extra fields every record needs, booking or stdlib alike"""
    loguru_logger.remove()
    bound = loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )
    bound.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

    # Hourly files only while debugging, otherwise stdout goes to the collector
    if settings.DEBUG:
        prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
        bound.add(
            f'{LOG_DIR}/{prefix}{datetime.now(timezone.utc).strftime("%Y-%m-%d_%H")}.log',
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=min_log_level,
        )
    return bound


custom_logger = _build_custom_logger()


class InterceptHandler(logging.Handler):
    """Route stdlib records (uvicorn/granian, SQLAlchemy, OTel) into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(QUIET_DEBUG_LOGGERS):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
