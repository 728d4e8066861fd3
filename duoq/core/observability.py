"""Observability for the scoring core.

Structured logging via structlog plus the trace_scoring decorator, which
records inputs, duration and failures of a scoring call without changing
its result.
"""

import functools
import json
import logging
import sys
import time
import traceback
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

from duoq.config.settings import Settings

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the stdlib root logger from explicit settings.

    Call once at startup. Until then structlog's defaults print every
    record, including the DEBUG entries of trace_scoring, to stdout.
    """
    level = logging.getLevelName(settings.app_log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    use_json = settings.app_log_json if settings.app_log_json is not None else not sys.stderr.isatty()
    renderer: Any = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ],
            ),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class FunctionTrace(BaseModel):
    """Model for function execution trace data."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float | None = Field(default=None, description="Execution duration in milliseconds")

    args: list[Any] = Field(default_factory=list, description="Positional arguments")
    kwargs: dict[str, Any] = Field(default_factory=dict, description="Keyword arguments")
    result: Any | None = Field(default=None, description="Function return value")

    is_success: bool = Field(default=True, description="Whether execution succeeded")
    error_type: str | None = Field(default=None, description="Exception class name if failed")
    error_message: str | None = Field(default=None, description="Exception message if failed")


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """Safely serialize a value for logging.

    Args:
        value: Value to serialize
        max_length: Maximum string length for truncation

    Returns:
        Serializable representation of the value
    """
    try:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json", exclude_defaults=True)

        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)

    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def trace_scoring(
    *,
    capture_args: bool = True,
    summarize_result: Callable[[Any], Any] | None = None,
    max_arg_length: int = 1000,
    log_level: str = "DEBUG",
) -> Callable[[F], F]:
    """Decorator tracing a synchronous scoring call.

    Logs entry (with serialized arguments), success (with duration and an
    optional result summary) and failure (with the exception details). The
    exception is always re-raised.

    Args:
        capture_args: Whether to log the input arguments
        summarize_result: Maps the return value to something small to log
        max_arg_length: Maximum length for serialized arguments
        log_level: Log level for entry/success records
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = uuid.uuid4().hex
            trace = FunctionTrace(
                function_name=f"{func.__module__}.{func.__name__}",
                execution_id=execution_id,
            )

            if capture_args:
                trace.args = [_serialize_value(arg, max_arg_length) for arg in args]
                trace.kwargs = {k: _serialize_value(v, max_arg_length) for k, v in kwargs.items()}

            bind_contextvars(execution_id=execution_id)
            logger.log(
                logging.getLevelName(log_level.upper()),
                "scoring_call_started",
                execution_id=execution_id,
                function_name=trace.function_name,
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
            )

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)

                trace.duration_ms = (time.perf_counter() - start_time) * 1000
                if summarize_result is not None:
                    trace.result = summarize_result(result)

                logger.log(
                    logging.getLevelName(log_level.upper()),
                    "scoring_call_succeeded",
                    execution_id=execution_id,
                    function_name=trace.function_name,
                    duration_ms=trace.duration_ms,
                    result=trace.result,
                )
                return result

            except Exception as e:
                trace.duration_ms = (time.perf_counter() - start_time) * 1000
                trace.is_success = False
                trace.error_type = type(e).__name__
                trace.error_message = str(e)

                logger.error(
                    "scoring_call_failed",
                    execution_id=execution_id,
                    function_name=trace.function_name,
                    duration_ms=trace.duration_ms,
                    error_type=trace.error_type,
                    error_message=trace.error_message,
                    traceback=traceback.format_exc(),
                    args=trace.args if capture_args else None,
                )
                raise

            finally:
                unbind_contextvars("execution_id")

        return cast(F, wrapper)

    return decorator
