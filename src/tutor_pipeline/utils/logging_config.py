"""Logging configuration for the build pipeline.

Two outputs are supported: structured JSON lines (for CI log parsing) and
human-readable console output rendered by loguru. Modules always log through
the standard ``logging`` API; loguru receives those records through an
intercept handler.
"""

import inspect
import json
import logging
import sys
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger as loguru_logger

STANDARD_ATTRS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured log records.

    Converts log records to JSON with consistent structure:
    - timestamp: ISO 8601 UTC timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - extra: Any additional context fields
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            k: v for k, v in record.__dict__.items() if k not in STANDARD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, ensure_ascii=False, default=str)


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists.
        try:
            level: Union[str, int] = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message.
        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = False,
) -> None:
    """Configure logging for the pipeline.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file path for log output (default: None = console only)
        json_format: If True, emit JSON lines through the stdlib handler;
            otherwise route records to loguru (default: False)

    Example:
        >>> configure_logging(level="DEBUG", log_file="build.log")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if json_format:
        formatter = JsonFormatter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
    else:
        loguru_logger.remove()
        loguru_logger.add(sys.stdout, level=level, backtrace=True, diagnose=False)
        if log_file:
            loguru_logger.add(str(log_file), level=level, encoding="utf-8")
        root_logger.addHandler(InterceptHandler())

    logging.info(
        f"Logging configured: level={logging.getLevelName(level)}, json_format={json_format}"
    )


@contextmanager
def pipeline_stage_logger(stage_name: str, **context):
    """Log the start and the outcome of one pipeline stage.

    The stage receives a dict of its log fields. Whatever it stores there
    (counts, paths) is attached to the completion or failure record, so the
    summary line carries the stage outcome next to its duration.

    Args:
        stage_name: Name of the pipeline stage
        **context: Fields attached to every record of the stage

    Yields:
        Mutable dict of stage fields

    Example:
        >>> with pipeline_stage_logger("build_assets", source_dir="topics/") as stage:
        ...     stage["files_written"] = 6
    """
    logger = logging.getLogger(f"tutor_pipeline.{stage_name}")
    fields: Dict[str, Any] = {"stage": stage_name, **context}
    start_time = datetime.now(UTC)

    logger.info(f"Stage {stage_name} started", extra={**fields, "status": "started"})

    try:
        yield fields
    except Exception as e:
        logger.error(
            f"Stage {stage_name} failed after {_elapsed_ms(start_time)} ms: {e}",
            extra={
                **fields,
                "status": "failed",
                "duration_ms": _elapsed_ms(start_time),
                "error": str(e)[:200],
            },
            exc_info=True,
        )
        raise

    outcome = ", ".join(
        f"{key}={value}" for key, value in fields.items() if key != "stage" and key not in context
    )
    logger.info(
        f"Stage {stage_name} completed in {_elapsed_ms(start_time)} ms ({outcome})",
        extra={**fields, "status": "completed", "duration_ms": _elapsed_ms(start_time)},
    )


def _elapsed_ms(start_time: datetime) -> float:
    return round((datetime.now(UTC) - start_time).total_seconds() * 1000, 2)
