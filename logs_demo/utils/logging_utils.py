"""
Logging utilities for the Logs Demo generator.
Uses loguru for structured logging; JSON mode renders flat one-line objects
that log-analytics agents can parse without a custom pipeline.
"""

import sys
import json
import time
from pathlib import Path
from datetime import datetime
from functools import wraps
from typing import Callable, Any, Dict
from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level> | "
    "<cyan>{extra}</cyan>"
)

_SERIALIZED_KEY = "_serialized"
_RESERVED_KEYS = ("time", "level", "msg")


def _flatten_record(record: Dict[str, Any], service: str) -> Dict[str, Any]:
    payload = {
        "time": record["time"].isoformat(),
        "level": record["level"].name.lower(),
        "msg": record["message"],
    }
    for key, value in record["extra"].items():
        if key == _SERIALIZED_KEY:
            continue
        # Bound fields never overwrite the envelope keys
        if key in _RESERVED_KEYS:
            key = f"fields.{key}"
        payload[key] = value
    # A record's own service field wins over the default
    payload.setdefault("service", service)
    return payload


def json_formatter(service: str = "datadog-logs-demo") -> Callable[[Dict[str, Any]], str]:
    """
    Build a loguru format function producing one flat JSON object per line.

    Args:
        service: Value for the ``service`` key on lines whose record has none

    Returns:
        Format callable for ``logger.add(format=...)``
    """
    def formatter(record: Dict[str, Any]) -> str:
        record["extra"][_SERIALIZED_KEY] = json.dumps(
            _flatten_record(record, service), default=str
        )
        return "{extra[" + _SERIALIZED_KEY + "]}\n"

    return formatter


def setup_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    log_to_file: bool = False,
    logs_path: Path = Path("logs"),
    service: str = "datadog-logs-demo"
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render flat JSON lines instead of coloured text
        log_to_file: Whether to log to rotating files as well
        logs_path: Directory for file logs
        service: Default service name for JSON lines
    """
    # Remove default logger
    logger.remove()

    log_format = json_formatter(service) if json_output else TEXT_FORMAT

    logger.add(
        sys.stdout,
        format=log_format,
        level=log_level,
        colorize=not json_output
    )

    if log_to_file:
        logs_path = Path(logs_path)
        logs_path.mkdir(parents=True, exist_ok=True)
        log_file = logs_path / f"logs_demo_{datetime.now().strftime('%Y%m%d')}.log"
        logger.add(
            str(log_file),
            format=log_format,
            level=log_level,
            rotation="100 MB",
            retention="30 days",
            compression="gz"
        )

        # Error log file
        logger.add(
            str(logs_path / "errors.log"),
            format=log_format,
            level="ERROR",
            rotation="50 MB",
            retention="90 days",
            compression="gz"
        )


def log_execution_time(func: Callable) -> Callable:
    """
    Decorator to log function execution time at DEBUG.

    Args:
        func: Function to wrap

    Returns:
        Wrapped function
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        start_time = time.time()
        logger.debug(f"Starting execution of {func.__name__}")

        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.debug(
                f"Completed {func.__name__} in {execution_time:.4f} seconds"
            )
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                f"Error in {func.__name__} after {execution_time:.4f} seconds: {str(e)}"
            )
            raise

    return wrapper


__all__ = ['logger', 'setup_logging', 'json_formatter', 'log_execution_time']
