"""Logging and tracing setup for the DynamoDB metrics plugin.

Plugin output goes to stdout, so every log handler configured here writes to
stderr.
"""

import json
import logging
import os
import sys

from opentelemetry import trace

_CHATTY_LOGGERS = ("boto3", "botocore", "urllib3", "urllib3.connectionpool")


class JsonFormatter(logging.Formatter):
    """Basic JSON log formatter with OTel correlation."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "func": record.funcName,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_obj["trace_id"] = format(span_context.trace_id, "032x")
            log_obj["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def get_tracer(name: str) -> trace.Tracer:
    """Returns a tracer for the given module name."""
    return trace.get_tracer(name)


def setup_logging(level: int = logging.INFO) -> None:
    """Configures root logging for a plugin run.

    Args:
        level: The logging level to use (default: INFO). Overridden by the
            LOG_LEVEL environment variable when it names a valid level.
    """
    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        level = getattr(logging, env_level)

    for logger_name in _CHATTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    log_format = os.environ.get("LOG_FORMAT", "TEXT").upper()

    if log_format == "JSON":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        logging.getLogger().handlers = [handler]
        logging.getLogger().setLevel(level)
    else:
        logging.basicConfig(
            stream=sys.stderr,
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            force=True,
        )
