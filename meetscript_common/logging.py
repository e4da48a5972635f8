import logging
import os
import sys

from pythonjsonlogger import jsonlogger

_REDACTED = "[REDACTED]"
_secrets: set[str] = set()
_configured = False


class SecretRedactionFilter(logging.Filter):
    """Masks registered secrets in log messages and structured extras."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not _secrets:
            return True
        message = record.getMessage()
        if any(secret in message for secret in _secrets):
            record.msg = _redact(message)
            record.args = None
        for key, value in list(record.__dict__.items()):
            if isinstance(value, str) and key not in ("msg", "message"):
                record.__dict__[key] = _redact(value)
        return True


def _redact(value: str) -> str:
    for secret in _secrets:
        value = value.replace(secret, _REDACTED)
    return value


def register_secret(secret: str) -> None:
    """Registers a value that must never appear in log output."""
    if secret:
        _secrets.add(secret)


def setup_logging() -> logging.Logger:
    """
    Configures structured JSON logging once per process and returns the root logger.

    Records carry timestamp, level, logger name, message and the Datadog
    trace_id/span_id injected by ddtrace. Uvicorn loggers share the same
    handler so access logs come out in the same format. Every handler runs
    the secret redaction filter, so credentials registered through
    ``register_secret`` are masked wherever they are logged from.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    global _configured

    root_logger = logging.getLogger()
    if _configured:
        return root_logger

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(SecretRedactionFilter())

    root_logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)
    root_logger.addFilter(SecretRedactionFilter())

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    _configured = True
    return root_logger
