# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_arm

import logging
import os
import re
import sys
from typing import Any

from loguru import logger
from opentelemetry import trace

__all__ = ["logger", "configure_logging"]

REDACTED = "[REDACTED]"

# Bearer header values and form-encoded OAuth2 credentials, wherever they show up in a message
_SECRET_PATTERNS = (
    re.compile(r"(?i)(bearer\s+)[A-Za-z0-9\-._~+/]+=*"),
    re.compile(r"(?i)((?:client_secret|access_token|refresh_token)=)[^&\s\"']+"),
    re.compile(r"(?i)(\"(?:client_secret|access_token|refresh_token)\"\s*:\s*\")[^\"]*"),
)


class InterceptHandler(logging.Handler):
    """
    Redirects standard logging messages to Loguru.
    httpx and httpcore log through the standard library; this keeps their output in one stream.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno  # type: ignore[assignment]

        # Find caller from where originated the logged message
        frame = logging.currentframe()
        depth = 2
        while frame and (frame.f_code.co_filename == logging.__file__ or frame.f_code.co_filename == __file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def redact_secrets(message: str) -> str:
    """
    Masks bearer tokens and OAuth2 credential fields in a log message.
    """
    for pattern in _SECRET_PATTERNS:
        message = pattern.sub(lambda m: m.group(1) + REDACTED, message)
    return message


def trace_id_injector(record: dict[str, Any]) -> None:
    """
    Injects OpenTelemetry trace_id and span_id into the log record.
    """
    span = trace.get_current_span()
    # Only a valid span context carries ids worth correlating
    ctx = span.get_span_context()
    if ctx.is_valid:
        # Inject into 'extra' so it appears in JSON output and can be used in format
        record["extra"]["trace_id"] = format(ctx.trace_id, "032x")
        record["extra"]["span_id"] = format(ctx.span_id, "016x")


def record_patcher(record: dict[str, Any]) -> None:
    """
    Loguru patcher applied to every record: secret redaction, then trace correlation.
    """
    record["message"] = redact_secrets(record["message"])
    trace_id_injector(record)


def configure_logging() -> None:
    """
    Configures the logger based on environment variables.
    Call this to reload configuration if env vars change.

    COREASON_ARM_LOG_LEVEL selects the level (default INFO).
    COREASON_ARM_LOG_JSON=true switches to serialized JSON on stdout.
    """
    log_level = os.getenv("COREASON_ARM_LOG_LEVEL", "INFO").upper()
    log_json = os.getenv("COREASON_ARM_LOG_JSON", "false").lower() == "true"

    # Verify level exists in Loguru, default to INFO if not
    try:
        logger.level(log_level)
    except ValueError:
        log_level = "INFO"

    # Remove default handler and any previously added handlers
    # and set the patcher in one go.
    logger.configure(handlers=[], patcher=record_patcher)  # type: ignore[arg-type]

    # A client library writes to the console only; the application owns any file sinks.
    if log_json:
        # JSON logs to stdout are preferred for containerized environments
        logger.add(sys.stdout, level=log_level, serialize=True)
    else:
        # Human-readable logs to stderr
        format_str = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        logger.add(sys.stderr, level=log_level, format=format_str)

    # Intercept standard logging
    # Force=True ensures we override existing config
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Set the root logger level to match our configured level to avoid processing excessive debug logs
    numeric_level = logging.getLevelName(log_level)
    if isinstance(numeric_level, int):
        logging.getLogger().setLevel(numeric_level)
    else:
        # Fallback if invalid level string
        logging.getLogger().setLevel(logging.INFO)

    # httpcore traces every connection event at DEBUG
    logging.getLogger("httpcore").setLevel(logging.INFO)


# Initialize on import
configure_logging()
