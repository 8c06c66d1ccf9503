# src/common/logging_utils.py

"""
key=value event logging for the gateway.

Callers pass metadata only; anything under a key in SENSITIVE_KEYS (query
text, answers, signatures, the shared secret) is dropped before formatting.
With STRICT_NO_LOGGING_MODE on, long values are dropped and error strings cut.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Dict, Any

from common.config import config


def _initialize_logger() -> logging.Logger:
    """
    Initializes a logger with stdout handler and configurable log level.
    Logs are formatted as: timestamp level message key=value key=value ...
    """
    logger = logging.getLogger("ragsig")

    level = getattr(logging, config.LOG_LEVEL.upper(), None)
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler.setFormatter(formatter)

    # Avoid multiple handlers if this is re-imported
    if not logger.handlers:
        logger.addHandler(handler)

    logger.propagate = False
    return logger


_logger = _initialize_logger()


# Keys that should never be logged
SENSITIVE_KEYS = {
    "contents",
    "query",
    "prompt",
    "parameters",
    "response",
    "text",
    "body",
    "raw_body",
    "signature",
    "x_signature",
    "expected_signature",
    "digest",
    "secret",
    "auth_token",
    "vertex_cf_auth_token",
}

STRICT_MAX_VALUE_LEN = 256


def _sanitize_extra(extra: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Sanitize extra metadata fields before logging.

    Rules:
    - Drop known sensitive keys (SENSITIVE_KEYS) always.
    - In STRICT_NO_LOGGING_MODE, drop very long string values.
    - Always coerce values to strings.
    """
    if not extra:
        return {}

    cleaned: Dict[str, str] = {}

    for key, value in extra.items():
        k = str(key)

        if k.lower() in SENSITIVE_KEYS:
            continue

        if config.STRICT_NO_LOGGING_MODE:
            if isinstance(value, str) and len(value) > STRICT_MAX_VALUE_LEN:
                continue

        cleaned[k] = str(value)

    return cleaned


def _level_to_int(level: str) -> int:
    lvl = level.lower()
    if lvl == "info":
        return logging.INFO
    if lvl == "warning":
        return logging.WARNING
    if lvl == "error":
        return logging.ERROR
    if lvl == "debug":
        return logging.DEBUG
    return logging.INFO


def log_event(
    message: str,
    *,
    request_id: Optional[str] = None,
    error: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
    level: str = "info",
):
    """
    Logs a sanitized, structured message with no sensitive data.

    Examples:
        log_event(
            "gateway_rejected_request",
            request_id="abc123",
            extra={"status": 403, "reason": "signature"},
            level="warning",
        )

        log_event(
            "generation_completed",
            request_id="abc123",
            extra={"latency_ms": 1234},
        )
    """

    fields = []

    if request_id:
        fields.append(f"request_id={request_id}")

    if error:
        # Backend errors can echo request fragments; keep them short in strict mode.
        if config.STRICT_NO_LOGGING_MODE and len(error) > STRICT_MAX_VALUE_LEN:
            error = error[:STRICT_MAX_VALUE_LEN]
        fields.append(f"error={error}")

    safe_extra = _sanitize_extra(extra)
    for k, v in safe_extra.items():
        fields.append(f"{k}={v}")

    if config.STRICT_NO_LOGGING_MODE:
        fields.append("strict_no_logging=True")

    full_message = f"{message} " + " ".join(fields)

    _logger.log(_level_to_int(level), full_message)
