"""
Logging configuration for SessionGate.

Application logs go through a redaction filter so shared-password
credentials and session tokens never reach log output. Access logs drop
health check lines.
"""

import logging
import re
from typing import Any, Dict, Iterable

from sessiongate.config.provider import SESSION_COOKIE_NAME

HEALTH_CHECK_PATHS = ("/healthz",)

_REDACTED = "[redacted]"

_SECRET_PATTERNS = (
    re.compile(r"(Basic\s+)[A-Za-z0-9+/=_-]+"),
    re.compile(rf"({re.escape(SESSION_COOKIE_NAME)}=)[^;\s]+"),
    re.compile(r"(user_cookies:)[^\s'\"]+"),
)


def redact(message: str) -> str:
    """Mask Basic credentials, session cookie values and store keys."""
    for pattern in _SECRET_PATTERNS:
        message = pattern.sub(rf"\g<1>{_REDACTED}", message)
    return message


class CredentialRedactionFilter(logging.Filter):
    """Rewrite records so credentials are masked before formatting."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access lines for health check requests."""

    def __init__(self, paths: Iterable[str] = HEALTH_CHECK_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("GET" in message and any(path in message for path in self.paths))


def _logger(handler: str, level: str) -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Build the dictConfig for the API process."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redact": {"()": CredentialRedactionFilter},
            "health_checks": {"()": HealthCheckFilter},
        },
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["redact"],
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_checks"],
            },
        },
        "loggers": {
            "uvicorn": _logger("default", level),
            "uvicorn.error": _logger("default", level),
            "uvicorn.access": _logger("access", level),
            "sessiongate": _logger("default", level),
        },
        "root": {"level": level, "handlers": ["default"]},
    }
