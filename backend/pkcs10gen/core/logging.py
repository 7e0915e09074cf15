import logging
import re
from logging.handlers import RotatingFileHandler
from typing import Optional

from pkcs10gen.core.config import settings

PRIVATE_KEY_PATTERN = re.compile(
    r"-----BEGIN ([A-Z ]*)PRIVATE KEY-----.*?-----END \1PRIVATE KEY-----",
    re.DOTALL,
)
REDACTED = "[REDACTED PRIVATE KEY]"

# Named logger for the package; stays silent until configure_logging() is called
logger = logging.getLogger("pkcs10gen")
logger.addHandler(logging.NullHandler())


def redact(value):
    """Replace any PEM private key block inside a string value."""
    if isinstance(value, str):
        return PRIVATE_KEY_PATTERN.sub(REDACTED, value)
    return value


class KeyRedactingFilter(logging.Filter):
    """Redact PEM private key blocks in the message and its args."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(redact(a) for a in record.args)
        elif isinstance(record.args, dict):
            record.args = {k: redact(v) for k, v in record.args.items()}
        return True


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Install console (and optionally rotating file) handlers on the package logger.

    Diagnostic output is opt-in: nothing is emitted before this is called.
    Calling it again is a no-op once handlers are installed.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    log_file = log_file or settings.LOG_FILE

    logger.setLevel(log_level)
    logger.propagate = False  # avoid double logging if root logger is configured elsewhere

    # Only add handlers once
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    formatter = logging.Formatter(fmt)
    redacting = KeyRedactingFilter()

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    ch.addFilter(redacting)
    logger.addHandler(ch)

    # Rotating file handler
    if log_file:
        fh = RotatingFileHandler(
            log_file,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        fh.addFilter(redacting)
        logger.addHandler(fh)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return the package logger or a child logger.
    Usage:
        log = get_logger("services.csr_service")
    """
    if not name:
        return logger
    if name.startswith("pkcs10gen."):
        name = name[len("pkcs10gen."):]
    return logger.getChild(name)


__all__ = ["logger", "get_logger", "configure_logging", "KeyRedactingFilter", "redact"]
