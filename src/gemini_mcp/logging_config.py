from __future__ import annotations

import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MASK = "********"


class SecretMaskingFilter(logging.Filter):
    """Replace known secret values in log messages and their arguments."""

    def __init__(self, secrets: Iterable[str] = (), name: str = "SecretMaskingFilter") -> None:
        super().__init__(name)
        self.secrets = [s for s in secrets if s]

    def _mask(self, value: object) -> object:
        if not isinstance(value, str):
            return value
        for secret in self.secrets:
            value = value.replace(secret, MASK)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        record.msg = self._mask(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self._mask(arg) for arg in record.args)
        elif isinstance(record.args, dict):
            record.args = {k: self._mask(v) for k, v in record.args.items()}
        return True


def setup_logging(level: str = "INFO", secrets: Iterable[str] = ()) -> None:
    """Send all logging to stderr; stdout carries the protocol stream."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SecretMaskingFilter(secrets))
    root_logger.addHandler(handler)

    # httpx logs every request URL at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger(__name__).debug("Logging configured at %s", level)
