"""Process-wide logging configuration."""

import logging
import sys


class _ThirdPartyNoiseFilter(logging.Filter):
    """Keep app logs; let third-party loggers through only at WARNING+.

    httpx logs every request at INFO, which drowns out the task lifecycle.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("app.") or record.name == "app":
            return True
        if record.name.startswith("uvicorn"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once, early in startup."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Remove any pre-existing handlers to avoid duplicates (uvicorn --reload).
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    handler.addFilter(_ThirdPartyNoiseFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
