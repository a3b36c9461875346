from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from typing import Any

_NOISY_PREFIXES = ("numexpr", "matplotlib", "fsspec")


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 (concise)
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class _LibraryFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 (concise)
        name = record.name or ""
        # Always allow our own package
        if name.startswith("trendcast"):
            return True
        # Always allow warnings/errors from any library
        if int(getattr(record, "levelno", logging.INFO)) >= int(logging.WARNING):
            return True
        return not any(name.startswith(p) for p in _NOISY_PREFIXES)


def _truthy(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(
    level: str = "INFO",
    fmt: str = "plain",
    verbose: bool = False,
    log_libraries: bool = False,
) -> None:
    level_value = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level_value)

    # Remove only handlers previously added by this configurator to avoid
    # interfering with external handlers (e.g., pytest's caplog).
    for existing in list(root.handlers):
        if getattr(existing, "_tc_handler", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    if fmt.lower() == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        handler.setFormatter(formatter)
    # Mark this handler so we can safely replace it later without touching others
    setattr(handler, "_tc_handler", True)
    if not log_libraries:
        handler.addFilter(_LibraryFilter())

    root.addHandler(handler)

    if verbose or _truthy(os.environ.get("VERBOSE")):
        logging.getLogger("trendcast").setLevel(logging.DEBUG)

    for noisy in _NOISY_PREFIXES:
        if log_libraries:
            logging.getLogger(noisy).setLevel(level_value)
        else:
            logging.getLogger(noisy).setLevel(max(level_value, logging.WARNING))

    # Honor PYTHONWARNINGS to show/hide warnings if needed
    if os.environ.get("PYTHONWARNINGS"):
        logging.captureWarnings(True)
