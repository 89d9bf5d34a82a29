"""
Lightweight, opt-in logging utilities for the library.

Usage in library code:
    from patchforge._logging import resolve_logger, log_event

    def do_thing(..., logger=None, log: bool = False):
        log = resolve_logger(logger=logger, enabled=log, name=__name__)
        log_event(log, "debug", "thing.started", "starting do_thing")
        ...

Design goals:
- No stdout/stderr prints in library code.
- Zero-noise by default; consumers opt in by passing a logger or enabled flag.
- Safe to import without configuring global logging.
- Hunk-level events carry structured fields (record.patch_event, record.hunk_index, ...).
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def _ensure_default_handler(lg: logging.Logger) -> None:
    # Let logs bubble to the root so pytest's caplog can capture them.
    lg.propagate = True


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return a usable logger according to opt-in policy.

    - If `logger` is provided, use it.
    - Else if `enabled` is True, create/get a named logger.
    - Else return a NoopLogger that ignores calls.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "patchforge")
        lg.setLevel(level)
        _ensure_default_handler(lg)
        return lg
    return NoopLogger()


def log_event(log, level: str, event: str, message: str, **fields) -> None:  # type: ignore[no-untyped-def]
    """Emit `message` at `level` with `event` and `fields` attached to the record."""
    getattr(log, level)(message, extra={"patch_event": event, **fields})
