"""Diagnostic output on standard error."""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass
class _LogState:
    verbose_level: int = 0
    progress_logging: bool = False


_state = _LogState()


def _emit(fmt: str, args: tuple) -> None:
    sys.stderr.write(fmt % args if args else fmt)
    sys.stderr.flush()


def increase_verbose_level() -> None:
    """Raise the verbosity by one level."""
    _state.verbose_level += 1


def enable_progress_logging() -> None:
    """Turn on progress reports."""
    _state.progress_logging = True


def log_error(fmt: str, *args) -> None:
    """Report an error; always written."""
    _emit(fmt, args)


def log_info(fmt: str, *args) -> None:
    """Report a message when the verbosity is at least 1."""
    if _state.verbose_level < 1:
        return
    _emit(fmt, args)


def log_progress(kind: str, value: int, max_value: int) -> None:
    """Report progress when progress logging is enabled."""
    if not _state.progress_logging:
        return
    _emit("Progress:%s:%i:%i\n", (kind, value, max_value))