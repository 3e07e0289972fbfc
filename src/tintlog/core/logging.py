"""
Leveled console logger.

Lines look like ``[file.py:12] [2024/05/01 13:04:05] message`` where each
bracketed fragment and the message carry their own color and reset codes.
The caller fragment is only rendered when ``render_caller`` is set.

The logger keeps no mutable state between calls and does not lock; share a
:class:`tintlog.system.sinks.LockedSink` across threads if the sink needs it.
"""
from __future__ import annotations
import os
import sys
from datetime import datetime
from typing import Any, Callable, Optional, Tuple
from tintlog.core.errors import ConfigError
from tintlog.core.levels import LevelLike, Severity
from tintlog.system.sinks import Sink, exit_process
from tintlog.ui.colors import FILE_COLOR, TIME_COLOR, colored_text, get_level_color

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"
FATAL_EXIT_CODE = 1
UNKNOWN_CALLER = ("(unknown file)", 0)

def _coerce_level(level: LevelLike, default: Severity = Severity.INFO):
    try:
        return Severity.parse(level)
    except ConfigError:
        # never raises; out-of-range ints are compared as given, anything else
        # unparseable falls back to the default
        if isinstance(level, int) and not isinstance(level, bool):
            return level
        return default

def _format(template: str, args: Tuple[Any, ...]) -> str:
    try:
        return template % args
    except (TypeError, ValueError, KeyError) as e:
        shown = ", ".join(repr(a) for a in args)
        return f"{template} %!(BADFORMAT {type(e).__name__}: {shown})"

class Logger:
    def __init__(
        self,
        sink: Sink,
        level: LevelLike = Severity.INFO,
        render_caller: bool = False,
        *,
        clock: Callable[[], datetime] = datetime.now,
        exit_func: Optional[Callable[[int], Any]] = None,
    ):
        self.sink = sink
        self._level = _coerce_level(level)
        self.render_caller = render_caller
        self.time_color = TIME_COLOR
        self.file_color = FILE_COLOR
        self._clock = clock
        self._exit = exit_func or (lambda code: exit_process(self.sink, code))

    @property
    def level(self):
        return self._level

    def enabled_for(self, level: LevelLike) -> bool:
        return self._level <= _coerce_level(level)

    def __repr__(self) -> str:
        name = getattr(self._level, "name", self._level)
        return f"<Logger level={name} render_caller={self.render_caller}>"

    # -- emission ---------------------------------------------------------

    def _caller_info(self, stacklevel: int) -> Tuple[str, int]:
        # +2 skips this helper and _emit
        try:
            frame = sys._getframe(stacklevel + 2)
        except ValueError:
            return UNKNOWN_CALLER
        return os.path.basename(frame.f_code.co_filename), frame.f_lineno

    def _compose(self, level, msg: str, caller: Optional[Tuple[str, int]]) -> str:
        stamp = self._clock().strftime(TIME_FORMAT)
        parts = []
        if caller is not None:
            parts.append(colored_text(f"[{caller[0]}:{caller[1]}]", self.file_color) + " ")
        parts.append(colored_text(f"[{stamp}]", self.time_color) + " ")
        parts.append(colored_text(msg, get_level_color(level)))
        parts.append("\n")
        return "".join(parts)

    def _emit(self, level, msg: str, stacklevel: int):
        """Write one line; ``stacklevel`` counts frames above the public method."""
        if not self.enabled_for(level):
            return
        caller = self._caller_info(stacklevel) if self.render_caller else None
        self.sink.write(self._compose(level, msg, caller))

    def log(self, level: LevelLike, msg: str, *, stacklevel: int = 1):
        """Write ``msg`` at ``level``. Never terminates, even for FATAL.

        Wrappers around the logger pass ``stacklevel=2`` (or more) so the
        caller fragment names their own caller.
        """
        self._emit(_coerce_level(level), msg, stacklevel)

    def debug(self, msg: str): self._emit(Severity.DEBUG, msg, 1)
    def info(self, msg: str): self._emit(Severity.INFO, msg, 1)
    def warning(self, msg: str): self._emit(Severity.WARNING, msg, 1)
    def error(self, msg: str): self._emit(Severity.ERROR, msg, 1)

    def fatal(self, msg: str):
        """Log at FATAL, then exit the process with status 1."""
        try:
            self._emit(Severity.FATAL, msg, 1)
        finally:
            self._exit(FATAL_EXIT_CODE)

    # -- printf-style variants -------------------------------------------

    def debugf(self, fmt: str, *args: Any):
        if self.enabled_for(Severity.DEBUG):
            self._emit(Severity.DEBUG, _format(fmt, args), 1)

    def infof(self, fmt: str, *args: Any):
        if self.enabled_for(Severity.INFO):
            self._emit(Severity.INFO, _format(fmt, args), 1)

    def warningf(self, fmt: str, *args: Any):
        if self.enabled_for(Severity.WARNING):
            self._emit(Severity.WARNING, _format(fmt, args), 1)

    def errorf(self, fmt: str, *args: Any):
        if self.enabled_for(Severity.ERROR):
            self._emit(Severity.ERROR, _format(fmt, args), 1)

    def fatalf(self, fmt: str, *args: Any):
        """Formatted :meth:`fatal`; exits with status 1."""
        try:
            if self.enabled_for(Severity.FATAL):
                self._emit(Severity.FATAL, _format(fmt, args), 1)
        finally:
            self._exit(FATAL_EXIT_CODE)
