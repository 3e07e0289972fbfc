"""
Destinations for composed log lines.

A sink is anything with a text ``write()``; the logger never locks around it.
Wrap a sink in :class:`LockedSink` when several threads share it.
"""
from __future__ import annotations
import os
import sys
import threading
from typing import Protocol, TextIO
from colorama import just_fix_windows_console

STREAMS = ("stdout", "stderr")

class Sink(Protocol):
    def write(self, text: str) -> object: ...

class LockedSink:
    """Serializes ``write``/``flush`` on a shared sink."""

    def __init__(self, sink: Sink):
        self.sink = sink
        self._lock = threading.Lock()

    def write(self, text: str):
        with self._lock:
            return self.sink.write(text)

    def flush(self):
        flush = getattr(self.sink, "flush", None)
        if flush is None:
            return
        with self._lock:
            flush()

def console_sink(stream: str = "stdout") -> TextIO:
    """Return the process stdout/stderr, with ANSI enabled on Windows consoles."""
    if stream not in STREAMS:
        raise ValueError(f"unknown stream {stream!r}")
    just_fix_windows_console()
    return getattr(sys, stream)

def exit_process(sink: Sink, code: int = 1):
    # os._exit skips atexit hooks, so the sink is the only thing flushed
    flush = getattr(sink, "flush", None)
    try:
        if flush is not None:
            flush()
    finally:
        os._exit(code)
