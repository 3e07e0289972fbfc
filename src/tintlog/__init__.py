"""
tintlog - leveled, color-coded console logging.

Quick start:
    import sys
    from tintlog import Logger, Severity

    log = Logger(sys.stdout, Severity.INFO, render_caller=True)
    log.info("ready")
    log.errorf("count=%d", 3)

Or build one from ``~/.tintlog.json`` and ``TINTLOG_*`` variables:
    from tintlog import Settings
    log = Settings.load().build_logger()
"""
from tintlog.core.errors import ConfigError, TintlogError
from tintlog.core.levels import Severity
from tintlog.core.logging import Logger
from tintlog.system.settings import Settings, SettingsData
from tintlog.system.sinks import LockedSink, Sink, console_sink, exit_process

__all__ = [
    "ConfigError",
    "LockedSink",
    "Logger",
    "Settings",
    "SettingsData",
    "Severity",
    "Sink",
    "TintlogError",
    "console_sink",
    "exit_process",
]
