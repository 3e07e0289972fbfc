from __future__ import annotations
import argparse
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich.text import Text
from tintlog.core.errors import ConfigError
from tintlog.core.levels import Severity
from tintlog.core.logging import Logger
from tintlog.system.settings import Settings, SettingsData
from tintlog.system.sinks import STREAMS, Sink
from tintlog.ui.colors import COLOR_NAMES, LEVEL_COLORS

def level_style(level: Severity) -> str:
    """rich style for the ANSI color a severity prints in."""
    return COLOR_NAMES.get(LEVEL_COLORS[level], "default")

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tintlog", description="Leveled, color-coded console logging")
    sub = parser.add_subparsers(dest="command", required=True)

    emit = sub.add_parser("emit", help="Log one message")
    emit.add_argument("message", help="Message, or a printf-style template when ARGS are given")
    emit.add_argument("args", nargs="*", help="Values substituted into the template")
    emit.add_argument("--level", default="info", help="Severity of the message (default: info)")
    emit.add_argument("--threshold", help="Minimum severity to print (default: from settings)")
    emit.add_argument("--caller", dest="render_caller", action="store_true", default=None,
                      help="Prefix the line with [file:line]")
    emit.add_argument("--no-caller", dest="render_caller", action="store_false", default=None)
    emit.add_argument("--stream", choices=STREAMS, help="Console stream to write to")
    emit.add_argument("--config", type=Path, help="Settings file to read")

    sub.add_parser("levels", help="List severities and their colors")

    cfg = sub.add_parser("config", help="Show the effective settings")
    cfg.add_argument("--config", type=Path, help="Settings file to read")
    cfg.add_argument("--save", action="store_true", help="Write the effective settings back")
    return parser

def _emit(args, settings: Settings, sink: Optional[Sink]) -> int:
    level = Severity.parse(args.level)
    if args.threshold is not None:
        settings.data.level = Severity.parse(args.threshold).name
    if args.render_caller is not None:
        settings.data.render_caller = args.render_caller
    if args.stream is not None:
        settings.data.stream = args.stream
    logger = settings.build_logger(sink)
    plain = {
        Severity.DEBUG: logger.debug,
        Severity.INFO: logger.info,
        Severity.WARNING: logger.warning,
        Severity.ERROR: logger.error,
        Severity.FATAL: logger.fatal,
    }
    formatted = {
        Severity.DEBUG: logger.debugf,
        Severity.INFO: logger.infof,
        Severity.WARNING: logger.warningf,
        Severity.ERROR: logger.errorf,
        Severity.FATAL: logger.fatalf,
    }
    if args.args:
        formatted[level](args.message, *[_coerce_arg(a) for a in args.args])
    else:
        plain[level](args.message)
    return 0

def _coerce_arg(raw: str):
    """Command-line values are strings; pass numbers through as numbers so %d works."""
    for kind in (int, float):
        try:
            return kind(raw)
        except ValueError:
            pass
    return raw

def _show_levels(console: Console):
    table = Table(title="Severities")
    table.add_column("Level")
    table.add_column("Value", justify="right")
    table.add_column("Sample")
    for level in Severity:
        table.add_row(level.name, str(level.value), Text("message", style=level_style(level)))
    console.print(table)

def _show_config(console: Console, settings: Settings):
    table = Table(title=f"Settings ({settings.path})")
    table.add_column("Field")
    table.add_column("Value")
    defaults = asdict(SettingsData())
    for field, value in asdict(settings.data).items():
        style = "" if value == defaults[field] else "bold"
        table.add_row(field, Text(str(value), style=style))
    console.print(table)

def run(argv: Optional[List[str]] = None, sink: Optional[Sink] = None,
        console: Optional[Console] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    console = console or Console()
    if args.command == "levels":
        _show_levels(console)
        return 0
    diagnostics = Logger(sink, Severity.WARNING) if sink is not None else None
    settings = Settings.load(getattr(args, "config", None), diagnostics=diagnostics)
    try:
        if args.command == "emit":
            return _emit(args, settings, sink)
    except ConfigError as e:
        parser.exit(2, f"tintlog: error: {e}\n")
    _show_config(console, settings)
    if args.save and not settings.save():
        return 1
    return 0

def main():
    sys.exit(run())
