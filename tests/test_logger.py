import inspect
import io
import re
from datetime import datetime, timedelta

import pytest

from tintlog.core.levels import Severity
from tintlog.core.logging import Logger

BLUE, GREEN, YELLOW, RED = "\x1b[34m", "\x1b[32m", "\x1b[33m", "\x1b[31m"
MAGENTA, CYAN, RESET = "\x1b[35m", "\x1b[36m", "\x1b[0m"

FIXED = datetime(2024, 5, 1, 13, 4, 5)

# each fragment: one color code, plain content, one reset
FRAGMENTS = re.compile(r"(?:\x1b\[\d+m[^\x1b]*\x1b\[0m ?)+\n")


def make(level=Severity.DEBUG, render_caller=False, clock=lambda: FIXED):
    buf = io.StringIO()
    return Logger(buf, level, render_caller, clock=clock, exit_func=lambda code: None), buf


def emit(log, level, msg):
    getattr(log, level.name.lower())(msg)


@pytest.mark.parametrize("threshold", list(Severity))
@pytest.mark.parametrize("level", list(Severity))
def test_threshold_is_inclusive(threshold, level):
    log, buf = make(threshold)
    emit(log, level, "x")
    assert bool(buf.getvalue()) == (level >= threshold)


def test_warning_threshold_drops_info():
    log, buf = make(Severity.WARNING)
    log.info("x")
    assert buf.getvalue() == ""
    log.warning("x")
    out = buf.getvalue()
    assert out.count("\n") == 1
    assert f"{YELLOW}x{RESET}" in out


def test_exact_line_without_caller():
    log, buf = make()
    log.warning("disk almost full")
    assert buf.getvalue() == f"{CYAN}[2024/05/01 13:04:05]{RESET} {YELLOW}disk almost full{RESET}\n"


@pytest.mark.parametrize("level,color", [
    (Severity.DEBUG, BLUE),
    (Severity.INFO, GREEN),
    (Severity.WARNING, YELLOW),
    (Severity.ERROR, RED),
    (Severity.FATAL, RED),
])
def test_level_colors(level, color):
    log, buf = make()
    emit(log, level, "msg")
    assert buf.getvalue().endswith(f"{color}msg{RESET}\n")


def test_unknown_level_uses_reset_color():
    log, buf = make()
    log.log(7, "odd")
    assert buf.getvalue().endswith(f"{RESET}odd{RESET}\n")


def test_caller_fragment_names_call_site():
    log, buf = make(render_caller=True)
    log.info("here"); line = inspect.currentframe().f_lineno
    assert buf.getvalue().startswith(f"{MAGENTA}[test_logger.py:{line}]{RESET} {CYAN}[")


def test_caller_fragment_through_wrapper():
    log, buf = make(render_caller=True)

    def audit(msg):
        log.log(Severity.INFO, msg, stacklevel=2)

    audit("wrapped"); line = inspect.currentframe().f_lineno
    assert f"[test_logger.py:{line}]" in buf.getvalue()


def test_formatted_caller_matches_plain():
    log, buf = make(render_caller=True)
    log.errorf("n=%d", 1); line = inspect.currentframe().f_lineno
    assert f"[test_logger.py:{line}]" in buf.getvalue()


def test_no_caller_fragment_when_disabled():
    log, buf = make(render_caller=False)
    log.info("x")
    assert MAGENTA not in buf.getvalue()
    assert ".py:" not in buf.getvalue()


def test_every_fragment_is_reset():
    log, buf = make(render_caller=True)
    for level in Severity:
        emit(log, level, f"{level.name} message")
    lines = buf.getvalue().splitlines(keepends=True)
    assert len(lines) == 5
    for line in lines:
        assert FRAGMENTS.fullmatch(line)
        assert line.count(RESET) == 3


def test_timestamp_reflects_call_time():
    log, buf = make(clock=datetime.now)
    log.info("now")
    m = re.search(r"\[(\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2})\]", buf.getvalue())
    assert m
    stamp = datetime.strptime(m.group(1), "%Y/%m/%d %H:%M:%S")
    assert abs(datetime.now() - stamp) <= timedelta(seconds=2)


def test_single_write_per_line():
    writes = []

    class Sink:
        def write(self, text):
            writes.append(text)

    log = Logger(Sink(), Severity.DEBUG, True)
    log.info("one")
    log.debug("two")
    assert len(writes) == 2
    assert all(w.endswith("\n") for w in writes)


def test_filtered_call_does_not_touch_clock_or_sink():
    calls = []

    class Sink:
        def write(self, text):
            calls.append("write")

    def clock():
        calls.append("clock")
        return FIXED

    log = Logger(Sink(), Severity.ERROR, True, clock=clock)
    log.debug("x")
    log.warning("x")
    assert calls == []


def test_level_is_read_only():
    log, _ = make(Severity.ERROR)
    assert log.level is Severity.ERROR
    with pytest.raises(AttributeError):
        log.level = Severity.DEBUG


def test_construction_accepts_names_and_out_of_range_values():
    assert Logger(io.StringIO(), "warn").level is Severity.WARNING
    log, buf = make(99)
    log.error("hidden")
    assert buf.getvalue() == ""
    assert not log.enabled_for(Severity.FATAL)


def test_enabled_for():
    log, _ = make(Severity.INFO)
    assert log.enabled_for(Severity.INFO)
    assert log.enabled_for("error")
    assert not log.enabled_for(Severity.DEBUG)


@pytest.mark.parametrize("threshold", ["verbose", None, True, 2.5, object()])
def test_unparseable_threshold_falls_back_to_info(threshold):
    log, buf = make(threshold)
    assert log.level is Severity.INFO
    log.debug("dropped")
    log.error("kept")
    out = buf.getvalue()
    assert "dropped" not in out
    assert "kept" in out


def test_unknown_level_name_logs_at_info():
    log, buf = make(Severity.INFO)
    log.log("notice", "still written")
    assert buf.getvalue().endswith(f"{GREEN}still written{RESET}\n")
    assert log.enabled_for("notice")
