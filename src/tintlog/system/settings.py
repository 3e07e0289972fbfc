from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Mapping, Optional
from tintlog.core.errors import ConfigError
from tintlog.core.levels import Severity
from tintlog.core.logging import Logger
from tintlog.system.sinks import STREAMS, LockedSink, Sink, console_sink

SETTINGS_FILENAME = ".tintlog.json"
ENV_PREFIX = "TINTLOG_"
ENV_KEYS = {
    "level": "LEVEL",
    "render_caller": "RENDER_CALLER",
    "stream": "STREAM",
    "serialize_writes": "SERIALIZE",
}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

def bootstrap_logger() -> Logger:
    """Stderr logger for diagnostics raised before the configured one exists."""
    return Logger(console_sink("stderr"), Severity.WARNING)

def _parse_bool(field: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(field, raw)

@dataclass
class SettingsData:
    level: str = "INFO"
    render_caller: bool = False
    stream: str = "stdout"          # stdout or stderr
    serialize_writes: bool = False  # wrap the sink in LockedSink

    def normalize(self):
        try:
            self.level = Severity.parse(self.level).name
        except ConfigError:
            self.level = "INFO"
        if self.stream not in STREAMS:
            self.stream = "stdout"
        if not isinstance(self.render_caller, bool):
            self.render_caller = False
        if not isinstance(self.serialize_writes, bool):
            self.serialize_writes = False

class Settings:
    def __init__(self, data: SettingsData, path: Path, diagnostics: Optional[Logger] = None):
        self.data = data
        self.path = path
        self._diagnostics = diagnostics

    @property
    def diagnostics(self) -> Logger:
        if self._diagnostics is None:
            self._diagnostics = bootstrap_logger()
        return self._diagnostics

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(
        cls,
        path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        diagnostics: Optional[Logger] = None,
    ) -> "Settings":
        """Read the JSON settings file, then apply ``TINTLOG_*`` overrides.

        A missing file gives defaults. An unreadable or malformed one also
        gives defaults, with a warning on the diagnostics logger.
        """
        path = Path(path) if path is not None else cls._resolve_path()
        settings = cls(SettingsData(), path, diagnostics)
        if path.exists():
            try:
                raw = json.loads(path.read_text())
                known = {f.name for f in fields(SettingsData)}
                settings.data = SettingsData(**{k: v for k, v in raw.items() if k in known})
            except (OSError, ValueError, TypeError, AttributeError) as e:
                settings.diagnostics.warningf("Failed to parse settings %s, using defaults: %s", path, e)
        settings.apply_env(os.environ if environ is None else environ)
        settings.data.normalize()
        return settings

    def apply_env(self, environ: Mapping[str, str]):
        for field, suffix in ENV_KEYS.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is None:
                continue
            try:
                if field in ("render_caller", "serialize_writes"):
                    value = _parse_bool(field, raw)
                elif field == "level":
                    value = Severity.parse(raw).name
                else:
                    value = raw.strip().lower()
                    if value not in STREAMS:
                        raise ConfigError(field, raw)
            except ConfigError as e:
                self.diagnostics.warningf("Ignoring %s%s: %s", ENV_PREFIX, suffix, e)
                continue
            setattr(self.data, field, value)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2))
        except OSError as e:
            self.diagnostics.errorf("Failed to save settings to %s: %s", self.path, e)
            return False
        return True

    def build_logger(self, sink: Optional[Sink] = None) -> Logger:
        """Construct the configured logger; ``sink`` overrides the stream setting."""
        out = sink if sink is not None else console_sink(self.data.stream)
        if self.data.serialize_writes:
            out = LockedSink(out)
        return Logger(out, Severity.parse(self.data.level), self.data.render_caller)
