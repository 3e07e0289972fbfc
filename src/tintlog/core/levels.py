from __future__ import annotations
from enum import IntEnum
from typing import Union
from tintlog.core.errors import ConfigError

_ALIASES = {"WARN": "WARNING"}

class Severity(IntEnum):
    """Ordered log severities; comparison follows the numeric value."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @classmethod
    def parse(cls, value: Union["Severity", int, str]) -> "Severity":
        """Resolve a severity from a member, an int, or a case-insensitive name.

        ``WARN`` is accepted as an alias of ``WARNING``. Anything else raises
        :class:`ConfigError`.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ConfigError("level", value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ConfigError("level", value) from None
        if isinstance(value, str):
            name = value.strip().upper()
            if name.isdigit():
                return cls.parse(int(name))
            name = _ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
        raise ConfigError("level", value)

LevelLike = Union[Severity, int, str]
