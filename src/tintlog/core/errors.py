from __future__ import annotations
from typing import Any

class TintlogError(Exception):
    """Base for internal errors."""

class ConfigError(TintlogError):
    def __init__(self, field: str, value: Any):
        super().__init__(f"Invalid value for '{field}': {value!r}")
        self.field = field
        self.value = value
