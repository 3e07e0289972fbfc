from __future__ import annotations
from colorama import Fore, Style
from tintlog.core.levels import Severity

RED = Fore.RED
GREEN = Fore.GREEN
YELLOW = Fore.YELLOW
BLUE = Fore.BLUE
MAGENTA = Fore.MAGENTA
CYAN = Fore.CYAN
RESET = Style.RESET_ALL

# rich style names for the codes above
COLOR_NAMES = {
    RED: "red",
    GREEN: "green",
    YELLOW: "yellow",
    BLUE: "blue",
    MAGENTA: "magenta",
    CYAN: "cyan",
}

TIME_COLOR = CYAN
FILE_COLOR = MAGENTA

LEVEL_COLORS = {
    Severity.DEBUG: BLUE,
    Severity.INFO: GREEN,
    Severity.WARNING: YELLOW,
    Severity.ERROR: RED,
    Severity.FATAL: RED,
}

def get_level_color(level) -> str:
    """Color for a severity; unknown levels get the reset code."""
    return LEVEL_COLORS.get(level, RESET)

def colored_text(text: str, color: str) -> str:
    """Wrap text in a color code and a single trailing reset."""
    return f"{color}{text}{RESET}"
