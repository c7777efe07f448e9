"""Terminal capability checks used by the console log handler."""

import os
import sys
from functools import lru_cache

import colorama

__all__ = ["supports_color"]

# Hosts known to render ANSI sequences on Windows without extra setup.
_WINDOWS_ANSI_HOSTS = ("ANSICON", "WT_SESSION")


def _virtual_terminal_level() -> int:
    """Read ``HKCU\\Console\\VirtualTerminalLevel``, 0 when unset."""
    try:
        import winreg
    except ImportError:
        return 0

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, "Console") as key:
            value, _ = winreg.QueryValueEx(key, "VirtualTerminalLevel")
    except OSError:
        return 0
    return value if isinstance(value, int) else 0


def _windows_console_supports_color() -> bool:
    if getattr(colorama, "fixed_windows_console", False):
        return True
    if any(host in os.environ for host in _WINDOWS_ANSI_HOSTS):
        return True
    if os.environ.get("TERM_PROGRAM") == "vscode":
        return True
    return _virtual_terminal_level() == 1


@lru_cache(maxsize=1)
def supports_color() -> bool:
    """Whether stdout is a terminal that renders ANSI color codes.

    ``NO_COLOR`` turns colors off everywhere. On Windows the console must
    also be known to handle escape sequences.

    Returns:
        bool: True if colored output should be used.
    """
    isatty = getattr(sys.stdout, "isatty", None)
    if isatty is None or not isatty():
        return False
    if os.environ.get("NO_COLOR"):
        return False
    if sys.platform == "win32":
        return _windows_console_supports_color()
    return True
