"""Tailing modes: where a file tailer starts reading."""

from enum import IntEnum


class TailingMode(IntEnum):
    FORCE_BEGINNING = 0
    FORCE_END = 1
    BEGINNING = 2
    END = 3


DEFAULT_TAILING_MODE = TailingMode.END

# Both lookups scan this table in order.
_TAILING_MODES: tuple[tuple[str, TailingMode], ...] = (
    ("forceBeginning", TailingMode.FORCE_BEGINNING),
    ("forceEnd", TailingMode.FORCE_END),
    ("beginning", TailingMode.BEGINNING),
    ("end", TailingMode.END),
)


def tailing_mode_from_string(mode: str) -> tuple[TailingMode, bool]:
    """Resolve a start_position string into a TailingMode.

    Matching is exact and case-sensitive. Returns ``(mode, True)`` on a hit
    and ``(TailingMode.END, False)`` otherwise, so callers must check the
    flag: END is also a mode that can be asked for explicitly.
    """
    for name, value in _TAILING_MODES:
        if name == mode:
            return value, True
    return DEFAULT_TAILING_MODE, False


def tailing_mode_to_string(mode: TailingMode) -> str:
    """Return the canonical string for *mode*, or "" if it is not a known mode."""
    for name, value in _TAILING_MODES:
        if value == mode:
            return name
    return ""


def starts_from_beginning(mode: TailingMode) -> bool:
    return mode in (TailingMode.BEGINNING, TailingMode.FORCE_BEGINNING)
