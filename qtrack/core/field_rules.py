"""Field Rules — shared presence, blank, length and range checks.

Invariants:
    - Every check raises ValidationError naming the offending field
    - Text is kept verbatim: checks never trim or case-fold what they return
    - Optional text normalizes blank to None; required text rejects blank
"""

from datetime import datetime, timedelta
from typing import TypeVar

from qtrack.core.errors import ValidationError

T = TypeVar("T")

# Space and the ASCII control range; anything above U+0020 is content.
_EDGE_CHARS = "".join(chr(c) for c in range(0x21))


def require(value: T | None, name: str) -> T:
    if value is None:
        raise ValidationError(f"{name} is null", field=name)
    return value


def trim_edges(raw: str) -> str:
    """Drop leading and trailing characters <= U+0020; Unicode spaces such as NBSP stay."""
    return raw.strip(_EDGE_CHARS)


def is_blank(raw: str) -> bool:
    return not raw.strip()


def required_text(raw: str | None, name: str, max_length: int | None = None) -> str:
    """Non-blank text, returned exactly as given."""
    if raw is None:
        raise ValidationError(f"{name} is null", field=name)
    if is_blank(raw):
        raise ValidationError(f"{name} is blank", field=name)
    if max_length is not None and len(raw) > max_length:
        raise ValidationError(f"{name} length > {max_length}", field=name)
    return raw


def optional_text(raw: str | None, name: str, max_length: int | None = None) -> str | None:
    """Blank collapses to None; anything else is returned exactly as given."""
    if raw is None or is_blank(raw):
        return None
    if max_length is not None and len(raw) > max_length:
        raise ValidationError(f"{name} length > {max_length}", field=name)
    return raw


def progress_percent(value: int, message: str) -> int:
    if value is None or value < 0 or value > 100:
        raise ValidationError(message, field="progress")
    return value


def positive_duration(value: timedelta | None, message: str) -> timedelta:
    if value is None or value <= timedelta(0):
        raise ValidationError(message, field="duration")
    return value


def now_from(clock) -> datetime:
    """Read the current instant from an injected clock."""
    return require(clock, "clock").now()
