"""Extra arguments for the SET command.

Each helper returns a tuple of arguments that ``Redis.set`` appends after the
key and value, in the order the options are given.
"""

from __future__ import annotations

from typing import Any

SetOption = tuple[Any, ...]


def set_with_ex(seconds: int) -> SetOption:
    """Expire the key after ``seconds`` seconds (Redis >= 2.6.12)."""
    return ("EX", seconds)


def set_with_px(milliseconds: int) -> SetOption:
    """Expire the key after ``milliseconds`` milliseconds (Redis >= 2.6.12)."""
    return ("PX", milliseconds)


def set_with_exat(timestamp_seconds: int) -> SetOption:
    """Expire the key at a Unix time given in seconds (Redis >= 6.2)."""
    return ("EXAT", timestamp_seconds)


def set_with_pxat(timestamp_milliseconds: int) -> SetOption:
    """Expire the key at a Unix time given in milliseconds (Redis >= 6.2)."""
    return ("PXAT", timestamp_milliseconds)


def set_with_nx() -> SetOption:
    """Only set the key if it does not exist yet (Redis >= 2.6.12)."""
    return ("NX",)


def set_with_xx() -> SetOption:
    """Only set the key if it already exists (Redis >= 2.6.12)."""
    return ("XX",)


def set_with_keepttl() -> SetOption:
    """Keep the time to live already attached to the key (Redis >= 6.0)."""
    return ("KEEPTTL",)


def set_with_get() -> SetOption:
    """Return the old value stored at the key, or nil (Redis >= 6.2)."""
    return ("GET",)