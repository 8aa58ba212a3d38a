"""Random strings and random integers drawn from ranges."""

from __future__ import annotations

import random

CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

_system_random = random.SystemRandom()


def rand_string(length: int) -> str:
    """Return a random alphanumeric string of ``length`` characters."""
    return "".join(random.choices(CHARS, k=max(length, 0)))


def rand_bytes(length: int) -> bytes:
    """Return ``length`` random alphanumeric characters as bytes."""
    return rand_string(length).encode("ascii")


def _draw_range(minimum: int, maximum: int) -> range:
    if maximum <= 0:
        raise ValueError("Please check min and max.")
    return range(max(minimum, 0), maximum)


def rand_count_for_diff(minimum: int, maximum: int, count: int) -> list[int]:
    """Return ``count`` distinct random integers in ``[minimum, maximum)``.

    Numbers come from a cryptographically secure source and are never negative.
    """
    if minimum > maximum:
        raise ValueError("Please check min and max.")
    if maximum - minimum < count:
        raise ValueError("Please check relationship between area and count.")
    if count <= 0:
        return []
    candidates = _draw_range(minimum, maximum)
    if len(candidates) < count:
        raise ValueError("Please check relationship between area and count.")
    return _system_random.sample(candidates, count)


def rand_by_area(minimum: int, maximum: int) -> int:
    """Return a secure random integer in ``[minimum, maximum)`` as a 32-bit value."""
    candidates = _draw_range(minimum, maximum)
    if not candidates:
        raise ValueError("Please check min and max.")
    value = _system_random.choice(candidates)
    return (value + 2**31) % 2**32 - 2**31