"""Decoding of quantised feature vectors and their squared L2 distance."""

from __future__ import annotations

import base64
from typing import Sequence

import numpy as np

_SCALE = np.float32(8.662513732910156)
_DIVISOR = np.float32(255)
_OFFSET = np.float32(-4.304102420806885)


def decode_feature(data: str | bytes) -> np.ndarray:
    """Decode a base64 feature string into a float32 vector.

    Each byte is read as a signed 8-bit value and mapped to
    ``value * 8.662513732910156 / 255 - 4.304102420806885``.
    Raises ValueError on invalid base64.
    """
    raw = base64.b64decode(data, validate=True)
    values = np.frombuffer(raw, dtype=np.int8).astype(np.float32)
    return values * _SCALE / _DIVISOR + _OFFSET


def l2_distance(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Return the sum of squared differences between two feature vectors."""
    first = np.asarray(a, dtype=np.float32)
    second = np.asarray(b, dtype=np.float32)
    if first.shape != second.shape:
        raise ValueError(
            f"feature vectors differ in length: {first.size} and {second.size}"
        )
    diff = first - second
    return float(sum((diff * diff).ravel().tolist()))