"""Geohash encoding and decoding of longitude/latitude pairs."""

from __future__ import annotations

MAX_LON = 180.0
MIN_LON = -180.0
MAX_LAT = 90.0
MIN_LAT = -90.0

MIN_PRECISION = 1
MAX_PRECISION = 12

_BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
_CODES = {char: code for code, char in enumerate(_BASE32)}
_BITS_PER_CHAR = 5


def _split_digits(total_digits: int) -> tuple[int, int]:
    """Return (longitude digits, latitude digits); longitude takes the odd bit."""
    lat_digits = total_digits // 2
    return total_digits - lat_digits, lat_digits


def _coordinate_bits(coordinate: float, low: float, high: float, digits: int) -> list[int]:
    bits = []
    for _ in range(digits):
        mid = (low + high) / 2
        if coordinate >= mid:
            bits.append(1)
            low = mid
        else:
            bits.append(0)
            high = mid
    return bits


def _coordinate_value(bits: list[int], low: float, high: float) -> float:
    for bit in bits:
        mid = (low + high) / 2
        if bit:
            low = mid
        else:
            high = mid
    return (low + high) / 2


def geohash_encode(longitude: float, latitude: float, precision: int) -> str:
    """Encode a coordinate as a geohash of ``precision`` characters (1 to 12)."""
    if not MIN_PRECISION <= precision <= MAX_PRECISION:
        raise ValueError("Precision range from 1 to 12.")

    lon_digits, lat_digits = _split_digits(precision * _BITS_PER_CHAR)
    lon_bits = _coordinate_bits(longitude, MIN_LON, MAX_LON, lon_digits)
    lat_bits = _coordinate_bits(latitude, MIN_LAT, MAX_LAT, lat_digits)

    value = 0
    for index, lon_bit in enumerate(lon_bits):
        value = (value << 1) | lon_bit
        if index < len(lat_bits):
            value = (value << 1) | lat_bits[index]

    return "".join(
        _BASE32[(value >> (_BITS_PER_CHAR * (precision - 1 - position))) & 0b11111]
        for position in range(precision)
    )


def geohash_decode(encoded: str) -> tuple[float, float]:
    """Decode a geohash into the (longitude, latitude) centre of its cell."""
    if not MIN_PRECISION <= len(encoded) <= MAX_PRECISION:
        raise ValueError("Encoded length can only be 1 to 12.")

    codes = []
    for char in encoded:
        try:
            codes.append(_CODES[char])
        except KeyError:
            raise ValueError(f"Not other characters! Char: {char}.") from None

    bits = [(code >> shift) & 1 for code in codes for shift in range(_BITS_PER_CHAR - 1, -1, -1)]
    longitude = _coordinate_value(bits[0::2], MIN_LON, MAX_LON)
    latitude = _coordinate_value(bits[1::2], MIN_LAT, MAX_LAT)
    return longitude, latitude