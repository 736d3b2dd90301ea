"""
Google encoded polyline algorithm format.

https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""
import math
from typing import Iterable, List, Tuple


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode(points: Iterable[Tuple[float, float]], precision: int = 5) -> str:
    """Encode (lat, lng) pairs into a polyline string"""
    factor = 10 ** precision
    prev_lat = prev_lng = 0
    encoded = []
    for lat, lng in points:
        lat_i = math.floor(lat * factor + 0.5)
        lng_i = math.floor(lng * factor + 0.5)
        encoded.append(_encode_value(lat_i - prev_lat))
        encoded.append(_encode_value(lng_i - prev_lng))
        prev_lat, prev_lng = lat_i, lng_i
    return "".join(encoded)


def _decode_value(encoded: str, index: int) -> Tuple[int, int]:
    shift = 0
    result = 0
    while True:
        if index >= len(encoded):
            raise ValueError("Truncated polyline string")
        byte = ord(encoded[index]) - 63
        index += 1
        result |= (byte & 0x1F) << shift
        shift += 5
        if byte < 0x20:
            break
    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode(encoded: str, precision: int = 5) -> List[Tuple[float, float]]:
    """Decode a polyline string into (lat, lng) pairs"""
    if not encoded:
        return []

    factor = 10 ** precision
    points = []
    index = lat = lng = 0
    while index < len(encoded):
        d_lat, index = _decode_value(encoded, index)
        d_lng, index = _decode_value(encoded, index)
        lat += d_lat
        lng += d_lng
        points.append((round(lat / factor, precision), round(lng / factor, precision)))
    return points
