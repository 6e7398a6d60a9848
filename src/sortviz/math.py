from __future__ import annotations


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_int(value: int, low: int, high: int) -> int:
    return int(clamp(int(value), int(low), int(high)))
