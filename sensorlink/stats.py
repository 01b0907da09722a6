"""Summary statistics over sensor channels and their table rendering."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from sensorlink.records import MPU6050Data, TCS34725Data

CHANNEL_NAMES = (
    "Red", "Green", "Blue", "IR", "Lumin", "AX", "AY", "AZ", "GX", "GY", "GZ",
)

_RULE = "----------------------------------------------------------------"
_HEADER = "| Sensor |   Mean    |   Max     |   Min     |  StdDev   |"
_PRINTABLE = frozenset(range(0x20, 0x7F)) | {ord("\n"), ord("\r")}


def mean(values: Sequence[float]) -> float:
    if not values:
        raise ValueError("mean of an empty sequence")
    return math.fsum(values) / len(values)


def std_dev(values: Sequence[float], mean_value: float) -> float:
    """Population standard deviation about ``mean_value``."""
    if not values:
        raise ValueError("standard deviation of an empty sequence")
    return math.sqrt(math.fsum((v - mean_value) ** 2 for v in values) / len(values))


def is_text(data: bytes) -> bool:
    """True when every byte is printable ASCII, newline or carriage return."""
    return all(byte in _PRINTABLE for byte in data)


def collect_channels(
    tcs: Iterable[TCS34725Data], mpu: Iterable[MPU6050Data]
) -> list[list[float]]:
    """Split samples into one value list per entry of CHANNEL_NAMES."""
    columns: list[list[float]] = [[] for _ in CHANNEL_NAMES]
    for t in tcs:
        for column, value in zip(columns[:5], (t.red, t.green, t.blue, t.ir, t.luminance)):
            column.append(float(value))
    for m in mpu:
        for column, value in zip(columns[5:], (m.ax, m.ay, m.az, m.gx, m.gy, m.gz)):
            column.append(float(value))
    return columns


def format_stats_table(
    names: Sequence[str], columns: Sequence[Sequence[float]]
) -> str:
    """Render mean, max, min and standard deviation for each named column."""
    lines = [_RULE, _HEADER, _RULE]
    for name, values in zip(names, columns, strict=True):
        if values:
            m = mean(values)
            stats = (m, max(values), min(values), std_dev(values, m))
        else:
            stats = (math.nan,) * 4
        cells = "| ".join(f"{value:9.3f}" for value in stats)
        lines.append(f"| {name:<6}| {cells} |")
    lines.append(_RULE)
    return "\n".join(lines) + "\n\n"