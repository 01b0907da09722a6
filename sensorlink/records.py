"""Sensor reading records and the binary datagram layout that carries them."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass

_TCS_STRUCT = struct.Struct("<4if")
_MPU_STRUCT = struct.Struct("<6f")

TCS_RECORD_SIZE = _TCS_STRUCT.size
MPU_RECORD_SIZE = _MPU_STRUCT.size
BLOCK_SIZE = TCS_RECORD_SIZE + MPU_RECORD_SIZE


@dataclass(frozen=True)
class TCS34725Data:
    """One colour-sensor sample: raw channel counts and derived luminance."""

    red: int
    green: int
    blue: int
    ir: int
    luminance: float


@dataclass(frozen=True)
class MPU6050Data:
    """One motion-sensor sample: acceleration in g, rotation in deg/s."""

    ax: float
    ay: float
    az: float
    gx: float
    gy: float
    gz: float


def pack_readings(
    tcs: Iterable[TCS34725Data], mpu: Iterable[MPU6050Data]
) -> bytes:
    """Encode paired samples: all colour records first, then all motion records."""
    tcs = list(tcs)
    mpu = list(mpu)
    if len(tcs) != len(mpu):
        raise ValueError(
            f"sample counts differ: {len(tcs)} colour vs {len(mpu)} motion"
        )
    colour = b"".join(
        _TCS_STRUCT.pack(t.red, t.green, t.blue, t.ir, t.luminance) for t in tcs
    )
    motion = b"".join(
        _MPU_STRUCT.pack(m.ax, m.ay, m.az, m.gx, m.gy, m.gz) for m in mpu
    )
    return colour + motion


def unpack_readings(
    packet: bytes,
) -> tuple[list[TCS34725Data], list[MPU6050Data]]:
    """Decode a datagram; trailing bytes short of a whole block are ignored."""
    count = len(packet) // BLOCK_SIZE
    split = count * TCS_RECORD_SIZE
    end = split + count * MPU_RECORD_SIZE
    tcs = [TCS34725Data(*fields) for fields in _TCS_STRUCT.iter_unpack(packet[:split])]
    mpu = [MPU6050Data(*fields) for fields in _MPU_STRUCT.iter_unpack(packet[split:end])]
    return tcs, mpu