"""Access to the TCS34725 colour sensor and MPU6050 motion sensor over I2C."""

from __future__ import annotations

import fcntl
import os
import struct
import time

from sensorlink.records import MPU6050Data, TCS34725Data

I2C_SLAVE = 0x0703
DEFAULT_BUS = "/dev/i2c-1"
_SETTLE_SECONDS = 0.1

ACCEL_SENSITIVITY = 16384.0
GYRO_SENSITIVITY = 131.0


class SensorError(Exception):
    """Raised when an I2C device cannot be opened, written or read."""


class I2CDevice:
    """A file handle on an I2C bus bound to one slave address."""

    def __init__(self, address: int, bus: str = DEFAULT_BUS) -> None:
        self.address = address
        self.bus = bus
        try:
            self._fd: int | None = os.open(bus, os.O_RDWR)
        except OSError as exc:
            raise SensorError(f"cannot open I2C bus {bus}") from exc
        try:
            fcntl.ioctl(self._fd, I2C_SLAVE, address)
        except OSError as exc:
            self.close()
            raise SensorError(
                f"cannot select I2C address {address:#04x} on {bus}"
            ) from exc

    @property
    def closed(self) -> bool:
        return self._fd is None

    def _require_open(self) -> int:
        if self._fd is None:
            raise SensorError("I2C device is closed")
        return self._fd

    def write(self, data: bytes) -> None:
        """Write all of ``data`` in one transfer."""
        fd = self._require_open()
        data = bytes(data)
        try:
            written = os.write(fd, data)
        except OSError as exc:
            raise SensorError(f"I2C write to {self.address:#04x} failed") from exc
        if written != len(data):
            raise SensorError(
                f"short I2C write to {self.address:#04x}: {written} of {len(data)} bytes"
            )

    def read(self, count: int) -> bytes:
        """Read exactly ``count`` bytes in one transfer."""
        fd = self._require_open()
        try:
            data = os.read(fd, count)
        except OSError as exc:
            raise SensorError(f"I2C read from {self.address:#04x} failed") from exc
        if len(data) != count:
            raise SensorError(
                f"short I2C read from {self.address:#04x}: {len(data)} of {count} bytes"
            )
        return data

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> I2CDevice:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def decode_tcs34725(raw: bytes) -> TCS34725Data:
    """Turn the 8 data bytes (clear/IR, red, green, blue) into a sample."""
    if len(raw) != 8:
        raise ValueError(f"TCS34725 data must be 8 bytes, got {len(raw)}")
    ir, red, green, blue = struct.unpack("<4H", bytes(raw))
    luminance = (-0.32466 * red) + (1.57837 * green) - (0.73191 * blue)
    return TCS34725Data(red, green, blue, ir, max(luminance, 0.0))


def decode_mpu6050(accel_raw: bytes, gyro_raw: bytes) -> MPU6050Data:
    """Scale the big-endian accelerometer and gyroscope registers."""
    if len(accel_raw) != 6 or len(gyro_raw) != 6:
        raise ValueError("MPU6050 accelerometer and gyroscope data must be 6 bytes each")
    ax, ay, az = struct.unpack(">3h", bytes(accel_raw))
    gx, gy, gz = struct.unpack(">3h", bytes(gyro_raw))
    return MPU6050Data(
        ax / ACCEL_SENSITIVITY,
        ay / ACCEL_SENSITIVITY,
        az / ACCEL_SENSITIVITY,
        gx / GYRO_SENSITIVITY,
        gy / GYRO_SENSITIVITY,
        gz / GYRO_SENSITIVITY,
    )


class _Sensor:
    ADDRESS = 0

    def __init__(self, bus: str) -> None:
        self._device = I2CDevice(self.ADDRESS, bus)

    @property
    def closed(self) -> bool:
        return self._device.closed

    def close(self) -> None:
        self._device.close()

    def __enter__(self):
        return self

    def __exit__(self, *args) -> None:
        self.close()


class TCS34725(_Sensor):
    """Colour sensor, configured for RGBC at 1x gain on construction."""

    ADDRESS = 0x29
    _CONFIG = (
        (0x80, 0x03),  # ENABLE: power on, RGBC enabled
        (0x81, 0x00),  # ATIME: 700 ms integration
        (0x83, 0xFF),  # WTIME: 2.4 ms
        (0x8F, 0x00),  # CONTROL: 1x gain
    )

    def __init__(self, bus: str = DEFAULT_BUS) -> None:
        super().__init__(bus)
        try:
            for register, value in self._CONFIG:
                self._device.write(bytes((register, value)))
        except SensorError:
            self.close()
            raise
        time.sleep(_SETTLE_SECONDS)

    def read(self) -> TCS34725Data:
        """Read one sample; the device is closed if the transfer fails."""
        try:
            self._device.write(b"\x94")
            raw = self._device.read(8)
        except SensorError:
            self.close()
            raise
        return decode_tcs34725(raw)


class MPU6050(_Sensor):
    """Motion sensor, woken from sleep on construction."""

    ADDRESS = 0x68

    def __init__(self, bus: str = DEFAULT_BUS) -> None:
        super().__init__(bus)
        try:
            self._device.write(b"\x6b\x00")
        except SensorError:
            self.close()
            raise
        time.sleep(_SETTLE_SECONDS)

    def read(self) -> MPU6050Data:
        """Read one sample; the device is closed if the transfer fails."""
        try:
            self._device.write(b"\x3b")
            accel = self._device.read(6)
            self._device.write(b"\x43")
            gyro = self._device.read(6)
        except SensorError:
            self.close()
            raise
        return decode_mpu6050(accel, gyro)