from unittest import mock

import pytest

from sensorlink.sensors import (
    MPU6050,
    TCS34725,
    I2CDevice,
    SensorError,
    decode_mpu6050,
    decode_tcs34725,
)


@pytest.fixture
def bus(tmp_path):
    path = tmp_path / "i2c"
    path.write_bytes(b"")
    return path


def test_decode_tcs_channel_order():
    data = decode_tcs34725(bytes([4, 0, 1, 0, 2, 0, 3, 0]))
    assert (data.ir, data.red, data.green, data.blue) == (4, 1, 2, 3)


def test_decode_tcs_luminance_clamped():
    data = decode_tcs34725(bytes([0, 0, 0xFF, 0xFF, 0, 0, 0, 0]))
    assert data.luminance == 0.0


def test_decode_tcs_luminance_grows_with_green():
    low = decode_tcs34725(bytes([0, 0, 0, 0, 0x10, 0, 0, 0]))
    high = decode_tcs34725(bytes([0, 0, 0, 0, 0x20, 0, 0, 0]))
    assert 0 < low.luminance < high.luminance


def test_decode_tcs_wrong_length():
    with pytest.raises(ValueError):
        decode_tcs34725(b"\x00" * 7)


def test_decode_mpu_scaling_and_sign():
    accel = (16384).to_bytes(2, "big") + (-16384).to_bytes(2, "big", signed=True) + b"\x00\x00"
    gyro = b"\x00\x00" * 2 + (-131).to_bytes(2, "big", signed=True)
    data = decode_mpu6050(accel, gyro)
    assert data.ax == 1.0
    assert data.ay == -data.ax
    assert data.gz == -1.0


def test_decode_mpu_wrong_length():
    with pytest.raises(ValueError):
        decode_mpu6050(b"\x00" * 6, b"\x00" * 5)


def test_missing_bus_raises(tmp_path):
    with pytest.raises(SensorError):
        I2CDevice(0x29, str(tmp_path / "missing"))


def test_address_selection_failure_raises(bus):
    with pytest.raises(SensorError):
        I2CDevice(0x29, str(bus))


@mock.patch("fcntl.ioctl")
def test_closed_device_rejects_io(ioctl, bus):
    with I2CDevice(0x29, str(bus)) as device:
        device.write(b"\x01\x02")
    assert device.closed
    with pytest.raises(SensorError):
        device.write(b"\x01")
    assert bus.read_bytes() == b"\x01\x02"


@mock.patch("fcntl.ioctl")
def test_tcs_configuration_bytes(ioctl, bus):
    with TCS34725(str(bus)):
        pass
    assert bus.read_bytes() == b"\x80\x03\x81\x00\x83\xff\x8f\x00"
    assert ioctl.call_args.args[2] == 0x29


@mock.patch("fcntl.ioctl")
def test_tcs_read(ioctl, bus):
    raw = bytes([5, 0, 6, 0, 7, 0, 8, 0])
    with TCS34725(str(bus)) as sensor:
        with mock.patch("os.read", return_value=raw):
            result = sensor.read()
    assert result == decode_tcs34725(raw)
    assert bus.read_bytes().endswith(b"\x94")


@mock.patch("fcntl.ioctl")
def test_tcs_short_read_closes(ioctl, bus):
    sensor = TCS34725(str(bus))
    with mock.patch("os.read", return_value=b"\x00"):
        with pytest.raises(SensorError):
            sensor.read()
    assert sensor.closed


@mock.patch("fcntl.ioctl")
def test_mpu_read(ioctl, bus):
    accel = bytes([0x10, 0x00, 0xF0, 0x00, 0x00, 0x20])
    gyro = bytes([0x00, 0x83, 0x01, 0x06, 0xFF, 0x7D])
    with MPU6050(str(bus)) as sensor:
        with mock.patch("os.read", side_effect=[accel, gyro]):
            result = sensor.read()
    assert result == decode_mpu6050(accel, gyro)
    assert bus.read_bytes() == b"\x6b\x00\x3b\x43"
    assert ioctl.call_args.args[2] == 0x68