# sensorlink

Read a TCS34725 colour sensor and an MPU6050 accelerometer/gyroscope on a Linux
I2C bus, send the readings over UDP, and run a server that prints statistics for
each incoming packet and for each fixed period.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The server

```
sensorlink-server [PORT] [INTERVAL_SECONDS]
```

`PORT` defaults to 8080 and `INTERVAL_SECONDS` to 60. For each one left off the
command line, the server asks on standard input. Pressing Enter keeps the default.
A value on the command line that is not positive is reported and the default is
used. A value typed at the prompt that is not positive is ignored. Input that is
not a number ends the command with exit status 2. If the port cannot be bound,
the exit status is 1.

At start-up the server lists the IPv4 addresses of the host's interfaces. It then
handles datagrams as follows:

- A datagram made only of printable ASCII, newlines and carriage returns is
  printed as `[Server] Texto: ...` and answered with `ACK: Text`.
- Any other datagram is decoded as sensor readings. The server prints a table
  with the mean, maximum, minimum and standard deviation of each channel (`Red`,
  `Green`, `Blue`, `IR`, `Lumin`, `AX`, `AY`, `AZ`, `GX`, `GY`, `GZ`) and answers
  `ACK: OK`.

Replies go to the sender of the most recent datagram. At the end of every
interval the server prints the statistics of everything received in that period,
or a `NO DATA RECEIVED` line if nothing came. Press Ctrl+C to stop it.

The same loop is available from Python through `sensorlink.app`:

- `resolve_settings` works out the port and interval.
- `handle_datagram` processes one packet.
- `serve` runs the loop on a `sensorlink.server.Server`.

`sensorlink.server.list_ipv4_interfaces` returns the interface/address pairs that
the server prints.

## Sensors and the client

```python
from sensorlink.client import Client
from sensorlink.records import pack_readings
from sensorlink.sensors import MPU6050, TCS34725

with TCS34725("/dev/i2c-1") as colour, MPU6050("/dev/i2c-1") as motion:
    tcs = [colour.read() for _ in range(10)]
    mpu = [motion.read() for _ in range(10)]

with Client("192.0.2.10", 8080) as client:
    client.send_binary_message(pack_readings(tcs, mpu))
    print(client.receive_message())
```

Each sensor sets up its device when it is constructed: `TCS34725` enables RGBC at
1x gain, and `MPU6050` wakes the chip. `read()` returns a `TCS34725Data` or an
`MPU6050Data` record. Failures to open, write or read the bus raise
`sensorlink.sensors.SensorError`, and a failed read closes the device. You can
also decode raw register bytes on their own with `decode_tcs34725` and
`decode_mpu6050`. `I2CDevice` gives plain access to one address on a bus.

`Client.receive_message` waits up to three seconds for a reply and returns an
empty string if none arrives.

`pack_readings` requires equal numbers of colour and motion records. It writes
all colour records first, then all motion records. `unpack_readings` reverses
this and ignores any trailing bytes that do not make up a whole pair.

## Statistics helpers

`sensorlink.stats` provides the functions the server uses to build its output:

- `mean`
- `std_dev` (population standard deviation)
- `is_text`
- `collect_channels`
- `format_stats_table`

It also provides the channel names in `CHANNEL_NAMES`.

## What is not included

There is no command for the sensor side. Reading the sensors and sending the
packets is left to your own script, built from `TCS34725`, `MPU6050`,
`pack_readings` and `Client` as shown above. The sensor classes need a Linux I2C
device node such as `/dev/i2c-1`.