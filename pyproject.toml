[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensorlink"
version = "0.1.0"
description = "Read TCS34725 colour and MPU6050 motion sensors over I2C, send the readings over UDP, and report per-packet and per-period statistics."
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["udp", "i2c", "sensors", "tcs34725", "mpu6050", "statistics", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sensorlink-server = "sensorlink.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sensorlink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
