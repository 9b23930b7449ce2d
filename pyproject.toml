[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "escbridge"
version = "0.1.0"
description = "Serial bridge for driving ESC motor controllers: COBS framing, CRC-8 checks, MessagePack payloads and throttle-to-PWM mapping"
requires-python = ">=3.10"
keywords = ["esc", "pwm", "cobs", "crc8", "msgpack", "serial", "motor-control"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Communications",
]
dependencies = [
    "msgpack",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["escbridge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
