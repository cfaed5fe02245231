[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workbook-rpc"
version = "0.1.0"
description = "Message headers, COBS framing, message definitions, LED helpers and console command parsing for a small USB RPC board"
requires-python = ">=3.10"
dependencies = []
keywords = ["rpc", "cobs", "embedded", "usb", "ws2812", "protocol"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["workbook_rpc"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
