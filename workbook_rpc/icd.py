"""The workbook's interface: endpoints, topics and their message types.

Messages use the postcard wire format: unsigned integers wider than a byte
are LEB128 varints, signed integers are zigzag-encoded varints, enum
variants are a varint index, and struct fields follow one another.
Trailing bytes after a decoded message are ignored.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    "WireFormatError",
    "TopicDirection",
    "Endpoint",
    "Topic",
    "Rgb8",
    "SingleLed",
    "BadPositionError",
    "Acceleration",
    "AccelRange",
    "StartAccel",
    "find_endpoint",
    "find_topic",
    "NUM_LEDS",
    "ENDPOINT_LIST",
    "TOPICS_IN_LIST",
    "TOPICS_OUT_LIST",
]

NUM_LEDS = 24


class WireFormatError(ValueError):
    """Raised when bytes do not decode as the expected message."""


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def byte(self) -> int:
        if self._pos >= len(self._data):
            raise WireFormatError("unexpected end of message")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def varint(self, max_bytes: int, bits: int) -> int:
        value = 0
        for shift in range(0, 7 * max_bytes, 7):
            byte = self.byte()
            value |= (byte & 0x7F) << shift
            if not byte & 0x80:
                if value >> bits:
                    raise WireFormatError("varint out of range")
                return value
        raise WireFormatError("varint too long")

    def u32(self) -> int:
        return self.varint(5, 32)

    def i16(self) -> int:
        raw = self.varint(3, 16)
        return (raw >> 1) ^ -(raw & 1)


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _zigzag16(value: int) -> bytes:
    return _varint(((value << 1) ^ (value >> 15)) & 0xFFFF)


def _check(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be in {low}..{high}, not {value}")


@dataclass(frozen=True)
class Rgb8:
    """A colour with 8-bit red, green and blue channels."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            _check(name, getattr(self, name), 0, 0xFF)

    def to_bytes(self) -> bytes:
        return bytes([self.r, self.g, self.b])

    @classmethod
    def from_bytes(cls, data: bytes) -> Rgb8:
        return cls._read(_Reader(data))

    @classmethod
    def _read(cls, reader: _Reader) -> Rgb8:
        return cls(reader.byte(), reader.byte(), reader.byte())


@dataclass(frozen=True)
class SingleLed:
    """A request to set the LED at ``position`` to ``rgb``."""

    position: int
    rgb: Rgb8

    def __post_init__(self) -> None:
        _check("position", self.position, 0, 0xFFFF_FFFF)

    def to_bytes(self) -> bytes:
        return _varint(self.position) + self.rgb.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> SingleLed:
        reader = _Reader(data)
        position = reader.u32()
        return cls(position, Rgb8._read(reader))


class BadPositionError(Exception):
    """An LED position was outside the strip."""


@dataclass(frozen=True)
class Acceleration:
    """A raw accelerometer reading."""

    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            _check(name, getattr(self, name), -0x8000, 0x7FFF)

    def to_bytes(self) -> bytes:
        return _zigzag16(self.x) + _zigzag16(self.y) + _zigzag16(self.z)

    @classmethod
    def from_bytes(cls, data: bytes) -> Acceleration:
        reader = _Reader(data)
        return cls(reader.i16(), reader.i16(), reader.i16())


class AccelRange(enum.Enum):
    """Full-scale range of the accelerometer."""

    G2 = 0
    G4 = 1
    G8 = 2
    G16 = 3


@dataclass(frozen=True)
class StartAccel:
    """A request to stream accelerometer readings every ``interval_ms``."""

    interval_ms: int
    range: AccelRange

    def __post_init__(self) -> None:
        _check("interval_ms", self.interval_ms, 0, 0xFFFF_FFFF)

    def to_bytes(self) -> bytes:
        return _varint(self.interval_ms) + _varint(self.range.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> StartAccel:
        reader = _Reader(data)
        interval = reader.u32()
        index = reader.u32()
        try:
            accel_range = AccelRange(index)
        except ValueError:
            raise WireFormatError(f"unknown accelerometer range {index}") from None
        return cls(interval, accel_range)


class TopicDirection(enum.Enum):
    """Which way a topic's messages flow."""

    TO_SERVER = "to_server"
    TO_CLIENT = "to_client"


@dataclass(frozen=True)
class Endpoint:
    """A request/response pair served at ``path``."""

    name: str
    path: str
    request: str
    response: str


@dataclass(frozen=True)
class Topic:
    """A one-way message stream at ``path``."""

    name: str
    path: str
    message: str
    direction: TopicDirection


PING_ENDPOINT = Endpoint("PingEndpoint", "ping", "u32", "u32")
GET_UNIQUE_ID_ENDPOINT = Endpoint("GetUniqueIdEndpoint", "unique_id/get", "()", "u64")
SET_SINGLE_LED_ENDPOINT = Endpoint(
    "SetSingleLedEndpoint", "led/set_one", "SingleLed", "SingleLedSetResult"
)
SET_ALL_LED_ENDPOINT = Endpoint("SetAllLedEndpoint", "led/set_all", "AllLedArray", "()")
START_ACCELERATION_ENDPOINT = Endpoint(
    "StartAccelerationEndpoint", "accel/start", "StartAccel", "()"
)
STOP_ACCELERATION_ENDPOINT = Endpoint(
    "StopAccelerationEndpoint", "accel/stop", "()", "bool"
)
ACCEL_TOPIC = Topic("AccelTopic", "accel/data", "Acceleration", TopicDirection.TO_CLIENT)

ENDPOINT_LIST: tuple[Endpoint, ...] = (
    PING_ENDPOINT,
    GET_UNIQUE_ID_ENDPOINT,
    SET_SINGLE_LED_ENDPOINT,
    SET_ALL_LED_ENDPOINT,
    START_ACCELERATION_ENDPOINT,
    STOP_ACCELERATION_ENDPOINT,
)
TOPICS_IN_LIST: tuple[Topic, ...] = ()
TOPICS_OUT_LIST: tuple[Topic, ...] = (ACCEL_TOPIC,)


def find_endpoint(path: str) -> Endpoint:
    """Return the endpoint served at ``path``; raise KeyError if there is none."""
    for endpoint in ENDPOINT_LIST:
        if endpoint.path == path:
            return endpoint
    raise KeyError(path)


def find_topic(path: str) -> Topic:
    """Return the topic at ``path`` in either direction; raise KeyError if none."""
    for topic in (*TOPICS_IN_LIST, *TOPICS_OUT_LIST):
        if topic.path == path:
            return topic
    raise KeyError(path)