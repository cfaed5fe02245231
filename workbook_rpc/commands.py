"""Parsing of the interactive host console's commands.

Each input line is split on whitespace and turned into a command object.
A line that cannot be understood raises CommandError with a message
suitable for showing to the user.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from workbook_rpc.icd import AccelRange, Rgb8

__all__ = [
    "CommandError",
    "Ping",
    "SetRgb",
    "SetRgbAll",
    "AccelListen",
    "AccelStart",
    "AccelStop",
    "ShowSchema",
    "Command",
    "parse_accel_range",
    "parse_command",
]

DEFAULT_PING = 42

_UINT = re.compile(r"\+?[0-9]+")

_RANGES = {
    "2": AccelRange.G2,
    "4": AccelRange.G4,
    "8": AccelRange.G8,
    "16": AccelRange.G16,
}


class CommandError(ValueError):
    """Raised when a console line is not a valid command."""


@dataclass(frozen=True)
class Ping:
    """Ping the device with ``value`` and expect it echoed back."""

    value: int = DEFAULT_PING


@dataclass(frozen=True)
class SetRgb:
    """Set the LED at ``position`` to ``rgb``."""

    position: int
    rgb: Rgb8


@dataclass(frozen=True)
class SetRgbAll:
    """Set every LED to ``rgb``."""

    rgb: Rgb8


@dataclass(frozen=True)
class AccelListen:
    """Stream accelerometer readings for ``duration_ms``, then stop."""

    interval_ms: int
    range: AccelRange
    duration_ms: int


@dataclass(frozen=True)
class AccelStart:
    """Start streaming accelerometer readings every ``interval_ms``."""

    interval_ms: int
    range: AccelRange


@dataclass(frozen=True)
class AccelStop:
    """Stop streaming accelerometer readings."""


@dataclass(frozen=True)
class ShowSchema:
    """Show the device's endpoints and topics."""


Command = Ping | SetRgb | SetRgbAll | AccelListen | AccelStart | AccelStop | ShowSchema


def _parse_uint(text: str, bits: int) -> int | None:
    if not _UINT.fullmatch(text):
        return None
    value = int(text)
    if value >> bits:
        return None
    return value


def _require_uint(text: str, bits: int) -> int:
    value = _parse_uint(text, bits)
    if value is None:
        raise CommandError(f"Bad number: '{text}'")
    return value


def parse_accel_range(text: str) -> AccelRange:
    """Parse an accelerometer range given in g: 2, 4, 8 or 16."""
    try:
        return _RANGES[text]
    except KeyError:
        raise CommandError(f"Bad range: {text}") from None


def _rgb(r: str, g: str, b: str) -> Rgb8:
    return Rgb8(_require_uint(r, 8), _require_uint(g, 8), _require_uint(b, 8))


def parse_command(line: str) -> Command:
    """Parse one console line into a command; raise CommandError if invalid."""
    parts = line.split()
    match parts:
        case ["ping"]:
            return Ping()
        case ["ping", n]:
            value = _parse_uint(n, 32)
            if value is None:
                raise CommandError(f"Bad u32: '{n}'")
            return Ping(value)
        case ["rgb", pos, r, g, b]:
            return SetRgb(_require_uint(pos, 32), _rgb(r, g, b))
        case ["rgball", r, g, b]:
            return SetRgbAll(_rgb(r, g, b))
        case ["accel", "listen", ms, accel_range, dur]:
            interval = _parse_uint(ms, 32)
            if interval is None:
                raise CommandError(f"Bad ms: {ms}")
            duration = _parse_uint(dur, 32)
            if duration is None:
                raise CommandError(f"Bad dur: {dur}")
            return AccelListen(interval, parse_accel_range(accel_range), duration)
        case ["accel", "start", ms, accel_range]:
            interval = _parse_uint(ms, 32)
            if interval is None:
                raise CommandError(f"Bad ms: {ms}")
            return AccelStart(interval, parse_accel_range(accel_range))
        case ["accel", "stop"]:
            return AccelStop()
        case ["schema"]:
            return ShowSchema()
        case _:
            raise CommandError(f"Error, didn't understand '{parts!r}'")