"""COBS framing and a frame accumulator.

Frames on the wire are COBS-encoded and terminated by a zero byte. The
accumulator collects incoming chunks and hands back each decoded frame,
without interpreting its contents.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "CobsDecodeError",
    "Consumed",
    "OverFull",
    "DeserError",
    "Success",
    "CobsAccumulator",
    "cobs_encode",
    "cobs_decode",
]


class CobsDecodeError(ValueError):
    """Raised when bytes are not valid COBS."""


def cobs_encode(data: bytes) -> bytes:
    """COBS-encode ``data``. The terminating zero byte is not appended."""
    out = bytearray()
    block = bytearray()
    for byte in data:
        if byte == 0:
            out.append(len(block) + 1)
            out += block
            block.clear()
            continue
        block.append(byte)
        if len(block) == 0xFE:
            out.append(0xFF)
            out += block
            block.clear()
    out.append(len(block) + 1)
    out += block
    return bytes(out)


def cobs_decode(data: bytes) -> bytes:
    """Decode COBS bytes, stopping at the first zero byte if there is one."""
    end = data.find(0)
    encoded = data if end < 0 else data[:end]
    out = bytearray()
    pos = 0
    while pos < len(encoded):
        code = encoded[pos]
        if pos + code > len(encoded):
            raise CobsDecodeError("COBS block runs past the end of the frame")
        out += encoded[pos + 1 : pos + code]
        pos += code
        if code != 0xFF and pos < len(encoded):
            out.append(0)
    return bytes(out)


@dataclass(frozen=True)
class Consumed:
    """All input was taken; the frame is still incomplete."""


@dataclass(frozen=True)
class OverFull:
    """The buffer overflowed and the frame was dropped."""

    remaining: bytes


@dataclass(frozen=True)
class DeserError:
    """A frame ended but did not decode."""

    remaining: bytes


@dataclass(frozen=True)
class Success:
    """A frame was decoded."""

    data: bytes
    remaining: bytes


FeedResult = Consumed | OverFull | DeserError | Success


class CobsAccumulator:
    """Collects COBS-encoded bytes into a bounded buffer and decodes frames."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def feed(self, data: bytes) -> FeedResult:
        """Append ``data`` and try to finish a frame.

        The result carries whatever input follows the end of the frame, so
        the caller can feed it back in.
        """
        data = bytes(data)
        if not data:
            return Consumed()

        zero = data.find(0)
        if zero >= 0:
            take, release = data[: zero + 1], data[zero + 1 :]
            if len(self._buf) + len(take) > self.capacity:
                self._buf.clear()
                return OverFull(release)
            self._buf += take
            try:
                decoded = cobs_decode(self._buf)
            except CobsDecodeError:
                return DeserError(release)
            finally:
                self._buf.clear()
            return Success(decoded, release)

        if len(self._buf) + len(data) > self.capacity:
            new_start = self.capacity - len(self._buf)
            self._buf.clear()
            return OverFull(data[new_start:])
        self._buf += data
        return Consumed()