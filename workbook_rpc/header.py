"""The message header: a discriminant byte, a key and a sequence number.

The discriminant has the form ``0bNNMM_VVVV``: ``NN`` selects a key of
1, 2, 4 or 8 bytes, ``MM`` a sequence number of 1, 2 or 4 bytes (``11`` is
invalid) and ``VVVV`` is the protocol version, which must be zero.
Sequence numbers are little-endian on the wire.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from workbook_rpc.keys import VarKey, VarKeyKind

__all__ = ["HeaderError", "VarSeqKind", "VarSeq", "VarHeader"]


class HeaderError(ValueError):
    """Raised when bytes do not hold a well-formed header."""


class VarSeqKind(enum.Enum):
    """The length of a sequence number in bytes."""

    SEQ1 = 1
    SEQ2 = 2
    SEQ4 = 4

    @property
    def mask(self) -> int:
        """The largest value a sequence number of this length can hold."""
        return (1 << (8 * self.value)) - 1


@dataclass(frozen=True, eq=False)
class VarSeq:
    """A sequence number of 1, 2 or 4 bytes.

    Two sequence numbers are equal when their values are equal, whatever
    their lengths.
    """

    kind: VarSeqKind
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= self.kind.mask:
            raise ValueError(
                f"{self.value} does not fit in a {self.kind.value}-byte sequence number"
            )

    def resize(self, kind: VarSeqKind) -> VarSeq:
        """Return this number resized to ``kind``, zero-extending or truncating."""
        if kind is self.kind:
            return self
        return VarSeq(kind, self.value & kind.mask)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VarSeq):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


_KEY_BITS = {
    VarKeyKind.KEY1: 0b00_00_0000,
    VarKeyKind.KEY2: 0b01_00_0000,
    VarKeyKind.KEY4: 0b10_00_0000,
    VarKeyKind.KEY8: 0b11_00_0000,
}
_SEQ_BITS = {
    VarSeqKind.SEQ1: 0b00_00_0000,
    VarSeqKind.SEQ2: 0b00_01_0000,
    VarSeqKind.SEQ4: 0b00_10_0000,
}
_KEY_FROM_BITS = {bits: kind for kind, bits in _KEY_BITS.items()}
_SEQ_FROM_BITS = {bits: kind for kind, bits in _SEQ_BITS.items()}


@dataclass(frozen=True)
class VarHeader:
    """A message header with a variable-length key and sequence number."""

    key: VarKey
    seq_no: VarSeq

    KEY_ONE_BITS: ClassVar[int] = 0b00_00_0000
    KEY_TWO_BITS: ClassVar[int] = 0b01_00_0000
    KEY_FOUR_BITS: ClassVar[int] = 0b10_00_0000
    KEY_EIGHT_BITS: ClassVar[int] = 0b11_00_0000
    KEY_MASK_BITS: ClassVar[int] = 0b11_00_0000

    SEQ_ONE_BITS: ClassVar[int] = 0b00_00_0000
    SEQ_TWO_BITS: ClassVar[int] = 0b00_01_0000
    SEQ_FOUR_BITS: ClassVar[int] = 0b00_10_0000
    SEQ_MASK_BITS: ClassVar[int] = 0b00_11_0000

    VER_ZERO_BITS: ClassVar[int] = 0b00_00_0000
    VER_MASK_BITS: ClassVar[int] = 0b00_00_1111

    def write_to_bytes(self) -> bytes:
        """Encode the header."""
        disc = _KEY_BITS[self.key.kind()] | _SEQ_BITS[self.seq_no.kind]
        seq = self.seq_no.value.to_bytes(self.seq_no.kind.value, "little")
        return bytes([disc]) + self.key.data + seq

    @classmethod
    def take_from_bytes(cls, buf: bytes) -> tuple[VarHeader, bytes]:
        """Decode a header from the front of ``buf``.

        Returns the header and the bytes after it. Raises HeaderError if no
        well-formed header is found.
        """
        buf = bytes(buf)
        if not buf:
            raise HeaderError("empty buffer")
        disc = buf[0]
        if disc & cls.VER_MASK_BITS != cls.VER_ZERO_BITS:
            raise HeaderError(f"unsupported protocol version {disc & cls.VER_MASK_BITS}")
        key_kind = _KEY_FROM_BITS[disc & cls.KEY_MASK_BITS]
        seq_kind = _SEQ_FROM_BITS.get(disc & cls.SEQ_MASK_BITS)
        if seq_kind is None:
            raise HeaderError("invalid sequence number length")

        key_end = 1 + key_kind.value
        seq_end = key_end + seq_kind.value
        if len(buf) < seq_end:
            raise HeaderError("buffer too short for header")
        key = VarKey(buf[1:key_end])
        seq = VarSeq(seq_kind, int.from_bytes(buf[key_end:seq_end], "little"))
        return cls(key, seq), buf[seq_end:]