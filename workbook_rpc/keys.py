"""Variable-length message keys.

A key is natively eight bytes. It can be compressed on the wire to four, two
or one byte by XOR-ing neighbouring bytes together:

* 4 bytes: ``[A^B, C^D, E^F, G^H]``
* 2 bytes: ``[A^B^C^D, E^F^G^H]``
* 1 byte:  ``A^B^C^D^E^F^G^H``

Keys of different lengths compare equal when the longer one, folded down to
the length of the shorter one, matches it.
"""

from __future__ import annotations

import enum

__all__ = ["VarKeyKind", "VarKey", "fold_key"]


class VarKeyKind(enum.Enum):
    """The length of a key in bytes."""

    KEY1 = 1
    KEY2 = 2
    KEY4 = 4
    KEY8 = 8


def _as_length(length: VarKeyKind | int) -> int:
    if isinstance(length, VarKeyKind):
        return length.value
    try:
        return VarKeyKind(length).value
    except ValueError:
        raise ValueError(f"invalid key length: {length!r}") from None


def fold_key(data: bytes, length: VarKeyKind | int) -> bytes:
    """Fold key bytes down to ``length`` bytes by XOR-ing adjacent pairs.

    Raises ValueError if ``data`` is not a valid key or ``length`` is
    longer than ``data``.
    """
    target = _as_length(length)
    folded = bytes(data)
    _as_length(len(folded))
    if target > len(folded):
        raise ValueError(
            f"cannot grow a {len(folded)}-byte key to {target} bytes"
        )
    while len(folded) > target:
        folded = bytes(a ^ b for a, b in zip(folded[0::2], folded[1::2]))
    return folded


class VarKey:
    """An immutable key of 1, 2, 4 or 8 bytes."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        raw = bytes(data)
        if len(raw) not in (1, 2, 4, 8):
            raise ValueError(f"a key must be 1, 2, 4 or 8 bytes, not {len(raw)}")
        self._data = raw

    @property
    def data(self) -> bytes:
        """The raw key bytes."""
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def kind(self) -> VarKeyKind:
        """The current length of the key."""
        return VarKeyKind(len(self._data))

    def shrink_to(self, kind: VarKeyKind) -> VarKey:
        """Return this key shrunk to ``kind``.

        Keys are never grown: if ``kind`` is as long as or longer than the
        current key, the key is returned unchanged.
        """
        if kind.value >= len(self._data):
            return self
        return VarKey(fold_key(self._data, kind))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VarKey):
            return NotImplemented
        shortest = min(len(self._data), len(other._data))
        return fold_key(self._data, shortest) == fold_key(other._data, shortest)

    def __hash__(self) -> int:
        # Equal keys always agree once folded to a single byte.
        return hash(fold_key(self._data, 1))

    def __repr__(self) -> str:
        return f"VarKey({self._data.hex()!r})"