"""Smart LED strip state, word packing and the workbook's light patterns.

Each LED takes a 24-bit colour sent green first, then red, then blue, with
the most significant bit first. A colour is packed into the top three bytes
of a 32-bit word so it can be shifted out left-aligned.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from workbook_rpc.icd import NUM_LEDS, BadPositionError, Rgb8, SingleLed

__all__ = [
    "BLACK",
    "GREEN",
    "BLUE",
    "WHITE",
    "LedStrip",
    "pack_word",
    "pack_frame",
    "dim",
    "chase_frame",
    "chase_frames",
    "fade_levels",
    "pot_changed",
]

BLACK = Rgb8(0x00, 0x00, 0x00)
GREEN = Rgb8(0x00, 0x80, 0x00)
BLUE = Rgb8(0x00, 0x00, 0xFF)
WHITE = Rgb8(0xFF, 0xFF, 0xFF)


def pack_word(color: Rgb8) -> int:
    """Pack a colour into a 32-bit word as ``0xGGRRBB00``."""
    return (color.g << 24) | (color.r << 16) | (color.b << 8)


def pack_frame(colors: Iterable[Rgb8]) -> list[int]:
    """Pack every colour of a frame into its word."""
    return [pack_word(color) for color in colors]


def dim(color: Rgb8, divisor: int) -> Rgb8:
    """Divide each channel of ``color`` by ``divisor``, rounding down."""
    if divisor <= 0:
        raise ValueError(f"divisor must be positive, not {divisor}")
    return Rgb8(color.r // divisor, color.g // divisor, color.b // divisor)


def chase_frame(index: int, color: Rgb8, lit: int = 4) -> list[Rgb8]:
    """A frame with ``lit`` LEDs lit from ``index`` onwards, wrapping round.

    All other LEDs are black. At most the whole strip is lit.
    """
    if not 0 <= index < NUM_LEDS:
        raise ValueError(f"index must be in 0..{NUM_LEDS - 1}, not {index}")
    if lit < 0:
        raise ValueError(f"lit must not be negative, not {lit}")
    lit_positions = {(index + step) % NUM_LEDS for step in range(min(lit, NUM_LEDS))}
    return [color if pos in lit_positions else BLACK for pos in range(NUM_LEDS)]


def chase_frames(color: Rgb8, lit: int = 4) -> Iterator[list[Rgb8]]:
    """Endless frames of a block of ``lit`` LEDs moving one step each frame."""
    index = 0
    while True:
        yield chase_frame(index, color, lit)
        index = (index + 1) % NUM_LEDS


def fade_levels(peak: int = 32) -> tuple[int, ...]:
    """Brightness levels fading up from 0 to ``peak`` and back down to 0."""
    if not 0 <= peak <= 0xFF:
        raise ValueError(f"peak must be in 0..255, not {peak}")
    up = tuple(range(peak + 1))
    return up + tuple(reversed(up))


def pot_changed(now: int, last: int, threshold: int = 64) -> bool:
    """Whether a potentiometer reading moved by more than ``threshold``."""
    return abs(now - last) > threshold


class LedStrip:
    """The colours currently shown on a strip of smart LEDs."""

    def __init__(self, size: int = NUM_LEDS) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.size = size
        self.state: list[Rgb8] = [BLACK] * size

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Rgb8]:
        return iter(self.state)

    def set_one(self, led: SingleLed) -> None:
        """Set one LED; raise BadPositionError if it is off the strip."""
        if led.position >= self.size:
            raise BadPositionError(led.position)
        self.state[led.position] = led.rgb

    def set_all(self, colors: Sequence[Rgb8]) -> None:
        """Set every LED at once from exactly ``size`` colours."""
        colors = list(colors)
        if len(colors) != self.size:
            raise ValueError(f"expected {self.size} colours, got {len(colors)}")
        self.state = colors

    def words(self) -> list[int]:
        """The packed words for the current state."""
        return pack_frame(self.state)