"""Colour formats and key states used by the display."""

from __future__ import annotations

from dataclasses import dataclass, fields

# Key order in the 16-bit key register, lowest bit first.
_KEY_ORDER = ("a", "b", "select", "start", "right", "left", "up", "down", "r", "l")


def _bits8_to_5(byte: int) -> int:
    """Approximate an 8-bit intensity as a 5-bit intensity."""
    return int(byte / 255.0 * 31.0) & 0b11111


def _bits5_to_8(value: int) -> int:
    """Approximate a 5-bit intensity as an 8-bit intensity."""
    return int(value / 31.0 * 255.0) & 0xFF


@dataclass(frozen=True)
class BGR555:
    """A 15-bit colour: red in bits 0-4, green in 5-9, blue in 10-14."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"BGR555 value {self.value:#x} does not fit in 16 bits")

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_bytes(cls, data) -> BGR555:
        """Build a colour from bytes.

        Three bytes are read as 8-bit red, green and blue intensities; otherwise
        the first two bytes are read as a little-endian 15-bit colour.
        """
        raw = bytes(data)
        if len(raw) < 2:
            raise ValueError(
                f"At least 2 bytes are needed to convert to BGR555, got {list(raw)}"
            )
        if len(raw) == 3:
            red, green, blue = raw
            return cls(
                _bits8_to_5(red) | _bits8_to_5(green) << 5 | _bits8_to_5(blue) << 10
            )
        return cls(int.from_bytes(raw[:2], "little"))

    @classmethod
    def from_rgba(cls, rgba) -> BGR555:
        """Build a colour from an RGBA value; every channel is taken from its lowest byte."""
        low = _bits8_to_5(int(rgba) & 0xFF)
        return cls(low | low << 5 | low << 10)


@dataclass(frozen=True)
class RGBA:
    """A 24-bit colour with red in bits 16-23, green in 8-15 and blue in 0-7."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF_FFFF:
            raise ValueError(f"RGBA value {self.value:#x} does not fit in 32 bits")

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_bgr555(cls, bgr) -> RGBA:
        """Expand a 15-bit colour to 8 bits per channel."""
        value = int(bgr)
        red = _bits5_to_8(value & 0b000000000011111)
        green = _bits5_to_8((value & 0b000001111100000) >> 5)
        blue = _bits5_to_8((value & 0b111110000000000) >> 10)
        return cls(red << 16 | green << 8 | blue)

    def to_rgb(self) -> tuple[int, int, int]:
        """Return the red, green and blue bytes."""
        return (
            (self.value & 0xFF0000) >> 16,
            (self.value & 0xFF00) >> 8,
            self.value & 0xFF,
        )


@dataclass
class InputStates:
    """Pressed state of each console key, plus the emulator's exit request."""

    a: bool = False
    b: bool = False
    select: bool = False
    start: bool = False
    right: bool = False
    left: bool = False
    up: bool = False
    down: bool = False
    r: bool = False
    l: bool = False  # noqa: E741

    exit: bool = False

    @classmethod
    def from_u16(cls, raw: int) -> InputStates:
        """Read key states from the low ten bits of a key register value."""
        return cls(**{key: bool(raw >> bit & 1) for bit, key in enumerate(_KEY_ORDER)})

    def to_u16(self) -> int:
        """Pack key states into a key register value."""
        return sum(
            1 << bit for bit, key in enumerate(_KEY_ORDER) if getattr(self, key)
        )

    def pressed(self) -> list[str]:
        """Names of the console keys currently pressed."""
        return [f.name for f in fields(self) if f.name in _KEY_ORDER and getattr(self, f.name)]