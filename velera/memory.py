"""Memory map of the console: BIOS, work RAM, I/O registers, video memory and cartridge."""

from __future__ import annotations

from dataclasses import dataclass

# Region sizes in bytes.
BIOS_SIZE = 0x000_4000
WRAM_SIZE = 0x004_0000
IWRAM_SIZE = 0x000_8000
IO_REGISTERS_SIZE = 0x000_0400
PALETTE_RAM_SIZE = 0x000_0400
VRAM_SIZE = 0x001_8000
OAM_SIZE = 0x000_0400
CART0_SIZE = 0x200_0000
CART1_SIZE = 0x200_0000
CART2_SIZE = 0x200_0000
CART_SRAM_SIZE = 0x000_8000
CART_FLASH512_SIZE = 0x001_0000
CART_FLASH1M_SIZE = 0x002_0000
CART_EEPROM_SIZE = 0x000_2000
CART_EEPROM512_SIZE = 0x000_0200

# Region base addresses.
BIOS_ADDR = 0x000_0000
WORKING_RAM_ADDR = 0x200_0000
WORKING_IRAM_ADDR = 0x300_0000
IO_REGISTERS_ADDR = 0x400_0000
PALETTE_RAM_ADDR = 0x500_0000
VRAM_ADDR = 0x600_0000
OAM_ADDR = 0x700_0000
CART0_ADDR = 0x800_0000
CART0_EX_ADDR = 0x900_0000
CART1_ADDR = 0xA00_0000
CART1_EX_ADDR = 0xB00_0000
CART2_ADDR = 0xC00_0000
CART2_EX_ADDR = 0xD00_0000
CART_SRAM_ADDR = 0xE00_0000
CART_SRAM_MIRROR_ADDR = 0xF00_0000


@dataclass(frozen=True)
class _Region:
    start: int
    end: int  # inclusive
    attr: str | None  # None marks cartridge SRAM, which is not emulated

    def __contains__(self, addr: int) -> bool:
        return self.start <= addr <= self.end


_REGIONS = (
    _Region(BIOS_ADDR, 0x0000_3FFF, "bios"),
    _Region(WORKING_RAM_ADDR, 0x0203_FFFF, "wram"),
    _Region(WORKING_IRAM_ADDR, 0x0300_7FFF, "iwram"),
    _Region(IO_REGISTERS_ADDR, 0x0400_03FE, "registers"),
    _Region(PALETTE_RAM_ADDR, 0x0500_03FF, "palette"),
    _Region(VRAM_ADDR, 0x0601_7FFF, "vram"),
    _Region(OAM_ADDR, 0x0700_03FF, "oam"),
    _Region(CART0_ADDR, 0x0DFF_FFFF, "rom"),
    _Region(CART_SRAM_ADDR, 0x0E00_FFFF, None),
    _Region(CART_SRAM_MIRROR_ADDR, 0x0F00_FFFF, None),
)


class MMU:
    """Byte-addressed memory with the console's region layout."""

    def __init__(self) -> None:
        self.bios = bytearray(BIOS_SIZE)
        self.wram = bytearray(WRAM_SIZE)
        self.iwram = bytearray(IWRAM_SIZE)
        self.rom = bytearray(CART0_SIZE)
        self.registers = bytearray(IO_REGISTERS_SIZE)
        self.palette = bytearray(PALETTE_RAM_SIZE)
        self.vram = bytearray(VRAM_SIZE)
        self.oam = bytearray(OAM_SIZE)

    def _locate(self, addr: int) -> tuple[bytearray, int] | None:
        """Return the backing buffer and offset for an address, or None if unmapped."""
        for region in _REGIONS:
            if addr in region:
                if region.attr is None:
                    raise NotImplementedError(
                        f"cartridge SRAM at {addr:#x} is not emulated"
                    )
                return getattr(self, region.attr), addr - region.start
        return None

    def load8(self, addr: int) -> int:
        """Read a byte; unmapped addresses read as 0."""
        located = self._locate(addr)
        if located is None:
            return 0
        buffer, offset = located
        return buffer[offset]

    def load16(self, addr: int) -> int:
        """Read a half-word, first byte as the high byte."""
        return ((self.load8(addr) << 8) + self.load8(addr + 1)) & 0xFFFF

    def load32(self, addr: int) -> int:
        """Read a word, first half-word as the high half."""
        return ((self.load16(addr) << 16) + self.load16(addr + 2)) & 0xFFFF_FFFF

    def store8(self, addr: int, val: int) -> None:
        """Write a byte; writes to unmapped addresses are ignored."""
        located = self._locate(addr)
        if located is None:
            return
        buffer, offset = located
        buffer[offset] = val & 0xFF

    def store16(self, addr: int, val: int) -> None:
        """Write a half-word, low byte first."""
        self.store8(addr, val)
        self.store8(addr + 1, val >> 8)

    def store32(self, addr: int, val: int) -> None:
        """Write a word, low byte first."""
        for i in range(4):
            self.store8(addr + i, val >> (8 * i))