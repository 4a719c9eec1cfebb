import pytest

from velera import memory
from velera.memory import MMU


@pytest.fixture(scope="module")
def mmu():
    return MMU()


@pytest.mark.parametrize(
    "addr",
    [
        memory.BIOS_ADDR,
        memory.WORKING_RAM_ADDR + 5,
        memory.WORKING_IRAM_ADDR + 0x7FFF,
        memory.IO_REGISTERS_ADDR + 4,
        memory.PALETTE_RAM_ADDR + 0x3FF,
        memory.VRAM_ADDR + 80 * 480 + 80 * 2,
        memory.OAM_ADDR + 7,
        memory.CART0_ADDR + 0x100,
    ],
)
def test_store8_load8_round_trip(mmu, addr):
    mmu.store8(addr, 0b00011111)
    assert mmu.load8(addr) == 0b00011111
    mmu.store8(addr, 0)
    assert mmu.load8(addr) == 0


def test_fresh_memory_reads_zero():
    fresh = MMU()
    assert fresh.load32(memory.VRAM_ADDR) == 0
    assert fresh.load8(memory.CART0_ADDR) == 0


def test_unmapped_reads_zero_and_ignores_writes(mmu):
    addr = 0x0100_0000
    mmu.store8(addr, 0xAB)
    assert mmu.load8(addr) == 0


def test_load16_puts_first_byte_high(mmu):
    addr = memory.WORKING_RAM_ADDR + 0x10
    mmu.store8(addr, 0x12)
    mmu.store8(addr + 1, 0x34)
    assert mmu.load16(addr) == 0x1234


def test_store16_writes_low_byte_first(mmu):
    addr = memory.WORKING_RAM_ADDR + 0x20
    mmu.store16(addr, 0x1234)
    assert mmu.load8(addr) == 0x34
    assert mmu.load8(addr + 1) == 0x12


def test_store32_byte_order(mmu):
    addr = memory.WORKING_IRAM_ADDR + 0x40
    mmu.store32(addr, 0x11223344)
    assert [mmu.load8(addr + i) for i in range(4)] == [0x44, 0x33, 0x22, 0x11]


def test_load32_combines_half_words(mmu):
    addr = memory.WORKING_IRAM_ADDR + 0x80
    for i, byte in enumerate((0xDE, 0xAD, 0xBE, 0xEF)):
        mmu.store8(addr + i, byte)
    assert mmu.load32(addr) == 0xDEADBEEF


def test_store8_truncates_to_byte(mmu):
    addr = memory.OAM_ADDR + 0x10
    mmu.store8(addr, 0x1FF)
    assert mmu.load8(addr) == 0xFF


def test_regions_are_independent(mmu):
    mmu.store8(memory.VRAM_ADDR + 3, 0x7C)
    mmu.store8(memory.PALETTE_RAM_ADDR + 3, 0x03)
    assert mmu.load8(memory.VRAM_ADDR + 3) == 0x7C
    assert mmu.load8(memory.PALETTE_RAM_ADDR + 3) == 0x03


@pytest.mark.parametrize(
    "addr", [memory.CART_SRAM_ADDR, memory.CART_SRAM_MIRROR_ADDR + 0x10]
)
def test_sram_access_is_rejected(mmu, addr):
    with pytest.raises(NotImplementedError):
        mmu.load8(addr)
    with pytest.raises(NotImplementedError):
        mmu.store8(addr, 1)


def test_cartridge_window_beyond_rom_size_raises(mmu):
    with pytest.raises(IndexError):
        mmu.load8(memory.CART1_ADDR)