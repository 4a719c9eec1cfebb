import pytest

from velera.arm import ARMInstruction, UnsupportedInstructionError
from velera.constants import PROGRAM_COUNTER
from velera.cpu import CPU, read_rom_to_memory
from velera.enums import MnemonicARM
from velera.micro_ops import dummy_cycle

THUMB_ADD = 0b0001_1001_0010_0100
ARM_ADD = 0xE08CA015


def thumb_cpu(rom: bytes) -> CPU:
    cpu = CPU()
    cpu.rom = rom
    cpu.arm.cpsr.thumb_mode = True
    return cpu


def test_initial_state():
    cpu = CPU()
    assert cpu.fetched_instruction == 0
    assert cpu.decoded_instruction == 0
    assert list(cpu.execution_queue) == []
    assert cpu.should_exit is False
    assert cpu.rom == b""


def test_thumb_fetch_reads_big_endian_halfword():
    cpu = thumb_cpu(THUMB_ADD.to_bytes(2, "big") + bytes(30))
    cpu.cycle()
    assert cpu.fetched_instruction == THUMB_ADD
    assert cpu.arm.load_register(PROGRAM_COUNTER) == 2
    assert list(cpu.execution_queue) == [dummy_cycle]


def test_thumb_second_cycle_executes_and_refetches():
    cpu = thumb_cpu(THUMB_ADD.to_bytes(2, "big") + bytes(30))
    cpu.cycle()
    cpu.cycle()
    assert cpu.arm.load_register(PROGRAM_COUNTER) == 20
    assert list(cpu.execution_queue) == [dummy_cycle]
    assert cpu.fetched_instruction == 0


def test_arm_fetch_reads_big_endian_word():
    cpu = CPU()
    cpu.rom = ARM_ADD.to_bytes(4, "big")
    cpu.cycle()
    assert cpu.fetched_instruction == ARMInstruction.new_fetched(ARM_ADD)
    assert cpu.arm.load_register(PROGRAM_COUNTER) == 4


def test_arm_decode_stores_instruction_then_raises():
    cpu = CPU()
    cpu.rom = ARM_ADD.to_bytes(4, "big")
    cpu.cycle()
    with pytest.raises(UnsupportedInstructionError):
        cpu.cycle()
    assert cpu.decoded_instruction.decoded_instruction.instr == MnemonicARM.ADD


def test_fetch_past_rom_raises():
    cpu = CPU()
    with pytest.raises(IndexError):
        cpu.cycle()


def test_read_rom_round_trip(tmp_path):
    data = bytes(range(16))
    path = tmp_path / "game.gba"
    path.write_bytes(data)
    assert read_rom_to_memory(path) == data
    assert read_rom_to_memory(str(path)) == data


def test_read_missing_rom_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_rom_to_memory(tmp_path / "missing.gba")


def test_run_loads_rom_and_stops_when_exiting(tmp_path):
    data = bytes([1, 2, 3, 4])
    path = tmp_path / "game.gba"
    path.write_bytes(data)
    cpu = CPU()
    cpu.should_exit = True
    cpu.run_rom_max_cycle(path)
    assert cpu.rom == data
    assert cpu.arm.load_register(PROGRAM_COUNTER) == 0


def test_run_thumb_rom_runs_off_the_end(tmp_path):
    path = tmp_path / "zeros.gba"
    path.write_bytes(bytes(64))
    cpu = CPU()
    cpu.arm.cpsr.thumb_mode = True
    with pytest.raises(IndexError):
        cpu.run_rom_max_cycle(path)
    assert cpu.arm.load_register(PROGRAM_COUNTER) > len(cpu.rom) - 2