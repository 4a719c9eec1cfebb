"""Fetch, decode and execute loop of the processor."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Callable, Union

from velera.arm import ARM7TDMI, ARMInstruction, decode_arm
from velera.constants import PROGRAM_COUNTER
from velera.memory import MMU
from velera.thumb import decode_thumb

# A Thumb instruction is held as its 16-bit value, an ARM one as an ARMInstruction.
InstructionType = Union[int, ARMInstruction]


def read_rom_to_memory(rom_path: str | PathLike) -> bytes:
    """Load a binary ROM image."""
    return Path(rom_path).read_bytes()


@dataclass
class LR35902:
    """Coprocessor kept for backward compatibility; a regular program never switches to it."""


class CPU:
    """Holds memory, registers and the pipeline state of the processor."""

    def __init__(self) -> None:
        self.mmu = MMU()
        self.rom: bytes = b""
        self.arm = ARM7TDMI()
        self.lr = LR35902()
        self.should_exit = False
        self.fetched_instruction: InstructionType = 0  # 0 is a no-op
        self.decoded_instruction: InstructionType = 0
        self.execution_queue: deque[Callable[[CPU], None]] = deque()

    def run_rom_max_cycle(self, rom_path: str | PathLike) -> None:
        """Load a ROM and cycle until told to exit."""
        self.rom = read_rom_to_memory(rom_path)
        while not self.should_exit:
            self.cycle()

    def cycle(self) -> None:
        """Run one fetch, decode and execute step."""
        self._execute()
        if not self.execution_queue:
            self.execution_queue = deque(self._decode())
            self.fetched_instruction = self._fetch()

    @property
    def _thumb_mode(self) -> bool:
        return self.arm.cpsr.thumb_mode

    def _rom_bytes(self, start: int, count: int) -> bytes:
        if start < 0 or start + count > len(self.rom):
            raise IndexError(f"program counter {start:#x} lies outside the ROM")
        return self.rom[start : start + count]

    def _fetch(self) -> InstructionType:
        """Read the next instruction and advance the program counter."""
        pc = self.arm.load_register(PROGRAM_COUNTER)
        if self._thumb_mode:
            data = self._rom_bytes(pc, 2)
            self.arm.store_register(PROGRAM_COUNTER, pc + 2)
            return int.from_bytes(data, "big")
        data = self._rom_bytes(pc, 4)
        self.arm.store_register(PROGRAM_COUNTER, pc + 4)
        return ARMInstruction.new_fetched(int.from_bytes(data, "big"))

    def _decode(self) -> list:
        """Turn the fetched instruction into micro operations."""
        fetched = self.fetched_instruction
        if isinstance(fetched, ARMInstruction):
            return decode_arm(self, fetched.fetched_instruction)
        return decode_thumb(self, fetched)

    def _execute(self) -> None:
        """Run the next queued micro operation, if any."""
        if not self.execution_queue:
            return
        operation = self.execution_queue.popleft()
        operation(self)
        word_size = 16 if self._thumb_mode else 32
        self.arm.store_register(
            PROGRAM_COUNTER, self.arm.load_register(PROGRAM_COUNTER) + word_size
        )