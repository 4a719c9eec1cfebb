"""ARM7TDMI register file, status registers and ARM-state instruction holders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from velera.constants import (
    BANKED_REGISTER_COUNT,
    FIQ_REGISTER_COUNT,
    PROGRAM_COUNTER,
    REGISTER_COUNT,
)
from velera.decode import DecodedInstruction, base_to_decoded
from velera.enums import ProcessorMode


class UnsupportedInstructionError(NotImplementedError):
    """Raised when a decoded instruction has no execution sequence."""


_MODE_BITS = {
    ProcessorMode.USER: 0b1_0000,
    ProcessorMode.SYSTEM: 0b1_1111,
    ProcessorMode.FIQ: 0b1_0001,
    ProcessorMode.IRQ: 0b1_0010,
    ProcessorMode.SUPERVISOR: 0b1_0011,
    ProcessorMode.ABORT: 0b1_0111,
    ProcessorMode.UNDEFINED: 0b1_1011,
}

# Mode lookup by the low four bits of the mode field.
_MODES_BY_LOW_BITS = {bits & 0b1111: mode for mode, bits in _MODE_BITS.items()}

_FLAG_BITS = (
    ("negative", 31),
    ("zero", 30),
    ("carry", 29),
    ("overflow", 28),
    ("disable_irq", 7),
    ("disable_fiq", 6),
    ("thumb_mode", 5),
)


def _to_i32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFF_FFFF
    return value - (1 << 32) if value & 0x8000_0000 else value


@dataclass
class PSR:
    """Program status register."""

    negative: bool = False
    zero: bool = False
    carry: bool = False
    overflow: bool = False
    thumb_mode: bool = False
    disable_irq: bool = True
    disable_fiq: bool = True
    mode: ProcessorMode = ProcessorMode.USER

    def unpack(self) -> int:
        """Return the register as its 32-bit encoding."""
        value = _MODE_BITS[self.mode]
        for name, bit in _FLAG_BITS:
            if getattr(self, name):
                value |= 1 << bit
        return value

    @classmethod
    def pack(cls, source: int) -> PSR:
        """Build a register from its 32-bit encoding."""
        flags = {name: bool((source >> bit) & 1) for name, bit in _FLAG_BITS}
        mode = _MODES_BY_LOW_BITS.get(source & 0b1111, ProcessorMode.USER)
        return cls(mode=mode, **flags)


@dataclass
class ARM7TDMI:
    """Register file with per-mode banked registers."""

    registers: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    fiq_banked_registers: list[int] = field(
        default_factory=lambda: [0] * FIQ_REGISTER_COUNT
    )
    irq_banked_registers: list[int] = field(
        default_factory=lambda: [0] * BANKED_REGISTER_COUNT
    )
    supervisor_banked_registers: list[int] = field(
        default_factory=lambda: [0] * BANKED_REGISTER_COUNT
    )
    abort_banked_registers: list[int] = field(
        default_factory=lambda: [0] * BANKED_REGISTER_COUNT
    )
    undefined_banked_registers: list[int] = field(
        default_factory=lambda: [0] * BANKED_REGISTER_COUNT
    )

    cpsr: PSR = field(default_factory=PSR)
    spsr_fiq: PSR = field(default_factory=PSR)
    spsr_irq: PSR = field(default_factory=PSR)
    spsr_svc: PSR = field(default_factory=PSR)
    spsr_abt: PSR = field(default_factory=PSR)
    spsr_und: PSR = field(default_factory=PSR)

    shifter_carry: int = 0  # last bit shifted out in execution

    def _slot(self, r: int) -> tuple[list[int], int]:
        """Return the backing list and index for register ``r`` in the current mode."""
        if not 0 <= r < REGISTER_COUNT:
            raise IndexError(f"register index {r} out of range")
        banks = {
            ProcessorMode.FIQ: (self.fiq_banked_registers, 8),
            ProcessorMode.SUPERVISOR: (self.supervisor_banked_registers, 13),
            ProcessorMode.IRQ: (self.irq_banked_registers, 13),
            ProcessorMode.ABORT: (self.abort_banked_registers, 13),
            ProcessorMode.UNDEFINED: (self.undefined_banked_registers, 13),
        }
        bank = banks.get(self.cpsr.mode)
        if bank is not None:
            registers, first = bank
            if first <= r < PROGRAM_COUNTER:
                return registers, r - first
        return self.registers, r

    def load_register(self, r: int) -> int:
        """Read register ``r`` as seen from the current processor mode."""
        registers, index = self._slot(r)
        return registers[index]

    def store_register(self, r: int, v: int) -> None:
        """Write register ``r`` as seen from the current processor mode."""
        registers, index = self._slot(r)
        registers[index] = _to_i32(v)


@dataclass
class ARMInstruction:
    """An ARM instruction at either the fetched or the decoded stage."""

    fetched_instruction: int | None = None
    decoded_instruction: DecodedInstruction | None = None

    @classmethod
    def new_decoded(cls, decoded_instr: DecodedInstruction) -> ARMInstruction:
        return cls(decoded_instruction=decoded_instr)

    @classmethod
    def new_fetched(cls, fetched_instr: int) -> ARMInstruction:
        return cls(fetched_instruction=fetched_instr)


def decode_arm(cpu: Any, instruction: int) -> list:
    """Decode an ARM instruction into the CPU's decoded slot.

    No ARM instruction has an execution sequence yet, so after decoding this
    raises UnsupportedInstructionError.
    """
    decoded = base_to_decoded(instruction)
    cpu.decoded_instruction = ARMInstruction.new_decoded(decoded)
    raise UnsupportedInstructionError(
        f"no execution sequence for ARM instruction {decoded.instr.name}"
    )