"""Single-cycle micro operations executed from the CPU's execution queue."""

from __future__ import annotations

from typing import Any

from velera.arm import ARMInstruction, UnsupportedInstructionError
from velera.constants import LINK_REGISTER, PROGRAM_COUNTER
from velera.decode import DecodedInstruction
from velera.enums import MnemonicARM, ShiftType

_U32 = 0xFFFF_FFFF
_U64 = 0xFFFF_FFFF_FFFF_FFFF
_I32_MAX = 0x7FFF_FFFF


def _i32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= _U32
    return value - (1 << 32) if value & 0x8000_0000 else value


def _i64(value: int) -> int:
    """Wrap an integer into the signed 64-bit range."""
    value &= _U64
    return value - (1 << 64) if value & (1 << 63) else value


def _u64(value: int) -> int:
    """Reinterpret a signed 32-bit register value as a sign-extended unsigned 64-bit one."""
    return value & _U64


def _shl(value: int, amount: int) -> int:
    """Shift a 32-bit value left, the amount taken modulo 32."""
    return _i32(value << (amount & 31))


def _sar(value: int, amount: int) -> int:
    """Arithmetic right shift of a signed 32-bit value, the amount taken modulo 32."""
    return value >> (amount & 31)


def _ror32(value: int, amount: int) -> int:
    """Rotate a 32-bit value right."""
    amount &= 31
    value &= _U32
    return ((value >> amount) | (value << (32 - amount))) & _U32


def _decoded(cpu: Any) -> DecodedInstruction:
    """Return the decoded ARM instruction the CPU is executing."""
    instruction = cpu.decoded_instruction
    if not isinstance(instruction, ARMInstruction):
        raise UnsupportedInstructionError(
            "micro operations for Thumb instructions are not implemented"
        )
    if instruction.decoded_instruction is None:
        raise ValueError("Expected decoded instruction")
    return instruction.decoded_instruction


def _field(decoded: DecodedInstruction, name: str) -> Any:
    """Return a required field of a decoded instruction."""
    value = getattr(decoded, name)
    if value is None:
        raise ValueError(f"Expected {name} in {decoded.instr.name} instruction")
    return value


def dummy_cycle(cpu: Any) -> None:
    """Do nothing; fills a cycle."""


# Branch micro operations


def store_pc_to_lr(cpu: Any) -> None:
    """Copy the program counter into the link register."""
    cpu.arm.store_register(LINK_REGISTER, cpu.arm.load_register(PROGRAM_COUNTER))


def increase_pc_by_offset(cpu: Any) -> None:
    """Add the decoded branch offset to the program counter."""
    decoded = _decoded(cpu)
    if decoded.offset is None:
        raise ValueError("Expected offset in branch instruction")
    cpu.arm.store_register(
        PROGRAM_COUNTER, cpu.arm.load_register(PROGRAM_COUNTER) + decoded.offset
    )


def switch_mode(cpu: Any) -> None:
    """Enter Thumb or ARM state from bit 0 of register rn (branch exchange)."""
    decoded = _decoded(cpu)
    if decoded.rn is None:
        raise ValueError("Expected to find rn")
    cpu.arm.cpsr.thumb_mode = cpu.arm.load_register(decoded.rn) & 1 != 0


# Multiply micro operations


def _set_flags_neutral(cpu: Any, d: int) -> None:
    cpsr = cpu.arm.cpsr
    cpsr.negative = d < 0
    cpsr.zero = d == 0
    cpsr.carry = ((cpu.arm.shifter_carry << 29) & _U32) & 1 != 0


def multiply(cpu: Any) -> None:
    """rd = rm * rs, truncated to 32 bits."""
    decoded = _decoded(cpu)
    rd = _field(decoded, "rd")
    rm = cpu.arm.load_register(_field(decoded, "rm"))
    rs = cpu.arm.load_register(_field(decoded, "rs"))
    set_cond = _field(decoded, "set_cond")

    cpu.arm.store_register(rd, rm * rs)

    if set_cond:
        result = cpu.arm.load_register(rd)
        cpu.arm.cpsr.negative = result >> 31 != 0
        cpu.arm.cpsr.zero = result == 0
        cpu.arm.cpsr.carry = False


def multiply_accumulate(cpu: Any) -> None:
    """rd = rm * rs + accumulator."""
    decoded = _decoded(cpu)
    rd = _field(decoded, "rd")
    rm = cpu.arm.load_register(_field(decoded, "rm"))
    rs = cpu.arm.load_register(_field(decoded, "rs"))
    rn = cpu.arm.load_register(_field(decoded, "rn"))

    product = rm * rs
    if product == _i32(product):
        # The accumulator register is selected by the value read from rn.
        cpu.arm.store_register(rd, product + cpu.arm.load_register(rn))
    else:
        cpu.arm.store_register(rd, product + rn)
    _set_flags_neutral(cpu, cpu.arm.load_register(rd))


def signed_multiply(cpu: Any) -> None:
    """rd_hi:rd_low = rm * rs as a signed 64-bit product."""
    decoded = _decoded(cpu)
    rm = cpu.arm.load_register(_field(decoded, "rm"))
    rs = cpu.arm.load_register(_field(decoded, "rs"))
    rd_low = _field(decoded, "rn")
    rd_hi = _field(decoded, "rd")

    result = rm * rs
    _set_flags_neutral(cpu, result)

    cpu.arm.store_register(rd_low, result & _U32)
    cpu.arm.store_register(rd_hi, result >> 32)


def unsigned_multiply(cpu: Any) -> None:
    """rd_hi:rd_low = rm * rs as an unsigned 64-bit product."""
    decoded = _decoded(cpu)
    rm = _field(decoded, "rm")
    rs = _field(decoded, "rs")
    rd_low = _field(decoded, "rn")
    rd_hi = _field(decoded, "rd")

    result = (
        _u64(cpu.arm.load_register(rm)) * _u64(cpu.arm.load_register(rs))
    ) & _U64

    _set_flags_neutral(cpu, _i64(result))
    cpu.arm.store_register(rd_low, result & _U32)
    cpu.arm.store_register(rd_hi, result >> 32)


def signed_multiply_accumulate(cpu: Any) -> None:
    """Signed 64-bit multiply, accumulated into rd_hi:rd_low."""
    decoded = _decoded(cpu)
    rm = _field(decoded, "rm")
    rs = _field(decoded, "rs")
    rd_hi = _field(decoded, "rd")
    rd_low = _field(decoded, "rn")

    result = cpu.arm.load_register(rm) * cpu.arm.load_register(rs)
    _set_flags_neutral(cpu, result)

    cpu.arm.store_register(rd_low, (result + rd_low) & _U32)
    cpu.arm.store_register(rd_hi, cpu.arm.load_register(rd_hi) + _i32(result >> 32))


def unsigned_multiply_accumulate(cpu: Any) -> None:
    """Unsigned 64-bit multiply, accumulated into rd_hi:rd_low."""
    decoded = _decoded(cpu)
    rm = _field(decoded, "rm")
    rs = _field(decoded, "rs")
    rd_hi = _field(decoded, "rd")
    rd_low = _field(decoded, "rn")

    result = (
        _u64(cpu.arm.load_register(rm)) * _u64(cpu.arm.load_register(rs))
    ) & _U64
    _set_flags_neutral(cpu, _i64(result))

    cpu.arm.store_register(rd_low, ((result + rd_low) & _U64) & _U32)
    cpu.arm.store_register(
        rd_hi, ((cpu.arm.load_register(rd_hi) & _U32) + (result >> 32)) & _U32
    )


# ALU micro operations


def _addition(cpsr: Any, x: int, y: int, set_cond: bool) -> int:
    total = x + y
    if total <= _U32:
        if set_cond:
            cpsr.overflow = total > _U32 >> 1
            cpsr.zero = total == 0
        return total
    total &= _U32
    if set_cond:
        cpsr.zero = total == 0
        cpsr.overflow = True
        cpsr.carry = True
    return total


def _subtract(cpsr: Any, x: int, y: int, set_cond: bool) -> int:
    if x >= y:
        difference = x - y
        if set_cond:
            cpsr.zero = difference == 0
        return difference
    difference = _i32(_i32(x) - _i32(y))
    if set_cond:
        cpsr.carry = True
        cpsr.zero = difference == 0
        cpsr.negative = difference < 0
    return 0


def _ror(cpu: Any, x: int, y: int, set_cond: bool) -> int:
    if y != 0:
        if set_cond:
            cpu.arm.cpsr.negative = x >> 31 != 0
        return x
    carry = int(cpu.arm.cpsr.carry)
    cpu.arm.shifter_carry = carry
    return x | (carry << 31)


def _operand2(cpu: Any, decoded: DecodedInstruction, set_cond: bool) -> int:
    """Compute the second operand through the barrel shifter."""
    arm = cpu.arm
    if _field(decoded, "imm"):
        # The rotation field only encodes even amounts.
        shift = _field(decoded, "val1") * 2
        return _i32(_ror32(_field(decoded, "val2"), shift))

    rm = _field(decoded, "rm")
    to_shift = arm.load_register(rm)
    shift_type = _field(decoded, "shift_type")
    if decoded.rs is not None:
        amount = arm.load_register(decoded.rs)
    else:
        amount = _field(decoded, "val1")

    if shift_type is ShiftType.LSL:
        if set_cond and amount > 0:
            arm.shifter_carry |= _shl(to_shift, amount - 1) & 1
        return _shl(to_shift, amount)

    if shift_type is ShiftType.LSR:
        if amount == 0:
            carry = int(arm.cpsr.carry)
            arm.store_register(rm, arm.load_register(rm) | (carry << 31))
            return 0
        if set_cond:
            arm.shifter_carry |= _shl(to_shift, amount - 1) & 1
        return _sar(to_shift, amount)

    if shift_type is ShiftType.ASR:
        if amount != 0:
            return _sar(to_shift, amount)
        negative = arm.load_register(rm) >> 31 != 0
        if set_cond:
            arm.cpsr.carry = negative
        return _I32_MAX if negative else 0

    return _i32(_ror(cpu, to_shift & _U32, amount & _U32, set_cond))


def alu_master(cpu: Any) -> None:
    """Execute a data processing instruction."""
    decoded = _decoded(cpu)
    rn_index = _field(decoded, "rn")
    rn = cpu.arm.load_register(rn_index)
    set_cond = _field(decoded, "set_cond")
    rd = rn_index
    op2 = _operand2(cpu, decoded, set_cond)

    arm = cpu.arm
    cpsr = arm.cpsr
    x, y = rn & _U32, op2 & _U32
    carry = int(cpsr.carry)

    match decoded.instr:
        case MnemonicARM.AND:
            arm.store_register(rd, rn & op2)
            if set_cond:
                _set_flags_neutral(cpu, rn & op2)
        case MnemonicARM.EOR:
            arm.store_register(rd, rn ^ op2)
        case MnemonicARM.ORR:
            arm.store_register(rd, rn | op2)
        case MnemonicARM.BIC:
            arm.store_register(rd, rn & ~op2)
        case MnemonicARM.ADD:
            arm.store_register(rd, _addition(cpsr, x, y, False))
        case MnemonicARM.ADC:
            arm.store_register(rd, _i32(_addition(cpsr, x, y, False)) + carry)
        case MnemonicARM.SUB:
            arm.store_register(rd, _subtract(cpsr, x, y, False))
        case MnemonicARM.RSB:
            arm.store_register(rd, _subtract(cpsr, y, x, False))
        case MnemonicARM.SBC:
            arm.store_register(rd, _i32(_subtract(cpsr, x, y, False)) + carry - 1)
        case MnemonicARM.RSC:
            arm.store_register(rd, _i32(_subtract(cpsr, y, x, False)) + carry - 1)
        case MnemonicARM.MOV:
            arm.store_register(rd, op2)
        case MnemonicARM.MVN:
            arm.store_register(rd, ~op2)
        case MnemonicARM.TST:
            _set_flags_neutral(cpu, rn & op2)
        case MnemonicARM.TEQ:
            _set_flags_neutral(cpu, rn ^ op2)
        case MnemonicARM.CMP:
            _subtract(cpsr, x, y, True)
        case MnemonicARM.CMN:
            _addition(cpsr, x, y, True)
        case other:
            raise ValueError(f"Unexpected instruction in ALU, {other.name}")