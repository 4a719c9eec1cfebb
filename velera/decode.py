"""Decoding of 32-bit ARM instructions into their fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from velera.constants import (
    DP_ADC,
    DP_ADD,
    DP_AND,
    DP_BIC,
    DP_CMN,
    DP_CMP,
    DP_EOR,
    DP_MOV,
    DP_MVN,
    DP_ORR,
    DP_RSB,
    DP_RSC,
    DP_SBC,
    DP_SUB,
    DP_TEQ,
    DP_TST,
)
from velera.enums import MnemonicARM, ShiftType


class UndefinedInstructionError(ValueError):
    """Raised when an instruction matches no known ARM encoding."""


@dataclass
class DecodedInstruction:
    """An instruction split into its fields, ready to be executed."""

    cond: int = 0
    instr: MnemonicARM = MnemonicARM.ILL

    rn: int | None = None  # index register
    rm: int | None = None  # second index register
    rd: int | None = None  # destination register
    rs: int | None = None  # source register

    val1: int | None = None  # multi-purpose values (shift amount, flags, ...)
    val2: int | None = None
    val3: int | None = None

    offset: int | None = None  # offset for branching and transfers

    shift_type: ShiftType | None = None
    set_cond: bool | None = None  # whether condition codes are updated
    imm: bool | None = None  # whether the operand is an immediate
    acc: bool | None = None  # whether the result accumulates


_DP_MNEMONICS = {
    DP_AND: MnemonicARM.AND,
    DP_EOR: MnemonicARM.EOR,
    DP_SUB: MnemonicARM.SUB,
    DP_RSB: MnemonicARM.RSB,
    DP_ADD: MnemonicARM.ADD,
    DP_ADC: MnemonicARM.ADC,
    DP_SBC: MnemonicARM.SBC,
    DP_RSC: MnemonicARM.RSC,
    DP_TST: MnemonicARM.TST,
    DP_TEQ: MnemonicARM.TEQ,
    DP_CMP: MnemonicARM.CMP,
    DP_CMN: MnemonicARM.CMN,
    DP_ORR: MnemonicARM.ORR,
    DP_MOV: MnemonicARM.MOV,
    DP_BIC: MnemonicARM.BIC,
    DP_MVN: MnemonicARM.MVN,
}


def _bit(value: int, n: int) -> bool:
    """Return whether bit ``n`` of a 32-bit value is set."""
    return n < 32 and bool(value & (1 << n))


def get_last_bits(value: int, n: int) -> int:
    """Return the ``n`` lowest bits of ``value``; 0 when ``n`` is 32 or more."""
    if n < 32:
        return value & ((1 << n) - 1)
    return 0


def data_processing(instruction: int, cond: int) -> DecodedInstruction:
    """Decode an ALU instruction."""
    imm = _bit(instruction, 25)
    set_cond = _bit(instruction, 20)
    instr = _DP_MNEMONICS[get_last_bits(instruction >> 21, 4)]
    rn = get_last_bits(instruction >> 16, 4)
    rd = get_last_bits(instruction >> 12, 4)

    if imm:
        return DecodedInstruction(
            cond=cond,
            instr=instr,
            rn=rn,
            rd=rd,
            val1=get_last_bits(instruction >> 8, 4),  # rotation applied to imm
            val2=get_last_bits(instruction, 8),  # immediate value
            imm=True,
            set_cond=set_cond,
        )

    rm = get_last_bits(instruction, 4)
    shift_type = ShiftType(get_last_bits(instruction >> 5, 2))

    if _bit(instruction, 4):
        return DecodedInstruction(
            cond=cond,
            instr=instr,
            rn=rn,
            rm=rm,
            rd=rd,
            rs=get_last_bits(instruction >> 8, 4),
            shift_type=shift_type,
            set_cond=set_cond,
            imm=False,
        )

    return DecodedInstruction(
        cond=cond,
        instr=instr,
        rn=rn,
        rm=rm,
        rd=rd,
        val1=get_last_bits(instruction >> 7, 5),  # immediate shift amount
        shift_type=shift_type,
        set_cond=set_cond,
        imm=False,
    )


def branch_exchange(instruction: int, cond: int) -> DecodedInstruction:
    """Decode BX and BLX."""
    return DecodedInstruction(
        cond=cond,
        rn=get_last_bits(instruction, 4),
        instr=MnemonicARM.BX,
    )


def branch(instruction: int, cond: int) -> DecodedInstruction:
    """Decode B and BL."""
    link = (instruction >> 24) & 1
    return DecodedInstruction(
        cond=cond,
        instr=MnemonicARM.BX if link else MnemonicARM.B,
        val1=link,
        offset=get_last_bits(instruction, 24),
    )


def psr_transfer(instruction: int, cond: int) -> DecodedInstruction:
    """Decode MRS and MSR."""
    psr = int(_bit(instruction, 22))
    imm = _bit(instruction, 25)

    if get_last_bits(instruction, 11) == 0 and not _bit(instruction, 21):
        return DecodedInstruction(
            cond=cond,
            instr=MnemonicARM.MRS,
            rd=get_last_bits(instruction >> 12, 4),
            val1=psr,
            imm=False,
        )

    if _bit(instruction, 16):
        return DecodedInstruction(
            cond=cond,
            instr=MnemonicARM.MSR,
            rm=get_last_bits(instruction, 4),
            val1=psr,
            imm=False,
        )

    if imm:
        return DecodedInstruction(
            cond=cond,
            instr=MnemonicARM.MSR,
            imm=True,
            val1=psr,
            val2=get_last_bits(instruction, 8),  # immediate value
            val3=get_last_bits(instruction >> 8, 4),  # rotation
        )

    return DecodedInstruction(
        cond=cond,
        instr=MnemonicARM.MSR,
        rm=get_last_bits(instruction, 4),
        val1=psr,
        imm=False,
    )


def data_transfer(instruction: int, cond: int) -> DecodedInstruction:
    """Decode single, halfword, signed and block data transfers."""
    imm = _bit(instruction, 25)
    index = int(_bit(instruction, 24)) << 3
    up_down = int(_bit(instruction, 23)) << 2
    byte_or_word = int(_bit(instruction, 22)) << 1
    write_back = int(_bit(instruction, 21))
    load = _bit(instruction, 20)

    rn = get_last_bits(instruction >> 16, 4)
    val1 = index | up_down | byte_or_word | write_back

    if _bit(instruction, 27):
        return DecodedInstruction(
            cond=cond,
            instr=MnemonicARM.LDM if load else MnemonicARM.STM,
            rn=rn,
            val1=val1,
            offset=get_last_bits(instruction, 16),
        )

    rd = get_last_bits(instruction >> 12, 4)

    if _bit(instruction, 26):
        instr = MnemonicARM.LDR if load else MnemonicARM.STR
        if not imm:
            return DecodedInstruction(
                cond=cond,
                instr=instr,
                rn=rn,
                rd=rd,
                val1=val1,
                offset=get_last_bits(instruction, 12),
                imm=True,
            )
        return DecodedInstruction(
            cond=cond,
            instr=instr,
            rn=rn,
            rd=rd,
            rm=get_last_bits(instruction, 4),
            val1=val1,
            val2=get_last_bits(instruction >> 7, 5),  # shift applied to rm
            shift_type=ShiftType(get_last_bits(instruction >> 5, 2)),
            imm=False,
        )

    signed = _bit(instruction, 6)
    halfword = _bit(instruction, 5)

    if not signed and not halfword:
        return swap(instruction, cond)

    if load:
        if signed:
            instr = MnemonicARM.LDRSH if halfword else MnemonicARM.LDRSB
        else:
            instr = MnemonicARM.LDRH
    else:
        instr = MnemonicARM.STRH

    if not _bit(instruction, 22):
        return DecodedInstruction(
            cond=cond,
            instr=instr,
            rn=rn,
            rd=rd,
            rm=get_last_bits(instruction, 4),
            val1=val1,
            imm=False,
        )

    offset = (get_last_bits(instruction >> 8, 4) << 4) | get_last_bits(instruction, 4)
    return DecodedInstruction(
        cond=cond,
        instr=instr,
        rn=rn,
        rd=rd,
        val1=val1,
        offset=offset,
        imm=True,
    )


def multiply(instruction: int, cond: int) -> DecodedInstruction:
    """Decode multiply and multiply-long instructions."""
    long = _bit(instruction, 23)
    unsigned = _bit(instruction, 22)
    acc = _bit(instruction, 21)

    if long:
        if acc:
            instr = MnemonicARM.UMLAL if unsigned else MnemonicARM.SMLAL
        else:
            instr = MnemonicARM.UMULL if unsigned else MnemonicARM.SMULL
    else:
        instr = MnemonicARM.MLA if acc else MnemonicARM.MUL

    return DecodedInstruction(
        cond=cond,
        instr=instr,
        rd=get_last_bits(instruction >> 16, 4),
        rn=get_last_bits(instruction >> 12, 4),
        rs=get_last_bits(instruction >> 8, 4),
        rm=get_last_bits(instruction, 4),
        set_cond=_bit(instruction, 20),
    )


def swap(instruction: int, cond: int) -> DecodedInstruction:
    """Decode SWP."""
    return DecodedInstruction(
        cond=cond,
        instr=MnemonicARM.SWP,
        rn=get_last_bits(instruction >> 16, 4),
        rd=get_last_bits(instruction >> 12, 4),
        rm=get_last_bits(instruction, 4),
        val1=int(_bit(instruction, 22)),
    )


def interrupt(instruction: int, cond: int) -> DecodedInstruction:
    """Decode SWI, splitting its comment field into three bytes."""
    return DecodedInstruction(
        cond=cond,
        instr=MnemonicARM.SWI,
        val1=get_last_bits(instruction >> 16, 8),
        val2=get_last_bits(instruction >> 8, 8),
        val3=get_last_bits(instruction, 8),
    )


class BaseInstruction(Enum):
    """Instruction classes, each handled by one decoding function."""

    BRANCH_AND_EXCHANGE = auto()
    INTERRUPT = auto()
    BRANCH = auto()
    DATA_TRANSFER = auto()
    MULTIPLY = auto()
    DATA_PROCESSING = auto()
    PSR = auto()


def get_instr(instruction: int) -> BaseInstruction:
    """Classify an instruction by its encoding bits."""
    group = get_last_bits(instruction >> 25, 3)

    b24 = _bit(instruction, 24)
    b23 = _bit(instruction, 23)
    b22 = _bit(instruction, 22)
    b21 = _bit(instruction, 21)
    b20 = _bit(instruction, 20)
    b7 = _bit(instruction, 7)
    b4 = _bit(instruction, 4)

    nib4 = get_last_bits(instruction >> 16, 4)
    nib5 = get_last_bits(instruction >> 12, 4)
    nib6 = get_last_bits(instruction >> 8, 4)
    nib7 = get_last_bits(instruction >> 4, 4)

    if (
        group == 0b000
        and b24
        and not b23
        and b22
        and not b21
        and not b20
        and (nib4, nib5, nib6, nib7) == (0b1111, 0b1111, 0b1111, 0b0001)
    ):
        return BaseInstruction.BRANCH_AND_EXCHANGE

    if group == 0b111 and b24:
        return BaseInstruction.INTERRUPT

    if group == 0b101:
        return BaseInstruction.BRANCH

    if (
        (group == 0b011 and not b4)
        or group in (0b010, 0b100)
        or (group == 0b000 and nib6 == 0 and b7 and b4)
    ):
        return BaseInstruction.DATA_TRANSFER

    if group == 0b000 and (
        (not b24 and not b23 and not b22 and nib7 == 0b1001)
        or (not b24 and b23 and nib7 == 0b1001)
        or (b24 and not b23 and not b20 and b7 and not b4)
    ):
        return BaseInstruction.MULTIPLY

    if (group == 0b001 and b24 and not b23 and b21 and not b20) or (
        group == 0b000 and b24 and not b23 and not b20 and nib6 == 0 and nib7 == 0
    ):
        return BaseInstruction.PSR

    if (group == 0b000 and (not b4 or not b7)) or group == 0b001:
        return BaseInstruction.DATA_PROCESSING

    raise UndefinedInstructionError(f"Undefined instruction at decode: {instruction}!")


_DECODERS = {
    BaseInstruction.BRANCH_AND_EXCHANGE: branch_exchange,
    BaseInstruction.INTERRUPT: interrupt,
    BaseInstruction.BRANCH: branch,
    BaseInstruction.DATA_TRANSFER: data_transfer,
    BaseInstruction.MULTIPLY: multiply,
    BaseInstruction.PSR: psr_transfer,
    BaseInstruction.DATA_PROCESSING: data_processing,
}


def base_to_decoded(instruction: int) -> DecodedInstruction:
    """Decode a full 32-bit instruction, condition field included."""
    cond = (instruction >> 28) & 0xF
    body = get_last_bits(instruction, 28)
    return _DECODERS[get_instr(body)](body, cond)