"""Decoding of 16-bit Thumb instructions into micro-operation sequences."""

from __future__ import annotations

from typing import Any, Callable

from velera.constants import (
    COND_CC,
    COND_CS,
    COND_EQ,
    COND_GE,
    COND_GT,
    COND_HI,
    COND_LE,
    COND_LS,
    COND_LT,
    COND_MI,
    COND_NE,
    COND_PL,
    COND_VC,
    COND_VS,
    PROGRAM_COUNTER,
    THUMB_ADD,
    THUMB_ADD_PC,
    THUMB_ADD_SP,
    THUMB_ADD_SP_MINUS_NN,
    THUMB_ADD_SP_NN,
    THUMB_ADDI,
    THUMB_ADDRI,
    THUMB_ADDSUB_OP_MASK,
    THUMB_ALU_ADC,
    THUMB_ALU_AND,
    THUMB_ALU_ASR,
    THUMB_ALU_BIC,
    THUMB_ALU_CMN,
    THUMB_ALU_CMP,
    THUMB_ALU_EOR,
    THUMB_ALU_LSL,
    THUMB_ALU_LSR,
    THUMB_ALU_MUL,
    THUMB_ALU_MVN,
    THUMB_ALU_NEG,
    THUMB_ALU_OP_MASK,
    THUMB_ALU_ORR,
    THUMB_ALU_ROR,
    THUMB_ALU_SBC,
    THUMB_ALU_TST,
    THUMB_ASR,
    THUMB_B,
    THUMB_B_OP_MASK,
    THUMB_BKPT,
    THUMB_BL,
    THUMB_BLLX,
    THUMB_BLX,
    THUMB_BX,
    THUMB_CMP,
    THUMB_COND_FULL_OP_MASK,
    THUMB_COND_GENERAL_OP_MASK,
    THUMB_HI_ADD,
    THUMB_HI_CMP,
    THUMB_HI_MOV,
    THUMB_HI_NOP,
    THUMB_HI_OP_MASK,
    THUMB_IMMEDIATE_OP_MASK,
    THUMB_LDMIA,
    THUMB_LDPCR,
    THUMB_LDPCR_MASK,
    THUMB_LDR,
    THUMB_LDRB,
    THUMB_LDRBI,
    THUMB_LDRH,
    THUMB_LDRHW,
    THUMB_LDRI,
    THUMB_LDSB,
    THUMB_LDSH,
    THUMB_LONG_BRANCH_FIRST_OP,
    THUMB_LONG_BRANCH_OP_MASK,
    THUMB_LS_EBH_OP_MASK,
    THUMB_LS_HW_OP_MASK,
    THUMB_LS_MIA_OP_MASK,
    THUMB_LS_NN_OFFSET_OP_MASK,
    THUMB_LS_REG_OFFSET_OPCODE_MASK,
    THUMB_LSL,
    THUMB_LSR,
    THUMB_MOV,
    THUMB_MOVE_SHIFTED_REG_OFFSET_MASK,
    THUMB_POP,
    THUMB_PUSH,
    THUMB_RELATIVE_ADDR_OP_MASK,
    THUMB_SP_LDR,
    THUMB_SP_LS_OP_MASK,
    THUMB_SP_OFFSET_OP_MASK,
    THUMB_SP_STR,
    THUMB_STACK_OPS_OP_MASK,
    THUMB_STMIA,
    THUMB_STR,
    THUMB_STRB,
    THUMB_STRBI,
    THUMB_STRH,
    THUMB_STRHW,
    THUMB_STRI,
    THUMB_SUB,
    THUMB_SUBI,
    THUMB_SUBRI,
    THUMB_SWI,
    THUMB_SWI_BK_OP_MASK,
)
from velera.decode import UndefinedInstructionError
from velera.micro_ops import dummy_cycle

MicroOp = Callable[[Any], None]


def _ops(*opcodes: int) -> tuple[tuple[int, MicroOp], ...]:
    """Pair each opcode with the micro operation it enqueues."""
    return tuple((opcode, dummy_cycle) for opcode in opcodes)


# Conditional branches: the condition field is matched through the bits
# the full opcode mask has beyond the general one.
_COND_EXTRA_MASK = THUMB_COND_GENERAL_OP_MASK ^ THUMB_COND_FULL_OP_MASK
_COND_BRANCH_SHIFT = 8
_BRANCH_CONDITIONS = (
    COND_EQ,
    COND_NE,
    COND_CS,
    COND_CC,
    COND_MI,
    COND_PL,
    COND_VS,
    COND_VC,
    COND_HI,
    COND_LS,
    COND_GE,
    COND_LT,
    COND_GT,
    COND_LE,
)

# Opcode groups, checked in order: (mask applied to the instruction, opcodes).
_GROUPS: tuple[tuple[int, tuple[tuple[int, MicroOp], ...]], ...] = (
    (THUMB_MOVE_SHIFTED_REG_OFFSET_MASK, _ops(THUMB_LSR, THUMB_LSL, THUMB_ASR)),
    (THUMB_ADDSUB_OP_MASK, _ops(THUMB_ADD, THUMB_SUB, THUMB_ADDI, THUMB_SUBI)),
    (THUMB_IMMEDIATE_OP_MASK, _ops(THUMB_MOV, THUMB_CMP, THUMB_ADDRI, THUMB_SUBRI)),
    (
        THUMB_ALU_OP_MASK,
        _ops(
            THUMB_ALU_AND,
            THUMB_ALU_EOR,
            THUMB_ALU_LSL,
            THUMB_ALU_LSR,
            THUMB_ALU_ASR,
            THUMB_ALU_ADC,
            THUMB_ALU_SBC,
            THUMB_ALU_ROR,
            THUMB_ALU_TST,
            THUMB_ALU_NEG,
            THUMB_ALU_CMP,
            THUMB_ALU_CMN,
            THUMB_ALU_ORR,
            THUMB_ALU_MUL,
            THUMB_ALU_BIC,
            THUMB_ALU_MVN,
        ),
    ),
    (
        THUMB_HI_OP_MASK,
        _ops(THUMB_HI_ADD, THUMB_HI_CMP, THUMB_HI_MOV, THUMB_HI_NOP, THUMB_BX, THUMB_BLX),
    ),
    (THUMB_LDPCR_MASK, _ops(THUMB_LDPCR)),
    (
        THUMB_LS_REG_OFFSET_OPCODE_MASK,
        _ops(THUMB_STR, THUMB_STRB, THUMB_LDR, THUMB_LDRB),
    ),
    (THUMB_LS_EBH_OP_MASK, _ops(THUMB_STRH, THUMB_LDSB, THUMB_LDRH, THUMB_LDSH)),
    (
        THUMB_LS_NN_OFFSET_OP_MASK,
        _ops(THUMB_STRI, THUMB_LDRI, THUMB_STRBI, THUMB_LDRBI),
    ),
    (THUMB_LS_HW_OP_MASK, _ops(THUMB_STRHW, THUMB_LDRHW)),
    (THUMB_SP_LS_OP_MASK, _ops(THUMB_SP_STR, THUMB_SP_LDR)),
    (THUMB_RELATIVE_ADDR_OP_MASK, _ops(THUMB_ADD_PC, THUMB_ADD_SP)),
    (THUMB_SP_OFFSET_OP_MASK, _ops(THUMB_ADD_SP_NN, THUMB_ADD_SP_MINUS_NN)),
    (THUMB_STACK_OPS_OP_MASK, _ops(THUMB_PUSH, THUMB_POP)),
    (THUMB_LS_MIA_OP_MASK, _ops(THUMB_STMIA, THUMB_LDMIA)),
    (
        THUMB_COND_FULL_OP_MASK,
        _ops(
            *(
                (cond << _COND_BRANCH_SHIFT) & _COND_EXTRA_MASK
                for cond in _BRANCH_CONDITIONS
            )
        ),
    ),
    (THUMB_SWI_BK_OP_MASK, _ops(THUMB_SWI, THUMB_BKPT)),
    (THUMB_B_OP_MASK, _ops(THUMB_B)),
    (
        THUMB_LONG_BRANCH_OP_MASK,
        _ops(THUMB_LONG_BRANCH_FIRST_OP, THUMB_BL, THUMB_BLLX),
    ),
)


def decode_thumb(cpu: Any, instruction: int) -> list[MicroOp]:
    """Return the micro operations for a fetched Thumb instruction.

    The first opcode whose masked bits match decides the sequence. Nothing can
    match while the CPU still has queued micro operations; an instruction that
    matches nothing raises UndefinedInstructionError.
    """
    if not cpu.execution_queue:
        for mask, operations in _GROUPS:
            masked = instruction & mask
            for opcode, handler in operations:
                if opcode == masked:
                    return [handler]

    pc = cpu.arm.load_register(PROGRAM_COUNTER)
    raise UndefinedInstructionError(f"{pc:#x}: undefined THUMB instruction exception.")