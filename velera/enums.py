"""Enumerations shared by the processor: mnemonics, shift types and modes."""

from enum import Enum, auto


class MnemonicARM(Enum):
    """ARM instruction mnemonics; ILL marks an illegal instruction."""

    ILL = auto()
    ADC = auto()
    ADD = auto()
    AND = auto()
    ASR = auto()
    B = auto()
    BIC = auto()
    BKPT = auto()
    BL = auto()
    BX = auto()
    CMN = auto()
    CMP = auto()
    EOR = auto()
    LDM = auto()
    LDR = auto()
    LSL = auto()
    LSR = auto()
    LDRH = auto()
    LDRSB = auto()
    LDRSH = auto()
    MLA = auto()
    MOV = auto()
    MRS = auto()
    MSR = auto()
    MUL = auto()
    MVN = auto()
    NEG = auto()
    ORR = auto()
    ROR = auto()
    RSB = auto()
    RSC = auto()
    SBC = auto()
    SMLAL = auto()
    SMULL = auto()
    STM = auto()
    STR = auto()
    STRH = auto()
    SUB = auto()
    SWI = auto()
    SWP = auto()
    TEQ = auto()
    TST = auto()
    UMLAL = auto()
    UMULL = auto()
    MAX = auto()


class ThumbFirst3Bits(Enum):
    """Thumb instruction groups selected by the top three bits."""

    SHIFT_ADD_SUB = auto()
    IMMEDIATE = auto()
    ALU_HIGH_REG_OPS = auto()
    LOAD_STORE_IMMEDIATE_OFFSET = auto()
    LOAD_STORE_HALFWORD_SP = auto()
    RELATIVE_ADDR_STACK_OPS = auto()
    MULTI_LOAD_STORE_COND_BRANCH_SWI = auto()
    UNCOND_BRANCH = auto()


class ShiftType(Enum):
    """Barrel shifter operations, valued by their two-bit encoding."""

    LSL = 0
    LSR = 1
    ASR = 2
    ROR = 3


class ProcessorMode(Enum):
    """Processor operating modes."""

    USER = auto()
    FIQ = auto()
    IRQ = auto()
    SUPERVISOR = auto()
    ABORT = auto()
    UNDEFINED = auto()
    SYSTEM = auto()