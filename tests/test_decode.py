import pytest

from velera.decode import (
    BaseInstruction,
    DecodedInstruction,
    UndefinedInstructionError,
    base_to_decoded,
    branch,
    branch_exchange,
    data_processing,
    data_transfer,
    get_instr,
    get_last_bits,
    interrupt,
    multiply,
    psr_transfer,
    swap,
)
from velera.enums import MnemonicARM, ShiftType

COND = 0b0000


def test_decode_branch():
    result = branch(0b0000_1011_0000_1110_0011_1100_1111_1010, COND)
    assert result == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.BX,
        val1=1,
        offset=0b0000_1110_0011_1100_1111_1010,
    )


def test_decode_branch_without_link():
    result = branch(0b0000_1010_0000_0000_0000_0000_0000_0101, COND)
    assert result.instr == MnemonicARM.B
    assert result.val1 == 0
    assert result.offset == 5


def test_decode_data_processing():
    add_register = data_processing(0b0000_0000_1000_1100_1010_0000_0001_0101, COND)
    sub_imm = data_processing(0b0000_0010_0101_1001_1100_0010_0001_1111, COND)

    assert add_register == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.ADD,
        rn=0b1100,
        rd=0b1010,
        set_cond=False,
        rm=0b0101,
        rs=0,
        imm=False,
        shift_type=ShiftType.LSL,
    )
    assert sub_imm == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.SUB,
        rn=0b1001,
        rd=0b1100,
        set_cond=True,
        val1=0b0010,
        val2=0b0001_1111,
        imm=True,
    )


def test_decode_data_transfer():
    load_register = data_transfer(0b0000_0111_0011_0001_0100_0010_0100_1000, COND)
    assert load_register == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.LDR,
        rn=0b0001,
        rd=0b0100,
        rm=0b1000,
        val1=0b1001,
        val2=4,
        shift_type=ShiftType.ASR,
        imm=False,
    )

    store_imm = data_transfer(0b0000_0101_1110_0001_0100_1100_1001_0100, COND)
    assert store_imm == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.STR,
        rn=0b0001,
        rd=0b0100,
        val1=0b1111,
        offset=0b1100_1001_0100,
        imm=True,
    )


def test_decode_data_half():
    store_half = data_transfer(0b0000_0001_1010_0111_1100_0000_1011_1110, COND)
    assert store_half == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.STRH,
        val1=0b1101,
        rn=0b0111,
        rd=0b1100,
        rm=0b1110,
        imm=False,
    )

    load_signed_half = data_transfer(0b0000_0001_0111_1011_1001_1001_1111_0110, COND)
    assert load_signed_half == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.LDRSH,
        val1=0b1011,
        rn=0b1011,
        rd=0b1001,
        offset=0b1001_0110,
        imm=True,
    )


def test_decode_data_byte():
    result = data_transfer(0b0000_0001_1011_0011_1110_0000_1101_1001, COND)
    assert result == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.LDRSB,
        val1=0b1101,
        rn=0b0011,
        rd=0b1110,
        rm=0b1001,
        imm=False,
    )


def test_decode_data_block():
    block_load = data_transfer(0b0000_1000_1001_1110_0100_1111_1000_0100, COND)
    assert block_load == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.LDM,
        rn=0b1110,
        val1=0b0100,
        offset=0b0100_1111_1000_0100,
    )

    block_store = data_transfer(0b0000_1001_0110_1101_0101_1101_1010_0111, COND)
    assert block_store == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.STM,
        rn=0b1101,
        val1=0b1011,
        offset=0b0101_1101_1010_0111,
    )


def test_decode_data_swap():
    instruction = 0b0000_0001_0100_1100_0010_0000_1001_1001
    result_swap = swap(instruction, COND)
    result_transfer = data_transfer(instruction, COND)

    assert result_swap == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.SWP,
        val1=1,
        rn=0b1100,
        rd=0b0010,
        rm=0b1001,
    )
    assert result_swap == result_transfer


def test_decode_psr_transfer():
    mrs = psr_transfer(0b0000_0001_0100_1111_0000_0000_0000_0000, COND)
    assert mrs == DecodedInstruction(
        cond=0, instr=MnemonicARM.MRS, val1=1, rd=0, imm=False
    )

    msr_simple = psr_transfer(0b0000_0001_0010_1001_1111_0000_0000_0001, COND)
    assert msr_simple == DecodedInstruction(
        cond=0, instr=MnemonicARM.MSR, val1=0, rm=0b0001, imm=False
    )

    msr_imm = psr_transfer(0b0000_0011_0010_1000_1111_1100_0010_1100, COND)
    assert msr_imm == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.MSR,
        imm=True,
        val1=0,
        val2=0b0010_1100,
        val3=0b1100,
    )


def test_decode_multiply():
    mul_simple = multiply(0b0000_0000_0000_0011_1000_1100_1001_1110, COND)
    assert mul_simple == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.MUL,
        rd=0b0011,
        rn=0b1000,
        rs=0b1100,
        rm=0b1110,
        set_cond=False,
    )

    umlal = multiply(0b0000_0000_1111_1100_1001_0011_1001_0001, COND)
    assert umlal == DecodedInstruction(
        cond=0,
        instr=MnemonicARM.UMLAL,
        rd=0b1100,
        rn=0b1001,
        rs=0b0011,
        rm=0b0001,
        set_cond=True,
    )


def test_get_instr_multiply():
    assert get_instr(0b0000_0000_1111_1100_1001_0011_1001_0001) == BaseInstruction.MULTIPLY


@pytest.mark.parametrize(
    "instruction, expected",
    [
        (0b0000_1011_0000_1110_0011_1100_1111_1010, BaseInstruction.BRANCH),
        (0x0F00_0000, BaseInstruction.INTERRUPT),
        (0b0000_0001_0100_1100_0010_0000_1001_1001, BaseInstruction.DATA_TRANSFER),
        (0b0000_0101_1110_0001_0100_1100_1001_0100, BaseInstruction.DATA_TRANSFER),
        (0b0000_0001_0100_1111_0000_0000_0000_0000, BaseInstruction.PSR),
        (0b0000_0000_1000_1100_1010_0000_0001_0101, BaseInstruction.DATA_PROCESSING),
        (0b0000_0010_0101_1001_1100_0010_0001_1111, BaseInstruction.DATA_PROCESSING),
    ],
)
def test_get_instr_classes(instruction, expected):
    assert get_instr(instruction) == expected


@pytest.mark.parametrize("instruction", [0x0C00_0000, 0x0600_0010])
def test_get_instr_undefined(instruction):
    with pytest.raises(UndefinedInstructionError):
        get_instr(instruction)


def test_base_to_decoded_keeps_condition():
    result = base_to_decoded(0b1110_1011_0000_1110_0011_1100_1111_1010)
    assert result == DecodedInstruction(
        cond=0b1110,
        instr=MnemonicARM.BX,
        val1=1,
        offset=0b0000_1110_0011_1100_1111_1010,
    )


def test_base_to_decoded_data_processing():
    body = 0b0000_0000_1000_1100_1010_0000_0001_0101
    result = base_to_decoded(0xE000_0000 | body)
    assert result == data_processing(body, 0xE)
    assert result.cond == 14
    assert result.instr == MnemonicARM.ADD


def test_base_to_decoded_undefined():
    with pytest.raises(UndefinedInstructionError):
        base_to_decoded(0xEC00_0000)


def test_interrupt_comment_field():
    result = interrupt(0x0F12_3456, COND)
    assert result == DecodedInstruction(
        cond=0, instr=MnemonicARM.SWI, val1=0x12, val2=0x34, val3=0x56
    )


def test_branch_exchange_register():
    result = branch_exchange(0x012F_FF13, 0xE)
    assert result == DecodedInstruction(cond=0xE, instr=MnemonicARM.BX, rn=3)


@pytest.mark.parametrize(
    "value, n, expected",
    [
        (0xFFFF_FFFF, 4, 0xF),
        (0b1011_0110, 3, 0b110),
        (0x1234_5678, 16, 0x5678),
        (0x1234_5678, 0, 0),
        (0xFFFF_FFFF, 32, 0),
    ],
)
def test_get_last_bits(value, n, expected):
    assert get_last_bits(value, n) == expected