"""Processor constants: condition codes, opcodes, register indices and Thumb bitmasks."""

# Conditions used in every ARM instruction and in Thumb's conditional branch.
COND_EQ = 0x0
COND_NE = 0x1
COND_CS = 0x2
COND_CC = 0x3
COND_MI = 0x4
COND_PL = 0x5
COND_VS = 0x6
COND_VC = 0x7
COND_HI = 0x8
COND_LS = 0x9
COND_GE = 0xA
COND_LT = 0xB
COND_GT = 0xC
COND_LE = 0xD
COND_AL = 0xE
COND_NV = 0xF

# Data processing opcodes.
DP_AND = 0x0
DP_EOR = 0x1
DP_SUB = 0x2
DP_RSB = 0x3
DP_ADD = 0x4
DP_ADC = 0x5
DP_SBC = 0x6
DP_RSC = 0x7
DP_TST = 0x8
DP_TEQ = 0x9
DP_CMP = 0xA
DP_CMN = 0xB
DP_ORR = 0xC
DP_MOV = 0xD
DP_BIC = 0xE
DP_MVN = 0xF

# Special-purpose register indices.
STACK_POINTER = 13
LINK_REGISTER = 14
PROGRAM_COUNTER = 15

# Register file defaults.
MMU_DISPLAY = 1
REGISTER_COUNT = 16
FIQ_REGISTER_COUNT = 7
BANKED_REGISTER_COUNT = 2

# Thumb 1: move shifted register
THUMB_LSL = 0b0000_0000_0000_0000
THUMB_LSR = 0b0000_1000_0000_0000
THUMB_ASR = 0b0001_0000_0000_0000
THUMB_MOVE_SHIFTED_REG_OP_MASK = 0b1111_1000_0000_0000
THUMB_MOVE_SHIFTED_REG_RS_MASK = 0b0000_0000_0011_1000
THUMB_MOVE_SHIFTED_REG_RD_MASK = 0b0000_0000_0000_0111
THUMB_MOVE_SHIFTED_REG_OFFSET_MASK = 0b0000_0111_1100_0000

# Thumb 2: add/subtract
THUMB_ADD = 0b0001_1000_0000_0000
THUMB_SUB = 0b0001_1010_0000_0000
THUMB_ADDI = 0b0001_1100_0000_0000
THUMB_SUBI = 0b0001_1110_0000_0000
THUMB_ADDSUB_OP_MASK = 0b1111_1110_0000_0000
THUMB_ADDSUB_RN_MASK = 0b0000_0001_1100_0000
THUMB_ADDSUB_RS_MASK = 0b0000_0000_0011_1000
THUMB_ADDSUB_RD_MASK = 0b0000_0000_0000_0111

# Thumb 3: move/compare/add/subtract immediate
THUMB_MOV = 0b0010_0000_0000_0000
THUMB_CMP = 0b0010_1100_0000_0000
THUMB_ADDRI = 0b0011_0000_0000_0000
THUMB_SUBRI = 0b0011_1000_0000_0000
THUMB_IMMEDIATE_OP_MASK = 0b1111_1000_0000_0000
THUMB_IMMEDIATE_RD_MASK = 0b0000_0111_0000_0000
THUMB_IMMEDIATE_NN_MASK = 0b0000_0000_1111_1111

# Thumb 4: ALU operations
THUMB_ALU_AND = 0b0100_0000_0000_0000
THUMB_ALU_EOR = 0b0100_0000_0100_0000
THUMB_ALU_LSL = 0b0100_0000_1000_0000
THUMB_ALU_LSR = 0b0100_0000_1100_0000
THUMB_ALU_ASR = 0b0100_0001_0000_0000
THUMB_ALU_ADC = 0b0100_0001_0100_0000
THUMB_ALU_SBC = 0b0100_0001_1000_0000
THUMB_ALU_ROR = 0b0100_0001_1100_0000
THUMB_ALU_TST = 0b0100_0010_0000_0000
THUMB_ALU_NEG = 0b0100_0010_0100_0000
THUMB_ALU_CMP = 0b0100_0010_1000_0000
THUMB_ALU_CMN = 0b0100_0010_1100_0000
THUMB_ALU_ORR = 0b0100_0011_0000_0000
THUMB_ALU_MUL = 0b0100_0011_0100_0000
THUMB_ALU_BIC = 0b0100_0011_1000_0000
THUMB_ALU_MVN = 0b0100_0011_1100_0000
THUMB_ALU_OP_MASK = 0b1111_1111_1100_0000
THUMB_ALU_RS_MASK = 0b0000_0000_0011_1000
THUMB_ALU_RD_MASK = 0b0000_0000_0000_0111

# Thumb 5: hi register operations / branch exchange
THUMB_HI_ADD = 0b0100_0100_0000_0000
THUMB_HI_CMP = 0b0100_0101_0000_0000
THUMB_HI_MOV = 0b0100_0110_0000_0000
THUMB_HI_NOP = 0b0100_0110_1100_0000
THUMB_BX = 0b0100_0111_0000_0000
THUMB_BLX = 0b0100_0111_1000_0000
THUMB_HI_OP_MASK = 0b1111_1111_1100_0000
THUMB_HI_MSBD_MASK = 0b0000_0000_1000_0000
THUMB_HI_MSBS_MASK = 0b0000_0000_0100_0000
THUMB_HI_RS = 0b0000_0000_0011_1000
THUMB_HI_RD = 0b0000_0000_0000_0111

# Thumb 6: load PC-relative
THUMB_LDPCR = 0b0100_1000_0000_0000
THUMB_LDPCR_MASK = 0b1111_1000_0000_0000
THUMB_LDPCR_RD = 0b0000_0111_0000_0000
THUMB_LDPCR_OFFSET = 0b0000_0000_1111_1111

# Thumb 7: load/store with register offset
THUMB_STR = 0b0101_0000_0000_0000
THUMB_STRB = 0b0101_0100_0000_0000
THUMB_LDR = 0b0101_1000_0000_0000
THUMB_LDRB = 0b0101_1100_0000_0000
THUMB_LS_REG_OFFSET_OPCODE_MASK = 0b1111_1110_0000_0000
THUMB_LS_REG_OFFSET_RO_MASK = 0b0000_0001_1100_0000
THUMB_LS_REG_OFFSET_RB_MASK = 0b0000_0000_0011_1000
THUMB_LS_REG_OFFSET_RD_MASK = 0b0000_0000_0000_0111

# Thumb 8: load/store sign-extended byte/halfword
THUMB_STRH = 0b0101_0010_0000_0000
THUMB_LDSB = 0b0101_0110_0000_0000
THUMB_LDRH = 0b0101_1010_0000_0000
THUMB_LDSH = 0b0101_1110_0000_0000
THUMB_LS_EBH_OP_MASK = 0b1111_1110_0000_0000
THUMB_LS_EBH_RO_MASK = 0b0000_0001_1100_0000
THUMB_LS_EBH_RB_MASK = 0b0000_0000_0011_1000
THUMB_LS_EBH_RD_MASK = 0b0000_0000_0000_0111

# Thumb 9: load/store with immediate offset
THUMB_STRI = 0b0110_0000_0000_0000
THUMB_LDRI = 0b0110_1000_0000_0000
THUMB_STRBI = 0b0111_0000_0000_0000
THUMB_LDRBI = 0b0111_1000_0000_0000
THUMB_LS_NN_OFFSET_OP_MASK = 0b1111_1000_0000_0000
THUMB_LS_NN_OFFSET_NN_MASK = 0b0000_0111_1100_0000
THUMB_LS_NN_OFFSET_RB_MASK = 0b0000_0000_0011_1000
THUMB_LS_NN_OFFSET_RD_MASK = 0b0000_0000_0000_0111

# Thumb 10: load/store halfword
THUMB_STRHW = 0b1000_0000_0000_0000
THUMB_LDRHW = 0b1000_1000_0000_0000
THUMB_LS_HW_OP_MASK = 0b1111_1000_0000_0000
THUMB_LS_HW_NN_MASK = 0b0000_0111_1100_0000
THUMB_LS_HW_RB_MASK = 0b0000_0000_0011_1000
THUMB_LS_HW_RD_MASK = 0b0000_0000_0000_0111

# Thumb 11: load/store SP-relative
THUMB_SP_STR = 0b1001_0000_0000_0000
THUMB_SP_LDR = 0b1001_1000_0000_0000
THUMB_SP_LS_OP_MASK = 0b1111_1000_0000_0000
THUMB_SP_LS_RD_MASK = 0b0000_0111_0000_0000
THUMB_SP_LS_NN_MASK = 0b0000_0000_1111_1111

# Thumb 12: get relative address
THUMB_ADD_PC = 0b1010_0000_0000_0000
THUMB_ADD_SP = 0b1010_1000_0000_0000
THUMB_RELATIVE_ADDR_OP_MASK = 0b1111_1000_0000_0000
THUMB_RELATIVE_ADDR_RD_MASK = 0b0000_0111_0000_0000
THUMB_RELATIVE_ADDR_NN_MASK = 0b0000_0000_1111_1111

# Thumb 13: add offset to stack pointer
THUMB_ADD_SP_NN = 0b1011_0000_0000_0000
THUMB_ADD_SP_MINUS_NN = 0b1011_0000_1000_0000
THUMB_SP_OFFSET_OP_MASK = 0b1111_1111_1000_0000
THUMB_SP_OFFSET_NN_MASK = 0b0000_0000_0111_1111

# Thumb 14: push/pop registers
THUMB_PUSH = 0b1011_0100_0000_0000
THUMB_POP = 0b1011_1000_0000_0000
THUMB_STACK_OPS_OP_MASK = 0b1111_1110_0000_0000
THUMB_STACK_OPS_PC_LR_BIT_MASK = 0b0000_0001_0000_0000
THUMB_STACK_OPS_RLIST_MASK = 0b0000_0000_1111_1111

# Thumb 15: multiple load/store
THUMB_STMIA = 0b1100_0000_0000_0000
THUMB_LDMIA = 0b1100_1000_0000_0000
THUMB_LS_MIA_OP_MASK = 0b1111_1000_0000_0000
THUMB_LS_MIA_RB_MASK = 0b0000_0111_0000_0000
THUMB_LS_MIA_RLIST_MASK = 0b0000_0000_1111_1111

# Thumb 16: conditional branch
THUMB_COND_BRANCH_OP = 0b1101_0000_0000_0000
THUMB_COND_GENERAL_OP_MASK = 0b1111_0000_0000_0000
THUMB_COND_FULL_OP_MASK = 0b1111_1111_0000_0000
THUMB_COND_OFFSET_MASK = 0b0000_0000_1111_1111

# Thumb 17: software interrupt and breakpoint
THUMB_SWI = 0b1101_1111_0000_0000
THUMB_BKPT = 0b1101_1110_0000_0000
THUMB_SWI_BK_OP_MASK = 0b1111_1111_0000_0000
THUMB_SWI_BK_NN_MASK = 0b0000_0000_1111_1111

# Thumb 18: unconditional branch
THUMB_B = 0b1110_0000_0000_0000
THUMB_B_OP_MASK = 0b1111_1000_0000_0000
THUMB_B_OFFSET_MASK = 0b0000_0111_1111_1111

# Thumb 19: long branch with link
THUMB_LONG_BRANCH_FIRST_OP = 0b1111_0000_0000_0000
THUMB_BL = 0b1111_1000_0000_0000
THUMB_BLLX = 0b1111_0000_0000_0000
THUMB_LONG_BRANCH_OP_MASK = 0b1111_1000_0000_0000
THUMB_LONG_BRANCH_ADDR_MASK = 0b0000_0111_1111_1111