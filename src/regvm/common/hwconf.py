REGISTER_COUNT = 512
WORD_SIZE = 4                 # bytes per instruction word
BYTE_ORDER = '<'              # struct prefix for the binary stream

OPCODE_BITS = 5
OPERAND_BITS = 9

OPCODE_MASK = (1 << OPCODE_BITS) - 1     # 0x1F
OPERAND_MASK = (1 << OPERAND_BITS) - 1   # 0x1FF

OPERAND1_SHIFT = OPCODE_BITS                      # 5
OPERAND2_SHIFT = OPERAND1_SHIFT + OPERAND_BITS    # 14
OPERAND3_SHIFT = OPERAND2_SHIFT + OPERAND_BITS    # 23

INT32_MIN = -0x80000000
INT32_MAX = 0x7FFFFFFF
UINT32_MASK = 0xFFFFFFFF

MIN_BASE = 2
MAX_BASE = 36
