from enum import IntEnum, Enum
from typing import TypeAlias


class Operation(IntEnum):
    PrintRegisters = 0x00    # print all registers in base U1
    BitwiseInversion = 0x01  # ~R1 -> R3
    Disjunction = 0x02       # R1 | R2 -> R3
    Conjunction = 0x03       # R1 & R2 -> R3
    Xor = 0x04               # R1 ^ R2 -> R3
    Implication = 0x05       # ~R1 | R2 -> R3
    Coimplication = 0x06     # R1 | ~R2 -> R3
    Equivalence = 0x07       # (~R1 & ~R2) | (R1 & R2) -> R3
    PierceArrow = 0x08       # ~(R1 | R2) -> R3
    ShefferStroke = 0x09     # ~(R1 & R2) -> R3
    Addition = 0x0A          # R1 + R2 -> R3
    Subtraction = 0x0B       # R1 - R2 -> R3
    Multiplication = 0x0C    # R1 * R2 -> R3
    Division = 0x0D          # R1 / R2 -> R3
    Modulo = 0x0E            # R1 % R2 -> R3
    Swap = 0x0F              # R1 <-> R2
    SetByte = 0x10           # byte R2 of R1 = R3
    PrintOperand = 0x11      # print R1 in base U2
    InputOperand = 0x12      # read R1 in base U2
    MaxPowerOfTwo = 0x13     # 2 ** floor(log2(R1)) -> R3
    ShiftLeft = 0x14         # R1 << R2 -> R3
    ShiftRight = 0x15        # R1 >> R2 -> R3
    RotateLeft = 0x16        # R1 rol R2 -> R3
    RotateRight = 0x17       # R1 ror R2 -> R3
    Copy = 0x18              # R2 -> R1


class Kind(Enum):
    REG = 'register'
    BASE = 'base'


# Operand pattern: (kind, slot) for each token following the mnemonic.
# Slots are 0-based: 0 -> operand1, 1 -> operand2, 2 -> operand3
Pattern: TypeAlias = tuple[tuple[Kind, int], ...]

BASE_ONLY: Pattern = ((Kind.BASE, 0),)
REG_BASE: Pattern = ((Kind.REG, 0), (Kind.BASE, 1))
SRC_DST: Pattern = ((Kind.REG, 0), (Kind.REG, 2))
REG_PAIR: Pattern = ((Kind.REG, 0), (Kind.REG, 1))
REG_TRIPLE: Pattern = ((Kind.REG, 0), (Kind.REG, 1), (Kind.REG, 2))

PATTERNS: dict[Operation, Pattern] = {
    Operation.PrintRegisters: BASE_ONLY,

    Operation.PrintOperand: REG_BASE,
    Operation.InputOperand: REG_BASE,

    Operation.BitwiseInversion: SRC_DST,
    Operation.MaxPowerOfTwo: SRC_DST,

    Operation.Swap: REG_PAIR,
    Operation.Copy: REG_PAIR,

    Operation.SetByte: REG_TRIPLE,
    Operation.ShiftLeft: REG_TRIPLE,
    Operation.ShiftRight: REG_TRIPLE,
    Operation.RotateLeft: REG_TRIPLE,
    Operation.RotateRight: REG_TRIPLE,
    Operation.Disjunction: REG_TRIPLE,
    Operation.Conjunction: REG_TRIPLE,
    Operation.Xor: REG_TRIPLE,
    Operation.Implication: REG_TRIPLE,
    Operation.Coimplication: REG_TRIPLE,
    Operation.Equivalence: REG_TRIPLE,
    Operation.PierceArrow: REG_TRIPLE,
    Operation.ShefferStroke: REG_TRIPLE,
    Operation.Addition: REG_TRIPLE,
    Operation.Subtraction: REG_TRIPLE,
    Operation.Multiplication: REG_TRIPLE,
    Operation.Division: REG_TRIPLE,
    Operation.Modulo: REG_TRIPLE,
}


def from_opcode(opcode: int) -> Operation | None:
    try:
        return Operation(opcode)
    except ValueError:
        return None
