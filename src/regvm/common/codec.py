''' Instruction word packing '''

import struct
from typing import Iterable, Iterator, NamedTuple

from regvm.common.hwconf import (
    BYTE_ORDER, WORD_SIZE, UINT32_MASK,
    OPCODE_MASK, OPERAND_MASK,
    OPERAND1_SHIFT, OPERAND2_SHIFT, OPERAND3_SHIFT
)


WORD_FMT = BYTE_ORDER + 'I'


class EncodingOutOfRange(ValueError):
    pass


class TruncatedWord(ValueError):
    pass


class Instruction(NamedTuple):
    opcode: int
    op1: int
    op2: int
    op3: int


def check_field(name: str, value: int, mask: int):
    if value < 0 or value > mask:
        raise EncodingOutOfRange(f'{name} {value} out of range (0-{mask})')


def encode(opcode: int, op1: int = 0, op2: int = 0, op3: int = 0) -> int:
    check_field('Opcode', opcode, OPCODE_MASK)
    check_field('Operand1', op1, OPERAND_MASK)
    check_field('Operand2', op2, OPERAND_MASK)
    check_field('Operand3', op3, OPERAND_MASK)

    return opcode \
        | (op1 << OPERAND1_SHIFT) \
        | (op2 << OPERAND2_SHIFT) \
        | (op3 << OPERAND3_SHIFT)


def decode(word: int) -> Instruction:
    word &= UINT32_MASK

    return Instruction(
        word & OPCODE_MASK,
        (word >> OPERAND1_SHIFT) & OPERAND_MASK,
        (word >> OPERAND2_SHIFT) & OPERAND_MASK,
        (word >> OPERAND3_SHIFT) & OPERAND_MASK
    )


def pack_words(words: Iterable[int]) -> bytes:
    return b''.join(struct.pack(WORD_FMT, word) for word in words)


def iter_words(data: bytes) -> Iterator[int]:
    ''' Yields words in stream order, raises TruncatedWord on a partial tail '''
    for offset in range(0, len(data), WORD_SIZE):
        buf = data[offset:offset + WORD_SIZE]

        if len(buf) < WORD_SIZE:
            raise TruncatedWord(f'Truncated word at offset {offset} ({len(buf)} bytes)')

        (word,) = struct.unpack(WORD_FMT, buf)
        yield word
