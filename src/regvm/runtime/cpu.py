import logging as lg
from typing import Callable, TypeAlias

from regvm.common.codec import Instruction, TruncatedWord, decode, iter_words
from regvm.common.hwconf import UINT32_MASK
from regvm.common.ops import Operation, from_opcode
import regvm.common.radix as radix
from regvm.runtime.registers import RegisterFile


# Asks the user for a line of text, None when cancelled
Prompt: TypeAlias = Callable[[str], str | None]

BinaryOp: TypeAlias = Callable[[int, int], int]


def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_mod(a: int, b: int) -> int:
    return a - b * trunc_div(a, b)


def rotl32(value: int, shift: int) -> int:
    u = radix.to_uint32(value)
    return ((u << shift) | (u >> (32 - shift))) & UINT32_MASK


def rotr32(value: int, shift: int) -> int:
    u = radix.to_uint32(value)
    return ((u >> shift) | (u << (32 - shift))) & UINT32_MASK


class CPU():
    registers: RegisterFile
    prompt: Prompt | None
    output: list[str]

    def __init__(self, registers: RegisterFile, prompt: Prompt | None = None):
        self.registers = registers  # Ref. to the register file
        self.prompt = prompt        # None means every input is cancelled
        self.output = []

    # - Helpers - #

    def emit(self, line: str):
        self.output.append(line)

    def get(self, index: int) -> int:
        return self.registers.get(index)

    def set(self, index: int, value: int):
        self.registers.set(index, value)

    def arithm_pair(self, ins: Instruction, op: BinaryOp):
        a = self.get(ins.op1)
        b = self.get(ins.op2)
        self.set(ins.op3, op(a, b))

    def guarded_pair(self, ins: Instruction, op: BinaryOp):
        a = self.get(ins.op1)
        b = self.get(ins.op2)

        if b == 0:
            self.emit('Error: Division by zero.')
            return

        self.set(ins.op3, op(a, b))

    def ask(self, message: str) -> str | None:
        if self.prompt is None:
            return None

        return self.prompt(message)

    # - Output and input - #

    def print_registers(self, ins: Instruction):
        base = ins.op1
        radix.check_base(base)

        self.emit('Register Values:')

        for i, value in enumerate(self.registers.all()):
            self.emit(f'R{i}: {radix.format_int(value, base)}')

    def print_operand(self, ins: Instruction):
        value = self.get(ins.op1)
        self.emit(f'R{ins.op1}: {radix.format_int(value, ins.op2)}')

    def input_operand(self, ins: Instruction):
        reg = ins.op1
        base = ins.op2
        self.registers.check_index(reg)
        radix.check_base(base)

        answer = self.ask(f'Enter value for R{reg} in base {base}:')

        if answer is None:
            self.emit('Input cancelled.')
            return

        try:
            value = radix.parse_int(answer, base)
        except ValueError as e:
            lg.debug(f'Rejected input {answer!r}: {e}')
            self.emit('Error: Invalid input.')
            return

        self.set(reg, value)

    # - Unary - #

    def inv(self, ins: Instruction):
        a = self.get(ins.op1)
        self.set(ins.op3, ~a)

    def maxpow2(self, ins: Instruction):
        a = self.get(ins.op1)
        self.set(ins.op3, 1 << (a.bit_length() - 1) if a > 0 else 0)

    # - Logic - #

    def disj(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a | b)

    def conj(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a & b)

    def xor(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a ^ b)

    def impl(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: ~a | b)

    def coimpl(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a | ~b)

    def equiv(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: (~a & ~b) | (a & b))

    def pierce(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: ~(a | b))

    def sheffer(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: ~(a & b))

    # - Arithmetic - #

    def add(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a + b)

    def sub(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a - b)

    def mul(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a * b)

    def div(self, ins: Instruction):
        self.guarded_pair(ins, trunc_div)

    def mod(self, ins: Instruction):
        self.guarded_pair(ins, trunc_mod)

    # - Moves - #

    def swap(self, ins: Instruction):
        a = self.get(ins.op1)
        b = self.get(ins.op2)
        self.set(ins.op1, b)
        self.set(ins.op2, a)

    def copy(self, ins: Instruction):
        self.set(ins.op1, self.get(ins.op2))

    def set_byte(self, ins: Instruction):
        value = radix.to_uint32(self.get(ins.op1))
        index = self.get(ins.op2)
        byte = self.get(ins.op3)

        if index < 0 or index > 3:
            self.emit('Error: Byte index out of range (0-3).')
            return

        if byte < 0 or byte > 255:
            self.emit('Error: Byte value out of range (0-255).')
            return

        shift = index * 8
        value = (value & ~(0xFF << shift)) | (byte << shift)
        self.set(ins.op1, value)

    # - Shifts - #

    def lsh(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a << (b & 31))

    def rsh(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: a >> (b & 31))

    def rol(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: rotl32(a, b % 32))

    def ror(self, ins: Instruction):
        self.arithm_pair(ins, lambda a, b: rotr32(a, b % 32))

    HANDLERS = {
        Operation.PrintRegisters: print_registers,
        Operation.PrintOperand: print_operand,
        Operation.InputOperand: input_operand,

        Operation.BitwiseInversion: inv,
        Operation.MaxPowerOfTwo: maxpow2,

        Operation.Disjunction: disj,
        Operation.Conjunction: conj,
        Operation.Xor: xor,
        Operation.Implication: impl,
        Operation.Coimplication: coimpl,
        Operation.Equivalence: equiv,
        Operation.PierceArrow: pierce,
        Operation.ShefferStroke: sheffer,

        Operation.Addition: add,
        Operation.Subtraction: sub,
        Operation.Multiplication: mul,
        Operation.Division: div,
        Operation.Modulo: mod,

        Operation.Swap: swap,
        Operation.Copy: copy,
        Operation.SetByte: set_byte,

        Operation.ShiftLeft: lsh,
        Operation.ShiftRight: rsh,
        Operation.RotateLeft: rol,
        Operation.RotateRight: ror,
    }

    # -- Implementation -- #

    def exec_word(self, word: int):
        ins = decode(word)
        op = from_opcode(ins.opcode)
        handler = self.HANDLERS.get(op) if op is not None else None

        if handler is None:
            self.emit(f'Error: Unknown opcode {ins.opcode}')
            return

        lg.debug(f'{op.name} {ins.op1} {ins.op2} {ins.op3}')

        # A faulty instruction never stops the run
        try:
            handler(self, ins)
        except (ValueError, ArithmeticError, IndexError) as e:
            self.emit(f'Error during instruction execution: {e}')

    def execute(self, data: bytes) -> str:
        self.output = []

        try:
            for word in iter_words(data):
                self.exec_word(word)
        except TruncatedWord as e:
            self.emit(f'Error: {e}')

        return ''.join(f'{line}\n' for line in self.output)
