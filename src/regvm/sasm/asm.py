import logging as lg

import pyparsing as pp

import regvm.sasm.grammar as grammar
from regvm.common import codec
from regvm.common.hwconf import REGISTER_COUNT
from regvm.common.ops import Operation, Kind, PATTERNS


class CompileError(Exception):
    pass


class UnknownOpcode(CompileError):
    pass


class InvalidRegister(CompileError):
    pass


class OperandParseFailure(CompileError):
    pass


class AssemblyError(Exception):
    ''' Fatal error: the whole compilation is discarded '''

    def __init__(self, line: str, lineno: int, cause: Exception, namespace: str | None = None):
        super().__init__(f'Error compiling line: {line}. {cause}')
        self.line = line
        self.lineno = lineno
        self.cause = cause
        self.namespace = namespace


class CompilationItem:
    namespace: str = 'main'
    contents: str

    def __init__(self, contents: str = '', namespace: str = 'main'):
        self.contents = contents
        self.namespace = namespace


def parse_register(token: str) -> int:
    if not grammar.matches(grammar.reg_head, token):
        raise InvalidRegister(f'Invalid operand: {token}')

    try:
        index = grammar.parse_one(grammar.reg_ref, token)
    except pp.ParseException:
        raise InvalidRegister(f'Invalid register index: {token}')

    if index < 0 or index >= REGISTER_COUNT:
        raise InvalidRegister(f'Register index {index} out of range (0-{REGISTER_COUNT - 1})')

    return index


def parse_base(token: str) -> int:
    try:
        return grammar.parse_one(grammar.s_dec_const, token)
    except pp.ParseException:
        raise OperandParseFailure(f'Invalid number: {token}')


def parse_operation(token: str) -> Operation:
    try:
        return grammar.parse_one(grammar.asm_cmd, token)
    except pp.ParseException:
        raise UnknownOpcode(f'Invalid opcode: {token}')


OPERAND_PARSERS = {
    Kind.REG: parse_register,
    Kind.BASE: parse_base,
}


def tokenize(text: str) -> list[str]:
    try:
        return list(grammar.line.parse_string(text, parse_all=True))
    except pp.ParseException as e:
        raise OperandParseFailure(f'Unreadable line: {e}')


def is_code(text: str) -> bool:
    return bool(text) and not text.startswith(grammar.comment_mark)


def parse_instruction(text: str) -> int:
    ''' Translates one trimmed source line into an instruction word '''
    tokens = tokenize(text)

    if not tokens:
        raise UnknownOpcode('Empty instruction')

    op = parse_operation(tokens[0])
    operands = [0, 0, 0]

    # Missing trailing operands stay zero, surplus tokens are ignored
    for (kind, slot), token in zip(PATTERNS[op], tokens[1:]):
        operands[slot] = OPERAND_PARSERS[kind](token)

    word = codec.encode(op, *operands)
    lg.debug(f'Issuing {op.name} {operands} -> 0x{word:08X}')
    return word


def assemble_words(source: str, namespace: str | None = None) -> list[int]:
    words = []

    for lineno, line in enumerate(source.splitlines(), start=1):
        text = line.strip()

        if not is_code(text):
            continue

        try:
            words.append(parse_instruction(text))
        except (CompileError, codec.EncodingOutOfRange) as e:
            raise AssemblyError(line, lineno, e, namespace) from e

    return words


def assemble(source: str) -> bytes:
    return codec.pack_words(assemble_words(source))


def compile_items(compile_items: list[CompilationItem]) -> bytes:
    words: list[int] = []

    for compile_item in compile_items:
        lg.info("Processing {0}".format(compile_item.namespace))
        words.extend(assemble_words(compile_item.contents, compile_item.namespace))

    return codec.pack_words(words)
