''' Integer conversions for bases 2..36 '''

import string

from regvm.common.hwconf import MIN_BASE, MAX_BASE, INT32_MIN, INT32_MAX, UINT32_MASK


DIGITS = string.digits + string.ascii_lowercase


class InvalidBase(ValueError):
    def __init__(self, base: int):
        super().__init__('Invalid Base.')
        self.base = base


def to_int32(value: int) -> int:
    value &= UINT32_MASK
    return value - 0x100000000 if value > INT32_MAX else value


def to_uint32(value: int) -> int:
    return value & UINT32_MASK


def is_valid_base(base: int) -> bool:
    return MIN_BASE <= base <= MAX_BASE


def check_base(base: int):
    if not is_valid_base(base):
        raise InvalidBase(base)


def format_int(value: int, base: int) -> str:
    '''
    Decimal output is signed, any other base shows the 32-bit two's complement
    pattern, so -1 in base 16 is 'ffffffff'.
    '''
    check_base(base)

    if base == 10:
        return str(to_int32(value))

    value = to_uint32(value)

    if value == 0:
        return '0'

    digits = []

    while value:
        value, rem = divmod(value, base)
        digits.append(DIGITS[rem])

    return ''.join(reversed(digits))


def parse_int(text: str, base: int) -> int:
    check_base(base)
    text = text.strip()

    if not text:
        raise ValueError('Empty input')

    sign = 1

    if text[0] in '+-':
        sign = -1 if text[0] == '-' else 1
        text = text[1:]

    if not text:
        raise ValueError('Missing digits')

    # int() would also take underscores, inner signs and 0x prefixes
    for char in text.lower():
        if char not in DIGITS[:base]:
            raise ValueError(f'Invalid digit {char!r} for base {base}')

    value = sign * int(text, base)

    if base != 10 and sign > 0 and value <= UINT32_MASK:
        return to_int32(value)

    if value < INT32_MIN or value > INT32_MAX:
        raise ValueError(f'Value {value} out of range')

    return value
