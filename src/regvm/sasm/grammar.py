# type: ignore
''' Token grammar '''

import pyparsing as pp

from regvm.common.ops import Operation


def g_cmd(op):
    return pp.Keyword(op.name).setParseAction(lambda _: op)


asm_cmd = pp.MatchFirst([g_cmd(op) for op in Operation])

# Signed plain integer: numeric base arguments
s_dec_const = pp.Regex('[+-]?[0-9]+').setParseAction(lambda r: int(r[0]))

# R<int>, prefix is case-insensitive
reg_head = pp.Regex('[Rr].*')
reg_ref = pp.Regex('[Rr][+-]?[0-9]+').setParseAction(lambda r: int(r[0][1:]))

# Tokens are separated by blanks and commas, empty tokens vanish.
# Any other character, non-ASCII included, belongs to a token
token = pp.Regex('[^, \t\r\n]+')
separator = pp.Suppress(',')
line = pp.ZeroOrMore(token | separator)

comment_mark = '//'


def matches(element: pp.ParserElement, text: str) -> bool:
    return element.matches(text, parse_all=True)


def parse_one(element: pp.ParserElement, text: str):
    return element.parse_string(text, parse_all=True)[0]
