"""
Grammar of the format tokens.

A token is made of an optional byte order marker followed by a type code

    token := [order] code
    order := '<' | '>'
    code  := '?' | 'B' | 'h' | 'H' | 'i' | 'I' | 'l' | 'L' | 'q' | 'Q' | 'f' | 'd' | digits 's'

A marker changes the byte order for its token and for all the tokens that follow,
until another marker is found. At the start of a format the byte order is big endian.

This module is the only place where widths and kinds are decided, so that packing,
unpacking and size calculation cannot disagree.
"""
import logging
import re
import struct
from typing import Iterator, Tuple

from .enum import Kind
from .exceptions import UnknownToken
from .meta import Token, Endianess, MARKERS, DEFAULT_ENDIANESS


logger = logging.getLogger(__name__)

CODES = {
    '?': Kind.BOOL,
    'B': Kind.U8,
    'h': Kind.U16,
    'H': Kind.U16,
    'i': Kind.U32,
    'I': Kind.U32,
    'l': Kind.U32,
    'L': Kind.U32,
    'q': Kind.U64,
    'Q': Kind.U64,
    'f': Kind.F32,
    'd': Kind.F64,
}

# struct module codes used to encode the scalar kinds (without byte order prefix)
STRUCT_CODES = {
    Kind.BOOL: 'B',
    Kind.U8:   'B',
    Kind.U16:  'H',
    Kind.U32:  'I',
    Kind.U64:  'Q',
    Kind.F32:  'f',
    Kind.F64:  'd',
}

WIDTHS = {kind: struct.calcsize('>' + code) for kind, code in STRUCT_CODES.items()}

STRING_CODE = 's'
_STRING_RE = re.compile(r'([0-9]+)' + STRING_CODE, re.ASCII)


def parse_token(raw: str, index: int = None) -> Token:
    '''Parse a single token, without caring about the tokens around it.'''
    if not isinstance(raw, str) or not raw:
        raise UnknownToken(raw, index=index)

    endianess = MARKERS.get(raw[0])
    code = raw[1:] if endianess else raw

    kind = CODES.get(code)
    if kind is not None:
        return Token(raw, code, kind, WIDTHS[kind], endianess=endianess)

    match = _STRING_RE.fullmatch(code)
    if match is None:
        logger.debug('code \'%s\' of token %r is not recognized' % (code, raw))
        raise UnknownToken(raw, index=index)

    return Token(raw, code, Kind.STRING, int(match.group(1)), endianess=endianess)


def compile_format(format) -> Tuple[Token, ...]:
    '''Normalize a format into a tuple of parsed tokens.

    The format can be an iterable of tokens (strings or already parsed Token)
    or a single string with the tokens separated by whitespaces.'''
    if isinstance(format, str):
        format = format.split()

    tokens = []
    for index, element in enumerate(format):
        tokens.append(element if isinstance(element, Token) else parse_token(element, index=index))

    return tuple(tokens)


def iter_tokens(format) -> Iterator[Tuple[Token, Endianess]]:
    '''Yield each token of the format together with the byte order in effect for it.

    The byte order lives only inside this generator: every iteration starts
    from big endian.'''
    endianess = DEFAULT_ENDIANESS

    for token in compile_format(format):
        if token.endianess is not None:
            endianess = token.endianess

        yield token, endianess


def calcsize(format) -> int:
    '''Return the number of bytes needed by the format.'''
    return sum(token.width for token in compile_format(format))
