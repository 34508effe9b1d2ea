"""
Tagged values.

Plain python values are ambiguous with respect to the format (an int can be
packed in 1, 2, 4 or 8 bytes): wrapping them in one of the classes here
fixes the kind, and packing will refuse a token of a different kind.

    >>> pack(['H', 'I'], [U16(0x1234), U32(0xcafebabe)])
"""
import math
import struct
from typing import Dict, Type

from .enum import Kind
from .exceptions import TypeMismatch


class Value(object):
    """Base class to subclass from: each subclass indicates its kind."""
    kind: Kind = None

    __slots__ = ('data',)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.data!r})>'

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented

        return self.kind == other.kind and self.data == other.data

    def __hash__(self):
        return hash((self.kind, self.data))


class Bool(Value):
    kind = Kind.BOOL


class Unsigned(Value):
    digits = 0

    def __repr__(self):
        if not isinstance(self.data, int):
            return super().__repr__()

        return f'<{self.__class__.__name__}(0x{self.data:0{self.digits}x})>'


class U8(Unsigned):
    kind = Kind.U8
    digits = 2


class U16(Unsigned):
    kind = Kind.U16
    digits = 4


class U32(Unsigned):
    kind = Kind.U32
    digits = 8


class U64(Unsigned):
    kind = Kind.U64
    digits = 16


class F32(Value):
    kind = Kind.F32


class F64(Value):
    kind = Kind.F64


class String(Value):
    kind = Kind.STRING


VALUE_CLASSES: Dict[Kind, Type[Value]] = {
    cls.kind: cls for cls in (Bool, U8, U16, U32, U64, F32, F64, String)
}


def tag(kind: Kind, data) -> Value:
    '''Wrap the data into the Value subclass for the given kind.'''
    return VALUE_CLASSES[kind](data)


def is_binary32(data: float) -> bool:
    '''True if the float survives being packed as an IEEE-754 binary32.'''
    if math.isnan(data):
        return True

    try:
        return struct.unpack('>f', struct.pack('>f', data))[0] == data
    except OverflowError:
        return False


_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off')


def from_text(token, text: str) -> Value:
    '''Build a value for the token from its textual representation,
    as given for example on the command line.'''
    kind = token.kind

    if kind == Kind.STRING:
        return String(text)

    try:
        if kind == Kind.BOOL:
            lowered = text.strip().lower()
            if lowered not in _TRUE + _FALSE:
                raise ValueError(f'{text!r} is not a boolean')
            return Bool(lowered in _TRUE)

        if kind.is_integer:
            return tag(kind, int(text, 0))

        data = float(text)
        if kind == Kind.F32 and not is_binary32(data):
            raise ValueError(f'{text!r} is not representable as binary32')

        return tag(kind, data)
    except ValueError as e:
        raise TypeMismatch(token.raw, kind, text, reason=str(e)) from e
