"""
A Field is the encoder/decoder of a single token: it knows how to check a value
against the kind of the token and how to convert it to/from exactly as many
bytes as the token's width.
"""
import logging
import struct

from .enum import Kind
from .exceptions import TypeMismatch, StringTooLong, BufferTooShort
from .grammar import STRUCT_CODES
from .meta import Token, Endianess
from .values import Value, is_binary32


DEFAULT_ENCODING = 'latin-1'


class Field(object):
    """Base class to subclass from"""

    def __init__(self, token: Token, encoding=DEFAULT_ENCODING):
        self.logger = logging.getLogger(__name__)
        self.token = token
        self.encoding = encoding

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.token.raw!r})>'

    @property
    def kind(self) -> Kind:
        return self.token.kind

    @property
    def size(self) -> int:
        return self.token.width

    def mismatch(self, value, index=None, reason=None, exc=TypeMismatch):
        return exc(self.token.raw, self.kind, value, index=index, reason=reason)

    def check(self, value, index=None):
        '''Return the plain python data contained in the value, raising TypeMismatch
        if it's not of the kind the token expects.

        A tagged value must have exactly the same kind of the token.'''
        if isinstance(value, Value):
            if value.kind != self.kind:
                raise self.mismatch(value, index=index, reason=f'got {value.kind.name.lower()}')
            value = value.data

        return self._check(value, index)

    def _check(self, data, index):
        raise NotImplementedError(f"method {self.__class__.__name__}._check() not implemented")

    def pack(self, value, endianess: Endianess, index=None) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}.pack() not implemented")

    def unpack(self, raw: bytes, endianess: Endianess):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Mimic the behaviour of the struct module packing/unpacking
    scalars to/from bytes.
    """

    def get_format(self, endianess: Endianess) -> str:
        return '%s%s' % (endianess.prefix, STRUCT_CODES[self.kind])

    def _to_struct(self, data):
        return data

    def _from_struct(self, data):
        return data

    def pack(self, value, endianess, index=None):
        data = self.check(value, index=index)

        try:
            return struct.pack(self.get_format(endianess), self._to_struct(data))
        except (struct.error, OverflowError) as e:
            self.logger.debug('failed to pack %r with %s: %s' % (data, self, e))
            raise self.mismatch(value, index=index, reason=str(e)) from e

    def unpack(self, raw, endianess):
        if len(raw) != self.size:
            raise BufferTooShort(self.size, len(raw))

        data = struct.unpack(self.get_format(endianess), raw)[0]

        return self._from_struct(data)


class BoolField(StructField):
    """One byte, 0x01 for True and 0x00 for False.

    When unpacking any value different from zero is True."""

    def _check(self, data, index):
        if not isinstance(data, bool):
            raise self.mismatch(data, index=index)

        return data

    def _to_struct(self, data):
        return int(data)

    def _from_struct(self, data):
        return data != 0


class IntegerField(StructField):
    """Unsigned integer of 1, 2, 4 or 8 bytes."""

    def _check(self, data, index):
        # bool is a subclass of int but it's not a number for us
        if isinstance(data, bool) or not isinstance(data, int):
            raise self.mismatch(data, index=index)

        if not 0 <= data < (1 << (8 * self.size)):
            raise self.mismatch(data, index=index, reason=f'out of range for {self.size} bytes')

        return data


class FloatField(StructField):
    """IEEE-754 binary32 or binary64.

    Integers are not accepted: there is no implicit conversion between kinds.
    A binary32 field refuses floats that would be rounded when packed."""

    def _check(self, data, index):
        if not isinstance(data, float):
            raise self.mismatch(data, index=index)

        if self.kind == Kind.F32 and not is_binary32(data):
            raise self.mismatch(data, index=index, reason='not representable as binary32')

        return data


class StringField(Field):
    """Represent a contiguous chunk of bytes of fixed width.

    Shorter values are padded on the right with zeros, the padding is not removed
    when unpacking. Values longer than the width are refused.

    Strings of type str are encoded with the field's encoding; if the encoding is None
    only binary strings are accepted and unpacking returns bytes."""

    def _check(self, data, index):
        if isinstance(data, (bytes, bytearray)):
            raw = bytes(data)
        elif isinstance(data, str) and self.encoding is not None:
            try:
                raw = data.encode(self.encoding)
            except UnicodeError as e:
                raise self.mismatch(data, index=index, reason=str(e)) from e
        else:
            raise self.mismatch(data, index=index)

        if len(raw) > self.size:
            raise self.mismatch(
                data, index=index, exc=StringTooLong,
                reason=f'{len(raw)} bytes do not fit in {self.size}')

        return raw

    def pack(self, value, endianess, index=None):
        raw = self.check(value, index=index)

        return raw.ljust(self.size, b'\x00')

    def unpack(self, raw, endianess):
        if len(raw) != self.size:
            raise BufferTooShort(self.size, len(raw))

        raw = bytes(raw)

        if self.encoding is None:
            return raw

        try:
            return raw.decode(self.encoding)
        except UnicodeError as e:
            raise self.mismatch(raw, reason=str(e)) from e


FIELD_CLASSES = {
    Kind.BOOL:   BoolField,
    Kind.U8:     IntegerField,
    Kind.U16:    IntegerField,
    Kind.U32:    IntegerField,
    Kind.U64:    IntegerField,
    Kind.F32:    FloatField,
    Kind.F64:    FloatField,
    Kind.STRING: StringField,
}


def field_for(token: Token, encoding=DEFAULT_ENCODING) -> Field:
    return FIELD_CLASSES[token.kind](token, encoding=encoding)
