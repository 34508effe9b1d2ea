"""
Core module: packing and unpacking of values following a format.

"""
import logging
from collections.abc import Sequence
from typing import List, Tuple

from .exceptions import FormatLengthMismatch
from .fields import DEFAULT_ENCODING, Field, field_for
from . import grammar
from .grammar import compile_format, iter_tokens
from .meta import Token
from .streams import Cursor
from .values import tag


class Format(object):
    """
    A format compiled once and usable many times, similar to struct.Struct.

    It's immutable and it doesn't store any byte order state: each call to pack()
    or unpack() starts again from big endian.
    """

    def __init__(self, format, encoding=DEFAULT_ENCODING):
        self.logger = logging.getLogger(__name__)
        self.encoding = encoding
        self.tokens: Tuple[Token, ...] = compile_format(format)
        self.fields: Tuple[Field, ...] = tuple(field_for(_, encoding=encoding) for _ in self.tokens)
        self.size = sum(_.size for _ in self.fields)

        self.logger.debug('compiled format %s (%d bytes)' % (self, self.size))

    def __repr__(self):
        return f'<{self.__class__.__name__}({str(self)!r}, size={self.size})>'

    def __str__(self):
        return ' '.join(_.raw for _ in self.tokens)

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __eq__(self, other):
        if not isinstance(other, Format):
            return NotImplemented

        return self.tokens == other.tokens and self.encoding == other.encoding

    def __hash__(self):
        return hash((self.tokens, self.encoding))

    @property
    def layout(self) -> List[Tuple[int, int]]:
        '''List of couples (offset, size) for each token.'''
        result = []
        offset = 0
        for field in self.fields:
            result.append((offset, field.size))
            offset += field.size

        return result

    def _iter_fields(self):
        return zip(iter_tokens(self.tokens), self.fields)

    def pack(self, values) -> bytes:
        '''Return the bytes containing the values packed according to the format.

        The values must match the kinds required by the format exactly; values
        in excess are ignored.'''
        if isinstance(values, (str, bytes, bytearray)):
            raise TypeError(f'values must be a sequence of values, not {values.__class__.__name__}')

        if not isinstance(values, Sequence):
            values = list(values)

        if len(values) < len(self.tokens):
            raise FormatLengthMismatch(len(self.tokens), len(values))

        buffer = bytearray()

        for index, ((token, endianess), field) in enumerate(self._iter_fields()):
            raw = field.pack(values[index], endianess, index=index)
            self.logger.debug('packed %s at offset %d: %s' % (token, len(buffer), raw.hex()))
            buffer += raw

        return bytes(buffer)

    def unpack_from(self, buffer, offset=0, tagged=False) -> list:
        '''Unpack the values starting at the given offset of the buffer.

        The buffer must contain at least size bytes after the offset, otherwise
        BufferTooShort is raised before decoding anything.'''
        cursor = Cursor(buffer, offset=offset)
        cursor.require(self.size)

        result = []

        for (token, endianess), field in self._iter_fields():
            position = cursor.offset
            value = field.unpack(cursor.read(field.size), endianess)
            self.logger.debug('unpacked %s at offset %d: %r' % (token, position, value))

            result.append(tag(field.kind, value) if tagged else value)

        return result

    def unpack(self, buffer, tagged=False) -> list:
        '''Unpack the buffer (presumably packed by pack()) according to the format.

        The result is a list even if it contains exactly one item; with tagged=True
        the items are Value instances.'''
        return self.unpack_from(buffer, offset=0, tagged=tagged)


class BinaryPack(object):
    '''Entry point for the operations: it keeps only the configuration, so the same
    instance can be used from different threads.'''

    def __init__(self, encoding=DEFAULT_ENCODING):
        self.encoding = encoding

    def __repr__(self):
        return f'<{self.__class__.__name__}(encoding={self.encoding!r})>'

    def compile(self, format) -> Format:
        if isinstance(format, Format):
            return format

        return Format(format, encoding=self.encoding)

    def calcsize(self, format) -> int:
        '''Return the size of the bytes corresponding to the given format.'''
        if isinstance(format, Format):
            return format.size

        return grammar.calcsize(format)

    def pack(self, format, values) -> bytes:
        return self.compile(format).pack(values)

    def unpack(self, format, buffer, tagged=False) -> list:
        return self.compile(format).unpack(buffer, tagged=tagged)

    def unpack_from(self, format, buffer, offset=0, tagged=False) -> list:
        return self.compile(format).unpack_from(buffer, offset=offset, tagged=tagged)


_default = BinaryPack()


def pack(format, values) -> bytes:
    return _default.pack(format, values)


def unpack(format, buffer, tagged=False) -> list:
    return _default.unpack(format, buffer, tagged=tagged)


def unpack_from(format, buffer, offset=0, tagged=False) -> list:
    return _default.unpack_from(format, buffer, offset=offset, tagged=tagged)


def calcsize(format) -> int:
    return _default.calcsize(format)
