from enum import Enum, auto

from .enum import Kind


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()

    @property
    def prefix(self):
        '''The struct module prefix selecting this byte order'''
        return '<' if self is Endianess.LITTLE_ENDIAN else '>'


# every call starts from here, there is no state carried between calls
DEFAULT_ENDIANESS = Endianess.BIG_ENDIAN

MARKERS = {
    '<': Endianess.LITTLE_ENDIAN,
    '>': Endianess.BIG_ENDIAN,
}


class Token(object):
    """Metadata about a single field of a format, as parsed from its token.

    The "endianess" attribute is the override indicated by the token itself,
    None if the token doesn't have a byte order marker: the byte order
    actually used depends on the tokens that precede it.
    """

    __slots__ = ('raw', 'code', 'kind', 'width', 'endianess')

    def __init__(self, raw: str, code: str, kind: Kind, width: int, endianess: Endianess = None):
        self.raw = raw
        self.code = code
        self.kind = kind
        self.width = width
        self.endianess = endianess

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.raw!r}, {self.kind.name}, width={self.width})>'

    def __str__(self):
        return self.raw

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented

        return (self.code, self.kind, self.width, self.endianess) == \
            (other.code, other.kind, other.width, other.endianess)

    def __hash__(self):
        return hash((self.code, self.kind, self.width, self.endianess))
