from enum import Enum, auto


class Kind(Enum):
    '''The kind of value a format token is able to carry'''
    BOOL   = auto()
    U8     = auto()
    U16    = auto()
    U32    = auto()
    U64    = auto()
    F32    = auto()
    F64    = auto()
    STRING = auto()

    @property
    def is_integer(self):
        return self in (Kind.U8, Kind.U16, Kind.U32, Kind.U64)
