"""
# binpack: conversion between values and fixed layout binary records.

A record is described by a format, i.e. a list of tokens, one for each field,
indicating the type of the field, its width (only for strings) and optionally
the byte order

    ?           bool, 1 byte
    B           unsigned integer, 1 byte
    h, H        unsigned integer, 2 bytes
    i, I, l, L  unsigned integer, 4 bytes
    q, Q        unsigned integer, 8 bytes
    f           float, 4 bytes
    d           double, 8 bytes
    Ns          string, N bytes padded with zeros

A token prefixed with '<' switches to little endian, with '>' to big endian, for
that token and the following ones. Every call starts with big endian.

Three operations are defined:

 1. pack(): encode the values into the bytes described by the format.
 2. unpack(): decode the bytes into the values, one for each token.
 3. calcsize(): the number of bytes described by the format.

    >>> data = pack(['I', '?', 'd', '6s'], [4, True, 3.14, 'Golang'])
    >>> len(data) == calcsize(['I', '?', 'd', '6s'])
    True
    >>> unpack(['I', '?', 'd', '6s'], data)
    [4, True, 3.14, 'Golang']
"""
from .core import BinaryPack, Format, pack, unpack, unpack_from, calcsize
from .enum import Kind
from .meta import Endianess, Token
from .exceptions import (
    BinaryPackException,
    FormatLengthMismatch,
    TypeMismatch,
    StringTooLong,
    UnknownToken,
    BufferTooShort,
)
from .values import Value, Bool, U8, U16, U32, U64, F32, F64, String


__all__ = [
    'BinaryPack', 'Format', 'pack', 'unpack', 'unpack_from', 'calcsize',
    'Kind', 'Endianess', 'Token',
    'BinaryPackException', 'FormatLengthMismatch', 'TypeMismatch', 'StringTooLong',
    'UnknownToken', 'BufferTooShort',
    'Value', 'Bool', 'U8', 'U16', 'U32', 'U64', 'F32', 'F64', 'String',
]
