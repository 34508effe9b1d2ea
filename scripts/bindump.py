#!/usr/bin/env python3
'''
Pack and unpack binary records from the command line.

    $ bindump.py calcsize I ? d 6s
    19
    $ bindump.py pack '<H' -- 0x1234
    3412
    $ bindump.py unpack header.bin '>I' '<H' 4s
'''
import os
import sys
import logging

from bitstring import Bits

from binpack import Format, BinaryPackException
from binpack.values import from_text


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} calcsize TOKEN...
       {progname} pack TOKEN... -- VALUE...
       {progname} unpack FILE TOKEN...''')
    sys.exit(1)


def do_calcsize(tokens):
    print(Format(tokens).size)


def do_pack(args):
    if '--' not in args:
        usage(sys.argv[0])

    separator = args.index('--')
    fmt = Format(args[:separator])
    texts = args[separator + 1:]

    values = [from_text(token, text) for token, text in zip(fmt.tokens, texts)]

    print(fmt.pack(values).hex())


def dump_fields(fmt, data):
    values = fmt.unpack(data)

    for token, (offset, size), value in zip(fmt.tokens, fmt.layout, values):
        bits = Bits(bytes=data[offset:offset + size])
        print(f'{offset:08x} {token.raw:<6} {value!r:<24} {bits.bin}')

    trailing = len(data) - fmt.size
    if trailing:
        print(f'{fmt.size:08x} ({trailing} trailing bytes)')


def do_unpack(path, tokens):
    fmt = Format(tokens)

    with open(path, 'rb') as f:
        data = f.read()

    logger.debug('read %d bytes from \'%s\'' % (len(data), path))

    dump_fields(fmt, data)


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    command = sys.argv[1]

    try:
        if command == 'calcsize':
            do_calcsize(sys.argv[2:])
        elif command == 'pack':
            do_pack(sys.argv[2:])
        elif command == 'unpack' and len(sys.argv) > 3:
            do_unpack(sys.argv[2], sys.argv[3:])
        else:
            usage(sys.argv[0])
    except BinaryPackException as e:
        logger.error(e)
        sys.exit(2)
