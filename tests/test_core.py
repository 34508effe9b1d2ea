import threading

import pytest
from bitstring import Bits

from binpack import (
    BinaryPack,
    Format,
    pack,
    unpack,
    unpack_from,
    calcsize,
    FormatLengthMismatch,
    TypeMismatch,
    StringTooLong,
    UnknownToken,
    BufferTooShort,
    Bool,
    U16,
    U32,
    F32,
    F64,
    String,
)


def test_pack_unpack_record():
    """Check the layout of a record mixing all the families of kinds."""
    fmt = ['I', '?', 'd', '6s']
    values = [4, True, 3.14, 'Golang']

    data = pack(fmt, values)

    assert len(data) == 19
    assert data == (
        b'\x00\x00\x00\x04' +
        b'\x01' +
        Bits(floatbe=3.14, length=64).bytes +
        b'Golang'
    )
    assert unpack(fmt, data) == values


def test_pack_little_endian():
    assert pack(['<H'], [0x1234]) == b'\x34\x12'


def test_pack_big_endian():
    assert pack(['>H'], [0x1234]) == b'\x12\x34'
    # big endian is the default
    assert pack(['H'], [0x1234]) == b'\x12\x34'


def test_calcsize():
    assert calcsize(['B', 'H', 'I', 'Q', 'f', 'd', '4s']) == 1 + 2 + 4 + 8 + 4 + 8 + 4 == 31
    assert calcsize('B H I Q f d 4s') == 31
    assert calcsize([]) == 0


def test_string_padding_is_kept():
    data = pack(['4s'], ['hi'])

    assert data == b'hi\x00\x00'
    assert unpack(['4s'], data) == ['hi\x00\x00']


def test_unpack_buffer_too_short():
    with pytest.raises(BufferTooShort) as e:
        unpack(['I'], b'\x00\x00\x00')

    assert e.value.expected == 4
    assert e.value.actual == 3


def test_unpack_ignores_trailing_bytes():
    assert unpack(['>H'], b'\x12\x34\xff\xff') == [0x1234]


def test_byte_order_changes_until_next_marker():
    data = pack(['H', '<H', 'I', '>H'], [0x0102, 0x0102, 0x01020304, 0x0102])

    assert data == b'\x01\x02' + b'\x02\x01' + b'\x04\x03\x02\x01' + b'\x01\x02'
    assert unpack(['H', '<H', 'I', '>H'], data) == [0x0102, 0x0102, 0x01020304, 0x0102]


def test_byte_order_does_not_persist_between_calls():
    assert pack(['<I'], [1]) == b'\x01\x00\x00\x00'
    assert pack(['I'], [1]) == b'\x00\x00\x00\x01'

    assert unpack(['<I'], b'\x01\x00\x00\x00') == [1]
    assert unpack(['I'], b'\x01\x00\x00\x00') == [0x01000000]


@pytest.mark.parametrize('code,value,swapped', [
    ('H', 0x1234, 0x3412),
    ('I', 0x12345678, 0x78563412),
    ('Q', 0x0102030405060708, 0x0807060504030201),
])
def test_byte_order_swaps_multibyte(code, value, swapped):
    data = pack(['<' + code], [value])

    assert unpack(['>' + code], data) == [swapped]


def test_byte_order_single_byte():
    data = pack(['<B', '<?'], [0xab, True])

    assert unpack(['>B', '>?'], data) == [0xab, True]


def test_float_byte_order_swap():
    data = pack(['<d'], [3.14])

    assert unpack(['>d'], data) != [3.14]
    assert unpack(['<d'], data) == [3.14]


def test_pack_extra_values_ignored():
    assert pack(['B'], [1, 2, 3]) == b'\x01'


def test_pack_format_longer_than_values():
    with pytest.raises(FormatLengthMismatch) as e:
        pack(['B', 'B'], [1])

    assert e.value.expected == 2
    assert e.value.actual == 1


def test_pack_accepts_iterables():
    assert pack(['B', 'B'], iter([1, 2])) == b'\x01\x02'
    assert pack(['B', 'B'], (1, 2)) == b'\x01\x02'


def test_pack_refuses_string_as_values():
    with pytest.raises(TypeError):
        pack(['6s'], 'Golang')


def test_pack_type_mismatch_reports_token():
    with pytest.raises(TypeMismatch) as e:
        pack(['B', 'I', '?'], [1, 2, 3])

    assert e.value.index == 2
    assert e.value.token == '?'
    assert "'?'" in str(e.value)
    assert 'bool' in str(e.value)


def test_pack_no_coercion_between_tagged_kinds():
    assert pack(['H'], [U16(1)]) == b'\x00\x01'

    with pytest.raises(TypeMismatch):
        pack(['I'], [U16(1)])

    with pytest.raises(TypeMismatch):
        pack(['H'], [U32(1)])


def test_pack_string_too_long():
    with pytest.raises(StringTooLong):
        pack(['B', '4s'], [1, 'kebab'])

    with pytest.raises(TypeMismatch):
        pack(['4s'], [b'kebab'])


@pytest.mark.parametrize('operation', [
    lambda fmt: pack(fmt, [1, 2]),
    lambda fmt: unpack(fmt, b'\x00' * 16),
    lambda fmt: calcsize(fmt),
    lambda fmt: Format(fmt),
])
def test_unknown_token_from_all_operations(operation):
    with pytest.raises(UnknownToken) as e:
        operation(['B', 'z'])

    assert e.value.token == 'z'
    assert e.value.index == 1


def test_round_trip():
    fmt = ['?', 'B', '<h', 'H', 'i', '>I', 'l', 'L', '<q', 'Q', 'f', 'd', '5s', '0s']
    values = [False, 0xff, 0xffff, 0, 0xdeadbeef, 1, 2, 3, (1 << 64) - 1, 0, 0.25, -1e-300, 'abcde', '']

    data = pack(fmt, values)

    assert len(data) == calcsize(fmt)
    assert unpack(fmt, data) == values


def test_unpack_tagged():
    data = pack(['H', '?', 'd', '2s'], [1, True, 0.5, 'ok'])

    assert unpack(['H', '?', 'd', '2s'], data, tagged=True) == [U16(1), Bool(True), F64(0.5), String('ok')]


def test_round_trip_tagged():
    values = [U16(1), Bool(False), F64(-2.5), String('ok')]
    fmt = ['<H', '?', 'd', '2s']

    assert unpack(fmt, pack(fmt, values), tagged=True) == values


def test_unpack_from():
    data = b'\xff\xff' + pack(['<H', 'B'], [0x1234, 7])

    assert unpack_from(['<H', 'B'], data, offset=2) == [0x1234, 7]

    with pytest.raises(BufferTooShort):
        unpack_from(['<H', 'B'], data, offset=3)

    with pytest.raises(ValueError):
        unpack_from(['B'], data, offset=-1)


def test_unpack_accepts_buffers():
    data = pack(['I'], [0xcafebabe])

    assert unpack(['I'], bytearray(data)) == [0xcafebabe]
    assert unpack(['I'], memoryview(data)) == [0xcafebabe]


def test_format():
    fmt = Format('<I ? 4s')

    assert len(fmt) == 3
    assert fmt.size == 9
    assert fmt.layout == [(0, 4), (4, 1), (5, 4)]
    assert [_.raw for _ in fmt] == ['<I', '?', '4s']
    assert str(fmt) == '<I ? 4s'
    assert fmt == Format(['<I', '?', '4s'])
    assert fmt != Format(['<I', '?', '4s'], encoding='utf-8')

    data = fmt.pack([1, True, 'ab'])

    assert data == b'\x01\x00\x00\x00\x01ab\x00\x00'
    assert fmt.unpack(data) == [1, True, 'ab\x00\x00']
    assert calcsize(fmt) == 9


def test_format_is_reusable():
    fmt = Format(['<H'])

    assert fmt.pack([1]) == fmt.pack([1]) == b'\x01\x00'
    assert pack(fmt, [2]) == b'\x02\x00'


def test_binarypack_encoding():
    bp = BinaryPack(encoding='utf-8')

    data = bp.pack(['4s'], ['é'])

    assert data == b'\xc3\xa9\x00\x00'
    assert bp.unpack(['4s'], data) == ['é\x00\x00']
    assert bp.calcsize(['4s']) == 4

    raw = BinaryPack(encoding=None)

    assert raw.unpack(['4s'], data) == [b'\xc3\xa9\x00\x00']
    assert raw.unpack_from(['2s'], data, offset=2) == [b'\x00\x00']


def test_no_partial_output_on_error():
    with pytest.raises(TypeMismatch):
        pack(['B', 'B', 'B'], [1, 2, 'three'])


def test_concurrent_calls():
    """Byte order must be local to each call, even from different threads."""
    errors = []

    def worker(code, expected):
        for _ in range(200):
            data = pack([code], [0x0102])
            if data != expected:
                errors.append(data)

    threads = [
        threading.Thread(target=worker, args=('<H', b'\x02\x01')),
        threading.Thread(target=worker, args=('H', b'\x01\x02')),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []


def test_round_trip_tagged_float32():
    exact = Bits(floatbe=3.14, length=32).floatbe

    assert unpack(['<f'], pack(['<f'], [F32(exact)]), tagged=True) == [F32(exact)]

    # values that binary32 would round are refused instead of changed
    with pytest.raises(TypeMismatch):
        pack(['f'], [F32(3.14)])

    with pytest.raises(TypeMismatch):
        pack(['f'], [0.1])
