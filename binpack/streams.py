from .exceptions import BufferTooShort


class Cursor(object):
    '''Read-only view over an in-memory buffer with an offset that
    can only move forward.

    Each read() returns a copy of the bytes consumed, so the values
    decoded don't keep a reference to the caller's buffer.'''

    def __init__(self, data, offset=0):
        self.view = memoryview(data).cast('B')

        if offset < 0:
            raise ValueError(f'offset must be non negative, got {offset}')

        self.offset = offset

    def __len__(self):
        return len(self.view)

    @property
    def remaining(self):
        return max(len(self.view) - self.offset, 0)

    def require(self, size):
        '''Check that at least size bytes are available from the current offset.'''
        if size > self.remaining:
            raise BufferTooShort(self.offset + size, len(self.view))

    def read(self, size) -> bytes:
        self.require(size)

        start = self.offset
        self.offset += size

        return self.view[start:self.offset].tobytes()
