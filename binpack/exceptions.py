class BinaryPackException(Exception):
    '''Base class to extend in order to throw exception in binpack.

    It takes as first argument the message and optionally the position
    of the token in the format that caused the exception.
    '''

    def __init__(self, msg, index=None):
        self.index = index
        if index is not None:
            msg = f'{msg} (token #{index})'
        super().__init__(msg)


class FormatLengthMismatch(BinaryPackException):
    '''There are less values than tokens in the format.'''

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f'format ({expected}) is longer than values ({actual}) to pack')


class TypeMismatch(BinaryPackException):
    '''The value doesn't match the kind expected by the token.'''

    def __init__(self, token, expected, value, index=None, reason=None):
        self.token = token
        self.expected = expected
        self.value = value
        msg = f"type of passed value {value!r} doesn't match to expected '{token}' ({expected.name.lower()})"
        if reason:
            msg = f'{msg}: {reason}'
        super().__init__(msg, index=index)


class StringTooLong(TypeMismatch):
    '''The string doesn't fit the width declared by the token.'''
    pass


class UnknownToken(BinaryPackException):

    def __init__(self, token, index=None):
        self.token = token
        super().__init__(f'unexpected format token: {token!r}', index=index)


class BufferTooShort(BinaryPackException):

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f'expected size ({expected}) is bigger than actual size of message ({actual})')
