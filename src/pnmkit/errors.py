class NetpbmError(ValueError):
    """Base class for everything the codec rejects."""


class UnsupportedFormat(NetpbmError):
    pass


class MalformedHeader(NetpbmError):
    pass


class MalformedPixelData(NetpbmError):
    pass


class TruncatedData(NetpbmError):
    def __init__(self, expected: int, actual: int, unit: str = 'bytes'):
        super().__init__(f'Expected {expected} {unit} of pixel data, got {actual}')
        self.expected = expected
        self.actual = actual
