from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional

from pnmkit.encoding import Kind, MagicNumber
from pnmkit.errors import MalformedHeader, UnsupportedFormat


MAX_DEPTH = 255


@dataclass
class Header:
    """
    The leading lines of a Netpbm stream:

        P5
        <width> <height>
        <max value>

    One field group per line. The max value line is present for grayscale formats only. Comment lines are not
    recognized.
    """
    magic_number: MagicNumber
    width: int
    height: int
    max_value: Optional[int] = None

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @staticmethod
    def read(stream: BinaryIO, kinds: Iterable[Kind] = tuple(Kind)) -> 'Header':
        magic_number = MagicNumber.from_str(_read_line(stream).strip(), kinds)

        dimensions = _read_line(stream).split()
        if len(dimensions) != 2:
            raise MalformedHeader(f'Expected "<width> <height>", got {len(dimensions)} token(s)')

        width = _parse_positive(dimensions[0], 'width')
        height = _parse_positive(dimensions[1], 'height')

        max_value = None
        if magic_number.kind == Kind.Grayscale:
            tokens = _read_line(stream).split()
            if len(tokens) != 1:
                raise MalformedHeader(f'Expected a single max value token, got {len(tokens)}')

            max_value = _parse_positive(tokens[0], 'max value')
            if max_value > MAX_DEPTH:
                raise UnsupportedFormat(f'Max value {max_value} exceeds the supported 8-bit depth')

        return Header(magic_number, width, height, max_value)

    def encode(self) -> bytes:
        lines = [self.magic_number.value, f'{self.width} {self.height}']
        if self.max_value is not None:
            lines.append(str(self.max_value))
        return ''.join(f'{line}\n' for line in lines).encode('ascii')


def _read_line(stream: BinaryIO) -> str:
    return stream.readline().decode('ascii', errors='replace')


def _parse_positive(token: str, name: str) -> int:
    if not token.isdigit():
        raise MalformedHeader(f'Invalid {name}: {token!r}')

    value = int(token)
    if value < 1:
        raise MalformedHeader(f'The {name} must be positive, got {value}')

    return value
