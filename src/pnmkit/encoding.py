from enum import Enum
from typing import Iterable

import numpy as np

from pnmkit.errors import UnsupportedFormat


class Kind(Enum):
    Bitmap = 'bitmap'
    Grayscale = 'grayscale'


class MagicNumber(str, Enum):
    # Bitmap, '1'/'0' tokens
    P1 = 'P1'

    # Grayscale, decimal tokens
    P2 = 'P2'

    # Bitmap, rows packed MSB first and padded to a whole byte
    P4 = 'P4'

    # Grayscale, one byte per pixel
    P5 = 'P5'

    @property
    def kind(self) -> Kind:
        return Kind.Bitmap if self in (MagicNumber.P1, MagicNumber.P4) else Kind.Grayscale

    @property
    def is_binary(self) -> bool:
        return self in (MagicNumber.P4, MagicNumber.P5)

    @staticmethod
    def from_str(value: str, kinds: Iterable[Kind] = tuple(Kind)) -> 'MagicNumber':
        kinds = tuple(kinds)
        for e in MagicNumber:
            if e.value == value and e.kind in kinds:
                return e
        expected = ', '.join(e.value for e in MagicNumber if e.kind in kinds)
        raise UnsupportedFormat(f'Unsupported magic number {value!r}, expected one of: {expected}')

    @staticmethod
    def for_kind(kind: Kind, binary: bool) -> 'MagicNumber':
        if kind == Kind.Bitmap:
            return MagicNumber.P4 if binary else MagicNumber.P1
        return MagicNumber.P5 if binary else MagicNumber.P2


def row_size(width: int) -> int:
    """ Number of bytes a packed bitmap row of `width` pixels occupies """
    return (width + 7) // 8


def pack_bits(pixels: np.ndarray) -> bytes:
    # packbits pads every row with zero bits up to the next byte boundary
    return np.packbits(pixels.astype(bool), axis=1).tobytes()


def unpack_bits(data: bytes, width: int, height: int) -> np.ndarray:
    rows = np.frombuffer(data, dtype=np.uint8, count=row_size(width) * height).reshape(height, row_size(width))

    # Drop the padding bits at the end of each row
    return np.unpackbits(rows, axis=1)[:, :width].astype(bool)


def pack_bytes(pixels: np.ndarray) -> bytes:
    return np.ascontiguousarray(pixels, dtype=np.uint8).tobytes()


def unpack_bytes(data: bytes, width: int, height: int) -> np.ndarray:
    # frombuffer returns a read-only view, the image needs its own copy
    return np.frombuffer(data, dtype=np.uint8, count=width * height).reshape(height, width).copy()
