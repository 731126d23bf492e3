from typing import BinaryIO, Callable, Dict

import numpy as np

from pnmkit.encoding import MagicNumber, pack_bits, pack_bytes
from pnmkit.header import Header
from pnmkit.log import Log


def _encode_ascii_bitmap(pixels: np.ndarray) -> bytes:
    rows = (' '.join('1' if pixel else '0' for pixel in row) for row in pixels)
    return ''.join(f'{row}\n' for row in rows).encode('ascii')


def _encode_ascii_grayscale(pixels: np.ndarray) -> bytes:
    # One value per line, rows are not separated
    return ''.join(f'{value}\n' for value in pixels.flatten().tolist()).encode('ascii')


ENCODERS: Dict[MagicNumber, Callable[[np.ndarray], bytes]] = {
    MagicNumber.P1: _encode_ascii_bitmap,
    MagicNumber.P2: _encode_ascii_grayscale,
    MagicNumber.P4: pack_bits,
    MagicNumber.P5: pack_bytes,
}


def encode(header: Header, pixels: np.ndarray, stream: BinaryIO):
    """
    Writes the header followed by the pixel data, encoded as declared by the header's magic number. Write errors are
    propagated as is, the stream keeps whatever was written before the failure.
    """
    stream.write(header.encode())
    stream.write(ENCODERS[header.magic_number](pixels))
    Log.debug(f'Encoded {header.magic_number.value} pixel data: {header.width}x{header.height}')
