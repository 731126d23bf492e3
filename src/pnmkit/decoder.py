from typing import BinaryIO, Callable, Dict, List

import numpy as np

from pnmkit.encoding import MagicNumber, row_size, unpack_bits, unpack_bytes
from pnmkit.errors import MalformedPixelData, TruncatedData
from pnmkit.header import Header
from pnmkit.log import Log


def _read_tokens(header: Header, stream: BinaryIO) -> List[bytes]:
    tokens = stream.read().split()
    if len(tokens) < header.pixel_count:
        raise TruncatedData(header.pixel_count, len(tokens), 'tokens')

    # Anything past the last pixel is ignored
    return tokens[:header.pixel_count]


CHUNK_SIZE = 1 << 20


def _read_bytes(stream: BinaryIO, size: int) -> bytes:
    # The declared size may be far larger than the stream, read it in bounded chunks
    data = bytearray()
    while len(data) < size:
        chunk = stream.read(min(size - len(data), CHUNK_SIZE))
        if not chunk:
            raise TruncatedData(size, len(data))
        data += chunk
    return bytes(data)


def _decode_ascii_bitmap(header: Header, stream: BinaryIO) -> np.ndarray:
    tokens = _read_tokens(header, stream)
    return np.array([token == b'1' for token in tokens], dtype=bool).reshape(header.height, header.width)


def _decode_ascii_grayscale(header: Header, stream: BinaryIO) -> np.ndarray:
    tokens = _read_tokens(header, stream)
    invalid = next((token for token in tokens if not token.isdigit()), None)
    if invalid is not None:
        raise MalformedPixelData(f'Invalid grayscale value: {invalid!r}')

    # Values are truncated to the 8-bit pixel representation
    values = [int(token) & 0xFF for token in tokens]

    return np.array(values, dtype=np.uint8).reshape(header.height, header.width)


def _decode_binary_bitmap(header: Header, stream: BinaryIO) -> np.ndarray:
    data = _read_bytes(stream, row_size(header.width) * header.height)
    return unpack_bits(data, header.width, header.height)


def _decode_binary_grayscale(header: Header, stream: BinaryIO) -> np.ndarray:
    data = _read_bytes(stream, header.pixel_count)
    return unpack_bytes(data, header.width, header.height)


DECODERS: Dict[MagicNumber, Callable[[Header, BinaryIO], np.ndarray]] = {
    MagicNumber.P1: _decode_ascii_bitmap,
    MagicNumber.P2: _decode_ascii_grayscale,
    MagicNumber.P4: _decode_binary_bitmap,
    MagicNumber.P5: _decode_binary_grayscale,
}


def decode_pixels(header: Header, stream: BinaryIO) -> np.ndarray:
    """
    Consumes the pixel data following `header` and returns it as a (height, width) grid: `uint8` for grayscale
    formats, `bool` for bitmaps. The stream must be positioned right after the header.
    """
    pixels = DECODERS[header.magic_number](header, stream)
    Log.debug(f'Decoded {header.magic_number.value} pixel data: {header.width}x{header.height}')
    return pixels
