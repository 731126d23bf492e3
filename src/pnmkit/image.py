import io
from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, Type, Union

import numpy as np
from PIL import Image

from pnmkit.decoder import decode_pixels
from pnmkit.encoder import encode
from pnmkit.encoding import Kind, MagicNumber
from pnmkit.header import MAX_DEPTH, Header
from pnmkit.log import Log


class NetpbmImage(ABC):
    """
    A decoded Netpbm image: a (height, width) pixel grid plus the magic number that selects its encoding on save.
    Transforms mutate the image in place.
    """

    KIND: Kind = None
    DTYPE = None

    def __init__(self, pixels, magic_number: Union[str, MagicNumber]):
        pixels = np.array(pixels, dtype=self.DTYPE)
        if pixels.ndim != 2 or 0 in pixels.shape:
            raise ValueError(f'Pixels must be a non-empty 2D grid, got shape {pixels.shape}')

        self.pixels = pixels
        self.magic_number = MagicNumber.from_str(magic_number, [self.KIND])

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self):
        return self.width, self.height

    @property
    def header(self) -> Header:
        return Header(self.magic_number, self.width, self.height)

    def _check_bounds(self, x: int, y: int):
        # Negative indices would silently wrap around in numpy
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f'Pixel ({x}, {y}) is out of bounds for a {self.width}x{self.height} image')

    def at(self, x: int, y: int):
        self._check_bounds(x, y)
        return self.pixels[y, x].item()

    def set(self, x: int, y: int, value):
        self._check_bounds(x, y)
        self.pixels[y, x] = value

    def set_magic_number(self, magic_number: Union[str, MagicNumber]):
        self.magic_number = MagicNumber.from_str(magic_number, [self.KIND])

    @abstractmethod
    def invert(self):
        pass

    def flip(self):
        """ Mirrors the image horizontally """
        self.pixels = np.ascontiguousarray(self.pixels[:, ::-1])

    def flop(self):
        """ Mirrors the image vertically """
        self.pixels = np.ascontiguousarray(self.pixels[::-1, :])

    def rotate_90_cw(self):
        # out[i][j] = in[height - j - 1][i], width and height swap
        self.pixels = np.ascontiguousarray(np.rot90(self.pixels, k=-1))

    def write(self, stream: BinaryIO):
        encode(self.header, self.pixels, stream)

    def tobytes(self) -> bytes:
        result = io.BytesIO()
        self.write(result)
        return result.getvalue()

    def save(self, path):
        with open(path, 'wb') as f:
            self.write(f)
        Log.debug(f'Saved {self} to {path}')

    @classmethod
    def read(cls, stream: BinaryIO):
        header = Header.read(stream, [cls.KIND])
        return cls._from_header(header, decode_pixels(header, stream))

    @classmethod
    def load(cls, path):
        with open(path, 'rb') as f:
            return cls.read(f)

    @classmethod
    @abstractmethod
    def _from_header(cls, header: Header, pixels: np.ndarray):
        pass

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.header == other.header and np.array_equal(self.pixels, other.pixels)

    def __repr__(self):
        return f'{type(self).__name__}({self.magic_number.value}, {self.width}x{self.height})'


class GrayscaleImage(NetpbmImage):
    KIND = Kind.Grayscale
    DTYPE = np.uint8

    def __init__(self, pixels, magic_number: Union[str, MagicNumber] = MagicNumber.P2, max_value: int = MAX_DEPTH):
        super().__init__(pixels, magic_number)
        self.max_value = None
        self.set_max_value(max_value)

    @property
    def header(self) -> Header:
        return Header(self.magic_number, self.width, self.height, self.max_value)

    def set(self, x: int, y: int, value: int):
        if not 0 <= value <= MAX_DEPTH:
            raise ValueError(f'Value must be in [0, {MAX_DEPTH}], got {value}')
        super().set(x, y, value)

    def set_max_value(self, max_value: int):
        # Pixel data is not re-clamped
        if not 1 <= max_value <= MAX_DEPTH:
            raise ValueError(f'Max value must be in [1, {MAX_DEPTH}], got {max_value}')
        self.max_value = max_value

    def invert(self):
        # uint8 arithmetic, pixels above the max value wrap around
        self.pixels = np.uint8(self.max_value) - self.pixels

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    @staticmethod
    def from_pil(image: Image.Image, magic_number: Union[str, MagicNumber] = MagicNumber.P5) -> 'GrayscaleImage':
        return GrayscaleImage(np.array(image.convert('L')), magic_number, MAX_DEPTH)

    @classmethod
    def _from_header(cls, header: Header, pixels: np.ndarray) -> 'GrayscaleImage':
        return GrayscaleImage(pixels, header.magic_number, header.max_value)


class BitmapImage(NetpbmImage):
    KIND = Kind.Bitmap
    DTYPE = bool

    def __init__(self, pixels, magic_number: Union[str, MagicNumber] = MagicNumber.P1):
        super().__init__(pixels, magic_number)

    def set(self, x: int, y: int, value: bool):
        super().set(x, y, bool(value))

    def invert(self):
        self.pixels = ~self.pixels

    def to_pil(self) -> Image.Image:
        # Netpbm bitmaps use 1 for black, Pillow's '1' mode uses it for white
        return Image.fromarray(np.where(self.pixels, 0, 255).astype(np.uint8)).convert('1')

    @classmethod
    def _from_header(cls, header: Header, pixels: np.ndarray) -> 'BitmapImage':
        return BitmapImage(pixels, header.magic_number)


IMAGE_TYPES: Dict[Kind, Type[NetpbmImage]] = {
    Kind.Grayscale: GrayscaleImage,
    Kind.Bitmap: BitmapImage,
}


def decode(stream: BinaryIO) -> NetpbmImage:
    """ Decodes either image kind, selected by the magic number at the start of the stream """
    header = Header.read(stream)
    image_type = IMAGE_TYPES[header.magic_number.kind]
    return image_type._from_header(header, decode_pixels(header, stream))


def read_image(path) -> NetpbmImage:
    with open(path, 'rb') as f:
        image = decode(f)
    Log.debug(f'Loaded {image} from {path}')
    return image


def read_pgm(path) -> GrayscaleImage:
    return GrayscaleImage.load(path)


def read_pbm(path) -> BitmapImage:
    return BitmapImage.load(path)
