import io

import numpy as np
import pytest

from pnmkit.image import BitmapImage, GrayscaleImage


def test_ascii_bitmap():
    image = BitmapImage([[True, False], [False, True]])
    assert image.tobytes() == b'P1\n2 2\n1 0\n0 1\n'


def test_ascii_grayscale_one_value_per_line():
    image = GrayscaleImage([[10, 20, 30]], 'P2', 255)
    assert image.tobytes() == b'P2\n3 1\n255\n10\n20\n30\n'


def test_binary_grayscale():
    image = GrayscaleImage([[0, 10], [255, 128]], 'P5', 255)
    assert image.tobytes() == b'P5\n2 2\n255\n\x00\x0a\xff\x80'


def test_binary_bitmap_is_bit_packed():
    image = BitmapImage([[True, False, True, True, False, False, False, False]], 'P4')
    assert image.tobytes() == b'P4\n8 1\n' + bytes([0b10110000])


def test_binary_bitmap_rows_are_padded():
    image = BitmapImage([[True] * 10, [False] * 9 + [True]], 'P4')
    assert image.tobytes() == b'P4\n10 2\n\xff\xc0\x00\x40'


def test_encoding_follows_magic_number():
    image = GrayscaleImage([[1, 2]], 'P2', 15)
    image.set_magic_number('P5')
    assert image.tobytes() == b'P5\n2 1\n15\n\x01\x02'


@pytest.mark.parametrize('magic_number', ['P1', 'P4'])
def test_bitmap_round_trip(magic_number):
    pixels = np.random.default_rng(1).random((5, 13)) > 0.5
    image = BitmapImage(pixels, magic_number)

    assert BitmapImage.read(io.BytesIO(image.tobytes())) == image


@pytest.mark.parametrize('magic_number', ['P2', 'P5'])
def test_grayscale_round_trip(magic_number):
    pixels = np.random.default_rng(2).integers(0, 200, size=(7, 3), dtype=np.uint8)
    image = GrayscaleImage(pixels, magic_number, 199)

    assert GrayscaleImage.read(io.BytesIO(image.tobytes())) == image


def test_save_and_load(tmp_path):
    path = tmp_path / 'image.pgm'
    image = GrayscaleImage([[1, 2, 3], [4, 5, 6]], 'P5', 6)
    image.save(path)

    assert path.read_bytes() == b'P5\n3 2\n6\n\x01\x02\x03\x04\x05\x06'
    assert GrayscaleImage.load(path) == image


def test_save_failure_propagates(tmp_path):
    image = BitmapImage([[True]])
    with pytest.raises(OSError):
        image.save(tmp_path / 'missing' / 'image.pbm')


class FailingStream(io.BytesIO):
    def write(self, data):
        raise OSError('disk full')


def test_write_failure_propagates():
    with pytest.raises(OSError, match='disk full'):
        GrayscaleImage([[0]]).write(FailingStream())
