import io

import pytest

from pnmkit.encoding import Kind, MagicNumber
from pnmkit.errors import MalformedHeader, UnsupportedFormat
from pnmkit.header import Header


def test_grayscale_header():
    stream = io.BytesIO(b'P5\n3 2\n255\nrest')
    header = Header.read(stream)

    assert header == Header(MagicNumber.P5, 3, 2, 255)
    assert header.pixel_count == 6
    assert stream.read() == b'rest'


def test_bitmap_header_has_no_max_value():
    stream = io.BytesIO(b'P1\n4 1\n1 0 1 0\n')
    header = Header.read(stream, [Kind.Bitmap])

    assert header == Header(MagicNumber.P1, 4, 1)
    assert stream.read() == b'1 0 1 0\n'


def test_crlf_line_endings():
    assert Header.read(io.BytesIO(b'P2\r\n2 2\r\n15\r\n')) == Header(MagicNumber.P2, 2, 2, 15)


@pytest.mark.parametrize('data, kinds', [
    (b'P2\n1 1\n255\n', [Kind.Bitmap]),
    (b'P4\n1 1\n', [Kind.Grayscale]),
    (b'P3\n1 1\n255\n', list(Kind)),
    (b'P6\n1 1\n255\n', list(Kind)),
    (b'', list(Kind)),
])
def test_unsupported_magic_number(data, kinds):
    with pytest.raises(UnsupportedFormat):
        Header.read(io.BytesIO(data), kinds)


@pytest.mark.parametrize('data', [
    b'P1\n2\n',
    b'P1\n2 2 2\n',
    b'P1\n',
    b'P1\nx 2\n',
    b'P1\n2 y\n',
    b'P1\n0 2\n',
    b'P1\n-1 2\n',
    b'P2\n1 1\n',
    b'P2\n1 1\nabc\n',
    b'P2\n1 1\n0\n',
    b'P2\n1 1\n1 2\n',
])
def test_malformed_header(data):
    with pytest.raises(MalformedHeader):
        Header.read(io.BytesIO(data))


def test_max_value_above_8_bit():
    with pytest.raises(UnsupportedFormat):
        Header.read(io.BytesIO(b'P5\n1 1\n65535\n'))


def test_comment_lines_are_not_skipped():
    with pytest.raises(MalformedHeader):
        Header.read(io.BytesIO(b'P2\n# created by hand\n1 1\n255\n0\n'))


def test_encode():
    assert Header(MagicNumber.P2, 3, 1, 255).encode() == b'P2\n3 1\n255\n'
    assert Header(MagicNumber.P4, 10, 2).encode() == b'P4\n10 2\n'
