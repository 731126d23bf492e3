from pnmkit.converter import convert_to_netpbm, to_bitmap
from pnmkit.encoding import Kind, MagicNumber
from pnmkit.errors import MalformedHeader, MalformedPixelData, NetpbmError, TruncatedData, UnsupportedFormat
from pnmkit.header import Header
from pnmkit.image import BitmapImage, GrayscaleImage, NetpbmImage, decode, read_image, read_pbm, read_pgm
