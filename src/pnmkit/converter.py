import sys

from PIL import Image

from pnmkit.encoding import Kind, MagicNumber
from pnmkit.image import BitmapImage, GrayscaleImage, NetpbmImage


def to_bitmap(image: GrayscaleImage) -> BitmapImage:
    """
    Thresholds a grayscale image: a pixel is set (black) iff its value is strictly greater than half the max value,
    using integer division. The result is always an ASCII bitmap, whatever the source encoding was.
    """
    threshold = image.max_value // 2
    return BitmapImage(image.pixels > threshold, MagicNumber.P1)


def convert_to_netpbm(input_file, output_file, bitmap: bool = False, binary: bool = True) -> NetpbmImage:
    with Image.open(input_file) as img:
        image = GrayscaleImage.from_pil(img)

    if bitmap:
        image = to_bitmap(image)

    image.set_magic_number(MagicNumber.for_kind(image.KIND, binary))
    image.save(output_file)
    return image


def main():
    if len(sys.argv) not in (3, 4) or sys.argv[3:] not in ([], ['pgm'], ['pbm']):
        print("Usage: pnmkit-convert <input_image_file> <output_file> [pgm|pbm]")
        sys.exit(1)

    input_file = sys.argv[1]
    output_file = sys.argv[2]
    bitmap = len(sys.argv) == 4 and sys.argv[3] == 'pbm'

    try:
        image = convert_to_netpbm(input_file, output_file, bitmap)
    except Exception as e:
        print(f"An error occurred: {e}")
        sys.exit(1)

    kind = 'PBM' if image.KIND == Kind.Bitmap else 'PGM'
    print(f"Successfully converted {input_file} to {kind} format.")
    print(f"Output saved as {output_file}")
    print(f"Image dimensions: {image.width}x{image.height}")


if __name__ == "__main__":
    main()
