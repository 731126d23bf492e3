import argparse
import sys
from typing import List, Optional

from pnmkit.converter import to_bitmap
from pnmkit.encoding import Kind, MagicNumber
from pnmkit.errors import UnsupportedFormat
from pnmkit.image import GrayscaleImage, NetpbmImage, read_image
from pnmkit.log import Log


class TransformConfig:
    FORMATS = ['ascii', 'binary']

    def __init__(self, input_path: str, output_path: str = None, invert: bool = False, flip: bool = False,
                 flop: bool = False, rotate: int = 0, to_bitmap: bool = False, output_format: str = None):
        self.input_path = input_path
        self.output_path = output_path
        self.invert = invert
        self.flip = flip
        self.flop = flop
        self.rotate = rotate
        self.to_bitmap = to_bitmap
        self.output_format = output_format

        if self.rotate < 0:
            raise ValueError("Rotation count must not be negative")

        if self.output_format is not None and self.output_format not in TransformConfig.FORMATS:
            raise ValueError(f"Unknown output format: {self.output_format}")

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser):
        parser.add_argument('input', type=str, help='PGM or PBM file to read')
        parser.add_argument('--output', '-o', type=str, default=None, help='Path to save the resulting image')
        parser.add_argument('--invert', action='store_true', help='Invert the pixel values')
        parser.add_argument('--flip', action='store_true', help='Mirror the image horizontally')
        parser.add_argument('--flop', action='store_true', help='Mirror the image vertically')
        parser.add_argument('--rotate', type=int, default=0, help='Number of 90 degree clockwise rotations')
        parser.add_argument('--to-bitmap', action='store_true', help='Threshold a grayscale image into a bitmap')
        parser.add_argument('--format', type=str, choices=TransformConfig.FORMATS, default=None,
                            help='Output encoding. The input encoding is kept if not set.')

    @staticmethod
    def from_args(args) -> 'TransformConfig':
        return TransformConfig(args.input, args.output, args.invert, args.flip, args.flop, args.rotate,
                               args.to_bitmap, args.format)


def describe(image: NetpbmImage) -> str:
    result = f'Magic number: {image.magic_number.value}, size: {image.width}x{image.height}'
    if isinstance(image, GrayscaleImage):
        result += f', max value: {image.max_value}'
    return result


def run(config: TransformConfig) -> NetpbmImage:
    image = read_image(config.input_path)
    Log.info(f'{config.input_path}: {describe(image)}')

    if config.to_bitmap:
        if image.KIND != Kind.Grayscale:
            raise UnsupportedFormat(f'{config.input_path} is already a bitmap')
        image = to_bitmap(image)

    if config.invert:
        image.invert()

    if config.flip:
        image.flip()

    if config.flop:
        image.flop()

    for _ in range(config.rotate % 4):
        image.rotate_90_cw()

    if config.output_format is not None:
        image.set_magic_number(MagicNumber.for_kind(image.KIND, config.output_format == 'binary'))

    if config.output_path is not None:
        image.save(config.output_path)
        Log.info(f'{config.output_path}: {describe(image)}')

    return image


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser('pnmkit', description='Inspect and transform PGM/PBM images')

    Log.add_args(parser)
    TransformConfig.add_arguments(parser)

    args = parser.parse_args(argv)
    Log.setup(args)

    try:
        run(TransformConfig.from_args(args))
    except (ValueError, OSError) as e:
        Log.error(f'Failed to process {args.input}: {e}')
        return 1

    return 0


def sync_main():
    sys.exit(main())


if __name__ == '__main__':
    sync_main()
