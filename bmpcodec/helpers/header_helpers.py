import logging
from collections import namedtuple

from construct import ConstError, ConstructError, Container

from bmpcodec.errors import FormatError, UnsupportedFormat, TruncatedInput
from bmpcodec.helpers import bmp_codecs

MAX_DIMENSION = 32767
COMPRESSION_NAMES = ('NONE', 'RLE8', 'RLE4')

logger = logging.getLogger("bmp_header")

_HEADER_FIELDS = ('magic', 'file_size', 'reserved1', 'reserved2', 'offset', 'dib_header_size', 'width', 'height',
                  'planes', 'bits_per_pixel', 'compression', 'image_size', 'x_pixels_per_meter',
                  'y_pixels_per_meter', 'colors', 'important_colors')


class BitmapHeader(namedtuple('BitmapHeader', _HEADER_FIELDS)):
    """
    The 14 byte file header and 40 byte BITMAPINFOHEADER of a BMP, parsed once per decode.
    """
    __slots__ = ()

    @property
    def top_down(self):
        # Only uncompressed images with a positive height are stored bottom-up
        return not (self.height > 0 and self.compression == 'NONE')

    @property
    def effective_height(self):
        return abs(self.height)

    @property
    def is_indexed(self):
        return self.bits_per_pixel <= 8


def parse_header(data):
    """
    Parse and validate the first 54 bytes of a BMP.

    :param data: bytes-like object holding at least the full header
    :return: BitmapHeader
    """
    if len(data) < bmp_codecs.HEADER_SIZE:
        raise TruncatedInput("BMP header needs {} bytes, only {} available".format(
            bmp_codecs.HEADER_SIZE, len(data)))

    try:
        parsed = bmp_codecs.bitmap_header.parse(bytes(data[:bmp_codecs.HEADER_SIZE]))
    except ConstError:
        raise FormatError("Not a BMP file (missing 'BM' signature)")
    except ConstructError as exc:
        raise FormatError("Could not parse BMP header: {}".format(exc))

    if parsed.compression not in COMPRESSION_NAMES:
        raise UnsupportedFormat("BMP compression {} not supported".format(int(parsed.compression)))

    if parsed.width < 0:
        raise FormatError("Negative image width {}".format(parsed.width))

    if abs(parsed.width) > MAX_DIMENSION or abs(parsed.height) > MAX_DIMENSION:
        raise FormatError("Image too large ({}x{}), limit is {} pixels per side".format(
            parsed.width, parsed.height, MAX_DIMENSION))

    if parsed.dib_header_size != bmp_codecs.INFO_HEADER_SIZE:
        raise FormatError("Unsupported DIB header size {}, only BITMAPINFOHEADER ({}) is supported".format(
            parsed.dib_header_size, bmp_codecs.INFO_HEADER_SIZE))

    if parsed.offset < bmp_codecs.HEADER_SIZE:
        raise FormatError("Pixel data offset {} points inside the header".format(parsed.offset))

    header = BitmapHeader(**{field: parsed[field] for field in _HEADER_FIELDS})
    header = header._replace(compression=str(header.compression))

    logger.debug("Parsed header: {}x{}, {} bpp, compression {}, offset {}, {} colors".format(
        header.width, header.height, header.bits_per_pixel, header.compression, header.offset, header.colors))

    return header


def build_header(width, height, bits_per_pixel=32, compression='NONE', offset=bmp_codecs.HEADER_SIZE,
                 colors=0, image_size=None, file_size=None, planes=1, important_colors=0,
                 dib_header_size=bmp_codecs.INFO_HEADER_SIZE, x_pixels_per_meter=0, y_pixels_per_meter=0):
    """
    Serialise a 54 byte BMP header.

    :param image_size: size of the pixel data, defaults to width * |height| * bits_per_pixel / 8
    :param file_size: defaults to offset + image_size
    :return: header bytes
    """
    if image_size is None:
        image_size = width * abs(height) * bits_per_pixel // 8
    if file_size is None:
        file_size = offset + image_size

    return bmp_codecs.bitmap_header.build(Container(
        file_size=file_size,
        reserved1=0,
        reserved2=0,
        offset=offset,
        dib_header_size=dib_header_size,
        width=width,
        height=height,
        planes=planes,
        bits_per_pixel=bits_per_pixel,
        compression=compression,
        image_size=image_size,
        x_pixels_per_meter=x_pixels_per_meter,
        y_pixels_per_meter=y_pixels_per_meter,
        colors=colors,
        important_colors=important_colors
    ))
