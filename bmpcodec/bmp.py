import io
import logging

import coloredlogs
import numpy as np

from bmpcodec.errors import InvalidInput, UnsupportedFormat
from bmpcodec.helpers import bmp_codecs, header_helpers, palette_helpers, pixel_helpers, rle_helpers
from bmpcodec.helpers.header_helpers import MAX_DIMENSION
from bmpcodec.raster import Raster

decode_logger = logging.getLogger("bmp_decoder")
encode_logger = logging.getLogger("bmp_encoder")

_PACKAGE_LOGGERS = ("bmp_decoder", "bmp_encoder", "bmp_header", "bmp_palette", "bmp_pixels", "bmp_rle")


def initialise_logging(level=logging.INFO):
    """
    Opt-in logging setup for applications using the codec.

    :param level: logging level for the codec's loggers
    """
    logging.basicConfig(format='%(asctime)s.%(msecs)03d %(name)s %(levelname)s %(message)s', datefmt='%F %H:%M:%S',
                        level=level)
    for name in _PACKAGE_LOGGERS:
        coloredlogs.install(level=level, logger=logging.getLogger(name))


def _as_stream(stream):
    if isinstance(stream, (bytes, bytearray, memoryview)):
        return io.BytesIO(stream)
    return stream


def read_header(stream):
    """
    Read and validate the 54 byte header of a BMP without touching the pixel data.

    :param stream: bytes-like object or binary file-like object
    :return: BitmapHeader
    """
    stream = _as_stream(stream)
    return header_helpers.parse_header(stream.read(bmp_codecs.HEADER_SIZE))


def decode(stream, pad_rows=False):
    """
    Decode a BMP into an RGBA raster.

    :param stream: bytes-like object or binary file-like object positioned at the 'BM' signature
    :param pad_rows: treat uncompressed rows as 4-byte aligned
    :return: Raster
    """
    stream = _as_stream(stream)
    header = read_header(stream)

    # Everything after the header is buffered, the decoders index into it randomly
    data = bytes(stream.read())

    decode_logger.debug("Buffered {} bytes of palette and pixel data".format(len(data)))

    bits = header.bits_per_pixel
    compression = header.compression

    if bits in (24, 32) and compression == 'NONE':
        raster = pixel_helpers.decode_direct(data, header, pad_rows=pad_rows)
    elif bits == 16 and compression == 'NONE':
        raster = pixel_helpers.decode_packed16(data, header, pad_rows=pad_rows)
    elif bits == 8 and compression == 'NONE':
        palette = palette_helpers.read_palette(data, header)
        raster = pixel_helpers.decode_indexed8(data, header, palette, pad_rows=pad_rows)
    elif bits == 8 and compression == 'RLE8':
        palette = palette_helpers.read_palette(data, header)
        bitmap = rle_helpers.decode_rle(data, header, bits_per_index=8)
        raster = palette_helpers.resolve_indexed_bitmap(bitmap, palette)
    elif bits == 4 and compression == 'NONE':
        palette = palette_helpers.read_palette(data, header)
        raster = pixel_helpers.decode_indexed4(data, header, palette, pad_rows=pad_rows)
    elif bits == 4 and compression == 'RLE4':
        palette = palette_helpers.read_palette(data, header)
        bitmap = rle_helpers.decode_rle(data, header, bits_per_index=4)
        raster = palette_helpers.resolve_indexed_bitmap(bitmap, palette)
    else:
        raise UnsupportedFormat("Unsupported BMP format: {} bpp with compression {}".format(bits, compression))

    decode_logger.info("Decoded {}x{} BMP ({} bpp, {})".format(raster.width, raster.height, bits, compression))

    return raster


def encode(raster, stream=None):
    """
    Encode a raster as an uncompressed 32 bpp BMP.

    :param raster: Raster, or a (height, width, 4) uint8 numpy array
    :param stream: optional binary file-like object the BMP is written to
    :return: the encoded bytes
    """
    if isinstance(raster, np.ndarray):
        raster = Raster.from_array(raster)
    if not isinstance(raster, Raster):
        raise InvalidInput("Expected a Raster or a (height, width, 4) uint8 array, got {}".format(
            type(raster).__name__))

    width, height = raster.width, raster.height
    if width < 0 or height < 0:
        raise InvalidInput("Image has negative boundaries ({}x{})".format(width, height))
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise InvalidInput("Image too large ({}x{}), limit is {} pixels per side".format(
            width, height, MAX_DIMENSION))

    image_size = width * height * 4
    header = header_helpers.build_header(width=width, height=height, bits_per_pixel=32, compression='NONE',
                                         offset=bmp_codecs.HEADER_SIZE, image_size=image_size)

    # Bottom row first, RGBA reordered to BGRA
    body = np.ascontiguousarray(raster.pixels[::-1][..., [2, 1, 0, 3]]).tobytes()

    data = header + body
    if stream is not None:
        stream.write(data)

    encode_logger.info("Encoded {}x{} raster into {} bytes".format(width, height, len(data)))

    return data
