"""
Decoders for uncompressed BMP pixel data, one per bit depth family.

Every decoder takes the bytes following the 54 byte header and returns a freshly
allocated Raster with row 0 at the top, whatever the storage direction.
"""
import logging

import numpy as np

from bmpcodec.errors import TruncatedInput, UnsupportedFormat
from bmpcodec.helpers import bmp_codecs
from bmpcodec.raster import Raster

logger = logging.getLogger("bmp_pixels")


def row_size(width, bits_per_pixel, pad_rows=False):
    """
    Number of bytes one stored row occupies.

    :param pad_rows: align rows to 4 bytes, as standard BMP writers do
    """
    if pad_rows:
        return ((width * bits_per_pixel + 31) // 32) * 4
    return (width * bits_per_pixel + 7) // 8


def read_rows(data, header, pad_rows=False):
    """
    Slice the pixel region into rows, in output order (topmost row first).

    :return: uint8 array of shape (effective_height, unpadded row size)
    """
    base = header.offset - bmp_codecs.HEADER_SIZE
    height = header.effective_height
    row_bytes = row_size(header.width, header.bits_per_pixel)
    stride = row_size(header.width, header.bits_per_pixel, pad_rows)

    needed = base + stride * height
    if needed > len(data):
        raise TruncatedInput("Pixel data needs {} bytes after the header, only {} available".format(
            needed, len(data)))

    if stride * height == 0:
        return np.zeros((height, row_bytes), dtype=np.uint8)

    rows = np.frombuffer(data, dtype=np.uint8, count=stride * height, offset=base).reshape(height, stride)
    rows = rows[:, :row_bytes]

    if not header.top_down:
        rows = rows[::-1]

    return rows


def _opaque_raster(header, rgb):
    raster = Raster(header.width, header.effective_height)
    raster.pixels[..., :3] = rgb
    raster.pixels[..., 3] = 0xFF
    return raster


def decode_direct(data, header, pad_rows=False):
    """
    24 and 32 bpp: blue, green, red bytes per pixel. The 4th byte of a 32 bpp pixel is ignored.
    """
    stride = header.bits_per_pixel // 8
    rows = read_rows(data, header, pad_rows)
    pixels = rows.reshape(header.effective_height, header.width, stride)

    return _opaque_raster(header, pixels[..., 2::-1])


def decode_packed16(data, header, pad_rows=False):
    """
    16 bpp, 5-5-5 layout in little-endian words. Only uncompressed data is supported.
    """
    if header.compression != 'NONE':
        raise UnsupportedFormat("16 bpp images must be uncompressed, got {}".format(header.compression))

    rows = read_rows(data, header, pad_rows)
    words = rows.reshape(header.effective_height, header.width, 2).astype(np.uint16)
    words = words[..., 0] | (words[..., 1] << 8)

    rgb = np.stack((
        ((words >> 10) & 0x1F) << 3,
        ((words >> 5) & 0x1F) << 3,
        (words & 0x1F) << 3
    ), axis=-1).astype(np.uint8)

    return _opaque_raster(header, rgb)


def decode_indexed8(data, header, palette, pad_rows=False):
    indices = read_rows(data, header, pad_rows)
    return _opaque_raster(header, palette.lookup(indices))


def decode_indexed4(data, header, palette, pad_rows=False):
    """
    Two pixels per byte, high nibble first. An odd width leaves the last low nibble unused.
    """
    rows = read_rows(data, header, pad_rows)
    indices = np.stack((rows >> 4, rows & 0x0F), axis=-1).reshape(header.effective_height, rows.shape[1] * 2)
    indices = indices[:, :header.width]

    return _opaque_raster(header, palette.lookup(indices))
