import logging

import numpy as np

from bmpcodec.errors import FormatError, TruncatedInput, PaletteIndexOutOfRange
from bmpcodec.helpers import bmp_codecs
from bmpcodec.raster import Raster

logger = logging.getLogger("bmp_palette")


class PaletteTable(object):
    """
    Color table of an indexed BMP. Entries are (red, green, blue, alpha) tuples,
    alpha being whatever the file stored in the reserved byte.
    """

    def __init__(self, entries):
        self._entries = tuple(tuple(entry) for entry in entries)
        self._rgb = np.array([entry[:3] for entry in self._entries], dtype=np.uint8).reshape(-1, 3)

    def __len__(self):
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __iter__(self):
        return iter(self._entries)

    @property
    def rgb(self):
        return self._rgb

    def lookup(self, indices):
        """
        Resolve an array of palette indices to RGB.

        :param indices: integer numpy array of any shape
        :return: uint8 array of shape indices.shape + (3,)
        """
        if indices.size and int(indices.max()) >= len(self):
            raise PaletteIndexOutOfRange("Palette index {} out of range, palette has {} entries".format(
                int(indices.max()), len(self)))

        return self._rgb[indices]


def read_palette(data, header):
    """
    Read the color table that follows the BITMAPINFOHEADER.

    :param data: the bytes after the 54 byte header
    :param header: BitmapHeader
    :return: PaletteTable
    """
    count = header.colors
    if count == 0:
        count = 1 << header.bits_per_pixel

    start = header.dib_header_size - bmp_codecs.INFO_HEADER_SIZE
    end = start + count * bmp_codecs.COLOR_ENTRY_SIZE
    if end > len(data):
        raise TruncatedInput("Palette of {} colors needs {} bytes, only {} available".format(
            count, end, len(data)))

    # An implicit table must fit in front of the pixel data
    if header.colors == 0 and end > header.offset - bmp_codecs.HEADER_SIZE:
        raise FormatError("Implicit palette of {} colors overlaps pixel data at offset {}".format(
            count, header.offset))

    parsed = bmp_codecs.color_table(count).parse(bytes(data[start:end]))
    palette = PaletteTable((entry.red, entry.green, entry.blue, entry.reserved) for entry in parsed)

    logger.debug("Read palette with {} entries".format(len(palette)))

    return palette


def resolve_indexed_bitmap(bitmap, palette):
    """
    Turn an RLE-decoded IndexedBitmap into an RGBA raster. Cells the decompressor
    never wrote stay fully transparent black.

    :param bitmap: IndexedBitmap
    :param palette: PaletteTable
    :return: Raster
    """
    raster = Raster(bitmap.width, bitmap.height)

    written = bitmap.written
    raster.pixels[written, :3] = palette.lookup(bitmap.indices[written])
    raster.pixels[written, 3] = 0xFF

    return raster
