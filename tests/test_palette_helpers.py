import unittest
import numpy as np
from bmpcodec.helpers import header_helpers, palette_helpers, rle_helpers
from bmpcodec.errors import FormatError, TruncatedInput, PaletteIndexOutOfRange


def parse(**kwargs):
    return header_helpers.parse_header(header_helpers.build_header(**kwargs))


class TestPaletteHelpers(unittest.TestCase):

    def test_read_palette(self):
        header = parse(width=1, height=1, bits_per_pixel=8, offset=54 + 8, colors=2)
        data = b'\x10\x20\x30\x00\xff\x00\x80\x7f' + b'\x01'

        palette = palette_helpers.read_palette(data, header)

        self.assertEqual(len(palette), 2)
        self.assertEqual(palette[0], (0x30, 0x20, 0x10, 0x00))
        self.assertEqual(palette[1], (0x80, 0x00, 0xff, 0x7f))
        self.assertEqual(list(palette), [(0x30, 0x20, 0x10, 0x00), (0x80, 0x00, 0xff, 0x7f)])
        self.assertEqual(palette.rgb.shape, (2, 3))

    def test_read_palette_implicit_size(self):
        header = parse(width=1, height=1, bits_per_pixel=4, offset=54 + 64, colors=0)
        palette = palette_helpers.read_palette(bytes(range(64)) + b'\x00', header)

        self.assertEqual(len(palette), 16)
        self.assertEqual(palette[15], (62, 61, 60, 63))

    def test_read_palette_truncated(self):
        header = parse(width=1, height=1, bits_per_pixel=8, colors=16)
        with self.assertRaises(TruncatedInput):
            palette_helpers.read_palette(b'\x00' * 63, header)

    def test_implicit_palette_overlapping_pixels(self):
        header = parse(width=32, height=32, bits_per_pixel=8, colors=0)
        with self.assertRaises(FormatError):
            palette_helpers.read_palette(bytes(range(256)) * 4 * 4, header)

    def test_read_palette_hostile_count(self):
        header = parse(width=1, height=1, bits_per_pixel=8, colors=0xFFFFFFFF)
        with self.assertRaises(TruncatedInput):
            palette_helpers.read_palette(b'\x00' * 16, header)

    def test_lookup(self):
        palette = palette_helpers.PaletteTable([(1, 2, 3, 0), (4, 5, 6, 0)])

        rgb = palette.lookup(np.array([[1, 0], [0, 0]], dtype=np.uint8))
        self.assertEqual(rgb.shape, (2, 2, 3))
        self.assertEqual(rgb[0, 0].tolist(), [4, 5, 6])
        self.assertEqual(rgb[0, 1].tolist(), [1, 2, 3])

        with self.assertRaises(PaletteIndexOutOfRange):
            palette.lookup(np.array([2], dtype=np.uint8))

    def test_empty_palette(self):
        palette = palette_helpers.PaletteTable([])
        self.assertEqual(len(palette), 0)
        self.assertEqual(palette.lookup(np.array([], dtype=np.uint8)).shape, (0, 3))
        with self.assertRaises(PaletteIndexOutOfRange):
            palette.lookup(np.array([0], dtype=np.uint8))

    def test_resolve_indexed_bitmap(self):
        palette = palette_helpers.PaletteTable([(10, 20, 30, 0), (40, 50, 60, 0)])
        bitmap = rle_helpers.IndexedBitmap(width=2, height=2)
        bitmap.indices[0, 0] = 1
        bitmap.written[0, 0] = True
        bitmap.written[1, 1] = True

        raster = palette_helpers.resolve_indexed_bitmap(bitmap, palette)

        self.assertEqual(raster.get_pixel(0, 0), (40, 50, 60, 255))
        self.assertEqual(raster.get_pixel(1, 1), (10, 20, 30, 255))
        self.assertEqual(raster.get_pixel(1, 0), (0, 0, 0, 0))
        self.assertEqual(raster.get_pixel(0, 1), (0, 0, 0, 0))

    def test_resolve_checks_written_cells_only(self):
        palette = palette_helpers.PaletteTable([(10, 20, 30, 0)])
        bitmap = rle_helpers.IndexedBitmap(width=2, height=1)
        bitmap.indices[0, 1] = 9

        raster = palette_helpers.resolve_indexed_bitmap(bitmap, palette)
        self.assertEqual(raster.get_pixel(1, 0), (0, 0, 0, 0))

        bitmap.written[0, 1] = True
        with self.assertRaises(PaletteIndexOutOfRange):
            palette_helpers.resolve_indexed_bitmap(bitmap, palette)


if __name__ == '__main__':
    unittest.main()
