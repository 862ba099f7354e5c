import unittest
from bmpcodec.helpers import bmp_codecs
from construct import Container, ConstError


class TestBmpCodecs(unittest.TestCase):

    def test_header_size(self):
        self.assertEqual(bmp_codecs.bitmap_header.sizeof(), 54)
        self.assertEqual(bmp_codecs.HEADER_SIZE, 54)
        self.assertEqual(bmp_codecs.bmp_color_entry.sizeof(), 4)

    def test_bitmap_header(self):
        pkt = b'BM\x46\x00\x00\x00\x00\x00\x00\x00\x36\x00\x00\x00' \
              b'\x28\x00\x00\x00\x02\x00\x00\x00\xfe\xff\xff\xff\x01\x00\x20\x00' \
              b'\x01\x00\x00\x00\x10\x00\x00\x00\x13\x0b\x00\x00\x13\x0b\x00\x00' \
              b'\x00\x01\x00\x00\x00\x00\x00\x00'

        parsed_header = bmp_codecs.bitmap_header.parse(pkt)
        self.assertEqual(parsed_header["file_size"], 70)
        self.assertEqual(parsed_header["offset"], 54)
        self.assertEqual(parsed_header["dib_header_size"], 40)
        self.assertEqual(parsed_header["width"], 2)
        self.assertEqual(parsed_header["height"], -2)
        self.assertEqual(parsed_header["planes"], 1)
        self.assertEqual(parsed_header["bits_per_pixel"], 32)
        self.assertEqual(parsed_header["compression"], 'RLE8')
        self.assertEqual(parsed_header["image_size"], 16)
        self.assertEqual(parsed_header["x_pixels_per_meter"], 2835)
        self.assertEqual(parsed_header["colors"], 256)
        self.assertEqual(parsed_header["important_colors"], 0)

    def test_bitmap_header_bad_magic(self):
        pkt = b'MB' + b'\x00' * 52
        with self.assertRaises(ConstError):
            bmp_codecs.bitmap_header.parse(pkt)

    def test_bitmap_header_build(self):
        pkt = bmp_codecs.bitmap_header.build(Container(
            file_size=58, reserved1=0, reserved2=0, offset=54, dib_header_size=40, width=1, height=1,
            planes=1, bits_per_pixel=32, compression='NONE', image_size=4, x_pixels_per_meter=0,
            y_pixels_per_meter=0, colors=0, important_colors=0))

        self.assertEqual(len(pkt), 54)
        self.assertEqual(pkt[:2], b'BM')
        self.assertEqual(pkt[2:6], b'\x3a\x00\x00\x00')
        self.assertEqual(pkt[28:30], b'\x20\x00')
        self.assertEqual(pkt[30:34], b'\x00\x00\x00\x00')

    def test_color_table(self):
        pkt = b'\x01\x02\x03\x04\xff\x00\x80\x00'
        parsed_table = bmp_codecs.color_table(2).parse(pkt)

        self.assertEqual(parsed_table[0], Container(blue=1, green=2, red=3, reserved=4))
        self.assertEqual(parsed_table[1]["blue"], 0xff)
        self.assertEqual(parsed_table[1]["red"], 0x80)


if __name__ == '__main__':
    unittest.main()
