from construct import \
    Struct, Const, Byte, Enum, Array, Int16ul, Int32ul, Int32sl

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE
COLOR_ENTRY_SIZE = 4

compressionType = Enum(Int32ul, NONE=0, RLE8=1, RLE4=2)

# File header (14 bytes) followed by BITMAPINFOHEADER (40 bytes), little-endian throughout

bitmap_header = Struct(
    "magic" / Const(b"BM"),
    "file_size" / Int32ul,
    "reserved1" / Int16ul,
    "reserved2" / Int16ul,
    "offset" / Int32ul,
    # BITMAPINFOHEADER starts here
    "dib_header_size" / Int32ul,
    "width" / Int32sl,
    # Positive means bottom-up rows
    "height" / Int32sl,
    "planes" / Int16ul,
    "bits_per_pixel" / Int16ul,
    "compression" / compressionType,
    "image_size" / Int32ul,
    "x_pixels_per_meter" / Int32sl,
    "y_pixels_per_meter" / Int32sl,
    "colors" / Int32ul,
    "important_colors" / Int32ul
)

bmp_color_entry = Struct(
    "blue" / Byte,
    "green" / Byte,
    "red" / Byte,
    "reserved" / Byte
)


def color_table(count):
    return Array(count, bmp_color_entry)
