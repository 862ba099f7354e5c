from bmpcodec.bmp import decode, encode, read_header, initialise_logging
from bmpcodec.errors import BmpError, DecodeError, FormatError, UnsupportedFormat, TruncatedInput, \
    PaletteIndexOutOfRange, EncodeError, InvalidInput, InvalidParameter
from bmpcodec.raster import Raster

__version__ = "0.1.0"
