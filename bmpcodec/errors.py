class BmpError(Exception):
    pass


class DecodeError(BmpError):
    pass


class FormatError(DecodeError):
    """
    The byte stream is not a BMP this decoder understands.
    """
    pass


class UnsupportedFormat(FormatError):
    """
    Valid BMP, but the compression/bit depth combination is not supported.
    """
    pass


class TruncatedInput(FormatError):
    """
    Fewer bytes are available than the header's offsets and sizes require.
    """
    pass


class PaletteIndexOutOfRange(DecodeError):
    pass


class EncodeError(BmpError):
    pass


class InvalidInput(EncodeError, ValueError):
    pass


class InvalidParameter(BmpError, ValueError):
    pass
