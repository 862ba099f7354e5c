import numpy as np

from bmpcodec.errors import InvalidInput


class Raster(object):
    """
    RGBA raster, 8 bits per channel. Row 0 is the topmost displayed row.

    Pixels live in a numpy array of shape (height, width, 4).
    """

    def __init__(self, width, height, pixels=None):
        if width < 0 or height < 0:
            raise InvalidInput("Raster dimensions must not be negative ({}x{})".format(width, height))

        if pixels is None:
            pixels = np.zeros((height, width, 4), dtype=np.uint8)
        elif pixels.shape != (height, width, 4) or pixels.dtype != np.uint8:
            raise InvalidInput("Pixel array of shape {} and type {} does not match a {}x{} RGBA raster".format(
                pixels.shape, pixels.dtype, width, height))

        self._width = width
        self._height = height
        self._pixels = pixels

    @classmethod
    def from_array(cls, array):
        """
        Build a raster from a (height, width, 4) uint8 array. The array is copied.

        :param array: numpy array (or anything np.asarray accepts)
        :return: Raster
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 4:
            raise InvalidInput("Expected an array of shape (height, width, 4), got {}".format(array.shape))
        if array.dtype != np.uint8:
            raise InvalidInput("Expected uint8 samples, got {}".format(array.dtype))

        return cls(width=array.shape[1], height=array.shape[0], pixels=array.copy())

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def pixels(self):
        return self._pixels

    def get_pixel(self, x, y):
        return tuple(int(channel) for channel in self._pixels[y, x])

    def set_pixel(self, x, y, rgba):
        self._pixels[y, x] = rgba

    def copy(self):
        return Raster(self._width, self._height, self._pixels.copy())

    def __eq__(self, other):
        if not isinstance(other, Raster):
            return NotImplemented
        return self._width == other.width and self._height == other.height and \
            np.array_equal(self._pixels, other.pixels)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return "Raster(width={}, height={})".format(self._width, self._height)
