import logging

import numpy as np
from transitions import Machine

from bmpcodec.errors import FormatError, TruncatedInput, InvalidParameter
from bmpcodec.helpers import bmp_codecs, statemachine_helpers

logger = logging.getLogger("bmp_rle")


class IndexedBitmap(object):
    """
    Grid of palette indices produced by the RLE decompressor, with a mask of the
    cells that were actually written.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.indices = np.zeros((height, width), dtype=np.uint8)
        self.written = np.zeros((height, width), dtype=bool)


class RleDecoder(object):

    def __init__(self, data, header, bits_per_index):
        if bits_per_index not in (4, 8):
            raise InvalidParameter("Bad RLE bits value {}, expected 4 or 8".format(bits_per_index))

        self._data = data
        self._ptr = header.offset - bmp_codecs.HEADER_SIZE
        self._bits = bits_per_index

        self._width = header.width
        self._height = header.effective_height
        self._step = 1 if header.top_down else -1
        self._row = 0 if header.top_down else self._height - 1
        self._col = 0
        # Row one step past the last row in scan direction
        self._end_row = self._height if header.top_down else -1

        # Every non-empty bitmap needs at least one escape pair
        if self._height and self._ptr + 2 > len(data):
            raise TruncatedInput("No RLE data at pixel offset {}, buffer holds {} bytes".format(
                header.offset, len(data)))

        self.bitmap = IndexedBitmap(self._width, self._height)

        decoding_states = ['read_pair', 'end_of_line', 'delta', 'absolute', 'encoded']
        states = decoding_states + ['end_of_bitmap']

        transitions = [
            {'trigger': 'pair_received', 'conditions': statemachine_helpers.pair_is_end_of_line,
             'source': decoding_states, 'dest': 'end_of_line'},
            {'trigger': 'pair_received', 'conditions': statemachine_helpers.pair_is_end_of_bitmap,
             'source': decoding_states, 'dest': 'end_of_bitmap'},
            {'trigger': 'pair_received', 'conditions': statemachine_helpers.pair_is_delta,
             'source': decoding_states, 'dest': 'delta'},
            {'trigger': 'pair_received', 'conditions': statemachine_helpers.pair_is_absolute,
             'source': decoding_states, 'dest': 'absolute'},
            {'trigger': 'pair_received', 'conditions': statemachine_helpers.pair_is_encoded,
             'source': decoding_states, 'dest': 'encoded'},
            {'trigger': 'rows_exhausted', 'source': decoding_states, 'dest': 'end_of_bitmap'}
        ]

        self._fsm = Machine(states=states, transitions=transitions, initial='read_pair')

    @property
    def state(self):
        return self._fsm.state

    def decode(self):
        while self._fsm.state != 'end_of_bitmap':
            if not 0 <= self._row < self._height:
                self._fsm.rows_exhausted()
                break

            pair = self._read(2)
            self._fsm.pair_received(pair=pair)

            # Act on the escape the pair was classified as
            if self._fsm.state == 'end_of_line':
                self._end_of_line()
            elif self._fsm.state == 'delta':
                self._delta()
            elif self._fsm.state == 'absolute':
                self._absolute(count=pair[1])
            elif self._fsm.state == 'encoded':
                self._encoded(count=pair[0], value=pair[1])
            else:
                logger.debug("End of bitmap at byte {}".format(self._ptr))

        return self.bitmap

    def _read(self, count):
        end = self._ptr + count
        if end > len(self._data):
            raise TruncatedInput("RLE data ends at byte {}, needed {} more bytes at byte {}".format(
                len(self._data), count, self._ptr))

        chunk = self._data[self._ptr:end]
        self._ptr = end
        return chunk

    def _write(self, indices):
        # Truncate at the right edge instead of spilling into the next row
        room = max(self._width - self._col, 0)
        indices = indices[:room]
        end = self._col + len(indices)

        self.bitmap.indices[self._row, self._col:end] = indices
        self.bitmap.written[self._row, self._col:end] = True
        self._col = end

    def _end_of_line(self):
        self._col = 0
        self._row += self._step

    def _delta(self):
        dx, dy = self._read(2)
        self._col += dx
        self._row += dy * self._step

        # Landing just past the last row ends decoding through rows_exhausted
        if not 0 <= self._row < self._height and self._row != self._end_row:
            raise FormatError("RLE delta ({}, {}) moves outside the {} row bitmap".format(dx, dy, self._height))

    def _absolute(self, count):
        raw = np.frombuffer(bytes(self._read(count)), dtype=np.uint8)

        if self._bits == 4:
            indices = np.stack((raw >> 4, raw & 0x0F), axis=-1).reshape(-1)
        else:
            indices = raw

        self._write(indices)

        # Absolute runs are padded to a 16 bit boundary
        if count % 2 == 1:
            self._read(1)

    def _encoded(self, count, value):
        if self._bits == 4:
            pattern = np.array([value >> 4, value & 0x0F], dtype=np.uint8)
            indices = np.resize(pattern, count)
        else:
            indices = np.full(count, value, dtype=np.uint8)

        self._write(indices)


def decode_rle(data, header, bits_per_index):
    """
    Decompress RLE4 or RLE8 pixel data into an IndexedBitmap.

    :param data: the bytes after the 54 byte header
    :param header: BitmapHeader
    :param bits_per_index: 4 for RLE4, 8 for RLE8
    :return: IndexedBitmap
    """
    decoder = RleDecoder(data=data, header=header, bits_per_index=bits_per_index)
    bitmap = decoder.decode()

    logger.debug("RLE{} decoded {} of {} cells".format(
        bits_per_index, int(bitmap.written.sum()), bitmap.width * bitmap.height))

    return bitmap
