"""
Conversion between our internal pixels and the pixels in a FITS file.

In a file each pixel is signed and big-endian (2 or 4 byte integers, or 4
byte IEEE floats) and the first pixel is the lower left of the scene.  In
memory we always store 2 byte unsigned pixels in native byte order.  No rows
are reordered here; this is purely a byte and bias transform.
"""

import numpy as np

from camfits.util import BZERO, lendian


__all__ = ['PixelCodec', 'BITPIX_BYTES']


# bytes per sample for the BITPIX values we can read
BITPIX_BYTES = {16: 2, 32: 4, -32: 4}

MAX_PIXEL = 65535


class PixelCodec(object):
    """
    Converts pixel buffers between the internal and on-disk layouts.

    Parameters
    ----------
    bzero : int, optional
        The additive bias: ``internal = raw + bzero``.

    little_endian : bool, optional
        Host byte order; when not given it is probed at runtime with
        `camfits.util.lendian`.
    """

    def __init__(self, bzero=BZERO, little_endian=None):
        self.bzero = bzero
        if little_endian is None:
            little_endian = lendian()
        self.little_endian = little_endian

    def __repr__(self):
        return '%s(bzero=%r, little_endian=%r)' % (
            self.__class__.__name__, self.bzero, self.little_endian)

    @property
    def _bias16(self):
        # adding/subtracting modulo 2**16 gives the same bits as the signed
        # arithmetic truncated to 16 bits
        return np.uint16(self.bzero % 0x10000)

    def to_file(self, pixels):
        """
        Turn internal native unsigned shorts into FITS big-endian signed
        shorts, IN PLACE.
        """

        flat = _flat_uint16(pixels)
        flat -= self._bias16
        if self.little_endian:
            flat.byteswap(True)
        return pixels

    def from_file(self, pixels):
        """
        Turn FITS big-endian signed shorts back into internal native unsigned
        shorts, IN PLACE.  The inverse of `to_file`.
        """

        flat = _flat_uint16(pixels)
        if self.little_endian:
            flat.byteswap(True)
        flat += self._bias16
        return pixels

    def decode(self, raw, count, bitpix):
        """
        Convert ``count`` samples of raw file bytes with the given BITPIX into
        a new array of internal pixels.
        """

        if bitpix == 16:
            return self.from_file_int16(raw, count)
        elif bitpix == 32:
            return self.from_file_int32(raw, count)
        elif bitpix == -32:
            return self.from_file_float32(raw, count)
        raise ValueError('Unsupported BITPIX %r; must be one of 16, 32 or -32'
                         % (bitpix,))

    def from_file_int16(self, raw, count):
        pixels = np.frombuffer(raw, dtype=np.uint16, count=count).copy()
        return self.from_file(pixels)

    def from_file_int32(self, raw, count):
        """
        Big-endian 32 bit integers plus the bias, narrowed to their low 16
        bits.  The narrowing loses the high bits on purpose.
        """

        words = self._words(raw, count).view(np.int32)
        values = words.astype(np.int64) + self.bzero
        return (values & MAX_PIXEL).astype(np.uint16)

    def from_file_float32(self, raw, count):
        """
        Big-endian IEEE floats, clamped to [0, 65535] and truncated.  No bias
        is applied; NaN becomes 0.
        """

        values = self._words(raw, count).view(np.float32)
        values = np.nan_to_num(values, nan=0.0, posinf=MAX_PIXEL, neginf=0.0)
        values = np.clip(values, 0, MAX_PIXEL)
        return values.astype(np.uint16)

    def _words(self, raw, count):
        words = np.frombuffer(raw, dtype=np.uint32, count=count).copy()
        if self.little_endian:
            words.byteswap(True)
        return words


def _flat_uint16(pixels):
    if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint16:
        raise TypeError('pixels must be a numpy array of uint16, not %r'
                        % (getattr(pixels, 'dtype', type(pixels)),))
    if not pixels.flags.c_contiguous:
        raise ValueError('pixels must be contiguous to be converted in place')
    return pixels.reshape(-1)
