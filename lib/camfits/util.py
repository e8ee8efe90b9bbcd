import numpy as np


__all__ = ['BLOCK_SIZE', 'BZERO', 'lendian']


BLOCK_SIZE = 2880  # the FITS block size

# The default additive bias mapping the signed on-disk sample range onto the
# unsigned internal range.  Cameras that deliver unsigned 16-bit pixels (most
# CCD controllers) want 32768; pass a different value to FImage/PixelCodec for
# hardware that does otherwise.
BZERO = 32768


_lendian = None


def lendian():
    """
    Return `True` if this machine stores multi-byte integers with the least
    significant byte first.

    The answer is worked out the first time this is called by looking at the
    bytes of a two-byte integer in memory, and cached for the rest of the
    process.
    """

    global _lendian

    if _lendian is None:
        probe = np.array([1], dtype=np.uint16)
        _lendian = bool(probe.view(np.uint8)[0] == 1)
    return _lendian


def encode_ascii(s):
    if isinstance(s, str):
        return s.encode('ascii')
    return s


def decode_ascii(s):
    if isinstance(s, (bytes, bytearray)):
        return s.decode('ascii')
    return s


def _pad_length(stringlen):
    """Bytes needed to pad the input stringlen to the next FITS block."""

    return (BLOCK_SIZE - (stringlen % BLOCK_SIZE)) % BLOCK_SIZE
