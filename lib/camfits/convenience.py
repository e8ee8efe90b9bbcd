import numpy as np

from camfits.image import FImage
from camfits.util import BZERO


__all__ = ['getheader', 'getdata', 'readfits', 'writeto', 'write_simple']


# Convenience functions

def readfits(fileobj, bzero=BZERO):
    """
    Read a whole FITS image from ``fileobj`` (a file descriptor, file name
    or file-like object) and return it as an `FImage`.
    """

    fimage = FImage(bzero=bzero)
    fimage.read(fileobj)
    return fimage


def getheader(fileobj):
    """
    Read and check the header of a FITS image, but not its pixels.

    Returns
    -------
    header : Header object
    """

    fimage = FImage()
    fimage.read_header(fileobj)
    return fimage.header


def getdata(fileobj, bzero=BZERO):
    """
    Return the pixels of a FITS image as a ``uint16`` array of shape
    ``(NAXIS2, NAXIS1)``.
    """

    return readfits(fileobj, bzero=bzero).image


def writeto(fileobj, fimage, restore=True):
    """
    Write ``fimage`` (header and pixels) to ``fileobj``.  See
    `FImage.write`.
    """

    fimage.write(fileobj, restore=restore)


def write_simple(fileobj, pix, w, h, x=0, y=0, dur=0, restore=True,
                 bzero=BZERO):
    """
    Write a nominal FITS file of ``w`` x ``h`` pixels with a minimal header.

    Parameters
    ----------
    pix : array or writable buffer
        ``w*h`` unsigned 16 bit pixels in native byte order, the first one at
        the upper left of the scene.  They are put into FITS form IN PLACE
        for writing; the caller keeps ownership of the buffer.

    x, y : int
        camera frame offset of the upper left pixel

    dur : int
        exposure duration in milliseconds

    restore : bool
        Put the pixels back the way we found them afterwards.
    """

    fimage = FImage(bzero=bzero)
    fimage.sw = w
    fimage.sh = h
    fimage.sx = x
    fimage.sy = y
    fimage.dur = dur
    fimage.bitpix = 16
    fimage.image = _as_pixels(pix, w, h)

    fimage.set_simple_header()
    fimage.write(fileobj, restore=restore)


def _as_pixels(pix, w, h):
    if isinstance(pix, np.ndarray):
        pixels = pix
    else:
        pixels = np.frombuffer(pix, dtype=np.uint16, count=w * h)
        if not pixels.flags.writeable:
            # read-only buffer (bytes); convert a copy instead
            pixels = pixels.copy()

    if pixels.size != w * h:
        raise ValueError('Expected %d pixels for a %dx%d image, got %d'
                         % (w * h, w, h, pixels.size))
    # a view, so the conversion happens in the caller's buffer
    return pixels.reshape((h, w))
