"""
camfits: reading and writing single image FITS files from CCD cameras.

Images are held in memory as unsigned 16 bit pixels in native byte order
(`FImage.image`) together with their header cards (`FImage.header`).  FITS
files with BITPIX 16, 32 or -32 can be read; files are always written with
BITPIX 16.
"""

__version__ = '1.0.0'

from camfits.card import Card
from camfits.convenience import (getdata, getheader, readfits, write_simple,
                                 writeto)
from camfits.file import ShortTransferError
from camfits.header import Header
from camfits.image import FImage
from camfits.mjd import MJD0, cal_mjd
from camfits.pixels import PixelCodec
from camfits.util import BLOCK_SIZE, BZERO, lendian
from camfits.verify import VerifyError


__all__ = ['Card', 'Header', 'FImage', 'PixelCodec', 'VerifyError',
           'ShortTransferError', 'getdata', 'getheader', 'readfits',
           'writeto', 'write_simple', 'cal_mjd', 'MJD0', 'BLOCK_SIZE',
           'BZERO', 'lendian']
