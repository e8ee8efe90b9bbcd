import datetime
import warnings

from camfits.file import (_File, read_header, read_pixels, write_header,
                          write_pixels)
from camfits.header import Header
from camfits.mjd import MJD0, cal_mjd as _cal_mjd
from camfits.pixels import BITPIX_BYTES, PixelCodec
from camfits.util import BZERO
from camfits.verify import (VerifyError, verify_bitpix, verify_naxis,
                            verify_simple)


__all__ = ['FImage']


class FImage(object):
    """
    A FITS image: its header and its pixels.

    Attributes
    ----------
    header
        the `Header`; everything read from the file up to but not including
        ``END``, or the cards to be written

    sw, sh
        image width and height, from ``NAXIS1`` and ``NAXIS2``

    sx, sy
        camera frame offsets, from ``OFFSET1`` and ``OFFSET2``

    bx, by
        binning factors, from ``XFACTOR`` and ``YFACTOR``

    dur
        exposure duration in milliseconds, from ``EXPTIME`` (seconds)

    bitpix
        on-disk sample encoding; 16 once pixels are loaded

    image
        `numpy.ndarray` of ``uint16`` with shape ``(sh, sw)`` in native byte
        order, first pixel in the upper left; `None` until loaded

    The `FImage` owns its header and pixel array outright: `reset` drops both
    and every failed read or write resets the image before the exception
    propagates, so a failed image never holds partial state.
    """

    def __init__(self, bzero=BZERO, little_endian=None):
        self.bzero = bzero
        self.codec = PixelCodec(bzero, little_endian)
        self.init()

    def __repr__(self):
        return '<%s %dx%d+%d+%d bin %dx%d BITPIX=%d %d cards>' % (
            self.__class__.__name__, self.sw, self.sh, self.sx, self.sy,
            self.bx, self.by, self.bitpix, len(self.header))

    def init(self):
        """
        Set every field to its default: empty header, no pixels, all zero
        except the binning factors, which are 1.
        """

        self.header = Header()
        self.sw = self.sh = 0
        self.sx = self.sy = 0
        self.bx = self.by = 1
        self.dur = 0
        self.bitpix = 0
        self.image = None

    def reset(self):
        """
        Release the header and pixels and return to the initial state.  Safe
        to call any number of times.
        """

        self.header.clear()
        self.init()

    @property
    def npixels(self):
        return self.sw * self.sh

    def copy_header_from(self, other):
        """
        Copy every field of ``other`` into this image, with a fresh copy of
        its header.  Our own pixels are left as they are.
        """

        image = self.image
        self.__dict__.update(other.__dict__)
        self.header = other.header.copy()
        self.image = image

    def copy_from(self, other):
        """
        Like `copy_header_from`, but also take a new copy of the pixels.
        """

        self.copy_header_from(other)
        if other.image is None:
            self.image = None
        else:
            self.image = other.image.copy()

    def copy(self, header_only=False):
        """
        Return a new `FImage`.  With ``header_only`` the copy has no pixels.
        """

        new = self.__class__(self.bzero, self.codec.little_endian)
        if header_only:
            new.copy_header_from(self)
        else:
            new.copy_from(self)
        return new

    def get_naxis(self):
        """
        Return ``(NAXIS1, NAXIS2)`` from the header, checking that any higher
        axes are 1.
        """

        return verify_naxis(self.header)

    # Reading

    def read_header(self, fileobj):
        """
        Read and check a FITS header (but not the pixels) from ``fileobj``:
        a file descriptor, file name or file-like object.
        """

        try:
            with _File(fileobj) as f:
                self._readheader(f)
        except Exception:
            self.reset()
            raise

    def read(self, fileobj):
        """
        Read a whole FITS image, converting its pixels to our internal form.
        """

        try:
            with _File(fileobj) as f:
                self._readheader(f)
                self._readdata(f)
        except Exception:
            self.reset()
            raise

    def _readheader(self, fileobj):
        self.init()
        read_header(fileobj, self.header)

        # crack the required fields and check for required conditions
        verify_simple(self.header)
        self.bitpix = verify_bitpix(self.header)
        self.sw, self.sh = verify_naxis(self.header)

        # remaining fields are optional
        for keyword, attr in (('XFACTOR', 'bx'), ('YFACTOR', 'by'),
                              ('OFFSET1', 'sx'), ('OFFSET2', 'sy')):
            value = self._optional(self.header.get_int, keyword)
            if value is not None:
                setattr(self, attr, value)

        exptime = self._optional(self.header.get_real, 'EXPTIME')
        if exptime is not None:
            self.dur = int(exptime * 1000.0)

    def _readdata(self, fileobj):
        npixels = self.npixels
        raw = read_pixels(fileobj, npixels * BITPIX_BYTES[self.bitpix])
        pixels = self.codec.decode(raw, npixels, self.bitpix)
        self.image = pixels.reshape((self.sh, self.sw))
        # data is now stored internally as 16 bit shorts
        self.bitpix = 16

    def _optional(self, getter, keyword):
        try:
            return getter(keyword)
        except ValueError as exc:
            warnings.warn('Ignoring unreadable %s card: %s' % (keyword, exc))
            return None

    # Writing

    def write_header(self, fileobj):
        """
        Write the header cards, ``END`` and padding to a whole block.  The
        header itself is not modified.
        """

        try:
            with _File(fileobj, mode='ostream') as f:
                write_header(f, self.header)
        except Exception:
            self.reset()
            raise

    def write(self, fileobj, restore=True):
        """
        Write the header and pixels to ``fileobj``.

        The pixels are put into FITS form IN PLACE before they are written.
        If ``restore`` is true they are put back afterwards, whether or not
        the write succeeded; otherwise they are left in FITS form.
        """

        try:
            if self.image is None:
                raise VerifyError('No pixels')
            if self.image.size != self.npixels:
                raise VerifyError('Image has %d pixels but is declared %dx%d'
                                  % (self.image.size, self.sw, self.sh))
            with _File(fileobj, mode='ostream') as f:
                self._writeto(f, restore)
        except Exception:
            self.reset()
            raise

    def _writeto(self, fileobj, restore):
        write_header(fileobj, self.header)

        self.codec.to_file(self.image)
        try:
            write_pixels(fileobj, self.image)
        finally:
            if restore:
                self.codec.from_file(self.image)

    # Header content

    def set_simple_header(self):
        """
        Add the basic FITS cards describing this image.  We do not add
        ``END`` or padding.
        """

        header = self.header
        header.set_logical('SIMPLE', True, 'Standard FITS')
        header.set_int('BITPIX', self.bitpix, 'Bits per pixel')
        header.set_int('NAXIS', 2, 'Number of dimensions')
        header.set_int('NAXIS1', self.sw, 'Number of columns')
        header.set_int('NAXIS2', self.sh, 'Number of rows')
        header.set_real('BZERO', self.bzero, 6, 'Real = Pixel*BSCALE + BZERO')
        header.set_real('BSCALE', 1.0, 6, 'Pixel scale factor')
        header.set_int('OFFSET1', self.sx, 'Camera upper left frame x')
        header.set_int('OFFSET2', self.sy, 'Camera upper left frame y')
        header.set_int('XFACTOR', self.bx, 'Camera x binning factor')
        header.set_int('YFACTOR', self.by, 'Camera y binning factor')
        header.set_real('EXPTIME', self.dur / 1000.0, 6,
                        'Exposure time, seconds')

    def timestamp(self, t=None, comment=None, cal_mjd=None):
        """
        Set the ``JD``, ``DATE-OBS`` and ``TIME-OBS`` cards, all UTC.

        Parameters
        ----------
        t : float or datetime, optional
            POSIX time or a `datetime` (naive ones are taken to be UTC);
            the current time when not given.

        comment : str, optional
            Comment for the ``JD`` card.

        cal_mjd : callable, optional
            ``cal_mjd(month, day, year)`` returning the Modified Julian Date
            relative to `camfits.mjd.MJD0`; defaults to
            `camfits.mjd.cal_mjd`.
        """

        if cal_mjd is None:
            cal_mjd = _cal_mjd

        utc = datetime.timezone.utc
        if t is None:
            when = datetime.datetime.now(utc)
        elif isinstance(t, datetime.datetime):
            if t.tzinfo is None:
                when = t.replace(tzinfo=utc)
            else:
                when = t.astimezone(utc)
        else:
            when = datetime.datetime.fromtimestamp(t, utc)

        seconds = when.second + when.microsecond / 1000000.0
        day = when.day + (when.hour + (when.minute + seconds / 60.0)
                          / 60.0) / 24.0
        mjd = cal_mjd(when.month, day, when.year)
        self.header.set_real('JD', mjd + MJD0, 16, comment)

        self.header.set_string('DATE-OBS', '%4d-%02d-%02d' % (
            when.year, when.month, when.day), 'UTC CCYY-MM-DD')
        self.header.set_string('TIME-OBS', '%02d:%02d:%02d.%02d' % (
            when.hour, when.minute, when.second, when.microsecond // 10000),
            'UTC HH:MM:SS.ss')
