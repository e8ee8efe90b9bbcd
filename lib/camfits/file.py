import os
import warnings

import numpy as np

from camfits.card import Card, CARD_LENGTH, HEADER_ROWS
from camfits.util import encode_ascii, _pad_length


PYTHON_MODES = {'readonly': 'rb', 'ostream': 'wb'}  # open modes


class ShortTransferError(EOFError):
    """
    The transport reached end of data (or stopped making progress) before a
    read or write was complete.
    """


class _File(object):
    """
    Represents a FITS file: an OS level file descriptor, a file name, or any
    file-like object with ``read`` and/or ``write`` methods.

    Reads and writes are repeated until the whole request has been
    transferred, since the other end might be a pipe or a socket.
    """

    def __init__(self, fileobj, mode='readonly'):
        if mode not in PYTHON_MODES:
            raise ValueError("Mode '%s' not recognized" % mode)

        self.mode = mode
        self.closed = False
        self._fd = None
        self._file = None
        # only close what we opened ourselves
        self._close_on_exit = False

        if isinstance(fileobj, int) and not isinstance(fileobj, bool):
            self.name = '<fd %d>' % fileobj
            self._fd = fileobj
        elif isinstance(fileobj, (str, os.PathLike)):
            self.name = os.fspath(fileobj)
            self._file = open(self.name, PYTHON_MODES[mode])
            self._close_on_exit = True
        else:
            if hasattr(fileobj, 'name'):
                self.name = fileobj.name
            else:
                self.name = str(type(fileobj))

            if mode == 'readonly' and not hasattr(fileobj, 'read'):
                raise IOError("File-like object does not have a 'read' "
                              "method, required for mode '%s'." % mode)
            if mode == 'ostream' and not hasattr(fileobj, 'write'):
                raise IOError("File-like object does not have a 'write' "
                              "method, required for mode '%s'." % mode)
            self._file = fileobj

    def __repr__(self):
        return '<%s.%s %s>' % (self.__module__, self.__class__.__name__,
                               self.name)

    # Support the 'with' statement
    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()

    def read(self, size):
        """
        Read up to ``size`` bytes, stopping early only at end of data.  A
        non-blocking stream with nothing to read raises `ShortTransferError`.
        """

        chunks = []
        nread = 0
        while nread < size:
            chunk = self._read(size - nread)
            if chunk is None:
                raise ShortTransferError('read would block')
            if not chunk:
                break
            chunks.append(encode_ascii(chunk))
            nread += len(chunk)
        return b''.join(chunks)

    def readexact(self, size, message='data is short'):
        """
        Read exactly ``size`` bytes or raise `ShortTransferError`.
        """

        data = self.read(size)
        if len(data) != size:
            raise ShortTransferError(message)
        return data

    def write(self, data, message='Short write'):
        """
        Write all of ``data`` (bytes, str or a numpy array).  A write that
        makes no progress, or would block, raises `ShortTransferError`; errors
        from the OS propagate as `OSError`.
        """

        if isinstance(data, np.ndarray):
            data = np.ascontiguousarray(data).reshape(-1).view(np.uint8)
        view = memoryview(encode_ascii(data))
        nbytes = view.nbytes
        nwritten = 0
        while nwritten < nbytes:
            n = self._write(view[nwritten:])
            if n is None or n <= 0:
                raise ShortTransferError(message)
            nwritten += n
        return nwritten

    def flush(self):
        if self._file is not None and hasattr(self._file, 'flush'):
            self._file.flush()

    def close(self):
        """
        Close the 'physical' FITS file, if we opened it.
        """

        if self._close_on_exit and not self.closed:
            self._file.close()
        else:
            self.flush()
        self.closed = True

    def _read(self, size):
        if self._fd is not None:
            return os.read(self._fd, size)
        return self._file.read(size)

    def _write(self, view):
        if self._fd is not None:
            return os.write(self._fd, view)
        return self._file.write(view)


def read_header(fileobj, header):
    """
    Read 80 byte cards from ``fileobj`` into ``header`` up to, but not
    including, ``END``; then read past the blank cards that fill out the last
    block.  A file that ends after ``END`` but before the end of its block
    is accepted.

    Returns the number of cards consumed.
    """

    nrows = 0
    sawend = False
    while True:
        row = fileobj.read(CARD_LENGTH)
        if len(row) != CARD_LENGTH:
            if sawend:
                warnings.warn('Header block of %s is truncated after END '
                              '(%d cards read).' % (fileobj.name, nrows))
                break
            raise ShortTransferError('header is short')
        nrows += 1

        if not sawend:
            card = Card.fromstring(_card_text(row, nrows))
            if card.is_end():
                sawend = True
            else:
                header.append(card)

        if sawend and nrows % HEADER_ROWS == 0:
            break
    return nrows


def _card_text(row, nrow):
    try:
        return row.decode('ascii')
    except UnicodeDecodeError:
        warnings.warn('Header card %d contains non-ASCII bytes; they are '
                      'replaced with ?.' % nrow)
        return row.decode('ascii', 'replace').replace('\ufffd', '?')


def write_header(fileobj, header):
    """
    Write the cards of ``header``, ``END`` and blank padding to a whole number
    of blocks.  Returns the number of bytes written.
    """

    return fileobj.write(header.tostring(), 'Short write of FITS header')


def read_pixels(fileobj, nbytes):
    return fileobj.readexact(nbytes, 'data is short')


def write_pixels(fileobj, pixels):
    """
    Write the pixel array as is and pad with zeros to the next block.
    Returns the number of bytes written, padding included.
    """

    nbytes = fileobj.write(pixels, 'Short write of FITS pixels')
    return nbytes + write_padding(fileobj, nbytes)


def write_padding(fileobj, nbytes):
    """
    Add zero bytes so a stream that already holds ``nbytes`` ends on a block
    boundary.
    """

    npad = _pad_length(nbytes)
    if npad == 0:
        return 0
    return fileobj.write(b'\0' * npad, 'Error adding padding of %d' % npad)
