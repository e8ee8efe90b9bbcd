from camfits.pixels import BITPIX_BYTES


class VerifyError(ValueError):
    """
    Verify exception class: the header (or the image it describes) is not
    one we can handle.
    """
    pass


def _get(getter, keyword):
    # a malformed card counts as a missing one
    try:
        return getter(keyword)
    except ValueError:
        return None


def verify_simple(header):
    if not _get(header.get_logical, 'SIMPLE'):
        raise VerifyError('File must claim to be a SIMPLE image.')


def verify_bitpix(header):
    """Return BITPIX, which must be 16, 32 or -32."""

    bitpix = _get(header.get_int, 'BITPIX')
    if bitpix not in BITPIX_BYTES:
        raise VerifyError('File must include BITPIX value of 16, 32, or -32')
    return bitpix


def verify_naxis(header):
    """
    Return ``(NAXIS1, NAXIS2)``.  Any further axes declared by NAXIS must be
    present and equal to 1.
    """

    naxis = _get(header.get_int, 'NAXIS')
    if naxis is None:
        raise VerifyError('No NAXIS')
    if naxis < 2:
        raise VerifyError('Require NAXIS to be at least 2, not %d' % naxis)

    # check for higher dimensions
    for idx in range(3, naxis + 1):
        keyword = 'NAXIS%d' % idx
        extent = _get(header.get_int, keyword)
        if extent is None:
            raise VerifyError('NAXIS=%d but no %s' % (naxis, keyword))
        if extent != 1:
            raise VerifyError('Require %s to be 1' % keyword)

    naxis1 = _get(header.get_int, 'NAXIS1')
    if naxis1 is None:
        raise VerifyError('No NAXIS1')

    naxis2 = _get(header.get_int, 'NAXIS2')
    if naxis2 is None:
        raise VerifyError('No NAXIS2')

    if naxis1 < 0 or naxis2 < 0:
        raise VerifyError('Image dimensions %dx%d are negative'
                          % (naxis1, naxis2))

    return naxis1, naxis2
