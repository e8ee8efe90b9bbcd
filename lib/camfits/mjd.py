"""
Calendar dates to Modified Julian Dates.

Our MJD is counted from 1899 December 31.5 (JD 2415020.0, see `MJD0`), so
``JD = MJD + MJD0``.
"""


MJD0 = 2415020.0    # JD of our MJD epoch, 1899 Dec 31.5

# The Gregorian calendar starts on 1582 Oct 15
_GREGORIAN_START = (1582, 10, 15)


def cal_mjd(month, day, year):
    """
    Return the MJD for the given month (1-12), fractional day of the month
    and year.  Dates before the Gregorian reform are taken as Julian
    calendar dates; there is no year 0, so 1 BC is year -1.
    """

    m = month
    y = year + 1 if year < 0 else year
    if m < 3:
        m += 12
        y -= 1

    if (year, month, day) < _GREGORIAN_START:
        b = 0
    else:
        a = y // 100
        b = 2 - a + a // 4

    if y < 0:
        c = int(365.25 * y - 0.75)
    else:
        c = int(365.25 * y)

    d = int(30.6001 * (m + 1))

    return b + c + d + day - 694025.5
