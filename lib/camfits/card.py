import re
import warnings

from camfits.util import decode_ascii, encode_ascii


__all__ = ['Card', 'CARD_LENGTH', 'HEADER_ROWS']


CARD_LENGTH = 80    # columns in one header card
HEADER_ROWS = 36    # cards in one header block
KEYWORD_LENGTH = 8

# Columns (0-based slices) of the fixed-format value field
VALUE_START = 10
VALUE_END = 30
LOGICAL_COLUMN = 29

MIN_STRING_LENGTH = 8
MAX_STRING_LENGTH = 68
COMMENTARY_LENGTH = 72
CONTINUATION_LENGTH = 68
CONTINUATION_MARKER = '... '
INLINE_COMMENT_LENGTH = 47


FIX_FP_TABLE = str.maketrans('dD', 'eE')


class Card(object):
    """
    One 80 column FITS header record.

    A `Card` is immutable; the header keeps a list of them and replaces a
    card wholesale when its value changes.  Cards are normally created with
    one of the formatting class methods (`Card.logical`, `Card.integer`,
    `Card.real`, `Card.string`, `Card.commentary`, `Card.end`) or, when
    reading a file, with `Card.fromstring`.
    """

    length = CARD_LENGTH

    # FSC commentary card string which must contain printable ASCII characters.
    _ascii_text_RE = re.compile(r'^[ -~]*$')

    # Leading numeric prefixes of the value field, in the manner of the C
    # library's atoi()/atof(): anything after the number is ignored
    _int_RE = re.compile(r'\s*(?P<numr>[+-]?\d+)')
    _real_RE = re.compile(
        r'\s*(?P<numr>[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)')

    def __init__(self, image=''):
        image = decode_ascii(image)
        if len(image) > self.length:
            raise ValueError('Card image is longer than %d columns: %r'
                             % (self.length, image))
        self._image = '%-80s' % image

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._image.rstrip())

    def __str__(self):
        return self._image

    def __eq__(self, other):
        if isinstance(other, Card):
            return self._image == other._image
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._image)

    @classmethod
    def fromstring(cls, image):
        """
        Construct a `Card` from a (raw) string or bytes.  Images shorter than
        80 columns are padded with blanks.
        """

        return cls(image)

    @property
    def image(self):
        """The full 80 column card image."""

        return self._image

    @property
    def keyword(self):
        """Columns 1-8 with any trailing blanks removed."""

        return self._image[:KEYWORD_LENGTH].rstrip()

    def tobytes(self):
        return encode_ascii(self._image)

    def matches(self, keyword):
        """
        Return `True` if this card's first 8 columns are exactly ``keyword``
        padded with blanks.  The comparison is case sensitive.
        """

        return self._image[:KEYWORD_LENGTH] == '%-8.8s' % keyword

    def is_end(self):
        return self._image[:KEYWORD_LENGTH] == 'END     '

    # Formatting

    @classmethod
    def logical(cls, keyword, value, comment=None):
        """A ``T`` or ``F`` in column 30."""

        line = '%s=%20s%s' % (_format_keyword(keyword), '',
                              'T' if value else 'F')
        return cls(line + _format_inline_comment(comment))

    @classmethod
    def integer(cls, keyword, value, comment=None):
        """An integer right justified in columns 11-30."""

        line = '%s= %s' % (_format_keyword(keyword),
                           _fit_value(keyword, '%20d' % value))
        return cls(line + _format_inline_comment(comment))

    @classmethod
    def real(cls, keyword, value, sigdig=6, comment=None):
        """
        A floating point value in columns 11-30 with at most ``sigdig``
        significant digits.
        """

        line = '%s= %s' % (_format_keyword(keyword),
                           _fit_value(keyword, '%20.*G' % (sigdig, value)))
        return cls(line + _format_inline_comment(comment))

    @classmethod
    def string(cls, keyword, value, comment=None):
        """
        A character string opened by a ``'`` in column 11 and closed by a
        ``'`` not before column 20, i.e. 8 characters minimum including
        blanks, and 68 at most.  Embedded quotes are doubled.
        """

        _check_text(value, 'value')
        value = value.replace("'", "''")
        nchars = len(value)
        if nchars < MIN_STRING_LENGTH:
            nchars = MIN_STRING_LENGTH
        elif nchars > MAX_STRING_LENGTH:
            warnings.warn('String value for %r is longer than %d characters '
                          'and is truncated.' % (keyword, MAX_STRING_LENGTH))
            nchars = MAX_STRING_LENGTH
            value = value[:nchars]
            if _trailing_quotes(value) % 2:
                # don't leave half of an escaped quote behind
                value = value[:-1]

        line = "%s= '%-*s'" % (_format_keyword(keyword), nchars, value)
        line = '%-80s' % line

        if comment and nchars < CARD_LENGTH - 3 - 12:
            start = max(12 + nchars, VALUE_END)
            room = CARD_LENGTH - 3 - start
            line = line[:start] + ' / %-*s' % (room, _truncate(comment, room))
        return cls(line)

    @classmethod
    def commentary(cls, keyword, text):
        """
        Free text (normally for ``HISTORY`` and ``COMMENT``) left justified in
        columns 9-80.  Text too long for one card is continued on more cards
        with the same keyword, each starting with ``...``.

        Returns a list of cards; empty text gives an empty list.
        """

        _check_text(text, 'text')
        cards = []
        key = _format_keyword(keyword)
        nchars = len(text)
        idx = 0
        while idx < nchars:
            if idx == 0:
                line = '%s%-72.72s' % (key, text)
                idx += COMMENTARY_LENGTH
            else:
                line = '%s%s%-68.68s' % (key, CONTINUATION_MARKER,
                                         text[idx:])
                idx += CONTINUATION_LENGTH
            cards.append(cls(line))
        return cards

    @classmethod
    def end(cls):
        return cls('END')

    # Parsing

    def parse_logical(self):
        """
        Return `True` for a ``T`` and `False` for an ``F`` (either case) in
        column 30; anything else raises `ValueError`.
        """

        char = self._image[LOGICAL_COLUMN]
        if char in 'Tt':
            return True
        elif char in 'Ff':
            return False
        raise ValueError('Card %r does not hold a logical value.'
                         % self.keyword)

    def parse_int(self):
        m = self._int_RE.match(self._image[VALUE_START:])
        if m is None:
            raise ValueError('Card %r does not hold an integer value.'
                             % self.keyword)
        return int(m.group('numr'))

    def parse_real(self):
        """
        Parse the value field as a float.  Fortran style ``D`` exponents are
        accepted.
        """

        field = self._image[VALUE_START:VALUE_START + 30]
        m = self._real_RE.match(field.translate(FIX_FP_TABLE))
        if m is None:
            raise ValueError('Card %r does not hold a real value.'
                             % self.keyword)
        return float(m.group('numr'))

    def parse_string(self):
        """
        Return the quoted string value without its quotes and without
        trailing blanks.  Raises `ValueError` unless there is a ``'`` in
        column 11 and a closing ``'`` after it.
        """

        if self._image[VALUE_START] != "'":
            raise ValueError('Card %r does not hold a string value.'
                             % self.keyword)
        chars = []
        idx = VALUE_START + 1
        while idx < CARD_LENGTH:
            char = self._image[idx]
            if char == "'":
                if self._image[idx + 1:idx + 2] == "'":
                    chars.append(char)
                    idx += 2
                    continue
                return ''.join(chars).rstrip(' ')
            chars.append(char)
            idx += 1
        raise ValueError('Unterminated string value in card %r.'
                         % self.keyword)

    def parse_commentary(self):
        """The free text in columns 9-80, without trailing blanks."""

        return self._image[KEYWORD_LENGTH:].rstrip()


def _format_keyword(keyword):
    if len(keyword) > KEYWORD_LENGTH:
        warnings.warn('Keyword name %r is greater than 8 characters and is '
                      'truncated.' % keyword)
    _check_text(keyword, 'keyword')
    return '%-8.8s' % keyword


def _fit_value(keyword, value):
    # the fixed-format value field is columns 11-30
    width = VALUE_END - VALUE_START
    if len(value) > width:
        warnings.warn('The value of %r is too long for %d columns and is '
                      'truncated: %s' % (keyword, width, value.strip()))
        value = value[:width]
    return value


def _format_inline_comment(comment):
    """The final 50 columns of a value card."""

    if comment:
        return ' / %-47s' % _truncate(comment, INLINE_COMMENT_LENGTH)
    return ' ' * (CARD_LENGTH - VALUE_END)


def _truncate(comment, length):
    _check_text(comment, 'comment')
    if len(comment) > length:
        warnings.warn('Card is too long, comment is truncated.')
        comment = comment[:length]
    return comment


def _check_text(text, what):
    if not Card._ascii_text_RE.match(text):
        raise ValueError('Card %s must contain printable ASCII characters '
                         'only: %r' % (what, text))


def _trailing_quotes(value):
    return len(value) - len(value.rstrip("'"))
