import pytest

from camfits.card import Card
from camfits.tests import CamfitsTestCase


def _pad(image):
    return '%-80s' % image


class TestCardFunctions(CamfitsTestCase):
    def test_logical_card(self):
        card = Card.logical('SIMPLE', True, 'Standard FITS')
        assert card.image == _pad('SIMPLE  =                    T'
                                  ' / Standard FITS')
        assert card.image[29] == 'T'
        assert card.parse_logical() is True

        card = Card.logical('SIMPLE', False)
        assert card.image == _pad('SIMPLE  =                    F')
        assert card.parse_logical() is False

    def test_logical_parse_is_case_insensitive(self):
        assert Card('FOO     =                    t').parse_logical() is True
        assert Card('FOO     =                    f').parse_logical() is False

    def test_logical_parse_failure(self):
        with pytest.raises(ValueError):
            Card('FOO     =                    X').parse_logical()
        with pytest.raises(ValueError):
            Card.integer('FOO', 1).parse_logical()

    def test_integer_card(self):
        card = Card.integer('NAXIS1', 100, 'Number of columns')
        assert card.image == _pad('NAXIS1  = %20d / Number of columns' % 100)
        assert len(card.image) == 80
        assert card.parse_int() == 100

        assert Card.integer('BITPIX', -32).parse_int() == -32

    def test_integer_parse_tolerates_leading_blanks(self):
        assert Card('NAXIS   =     3').parse_int() == 3
        assert Card('NAXIS   =    +3 / three axes').parse_int() == 3

    def test_integer_parse_failure(self):
        with pytest.raises(ValueError):
            Card.string('NAXIS', 'two').parse_int()

    def test_real_card(self):
        card = Card.real('EXPTIME', 1.5, 6, 'Exposure time, seconds')
        assert card.image[:30] == 'EXPTIME = %20s' % '1.5'
        assert card.image[30:] == '%-50s' % ' / Exposure time, seconds'
        assert card.parse_real() == 1.5

        card = Card.real('BZERO', 32768, 6)
        assert card.image[10:30].strip() == '32768'
        assert card.parse_real() == 32768.0

    def test_real_significant_digits(self):
        card = Card.real('JD', 2451545.123456789, 16)
        assert card.image[10:30].strip() == '2451545.123456789'
        assert card.parse_real() == pytest.approx(2451545.123456789,
                                                  abs=1e-9)

        card = Card.real('FWHMH', 1.23456789, 3)
        assert card.image[10:30].strip() == '1.23'

    def test_real_fortran_exponent(self):
        assert Card('EXPTIME =              1.5D+00').parse_real() == 1.5
        assert Card('EXPTIME =              2.5d-01').parse_real() == 0.25
        assert Card('EXPTIME =              2.5E+01').parse_real() == 25.0

    def test_real_parse_failure(self):
        with pytest.raises(ValueError):
            Card.logical('EXPTIME', True).parse_real()

    def test_string_card(self):
        card = Card.string('OBJECT', 'M31')
        assert card.image == _pad("OBJECT  = 'M31     '")
        assert card.image[10] == "'"
        assert card.image[19] == "'"
        assert card.parse_string() == 'M31'

    def test_string_card_with_comment(self):
        card = Card.string('DATE-OBS', '2012-03-04', 'UTC CCYY-MM-DD')
        assert card.image == _pad("DATE-OBS= '2012-03-04'        "
                                  " / UTC CCYY-MM-DD")
        assert card.parse_string() == '2012-03-04'

        # a long value pushes the comment right
        value = 'x' * 30
        card = Card.string('OBSERVER', value, 'who')
        assert card.image[41:46] == "' / w"
        assert card.parse_string() == value

    def test_string_keeps_leading_blanks(self):
        card = Card.string('OBJECT', '  M31')
        assert card.parse_string() == '  M31'

    def test_string_with_quotes(self):
        card = Card.string('OBSERVER', "O'Brien")
        assert "'O''Brien'" in card.image
        assert card.parse_string() == "O'Brien"

    def test_long_string_is_truncated(self):
        with pytest.warns(UserWarning):
            card = Card.string('OBJECT', 'A' * 100, 'dropped')
        assert len(card.image) == 80
        assert card.parse_string() == 'A' * 68

    def test_unterminated_string(self):
        with pytest.raises(ValueError):
            Card("OBJECT  = 'M31").parse_string()
        with pytest.raises(ValueError):
            Card('OBJECT  = M31').parse_string()

    def test_long_comment_is_truncated(self):
        with pytest.warns(UserWarning):
            card = Card.integer('FOO', 1, 'c' * 60)
        assert card.image[30:] == ' / ' + 'c' * 47

    def test_commentary_card(self):
        cards = Card.commentary('HISTORY', 'written by the camera')
        assert len(cards) == 1
        assert cards[0].image == _pad('HISTORY written by the camera')
        assert cards[0].parse_commentary() == 'written by the camera'

    def test_long_commentary_card(self):
        longval = 'ABC' * 30
        cards = Card.commentary('HISTORY', longval)
        assert len(cards) == 2
        assert cards[0].image == 'HISTORY ' + longval[:72]
        assert cards[1].image == _pad('HISTORY ... ' + longval[72:])

        cards = Card.commentary('COMMENT', 'x' * (72 + 68 + 1))
        assert len(cards) == 3
        assert cards[2].image == _pad('COMMENT ... x')

        assert Card.commentary('COMMENT', '') == []

    def test_end_card(self):
        card = Card.end()
        assert card.image == 'END' + ' ' * 77
        assert card.is_end()
        assert not Card.integer('ENDTIME', 1).is_end()

    def test_keyword_matching(self):
        card = Card.integer('NAXIS', 2)
        assert card.keyword == 'NAXIS'
        assert card.matches('NAXIS')
        assert not card.matches('naxis')
        assert not card.matches('NAXIS1')

    def test_long_keyword_is_truncated(self):
        with pytest.warns(UserWarning):
            card = Card.integer('TOOLONGKEY', 1)
        assert card.keyword == 'TOOLONGK'

    def test_fromstring(self):
        card = Card.fromstring(b'NAXIS   =                    2')
        assert len(card.image) == 80
        assert card.parse_int() == 2
        assert card == Card.integer('NAXIS', 2)

    def test_card_too_long(self):
        with pytest.raises(ValueError):
            Card('X' * 81)

    def test_non_ascii_text(self):
        with pytest.raises(ValueError):
            Card.string('OBJECT', 'caf\xe9')

    def test_integer_too_long(self):
        with pytest.warns(UserWarning):
            card = Card.integer('BIG', 10 ** 22)
        assert len(card.image) == 80
        assert card.image[30:] == ' ' * 50

    def test_real_too_long(self):
        with pytest.warns(UserWarning):
            card = Card.real('SMALL', -1.234567890123457e-05, 16, 'tiny')
        assert card.image[10:30] == '-1.234567890123457E-'
        assert card.image[30:33] == ' / '
