from camfits.card import Card, CARD_LENGTH, HEADER_ROWS


class Header(object):
    """
    FITS header class.

    An ordered list of `Card` objects in file order.  Cards are looked up by
    their exact (case sensitive) 8 column keyword; when the header holds
    several cards with the same keyword only the first one is found, set or
    deleted.  The ``END`` card and the block padding are not stored; they
    are added by `tostring`.
    """

    def __init__(self, cards=[]):
        """
        Construct a `Header` from an iterable of `Card` objects.
        """

        self.clear()

        if isinstance(cards, Header):
            cards = cards.cards

        for card in cards:
            self.append(card)

    def __len__(self):
        return len(self._cards)

    def __iter__(self):
        return iter(self._cards)

    def __contains__(self, keyword):
        return self.index(keyword) is not None

    def __eq__(self, other):
        if isinstance(other, Header):
            return self._cards == other._cards
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        return '\n'.join(card.image.rstrip() for card in self._cards)

    def __str__(self):
        return ''.join(str(card) for card in self._cards)

    @property
    def cards(self):
        """
        The underlying physical cards that make up this Header; it can be
        looked at, but it should not be modified directly.
        """

        return tuple(self._cards)

    def clear(self):
        """
        Remove all cards from the header.
        """

        self._cards = []

    def copy(self):
        """
        Make a copy of the `Header`.  Cards are immutable, so only the list
        holding them is new.
        """

        return Header(self._cards)

    def index(self, keyword):
        """
        Return the position of the first card with the given keyword, or
        `None` if there is no such card.
        """

        for idx, card in enumerate(self._cards):
            if card.matches(keyword):
                return idx
        return None

    def find(self, keyword):
        """
        Return the first `Card` with the given keyword, or `None`.
        """

        idx = self.index(keyword)
        if idx is None:
            return None
        return self._cards[idx]

    def append(self, card):
        """
        Append a `Card` to the end of the header, regardless of whether a
        card with the same keyword already exists.
        """

        if not isinstance(card, Card):
            raise ValueError('%r is not a Card' % (card,))
        self._cards.append(card)

    def extend(self, cards):
        for card in cards:
            self.append(card)

    def insert(self, idx, card):
        """
        Insert a `Card` before position ``idx``.
        """

        if not isinstance(card, Card):
            raise ValueError('%r is not a Card' % (card,))
        self._cards.insert(idx, card)

    def set(self, card):
        """
        Replace the first card with the same keyword as ``card``, keeping its
        position, or append ``card`` if there is none.
        """

        if not isinstance(card, Card):
            raise ValueError('%r is not a Card' % (card,))
        idx = self.index(card.keyword)
        if idx is None:
            self._cards.append(card)
        else:
            self._cards[idx] = card

    def delete(self, keyword):
        """
        Remove the first card with the given keyword.  Returns `False` if
        there was no such card.
        """

        idx = self.index(keyword)
        if idx is None:
            return False
        del self._cards[idx]
        return True

    # Typed setters; these add the card or replace the existing one

    def set_logical(self, keyword, value, comment=None):
        self.set(Card.logical(keyword, value, comment))

    def set_int(self, keyword, value, comment=None):
        self.set(Card.integer(keyword, value, comment))

    def set_real(self, keyword, value, sigdig=6, comment=None):
        self.set(Card.real(keyword, value, sigdig, comment))

    def set_string(self, keyword, value, comment=None):
        self.set(Card.string(keyword, value, comment))

    def add_commentary(self, keyword, text):
        """
        Append free text cards; text longer than one card is continued on
        further cards.
        """

        self.extend(Card.commentary(keyword, text))

    def add_history(self, text):
        self.add_commentary('HISTORY', text)

    def add_comment(self, text):
        self.add_commentary('COMMENT', text)

    # Typed getters; `None` means the keyword is not present

    def get_logical(self, keyword):
        return self._parse(keyword, Card.parse_logical)

    def get_int(self, keyword):
        return self._parse(keyword, Card.parse_int)

    def get_real(self, keyword):
        return self._parse(keyword, Card.parse_real)

    def get_string(self, keyword):
        return self._parse(keyword, Card.parse_string)

    def get_commentary(self, keyword):
        return self._parse(keyword, Card.parse_commentary)

    def _parse(self, keyword, parser):
        card = self.find(keyword)
        if card is None:
            return None
        return parser(card)

    def padded_length(self):
        """
        Number of cards written out for this header: the cards, ``END`` and
        enough blank cards to fill the last block.
        """

        ncards = len(self._cards) + 1
        return ncards + (HEADER_ROWS - ncards % HEADER_ROWS) % HEADER_ROWS

    def tostring(self):
        """
        The header as it is written to a file: every card, an ``END`` card,
        and blank cards up to a multiple of 36 cards.
        """

        npad = self.padded_length() - len(self._cards) - 1
        return ''.join([str(self), str(Card.end()),
                        ' ' * (npad * CARD_LENGTH)])
