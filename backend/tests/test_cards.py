"""Tests for Card and the Deck card source."""

from collections import Counter

import pytest

from pokerhand.cards import Card, Deck, Rank, Suit, RANK_SYMBOLS
from pokerhand.errors import CollaboratorError


# ── Card basics ──────────────────────────────────────────────────────

class TestCard:
    def test_repr(self):
        assert repr(Card(Rank.ACE, Suit.HEARTS)) == "Ah"
        assert repr(Card(Rank.TEN, Suit.CLUBS)) == "Tc"

    def test_equality_and_hash(self):
        a = Card(Rank.QUEEN, Suit.DIAMONDS)
        b = Card(Rank.QUEEN, Suit.DIAMONDS)
        assert a == b
        assert len({a, b}) == 1
        assert a != Card(Rank.QUEEN, Suit.SPADES)

    def test_eq_with_non_card(self):
        c = Card(Rank.ACE, Suit.SPADES)
        assert c != "As"
        assert c.__eq__("As") is NotImplemented

    def test_dict(self):
        c = Card(Rank.JACK, Suit.HEARTS)
        assert c.to_dict() == {"rank": 11, "suit": "h"}
        assert Card.from_dict({"rank": 14, "suit": "s"}) == Card(Rank.ACE, Suit.SPADES)

    def test_from_str(self):
        assert Card.from_str("Ts") == Card(Rank.TEN, Suit.SPADES)
        assert Card.from_str("2c") == Card(Rank.TWO, Suit.CLUBS)
        assert Card.from_str("ah") == Card.from_str("Ah")

    def test_rank_symbols_complete(self):
        assert len(RANK_SYMBOLS) == 13
        for r in Rank:
            assert r in RANK_SYMBOLS


# ── Deck ─────────────────────────────────────────────────────────────

class TestDeck:
    def test_deck_has_52_unique_cards(self):
        d = Deck()
        assert d.remaining == 52
        cards = d.deal(52)
        assert len(set(cards)) == 52

    def test_deck_has_4_of_each_rank(self):
        cards = Deck().deal(52)
        rank_counts = Counter(c.rank for c in cards)
        for r in Rank:
            assert rank_counts[r] == 4

    def test_deal_reduces_remaining(self):
        d = Deck()
        d.deal(5)
        assert d.remaining == 47
        assert isinstance(d.deal_one(), Card)
        assert d.remaining == 46

    def test_dealt_cards_never_repeat(self):
        d = Deck()
        first = d.deal(3)
        rest = d.deal(49)
        assert not set(first) & set(rest)

    def test_deal_too_many_raises(self):
        d = Deck()
        d.deal(50)
        with pytest.raises(CollaboratorError, match="Not enough cards"):
            d.deal(5)
        assert d.remaining == 2

    def test_shuffle_changes_order(self):
        d = Deck([Card(r, s) for s in Suit for r in Rank])
        before = [repr(c) for c in d.deal(52)]
        d2 = Deck([Card.from_str(c) for c in before])
        d2.shuffle()
        assert [repr(c) for c in d2.deal(52)] != before

    def test_explicit_cards_are_not_shuffled(self):
        cards = [Card.from_str(c) for c in ("As", "Kd", "2c")]
        assert Deck(cards).deal(3) == cards

    def test_from_dict_preserves_order(self):
        d = Deck()
        d.deal(10)
        d2 = Deck.from_dict(d.to_dict())
        assert d.remaining == d2.remaining == 42
        assert d.deal(42) == d2.deal(42)
