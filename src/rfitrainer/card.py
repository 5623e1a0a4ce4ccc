"""Cards and canonical starting-hand labels."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Self

# Rank ordering: A > K > Q > J > T > 9 > ... > 2
RANK_ORDER = "AKQJT98765432"


class Suit(IntEnum):
    """Card suits. Values don't affect hand labels beyond suited/offsuit."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def symbol(self) -> str:
        """Unicode symbol for the suit."""
        return ["♣", "♦", "♥", "♠"][self.value]

    @property
    def letter(self) -> str:
        return "cdhs"[self.value]

    @property
    def title(self) -> str:
        return ["Clubs", "Diamonds", "Hearts", "Spades"][self.value]

    def __str__(self) -> str:
        return self.symbol


class Rank(IntEnum):
    """Card ranks. Higher value = higher rank."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        """Single-character symbol, ten is 'T'."""
        if self.value < 10:
            return str(self.value)
        return {10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]

    @property
    def title(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {11: "Jack", 12: "Queen", 13: "King", 14: "Ace"}[self.value]

    def __str__(self) -> str:
        return self.symbol


_SUIT_MAP = {"C": Suit.CLUBS, "D": Suit.DIAMONDS, "H": Suit.HEARTS, "S": Suit.SPADES}
_RANK_MAP = {rank.symbol: rank for rank in Rank} | {"10": Rank.TEN}


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card with rank and suit."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    def __repr__(self) -> str:
        return f"Card({self.rank.symbol}{self.suit.letter})"

    @property
    def code(self) -> str:
        """Two-character code such as 'As' or 'Td'."""
        return f"{self.rank.symbol}{self.suit.letter}"

    @property
    def name(self) -> str:
        """Full card name, e.g. 'Ace of Hearts'."""
        return f"{self.rank.title} of {self.suit.title}"

    @classmethod
    def from_str(cls, s: str) -> Self:
        """Parse a card from string like 'As', 'Kh', '10d', 'Tc'.

        Rank: 2-9, T (or 10), J, Q, K, A
        Suit: c(lubs), d(iamonds), h(earts), s(pades)
        """
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        suit_char = s[-1]
        if suit_char not in _SUIT_MAP:
            raise ValueError(f"Invalid suit: {suit_char}")

        rank_str = s[:-1]
        if rank_str not in _RANK_MAP:
            raise ValueError(f"Invalid rank: {rank_str}")

        return cls(rank=_RANK_MAP[rank_str], suit=_SUIT_MAP[suit_char])


def card(s: str) -> Card:
    """Shorthand for Card.from_str()."""
    return Card.from_str(s)


def parse_cards(s: str) -> list[Card]:
    """Parse space or comma separated cards."""
    return [card(p) for p in s.replace(",", " ").split() if p]


# ── Hand labels ─────────────────────────────────────────────


def hand_label(card1: Card, card2: Card) -> str:
    """Canonical label for two hole cards, e.g. 'AKs', '77', 'T9o'.

    Higher rank first; pairs drop the suited/offsuit suffix. Only rank and
    suit are read, so the label does not depend on card order.
    """
    high, low = (card1, card2) if card1.rank >= card2.rank else (card2, card1)
    if high.rank == low.rank:
        return f"{high.rank.symbol}{low.rank.symbol}"
    suffix = "s" if high.suit == low.suit else "o"
    return f"{high.rank.symbol}{low.rank.symbol}{suffix}"


def hand_label_of(cards: Sequence[Card]) -> str:
    """Label the first two cards of a dealt hand."""
    if len(cards) < 2:
        raise ValueError(f"Need 2 cards to label a hand, got {len(cards)}")
    return hand_label(cards[0], cards[1])


def hand_type(label: str) -> str:
    """Classify a label as 'pair', 'suited' or 'offsuit'."""
    if len(label) == 2 and label[0] == label[1] and label[0] in RANK_ORDER:
        return "pair"
    if (
        len(label) == 3
        and label[0] in RANK_ORDER
        and label[1] in RANK_ORDER
        and RANK_ORDER.index(label[0]) < RANK_ORDER.index(label[1])
    ):
        if label[2] == "s":
            return "suited"
        if label[2] == "o":
            return "offsuit"
    raise ValueError(f"Invalid hand label: {label}")


def combo_count(label: str) -> int:
    """Number of two-card combinations a label covers (6, 4 or 12)."""
    return {"pair": 6, "suited": 4, "offsuit": 12}[hand_type(label)]


def all_hand_labels() -> list[str]:
    """All 169 labels in chart order.

    Row-major over a 13x13 grid from AA to 22: suited hands above the
    diagonal, offsuit below, pairs on it.
    """
    labels = []
    for i, r1 in enumerate(RANK_ORDER):
        for j, r2 in enumerate(RANK_ORDER):
            if i == j:
                labels.append(f"{r1}{r2}")
            elif i < j:
                labels.append(f"{r1}{r2}s")
            else:
                labels.append(f"{r2}{r1}o")
    return labels
