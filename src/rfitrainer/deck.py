"""Deck of cards for dealing training hands."""

import random
from dataclasses import dataclass, field

from .card import Card, Rank, Suit


@dataclass
class Deck:
    """A standard 52-card deck."""

    cards: list[Card] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self) -> None:
        if not self.cards:
            self.reset()

    def reset(self) -> None:
        """Reset to a full 52-card deck."""
        self.cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the remaining cards (uniform permutation)."""
        self.rng.shuffle(self.cards)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the top of the deck."""
        if n > len(self.cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self.cards)} remaining")
        return [self.cards.pop() for _ in range(n)]

    def deal_hand(self) -> tuple[Card, Card]:
        """Deal two hole cards."""
        first, second = self.deal(2)
        return first, second

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: Card) -> bool:
        return card in self.cards
