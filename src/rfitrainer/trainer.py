"""Training loop: deal a hand, grade the answer, record it, move seats."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .card import Card, hand_label_of
from .deck import Deck
from .evaluator import Decision, DecisionEvaluator, EvaluationResult
from .position import Position, TableSize, layout_for, next_hero_position
from .ranges import DEFAULT_STRATEGY
from .session import HandDecision, Session, SessionStore

logger = logging.getLogger(__name__)

FEEDBACK = {
    "correct": "Correct! This is the optimal play.",
    "partial": "Close! You have the right idea, but could be more specific.",
    "incorrect": "Not quite right. Let's see what the optimal play would be.",
}


@dataclass(frozen=True)
class Feedback:
    """Graded answer with the message to show the user."""

    hand_label: str
    position: str
    result: EvaluationResult
    message: str


class Trainer:
    """Runs raise-first-in drills for one table size and strategy.

    The hero starts on the button and moves one seat earlier after every
    hand, skipping the blinds.
    """

    def __init__(
        self,
        table_size: TableSize = 6,
        strategy: str = DEFAULT_STRATEGY,
        evaluator: DecisionEvaluator | None = None,
        deck: Deck | None = None,
        store: SessionStore | None = None,
    ) -> None:
        layout_for(table_size)  # reject unsupported sizes up front
        self.table_size = table_size
        self.strategy = strategy
        self.evaluator = evaluator or DecisionEvaluator()
        self.deck = deck or Deck()
        self.store = store
        self.position: str = Position.BTN.value
        self.hand: list[Card] = []
        self.session = store.init(table_size, strategy) if store else Session.start(table_size, strategy)

    @property
    def hand_label(self) -> str:
        return hand_label_of(self.hand)

    def deal(self) -> list[Card]:
        """Shuffle a fresh deck and deal two hole cards."""
        self.deck.reset()
        self.deck.shuffle()
        self.hand = list(self.deck.deal_hand())
        return self.hand

    def submit(self, decision: Decision) -> Feedback:
        """Grade the decision for the current hand and record it."""
        if not self.hand:
            raise ValueError("No hand dealt")
        result = self.evaluator.evaluate_cards(
            self.hand, self.position, self.table_size, decision, self.strategy
        )
        entry = HandDecision.from_result(self.hand, self.position, decision, result)
        self.session.add(entry)
        if self.store is not None:
            self.store.add(entry)

        if result.is_correct:
            message = FEEDBACK["correct"]
        elif result.partially_correct:
            message = FEEDBACK["partial"]
        else:
            message = FEEDBACK["incorrect"]
        logger.debug("%s from %s graded %s", entry.hand_label, self.position, message)
        return Feedback(
            hand_label=entry.hand_label,
            position=self.position,
            result=result,
            message=message,
        )

    def next_hand(self) -> list[Card]:
        """Move the hero to the next seat and deal."""
        self.position = next_hero_position(self.position, self.table_size)
        return self.deal()
