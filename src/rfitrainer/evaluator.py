"""Grading raise-first-in decisions against a strategy range table."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .card import Card, hand_label_of
from .config import ScoringConfig
from .position import LAYOUTS, TableSize, index_of, is_blind
from .ranges import DEFAULT_STRATEGY, RangeBook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """A raise/fold call plus the earliest seat to open the hand from.

    Attributes:
        raise_decision: Whether to raise first in from the current seat.
        earliest_position: Earliest seat the hand is opened from, or None
            for "never raise this hand".
    """

    raise_decision: bool
    earliest_position: str | None = None


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of grading one decision.

    Attributes:
        is_correct: Raise/fold matched and the seat pick was (nearly) exact.
        partially_correct: Raise/fold matched and the seat pick was close.
        correct_answer: What the strategy prescribes.
        position_score: Seat-pick score in [0, 1] used for grading.
        message: Explanation when the seat is not graded (blinds).
    """

    is_correct: bool
    partially_correct: bool
    correct_answer: Decision
    position_score: float = 0.0
    message: str | None = None


class DecisionEvaluator:
    """Grades decisions against a read-only RangeBook.

    Lookups that fail (unknown hand, seat, strategy or table size) fall back
    to "fold" and a position score of 0; nothing here raises for bad data.
    """

    def __init__(self, ranges: RangeBook | None = None, scoring: ScoringConfig | None = None) -> None:
        self.ranges = ranges if ranges is not None else RangeBook.default()
        self.scoring = scoring if scoring is not None else ScoringConfig()

    def resolve_raise(
        self,
        label: str,
        position: str,
        table_size: TableSize,
        strategy: str = DEFAULT_STRATEGY,
    ) -> bool:
        """Whether opening the hand from ``position`` is correct."""
        if is_blind(position):
            return False
        earliest = self.ranges.earliest_position(label, table_size, strategy)
        if earliest is None:
            return False
        earliest_index = index_of(earliest, table_size)
        current_index = index_of(position, table_size)
        if earliest_index is None or current_index is None:
            logger.debug(
                "Unknown position in %s/%s at %d-max, defaulting to fold",
                earliest, position, table_size,
            )
            return False
        # Later seats open wider, so every seat at or after the earliest one raises.
        return current_index >= earliest_index

    def resolve_earliest(
        self, label: str, table_size: TableSize, strategy: str = DEFAULT_STRATEGY
    ) -> str | None:
        return self.ranges.earliest_position(label, table_size, strategy)

    def position_score(
        self,
        label: str,
        selected: str | None,
        table_size: TableSize,
        strategy: str = DEFAULT_STRATEGY,
    ) -> float:
        """How close a selected earliest seat is to the prescribed one (0-1).

        Exact picks score 1; otherwise the score decays linearly with seat
        distance so that the farthest possible pick scores 0.
        """
        if is_blind(selected):
            return 0.0

        correct = self.resolve_earliest(label, table_size, strategy)
        if correct is None:
            return 1.0 if selected is None else 0.0
        if selected is None:
            return 0.0

        correct_index = index_of(correct, table_size)
        selected_index = index_of(selected, table_size)
        if correct_index is None or selected_index is None:
            return 0.0
        if correct_index == selected_index:
            return 1.0

        max_diff = LAYOUTS[table_size].num_positions - 1
        return max(0.0, 1 - abs(correct_index - selected_index) / max_diff)

    def evaluate(
        self,
        label: str,
        position: str,
        table_size: TableSize,
        decision: Decision,
        strategy: str = DEFAULT_STRATEGY,
    ) -> EvaluationResult:
        """Grade a decision for a hand dealt at ``position``."""
        if is_blind(position):
            return EvaluationResult(
                is_correct=True,
                partially_correct=False,
                correct_answer=Decision(raise_decision=False, earliest_position=None),
                message=f"The {position} position is not evaluated in a raise-first-in strategy.",
            )

        should_raise = self.resolve_raise(label, position, table_size, strategy)
        correct_answer = Decision(
            raise_decision=should_raise,
            earliest_position=self.resolve_earliest(label, table_size, strategy),
        )
        score = self.position_score(label, decision.earliest_position, table_size, strategy)

        # A wrong raise/fold call is wrong no matter how close the seat pick was.
        if decision.raise_decision != should_raise:
            return EvaluationResult(
                is_correct=False,
                partially_correct=False,
                correct_answer=correct_answer,
                position_score=score,
            )

        is_correct = score > self.scoring.correct_threshold
        return EvaluationResult(
            is_correct=is_correct,
            partially_correct=score > self.scoring.partial_threshold and not is_correct,
            correct_answer=correct_answer,
            position_score=score,
        )

    def evaluate_cards(
        self,
        cards: Sequence[Card],
        position: str,
        table_size: TableSize,
        decision: Decision,
        strategy: str = DEFAULT_STRATEGY,
    ) -> EvaluationResult:
        """Label two dealt cards, then grade the decision."""
        return self.evaluate(hand_label_of(cards), position, table_size, decision, strategy)
