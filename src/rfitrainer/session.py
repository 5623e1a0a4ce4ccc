"""Training session log and score keeping."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .card import Card, hand_label_of
from .evaluator import Decision, EvaluationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandDecision:
    """One graded hand, as stored in the session log."""

    cards: list[Card]
    hand_label: str
    position: str
    user_decision: Decision
    correct_answer: Decision
    is_correct: bool
    partially_correct: bool = False

    @classmethod
    def from_result(
        cls,
        cards: list[Card],
        position: str,
        user_decision: Decision,
        result: EvaluationResult,
    ) -> HandDecision:
        return cls(
            cards=list(cards),
            hand_label=hand_label_of(cards),
            position=position,
            user_decision=user_decision,
            correct_answer=result.correct_answer,
            is_correct=result.is_correct,
            partially_correct=result.partially_correct,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cards": [c.code for c in self.cards],
            "hand_label": self.hand_label,
            "position": self.position,
            "user_decision": asdict(self.user_decision),
            "correct_answer": asdict(self.correct_answer),
            "is_correct": self.is_correct,
            "partially_correct": self.partially_correct,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HandDecision:
        return cls(
            cards=[Card.from_str(c) for c in data["cards"]],
            hand_label=data["hand_label"],
            position=data["position"],
            user_decision=Decision(**data["user_decision"]),
            correct_answer=Decision(**data["correct_answer"]),
            is_correct=data["is_correct"],
            partially_correct=data.get("partially_correct", False),
        )


@dataclass
class Session:
    """Decisions made in one sitting plus the running score."""

    id: str
    date: str
    table_size: int
    strategy_name: str
    decisions: list[HandDecision] = field(default_factory=list)
    correct: int = 0
    total: int = 0

    @classmethod
    def start(cls, table_size: int, strategy_name: str) -> Session:
        now = datetime.now(timezone.utc)
        return cls(
            id=f"session_{int(now.timestamp() * 1000)}",
            date=now.isoformat(),
            table_size=table_size,
            strategy_name=strategy_name,
        )

    def add(self, decision: HandDecision) -> None:
        self.decisions.append(decision)
        self.total += 1
        if decision.is_correct:
            self.correct += 1

    @property
    def accuracy(self) -> int:
        """Correct answers as a rounded percentage."""
        return round(self.correct / self.total * 100) if self.total else 0

    @property
    def raise_percentage(self) -> int:
        """Share of hands the user chose to raise, as a rounded percentage."""
        if not self.total:
            return 0
        raised = sum(1 for d in self.decisions if d.user_decision.raise_decision)
        return round(raised / self.total * 100)

    @property
    def incorrect_decisions(self) -> list[HandDecision]:
        return [d for d in self.decisions if not d.is_correct]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "table_size": self.table_size,
            "strategy_name": self.strategy_name,
            "decisions": [d.to_dict() for d in self.decisions],
            "score": {"correct": self.correct, "total": self.total},
            "raise_percentage": self.raise_percentage,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        score = data.get("score", {})
        return cls(
            id=data["id"],
            date=data["date"],
            table_size=data["table_size"],
            strategy_name=data["strategy_name"],
            decisions=[HandDecision.from_dict(d) for d in data.get("decisions", [])],
            correct=score.get("correct", 0),
            total=score.get("total", 0),
        )


class SessionStore:
    """Keeps the current session in a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def init(self, table_size: int, strategy_name: str) -> Session:
        """Start a fresh session, replacing any stored one."""
        session = Session.start(table_size, strategy_name)
        self._write(session)
        return session

    def current(self) -> Session | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                return Session.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def add(self, decision: HandDecision) -> Session | None:
        """Append a decision to the stored session; None if there is none."""
        session = self.current()
        if session is None:
            return None
        session.add(decision)
        self._write(session)
        logger.debug(
            "Session %s: %d/%d correct, raise %d%%",
            session.id, session.correct, session.total, session.raise_percentage,
        )
        return session

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def _write(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(session.to_dict(), f, indent=2)
