"""rfitrainer - Preflop raise-first-in decision trainer."""

__version__ = "0.1.0"

from .card import Card, Rank, Suit, all_hand_labels, card, hand_label, hand_label_of, hand_type
from .config import Config, ScoringConfig, get_config
from .deck import Deck
from .evaluator import Decision, DecisionEvaluator, EvaluationResult
from .notes import JsonNoteStore, MigrationReport, NoteColor, NoteStore, PlayerNote, migrate_notes
from .position import (
    Position,
    TableLayout,
    index_of,
    is_blind,
    layout_for,
    next_hero_position,
    non_blind_positions,
)
from .ranges import RangeBook, RangeEntry, RangeFileError, load_strategy_file
from .session import HandDecision, Session, SessionStore
from .trainer import Feedback, Trainer

__all__ = [
    "Card",
    "Config",
    "Deck",
    "Decision",
    "DecisionEvaluator",
    "EvaluationResult",
    "Feedback",
    "HandDecision",
    "JsonNoteStore",
    "MigrationReport",
    "NoteColor",
    "NoteStore",
    "PlayerNote",
    "Position",
    "RangeBook",
    "RangeEntry",
    "RangeFileError",
    "Rank",
    "ScoringConfig",
    "Session",
    "SessionStore",
    "Suit",
    "TableLayout",
    "Trainer",
    "all_hand_labels",
    "card",
    "get_config",
    "hand_label",
    "hand_label_of",
    "hand_type",
    "index_of",
    "is_blind",
    "layout_for",
    "load_strategy_file",
    "migrate_notes",
    "next_hero_position",
    "non_blind_positions",
]
