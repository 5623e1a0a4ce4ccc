"""Raise-first-in range tables.

Each strategy maps every canonical hand label ("AA", "AKs", "T9o", ...) to a
RangeEntry: whether the hand is ever opened, and the earliest seat it is
opened from at 6-handed and 8-handed tables. A hand opened from a seat is
opened from every later non-blind seat too.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Self

from .card import all_hand_labels, combo_count
from .position import LAYOUTS, TableSize, index_of, is_blind, layout_for

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = "GTO"


class RangeFileError(ValueError):
    """A strategy file could not be read or has the wrong shape."""


@dataclass(frozen=True)
class RangeEntry:
    """Prescribed opening policy for one hand label."""

    raises: bool
    earliest_6max: str | None = None
    earliest_8max: str | None = None

    def earliest_for(self, table_size: TableSize) -> str | None:
        """Earliest raising seat, or None if the hand is never opened."""
        layout = LAYOUTS.get(table_size)
        if not self.raises or layout is None:
            return None
        return getattr(self, layout.range_field)


# ── Built-in GTO opening tiers ──────────────────────────────
# Keyed by the seat a hand is first opened from. Later seats add to the
# hands opened by every earlier seat.

_GTO_6MAX: dict[str, set[str]] = {
    "LJ": {
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55", "44", "33", "22",
        "AKs", "AQs", "AJs", "ATs", "A9s", "A8s", "A7s", "A6s", "A5s", "A4s", "A3s", "A2s",
        "KQs", "KJs", "KTs", "K9s",
        "QJs", "QTs",
        "JTs",
        "T9s", "98s",
        "AKo", "AQo", "AJo",
        "KQo",
    },
    "HJ": {
        "K8s", "Q9s", "J9s", "T8s", "87s", "76s",
        "ATo", "KJo", "QJo",
    },
    "CO": {
        "K7s", "K6s", "K5s", "Q8s", "J8s", "97s", "86s", "65s", "54s",
        "A9o", "A8o", "KTo", "QTo", "JTo",
    },
    "BTN": {
        "K4s", "K3s", "K2s", "Q7s", "Q6s", "Q5s", "Q4s", "J7s", "T7s",
        "96s", "75s", "64s", "53s",
        "A7o", "A6o", "A5o", "A4o", "A3o", "A2o",
        "K9o", "K8o", "Q9o", "J9o", "T9o", "98o",
    },
}

_GTO_8MAX: dict[str, set[str]] = {
    "UTG": {
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66",
        "AKs", "AQs", "AJs", "ATs", "A5s",
        "KQs", "KJs", "KTs",
        "QJs",
        "JTs",
        "AKo", "AQo",
    },
    "UTG1": {
        "55", "A9s", "A4s", "QTs", "T9s",
        "AJo", "KQo",
    },
    "LJ": {
        "44", "33", "22",
        "A8s", "A7s", "A6s", "A3s", "A2s",
        "K9s", "98s",
        "ATo", "KJo",
    },
    "HJ": {
        "K8s", "Q9s", "J9s", "T8s", "87s", "76s",
        "QJo",
    },
    "CO": {
        "K7s", "K6s", "K5s", "Q8s", "J8s", "97s", "86s", "65s", "54s",
        "A9o", "A8o", "KTo", "QTo", "JTo",
    },
    "BTN": {
        "K4s", "K3s", "K2s", "Q7s", "Q6s", "Q5s", "Q4s", "J7s", "T7s",
        "96s", "75s", "64s", "53s",
        "A7o", "A6o", "A5o", "A4o", "A3o", "A2o",
        "K9o", "K8o", "Q9o", "J9o", "T9o", "98o",
    },
}


def _earliest_seat(label: str, tiers: dict[str, set[str]]) -> str | None:
    for seat, hands in tiers.items():
        if label in hands:
            return seat
    return None


def build_gto_ranges() -> dict[str, RangeEntry]:
    """Range entries for all 169 labels under the built-in GTO strategy."""
    ranges = {}
    for label in all_hand_labels():
        e6 = _earliest_seat(label, _GTO_6MAX)
        e8 = _earliest_seat(label, _GTO_8MAX)
        ranges[label] = RangeEntry(
            raises=e6 is not None or e8 is not None,
            earliest_6max=e6,
            earliest_8max=e8,
        )
    return ranges


# ── Strategy files ──────────────────────────────────────────


def _entry_from_json(label: str, data: object) -> RangeEntry:
    if not isinstance(data, dict) or not isinstance(data.get("raise"), bool):
        raise RangeFileError(f"Hand {label!r} needs a boolean 'raise' field")
    if not data["raise"]:
        # Seats are meaningless for a hand that is never opened.
        return RangeEntry(raises=False)
    e6 = data.get("earliestPosition6max")
    e8 = data.get("earliestPosition8max")
    for size, seat in ((6, e6), (8, e8)):
        if seat is None:
            continue
        if index_of(seat, size) is None:
            raise RangeFileError(f"Hand {label!r}: unknown {size}-max position {seat!r}")
        if is_blind(seat):
            raise RangeFileError(f"Hand {label!r}: {seat} cannot raise first in")
    return RangeEntry(raises=True, earliest_6max=e6, earliest_8max=e8)


def load_strategy_file(path: Path) -> dict[str, dict[str, RangeEntry]]:
    """Load strategies from a JSON range file.

    Expected shape::

        {"ranges": {"NAME": {"hands": {"AKs": {"raise": true,
            "earliestPosition6max": "LJ", "earliestPosition8max": "UTG"}}}}}
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RangeFileError(f"Cannot read strategy file {path}: {e}") from e

    ranges = data.get("ranges") if isinstance(data, dict) else None
    if not isinstance(ranges, dict):
        raise RangeFileError(f"{path}: missing 'ranges' object")

    strategies = {}
    for name, body in ranges.items():
        hands = body.get("hands") if isinstance(body, dict) else None
        if not isinstance(hands, dict):
            raise RangeFileError(f"{path}: strategy {name!r} has no 'hands' object")
        strategies[name] = {
            label: _entry_from_json(label, entry) for label, entry in hands.items()
        }
        logger.debug("Loaded strategy %s with %d hands from %s", name, len(hands), path)
    return strategies


# ── Read access ─────────────────────────────────────────────


class RangeBook:
    """Read-only collection of strategies, keyed case-insensitively."""

    def __init__(self, strategies: Mapping[str, Mapping[str, RangeEntry]]) -> None:
        self._strategies = MappingProxyType({
            name.upper(): MappingProxyType(dict(hands))
            for name, hands in strategies.items()
        })

    @classmethod
    def default(cls) -> Self:
        """The built-in GTO strategy only."""
        return cls({DEFAULT_STRATEGY: build_gto_ranges()})

    @classmethod
    def with_file(cls, path: Path) -> Self:
        """Built-in GTO plus every strategy in a JSON range file."""
        return cls({DEFAULT_STRATEGY: build_gto_ranges(), **load_strategy_file(path)})

    @property
    def strategy_names(self) -> list[str]:
        return list(self._strategies)

    def hands(self, strategy: str = DEFAULT_STRATEGY) -> Mapping[str, RangeEntry]:
        """All entries of a strategy; empty for unknown strategies."""
        found = self._strategies.get(strategy.upper())
        if found is None:
            logger.debug("Unknown strategy %r, treating every hand as a fold", strategy)
            return MappingProxyType({})
        return found

    def lookup(self, label: str, strategy: str = DEFAULT_STRATEGY) -> RangeEntry | None:
        return self.hands(strategy).get(label)

    def earliest_position(
        self, label: str, table_size: TableSize, strategy: str = DEFAULT_STRATEGY
    ) -> str | None:
        """Earliest seat the hand is opened from; None means never open it."""
        entry = self.lookup(label, strategy)
        if entry is None:
            return None
        return entry.earliest_for(table_size)

    def raising_labels(
        self, table_size: TableSize, position: str, strategy: str = DEFAULT_STRATEGY
    ) -> list[str]:
        """Labels correctly opened from a seat, in chart order."""
        current = layout_for(table_size).index_of(position)
        if current is None:
            raise ValueError(f"Invalid position for {table_size}-max: {position}")
        if is_blind(position):
            return []
        opened = []
        for label in all_hand_labels():
            earliest = index_of(self.earliest_position(label, table_size, strategy), table_size)
            if earliest is not None and current >= earliest:
                opened.append(label)
        return opened

    def range_percentage(
        self, table_size: TableSize, position: str, strategy: str = DEFAULT_STRATEGY
    ) -> float:
        """Share of the 1326 starting combos opened from a seat, in percent."""
        combos = sum(combo_count(label) for label in self.raising_labels(table_size, position, strategy))
        return combos / 1326 * 100
