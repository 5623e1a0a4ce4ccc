"""Table seats and their preflop acting order.

Two table sizes are supported. Each has a fixed seat sequence from the first
seat to act preflop through the button, followed by SB then BB. A seat's
index in that sequence orders it: a higher index acts later and is the
stronger position.
"""

from dataclasses import dataclass
from enum import StrEnum

TableSize = int

SUPPORTED_TABLE_SIZES: tuple[TableSize, ...] = (6, 8)


class Position(StrEnum):
    """Seat names used across both table sizes."""

    UTG = "UTG"
    UTG1 = "UTG1"
    LJ = "LJ"
    HJ = "HJ"
    CO = "CO"
    BTN = "BTN"
    SB = "SB"
    BB = "BB"

    @property
    def label(self) -> str:
        """Human-readable position name."""
        return {
            Position.UTG: "Under the Gun (UTG)",
            Position.UTG1: "UTG+1",
            Position.LJ: "Lojack (LJ)",
            Position.HJ: "Hijack (HJ)",
            Position.CO: "Cutoff (CO)",
            Position.BTN: "Button (BTN)",
            Position.SB: "Small Blind (SB)",
            Position.BB: "Big Blind (BB)",
        }[self]

    @property
    def short(self) -> str:
        """Short display name (e.g. 'UTG+1', 'BTN')."""
        return "UTG+1" if self is Position.UTG1 else self.value

    @property
    def is_blind(self) -> bool:
        return self in (Position.SB, Position.BB)


@dataclass(frozen=True)
class Seat:
    """One seat of a table layout."""

    position: Position
    order_index: int
    description: str

    @property
    def name(self) -> str:
        return self.position.value


@dataclass(frozen=True)
class TableLayout:
    """Seat sequence for one table size.

    ``range_field`` names the range-entry attribute holding the earliest
    raising seat for this size.
    """

    size: TableSize
    seats: tuple[Seat, ...]
    range_field: str

    @property
    def names(self) -> list[str]:
        return [seat.name for seat in self.seats]

    @property
    def num_positions(self) -> int:
        return len(self.seats)

    def index_of(self, name: str | None) -> int | None:
        """0-based index of a seat, or None if the name is not at this table."""
        for i, seat in enumerate(self.seats):
            if seat.name == name:
                return i
        return None

    def non_blind(self) -> list[str]:
        return [seat.name for seat in self.seats if not seat.position.is_blind]


def _layout(size: TableSize, range_field: str, seats: list[tuple[Position, str]]) -> TableLayout:
    return TableLayout(
        size=size,
        seats=tuple(
            Seat(position=pos, order_index=i + 1, description=desc)
            for i, (pos, desc) in enumerate(seats)
        ),
        range_field=range_field,
    )


LAYOUTS: dict[TableSize, TableLayout] = {
    6: _layout(6, "earliest_6max", [
        (Position.LJ, "12 o'clock position"),
        (Position.HJ, "Hijack"),
        (Position.CO, "Cutoff"),
        (Position.BTN, "6 o'clock position"),
        (Position.SB, "Small Blind"),
        (Position.BB, "Big Blind"),
    ]),
    8: _layout(8, "earliest_8max", [
        (Position.UTG, "12 o'clock position"),
        (Position.UTG1, "Under the Gun+1"),
        (Position.LJ, "Lojack"),
        (Position.HJ, "Hijack"),
        (Position.CO, "6 o'clock position"),
        (Position.BTN, "Button - Dealer"),
        (Position.SB, "Small Blind"),
        (Position.BB, "Big Blind"),
    ]),
}


def layout_for(table_size: TableSize) -> TableLayout:
    """Seat layout for a table size; raises ValueError for unsupported sizes."""
    try:
        return LAYOUTS[table_size]
    except KeyError:
        raise ValueError(
            f"table_size must be one of {SUPPORTED_TABLE_SIZES}, got {table_size}"
        ) from None


def index_of(name: str | None, table_size: TableSize) -> int | None:
    """Index of a seat at the given table, or None when unknown."""
    layout = LAYOUTS.get(table_size)
    if layout is None:
        return None
    return layout.index_of(name)


def positions_for(table_size: TableSize) -> list[str]:
    """All seat names for a table size, earliest to act first, blinds last."""
    return layout_for(table_size).names


def non_blind_positions(table_size: TableSize) -> list[str]:
    """Seats that can raise first in (everything except SB and BB)."""
    return layout_for(table_size).non_blind()


def is_blind(name: str | None) -> bool:
    return name in (Position.SB, Position.BB)


def position_at(index: int, table_size: TableSize) -> str:
    """Seat name at an index, wrapping around the table."""
    names = positions_for(table_size)
    return names[index % len(names)]


def is_earlier(pos1: str, pos2: str, table_size: TableSize) -> bool:
    """True if pos1 acts before pos2. Unknown names raise ValueError."""
    i1 = index_of(pos1, table_size)
    i2 = index_of(pos2, table_size)
    if i1 is None or i2 is None:
        raise ValueError(f"Invalid position name: {pos1 if i1 is None else pos2}")
    return i1 < i2


def next_hero_position(current: str, table_size: TableSize) -> str:
    """Next seat for the hero between training hands.

    The hero walks backwards from the button through the non-blind seats
    (BTN, CO, HJ, LJ, ... UTG) and wraps back to BTN.
    """
    rotation = list(reversed(non_blind_positions(table_size)))
    if current not in rotation:
        return rotation[0]
    return rotation[(rotation.index(current) + 1) % len(rotation)]
