"""Tests for position module."""

import pytest
from rfitrainer.position import (
    LAYOUTS,
    Position,
    index_of,
    is_blind,
    is_earlier,
    layout_for,
    next_hero_position,
    non_blind_positions,
    position_at,
    positions_for,
)


class TestPositionProperties:
    def test_blind_positions(self):
        assert Position.SB.is_blind
        assert Position.BB.is_blind
        assert not Position.BTN.is_blind

    def test_label_format(self):
        assert "UTG" in Position.UTG.label
        assert "Button" in Position.BTN.label
        assert "Big Blind" in Position.BB.label

    def test_short_format(self):
        assert Position.UTG1.short == "UTG+1"
        assert Position.BTN.short == "BTN"

    def test_compares_to_plain_strings(self):
        assert Position.CO == "CO"
        assert is_blind("SB")
        assert is_blind(Position.BB)
        assert not is_blind("CO")
        assert not is_blind(None)


class TestLayouts:
    def test_6max_order(self):
        assert positions_for(6) == ["LJ", "HJ", "CO", "BTN", "SB", "BB"]

    def test_8max_order(self):
        assert positions_for(8) == ["UTG", "UTG1", "LJ", "HJ", "CO", "BTN", "SB", "BB"]

    def test_blinds_are_last_two(self):
        for layout in LAYOUTS.values():
            assert layout.names[-2:] == ["SB", "BB"]
            assert layout.num_positions == layout.size

    def test_order_index_increasing(self):
        for layout in LAYOUTS.values():
            indices = [seat.order_index for seat in layout.seats]
            assert indices == list(range(1, layout.size + 1))

    def test_non_blind(self):
        assert non_blind_positions(6) == ["LJ", "HJ", "CO", "BTN"]
        assert non_blind_positions(8)[0] == "UTG"
        assert "SB" not in non_blind_positions(8)

    def test_unsupported_size(self):
        with pytest.raises(ValueError):
            layout_for(9)
        with pytest.raises(ValueError):
            non_blind_positions(2)


class TestIndexOf:
    def test_known_positions(self):
        assert index_of("LJ", 6) == 0
        assert index_of("BTN", 6) == 3
        assert index_of("LJ", 8) == 2
        assert index_of(Position.BB, 8) == 7

    def test_unknown_returns_none(self):
        assert index_of("UTG", 6) is None
        assert index_of("XYZ", 8) is None
        assert index_of(None, 6) is None
        assert index_of("BTN", 9) is None

    def test_is_earlier(self):
        assert is_earlier("LJ", "BTN", 6)
        assert not is_earlier("BTN", "CO", 6)
        assert is_earlier("SB", "BB", 8)

    def test_is_earlier_invalid(self):
        with pytest.raises(ValueError):
            is_earlier("UTG", "BTN", 6)

    def test_position_at_wraps(self):
        assert position_at(0, 6) == "LJ"
        assert position_at(6, 6) == "LJ"
        assert position_at(-1, 8) == "BB"


class TestHeroRotation:
    def test_6max_rotation(self):
        seen = ["BTN"]
        for _ in range(4):
            seen.append(next_hero_position(seen[-1], 6))
        assert seen == ["BTN", "CO", "HJ", "LJ", "BTN"]

    def test_8max_rotation(self):
        seen = ["BTN"]
        for _ in range(6):
            seen.append(next_hero_position(seen[-1], 8))
        assert seen == ["BTN", "CO", "HJ", "LJ", "UTG1", "UTG", "BTN"]

    def test_unknown_restarts_at_button(self):
        assert next_hero_position("SB", 6) == "BTN"
        assert next_hero_position("UTG", 6) == "BTN"
