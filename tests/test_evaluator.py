"""Tests for decision grading."""

import pytest
from rfitrainer.card import all_hand_labels, card
from rfitrainer.config import ScoringConfig
from rfitrainer.evaluator import Decision, DecisionEvaluator
from rfitrainer.position import index_of, non_blind_positions
from rfitrainer.ranges import RangeBook, RangeEntry


@pytest.fixture
def evaluator():
    return DecisionEvaluator()


@pytest.fixture
def fixture_evaluator():
    """Small hand-made table for exact checks."""
    book = RangeBook({
        "GTO": {
            "AA": RangeEntry(raises=True, earliest_6max="LJ", earliest_8max="UTG"),
            "K7s": RangeEntry(raises=True, earliest_6max="CO", earliest_8max="CO"),
            "A5o": RangeEntry(raises=True, earliest_6max="BTN", earliest_8max=None),
            "72o": RangeEntry(raises=False),
            "BAD": RangeEntry(raises=True, earliest_6max="UTG", earliest_8max="XX"),
        }
    })
    return DecisionEvaluator(ranges=book)


class TestBlindShortCircuit:
    @pytest.mark.parametrize("blind", ["SB", "BB"])
    @pytest.mark.parametrize("table_size", [6, 8])
    def test_any_answer_is_accepted(self, evaluator, blind, table_size):
        decisions = [
            Decision(True, "BTN"),
            Decision(False, None),
            Decision(True, None),
            Decision(False, "SB"),
        ]
        for label in ("AA", "72o", "K7s", "ZZ"):
            for decision in decisions:
                result = evaluator.evaluate(label, blind, table_size, decision)
                assert result.is_correct
                assert not result.partially_correct
                assert result.correct_answer == Decision(False, None)
                assert blind in result.message

    def test_resolve_raise_is_false_for_blinds(self, evaluator):
        assert not evaluator.resolve_raise("AA", "SB", 6)
        assert not evaluator.resolve_raise("AA", "BB", 8)


class TestResolveRaise:
    def test_monotonic_in_position(self, evaluator):
        for table_size in (6, 8):
            for label in all_hand_labels():
                earliest = evaluator.resolve_earliest(label, table_size)
                for seat in non_blind_positions(table_size):
                    expected = earliest is not None and (
                        index_of(seat, table_size) >= index_of(earliest, table_size)
                    )
                    assert evaluator.resolve_raise(label, seat, table_size) == expected

    def test_fold_hand_never_raised(self, fixture_evaluator):
        for label in ("72o", "QQQ", "missing"):
            assert fixture_evaluator.resolve_earliest(label, 6) is None
            for seat in non_blind_positions(6):
                assert not fixture_evaluator.resolve_raise(label, seat, 6)

    def test_missing_earliest_for_table_size(self, fixture_evaluator):
        assert fixture_evaluator.resolve_raise("A5o", "BTN", 6)
        assert not fixture_evaluator.resolve_raise("A5o", "BTN", 8)
        assert fixture_evaluator.resolve_earliest("A5o", 8) is None

    def test_unknown_positions_fold(self, fixture_evaluator):
        assert not fixture_evaluator.resolve_raise("AA", "UTG", 6)
        assert not fixture_evaluator.resolve_raise("AA", "XYZ", 8)
        assert not fixture_evaluator.resolve_raise("BAD", "BTN", 6)
        assert not fixture_evaluator.resolve_raise("AA", "BTN", 9)

    def test_unknown_strategy_folds(self, evaluator):
        assert not evaluator.resolve_raise("AA", "BTN", 6, "exploit")


class TestPositionScore:
    def test_exact_match(self, evaluator):
        for table_size in (6, 8):
            for label in ("AA", "K7s", "A9o", "JTs"):
                correct = evaluator.resolve_earliest(label, table_size)
                assert evaluator.position_score(label, correct, table_size) == 1.0

    def test_never_on_raisable_hand(self, evaluator):
        assert evaluator.position_score("AA", None, 6) == 0.0

    def test_never_on_fold_hand(self, evaluator):
        assert evaluator.position_score("72o", None, 6) == 1.0
        assert evaluator.position_score("72o", "BTN", 6) == 0.0

    def test_blind_selection_scores_zero(self, evaluator):
        assert evaluator.position_score("72o", "SB", 6) == 0.0
        assert evaluator.position_score("AA", "BB", 8) == 0.0

    def test_linear_decay(self, fixture_evaluator):
        # 6-max: five steps between first and last seat
        assert fixture_evaluator.position_score("K7s", "HJ", 6) == pytest.approx(0.8)
        assert fixture_evaluator.position_score("K7s", "LJ", 6) == pytest.approx(0.6)
        assert fixture_evaluator.position_score("AA", "BTN", 6) == pytest.approx(0.4)
        # 8-max: seven steps
        assert fixture_evaluator.position_score("AA", "UTG1", 8) == pytest.approx(6 / 7)
        assert fixture_evaluator.position_score("AA", "BTN", 8) == pytest.approx(2 / 7)

    def test_unknown_selection(self, fixture_evaluator):
        assert fixture_evaluator.position_score("AA", "UTG", 6) == 0.0
        assert fixture_evaluator.position_score("BAD", "BTN", 6) == 0.0


class TestEvaluate:
    def test_premium_raise_from_first_seat(self, evaluator):
        result = evaluator.evaluate("AA", "LJ", 6, Decision(True, "LJ"))
        assert result.is_correct
        assert not result.partially_correct
        assert result.correct_answer == Decision(True, "LJ")
        assert result.position_score == 1.0
        assert result.message is None

    def test_premium_fold_is_wrong(self, evaluator):
        result = evaluator.evaluate("AA", "LJ", 6, Decision(False, None))
        assert not result.is_correct
        assert not result.partially_correct
        assert result.correct_answer.raise_decision is True

    def test_trash_fold_is_correct(self, evaluator):
        for seat in non_blind_positions(8):
            result = evaluator.evaluate("72o", seat, 8, Decision(False, None))
            assert result.is_correct
            assert result.correct_answer == Decision(False, None)

    def test_one_seat_off_is_partial(self, evaluator):
        assert evaluator.resolve_earliest("K7s", 6) == "CO"
        result = evaluator.evaluate("K7s", "BTN", 6, Decision(True, "HJ"))
        assert result.position_score == pytest.approx(0.8)
        assert result.partially_correct
        assert not result.is_correct

    def test_wrong_raise_call_dominates_seat(self, evaluator):
        # Seat pick is exact, but K7s is not opened from HJ.
        result = evaluator.evaluate("K7s", "HJ", 6, Decision(True, "CO"))
        assert not result.is_correct
        assert not result.partially_correct
        assert result.correct_answer == Decision(False, "CO")

    def test_correct_fold_with_exact_seat(self, evaluator):
        result = evaluator.evaluate("K7s", "HJ", 6, Decision(False, "CO"))
        assert result.is_correct

    def test_far_seat_is_incorrect(self, evaluator):
        result = evaluator.evaluate("AA", "BTN", 6, Decision(True, "BTN"))
        assert result.position_score == pytest.approx(0.4)
        assert not result.is_correct
        assert not result.partially_correct

    def test_unknown_label_is_a_fold(self, evaluator):
        result = evaluator.evaluate("not-a-hand", "CO", 6, Decision(False, None))
        assert result.is_correct
        assert result.correct_answer == Decision(False, None)

    def test_unknown_position_is_a_fold(self, evaluator):
        result = evaluator.evaluate("AA", "UTG", 6, Decision(True, "LJ"))
        assert not result.is_correct
        assert result.correct_answer == Decision(False, "LJ")

    def test_custom_thresholds(self):
        lenient = DecisionEvaluator(scoring=ScoringConfig(correct_threshold=0.7, partial_threshold=0.3))
        result = lenient.evaluate("K7s", "BTN", 6, Decision(True, "HJ"))
        assert result.is_correct
        assert not result.partially_correct

    def test_evaluate_cards(self, evaluator):
        result = evaluator.evaluate_cards(
            [card("Ah"), card("As")], "UTG", 8, Decision(True, "UTG")
        )
        assert result.is_correct
