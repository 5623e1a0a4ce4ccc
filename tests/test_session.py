"""Tests for session recording."""

from rfitrainer.card import card
from rfitrainer.evaluator import Decision, EvaluationResult
from rfitrainer.session import HandDecision, Session, SessionStore


def _entry(raised: bool, correct: bool, label_cards=("As", "Ah")) -> HandDecision:
    result = EvaluationResult(
        is_correct=correct,
        partially_correct=False,
        correct_answer=Decision(True, "LJ"),
    )
    cards = [card(c) for c in label_cards]
    return HandDecision.from_result(cards, "CO", Decision(raised, "LJ" if raised else None), result)


class TestHandDecision:
    def test_from_result(self):
        entry = _entry(raised=True, correct=True, label_cards=("Kd", "Ad"))
        assert entry.hand_label == "AKs"
        assert entry.position == "CO"
        assert entry.correct_answer == Decision(True, "LJ")

    def test_dict_round_trip(self):
        entry = _entry(raised=False, correct=False)
        assert HandDecision.from_dict(entry.to_dict()) == entry


class TestSession:
    def test_empty_session(self):
        session = Session.start(6, "GTO")
        assert session.id.startswith("session_")
        assert session.accuracy == 0
        assert session.raise_percentage == 0

    def test_score_and_percentages(self):
        session = Session.start(8, "GTO")
        session.add(_entry(raised=True, correct=True))
        session.add(_entry(raised=False, correct=False))
        session.add(_entry(raised=True, correct=True))
        assert session.correct == 2
        assert session.total == 3
        assert session.accuracy == 67
        assert session.raise_percentage == 67
        assert len(session.incorrect_decisions) == 1


class TestSessionStore:
    def test_add_without_session(self, tmp_path):
        store = SessionStore(tmp_path / "session.json")
        assert store.current() is None
        assert store.add(_entry(True, True)) is None

    def test_persists_decisions(self, tmp_path):
        store = SessionStore(tmp_path / "nested" / "session.json")
        started = store.init(6, "GTO")
        store.add(_entry(True, True))
        updated = store.add(_entry(False, False))

        assert updated.total == 2
        loaded = store.current()
        assert loaded.id == started.id
        assert loaded.correct == 1
        assert loaded.total == 2
        assert loaded.decisions[0].hand_label == "AA"

    def test_clear(self, tmp_path):
        store = SessionStore(tmp_path / "session.json")
        store.init(6, "GTO")
        store.clear()
        assert store.current() is None
        store.clear()

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{oops")
        assert SessionStore(path).current() is None
