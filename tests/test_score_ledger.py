"""Tests for score_ledger.py."""

import json
import os
import tempfile

from score_ledger import SETS_FOR_LEVEL_UP, STREAK_FOR_TICKET, ScoreLedger


class TestRecord:
    def test_streak_counts_perfect_results(self):
        ledger = ScoreLedger()
        for i in range(1, 4):
            assert ledger.record(True).streak == i

    def test_imperfect_resets_streak(self):
        ledger = ScoreLedger()
        ledger.record(True)
        ledger.record(True)
        update = ledger.record(False)
        assert update.streak == 0
        assert ledger.streak == 0
        assert not update.ticket_awarded

    def test_ticket_after_full_streak(self):
        ledger = ScoreLedger()
        updates = [ledger.record(True) for _ in range(STREAK_FOR_TICKET)]
        assert not any(u.ticket_awarded for u in updates[:-1])
        assert updates[-1].ticket_awarded
        assert ledger.tickets == 1
        assert ledger.streak == 0
        assert ledger.difficulty_level == 0

    def test_level_up_after_perfect_sets(self):
        ledger = ScoreLedger()
        updates = [ledger.record(True) for _ in range(STREAK_FOR_TICKET * SETS_FOR_LEVEL_UP)]
        assert updates[-1].leveled_up
        assert ledger.difficulty_level == 1
        assert ledger.tickets == SETS_FOR_LEVEL_UP
        assert ledger.perfect_sets == 0

    def test_reset_streak(self):
        ledger = ScoreLedger()
        ledger.record(True)
        ledger.reset_streak()
        assert ledger.streak == 0


class TestPersistence:
    def test_round_trip_without_streak(self):
        ledger = ScoreLedger(tickets=3, difficulty_level=2, perfect_sets=1, streak=7)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "save.json")
            ledger.save(path)
            with open(path, encoding="utf-8") as f:
                assert "streak" not in json.load(f)
            loaded = ScoreLedger.load(path)
        assert loaded == ScoreLedger(tickets=3, difficulty_level=2, perfect_sets=1)

    def test_missing_file_starts_fresh(self):
        with tempfile.TemporaryDirectory() as tmp:
            assert ScoreLedger.load(os.path.join(tmp, "none.json")) == ScoreLedger()

    def test_corrupt_file_starts_fresh(self, caplog):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "save.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            assert ScoreLedger.load(path) == ScoreLedger()
        assert "Failed to load saved data" in caplog.text

    def test_wrong_shape_starts_fresh(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "save.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([1, 2, 3], f)
            assert ScoreLedger.load(path) == ScoreLedger()
