"""Tests for the race result recorder."""

import threading

from horserace.scoring.results import RaceResult, RankEntry


class TestRaceResult:
    """Test finish recording and ranking."""

    def test_empty_result(self):
        """Test a new result has no finishers."""
        result = RaceResult()

        assert len(result) == 0
        assert result.ranking() == ()

    def test_ranking_follows_record_order(self):
        """Test ranks are 1-based in arrival order."""
        result = RaceResult()

        assert result.record_finish(3) == 1
        assert result.record_finish(1) == 2
        assert result.record_finish(2) == 3

        assert result.ranking() == (
            RankEntry(rank=1, horse_id=3),
            RankEntry(rank=2, horse_id=1),
            RankEntry(rank=3, horse_id=2),
        )
        assert result.finish_order == (3, 1, 2)

    def test_ranking_is_idempotent(self):
        """Test reading the ranking twice gives identical output."""
        result = RaceResult()
        for horse_id in (2, 4, 1):
            result.record_finish(horse_id)

        assert result.ranking() == result.ranking()
        assert result.format_ranking() == result.format_ranking()

    def test_format_ranking(self):
        """Test printable ranking lines."""
        result = RaceResult()
        for horse_id in (5, 2, 9, 1):
            result.record_finish(horse_id)

        lines = result.format_ranking()

        assert lines[0] == " 1st: 🐎 Horse 5"
        assert lines[1] == " 2nd: 🐎 Horse 2"
        assert lines[2] == " 3rd: 🐎 Horse 9"
        assert lines[3] == " 4th: 🐎 Horse 1"

    def test_records_are_timestamped_in_order(self):
        """Test finish timestamps never go backwards."""
        result = RaceResult()
        for horse_id in range(1, 20):
            result.record_finish(horse_id)

        times = [record.finished_at for record in result.records]
        assert times == sorted(times)


class TestConcurrentRecording:
    """Test recording from many threads."""

    def test_concurrent_writes_are_not_lost(self):
        """Test hundreds of simultaneous finishes give exactly one entry each."""
        result = RaceResult()
        writers = 300
        barrier = threading.Barrier(writers)

        def finish(horse_id):
            barrier.wait()
            result.record_finish(horse_id)

        threads = [
            threading.Thread(target=finish, args=(horse_id,))
            for horse_id in range(1, writers + 1)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        order = result.finish_order
        assert len(order) == writers
        assert sorted(order) == list(range(1, writers + 1))
        assert [entry.rank for entry in result.ranking()] == list(range(1, writers + 1))

    def test_happens_before_order_is_preserved(self):
        """Test a finish that happens before another is ranked ahead of it."""
        result = RaceResult()
        first_done = threading.Event()

        def first():
            result.record_finish(7)
            first_done.set()

        def second():
            first_done.wait()
            result.record_finish(4)

        threads = [threading.Thread(target=second), threading.Thread(target=first)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert result.finish_order == (7, 4)
