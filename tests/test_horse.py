"""Tests for horses and the roster."""

import time

import numpy as np
import pytest

from horserace.config import RaceConfig
from horserace.race.horse import Horse
from horserace.race.roster import Roster
from horserace.scoring.results import RaceResult


def _quick_config(**overrides) -> RaceConfig:
    values = dict(step_interval_s=0.001, refresh_interval_s=0.002, settle_period_s=0.0, start_delay_s=0.0)
    values.update(overrides)
    return RaceConfig(**values)


class TestHorse:
    """Test a single horse."""

    def test_horse_creation(self):
        """Test horse starts at the gate."""
        horse = Horse(1, RaceResult())

        assert horse.position == 0
        assert horse.steps == 0
        assert not horse.finished
        assert not horse.is_alive

    def test_constant_stride_reaches_finish(self):
        """Test a +2 stride finishes in exactly 25 steps."""
        result = RaceResult()
        horse = Horse(1, result, config=_quick_config(), stride=lambda: 2)

        horse.start()
        assert horse.join(timeout=5.0)

        assert horse.position == 50
        assert horse.steps == 25
        assert horse.finished
        assert result.finish_order == (1,)

    def test_position_is_clamped(self):
        """Test overshooting strides stop exactly at the finish line."""
        result = RaceResult()
        horse = Horse(4, result, config=_quick_config(), stride=lambda: 7)

        horse.run()

        assert horse.position == 50
        assert horse.steps == 8
        assert result.finish_order == (4,)

    def test_run_records_finish_once(self):
        """Test a finished horse appears in the result exactly once."""
        result = RaceResult()
        horse = Horse(2, result, config=_quick_config(finish_line=5), stride=lambda: 1)

        horse.run()

        assert result.finish_order == (2,)

    def test_second_run_does_not_record_again(self):
        """Test calling run twice leaves a single finish entry."""
        result = RaceResult()
        horse = Horse(1, result, config=_quick_config(), stride=lambda: 50)

        horse.run()
        horse.run()

        assert result.finish_order == (1,)
        assert horse.steps == 1

    def test_start_after_run_does_not_record_again(self):
        """Test starting the thread after a direct run adds no second finish."""
        result = RaceResult()
        horse = Horse(2, result, config=_quick_config(), stride=lambda: 50)

        horse.run()
        horse.start()
        assert horse.join(timeout=2.0)

        assert result.finish_order == (2,)
        assert horse.finished

    def test_random_strides_stay_in_range(self):
        """Test default strides are drawn from [0, max_stride]."""
        horse = Horse(1, RaceResult(), rng=np.random.default_rng(3))

        strides = {horse._random_stride() for _ in range(500)}

        assert strides == {0, 1, 2}

    def test_positions_are_monotonic(self):
        """Test sampled positions never decrease or pass the finish line."""
        horse = Horse(1, RaceResult(), config=_quick_config(step_interval_s=0.002))

        horse.start()
        samples = []
        while horse.is_alive:
            samples.append(horse.position)
            time.sleep(0.0005)
        horse.join()
        samples.append(horse.position)

        assert samples == sorted(samples)
        assert max(samples) <= 50
        assert samples[-1] == 50

    def test_stopped_horse_does_not_finish(self):
        """Test a horse stopped short of the line records nothing."""
        result = RaceResult()
        horse = Horse(1, result, config=_quick_config(step_interval_s=10.0), stride=lambda: 1)

        horse.start()
        time.sleep(0.05)
        horse.stop()

        assert horse.join(timeout=2.0)
        assert horse.position == 1
        assert not horse.finished
        assert len(result) == 0

    def test_stop_after_reaching_line_still_records(self):
        """Test a stop during the last pause keeps the finish."""
        result = RaceResult()
        horse = Horse(1, result, config=_quick_config(step_interval_s=10.0), stride=lambda: 50)

        horse.start()
        time.sleep(0.05)
        horse.stop()

        assert horse.join(timeout=2.0)
        assert horse.finished
        assert result.finish_order == (1,)


class TestRoster:
    """Test roster creation and snapshots."""

    def test_roster_create(self):
        """Test horses are numbered 1..N."""
        roster = Roster.create(4, RaceResult(), config=_quick_config())

        assert len(roster) == 4
        assert [horse.horse_id for horse in roster] == [1, 2, 3, 4]
        assert roster.get_horse(3).horse_id == 3
        assert roster.get_horse(9) is None

    def test_roster_membership_is_fixed(self):
        """Test the roster exposes no way to change its horses."""
        roster = Roster.create(2, RaceResult())

        assert isinstance(roster.horses, tuple)
        assert not hasattr(roster, "append")
        with pytest.raises(TypeError):
            roster.horses[0] = None

    def test_snapshot_sorted_by_id(self):
        """Test snapshots list horses by ascending ID regardless of roster order."""
        result = RaceResult()
        horses = [Horse(horse_id, result) for horse_id in (3, 1, 2)]
        roster = Roster(horses, finish_line=50)

        snapshot = roster.snapshot()

        assert snapshot.horse_ids == (1, 2, 3)
        assert list(snapshot) == [(1, 0), (2, 0), (3, 0)]
        assert not snapshot.race_completed

    def test_snapshot_is_read_only(self):
        """Test snapshot positions cannot be written."""
        snapshot = Roster.create(2, RaceResult()).snapshot()

        with pytest.raises(ValueError):
            snapshot.positions[0] = 50

    def test_snapshot_completion(self):
        """Test completion is detected once every horse is at the line."""
        result = RaceResult()
        config = _quick_config(finish_line=4)
        roster = Roster.create(3, result, config=config, stride_factory=lambda horse_id: lambda: 4)

        for horse in roster:
            horse.run()
        snapshot = roster.snapshot()

        assert snapshot.race_completed
        assert snapshot.finished_count == 3

    def test_seeded_rosters_are_reproducible(self):
        """Test the same seed gives the same stride streams."""
        config = RaceConfig(seed=1234)
        first = Roster.create(3, RaceResult(), config=config)
        second = Roster.create(3, RaceResult(), config=config)

        for a, b in zip(first, second):
            assert [a._random_stride() for _ in range(30)] == [b._random_stride() for _ in range(30)]
