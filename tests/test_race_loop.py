import pytest

from animal_derby.engine import (
    ManualClock,
    RaceClock,
    RaceSession,
    RaceStatus,
    TelemetryCollector,
    position_pct,
    run_headless,
)
from animal_derby.engine.race_loop import MAX_VISUAL_DISTANCE, TRACK_WIDTH_PCT


def test_race_clock_applies_multiplier_and_clamps():
    clock = ManualClock()
    race_clock = RaceClock(speed_multiplier=1.5, clock=clock)
    assert race_clock.elapsed() == 0.0

    race_clock.start()
    clock.advance(2.0)
    assert race_clock.elapsed() == pytest.approx(3.0)
    assert not race_clock.expired()

    clock.advance(100.0)
    assert race_clock.elapsed() == 20.0
    assert race_clock.expired()


def test_race_clock_rejects_non_positive_multiplier():
    with pytest.raises(ValueError):
        RaceClock(speed_multiplier=0)


def test_position_pct_is_capped_at_track_width():
    assert position_pct(0) == 0.0
    assert position_pct(MAX_VISUAL_DISTANCE / 2) == pytest.approx(TRACK_WIDTH_PCT / 2)
    assert position_pct(MAX_VISUAL_DISTANCE) == pytest.approx(TRACK_WIDTH_PCT)
    assert position_pct(MAX_VISUAL_DISTANCE * 2) == TRACK_WIDTH_PCT


def test_tick_requires_started_session():
    session = RaceSession(clock=ManualClock())
    with pytest.raises(RuntimeError):
        session.tick()


def test_session_runs_until_race_time_is_used_up():
    clock = ManualClock()
    session = RaceSession(clock=clock)
    session.start()

    clock.advance(10.0)
    snapshot = session.tick()
    assert snapshot.status is RaceStatus.RUNNING
    assert snapshot.by_id()["cheetah"].distance == 2100
    assert snapshot.leaderboard()[0].competitor_id == "cheetah"

    clock.advance(10.0)
    snapshot = session.tick()
    assert snapshot.status is RaceStatus.FINISHED
    assert snapshot.time == 20.0
    with pytest.raises(RuntimeError):
        session.start()

    session.reset()
    assert session.status is RaceStatus.READY


def test_distance_match_locks_finishers_on_the_line():
    clock = ManualClock()
    session = RaceSession(target_distance=500, speed_multiplier=1.0, clock=clock, narrate=False)
    session.start()
    clock.advance(2.0)
    racers = session.tick().by_id()

    rabbit = racers["rabbit"]
    assert rabbit.finished
    assert rabbit.finish_time == pytest.approx(2.0)
    assert rabbit.position_pct == pytest.approx(position_pct(500))

    cheetah = racers["cheetah"]
    assert not cheetah.finished
    assert cheetah.distance == 240
    assert session.winner_id() == "rabbit"


def test_distance_target_must_be_positive():
    with pytest.raises(ValueError):
        RaceSession(target_distance=0)


def test_narrative_cues_fire_once():
    clock = ManualClock()
    session = RaceSession(clock=clock)
    session.start()
    clock.advance(5.5)
    first = session.tick().by_id()
    assert [cue.key for cue in first["rabbit"].cues] == ["rabbit_sleep"]
    assert [cue.key for cue in first["cheetah"].cues] == ["cheetah_sprint1"]

    clock.advance(0.5)
    second = session.tick().by_id()
    assert all(not racer.cues for racer in second.values())


def test_snapshot_at_does_not_consume_cues():
    session = RaceSession(clock=ManualClock())
    snapshot = session.snapshot_at(12)
    assert snapshot.by_id()["rabbit"].distance == 1684
    assert all(not racer.cues for racer in snapshot.racers)


def test_run_headless_records_telemetry():
    collector = TelemetryCollector()
    snapshots = run_headless(speed_multiplier=2.0, dt=0.5, telemetry=collector)
    assert snapshots[-1].status is RaceStatus.FINISHED
    assert snapshots[-1].by_id()["cheetah"].distance == 3950
    assert len(collector.export()) == len(snapshots)

    frames = collector.to_json_ready()
    assert frames[0]["racers"][0]["competitor_id"] == "cheetah"
    assert frames[1]["racers"][0]["distance_delta"] == 120
