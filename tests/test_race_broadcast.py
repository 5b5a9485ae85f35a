from animal_derby.bot.commands import build_result_embed, format_records_table
from animal_derby.bot.race_broadcast import describe_cues, render_race_snapshot, render_track_board
from animal_derby.engine import DEFAULT_ROSTER, ManualClock, RaceSession, RaceStatus
from animal_derby.game import AllRecordsRound
from animal_derby.practice import PracticeRecord


def test_track_board_has_one_lane_per_animal():
    snapshot = RaceSession(clock=ManualClock()).snapshot_at(10)
    lines = render_track_board(snapshot, bar_width=20).splitlines()
    assert len(lines) == len(DEFAULT_ROSTER)
    assert lines[0].startswith(" 1 🐆 Cheetah")
    assert lines[0].endswith("2100m")
    assert "[" + "=" * 12 + "." * 8 + "]" in lines[0]


def test_finished_racers_show_their_time():
    session = RaceSession(target_distance=500, clock=ManualClock(), narrate=False)
    board = render_track_board(session.snapshot_at(5))
    rabbit_line = [line for line in board.splitlines() if "Rabbit" in line][0]
    assert rabbit_line.endswith("2.0s")


def test_race_embed_fields_and_status():
    clock = ManualClock()
    session = RaceSession(clock=clock)
    session.start()
    clock.advance(20.0)
    snapshot = session.tick()
    assert snapshot.status is RaceStatus.FINISHED

    embed = render_race_snapshot("Race", snapshot, describe_cues(snapshot), target_distance=1500)
    assert "Finished!" in embed.title
    assert "1500m" in embed.description
    assert [field.name for field in embed.fields] == ["Track", "Highlights"]
    assert "Zzz" in embed.fields[1].value


def test_result_embed_and_records_table():
    cheetah = DEFAULT_ROSTER.get_competitor("cheetah")
    embed = build_result_embed(cheetah, correct=True, message="nice", score=10)
    assert "Correct" in embed.title
    assert embed.fields[0].value == "⭐ 10"

    quiz = AllRecordsRound(records=[PracticeRecord(competitor=cheetah, time=8, distance=1520, speed=190)])
    table = format_records_table(quiz)
    assert "1520m" in table
    assert "8s" in table
