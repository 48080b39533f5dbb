import random

import pytest

from models import (
    Direction,
    Move,
    MoveOutcome,
    NewGame,
    RequestHint,
    Reset,
    SessionConfig,
    SessionPhase,
    StartAutoPlay,
    StatusKind,
    StopAutoPlay,
)
from pathfinding import find_shortest_path, is_valid_path
from session import AutoPlayState, GameSession, advance_auto_play


def walk(session, direction, times):
    for _ in range(times):
        session.move(direction)


@pytest.fixture
def open_session(layout_generator, open_rows):
    return GameSession(SessionConfig(), generator=layout_generator(open_rows))


@pytest.fixture
def walled_goal_rows(open_rows):
    rows = list(open_rows)
    rows[8] = "." * 9 + "#"
    rows[9] = "." * 8 + "#."
    return rows


# ----------------------------
# Level lifecycle
# ----------------------------


def test_new_session_starts_level_one():
    session = GameSession(SessionConfig(seed=3))
    assert session.level == 1
    assert session.player == (0, 0)
    assert session.goal == (9, 9)
    assert session.steps == 0
    assert session.grid.blocked_count() == 8
    assert find_shortest_path(session.grid, (0, 0), (9, 9))
    assert session.status.kind is StatusKind.LEVEL_STARTED
    assert session.status.level == 1


def test_reset_regenerates_current_level(layout_generator, open_rows):
    gen = layout_generator(open_rows)
    session = GameSession(generator=gen)
    walk(session, Direction.RIGHT, 3)
    session.request_hint()

    assert session.reset_level()

    assert gen.calls == [1, 1]
    assert session.level == 1
    assert session.player == (0, 0)
    assert session.steps == 0
    assert session.hint_path == []


def test_advance_and_new_game(open_session):
    open_session.advance_level()
    open_session.advance_level()
    assert open_session.level == 3
    assert open_session.status.level == 3

    open_session.new_game()
    assert open_session.level == 1


# ----------------------------
# Moves
# ----------------------------


def test_out_of_bounds_move_is_noop(open_session):
    assert open_session.move(Direction.LEFT) is MoveOutcome.OUT_OF_BOUNDS
    assert open_session.move(Direction.UP) is MoveOutcome.OUT_OF_BOUNDS
    assert open_session.player == (0, 0)
    assert open_session.steps == 0


def test_blocked_move_is_noop(layout_generator, open_rows):
    rows = list(open_rows)
    rows[0] = ".#" + "." * 8
    session = GameSession(generator=layout_generator(rows))

    assert session.move(Direction.RIGHT) is MoveOutcome.BLOCKED
    assert session.player == (0, 0)
    assert session.steps == 0


def test_zero_move_does_not_count(open_session):
    assert open_session.move_player(0, 0) is MoveOutcome.STAYED
    assert open_session.steps == 0


def test_each_accepted_move_counts_once(open_session):
    assert open_session.move(Direction.RIGHT) is MoveOutcome.MOVED
    assert open_session.move(Direction.DOWN) is MoveOutcome.MOVED
    assert open_session.move(Direction.LEFT) is MoveOutcome.MOVED
    assert open_session.player == (0, 1)
    assert open_session.steps == 3


# ----------------------------
# Hints
# ----------------------------


def test_hint_is_stored_and_idempotent(open_session):
    first = open_session.request_hint()
    assert len(first) == 18
    assert is_valid_path(open_session.grid, (0, 0), first)
    assert open_session.hint_path == first
    assert open_session.status.kind is StatusKind.HINT_SHOWN

    assert open_session.request_hint() == first
    assert open_session.player == (0, 0)
    assert open_session.steps == 0


def test_move_clears_hint(open_session):
    open_session.request_hint()
    open_session.move(Direction.DOWN)
    assert open_session.hint_path == []


def test_hint_unreachable(layout_generator, walled_goal_rows):
    session = GameSession(generator=layout_generator(walled_goal_rows))
    assert session.request_hint() == []
    assert session.hint_path == []
    assert session.status.kind is StatusKind.UNREACHABLE


# ----------------------------
# Victory
# ----------------------------


def test_optimal_manual_victory(layout_generator, open_rows):
    gen = layout_generator(open_rows)
    session = GameSession(generator=gen)
    walk(session, Direction.RIGHT, 9)
    walk(session, Direction.DOWN, 9)

    status = session.status
    assert session.player == session.goal
    assert session.phase is SessionPhase.VICTORY
    assert status.kind is StatusKind.VICTORY
    assert (status.level, status.steps, status.min_steps) == (1, 18, 18)
    assert status.is_optimal is True

    session.tick(1999)
    assert session.level == 1

    session.tick(1)
    assert session.level == 2
    assert session.phase is SessionPhase.PLAYING
    assert session.player == (0, 0)
    assert session.steps == 0
    assert session.status.kind is StatusKind.LEVEL_STARTED
    assert gen.calls == [1, 2]


def test_detour_is_not_optimal(open_session):
    open_session.move(Direction.DOWN)
    open_session.move(Direction.UP)
    walk(open_session, Direction.RIGHT, 9)
    walk(open_session, Direction.DOWN, 9)

    assert open_session.status.kind is StatusKind.VICTORY
    assert open_session.status.steps == 20
    assert open_session.status.min_steps == 18
    assert open_session.status.is_optimal is False


def test_input_frozen_during_victory_window(open_session):
    walk(open_session, Direction.RIGHT, 9)
    walk(open_session, Direction.DOWN, 9)
    victory = open_session.status

    assert open_session.move(Direction.UP) is MoveOutcome.IGNORED
    assert open_session.request_hint() == []
    assert not open_session.start_auto_play()
    assert not open_session.reset_level()
    assert open_session.status is victory
    assert open_session.steps == 18


def test_victory_advances_only_once(open_session):
    walk(open_session, Direction.RIGHT, 9)
    walk(open_session, Direction.DOWN, 9)

    assert open_session.check_victory()
    assert open_session.check_victory()
    open_session.tick(2000)
    open_session.tick(5000)

    assert open_session.level == 2


def test_pending_advance_dropped_when_level_changes(open_session):
    walk(open_session, Direction.RIGHT, 9)
    walk(open_session, Direction.DOWN, 9)

    open_session.new_game()
    open_session.tick(5000)

    assert open_session.level == 1
    assert open_session.phase is SessionPhase.PLAYING


def test_zero_delay_advances_immediately(layout_generator, open_rows):
    session = GameSession(
        SessionConfig(victory_delay_ms=0), generator=layout_generator(open_rows)
    )
    walk(session, Direction.RIGHT, 9)
    walk(session, Direction.DOWN, 9)
    assert session.level == 2


def test_check_victory_false_away_from_goal(open_session):
    assert not open_session.check_victory()
    assert open_session.phase is SessionPhase.PLAYING


# ----------------------------
# Auto-play
# ----------------------------


def test_advance_auto_play_is_pure():
    state = AutoPlayState(path=((1, 0), (2, 0)), position=(0, 0))

    one = advance_auto_play(state)
    two = advance_auto_play(one)

    assert state.position == (0, 0) and state.index == 0
    assert one.position == (1, 0) and not one.finished
    assert two.position == (2, 0) and two.finished
    assert advance_auto_play(two) is two


def test_auto_play_walks_to_goal(open_session):
    assert open_session.start_auto_play()
    assert open_session.auto_playing
    assert open_session.status.kind is StatusKind.AUTO_PLAYING
    assert open_session.move(Direction.RIGHT) is MoveOutcome.IGNORED

    open_session.tick(199)
    assert open_session.steps == 0
    open_session.tick(1)
    assert open_session.steps == 1

    open_session.tick(200 * 17)
    assert open_session.player == open_session.goal
    assert open_session.steps == 18
    assert not open_session.auto_playing
    assert open_session.status.kind is StatusKind.VICTORY
    assert open_session.status.is_optimal is True

    open_session.tick(2000)
    assert open_session.level == 2


def test_auto_play_manual_ticks_count_steps(open_session):
    open_session.move(Direction.RIGHT)
    open_session.start_auto_play()
    for _ in range(5):
        assert open_session.auto_play_tick()
    assert open_session.steps == 6
    assert len(open_session.remaining_auto_path()) == 12


def test_auto_play_keeps_hint(open_session):
    hint = open_session.request_hint()
    open_session.start_auto_play()
    open_session.tick(400)
    assert open_session.hint_path == hint


def test_stop_auto_play(open_session):
    open_session.start_auto_play()
    open_session.tick(600)
    position = open_session.player

    assert open_session.stop_auto_play()
    assert not open_session.auto_playing
    assert open_session.steps == 3

    open_session.tick(1000)
    assert open_session.player == position
    assert open_session.move(Direction.DOWN) is MoveOutcome.MOVED
    assert open_session.player == (position[0], position[1] + 1)
    assert open_session.steps == 4
    assert not open_session.stop_auto_play()


def test_reset_cancels_auto_play(layout_generator, open_rows):
    gen = layout_generator(open_rows)
    session = GameSession(generator=gen)
    session.start_auto_play()
    session.tick(400)

    assert session.reset_level()

    assert not session.auto_playing
    assert session.player == (0, 0)
    assert session.steps == 0
    assert session.status.kind is StatusKind.LEVEL_STARTED
    assert gen.calls == [1, 1]

    session.tick(1000)
    assert session.player == (0, 0)


def test_auto_play_without_path(layout_generator, walled_goal_rows):
    session = GameSession(generator=layout_generator(walled_goal_rows))

    assert not session.start_auto_play()
    assert session.status.kind is StatusKind.NO_PATH_FOR_AUTO
    assert session.phase is SessionPhase.PLAYING
    assert not session.auto_playing


def test_requests_ignored_while_auto_playing(open_session):
    open_session.start_auto_play()
    status = open_session.status
    assert open_session.request_hint() == []
    assert not open_session.start_auto_play()
    assert open_session.status is status


# ----------------------------
# Commands / snapshot
# ----------------------------


def test_dispatch_routes_commands(layout_generator, open_rows):
    gen = layout_generator(open_rows)
    session = GameSession(generator=gen)

    session.dispatch(Move(Direction.RIGHT))
    assert session.player == (1, 0)

    assert session.dispatch(RequestHint()).kind is StatusKind.HINT_SHOWN
    assert session.dispatch(StartAutoPlay()).kind is StatusKind.AUTO_PLAYING
    session.dispatch(StopAutoPlay())
    assert not session.auto_playing

    session.dispatch(Reset())
    assert session.player == (0, 0)
    session.advance_level()
    assert session.dispatch(NewGame()).level == 1
    assert gen.calls == [1, 1, 2, 1]


def test_dispatch_rejects_unknown_command(open_session):
    with pytest.raises(TypeError):
        open_session.dispatch("jump")


def test_snapshot_reflects_state(open_session):
    open_session.move(Direction.RIGHT)
    open_session.request_hint()
    snap = open_session.snapshot()

    assert snap.level == 1
    assert snap.grid_size == 10
    assert snap.rows == ["." * 10] * 10
    assert snap.player == (1, 0)
    assert snap.goal == (9, 9)
    assert snap.steps == 1
    assert len(snap.hint_path) == 17
    assert snap.auto_playing is False
    assert snap.phase is SessionPhase.PLAYING
    assert snap.status.kind is StatusKind.HINT_SHOWN


def test_seeded_sessions_match():
    a = GameSession(SessionConfig(seed=11))
    b = GameSession(rng=random.Random(11))
    assert a.grid == b.grid
