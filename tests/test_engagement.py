# tests/test_engagement.py
import pytest

from analytics.arcade import (
    ARCADE_GAMES,
    UnknownGame,
    inputs_for_event,
    play_counts,
    record_play,
    subscribe_play_counts,
)
from analytics.engagement import (
    EngagementStats,
    VisitorFlags,
    increment_stat,
    read_stats,
    record_like,
    record_view,
    subscribe_stats,
)
from database.documents import StoreError


def test_first_increment_creates_both_counters(store):
    assert read_stats(store) == EngagementStats(likes=0, views=0)
    assert increment_stat(store, "likes") == EngagementStats(likes=1, views=0)
    assert increment_stat(store, "views") == EngagementStats(likes=1, views=1)


def test_unknown_counter(store):
    with pytest.raises(ValueError):
        increment_stat(store, "shares")


def test_view_counted_once_per_visitor(store):
    flags = VisitorFlags()
    assert record_view(flags, lambda: increment_stat(store, "views")).views == 1
    assert record_view(flags, lambda: increment_stat(store, "views")) is None
    assert read_stats(store).views == 1


def test_failed_view_is_not_retried(flaky_store):
    flaky_store.fail_writes = True
    flags = VisitorFlags()
    assert record_view(flags, lambda: increment_stat(flaky_store, "views")) is None
    assert flags.viewed


def test_like_flag_set_only_after_success(flaky_store):
    flags = VisitorFlags()
    flaky_store.fail_writes = True
    with pytest.raises(StoreError):
        record_like(flags, lambda: increment_stat(flaky_store, "likes"))
    assert not flags.liked

    flaky_store.fail_writes = False
    assert record_like(flags, lambda: increment_stat(flaky_store, "likes")).likes == 1
    assert flags.liked
    assert record_like(flags, lambda: increment_stat(flaky_store, "likes")) is None


def test_stats_subscription(store):
    seen = []
    subscribe_stats(store, seen.append)
    increment_stat(store, "likes")
    assert seen == [EngagementStats(), EngagementStats(likes=1, views=0)]


def test_play_counts(store):
    assert record_play(store, "Hit-Road") == 1
    assert record_play(store, "Hit-Road") == 2
    assert record_play(store, "tic-tac-toe") == 1
    assert play_counts(store) == {"Hit-Road": 2, "tic-tac-toe": 1}


def test_unknown_game(store):
    with pytest.raises(UnknownGame):
        record_play(store, "pong")


def test_play_count_subscription(store):
    seen = []
    subscribe_play_counts(store, seen.append)
    record_play(store, "Maze-Runner")
    assert seen == [{}, {"Maze-Runner": 1}]


def test_catalogue():
    assert [g.id for g in ARCADE_GAMES] == ["tic-tac-toe", "Hit-Road", "Chameleon-Catch", "Maze-Runner"]
    assert all(g.asset.startswith("/rive/") for g in ARCADE_GAMES)


def test_pointer_down_resets_hits_then_starts_and_jumps():
    cmds = [(c.op, c.name, c.value) for c in inputs_for_event("pointerdown")]
    assert cmds == [
        ("set", "bool_CactusHit", False),
        ("set", "bool_BirdHit", False),
        ("set", "boolUnhit", True),
        ("fire", "start", None),
        ("fire", "jump", None),
    ]


def test_click_and_space_inputs():
    assert [c.name for c in inputs_for_event("click")] == ["start", "jump"]
    assert [c.name for c in inputs_for_event("space")] == ["jump"]
    assert inputs_for_event("keyup") == []


def test_like_over_http_keeps_flag_clear_on_empty_response():
    flags = VisitorFlags()
    # post_backend answers {} when the request failed
    assert record_like(flags, lambda: {}) == {}
    assert not flags.liked
    assert record_like(flags, lambda: {"likes": 1, "views": 0}) == {"likes": 1, "views": 0}
    assert flags.liked


def test_view_over_http_claims_flag_even_on_failure():
    flags = VisitorFlags()
    calls = []
    record_view(flags, lambda: calls.append(1) or {})
    record_view(flags, lambda: calls.append(1) or {})
    assert flags.viewed and calls == [1]
