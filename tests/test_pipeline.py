# ============================================================
# File: tests/test_pipeline.py
# Purpose: Cached loaders and the end-to-end top-scorer run
# ============================================================

import pytest

import baller.api.stats as stats_mod
from baller.cache import MemoryCache
from baller.errors import AssociationError, DecodeError
from baller.pipeline import (
    PLAYERS_KEY,
    STATS_KEY,
    forget_cached,
    load_cached_players,
    load_cached_stats,
    run,
)


def test_players_are_fetched_once_per_cache_lifetime(fake_api, config):
    cache = MemoryCache()

    first = load_cached_players(cache, config)
    calls_after_first = len(fake_api.calls)
    second = load_cached_players(cache, config)

    assert calls_after_first == 2
    assert len(fake_api.calls) == calls_after_first
    assert [p.to_record() for p in first] == [p.to_record() for p in second]


def test_stats_are_fetched_once_and_players_reattached(fake_api, config):
    cache = MemoryCache()
    players = load_cached_players(cache, config)

    load_cached_stats(cache, config, players)
    stat_calls = len(fake_api.stat_calls())
    stats = load_cached_stats(cache, config, players)

    assert stat_calls == 3
    assert len(fake_api.stat_calls()) == stat_calls
    assert len(stats) == 120
    assert all(s.player is not None and s.player.id == s.player_id for s in stats)
    assert "player" not in cache.get(STATS_KEY)[0]


def test_end_to_end_top_ten(fake_api, config, capsys):
    rows = run(config, MemoryCache())

    expected_ids = [49, 99, 48, 98, 47, 97, 46, 96, 45, 95]
    assert rows == [(f"First{i}", f"Last{i}", float(i % 50)) for i in expected_ids]

    out = capsys.readouterr().out
    assert out.index("Fetching players: Page 1") < out.index("Fetching stats: Page 1")
    assert "| First49    | Last49    | 49.00      |" in out


def test_unknown_stat_is_skipped_by_default(fake_api, config):
    fake_api.unknown_stat_ids = [5000]

    rows = run(config, MemoryCache())

    assert len(rows) == 10
    assert all(first != "First5000" for first, _, _ in rows)


def test_unknown_stat_fails_in_strict_mode(fake_api, config):
    fake_api.unknown_stat_ids = [5000]

    with pytest.raises(AssociationError):
        run(config, MemoryCache(), strict=True)


def test_forget_cached_forces_refetch(fake_api, config):
    cache = MemoryCache()
    run(config, cache)
    first_run_calls = len(fake_api.calls)

    forget_cached(cache)
    assert cache.get(PLAYERS_KEY) is None
    assert cache.get(STATS_KEY) is None

    run(config, cache)
    assert len(fake_api.calls) == 2 * first_run_calls


def test_empty_player_list_renders_header_only(fake_api, config, capsys):
    fake_api.total_players = 0

    rows = run(config, MemoryCache())

    assert rows == []
    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith(("+", "|"))]
    assert len(lines) == 3


def test_malformed_stat_is_not_cached_and_next_run_refetches(fake_api, config, monkeypatch):
    fake_api.total_players = 1
    responses = [
        {"data": [{"player_id": 1, "pts": None}]},
        {"data": [{"player_id": 1, "pts": 12.0}]},
    ]
    calls = []

    def recovering_api(cfg, path, params=None):
        calls.append(params)
        return responses[len(calls) - 1]

    monkeypatch.setattr(stats_mod, "bdl_get", recovering_api)
    cache = MemoryCache()

    with pytest.raises(DecodeError):
        run(config, cache)
    assert cache.get(STATS_KEY) is None

    rows = run(config, cache)

    assert rows == [("First1", "Last1", 12.0)]
    assert len(calls) == 2
