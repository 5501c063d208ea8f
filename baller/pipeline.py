# baller/pipeline.py
from typing import List

from .api.players import Player, fetch_all_players
from .api.stats import Stat, attach_players, fetch_season_averages
from .cache import CacheStore
from .config import BallerConfig
from .report import HEADERS, TOP_N, Row, render_table, top_scorers

PLAYERS_KEY = "players"
STATS_KEY = "stats"


def load_cached_players(cache: CacheStore, config: BallerConfig) -> List[Player]:
    """Players from the cache, fetching every page only on the first run."""
    records = cache.get_or_compute(
        PLAYERS_KEY,
        lambda: [p.to_record() for p in fetch_all_players(config)],
    )
    return [Player.from_record(r) for r in records]


def load_cached_stats(
    cache: CacheStore, config: BallerConfig, players: List[Player], strict: bool = False
) -> List[Stat]:
    """
    Season averages from the cache, fetched in groups of 50 on the first run.

    Records are checked before caching; players are re-attached on every load.
    """
    records = cache.get_or_compute(
        STATS_KEY,
        lambda: [Stat.from_record(r).to_record() for r in fetch_season_averages(config, players)],
    )
    return attach_players(records, players, strict=strict)


def forget_cached(cache: CacheStore) -> None:
    cache.forget(PLAYERS_KEY)
    cache.forget(STATS_KEY)


def run(
    config: BallerConfig, cache: CacheStore, strict: bool = False, limit: int = TOP_N
) -> List[Row]:
    players = load_cached_players(cache, config)
    stats = load_cached_stats(cache, config, players, strict=strict)
    rows = top_scorers(stats, limit)
    print(render_table(HEADERS, rows))
    return rows
