# baller/api/stats.py
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, TypeVar

from ..config import BallerConfig
from ..errors import AssociationError, DecodeError
from .bdl_client import bdl_get, response_items
from .players import Player

# season_averages accepts at most 50 player ids per request
CHUNK_SIZE = 50

T = TypeVar("T")


@dataclass
class Stat:
    player_id: int
    pts: float
    extra: Dict[str, Any] = field(default_factory=dict)
    # Attached after fetch, never serialised.
    player: Optional[Player] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Stat":
        try:
            player_id = int(record["player_id"])
            pts = float(record["pts"])
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"Season average record is missing player_id/pts: {record}") from exc

        extra = {k: v for k, v in record.items() if k not in ("player_id", "pts")}
        return cls(player_id=player_id, pts=pts, extra=extra)

    def to_record(self) -> Dict[str, Any]:
        return {**self.extra, "player_id": self.player_id, "pts": self.pts}


def chunk(items: Sequence[T], size: int = CHUNK_SIZE) -> Iterator[List[T]]:
    """Yield consecutive, non-overlapping groups of at most `size` items."""
    if size < 1:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def fetch_season_averages(
    config: BallerConfig, players: Sequence[Player], season: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Fetch raw season-average records for every player, 50 ids per request.

    Records keep request order, then the API's order within each response.
    """
    season = config.season if season is None else season
    records: List[Dict[str, Any]] = []

    for index, group in enumerate(chunk(players)):
        print(f"Fetching stats: Page {index + 1}")
        params = {"season": season, "player_ids": [p.id for p in group]}
        data = bdl_get(config, config.season_averages_path, params)
        records.extend(response_items(data))

    return records


def attach_players(
    records: Sequence[Dict[str, Any]], players: Sequence[Player], strict: bool = False
) -> List[Stat]:
    """
    Build Stats and attach the owning Player (first player with that id wins).

    A record whose player_id matches nobody is skipped with a warning, or
    raises AssociationError when `strict` is set.
    """
    by_id: Dict[int, Player] = {}
    for player in players:
        by_id.setdefault(player.id, player)

    stats: List[Stat] = []
    for record in records:
        stat = Stat.from_record(record)
        stat.player = by_id.get(stat.player_id)
        if stat.player is None:
            if strict:
                raise AssociationError(stat.player_id)
            print(f"WARNING: skipping stat for unknown player_id={stat.player_id}")
            continue
        stats.append(stat)

    return stats
