# baller/api/players.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import BallerConfig
from ..errors import DecodeError, PaginationLimitError
from .bdl_client import bdl_get, response_items

PER_PAGE = 100


@dataclass
class Player:
    id: int
    first_name: str = ""
    last_name: str = ""
    # Remaining API fields (position, team, ...) kept as-is.
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Player":
        try:
            player_id = int(record["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"Player record has no usable id: {record}") from exc

        extra = {k: v for k, v in record.items() if k not in ("id", "first_name", "last_name")}
        return cls(
            id=player_id,
            first_name=record.get("first_name") or "",
            last_name=record.get("last_name") or "",
            extra=extra,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }


def _next_page(data: Dict[str, Any]) -> Optional[int]:
    meta = data.get("meta") or {}
    return meta.get("next_page")


def fetch_all_players(
    config: BallerConfig, max_pages: Optional[int] = None
) -> List[Player]:
    """
    Walk the players endpoint, 100 per page, until `meta.next_page` is empty.

    Players come back in the order the API listed them across pages.

    Raises:
        PaginationLimitError if the API is still paging after `max_pages`.
    """
    max_pages = config.max_pages if max_pages is None else max_pages
    players: List[Player] = []
    page: Optional[int] = 1
    fetched = 0

    while page:
        if fetched >= max_pages:
            raise PaginationLimitError(
                f"Players endpoint still reports next_page={page} after {fetched} pages"
            )

        print(f"Fetching players: Page {page}")
        data = bdl_get(config, config.players_path, {"per_page": PER_PAGE, "page": page})
        fetched += 1

        players.extend(Player.from_record(item) for item in response_items(data))
        page = _next_page(data)

    return players
