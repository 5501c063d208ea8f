# ============================================================
# File: tests/conftest.py
# Purpose: Shared config and a fake balldontlie API
# ============================================================

import pytest

import baller.api.players as players_mod
import baller.api.stats as stats_mod
from baller.config import BallerConfig


@pytest.fixture
def config():
    return BallerConfig(
        base_url="https://api.example.test/v1",
        players_path="/players",
        season_averages_path="/season_averages",
        season=2018,
        max_pages=50,
        database_url="sqlite://",
    )


class FakeApi:
    """
    Stands in for bdl_get.

    Serves `total_players` players (ids 1..N) 100 per page and echoes
    season averages with pts = player_id % 50 for every requested id.
    """

    def __init__(self, total_players=120, per_page=100, unknown_stat_ids=()):
        self.total_players = total_players
        self.per_page = per_page
        self.unknown_stat_ids = list(unknown_stat_ids)
        self.calls = []

    def player_calls(self):
        return [params for path, params in self.calls if path == "/players"]

    def stat_calls(self):
        return [params for path, params in self.calls if path == "/season_averages"]

    def __call__(self, config, path, params=None):
        self.calls.append((path, dict(params or {})))
        if path == "/players":
            return self._players_page(params["page"])
        if path == "/season_averages":
            return self._season_averages(params["player_ids"], params["season"])
        raise AssertionError(f"unexpected path {path}")

    def _players_page(self, page):
        start = (page - 1) * self.per_page + 1
        stop = min(start + self.per_page, self.total_players + 1)
        data = [
            {"id": i, "first_name": f"First{i}", "last_name": f"Last{i}", "position": "G"}
            for i in range(start, stop)
        ]
        next_page = page + 1 if stop <= self.total_players else None
        return {"data": data, "meta": {"current_page": page, "next_page": next_page}}

    def _season_averages(self, player_ids, season):
        ids = list(player_ids)
        if len(self.stat_calls()) == 1:
            ids += self.unknown_stat_ids
        return {
            "data": [
                {"player_id": pid, "pts": float(pid % 50), "season": season, "games_played": 70}
                for pid in ids
            ]
        }


@pytest.fixture
def fake_api(monkeypatch):
    api = FakeApi()
    monkeypatch.setattr(players_mod, "bdl_get", api)
    monkeypatch.setattr(stats_mod, "bdl_get", api)
    return api
