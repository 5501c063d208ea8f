# baller/cache_checks.py
from __future__ import annotations

import argparse
import os
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .cache import CacheStore, SqlCache
from .config import DEFAULT_DATABASE_URL
from .pipeline import PLAYERS_KEY, STATS_KEY


@dataclass
class CheckResult:
    name: str
    ok: bool
    details: str = ""


def check_players_cached(cache: CacheStore) -> CheckResult:
    players = cache.get(PLAYERS_KEY)
    if not players:
        return CheckResult(
            name="players: cached and not empty",
            ok=False,
            details="No 'players' entry (or it is empty); run baller-process first.",
        )
    return CheckResult(name="players: cached and not empty", ok=True, details=f"players={len(players)}")


def check_player_ids_unique(cache: CacheStore) -> CheckResult:
    players = cache.get(PLAYERS_KEY) or []
    counts = Counter(p.get("id") for p in players)
    dupes = sorted(pid for pid, n in counts.items() if n > 1)
    if dupes:
        sample = ", ".join(str(d) for d in dupes[:20])
        return CheckResult(
            name="players: ids are unique",
            ok=False,
            details=f"{len(dupes)} duplicated ids (showing up to 20): {sample}",
        )
    return CheckResult(name="players: ids are unique", ok=True)


def check_stats_cached(cache: CacheStore) -> CheckResult:
    stats = cache.get(STATS_KEY)
    if stats is None:
        return CheckResult(
            name="stats: cached",
            ok=False,
            details="No 'stats' entry; run baller-process first.",
        )
    return CheckResult(name="stats: cached", ok=True, details=f"stats={len(stats)}")


def check_stats_reference_players(cache: CacheStore) -> CheckResult:
    """Every cached season average must point at a cached player."""
    known = {p.get("id") for p in cache.get(PLAYERS_KEY) or []}
    stats = cache.get(STATS_KEY) or []
    orphans = [s.get("player_id") for s in stats if s.get("player_id") not in known]
    if orphans:
        sample = ", ".join(str(o) for o in orphans[:20])
        return CheckResult(
            name="stats: every player_id has a cached player",
            ok=False,
            details=f"{len(orphans)} stats with unknown player_id (showing up to 20): {sample}",
        )
    return CheckResult(name="stats: every player_id has a cached player", ok=True)


def check_pts_non_negative(cache: CacheStore) -> CheckResult:
    stats = cache.get(STATS_KEY) or []
    bad = [s for s in stats if (s.get("pts") or 0) < 0]
    if bad:
        return CheckResult(
            name="stats: pts non-negative",
            ok=False,
            details=f"{len(bad)} stats with negative pts",
        )
    return CheckResult(name="stats: pts non-negative", ok=True)


def run_checks(cache: CacheStore) -> List[CheckResult]:
    return [
        check_players_cached(cache),
        check_player_ids_unique(cache),
        check_stats_cached(cache),
        check_stats_reference_players(cache),
        check_pts_non_negative(cache),
    ]


def report(checks: Sequence[CheckResult]) -> int:
    """Print results; return the number of failed checks."""
    print("\n[VALIDATE] RESULTS")
    failed = 0
    for c in checks:
        status = "OK" if c.ok else "FAIL"
        print(f"  - {status}: {c.name}")
        if c.details:
            print(f"      {c.details}")
        if not c.ok:
            failed += 1

    if failed:
        print(f"\n[VALIDATE] FAILED ({failed} checks).")
    else:
        print("\n[VALIDATE] PASSED.")
    return failed


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="baller-validate-cache",
        description="Validate cached players and season averages for sanity + integrity.",
    )
    ap.add_argument("--database-url", default=None, help="Overrides DATABASE_URL env var.")
    args = ap.parse_args(argv)

    url = args.database_url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    cache = SqlCache.from_url(url)
    print(f"Cache entries: {', '.join(cache.keys()) or '(none)'}")

    return 1 if report(run_checks(cache)) else 0


if __name__ == "__main__":
    raise SystemExit(main())
