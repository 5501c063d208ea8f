# baller/cli.py
from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Sequence

from .cache import SqlCache
from .config import load_config
from .errors import BallerError
from .pipeline import forget_cached, run


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="baller-process",
        description="Fetch balldontlie players and season averages, then print the top ten scorers.",
    )
    ap.add_argument("--database-url", default=None, help="Overrides DATABASE_URL env var.")
    ap.add_argument(
        "--fresh",
        action="store_true",
        help="Forget cached players and stats before running.",
    )
    ap.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of skipping stats whose player was never fetched.",
    )
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
        if args.database_url:
            config = replace(config, database_url=args.database_url)

        cache = SqlCache.from_url(config.database_url)
        if args.fresh:
            print("Forgetting cached players and stats ...")
            forget_cached(cache)

        run(config, cache, strict=args.strict)
    except BallerError as exc:
        print(f"ERROR: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
