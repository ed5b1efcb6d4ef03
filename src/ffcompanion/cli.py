"""Command-line interface: player sync, one-off analysis and the API server."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

import anyio
from dotenv import load_dotenv

from ffcompanion.analysis import AnalysisClient, AnalysisService, PlayerResolver
from ffcompanion.cache import TTLCache
from ffcompanion.config import Settings
from ffcompanion.errors import CompanionError
from ffcompanion.ingest import sync_players
from ffcompanion.persistence import MAX_UPSERT_ROWS, PlayerStore, SQLitePlayerStore, open_store
from ffcompanion.sleeper import SleeperClient


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fantasy football league companion")
    parser.add_argument("--db", type=Path, default=None, help="SQLite player directory path (overrides FFC_DB_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync-players", help="Refresh the player directory from Sleeper")
    sync.add_argument(
        "--batch-size",
        type=int,
        default=MAX_UPSERT_ROWS,
        help=f"Rows per upsert request (1-{MAX_UPSERT_ROWS})",
    )

    leagues = subparsers.add_parser("leagues", help="List a user's leagues for a season")
    leagues.add_argument("username", help="Sleeper username or user id")
    leagues.add_argument("--season", default=str(date.today().year), help="Season year")

    analyze = subparsers.add_parser("analyze", help="Ask the AI a question about a league")
    analyze.add_argument("league_id", help="Sleeper league id")
    analyze.add_argument("username", help="Sleeper username or user id owning the roster")
    analyze.add_argument("question", help="Free-text question, e.g. 'Who should I trade for?'")
    analyze.add_argument("--gpt4", action="store_true", help="Use the higher-capability model tier")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def _sleeper(settings: Settings) -> SleeperClient:
    return SleeperClient(
        base_url=settings.sleeper_base_url,
        token=settings.sleeper_token,
        cache=TTLCache(settings.cache_ttl),
    )


def _store(args: argparse.Namespace, settings: Settings) -> PlayerStore:
    return SQLitePlayerStore(args.db) if args.db else open_store(settings)


def _cmd_sync_players(args: argparse.Namespace, settings: Settings) -> None:
    store = _store(args, settings)
    try:
        with _sleeper(settings) as sleeper:
            catalog = sleeper.get_players()
        print(f"Fetched {len(catalog)} players from Sleeper")
        report = sync_players(catalog, store, batch_size=args.batch_size)
    except CompanionError as exc:
        print(f"Player sync failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    finally:
        store.close()
    print(f"Upserted {report.upserted} players in {report.batches} batches ({report.skipped} skipped)")


def _cmd_leagues(args: argparse.Namespace, settings: Settings) -> None:
    with _sleeper(settings) as sleeper:
        user = sleeper.get_user(args.username)
        if not user:
            raise SystemExit(f"Sleeper user {args.username!r} not found")
        leagues = sleeper.get_user_leagues(user["user_id"], args.season)
    if not leagues:
        print(f"No {args.season} leagues for {user.get('display_name') or args.username}")
        return
    for league in leagues:
        print(f"{league['league_id']}  {league.get('name', '')}  ({league.get('total_rosters', '?')} teams)")


def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> None:
    store = _store(args, settings)
    service = AnalysisService(
        PlayerResolver(store),
        AnalysisClient.from_settings(settings),
        timeout=settings.request_timeout,
        max_prompt_chars=settings.max_prompt_chars,
    )
    try:
        with _sleeper(settings) as sleeper:
            user = sleeper.get_user(args.username)
            if not user:
                raise SystemExit(f"Sleeper user {args.username!r} not found")
            payload = sleeper.fetch_snapshot(args.league_id, user["user_id"])
        payload["question"] = args.question
        payload["useGPT4"] = args.gpt4
        result = anyio.run(service.analyze, payload)
    except CompanionError as exc:
        raise SystemExit(f"Analysis failed ({exc.kind}): {exc.message}") from exc
    finally:
        store.close()
    print(result)


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> None:
    import uvicorn

    from ffcompanion.api import create_app

    store = SQLitePlayerStore(args.db) if args.db else None
    uvicorn.run(create_app(settings, store=store), host=args.host, port=args.port)


COMMANDS = {
    "sync-players": _cmd_sync_players,
    "leagues": _cmd_leagues,
    "analyze": _cmd_analyze,
    "serve": _cmd_serve,
}


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    COMMANDS[args.command](args, Settings.from_env())


if __name__ == "__main__":
    main()
