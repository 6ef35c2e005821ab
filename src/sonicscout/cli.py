"""CLI entry point for operating a Sonic index."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sonicscout.config.settings import Settings
    from sonicscout.engines.sonic.engine import SonicEngine


class _Bucket:
    """Stand-in record naming a bucket given on the command line."""

    def __init__(self, bucket: str, locale: str | None = None) -> None:
        self._bucket = bucket
        self._locale = locale

    def searchable_as(self) -> str:
        return self._bucket

    def get_sonic_locale(self) -> str | None:
        return self._locale


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sonicscout",
        description="SonicScout — Sonic search engine for model-search integrations",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SonicScout {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("health", help="Ping every Sonic channel")

    query = commands.add_parser("query", help="Query a bucket and print ranked identifiers")
    query.add_argument("bucket", help="Bucket name (entity type)")
    query.add_argument("terms", help="Query text")
    query.add_argument("--limit", "-n", type=int, default=None, help="Page size")
    query.add_argument("--page", "-p", type=int, default=1, help="1-based page number (needs --limit)")
    query.add_argument("--locale", type=str, default=None, help="ISO 639-3 locale passed to Sonic")

    commands.add_parser("consolidate", help="Write pending index changes to disk")

    flush = commands.add_parser("flush", help="Drop every object in a bucket")
    flush.add_argument("bucket", help="Bucket name (entity type)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    from sonicscout.config.settings import Settings
    from sonicscout.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    sys.exit(asyncio.run(_run(args, settings)))


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    from sonicscout.engines.base.exceptions import ConnectionError
    from sonicscout.engines.sonic.engine import SonicEngine

    try:
        engine = await SonicEngine.connect(settings)
    except ConnectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with engine:
        return await _dispatch(engine, args)


async def _dispatch(engine: SonicEngine, args: argparse.Namespace) -> int:
    from sonicscout.models.builder import SearchBuilder

    if args.command == "health":
        health = await engine.health_check()
        print(json.dumps(health.model_dump(), indent=2))
        return 0 if health.status == "healthy" else 2

    if args.command == "query":
        builder = SearchBuilder(model=_Bucket(args.bucket, args.locale), query=args.terms)
        if args.limit:
            results = await engine.paginate(builder, args.limit, args.page)
        else:
            results = await engine.search(builder)
        for identifier in engine.map_ids(results):
            print(identifier)
        return 0

    if args.command == "consolidate":
        await engine.consolidate()
        return 0

    if args.command == "flush":
        await engine.flush(_Bucket(args.bucket))
        return 0

    return 1


def _get_version() -> str:
    """Get the package version."""
    try:
        from sonicscout import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
