"""Entry point for the Blind Globe backend."""

import argparse
import sys


def print_daily(date_key: str | None) -> int:
    """Print the rounds for a daily key (today if omitted)."""
    from blindglobe.config import get_settings
    from blindglobe.game.catalog import get_catalog
    from blindglobe.game.daily_seed import DailySeedGenerator, parse_date_key
    from blindglobe.game.time_source import TimeSource

    if date_key is None:
        date_key = TimeSource.from_settings(get_settings()).resolve_date_key()
    else:
        try:
            date_key = parse_date_key(date_key)
        except ValueError:
            print(f"Invalid date: {date_key} (expected YYYY-MM-DD)")
            return 1

    daily = DailySeedGenerator(get_catalog()).generate(date_key)
    print(f"Blind Globe {date_key}")
    for i, (reference, target) in enumerate(
        zip(daily.reference_cities, daily.target_cities), start=1
    ):
        print(f"  Round {i} [{target.difficulty.value}]: {reference.name} -> {target.name}")
    return 0


def main():
    """Main entry point for the Blind Globe CLI."""
    from blindglobe.config import get_settings

    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Blind Globe - daily geography guessing game backend",
        prog="blindglobe",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("server", help="Start the WebSocket server")
    server_parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind to (default: {settings.host})",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind to (default: {settings.port})",
    )
    server_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    # Client command
    client_parser = subparsers.add_parser("client", help="Play in the terminal")
    client_parser.add_argument(
        "--player", "-p",
        default="player",
        help="Player id the game is saved under (default: player)",
    )
    client_parser.add_argument(
        "--host",
        default="localhost",
        help="Server host to connect to (default: localhost)",
    )
    client_parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Server port to connect to (default: {settings.port})",
    )

    # Daily command
    daily_parser = subparsers.add_parser("daily", help="Print the rounds for a day")
    daily_parser.add_argument(
        "--date", "-d",
        default=None,
        help="Daily key YYYY-MM-DD (default: today in the configured timezone)",
    )

    args = parser.parse_args()

    if args.command == "server":
        import uvicorn

        uvicorn.run(
            "blindglobe.server.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
        )

    elif args.command == "client":
        # Override settings for client connection
        import os

        os.environ["HOST"] = args.host
        os.environ["PORT"] = str(args.port)
        get_settings.cache_clear()

        from blindglobe.client.text import run

        run(args.player)

    elif args.command == "daily":
        sys.exit(print_daily(args.date))

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
