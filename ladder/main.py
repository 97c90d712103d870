"""Command line interface for the tennis ladder."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .errors import InvalidWinner, LadderError
from .recorder import MatchRecorder
from .store import MATCHES_KEY, PLAYERS_KEY, JsonFileBackend, RatingStore
from .views import (
    RECENT_LIMIT,
    chart_datasets,
    format_change,
    rankings,
    recent_matches,
    series_for,
    winner_options,
)


logger = logging.getLogger("ladder:main")

PREFS_PATH = Path(".ladder.json")


class Prefs:
    """Preferences for the ladder."""

    def __init__(self, data: dict[str, Any] | None = None):
        """Initialize preferences from dictionary, defaulting missing keys.

        Args:
            data: Parsed `.ladder.json` contents

        Raises:
            ValueError: The data is not an object or holds an invalid value
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("preferences must be a JSON object")
        self.store_path: str = data.get("storePath", "ladder.json")
        self.players_key: str = data.get("playersKey", PLAYERS_KEY)
        self.matches_key: str = data.get("matchesKey", MATCHES_KEY)

        recent_limit = data.get("recentLimit", RECENT_LIMIT)
        if not isinstance(recent_limit, int) or isinstance(recent_limit, bool):
            raise ValueError(f"recentLimit must be an integer, got {recent_limit!r}")
        self.recent_limit: int = recent_limit

        log_level = str(data.get("logLevel", "INFO")).upper()
        # getLevelName maps known names to their number
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"unknown logLevel {log_level!r}")
        self.log_level: str = log_level


def load_prefs(path: Path = PREFS_PATH) -> Prefs:
    """Read preferences from a JSON file, if there is one.

    Raises:
        OSError: The file exists but cannot be read
        ValueError: The file is not valid preferences JSON
    """
    if not path.exists():
        return Prefs()
    return Prefs(json.loads(path.read_text()))


def create_store(prefs: Prefs) -> RatingStore:
    """Create a rating store from preferences."""
    return RatingStore(
        JsonFileBackend(prefs.store_path),
        players_key=prefs.players_key,
        matches_key=prefs.matches_key,
    )


def print_rankings(store: RatingStore) -> None:
    """Print the leaderboard as a table."""
    print(f"{'#':>3}  {'Player':<20} {'Rating':>6} {'W':>4} {'L':>4}")
    for row in rankings(store.players):
        print(f"{row.rank:>3}  {row.name:<20} {row.rating:>6} {row.wins:>4} {row.losses:>4}")


def print_matches(store: RatingStore, limit: int) -> None:
    """Print recent matches, newest first.

    Args:
        store: Store to read matches from
        limit: Number of matches to show
    """
    for match in recent_matches(store.matches, limit):
        print(
            f"{match.player1} ({format_change(match.p1_rating_change)}) vs "
            f"{match.player2} ({format_change(match.p2_rating_change)}): "
            f"{match.winner} won"
        )


def print_history(store: RatingStore, as_json: bool) -> None:
    """Print each player's rating history.

    Args:
        store: Store to read players from
        as_json: Print line chart datasets instead of text
    """
    if as_json:
        print(json.dumps(chart_datasets(store.players), indent=2))
        return
    for name, points in series_for(store.players).items():
        trail = " ".join(f"{match}:{rating}" for match, rating in points)
        print(f"{name}: {trail}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per action."""
    parser = argparse.ArgumentParser(prog="ladder", description="Tennis Elo ladder")
    parser.add_argument("--config", type=Path, default=PREFS_PATH, help="preferences file")
    parser.add_argument("--store", help="ladder data file (overrides preferences)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="add a player")
    add.add_argument("name")

    record = commands.add_parser("record", help="record a match")
    record.add_argument("player1")
    record.add_argument("player2")
    record.add_argument("winner")

    commands.add_parser("rankings", help="show the leaderboard")

    matches = commands.add_parser("matches", help="show recent matches")
    matches.add_argument("--limit", type=int, help="number of matches to show")

    history = commands.add_parser("history", help="show rating history")
    history.add_argument("--json", action="store_true", help="chart datasets as JSON")

    reset = commands.add_parser("reset", help="delete all players and matches")
    reset.add_argument("--yes", action="store_true", help="do not ask for confirmation")

    return parser


def run(args: argparse.Namespace, prefs: Prefs) -> int:
    """Run one command against the store.

    Returns:
        Process exit status
    """
    store = create_store(prefs)

    if args.command == "add":
        player = store.add_player(args.name)
        print(f"Added {player.name} ({player.rating})")
    elif args.command == "record":
        try:
            match = MatchRecorder(store).record_match(
                args.player1, args.player2, args.winner
            )
        except InvalidWinner as error:
            choices = winner_options(error.player1, error.player2)
            print(f"Choose the winner from: {', '.join(choices)}", file=sys.stderr)
            raise
        print(
            f"{match.player1} {format_change(match.p1_rating_change)}, "
            f"{match.player2} {format_change(match.p2_rating_change)}"
        )
        print_rankings(store)
    elif args.command == "rankings":
        print_rankings(store)
    elif args.command == "matches":
        limit = args.limit if args.limit is not None else prefs.recent_limit
        print_matches(store, limit)
    elif args.command == "history":
        print_history(store, args.json)
    elif args.command == "reset":
        if not args.yes:
            answer = input(
                "Are you sure you want to delete all players and matches? "
                "This cannot be undone. [y/N] "
            )
            if answer.strip().lower() not in ("y", "yes"):
                print("Aborted")
                return 1
        store.reset()
        print("Ladder reset")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        prefs = load_prefs(args.config)
    except (OSError, ValueError) as error:
        print(f"Error: cannot read {args.config}: {error}", file=sys.stderr)
        return 1
    if args.store:
        prefs.store_path = args.store

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else prefs.log_level,
        format="%(name)s: %(message)s",
    )

    try:
        return run(args, prefs)
    except LadderError as error:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(f"Error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
