"""Read-only projections of ladder state for display."""

from collections.abc import Sequence
from typing import Any, NamedTuple

from .models import Match, Player


RECENT_LIMIT = 10


class RankingRow(NamedTuple):
    rank: int
    name: str
    rating: int
    wins: int
    losses: int


def rankings(players: Sequence[Player]) -> list[RankingRow]:
    """Leaderboard ordered by rating, highest first.

    Players with equal ratings keep their insertion order.

    Args:
        players: Players in insertion order

    Returns:
        Ranked rows, rank starting at 1
    """
    ordered = sorted(players, key=lambda p: p.rating, reverse=True)
    return [
        RankingRow(index, p.name, p.rating, p.wins, p.losses)
        for index, p in enumerate(ordered, start=1)
    ]


def recent_matches(matches: Sequence[Match], limit: int = RECENT_LIMIT) -> list[Match]:
    """Most recent matches first, at most `limit` of them."""
    if limit <= 0:
        return []
    return list(reversed(matches[-limit:]))


def format_change(change: int) -> str:
    """Format a rating change, e.g. "+16" or "-16"."""
    return f"+{change}" if change > 0 else str(change)


def winner_options(player1: str | None, player2: str | None) -> list[str]:
    """Names that can be picked as winner for a pairing."""
    if player1 and player2 and player1 != player2:
        return [player1, player2]
    return []


def series_for(players: Sequence[Player]) -> dict[str, list[tuple[int, int]]]:
    """Rating history per player as (match, rating) points."""
    return {
        player.name: [(point.match, point.rating) for point in player.history]
        for player in players
    }


def chart_datasets(players: Sequence[Player]) -> list[dict[str, Any]]:
    """Line chart datasets, one per player, with match number on x."""
    return [
        {
            "label": name,
            "data": [{"x": match, "y": rating} for match, rating in points],
        }
        for name, points in series_for(players).items()
    ]
