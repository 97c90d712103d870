"""Ladder records: players, their rating history, and matches."""

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_RATING = 1500
SEED_NAMES = ("Alice", "Bob", "Charlie")


class HistoryPoint(BaseModel):
    """A player's rating after a given match number."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    match: int
    rating: int


class Player(BaseModel):
    """Ladder player.

    Records are frozen; the store replaces a player with an updated copy
    rather than changing it in place.

    `history` starts with the seed point `{match: 0, rating: 1500}` and gains
    one point per match played, so its last rating is the current rating.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    rating: int = DEFAULT_RATING
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    history: tuple[HistoryPoint, ...] = Field(
        default_factory=lambda: (HistoryPoint(match=0, rating=DEFAULT_RATING),)
    )


class Match(BaseModel):
    """A recorded match between two players."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    player1: str
    player2: str
    winner: str
    p1_rating_change: int
    p2_rating_change: int


def seed_players() -> list[Player]:
    """Fresh seed players, never shared between calls."""
    return [Player(name=name) for name in SEED_NAMES]
