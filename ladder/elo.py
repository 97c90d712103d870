"""Elo rating computation for the ladder."""

import math


K_FACTOR = 32


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up.

    Matches how ratings were rounded when the ladder ran in the browser,
    so stored ratings stay reproducible.
    """
    return math.floor(value + 0.5)


class EloRank:
    """Elo ratings for ladder players, with a fixed K-factor and no draws."""

    def __init__(self, k_factor: int = K_FACTOR):
        """Initialize the rating system.

        Args:
            k_factor: Largest rating change a single match can cause
                (default: 32, so an even match moves each player by 16)
        """
        self.k_factor = k_factor

    def get_expected(self, rating_a: float, rating_b: float) -> float:
        """Chance that player A beats player B, given their ratings.

        A 400 point lead means ten to one odds; equal ratings give 0.5.
        The two players' expected scores always sum to 1.

        Args:
            rating_a: Rating of player A
            rating_b: Rating of player B (the opponent)

        Returns:
            Expected score for player A, strictly between 0 and 1
        """
        return 1 / (1 + 10 ** ((rating_b - rating_a) / 400))

    def update_rating(
        self,
        rating: int,
        expected: float,
        actual: int,
    ) -> int:
        """Update rating based on match result.

        Args:
            rating: Current rating
            expected: Expected score (0-1)
            actual: Actual score (0 for loss, 1 for win)

        Returns:
            New rating, rounded to an integer
        """
        return round_half_up(rating + self.k_factor * (actual - expected))
