"""Recording match results on the ladder."""

import logging

from .elo import EloRank
from .errors import InvalidWinner, SamePlayer
from .models import HistoryPoint, Match, Player
from .store import RatingStore


logger = logging.getLogger("ladder:recorder")


class MatchRecorder:
    """Applies match results to a rating store."""

    def __init__(self, store: RatingStore, elo: EloRank | None = None):
        """Initialize the recorder.

        Args:
            store: Store holding the players and matches
            elo: Rating system to use (default: K-factor 32)
        """
        self.store = store
        self.elo = elo or EloRank()

    def record_match(self, player1: str, player2: str, winner: str) -> Match:
        """Record a match and update both players' ratings.

        Each player's new rating is computed from both pre-match ratings and
        rounded on its own, so the two changes need not cancel out.

        Args:
            player1: Name of the first player
            player2: Name of the second player
            winner: Name of the winning player

        Returns:
            The recorded match

        Raises:
            SamePlayer: Both names are the same
            PlayerNotFound: A name does not match any player
            InvalidWinner: The winner is not one of the two players
            PersistenceFailure: Saving failed; nothing was changed
        """
        if player1 == player2:
            raise SamePlayer(player1)

        with self.store.lock:
            p1 = self.store.get_player(player1)
            p2 = self.store.get_player(player2)
            if winner not in (player1, player2):
                raise InvalidWinner(winner, player1, player2)

            expected1 = self.elo.get_expected(p1.rating, p2.rating)
            expected2 = self.elo.get_expected(p2.rating, p1.rating)
            score1, score2 = (1, 0) if winner == player1 else (0, 1)

            new_rating1 = self.elo.update_rating(p1.rating, expected1, score1)
            new_rating2 = self.elo.update_rating(p2.rating, expected2, score2)

            match_num = len(self.store.matches) + 1
            updated = {
                player1: _apply_result(p1, new_rating1, score1, match_num),
                player2: _apply_result(p2, new_rating2, score2, match_num),
            }
            match = Match(
                player1=player1,
                player2=player2,
                winner=winner,
                p1_rating_change=new_rating1 - p1.rating,
                p2_rating_change=new_rating2 - p2.rating,
            )

            players = [updated.get(p.name, p) for p in self.store.players]
            self.store.save(players, [*self.store.matches, match])

        logger.info(
            f"Match {match_num}: {player1} ({p1.rating} -> {new_rating1}) vs "
            f"{player2} ({p2.rating} -> {new_rating2}), winner {winner}"
        )
        return match


def _apply_result(player: Player, new_rating: int, score: int, match_num: int) -> Player:
    """Copy of the player with one more result applied.

    Args:
        player: Player before the match
        new_rating: Rating after the match
        score: 1 if the player won, 0 if they lost
        match_num: 1-based number of the match

    Returns:
        Updated player
    """
    return player.model_copy(
        update={
            "rating": new_rating,
            "wins": player.wins + score,
            "losses": player.losses + (1 - score),
            "history": (*player.history, HistoryPoint(match=match_num, rating=new_rating)),
        }
    )
