"""Errors raised by ladder operations."""


class LadderError(Exception):
    """Base class for ladder errors."""


class EmptyName(LadderError):
    """A player name was blank."""

    def __init__(self) -> None:
        super().__init__("Player name cannot be empty")


class DuplicateName(LadderError):
    """A player with the name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Player {name!r} already exists")
        self.name = name


class SamePlayer(LadderError):
    """A match was submitted with the same player on both sides."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Players must be different (got {name!r} twice)")
        self.name = name


class PlayerNotFound(LadderError):
    """No player has the given name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No player named {name!r}")
        self.name = name


class InvalidWinner(LadderError):
    """The winner named is not one of the match's players."""

    def __init__(self, winner: str, player1: str, player2: str) -> None:
        super().__init__(
            f"Winner {winner!r} must be {player1!r} or {player2!r}"
        )
        self.winner = winner
        self.player1 = player1
        self.player2 = player2


class PersistenceFailure(LadderError):
    """Stored ladder data could not be read or written."""
