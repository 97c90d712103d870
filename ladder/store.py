"""Persistent storage of ladder players and matches."""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path

from .errors import DuplicateName, EmptyName, PersistenceFailure, PlayerNotFound
from .models import Match, Player, seed_players


logger = logging.getLogger("ladder:store")

PLAYERS_KEY = "tennisPlayers"
MATCHES_KEY = "tennisMatches"


class KeyValueBackend:
    """A namespace of string values, in the manner of browser local storage."""

    def get(self, key: str) -> str | None:
        """Get the value stored under a key, or None if there is none."""
        raise NotImplementedError

    def set_many(self, values: Mapping[str, str]) -> None:
        """Write all values together; either every key is written or none."""
        raise NotImplementedError


class MemoryBackend(KeyValueBackend):
    """Backend holding values in a dict."""

    def __init__(self, data: dict[str, str] | None = None):
        """Initialize the backend, optionally with existing values."""
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        """Get a value from the dict."""
        return self.data.get(key)

    def set_many(self, values: Mapping[str, str]) -> None:
        """Update the dict with all values at once."""
        self.data.update(values)


class JsonFileBackend(KeyValueBackend):
    """Backend keeping the whole namespace in one JSON document on disk."""

    def __init__(self, path: Path | str):
        """Initialize the backend.

        Args:
            path: File holding the namespace; created on first write
        """
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        """Read the whole namespace; a missing file is an empty one."""
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> str | None:
        """Get a value from the file, reading it afresh."""
        return self._read().get(key)

    def set_many(self, values: Mapping[str, str]) -> None:
        """Merge values into the file and replace it in one step."""
        try:
            data = self._read()
        except ValueError:
            logger.warning(f"Overwriting unreadable store file {self.path}")
            data = {}
        data.update(values)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target so os.replace stays on one filesystem
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class RatingStore:
    """Owner of the ladder's players and matches.

    State is only changed through `add_player`, `reset` and `save`; readers
    get tuples of the current records.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        players_key: str = PLAYERS_KEY,
        matches_key: str = MATCHES_KEY,
    ):
        """Initialize the store and load its current state.

        Args:
            backend: Key-value namespace holding the ladder
            players_key: Key of the serialized players
            matches_key: Key of the serialized matches
        """
        self.backend = backend
        self.players_key = players_key
        self.matches_key = matches_key
        self.lock = threading.RLock()
        self._players, self._matches = self.load()

    @property
    def players(self) -> tuple[Player, ...]:
        """Current players in insertion order; the records are frozen."""
        return tuple(self._players)

    @property
    def matches(self) -> tuple[Match, ...]:
        """Recorded matches, oldest first."""
        return tuple(self._matches)

    def load(self) -> tuple[list[Player], list[Match]]:
        """Read players and matches from the backend.

        A missing key yields that collection's default. Unreadable or invalid
        data is treated as no data at all and yields the seed defaults.

        Returns:
            Tuple of (players, matches)
        """
        try:
            raw_players = self.backend.get(self.players_key)
            raw_matches = self.backend.get(self.matches_key)

            if raw_players is None:
                players = seed_players()
            else:
                players = [Player.model_validate(p) for p in json.loads(raw_players)]

            if raw_matches is None:
                matches = []
            else:
                matches = [Match.model_validate(m) for m in json.loads(raw_matches)]
        except (OSError, TypeError, ValueError) as error:
            logger.warning(f"Stored ladder data is unreadable, using defaults: {error}")
            return seed_players(), []

        logger.debug(f"Loaded {len(players)} players and {len(matches)} matches")
        return players, matches

    def save(self, players: Iterable[Player], matches: Iterable[Match]) -> None:
        """Persist both collections and make them the current state.

        Raises:
            PersistenceFailure: The write failed; the current state is unchanged
        """
        players = list(players)
        matches = list(matches)
        with self.lock:
            try:
                values = {
                    self.players_key: json.dumps([p.model_dump() for p in players]),
                    self.matches_key: json.dumps([m.model_dump() for m in matches]),
                }
                self.backend.set_many(values)
            except (OSError, TypeError, ValueError) as error:
                logger.error(f"Saving ladder failed: {error}")
                raise PersistenceFailure(f"Could not save ladder: {error}") from error
            self._players = players
            self._matches = matches

    def find_player(self, name: str) -> Player | None:
        """Look up a player by exact name, returning None if there is none."""
        for player in self._players:
            if player.name == name:
                return player
        return None

    def get_player(self, name: str) -> Player:
        """Look up a player by exact name.

        Raises:
            PlayerNotFound: No player has that name
        """
        player = self.find_player(name)
        if player is None:
            raise PlayerNotFound(name)
        return player

    def add_player(self, name: str) -> Player:
        """Add a new player at the default rating.

        Args:
            name: Player name; surrounding whitespace is ignored

        Returns:
            The new player

        Raises:
            EmptyName: The name is blank
            DuplicateName: A player with that name exists
        """
        name = name.strip()
        if not name:
            raise EmptyName()
        with self.lock:
            if self.find_player(name) is not None:
                raise DuplicateName(name)
            player = Player(name=name)
            self.save([*self._players, player], self._matches)
        logger.info(f"Added player {name}")
        return player

    def reset(self) -> None:
        """Replace all players and matches with the seed defaults."""
        with self.lock:
            self.save(seed_players(), [])
        logger.info("Ladder reset to defaults")
