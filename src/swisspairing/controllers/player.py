"""Player controller for roster creation and validation."""

from typing import Any, Iterable, List, Mapping, Sequence

from swisspairing.constants import DEFAULT_RATING, MAX_RATING, MIN_RATING
from swisspairing.exceptions import (
    DuplicatePlayerException,
    InvalidPlayerDataException,
)
from swisspairing.models.player import Player
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def create_players(entries: Iterable[Mapping[str, Any]]) -> List[Player]:
    """Create a fresh roster from setup entries.

    Parameters
    ----------
    entries : iterable of dict {
        name: str,
        rating: int,   (``elo`` is accepted as well)
        id: Optional[int] = position in the list, starting at 1,
        }
    """
    players = []
    for position, entry in enumerate(entries, start=1):
        rating = entry.get("rating", entry.get("elo", DEFAULT_RATING))
        try:
            players.append(
                Player(
                    id=int(entry.get("id", position)),
                    rating=int(rating),
                    name=str(entry.get("name", "")).strip(),
                )
            )
        except (TypeError, ValueError) as e:
            raise InvalidPlayerDataException(
                f"Invalid roster entry {position}: {e}"
            ) from e
    return players


def validate_roster(players: Sequence[Player]) -> None:
    """Check a roster before the tournament starts.

    Raises
    ------
    InvalidPlayerDataException
        If the roster is empty, a name is blank or a rating is out of range.
    DuplicatePlayerException
        If two players share an id.
    """
    if not players:
        raise InvalidPlayerDataException("Cannot start a tournament without players")

    seen = set()
    for player in players:
        if player.id in seen:
            logger.error(f"Duplicate player id {player.id}")
            raise DuplicatePlayerException(f"Player id {player.id} is used twice")
        seen.add(player.id)

        if not player.name.strip():
            raise InvalidPlayerDataException(
                f"Player {player.id}: name cannot be empty"
            )
        if not MIN_RATING <= player.rating <= MAX_RATING:
            raise InvalidPlayerDataException(
                f"Player {player.display_name}: rating must be between "
                f"{MIN_RATING} and {MAX_RATING}, got {player.rating}"
            )
