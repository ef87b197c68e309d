"""Pairing record for a single board of a round."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from swisspairing.constants import GAME_RESULTS, RESULT_BYE
from swisspairing.exceptions import InvalidSnapshotException
from swisspairing.models.player import Player
from swisspairing.type_hints import BLACK, WHITE, Colour, MaybeResult


@dataclass(frozen=True)
class Pairing:
    """One table of one round.

    A pairing without a black player is a bye. Pairings are immutable; use
    :meth:`with_result` and :meth:`with_players` to derive changed copies.

    Attributes
    ----------
    round : int
        Round number (1-indexed).
    table : int
        Table number, dense 1..N within the round.
    white : Player
        White player, or the sole player of a bye.
    black : Player or None
        Black player, None for a bye.
    result : str or None
        ``1-0``, ``0-1``, ``1/2-1/2``, ``BYE`` or None while unset.
    """

    round: int
    table: int
    white: Player
    black: Optional[Player] = None
    result: MaybeResult = None

    @property
    def is_bye(self) -> bool:
        return self.black is None

    @property
    def player_ids(self) -> Tuple[int, ...]:
        if self.black is None:
            return (self.white.id,)
        return (self.white.id, self.black.id)

    def involves(self, player_id: int) -> bool:
        return player_id in self.player_ids

    def colour_of(self, player_id: int) -> Optional[Colour]:
        """Colour held by ``player_id`` on this board, None for a bye or absence."""
        if self.black is None:
            return None
        if self.white.id == player_id:
            return WHITE
        if self.black.id == player_id:
            return BLACK
        return None

    def opponent_of(self, player_id: int) -> Optional[Player]:
        if self.black is None:
            return None
        if self.white.id == player_id:
            return self.black
        if self.black.id == player_id:
            return self.white
        return None

    def with_result(self, result: MaybeResult) -> "Pairing":
        return replace(self, result=result)

    def with_players(self, white: Player, black: Optional[Player]) -> "Pairing":
        """Copy with new seats; the result resets (a bye keeps ``BYE``)."""
        return replace(
            self,
            white=white,
            black=black,
            result=RESULT_BYE if black is None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "round": self.round,
            "table": self.table,
            "white": self.white.to_dict(),
            "black": self.black.to_dict() if self.black is not None else None,
            "result": self.result,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize pairing from dictionary."""
        try:
            black_data = data.get("black")
            result = data.get("result")
            if result is not None and result not in GAME_RESULTS + (RESULT_BYE,):
                raise ValueError(f"unknown result {result!r}")
            return cls(
                round=int(data["round"]),
                table=int(data["table"]),
                white=Player.from_dict(data["white"]),
                black=Player.from_dict(black_data) if black_data else None,
                result=result,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSnapshotException(f"Invalid pairing record: {e}") from e
