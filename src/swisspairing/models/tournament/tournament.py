"""Tournament snapshot - the state exchanged with the round controller.

The snapshot holds the roster as of the last closed round and every round's
pairings. It performs no I/O; callers persist ``to_dict()`` however they like.
"""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from swisspairing.constants import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SETUP,
    TOURNAMENT_STATUSES,
)
from swisspairing.exceptions import (
    InvalidConfigurationException,
    InvalidSnapshotException,
)
from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player
from swisspairing.type_hints import Status

from .tournament_config import TournamentConfig


@dataclass
class Tournament:
    """Snapshot of a Swiss tournament.

    Attributes:
        config: Tournament settings (name, total rounds, bye score)
        status: ``SETUP``, ``IN_PROGRESS`` or ``COMPLETED``
        players: Roster with aggregates as of the last closed round
        pairings_history: One list of pairings per generated round
        current_round: Number of the open (or last) round, 0 before start
        initial_players: Roster as entered, used to recalculate aggregates
    """

    config: TournamentConfig = field(default_factory=TournamentConfig)
    status: Status = STATUS_SETUP
    players: List[Player] = field(default_factory=list)
    pairings_history: List[List[Pairing]] = field(default_factory=list)
    current_round: int = 0
    initial_players: List[Player] = field(default_factory=list)

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def total_rounds(self) -> int:
        return self.config.total_rounds

    @property
    def is_in_progress(self) -> bool:
        return self.status == STATUS_IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def current_pairings(self) -> List[Pairing]:
        """Pairings of the current round, empty before the tournament starts."""
        if 1 <= self.current_round <= len(self.pairings_history):
            return self.pairings_history[self.current_round - 1]
        return []

    def get_round(self, round_number: int) -> Optional[List[Pairing]]:
        if 1 <= round_number <= len(self.pairings_history):
            return self.pairings_history[round_number - 1]
        return None

    def get_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the snapshot to a JSON-ready dictionary."""
        return {
            "status": self.status,
            "players": [p.to_dict() for p in self.players],
            "pairingsHistory": [
                [pairing.to_dict() for pairing in round_pairings]
                for round_pairings in self.pairings_history
            ],
            "currentRound": self.current_round,
            "totalRounds": self.total_rounds,
            "config": self.config.to_dict(),
            "initialPlayers": [p.to_dict() for p in self.initial_players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize a snapshot.

        ``config`` and ``initialPlayers`` are optional so that bare snapshots
        of the shape ``{status, players, pairingsHistory, currentRound,
        totalRounds}`` load too.
        """
        try:
            status = data["status"]
            if status not in TOURNAMENT_STATUSES:
                raise ValueError(f"unknown status {status!r}")
            config_data = dict(data.get("config") or {})
            config_data.setdefault("totalRounds", data["totalRounds"])
            config = TournamentConfig.from_dict(config_data)
            players = [Player.from_dict(p) for p in data.get("players", [])]
            initial = data.get("initialPlayers")
            initial_players = (
                [Player.from_dict(p) for p in initial]
                if initial
                else [p.reset() for p in players]
            )
            return cls(
                config=config,
                status=status,
                players=players,
                pairings_history=[
                    [Pairing.from_dict(p) for p in round_pairings]
                    for round_pairings in data.get("pairingsHistory", [])
                ],
                current_round=int(data.get("currentRound", 0)),
                initial_players=initial_players,
            )
        except InvalidConfigurationException as e:
            raise InvalidSnapshotException(str(e)) from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSnapshotException(f"Invalid tournament snapshot: {e}") from e
