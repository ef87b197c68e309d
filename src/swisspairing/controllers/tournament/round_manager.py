"""Round management for tournaments.

This module handles all round-related operations on a tournament snapshot:
starting the tournament, result entry, manual swaps, and closing a round
followed by the next round's pairing.
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

from dataclasses import dataclass
from typing import List, Optional, Sequence

from swisspairing.constants import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SETUP,
)
from swisspairing.controllers.player import validate_roster
from swisspairing.controllers.tournament.result_recorder import (
    ResultRecorder,
    find_table_index,
)
from swisspairing.controllers.tournament.standings import (
    StandingsEntry,
    build_standings,
    project_live_scores,
)
from swisspairing.exceptions import (
    InvalidPairingException,
    PlayerNotFoundException,
    RoundNotFoundException,
    TableNotFoundException,
    TournamentStateException,
)
from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player
from swisspairing.models.tournament import (
    Tournament,
    TournamentConfig,
    recommended_rounds,
)
from swisspairing.pairing import SwissPairingEngine
from swisspairing.type_hints import Colour, MaybeResult
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class MatchRecord:
    """One round of a player's history."""

    round: int
    opponent: Optional[Player]
    colour: Optional[Colour]
    result: MaybeResult
    is_bye: bool


class RoundManager:
    """Manages round progression for a tournament snapshot.

    This class is the only writer of the snapshot. It is responsible for:
    - Starting the tournament and pairing round 1
    - Replacing results of the open round
    - Swapping players between tables of the open round
    - Closing a round and pairing the next one
    """

    def __init__(
        self,
        tournament: Optional[Tournament] = None,
        engine: Optional[SwissPairingEngine] = None,
    ) -> None:
        """Initialize the round manager.

        Args:
            tournament: Snapshot to manage, a fresh one in SETUP by default
            engine: Pairing engine, the default Swiss engine if omitted
        """
        self.tournament = tournament or Tournament()
        self.engine = engine or SwissPairingEngine()

    @property
    def recorder(self) -> ResultRecorder:
        return ResultRecorder(bye_score=self.tournament.config.bye_score)

    @property
    def closed_rounds(self) -> int:
        """Number of rounds whose results have been folded into the roster."""
        t = self.tournament
        if t.status == STATUS_COMPLETED:
            return t.current_round
        return max(0, t.current_round - 1)

    @property
    def all_results_submitted(self) -> bool:
        return all(p.result is not None for p in self.tournament.current_pairings)

    # ========== Lifecycle ==========

    def start(
        self,
        players: Sequence[Player],
        total_rounds: Optional[int] = None,
        name: Optional[str] = None,
    ) -> List[Pairing]:
        """Start the tournament and pair round 1.

        Args:
            players: The roster; tournament history on it is discarded
            total_rounds: Rounds to play, recommended_rounds() when omitted
            name: Tournament name, keeps the configured one when omitted

        Returns:
            Round 1 pairings

        Raises:
            TournamentStateException: If the tournament has already started
        """
        t = self.tournament
        if t.status != STATUS_SETUP:
            logger.error(f"Cannot start a tournament in status {t.status}")
            raise TournamentStateException("Tournament has already started")

        validate_roster(players)
        config = TournamentConfig(
            name=name if name is not None else t.config.name,
            total_rounds=(
                total_rounds
                if total_rounds is not None
                else recommended_rounds(len(players))
            ),
            bye_score=t.config.bye_score,
        )
        initial_players = [p.reset() for p in players]
        roster = [p.copy() for p in initial_players]
        round_one = self.engine.generate_initial_pairings(roster)

        t.config = config
        t.initial_players = initial_players
        t.players = roster
        t.pairings_history = [round_one]
        t.current_round = 1
        t.status = STATUS_IN_PROGRESS
        logger.info(
            f"Tournament '{config.name}' started: {len(roster)} players, "
            f"{config.total_rounds} rounds"
        )
        return round_one

    def record_result(self, table: int, result: MaybeResult) -> Pairing:
        """Replace the result of ``table`` in the open round.

        Returns:
            The updated pairing
        """
        t = self._require_in_progress("record a result")
        updated = self.recorder.record_result(t.current_pairings, table, result)
        t.pairings_history[t.current_round - 1] = updated
        return updated[find_table_index(updated, table)]

    def advance_round(self, round_number: Optional[int] = None) -> bool:
        """Close ``round_number`` and pair the next round.

        Closing a round that is already closed changes nothing, so the call
        can safely be repeated.

        Args:
            round_number: Round to close, the current round by default

        Returns:
            True if the round was closed now, False if it already was

        Raises:
            TournamentStateException: Before start, or while results are missing
            RoundNotFoundException: If the round has not been paired yet
        """
        t = self.tournament
        if t.status == STATUS_SETUP:
            logger.error("Cannot advance: tournament has not started")
            raise TournamentStateException("Tournament has not started")

        if round_number is None:
            round_number = t.current_round
        if round_number < 1 or round_number > t.current_round:
            logger.error(f"Cannot close round {round_number}: not paired")
            raise RoundNotFoundException(f"Round {round_number} has not been paired")

        if round_number <= self.closed_rounds:
            logger.info(f"Round {round_number} is already closed, nothing to do")
            return False

        pairings = t.current_pairings
        missing = [p.table for p in pairings if p.result is None]
        if missing:
            logger.error(f"Cannot close round {round_number}: tables {missing} open")
            raise TournamentStateException(
                f"Round {round_number} still has tables without result: {missing}"
            )

        players = self.recorder.apply_round(t.players, pairings)

        if t.current_round >= t.total_rounds:
            t.players = players
            t.status = STATUS_COMPLETED
            logger.info(f"Round {round_number} closed, tournament completed")
            return True

        next_round = self.engine.generate_next_round_pairings(
            players, t.current_round + 1
        )
        t.players = players
        t.pairings_history.append(next_round)
        t.current_round += 1
        logger.info(f"Round {round_number} closed, round {t.current_round} paired")
        return True

    # ========== Manual adjustments ==========

    def swap_players(
        self, table1: int, player1_id: int, table2: int, player2_id: int
    ) -> List[Pairing]:
        """Exchange two players seated on different tables of the open round.

        Each player takes the other's seat and colour. Results of both tables
        reset (a bye stays a bye). Nothing changes if any check fails.

        Returns:
            The open round's pairings after the swap
        """
        t = self._require_in_progress("swap players")
        if table1 == table2:
            logger.error(f"Cannot swap within a single table ({table1})")
            raise InvalidPairingException("Swapped players must sit at different tables")

        pairings = t.current_pairings
        idx1 = find_table_index(pairings, table1)
        idx2 = find_table_index(pairings, table2)
        for table, idx in ((table1, idx1), (table2, idx2)):
            if idx == -1:
                logger.error(f"Cannot swap: table {table} not found")
                raise TableNotFoundException(f"Table {table} is not in this round")

        pairing1, pairing2 = pairings[idx1], pairings[idx2]
        player1 = self._seated_player(pairing1, player1_id)
        player2 = self._seated_player(pairing2, player2_id)

        updated = list(pairings)
        updated[idx1] = self._reseat(pairing1, player1, player2)
        updated[idx2] = self._reseat(pairing2, player2, player1)
        t.pairings_history[t.current_round - 1] = updated
        logger.info(
            f"Round {t.current_round}: swapped {player1.display_name} (table {table1}) "
            f"with {player2.display_name} (table {table2})"
        )
        return updated

    @staticmethod
    def _seated_player(pairing: Pairing, player_id: int) -> Player:
        if pairing.white.id == player_id:
            return pairing.white
        if pairing.black is not None and pairing.black.id == player_id:
            return pairing.black
        logger.error(f"Player {player_id} is not seated at table {pairing.table}")
        raise PlayerNotFoundException(
            f"Player {player_id} is not seated at table {pairing.table}"
        )

    @staticmethod
    def _reseat(pairing: Pairing, leaving: Player, arriving: Player) -> Pairing:
        if pairing.white.id == leaving.id:
            return pairing.with_players(arriving, pairing.black)
        return pairing.with_players(pairing.white, arriving)

    def recalculate_players(self) -> List[Player]:
        """Rebuild the roster aggregates from the closed rounds."""
        t = self.tournament
        t.players = self.recorder.recalculate(
            t.initial_players, t.pairings_history[: self.closed_rounds]
        )
        return t.players

    # ========== Queries ==========

    def player_history(self, player_id: int) -> List[MatchRecord]:
        """Round by round history of one player, including the open round."""
        t = self.tournament
        if t.get_player(player_id) is None:
            raise PlayerNotFoundException(f"Player {player_id} is not on the roster")

        history = []
        for round_number, round_pairings in enumerate(t.pairings_history, start=1):
            pairing = next((p for p in round_pairings if p.involves(player_id)), None)
            if pairing is None:
                logger.debug(f"Player {player_id} has no pairing in round {round_number}")
                continue
            history.append(
                MatchRecord(
                    round=round_number,
                    opponent=pairing.opponent_of(player_id),
                    colour=pairing.colour_of(player_id),
                    result=pairing.result,
                    is_bye=pairing.is_bye,
                )
            )
        return history

    def live_standings(self) -> List[StandingsEntry]:
        """Standings including the open round's entered results."""
        t = self.tournament
        if t.status != STATUS_IN_PROGRESS:
            return build_standings(t.players)
        open_pairings = t.current_pairings
        scores = project_live_scores(t.players, open_pairings, t.config.bye_score)
        return build_standings(t.players, scores, open_pairings)

    def _require_in_progress(self, action: str) -> Tournament:
        t = self.tournament
        if t.status != STATUS_IN_PROGRESS:
            logger.error(f"Cannot {action}: tournament is {t.status}")
            raise TournamentStateException(
                f"Cannot {action} while the tournament is {t.status}"
            )
        return t
