"""Standings ordering and live score projection."""

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
from typing import Dict, List, Mapping, Optional, Sequence

from swisspairing.constants import BYE_SCORE, COLOUR_LABELS, RESULT_BYE, RESULT_POINTS
from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player
from swisspairing.tournament import TiebreakCalculator


@dataclass
class StandingsEntry:
    """One row of the standings table."""

    rank: int
    player: Player
    score: float
    tiebreak: float
    colours: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rank": self.rank,
            "id": self.player.id,
            "name": self.player.name,
            "rating": self.player.rating,
            "score": self.score,
            "tieBreak": self.tiebreak,
            "colours": list(self.colours),
        }


def project_live_scores(
    players: Sequence[Player],
    open_pairings: Sequence[Pairing],
    bye_score: float = BYE_SCORE,
) -> Dict[int, float]:
    """Overlay the open round's entered results on the last closed scores.

    Nothing on the players is changed; tables without a result contribute
    nothing.

    Returns:
        Mapping of player id to projected score
    """
    base = {p.id: p.score for p in players}
    live = dict(base)
    for pairing in open_pairings:
        if pairing.result is None:
            continue
        if pairing.black is None:
            if pairing.result == RESULT_BYE:
                live[pairing.white.id] = base.get(pairing.white.id, 0.0) + bye_score
            continue
        if pairing.result in RESULT_POINTS:
            white_points, black_points = RESULT_POINTS[pairing.result]
            live[pairing.white.id] = base.get(pairing.white.id, 0.0) + white_points
            live[pairing.black.id] = base.get(pairing.black.id, 0.0) + black_points
    return live


def _colour_sequence(
    player: Player, open_pairings: Optional[Sequence[Pairing]]
) -> List[str]:
    colours = [COLOUR_LABELS[c] for c in player.color_history]
    for pairing in open_pairings or ():
        colour = pairing.colour_of(player.id)
        if colour is not None:
            colours.append(COLOUR_LABELS[colour])
            break
    return colours


def build_standings(
    players: Sequence[Player],
    scores: Optional[Mapping[int, float]] = None,
    open_pairings: Optional[Sequence[Pairing]] = None,
    calculator: Optional[TiebreakCalculator] = None,
) -> List[StandingsEntry]:
    """Order players by score, tiebreak and rating.

    Args:
        players: The full player pool
        scores: Optional score override by id, e.g. from project_live_scores
        open_pairings: Open round pairings whose colours are appended
        calculator: Tiebreak calculator to use

    Returns:
        Standings entries ranked from 1
    """
    calculator = calculator or TiebreakCalculator()
    scores = dict(scores or {})
    tiebreaks = calculator.calculate_all_tiebreaks(players, scores)

    def score_of(player: Player) -> float:
        return scores.get(player.id, player.score)

    ordered = sorted(
        players,
        key=lambda p: calculator.sort_key(p, score_of(p), tiebreaks[p.id]),
    )
    return [
        StandingsEntry(
            rank=rank,
            player=player,
            score=score_of(player),
            tiebreak=tiebreaks[player.id],
            colours=_colour_sequence(player, open_pairings),
        )
        for rank, player in enumerate(ordered, start=1)
    ]
