"""Swiss Pairing - Swiss-system pairing engine and round controller."""

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

from swisspairing.models import Pairing, Player
from swisspairing.pairing import (
    ByeSelector,
    ColorAllocator,
    SwissPairingEngine,
    assign_colors,
    generate_initial_pairings,
    generate_next_round_pairings,
)
from swisspairing.tournament import TiebreakCalculator, compute_tie_break

__version__ = "0.1.0"

__all__ = [
    "ByeSelector",
    "ColorAllocator",
    "Pairing",
    "Player",
    "SwissPairingEngine",
    "TiebreakCalculator",
    "assign_colors",
    "compute_tie_break",
    "generate_initial_pairings",
    "generate_next_round_pairings",
]
