"""Pairing engine: colour allocation, bye selection and Swiss pairing."""

from swisspairing.pairing.bye import ByeSelector
from swisspairing.pairing.colors import (
    ColorAllocator,
    ColorPreference,
    PreferenceStrength,
    assign_colors,
    classify_preference,
)
from swisspairing.pairing.swiss import (
    SwissPairingEngine,
    generate_initial_pairings,
    generate_next_round_pairings,
)

__all__ = [
    "ByeSelector",
    "ColorAllocator",
    "ColorPreference",
    "PreferenceStrength",
    "SwissPairingEngine",
    "assign_colors",
    "classify_preference",
    "generate_initial_pairings",
    "generate_next_round_pairings",
]
