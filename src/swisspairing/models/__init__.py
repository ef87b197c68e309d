from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player

__all__ = ["Pairing", "Player"]
