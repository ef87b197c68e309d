from swisspairing.models.tournament.tournament import Tournament
from swisspairing.models.tournament.tournament_config import (
    TournamentConfig,
    recommended_rounds,
)

__all__ = ["Tournament", "TournamentConfig", "recommended_rounds"]
