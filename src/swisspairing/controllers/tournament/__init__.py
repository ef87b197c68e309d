from swisspairing.controllers.tournament.result_recorder import ResultRecorder
from swisspairing.controllers.tournament.round_manager import MatchRecord, RoundManager
from swisspairing.controllers.tournament.standings import (
    StandingsEntry,
    build_standings,
    project_live_scores,
)

__all__ = [
    "MatchRecord",
    "ResultRecorder",
    "RoundManager",
    "StandingsEntry",
    "build_standings",
    "project_live_scores",
]
