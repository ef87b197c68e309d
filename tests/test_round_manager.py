import random
from collections import Counter

import pytest

from swisspairing.constants import (
    GAME_RESULTS,
    RESULT_BLACK_WIN,
    RESULT_BYE,
    RESULT_DRAW,
    RESULT_WHITE_WIN,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SETUP,
)
from swisspairing.controllers.player import create_players
from swisspairing.controllers.tournament import RoundManager
from swisspairing.exceptions import (
    DuplicatePlayerException,
    InvalidConfigurationException,
    InvalidPairingException,
    InvalidPlayerDataException,
    PlayerNotFoundException,
    RoundNotFoundException,
    TableNotFoundException,
    TournamentStateException,
)
from swisspairing.models.player import Player
from swisspairing.models.tournament import Tournament, TournamentConfig
from swisspairing.type_hints import WHITE

RATINGS = [2830, 2805, 2794, 2775, 2770, 2763, 2757, 2754]


def _roster(ratings=RATINGS):
    return [Player(id=i, rating=r, name=f"P{i}") for i, r in enumerate(ratings, start=1)]


def _board(pairing):
    return (pairing.white.id, pairing.black.id if pairing.black else None)


def _finish_round(manager, result=RESULT_WHITE_WIN):
    for pairing in manager.tournament.current_pairings:
        if not pairing.is_bye:
            manager.record_result(pairing.table, result)


@pytest.fixture
def manager():
    m = RoundManager()
    m.start(_roster())
    return m


# ========== Start ==========


def test_start_pairs_round_one(manager):
    t = manager.tournament

    assert t.status == STATUS_IN_PROGRESS
    assert t.current_round == 1
    assert t.total_rounds == 3
    assert [_board(p) for p in t.current_pairings] == [(1, 5), (2, 6), (3, 7), (4, 8)]
    assert all(p.score == 0.0 for p in t.initial_players)


def test_start_discards_previous_history():
    roster = _roster()
    roster[0].score = 3.0
    roster[0].opponents = [2]
    roster[0].color_history = [WHITE]

    m = RoundManager()
    m.start(roster, total_rounds=5, name="Club Open")

    assert m.tournament.get_player(1).score == 0.0
    assert m.tournament.name == "Club Open"
    assert m.tournament.total_rounds == 5


def test_start_rejects_zero_rounds():
    m = RoundManager()

    with pytest.raises(InvalidConfigurationException):
        m.start(_roster(), total_rounds=0)

    assert m.tournament.status == STATUS_SETUP
    assert m.tournament.pairings_history == []


def test_start_twice_is_rejected(manager):
    with pytest.raises(TournamentStateException):
        manager.start(_roster())


def test_start_validates_roster():
    with pytest.raises(InvalidPlayerDataException):
        RoundManager().start([])
    with pytest.raises(InvalidPlayerDataException):
        RoundManager().start([Player(id=1, rating=1500, name="  "), Player(id=2, rating=1500, name="B")])
    with pytest.raises(InvalidPlayerDataException):
        RoundManager().start([Player(id=1, rating=50, name="A")])
    with pytest.raises(DuplicatePlayerException):
        RoundManager().start([Player(id=1, rating=1500, name="A"), Player(id=1, rating=1400, name="B")])


def test_create_players_assigns_ids_and_accepts_elo():
    players = create_players([{"name": " Ann ", "rating": 1800}, {"name": "Bo", "elo": 1650}])

    assert [(p.id, p.name, p.rating) for p in players] == [(1, "Ann", 1800), (2, "Bo", 1650)]


def test_create_players_rejects_bad_rating():
    with pytest.raises(InvalidPlayerDataException):
        create_players([{"name": "Ann", "rating": "strong"}])


# ========== Results and round advance ==========


def test_record_result_replaces_in_place(manager):
    manager.record_result(2, RESULT_DRAW)
    manager.record_result(2, RESULT_BLACK_WIN)

    assert manager.tournament.current_pairings[1].result == RESULT_BLACK_WIN
    assert not manager.all_results_submitted


def test_advance_requires_all_results(manager):
    manager.record_result(1, RESULT_WHITE_WIN)

    with pytest.raises(TournamentStateException):
        manager.advance_round()

    assert manager.tournament.current_round == 1
    assert all(p.score == 0.0 for p in manager.tournament.players)


def test_advance_round_is_idempotent(manager):
    _finish_round(manager)

    assert manager.advance_round(1) is True
    scores = {p.id: p.score for p in manager.tournament.players}
    assert manager.advance_round(1) is False

    t = manager.tournament
    assert t.current_round == 2
    assert len(t.pairings_history) == 2
    assert {p.id: p.score for p in t.players} == scores
    assert scores == {1: 1.0, 2: 1.0, 3: 1.0, 4: 1.0, 5: 0.0, 6: 0.0, 7: 0.0, 8: 0.0}


def test_advance_unknown_round(manager):
    with pytest.raises(RoundNotFoundException):
        manager.advance_round(2)
    with pytest.raises(RoundNotFoundException):
        manager.advance_round(0)


def test_advance_before_start():
    with pytest.raises(TournamentStateException):
        RoundManager().advance_round()


def test_last_round_completes_tournament():
    m = RoundManager()
    m.start(_roster(RATINGS[:4]), total_rounds=1)
    _finish_round(m, RESULT_DRAW)

    assert m.advance_round() is True
    assert m.tournament.status == STATUS_COMPLETED
    assert len(m.tournament.pairings_history) == 1
    assert m.advance_round(1) is False
    with pytest.raises(TournamentStateException):
        m.record_result(1, RESULT_WHITE_WIN)


# ========== Swaps ==========


def test_swap_players_exchanges_seats(manager):
    manager.record_result(1, RESULT_WHITE_WIN)
    manager.record_result(3, RESULT_DRAW)

    updated = manager.swap_players(1, 1, 2, 6)

    assert [_board(p) for p in updated] == [(6, 5), (2, 1), (3, 7), (4, 8)]
    assert updated[0].result is None
    assert updated[1].result is None
    assert updated[2].result == RESULT_DRAW
    assert manager.tournament.current_pairings == updated


def test_swap_into_bye_table():
    m = RoundManager()
    m.start(_roster(RATINGS[:7]))
    # Round 1: 1-4, 2-5, 3-6, bye for 7

    updated = m.swap_players(1, 1, 4, 7)

    assert _board(updated[0]) == (7, 4)
    assert _board(updated[3]) == (1, None)
    assert updated[3].result == RESULT_BYE


def test_failed_swap_changes_nothing(manager):
    before = list(manager.tournament.current_pairings)

    with pytest.raises(TableNotFoundException):
        manager.swap_players(1, 1, 9, 5)
    with pytest.raises(PlayerNotFoundException):
        manager.swap_players(1, 2, 2, 6)
    with pytest.raises(InvalidPairingException):
        manager.swap_players(1, 1, 1, 5)

    assert manager.tournament.current_pairings == before


# ========== Queries ==========


def test_live_standings_project_open_results(manager):
    manager.record_result(1, RESULT_BLACK_WIN)

    standings = manager.live_standings()

    leader = standings[0]
    assert leader.player.id == 5
    assert leader.score == 1.0
    assert leader.colours == ["B"]
    assert manager.tournament.get_player(5).score == 0.0
    assert [e.rank for e in standings] == list(range(1, 9))


def test_live_standings_use_projected_tiebreaks(manager):
    _finish_round(manager)
    manager.advance_round()
    # Round 2 pairs the winners together
    table = next(
        p.table for p in manager.tournament.current_pairings if p.white.score == 0.0
    )
    manager.record_result(table, RESULT_WHITE_WIN)

    standings = {e.player.id: e for e in manager.live_standings()}
    winner = next(
        p for p in manager.tournament.current_pairings if p.table == table
    ).white
    round_one_opponent = winner.opponents[0]

    assert standings[round_one_opponent].tiebreak == 1.0


def test_player_history(manager):
    _finish_round(manager)
    manager.advance_round()

    history = manager.player_history(1)

    assert len(history) == 2
    first = history[0]
    assert (first.round, first.opponent.id, first.colour) == (1, 5, WHITE)
    assert first.result == RESULT_WHITE_WIN
    assert not first.is_bye
    assert history[1].result is None

    with pytest.raises(PlayerNotFoundException):
        manager.player_history(42)


def test_recalculate_players_matches_roster(manager):
    _finish_round(manager)
    manager.advance_round()
    expected = [p.to_dict() for p in manager.tournament.players]

    recalculated = manager.recalculate_players()

    assert [p.to_dict() for p in recalculated] == expected


def test_manager_keeps_configured_bye_score():
    t = Tournament(config=TournamentConfig(bye_score=0.5))
    m = RoundManager(t)
    m.start(_roster(RATINGS[:3]), total_rounds=2)
    _finish_round(m)
    m.advance_round()

    assert m.tournament.get_player(3).score == 0.5
    assert m.tournament.get_player(3).had_bye


# ========== Simulation ==========


@pytest.mark.parametrize("seed, size", [(1, 11), (7, 10), (23, 9), (42, 16)])
def test_simulated_tournament(seed, size, caplog):
    rng = random.Random(seed)
    roster = [
        Player(id=i, rating=rng.randint(1200, 2400), name=f"P{i}")
        for i in range(1, size + 1)
    ]
    m = RoundManager()
    m.start(roster, total_rounds=5)

    bye_recipients = []
    while not m.tournament.is_completed:
        pairings = m.tournament.current_pairings
        seated = Counter(pid for p in pairings for pid in p.player_ids)
        assert sorted(seated) == list(range(1, size + 1))
        assert set(seated.values()) == {1}
        assert [p.table for p in pairings] == list(range(1, len(pairings) + 1))
        assert all(not p.is_bye for p in pairings[:-1])
        bye_recipients.extend(p.white.id for p in pairings if p.is_bye)

        for pairing in pairings:
            if not pairing.is_bye:
                m.record_result(pairing.table, rng.choice(GAME_RESULTS))
        m.advance_round()

    t = m.tournament
    assert t.status == STATUS_COMPLETED
    assert len(t.pairings_history) == 5
    assert len(bye_recipients) == len(set(bye_recipients))

    games = sum(1 for rnd in t.pairings_history for p in rnd if not p.is_bye)
    assert sum(p.score for p in t.players) == games + len(bye_recipients)
    assert all(len(p.opponents) == len(p.color_history) for p in t.players)

    if "forced repeat pairing" not in caplog.text:
        meetings = Counter(
            frozenset(p.player_ids)
            for rnd in t.pairings_history
            for p in rnd
            if not p.is_bye
        )
        assert max(meetings.values()) == 1

    assert [p.to_dict() for p in m.recalculate_players()] == [
        p.to_dict() for p in t.players
    ]
