import logging

from swisspairing.constants import RESULT_BYE
from swisspairing.models.player import Player
from swisspairing.pairing.bye import ByeSelector
from swisspairing.pairing.swiss import (
    SwissPairingEngine,
    generate_initial_pairings,
    generate_next_round_pairings,
)
from swisspairing.type_hints import BLACK, WHITE

SWISS_LOGGER = "swisspairing.pairing.swiss"


def _player(pid, rating, score=0.0, opponents=(), colours=(), had_bye=False):
    return Player(
        id=pid,
        rating=rating,
        name=f"P{pid}",
        score=score,
        opponents=list(opponents),
        color_history=list(colours),
        had_bye=had_bye,
    )


def _seated_ids(pairings):
    return [pid for p in pairings for pid in p.player_ids]


def _board(pairing):
    return (pairing.white.id, pairing.black.id if pairing.black else None)


# ========== Round 1 ==========


def test_round_one_top_half_against_bottom_half():
    ratings = [2830, 2805, 2794, 2775, 2770, 2763, 2757, 2754]
    players = [_player(i, r) for i, r in enumerate(ratings, start=1)]

    pairings = generate_initial_pairings(players)

    assert [_board(p) for p in pairings] == [(1, 5), (2, 6), (3, 7), (4, 8)]
    assert [p.table for p in pairings] == [1, 2, 3, 4]
    assert all(p.round == 1 and p.result is None for p in pairings)


def test_round_one_ignores_input_order():
    ratings = [2754, 2830, 2763, 2805, 2770, 2794, 2757, 2775]
    players = [_player(i, r) for i, r in enumerate(ratings, start=1)]

    pairings = generate_initial_pairings(players)

    # Ranked by rating: 2, 4, 6, 8 | 5, 3, 7, 1
    assert [_board(p) for p in pairings] == [(2, 5), (4, 3), (6, 7), (8, 1)]


def test_round_one_odd_field_gives_bye_to_lowest_rated():
    ratings = [1500, 1400, 1900, 1200, 1800, 1600, 1700]
    players = [_player(i, r) for i, r in enumerate(ratings, start=1)]

    pairings = generate_initial_pairings(players)

    assert len(pairings) == 4
    bye = pairings[-1]
    assert bye.is_bye
    assert bye.white.id == 4
    assert bye.result == RESULT_BYE
    assert bye.table == 4
    assert sorted(_seated_ids(pairings)) == list(range(1, 8))


def test_round_one_edge_sizes():
    assert generate_initial_pairings([]) == []

    single = generate_initial_pairings([_player(1, 1500)])
    assert len(single) == 1
    assert single[0].is_bye


# ========== Later rounds ==========


def test_next_round_empty_roster():
    assert generate_next_round_pairings([], 2) == []


def test_winners_meet_and_colours_alternate():
    players = [
        _player(1, 2000, 1.0, [3], [WHITE]),
        _player(2, 1900, 1.0, [4], [WHITE]),
        _player(3, 1800, 0.0, [1], [BLACK]),
        _player(4, 1700, 0.0, [2], [BLACK]),
    ]

    pairings = generate_next_round_pairings(players, 2)

    # Both winners want black; the higher rated one gets it
    assert [_board(p) for p in pairings] == [(2, 1), (3, 4)]
    assert all(p.round == 2 for p in pairings)


def test_unmatched_players_cascade_instead_of_repeating(caplog):
    players = [
        _player(1, 2000, 1.0, [2], [WHITE]),
        _player(2, 1900, 1.0, [1], [BLACK]),
        _player(3, 1800, 0.0, [4], [WHITE]),
        _player(4, 1700, 0.0, [3], [BLACK]),
    ]

    with caplog.at_level(logging.DEBUG, logger=SWISS_LOGGER):
        pairings = generate_next_round_pairings(players, 2)

    assert [_board(p) for p in pairings] == [(3, 1), (2, 4)]
    assert "cascading down" in caplog.text
    assert "fallback" not in caplog.text


def test_fallback_repairs_when_everyone_has_met(caplog):
    players = [
        _player(1, 2000, 1.5, [2, 3, 4], [WHITE, BLACK, WHITE]),
        _player(2, 1900, 1.5, [1, 4, 3], [BLACK, WHITE, BLACK]),
        _player(3, 1800, 1.5, [4, 1, 2], [WHITE, WHITE, BLACK]),
        _player(4, 1700, 1.5, [3, 2, 1], [BLACK, BLACK, WHITE]),
    ]

    with caplog.at_level(logging.WARNING):
        pairings = generate_next_round_pairings(players, 4)

    assert len(pairings) == 2
    assert sorted(_seated_ids(pairings)) == [1, 2, 3, 4]
    assert {frozenset(p.player_ids) for p in pairings} == {
        frozenset({1, 2}),
        frozenset({3, 4}),
    }
    assert "fallback repair" in caplog.text
    assert "forced repeat pairing" in caplog.text


class _NoByeSelector(ByeSelector):
    def select(self, players):
        return None


def test_single_leftover_after_repair_gets_residual_bye(caplog):
    # Nobody takes the primary bye, so the odd player falls through to repair
    players = [
        _player(1, 2000, 1.0, [2, 3], [WHITE, BLACK]),
        _player(2, 1900, 1.0, [1, 3], [BLACK, WHITE]),
        _player(3, 1800, 1.0, [1, 2], [WHITE, BLACK]),
    ]
    engine = SwissPairingEngine(bye_selector=_NoByeSelector())

    with caplog.at_level(logging.WARNING):
        pairings = engine.generate_next_round_pairings(players, 3)

    assert len(pairings) == 2
    last = pairings[-1]
    assert _board(last) == (3, None)
    assert last.result == RESULT_BYE
    assert last.table == 2
    assert "residual bye after fallback repair" in caplog.text
    assert "forced repeat pairing" in caplog.text


def test_absolute_clash_between_non_topscorers_is_avoided(caplog):
    # Both need black, neither is a topscorer: no constrained match exists
    players = [
        _player(1, 2000, 0.0, [10, 11], [WHITE, WHITE]),
        _player(2, 1900, 0.0, [12, 13], [WHITE, WHITE]),
    ]

    with caplog.at_level(logging.WARNING):
        pairings = generate_next_round_pairings(players, 3)

    assert len(pairings) == 1
    assert "fallback repair" in caplog.text
    assert "forced repeat" not in caplog.text


def test_topscorers_may_be_paired_despite_clash(caplog):
    players = [
        _player(1, 2000, 2.0, [10, 11], [WHITE, WHITE]),
        _player(2, 1900, 2.0, [12, 13], [WHITE, WHITE]),
    ]

    with caplog.at_level(logging.WARNING):
        pairings = generate_next_round_pairings(players, 3)

    # Equal colour difference: the higher rated player gets black
    assert [_board(p) for p in pairings] == [(2, 1)]
    assert "fallback" not in caplog.text


def test_later_round_bye_on_last_table():
    players = [
        _player(1, 2000, 1.0, [4], [WHITE]),
        _player(2, 1900, 1.0, [5], [WHITE]),
        _player(3, 1800, 1.0, [], [], had_bye=True),
        _player(4, 1700, 0.0, [1], [BLACK]),
        _player(5, 1600, 0.0, [2], [BLACK]),
    ]

    pairings = generate_next_round_pairings(players, 2)

    assert len(pairings) == 3
    assert pairings[-1].is_bye
    assert pairings[-1].white.id == 5
    assert pairings[-1].table == 3
    assert sorted(_seated_ids(pairings)) == [1, 2, 3, 4, 5]
    assert not any(p.is_bye for p in pairings[:-1])


def test_next_round_does_not_mutate_input():
    players = [
        _player(1, 2000, 1.0, [3], [WHITE]),
        _player(2, 1900, 0.5, [4], [BLACK]),
        _player(3, 1800, 0.0, [1], [BLACK]),
        _player(4, 1700, 0.5, [2], [WHITE]),
        _player(5, 1600, 1.0, [], [], had_bye=True),
    ]
    before = [p.to_dict() for p in players]

    generate_next_round_pairings(players, 2)

    assert [p.to_dict() for p in players] == before


def test_pairing_is_deterministic():
    players = [
        _player(i, 1500 + 37 * i, float(i % 3) / 2, [], [])
        for i in range(1, 12)
    ]
    engine = SwissPairingEngine()

    first = engine.generate_next_round_pairings(players, 2)
    second = engine.generate_next_round_pairings(list(reversed(players)), 2)

    assert [_board(p) for p in first] == [_board(p) for p in second]
