import json

import pytest

from swisspairing.cli import main


@pytest.fixture
def roster_file(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(
        json.dumps(
            [
                {"name": "Ann", "rating": 2100},
                {"name": "Ben", "rating": 2000},
                {"name": "Cyd", "rating": 1900},
                {"name": "Dee", "rating": 1800},
            ]
        )
    )
    return path


@pytest.fixture
def state_file(tmp_path, roster_file):
    path = tmp_path / "state.json"
    assert main(["start", "--players", str(roster_file), "--rounds", "2", "--out", str(path)]) == 0
    return path


def _state(path):
    return json.loads(path.read_text())


def test_start_writes_snapshot(state_file, capsys):
    state = _state(state_file)

    assert state["status"] == "IN_PROGRESS"
    assert state["currentRound"] == 1
    assert state["totalRounds"] == 2
    assert len(state["pairingsHistory"][0]) == 2


def test_start_prints_round_one(tmp_path, roster_file, capsys):
    out = tmp_path / "other.json"
    main(["start", "--players", str(roster_file), "--out", str(out)])

    printed = capsys.readouterr().out
    assert "Ann (2100)" in printed
    assert "Cyd (1900)" in printed


def test_full_round_through_cli(state_file, capsys):
    assert main(["result", str(state_file), "--table", "1", "--result", "1-0"]) == 0
    assert main(["result", str(state_file), "--table", "2", "--result", "1/2-1/2"]) == 0
    assert main(["advance", str(state_file)]) == 0

    state = _state(state_file)
    assert state["currentRound"] == 2
    scores = {p["name"]: p["score"] for p in state["players"]}
    assert scores == {"Ann": 1.0, "Ben": 0.5, "Cyd": 0.0, "Dee": 0.5}

    # Closing round 1 again is a no-op
    assert main(["advance", str(state_file), "--round", "1"]) == 0
    assert _state(state_file)["currentRound"] == 2
    assert "already closed" in capsys.readouterr().out


def test_standings_and_pairings(state_file, capsys):
    main(["result", str(state_file), "--table", "1", "--result", "0-1"])
    capsys.readouterr()

    assert main(["standings", str(state_file)]) == 0
    rows = [
        line for line in capsys.readouterr().out.splitlines()
        if not line.startswith("LVL:")
    ]
    assert "Rank" in rows[0]
    assert "Cyd" in rows[1]

    assert main(["pairings", str(state_file), "--round", "1"]) == 0
    assert "0-1" in capsys.readouterr().out


def test_errors_return_non_zero(state_file, tmp_path):
    assert main(["result", str(state_file), "--table", "7", "--result", "1-0"]) == 1
    assert main(["advance", str(state_file)]) == 1
    assert main(["pairings", str(state_file), "--round", "5"]) == 1
    assert main(["standings", str(tmp_path / "missing.json")]) == 1

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert main(["standings", str(broken)]) == 1


def test_zero_rounds_is_rejected(tmp_path, roster_file):
    out = tmp_path / "zero.json"

    assert main(["start", "--players", str(roster_file), "--rounds", "0", "--out", str(out)]) == 1
    assert not out.exists()
