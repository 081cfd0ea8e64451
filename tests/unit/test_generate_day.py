"""
Tests for the generate_day script.

The service layer is patched; these tests cover argument handling, exit
codes and the save path.
"""

import pytest
from unittest.mock import patch

from app_types import (
    FailureKind,
    GenerationFailure,
    GenerationPolicy,
    GenerationResult,
    PairingMode,
)
from exceptions import DatabaseError
import generate_day
from match_generator import generate_matches
from tests.utils import generate_players

DATE = "2024-05-01"


@pytest.fixture
def generated():
    """Eight present players and a level-mode result for them."""
    players = generate_players(8)
    return players, generate_matches(players, GenerationPolicy())


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("generate_day.setup_logging") as setup_logging:
        yield setup_logging


def test_parser_defaults():
    args = generate_day.build_parser().parse_args([DATE])

    assert args.mode == "byLevel"
    assert args.min_games == 1
    assert args.courts is None
    assert args.max_score_diff is None
    assert args.save is False


def test_prints_tables_without_saving(generated, capsys, no_logging_setup):
    with patch("generate_day.generate_for_date", return_value=generated) as generate, patch(
        "generate_day.save_generated_matches"
    ) as save:
        exit_code = generate_day.main([DATE, "--mode", "random", "--max-score-diff", "4"])

    assert exit_code == 0
    no_logging_setup.assert_called_once()
    policy = generate.call_args[0][1]
    assert policy.mode == PairingMode.RANDOM
    assert policy.max_team_score_diff == 4
    save.assert_not_called()
    out = capsys.readouterr().out
    assert "Team 1" in out
    assert "Games" in out


def test_save_creates_session(generated, capsys):
    _, result = generated
    with patch("generate_day.generate_for_date", return_value=generated), patch(
        "generate_day.save_generated_matches", return_value=9
    ) as save, patch("generate_day.list_sessions", return_value=[{"id": 9}]):
        exit_code = generate_day.main([DATE, "--save"])

    assert exit_code == 0
    save.assert_called_once_with(DATE, result, PairingMode.BY_LEVEL)
    assert "Saved session 9" in capsys.readouterr().out


def test_generation_failure_exits_with_error(capsys):
    failed = GenerationResult(
        failure=GenerationFailure(
            kind=FailureKind.INSUFFICIENT_PLAYERS, message="Need at least 4 players"
        )
    )
    with patch("generate_day.generate_for_date", return_value=([], failed)):
        exit_code = generate_day.main([DATE])

    assert exit_code == 1
    assert "Need at least 4 players" in capsys.readouterr().out


def test_database_error_exits_with_error():
    with patch("generate_day.generate_for_date", side_effect=DatabaseError("down")):
        assert generate_day.main([DATE]) == 1


def test_invalid_min_games_exits_with_error():
    assert generate_day.main([DATE, "--min-games", "0"]) == 1
