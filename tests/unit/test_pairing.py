import pytest

from app_types import Player, Team
from exceptions import ValidationError
from pairing import enumerate_matches, enumerate_teams, select_balanced_matches
from results import balance_spread
from tests.utils import assert_no_double_booking, generate_players


def test_enumerate_teams_is_all_unordered_pairs():
    players = generate_players(5)
    teams = enumerate_teams(players)

    assert len(teams) == 10
    pairs = {frozenset((t.player_1.id, t.player_2.id)) for t in teams}
    assert len(pairs) == 10


def test_team_rejects_same_player_twice():
    player = Player(id="P1", name="P1")
    with pytest.raises(ValidationError):
        Team(player, player)


def test_enumerate_matches_four_players_gives_three_splits():
    teams = enumerate_teams(generate_players(4))
    matches = enumerate_matches(teams)

    assert len(matches) == 3
    assert_no_double_booking(matches)
    splits = {
        frozenset(
            [
                frozenset(p.id for p in m.team_1.players),
                frozenset(p.id for p in m.team_2.players),
            ]
        )
        for m in matches
    }
    assert len(splits) == 3  # no swapped duplicates


def test_enumerate_matches_count_for_eight_players():
    # C(8, 4) four-player sets, three splits each
    matches = enumerate_matches(enumerate_teams(generate_players(8)))
    assert len(matches) == 70 * 3
    assert_no_double_booking(matches)
    assert len({m.id for m in matches}) == len(matches)


def test_enumerate_matches_applies_filter():
    teams = enumerate_teams(generate_players(4))
    matches = enumerate_matches(teams, match_filter=lambda m: m.team_1.player_1.id == "P1")
    assert matches
    assert all(m.team_1.player_1.id == "P1" for m in matches)


class TestSelectBalancedMatches:
    """Tests for the greedy selector."""

    def test_every_player_is_in_tally(self):
        players = generate_players(6)
        candidates = enumerate_matches(enumerate_teams(players))
        _, tally = select_balanced_matches(candidates, [p.id for p in players], 1)

        assert set(tally) == {p.id for p in players}

    def test_stops_once_minimum_reached(self):
        players = generate_players(8)
        candidates = enumerate_matches(enumerate_teams(players))
        selected, tally = select_balanced_matches(candidates, [p.id for p in players], 1)

        assert len(selected) == 2
        assert set(tally.values()) == {1}

    def test_rejects_candidates_that_unbalance(self):
        players = generate_players(8)
        candidates = enumerate_matches(enumerate_teams(players))
        selected, tally = select_balanced_matches(candidates, [p.id for p in players], 3)

        # In roster order only P5-P8 splits remain after the first two rounds,
        # so the selector gives them one more game and then rejects the rest
        assert_no_double_booking(selected)
        assert len(selected) == 3
        assert balance_spread(tally) <= 1
        assert tally == {"P1": 1, "P2": 1, "P3": 1, "P4": 1, "P5": 2, "P6": 2, "P7": 2, "P8": 2}

    def test_odd_roster_stays_within_one(self):
        players = generate_players(6)
        candidates = enumerate_matches(enumerate_teams(players))
        selected, tally = select_balanced_matches(candidates, [p.id for p in players], 2)

        assert_no_double_booking(selected)
        assert balance_spread(tally) <= 1
        assert min(tally.values()) >= 1

    def test_candidate_order_is_respected(self):
        players = generate_players(4)
        candidates = enumerate_matches(enumerate_teams(players))
        selected, _ = select_balanced_matches(list(reversed(candidates)), [p.id for p in players], 1)

        assert selected == [candidates[-1]]

    def test_no_candidates_gives_empty_selection(self):
        selected, tally = select_balanced_matches([], ["a", "b", "c", "d"], 1)
        assert selected == []
        assert tally == {"a": 0, "b": 0, "c": 0, "d": 0}
