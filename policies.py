# policies.py
"""
Pairing policies layered on the enumerator and selector.

- by level: players sorted by tier and sub-level, taken four at a time, with a
  same-tier fill-in for the last few players
- random: every candidate match, shuffled, then the balanced selector
- mixed gender: like random, restricted to matches that pass a gender rule

Random and mixed gender can also drop matches whose team scores are too far
apart, before any balancing happens.
"""

import logging
import random
from functools import partial
from typing import Sequence

from app_types import (
    DoublesMatch,
    GameCountTally,
    Gender,
    GenderRule,
    Player,
    Team,
)
from constants import PLAYERS_PER_MATCH, RECENT_MATCH_WINDOW
from pairing import (
    MatchFilter,
    enumerate_matches,
    enumerate_teams,
    select_balanced_matches,
)
from roster import level_sort_key, team_score

logger = logging.getLogger("app.policies")


def _split_group(group: Sequence[Player], match_id: str) -> DoublesMatch:
    """Interleaved split: offsets 0 and 2 against offsets 1 and 3."""
    return DoublesMatch(
        id=match_id,
        court=0,
        team_1=Team(group[0], group[2]),
        team_2=Team(group[1], group[3]),
    )


def _fill_leftover(
    leftover: list[Player],
    ordered: list[Player],
    matches: list[DoublesMatch],
    tally: GameCountTally,
    min_games: int,
) -> list[Player] | None:
    """
    Completes a group of fewer than four unsatisfied players with same-tier players.

    Recruits, in order of preference:
      1. same-tier players who already reached the minimum and did not play
         in the most recent matches
      2. same-tier players who did not play in the most recent matches
      3. any same-tier player

    Returns:
        A group of four players, or None if the tier is too small.
    """
    main_tier = leftover[0].tier
    taken = {p.id for p in leftover}
    same_tier = [p for p in ordered if p.tier == main_tier and p.id not in taken]
    recent_ids = {
        pid for match in matches[-RECENT_MATCH_WINDOW:] for pid in match.player_ids()
    }

    preferences = [
        [p for p in same_tier if tally[p.id] >= min_games and p.id not in recent_ids],
        [p for p in same_tier if p.id not in recent_ids],
        same_tier,
    ]

    group = list(leftover)
    for pool in preferences:
        for player in pool:
            if len(group) == PLAYERS_PER_MATCH:
                break
            if player.id not in taken:
                group.append(player)
                taken.add(player.id)

    if len(group) < PLAYERS_PER_MATCH:
        logger.debug(
            "Could not fill leftover group for tier %s (%d players)",
            main_tier.value,
            len(group),
        )
        return None
    return group


def assign_by_level(
    players: Sequence[Player], min_games: int
) -> tuple[list[DoublesMatch], GameCountTally]:
    """
    Builds matches from consecutive groups of four in tier and sub-level order.

    Each pass walks the sorted roster in groups of four, skipping groups
    whose members have all reached min_games. A trailing group of one to
    three unsatisfied players is completed from the same tier. Passes repeat
    until everyone is satisfied or a pass forms no match. Deterministic for
    a given roster order.

    Args:
        players: Present players
        min_games: Minimum games per player

    Returns:
        Tuple of (matches in creation order, tally).
    """
    # sorted() is stable, so roster order breaks ties within a sub-level
    ordered = sorted(players, key=level_sort_key)
    tally: GameCountTally = {p.id: 0 for p in ordered}
    matches: list[DoublesMatch] = []

    def add_match(group: Sequence[Player]) -> None:
        matches.append(_split_group(group, f"match-level-{len(matches) + 1}"))
        for player in group:
            tally[player.id] += 1

    def satisfied(player: Player) -> bool:
        return tally[player.id] >= min_games

    while not all(satisfied(p) for p in ordered):
        found = False

        idx = 0
        while idx + PLAYERS_PER_MATCH <= len(ordered):
            group = ordered[idx : idx + PLAYERS_PER_MATCH]
            idx += PLAYERS_PER_MATCH
            if all(satisfied(p) for p in group):
                continue
            add_match(group)
            found = True

        leftover = [p for p in ordered[idx:] if not satisfied(p)]
        if leftover:
            group = _fill_leftover(leftover, ordered, matches, tally, min_games)
            if group is not None:
                add_match(group)
                found = True

        if not found:
            break

    return matches, tally


def within_team_score_diff(match: DoublesMatch, max_diff: int) -> bool:
    """True when the two team scores differ by at most max_diff."""
    return abs(team_score(match.team_1) - team_score(match.team_2)) <= max_diff


def _combine_filters(*checks: MatchFilter | None) -> MatchFilter | None:
    active = [check for check in checks if check is not None]
    if not active:
        return None
    return lambda match: all(check(match) for check in active)


def _score_filter(max_team_score_diff: int | None) -> MatchFilter | None:
    if max_team_score_diff is None:
        return None
    return partial(within_team_score_diff, max_diff=max_team_score_diff)


def assign_randomly(
    players: Sequence[Player],
    min_games: int,
    rng: random.Random,
    max_team_score_diff: int | None = None,
) -> tuple[list[DoublesMatch], GameCountTally]:
    """
    Shuffles every candidate match and runs the balanced selector over them.

    With max_team_score_diff set, matches whose team scores are further apart
    are dropped before shuffling.
    """
    teams = enumerate_teams(players)
    candidates = enumerate_matches(teams, match_filter=_score_filter(max_team_score_diff))
    if max_team_score_diff is not None:
        logger.debug(
            "%d candidate matches within team score diff %d",
            len(candidates),
            max_team_score_diff,
        )
    rng.shuffle(candidates)
    return select_balanced_matches(candidates, [p.id for p in players], min_games)


def is_mixed_team(team: Team) -> bool:
    return {team.player_1.gender, team.player_2.gender} == {Gender.MALE, Gender.FEMALE}


def satisfies_gender_rule(match: DoublesMatch, rule: GenderRule) -> bool:
    """
    Checks a match against a team composition rule.

    MIXED_ONLY: both teams are one male and one female.
    MIXED_OR_SAME_SEX: both teams mixed, or all four players share a known gender.
    """
    if is_mixed_team(match.team_1) and is_mixed_team(match.team_2):
        return True
    if rule == GenderRule.MIXED_ONLY:
        return False
    genders = {p.gender for p in match.players}
    return len(genders) == 1 and Gender.UNKNOWN not in genders


def assign_mixed_gender(
    players: Sequence[Player],
    min_games: int,
    rng: random.Random,
    rule: GenderRule = GenderRule.MIXED_OR_SAME_SEX,
    max_team_score_diff: int | None = None,
) -> tuple[list[DoublesMatch], GameCountTally]:
    """Like assign_randomly, but only matches passing the gender rule are candidates."""
    match_filter = _combine_filters(
        partial(satisfies_gender_rule, rule=rule), _score_filter(max_team_score_diff)
    )
    candidates = enumerate_matches(enumerate_teams(players), match_filter=match_filter)
    logger.debug("%d candidate matches pass gender rule %s", len(candidates), rule.value)
    rng.shuffle(candidates)
    return select_balanced_matches(candidates, [p.id for p in players], min_games)
