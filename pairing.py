# pairing.py
"""
Team/match enumeration and the balanced assignment selector.

The selector is a greedy pass over an ordered candidate list: it accepts a
candidate only when doing so keeps every player's game count within one of
the least-played player, and stops as soon as everyone has reached the
minimum. Candidate order is decided by the caller (see policies.py).
"""

import logging
from itertools import combinations
from typing import Callable, Iterable, Sequence

from app_types import DoublesMatch, GameCountTally, Player, PlayerId, Team

logger = logging.getLogger("app.pairing")

# Predicate deciding whether a candidate match may be used at all
MatchFilter = Callable[[DoublesMatch], bool]


def enumerate_teams(players: Sequence[Player]) -> list[Team]:
    """Returns every unordered pair of players, in roster order."""
    return [Team(p1, p2) for p1, p2 in combinations(players, 2)]


def enumerate_matches(
    teams: Sequence[Team], match_filter: MatchFilter | None = None
) -> list[DoublesMatch]:
    """
    Returns every pairing of two teams that share no player.

    Only pairs (i, j) with i < j are produced, so a match never appears a
    second time with its teams swapped. A set of four players still appears
    once per distinct split into two teams.

    Args:
        teams: Candidate teams, usually from enumerate_teams()
        match_filter: Optional predicate; candidates failing it are dropped

    Returns:
        Candidate matches with court 0 (courts are assigned after selection).
    """
    matches = []
    for i, j in combinations(range(len(teams)), 2):
        team_1, team_2 = teams[i], teams[j]
        ids = {p.id for p in team_1.players} | {p.id for p in team_2.players}
        if len(ids) != 4:
            continue
        match = DoublesMatch(id=f"match-{i}-{j}", court=0, team_1=team_1, team_2=team_2)
        if match_filter is not None and not match_filter(match):
            continue
        matches.append(match)
    return matches


def select_balanced_matches(
    candidates: Iterable[DoublesMatch],
    player_ids: Iterable[PlayerId],
    min_games_per_player: int,
) -> tuple[list[DoublesMatch], GameCountTally]:
    """
    Greedily picks candidates that keep game counts balanced.

    For each candidate in order:
      1. Stop once every player has at least min_games_per_player games.
      2. Accept it only if, afterwards, max(count) - min(count) <= 1.

    Composition rules (gender) are applied by filtering the candidates
    beforehand, so a rejected composition never reaches the balance check.

    Args:
        candidates: Ordered candidate matches
        player_ids: Every present player (all start at 0 games)
        min_games_per_player: Target number of games per player

    Returns:
        Tuple of (accepted matches in acceptance order, final tally).
    """
    tally: GameCountTally = {pid: 0 for pid in player_ids}
    if not tally:
        return [], tally

    selected: list[DoublesMatch] = []
    min_count = 0
    max_count = 0
    at_min = len(tally)  # players currently at min_count

    for match in candidates:
        if min_count >= min_games_per_player:
            break

        ids = match.player_ids()
        new_max = max(max_count, max(tally[pid] + 1 for pid in ids))
        remaining_at_min = at_min - sum(1 for pid in ids if tally[pid] == min_count)
        new_min = min_count if remaining_at_min > 0 else min_count + 1

        if new_max - new_min > 1:
            continue

        selected.append(match)
        for pid in ids:
            tally[pid] += 1
        max_count = new_max
        if new_min > min_count:
            min_count = new_min
            at_min = sum(1 for count in tally.values() if count == min_count)
        else:
            at_min = remaining_at_min

    logger.debug(
        "Selected %d matches for %d players (min=%d, max=%d)",
        len(selected),
        len(tally),
        min_count,
        max_count,
    )
    return selected, tally
