# results.py
"""
Post-processing of selected matches: court labels, tallies and play order.
"""

import math
from dataclasses import replace
from typing import Iterable, Sequence

from app_types import DoublesMatch, GameCountTally, MatchList, PlayerId
from constants import MAX_REORDER_PASSES, PLAYERS_PER_MATCH


def assign_courts(matches: Sequence[DoublesMatch], num_courts: int | None = None) -> MatchList:
    """
    Labels matches with court numbers in play order.

    Courts run 1, 2, 3, ... When num_courts is given the labels cycle through
    1..num_courts instead. The label is organizational only.

    Returns:
        New match objects; the input matches are left untouched.
    """
    if num_courts is None:
        return [replace(m, court=i + 1) for i, m in enumerate(matches)]
    return [replace(m, court=(i % num_courts) + 1) for i, m in enumerate(matches)]


def tally_from_matches(
    matches: Iterable[DoublesMatch], player_ids: Iterable[PlayerId]
) -> GameCountTally:
    """Counts games per player. Every listed player is a key, even with 0 games."""
    tally: GameCountTally = {pid: 0 for pid in player_ids}
    for match in matches:
        for pid in match.player_ids():
            tally[pid] = tally.get(pid, 0) + 1
    return tally


def balance_spread(tally: GameCountTally) -> int:
    """max(count) - min(count); 0 for an empty tally."""
    if not tally:
        return 0
    return max(tally.values()) - min(tally.values())


def count_unique_players(matches: Iterable[DoublesMatch]) -> int:
    return len({pid for m in matches for pid in m.player_ids()})


def minimum_match_count(num_players: int) -> int:
    """Matches needed for every player to play once."""
    return math.ceil(max(0, num_players) / PLAYERS_PER_MATCH)


def _shares_player(a: DoublesMatch, b: DoublesMatch) -> bool:
    return not set(a.player_ids()).isdisjoint(b.player_ids())


def reorder_to_avoid_back_to_back(
    matches: Sequence[DoublesMatch], max_passes: int = MAX_REORDER_PASSES
) -> MatchList:
    """
    Reorders matches so that neighbouring matches share no player where possible.

    Whenever match i+1 shares a player with match i, the last later match j
    that does not clash with match i is swapped into position i+1, provided
    the displaced match stays clear of its new neighbours at j-1 and j+1.
    Repeats for up to max_passes passes or until a pass changes nothing.
    Best effort: some clashes may remain.
    """
    ordered = list(matches)
    if len(ordered) <= 1:
        return ordered

    for _ in range(min(max_passes, len(ordered))):
        changed = False
        for i in range(len(ordered) - 1):
            if not _shares_player(ordered[i], ordered[i + 1]):
                continue
            displaced = ordered[i + 1]
            for j in range(len(ordered) - 1, i + 1, -1):
                if _shares_player(ordered[i], ordered[j]):
                    continue
                # after the swap, position j-1 holds match j when j == i + 2
                left = ordered[j] if j - 1 == i + 1 else ordered[j - 1]
                prev_ok = not _shares_player(left, displaced)
                next_ok = j + 1 >= len(ordered) or not _shares_player(displaced, ordered[j + 1])
                if prev_ok and next_ok:
                    ordered[i + 1], ordered[j] = ordered[j], ordered[i + 1]
                    changed = True
                    break
        if not changed:
            break

    return ordered
