# match_generator.py
"""
Entry point of the doubles match generator.

generate_matches() validates a roster snapshot against a policy, runs the
selected pairing policy and returns a GenerationResult. Roster problems are
returned as a GenerationFailure rather than raised, so the caller can show
the message and let the admin retry after attendance changes.
"""

import logging
import random
from typing import Iterable

from app_types import (
    FailureKind,
    Gender,
    GenerationFailure,
    GenerationPolicy,
    GenerationResult,
    PairingMode,
    Player,
)
from constants import MIN_PLAYERS_PER_GENDER, PLAYERS_PER_MATCH
from logger import log_generation_debug
from policies import assign_by_level, assign_mixed_gender, assign_randomly
from results import assign_courts, reorder_to_avoid_back_to_back, tally_from_matches
from roster import present_players

logger = logging.getLogger("app.match_generator")


def validate_roster(players: list[Player], policy: GenerationPolicy) -> GenerationFailure | None:
    """
    Checks that the present players can support the requested policy.

    Args:
        players: Present players only
        policy: The generation policy

    Returns:
        A GenerationFailure describing the first problem found, or None.
    """
    if len(players) < PLAYERS_PER_MATCH:
        return GenerationFailure(
            kind=FailureKind.INSUFFICIENT_PLAYERS,
            message=(
                f"At least {PLAYERS_PER_MATCH} present players are needed to "
                f"generate matches. Currently present: {len(players)}."
            ),
            player_ids=[p.id for p in players],
        )

    if policy.mode != PairingMode.MIXED_GENDER:
        return None

    missing = [p for p in players if p.gender == Gender.UNKNOWN]
    if missing:
        return GenerationFailure(
            kind=FailureKind.MISSING_REQUIRED_ATTRIBUTE,
            message=(
                "Mixed doubles needs a gender for every player. Missing for: "
                + ", ".join(p.name or p.id for p in missing)
            ),
            player_ids=[p.id for p in missing],
        )

    male_count = sum(1 for p in players if p.gender == Gender.MALE)
    female_count = sum(1 for p in players if p.gender == Gender.FEMALE)
    if male_count < MIN_PLAYERS_PER_GENDER or female_count < MIN_PLAYERS_PER_GENDER:
        return GenerationFailure(
            kind=FailureKind.INSUFFICIENT_GENDER_BALANCE,
            message=(
                f"Mixed doubles needs at least {MIN_PLAYERS_PER_GENDER} male and "
                f"{MIN_PLAYERS_PER_GENDER} female players. "
                f"Currently: {male_count} male, {female_count} female."
            ),
        )

    return None


def generate_matches(
    players: Iterable[Player],
    policy: GenerationPolicy | None = None,
    rng: random.Random | None = None,
) -> GenerationResult:
    """
    Generates balanced doubles matches for one roster snapshot.

    Args:
        players: Roster snapshot; players not marked present are ignored
        policy: Generation policy (defaults to level order, 1 game each)
        rng: Random source for shuffling policies; pass a seeded
            random.Random for reproducible output

    Returns:
        GenerationResult with matches in play order and the tally of every
        present player, or a failure if the roster cannot support the policy.
    """
    if policy is None:
        policy = GenerationPolicy()
    if rng is None:
        rng = random.Random()

    active = present_players(players)
    failure = validate_roster(active, policy)
    if failure is not None:
        logger.warning("Match generation rejected (%s): %s", failure.kind.value, failure.message)
        return GenerationResult(failure=failure)

    min_games = policy.min_games_per_player
    if policy.mode == PairingMode.BY_LEVEL:
        matches, _ = assign_by_level(active, min_games)
    elif policy.mode == PairingMode.RANDOM:
        matches, _ = assign_randomly(active, min_games, rng, policy.max_team_score_diff)
    else:
        matches, _ = assign_mixed_gender(
            active, min_games, rng, policy.gender_rule, policy.max_team_score_diff
        )

    if not matches:
        logger.warning("No candidate match passed the %s policy filters", policy.mode.value)

    if policy.avoid_back_to_back:
        matches = reorder_to_avoid_back_to_back(matches)
    matches = assign_courts(matches, policy.num_courts)

    result = GenerationResult(
        matches=matches,
        tally=tally_from_matches(matches, [p.id for p in active]),
    )
    logger.info(
        "Generated %d %s matches for %d present players",
        len(result.matches),
        policy.mode.value,
        len(active),
    )
    log_generation_debug(logger, policy, result)
    return result
