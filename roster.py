# roster.py
"""
Roster normalization.

Upstream profile data is inconsistently populated: some members carry a
short skill code ("B1", "c2"), some only a skill level ("C"), some neither.
Gender strings vary as well. This module maps those raw fields onto the
Tier and Gender enums once, at the boundary, so the pairing code only ever
sees typed values.
"""

from typing import Iterable

from app_types import Gender, Player, PlayerId, Team, Tier
from constants import (
    FEMALE_ALIASES,
    LOWER_SUB_LEVEL_PENALTY,
    MALE_ALIASES,
    TIER_SCORES,
    VALID_TIER_CODES,
)

# Sort position per tier; unrated players sort after E
_TIER_ORDER = {tier: rank for rank, tier in enumerate(Tier)}


def normalize_level(raw_code: str | None, raw_level: str | None = None) -> Tier:
    """Map a raw skill code and/or skill level onto a Tier.

    The skill code wins when present: its first alphabetic character is used
    if it is one of a..e. Otherwise the skill level is accepted only when it
    is exactly one of a..e. Anything else is unrated.

    Args:
        raw_code: Free-text skill code such as "B1" (may be None or empty)
        raw_level: Free-text skill level such as "c" (may be None or empty)

    Returns:
        The normalized Tier. Never raises.
    """
    code = (raw_code or "").strip().lower()
    if code:
        first_alpha = next((ch for ch in code if ch.isalpha()), "")
        if first_alpha in VALID_TIER_CODES:
            return Tier(first_alpha)

    level = (raw_level or "").strip().lower()
    if level in VALID_TIER_CODES:
        return Tier(level)

    return Tier.N


def normalize_sub_level(raw_code: str | None) -> int:
    """Digits following the tier letter of a skill code ("B2" -> 2, "c" -> 0).

    Returns 0 when the code carries no valid tier letter or no digits.
    """
    code = (raw_code or "").strip().lower()
    start = next((i for i, ch in enumerate(code) if ch.isalpha()), None)
    if start is None or code[start] not in VALID_TIER_CODES:
        return 0

    digits = ""
    for ch in code[start + 1 :]:
        if not ch.isdigit():
            break
        digits += ch
    return int(digits) if digits else 0


def normalize_gender(raw: str | Gender | None) -> Gender:
    """Map a raw gender string ("M", "female", "w", ...) onto Gender."""
    if isinstance(raw, Gender):
        return raw
    value = (raw or "").strip().lower()
    if value in MALE_ALIASES:
        return Gender.MALE
    if value in FEMALE_ALIASES:
        return Gender.FEMALE
    return Gender.UNKNOWN


def tier_rank(tier: Tier) -> int:
    """Sort key for tiers: 0 for A up to 5 for unrated."""
    return _TIER_ORDER[tier]


def tier_score(tier: Tier) -> int:
    """Display score for a tier (higher is stronger)."""
    return TIER_SCORES[tier.value]


def level_sort_key(player: Player) -> tuple[int, int]:
    """Sorts by tier, then sub-level within the tier ("b" < "b1" < "b2")."""
    return (tier_rank(player.tier), player.sub_level)


def player_score(player: Player) -> int:
    """Skill score of one player: A1=10, A2=9, B1=8 ... E2=1; unrated is 1."""
    score = tier_score(player.tier)
    if player.tier != Tier.N and player.sub_level >= 2:
        score -= LOWER_SUB_LEVEL_PENALTY
    return score


def team_score(team: Team) -> int:
    """Combined skill score of both team members."""
    return player_score(team.player_1) + player_score(team.player_2)


def build_player(
    player_id: PlayerId,
    name: str,
    skill_code: str | None = None,
    skill_level: str | None = None,
    gender: str | Gender | None = None,
    present: bool = True,
) -> Player:
    """Create a Player from raw roster fields."""
    return Player(
        id=player_id,
        name=name,
        tier=normalize_level(skill_code, skill_level),
        gender=normalize_gender(gender),
        present=present,
        sub_level=normalize_sub_level(skill_code),
    )


def present_players(players: Iterable[Player]) -> list[Player]:
    """Returns the players marked present, in roster order."""
    return [p for p in players if p.present]
