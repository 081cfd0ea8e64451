"""
Service layer for roster and result tables.

This module handles conversion between raw attendance/profile rows, pandas
DataFrames and Player objects, and builds the display tables for generated
matches and per-player game counts.
"""

import logging
from typing import Iterable

import pandas as pd

from app_types import DoublesMatch, GameCountTally, Player
from constants import PLACEHOLDER_NAME_PREFIX, PRESENT_STATUS
from roster import build_player, team_score

logger = logging.getLogger("app.roster_service")

ROSTER_COLUMNS = ["id", "name", "skill_code", "skill_level", "gender", "status"]


def _clean(value):
    """NaN/None/empty string -> None."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return value if value != "" else None


def _display_name(profile: dict) -> str:
    """username, then full_name, then a placeholder built from the id."""
    return (
        _clean(profile.get("username"))
        or _clean(profile.get("full_name"))
        or f"{PLACEHOLDER_NAME_PREFIX}{str(profile['id'])[:8]}"
    )


def build_roster_dataframe(
    attendance_rows: list[dict], profile_rows: list[dict]
) -> pd.DataFrame:
    """
    Joins one day's attendance with member profiles.

    The profile skill level holds a sub-level code such as "b2"; it fills
    both the skill_code and skill_level columns so the tier comes from its
    first letter and the sub-level from its digit. Attendees without a
    profile are kept with a placeholder name, no skill data and no gender,
    so they still appear on the roster.

    Args:
        attendance_rows: Rows from the attendances table
        profile_rows: Rows from the profiles table

    Returns:
        DataFrame with ROSTER_COLUMNS, one row per attending user.
    """
    attendance = pd.DataFrame(attendance_rows, columns=["id", "user_id", "status", "attended_at"])
    attendance = attendance.dropna(subset=["user_id"]).drop_duplicates(subset=["user_id"])

    profiles = pd.DataFrame(
        profile_rows, columns=["id", "username", "full_name", "skill_level", "gender"]
    )
    profiles_by_id = {str(row["id"]): row for row in profiles.to_dict("records")}

    records = []
    for row in attendance.itertuples(index=False):
        user_id = str(row.user_id)
        profile = profiles_by_id.get(user_id, {"id": user_id})
        # Profile levels are sub-level codes ("a1".."e2"), read like a skill code
        skill_level = _clean(profile.get("skill_level"))
        records.append(
            {
                "id": user_id,
                "name": _display_name(profile),
                "skill_code": skill_level,
                "skill_level": skill_level,
                "gender": _clean(profile.get("gender")),
                "status": _clean(row.status),
            }
        )

    missing = sum(1 for r in records if r["id"] not in profiles_by_id)
    if missing:
        logger.info(f"{missing} attendee(s) have no profile; using placeholders")

    return pd.DataFrame(records, columns=ROSTER_COLUMNS)


def dataframe_to_players(roster_df: pd.DataFrame) -> list[Player]:
    """
    Converts a roster DataFrame into Player objects.

    NaN values in the optional skill and gender columns become None, which
    the normalizers treat as unrated / unknown.

    Args:
        roster_df: DataFrame with ROSTER_COLUMNS

    Returns:
        Players in DataFrame order.
    """
    players = []
    for _, row in roster_df.dropna(subset=["id"]).iterrows():
        skill_code = None if pd.isna(row.get("skill_code")) else str(row["skill_code"])
        skill_level = None if pd.isna(row.get("skill_level")) else str(row["skill_level"])
        gender = None if pd.isna(row.get("gender")) else str(row["gender"])
        status = None if pd.isna(row.get("status")) else str(row["status"])

        players.append(
            build_player(
                player_id=str(row["id"]),
                name=str(row["name"]),
                skill_code=skill_code,
                skill_level=skill_level,
                gender=gender,
                present=status == PRESENT_STATUS,
            )
        )
    return players


def create_tally_dataframe(tally: GameCountTally, players: Iterable[Player]) -> pd.DataFrame:
    """Creates the per-player game count table, fewest games first."""
    by_id = {p.id: p for p in players}
    df = pd.DataFrame(
        {
            "Player": [by_id[pid].name if pid in by_id else pid for pid in tally],
            "Tier": [by_id[pid].tier.value.upper() if pid in by_id else "N" for pid in tally],
            "Games": list(tally.values()),
        }
    )
    return df.sort_values(["Games", "Player"], kind="stable").reset_index(drop=True)


def create_matches_dataframe(matches: list[DoublesMatch]) -> pd.DataFrame:
    """Creates the generated match table, one row per match in play order."""
    return pd.DataFrame(
        {
            "#": range(1, len(matches) + 1),
            "Court": [m.court for m in matches],
            "Team 1": [f"{m.team_1.player_1.name} & {m.team_1.player_2.name}" for m in matches],
            "Team 2": [f"{m.team_2.player_1.name} & {m.team_2.player_2.name}" for m in matches],
            "Team 1 Score": [team_score(m.team_1) for m in matches],
            "Team 2 Score": [team_score(m.team_2) for m in matches],
            "Score Diff": [abs(team_score(m.team_1) - team_score(m.team_2)) for m in matches],
        }
    )
