"""
Service layer for orchestrating match generation for a club day.

This module sits between the callers (admin screens, scripts) and the
lower-level generator/database modules: it loads the roster snapshot,
runs the generator and persists accepted results.
"""

import logging
import random

from app_types import GenerationPolicy, GenerationResult, PairingMode, Player
from database import AttendanceDB, GeneratedMatchDB, MatchSessionDB, ProfileDB
from exceptions import DatabaseError, GenerationError
from match_generator import generate_matches
from results import balance_spread, count_unique_players, minimum_match_count
from roster_service import build_roster_dataframe, dataframe_to_players

logger = logging.getLogger("app.generation_service")


def load_roster(date: str) -> list[Player]:
    """
    Loads the roster snapshot for a date.

    Args:
        date: ISO date string (YYYY-MM-DD)

    Returns:
        Every attendee as a Player; only 'present' attendees are marked present.

    Raises:
        DatabaseError: If attendance or profiles cannot be fetched.
    """
    attendance = AttendanceDB.get_attendance(date)
    user_ids = sorted({str(row["user_id"]) for row in attendance if row.get("user_id")})
    profiles = ProfileDB.get_profiles(user_ids)

    roster_df = build_roster_dataframe(attendance, profiles)
    players = dataframe_to_players(roster_df)
    logger.info(
        f"Loaded {len(players)} attendee(s) for {date}, "
        f"{sum(p.present for p in players)} present"
    )
    return players


def generate_for_date(
    date: str, policy: GenerationPolicy, rng: random.Random | None = None
) -> tuple[list[Player], GenerationResult]:
    """
    Loads the roster for a date and generates matches for it.

    The roster snapshot is returned with the result so the caller can tell
    which attendance state the matches refer to.

    Raises:
        DatabaseError: If the roster cannot be loaded.
    """
    players = load_roster(date)
    return players, generate_matches(players, policy, rng)


def make_session_name(date: str, mode: PairingMode, sequence: int) -> str:
    """Session names look like '2024-05-01_byLevel_2'."""
    return f"{date}_{mode.value}_{sequence}"


def save_generated_matches(date: str, result: GenerationResult, mode: PairingMode) -> int:
    """
    Persists a generation result as a new match session.

    1. Counts today's sessions to number the new one
    2. Creates the match_sessions record
    3. Inserts the generated_matches rows in play order; if that fails the
       new session record is deleted again before the error is re-raised

    Returns:
        The new session ID.

    Raises:
        GenerationError: If the result is a failure or has no matches.
        DatabaseError: If any database write fails.
    """
    if not result.success:
        raise GenerationError(f"Cannot save a failed generation: {result.failure.message}")
    if not result.matches:
        raise GenerationError("There are no generated matches to save.")

    sequence = MatchSessionDB.count_sessions(date) + 1
    session_name = make_session_name(date, mode, sequence)

    session_id = MatchSessionDB.create_session(session_name, date, len(result.matches))
    try:
        GeneratedMatchDB.insert_matches(session_id, result.matches)
    except DatabaseError:
        # Do not leave a session without matches behind
        logger.error(f"Removing session '{session_name}' after failed match insert")
        MatchSessionDB.delete_session(session_id)
        raise

    logger.info(f"Saved {len(result.matches)} match(es) as session '{session_name}'")
    return session_id


def summarize_result(players: list[Player], result: GenerationResult) -> dict:
    """
    Summary figures for a generation run.

    Returns:
        Dict with present player count, matches generated, the minimum
        number of matches needed for everyone to play once, players who got
        at least one game and the tally spread.
    """
    present_count = sum(1 for p in players if p.present)
    return {
        "present_players": present_count,
        "matches": len(result.matches),
        "minimum_matches": minimum_match_count(present_count),
        "players_scheduled": count_unique_players(result.matches),
        "spread": balance_spread(result.tally),
    }


def list_sessions(date: str) -> list[dict]:
    """
    Returns the match sessions already saved for a date, newest first.

    Raises:
        DatabaseError: If the sessions cannot be fetched.
    """
    sessions = MatchSessionDB.get_sessions(date)
    logger.info(f"Found {len(sessions)} saved session(s) for {date}")
    return sessions
