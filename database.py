# database.py
"""
Database operations for the Club Match Generator.

This module reads attendance and profile rows and writes generated match
sessions through Supabase. The tables and their constraints belong to the
hosted database; this module only queries them.
All methods translate Supabase exceptions to DatabaseError for consistent error handling.
"""

import logging
from datetime import datetime, timezone

import streamlit as st
from supabase import create_client, Client

from app_types import DoublesMatch
from constants import GENERATED_MATCH_STATUS
from exceptions import DatabaseError

logger = logging.getLogger("app.database")


# Initialize Supabase client
@st.cache_resource
def get_supabase_client() -> Client:
    url = st.secrets["SUPABASE_URL"]
    key = st.secrets["SUPABASE_KEY"]
    return create_client(url, key)


class AttendanceDB:
    """Reads attendance records."""

    @staticmethod
    def get_attendance(date: str) -> list[dict]:
        """Fetches attendance rows for one day.

        Args:
            date: ISO date string (YYYY-MM-DD)

        Returns:
            List of dicts with id, user_id, status, attended_at.

        Raises:
            DatabaseError: If the query fails.
        """
        try:
            supabase = get_supabase_client()
            response = (
                supabase.table("attendances")
                .select("id, user_id, status, attended_at")
                .eq("attended_at", date)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Supabase API call failed: get_attendance '{date}'")
            raise DatabaseError(f"Failed to fetch attendance for {date}") from e

        return response.data if response.data else []


class ProfileDB:
    """Reads member profiles."""

    @staticmethod
    def get_profiles(user_ids: list[str]) -> list[dict]:
        """Fetches profiles for the given user IDs.

        Args:
            user_ids: Profile IDs to fetch

        Returns:
            List of dicts with id, username, full_name, skill_level, gender.

        Raises:
            DatabaseError: If the query fails.
        """
        if not user_ids:
            return []

        try:
            supabase = get_supabase_client()
            response = (
                supabase.table("profiles")
                .select("id, username, full_name, skill_level, gender")
                .in_("id", user_ids)
                .execute()
            )
        except Exception as e:
            logger.exception("Supabase API call failed: get_profiles")
            raise DatabaseError("Failed to fetch profiles from database") from e

        return response.data if response.data else []


class MatchSessionDB:
    """Handles match session records in Supabase."""

    @staticmethod
    def count_sessions(date: str) -> int:
        """Counts the match sessions already created on a date.

        Raises:
            DatabaseError: If the query fails.
        """
        try:
            supabase = get_supabase_client()
            response = (
                supabase.table("match_sessions")
                .select("*", count="exact", head=True)
                .eq("session_date", date)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Supabase API call failed: count_sessions '{date}'")
            raise DatabaseError(f"Failed to count match sessions for {date}") from e

        return response.count or 0

    @staticmethod
    def create_session(session_name: str, date: str, total_matches: int) -> int:
        """Creates a match session record.

        Args:
            session_name: Display name of the session
            date: ISO date the matches are played on
            total_matches: Number of matches in the session

        Returns:
            The session ID from the database

        Raises:
            DatabaseError: If the session could not be created
        """
        try:
            supabase = get_supabase_client()
            response = (
                supabase.table("match_sessions")
                .insert(
                    {
                        "session_name": session_name,
                        "total_matches": total_matches,
                        "assigned_matches": total_matches,
                        "session_date": date,
                    }
                )
                .execute()
            )
        except Exception as e:
            logger.exception(
                f"Supabase API call failed: create_session '{session_name}'"
            )
            raise DatabaseError(f"Failed to create session '{session_name}'") from e

        if response.data:
            return response.data[0]["id"]

        logger.error(f"Session creation returned empty data for '{session_name}'")
        raise DatabaseError(
            f"Failed to create session '{session_name}' - No ID returned"
        )

    @staticmethod
    def delete_session(session_id: int) -> None:
        """Deletes a match session record.

        Raises:
            DatabaseError: If the delete fails.
        """
        try:
            supabase = get_supabase_client()
            supabase.table("match_sessions").delete().eq("id", session_id).execute()
        except Exception as e:
            logger.exception(f"Supabase API call failed: delete_session {session_id}")
            raise DatabaseError(f"Failed to delete session {session_id}") from e

    @staticmethod
    def get_sessions(date: str) -> list[dict]:
        """Fetches the match sessions of a date, newest first.

        Raises:
            DatabaseError: If the query fails.
        """
        try:
            supabase = get_supabase_client()
            response = (
                supabase.table("match_sessions")
                .select("*")
                .eq("session_date", date)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Supabase API call failed: get_sessions '{date}'")
            raise DatabaseError(f"Failed to fetch match sessions for {date}") from e

        return response.data if response.data else []


class GeneratedMatchDB:
    """Handles generated match persistence in Supabase."""

    @staticmethod
    def build_rows(session_id: int, matches: list[DoublesMatch]) -> list[dict]:
        """Converts matches to generated_matches rows, numbered in play order."""
        created_at = datetime.now(timezone.utc).isoformat()
        return [
            {
                "session_id": session_id,
                "match_number": idx + 1,
                "team1_player1_id": match.team_1.player_1.id,
                "team1_player2_id": match.team_1.player_2.id,
                "team2_player1_id": match.team_2.player_1.id,
                "team2_player2_id": match.team_2.player_2.id,
                "status": GENERATED_MATCH_STATUS,
                "created_at": created_at,
            }
            for idx, match in enumerate(matches)
        ]

    @staticmethod
    def insert_matches(session_id: int, matches: list[DoublesMatch]) -> None:
        """Records generated matches for a session.

        Raises:
            DatabaseError: If the insert fails.
        """
        if not matches:
            return

        rows = GeneratedMatchDB.build_rows(session_id, matches)
        try:
            supabase = get_supabase_client()
            supabase.table("generated_matches").insert(rows).execute()
        except Exception as e:
            logger.exception("Supabase API call failed: insert_matches")
            raise DatabaseError("Failed to save generated matches") from e
