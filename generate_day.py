#!/usr/bin/env python3
"""
Match generation script for one club day.

Loads the attendance roster for a date, generates doubles matches with the
chosen mode and prints the match and game count tables. With --save the
result is stored as a new match session.

Usage:
    python generate_day.py 2024-05-01 --mode mixedGender --min-games 2 --save

Requirements:
    - SUPABASE_URL and SUPABASE_KEY in .streamlit/secrets.toml
    - LOG_LEVEL environment variable (optional, default INFO)
"""

import argparse
import logging
import random

from app_types import GenerationPolicy, PairingMode
from constants import DEFAULT_MIN_GAMES_PER_PLAYER
from exceptions import ClubAppError
from generation_service import (
    generate_for_date,
    list_sessions,
    save_generated_matches,
    summarize_result,
)
from logger import level_from_env, setup_logging
from roster_service import create_matches_dataframe, create_tally_dataframe

logger = logging.getLogger("app.generate_day")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate doubles matches for a club day.")
    parser.add_argument("date", help="Club day as YYYY-MM-DD")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in PairingMode],
        default=PairingMode.BY_LEVEL.value,
        help="Pairing mode",
    )
    parser.add_argument(
        "--min-games",
        type=int,
        default=DEFAULT_MIN_GAMES_PER_PLAYER,
        help="Minimum games per present player",
    )
    parser.add_argument("--courts", type=int, default=None, help="Cycle court labels 1..N")
    parser.add_argument(
        "--max-score-diff",
        type=int,
        default=None,
        help="Largest allowed team score difference (random and mixed modes)",
    )
    parser.add_argument(
        "--avoid-back-to-back",
        action="store_true",
        help="Reorder matches so nobody plays twice in a row",
    )
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--save", action="store_true", help="Save the matches as a new session")
    return parser


def run(args: argparse.Namespace) -> int:
    """Runs one generation; returns the process exit code."""
    policy = GenerationPolicy(
        mode=args.mode,
        min_games_per_player=args.min_games,
        num_courts=args.courts,
        avoid_back_to_back=args.avoid_back_to_back,
        max_team_score_diff=args.max_score_diff,
    )
    players, result = generate_for_date(args.date, policy, random.Random(args.seed))

    if not result.success:
        print(result.failure.message)
        return 1

    print(create_matches_dataframe(result.matches).to_string(index=False))
    print()
    print(create_tally_dataframe(result.tally, players).to_string(index=False))
    logger.info(f"Summary: {summarize_result(players, result)}")

    if args.save:
        session_id = save_generated_matches(args.date, result, policy.mode)
        sessions = list_sessions(args.date)
        print(f"Saved session {session_id} ({len(sessions)} session(s) on {args.date})")
    return 0


def main(argv: list[str] | None = None) -> int:
    setup_logging(level_from_env())
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except ClubAppError as e:
        logger.error(f"Match generation failed: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
