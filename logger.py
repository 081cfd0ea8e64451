# logger.py
"""
Logging configuration for the Club Match Generator.

This module provides centralized logging setup. The setup_logging() function
should be called once at startup (generate_day.main() does this).

All app modules should use the "app" namespace:
    import logging
    logger = logging.getLogger("app.module_name")

This keeps third-party library logs quiet while allowing granular control
over the app's own logging level via the LOG_LEVEL environment variable.
"""

import logging
import os
import sys

from app_types import GenerationPolicy, GenerationResult

# App namespace prefix - all app loggers should use this
APP_LOGGER_NAME = "app"


def level_from_env(default: int = logging.INFO) -> int:
    """Reads the app log level from LOG_LEVEL (e.g. "DEBUG"), falling back to default."""
    name = os.environ.get("LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(app_level: int = logging.INFO) -> None:
    """
    Configure logging for the application.

    - Root logger is set to WARNING (keeps third-party libraries quiet)
    - App namespace logger ("app.*") is set to the specified level

    This should be called ONCE at application startup (entry point).

    Args:
        app_level: The logging level for app modules (default: INFO)
    """
    # Configure root logger to WARNING - silences supabase/httpx noise
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    # Avoid adding duplicate handlers if setup is called multiple times
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)  # Handler accepts all; loggers filter

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(app_level)


def log_generation_debug(
    logger: logging.Logger,
    policy: GenerationPolicy,
    result: GenerationResult,
) -> None:
    """
    Log match generation debug information in a consistent format.

    Args:
        logger: Logger instance to use
        policy: Policy the run was made with
        result: The generation result
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug("Mode: %s, Min Games: %s", policy.mode.value, policy.min_games_per_player)
    if policy.max_team_score_diff is not None:
        logger.debug("Max Team Score Diff: %s", policy.max_team_score_diff)
    for match in result.matches:
        logger.debug(
            "Court %s: %s & %s vs %s & %s",
            match.court,
            match.team_1.player_1.name,
            match.team_1.player_2.name,
            match.team_2.player_1.name,
            match.team_2.player_2.name,
        )
    if result.tally:
        counts = result.tally.values()
        logger.debug("Game Counts: %s", result.tally)
        logger.debug("Tally Spread: %s", max(counts) - min(counts))
