# app_types.py
"""
Type aliases and data classes for the Club Match Generator.

This module defines the roster, match and result types shared by the
match generation engine and the service layer around it.
"""

from dataclasses import dataclass, field
from enum import Enum

from constants import DEFAULT_MIN_GAMES_PER_PLAYER, TEAM_SIZE
from exceptions import ValidationError

# =============================================================================
# Basic Type Aliases
# =============================================================================


class Gender(str, Enum):
    """Player gender enumeration for strict type checking."""

    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"


class Tier(str, Enum):
    """Normalized skill tier. A is the strongest, N means unrated."""

    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    N = "n"


class PairingMode(str, Enum):
    """How candidate matches are ordered and filtered."""

    BY_LEVEL = "byLevel"
    RANDOM = "random"
    MIXED_GENDER = "mixedGender"


class GenderRule(str, Enum):
    """Team composition rule applied in mixed-gender mode."""

    # Each team is exactly one male and one female
    MIXED_ONLY = "mixed_only"
    # Both teams mixed, or all four players share one gender
    MIXED_OR_SAME_SEX = "mixed_or_same_sex"


class FailureKind(str, Enum):
    """Reasons a generation request is rejected before any pairing work."""

    INSUFFICIENT_PLAYERS = "InsufficientPlayers"
    INSUFFICIENT_GENDER_BALANCE = "InsufficientGenderBalance"
    MISSING_REQUIRED_ATTRIBUTE = "MissingRequiredAttribute"


# A player's opaque identifier (unique within one roster snapshot)
PlayerId = str

# Mapping of player ids to the number of matches assigned to them
GameCountTally = dict[PlayerId, int]


# =============================================================================
# Roster Data Classes
# =============================================================================


@dataclass(frozen=True)
class Player:
    """A club member taken from one attendance snapshot.

    Attributes:
        id: Stable identifier from the roster provider
        name: Display name
        tier: Normalized skill tier
        gender: Player gender (UNKNOWN when the profile has none)
        present: Whether the attendance status is 'present'
        sub_level: Digit after the tier letter in the skill code
            ("b2" -> 2), 0 when the code has none
    """

    id: PlayerId
    name: str
    tier: Tier = Tier.N
    gender: Gender = Gender.UNKNOWN
    present: bool = True
    sub_level: int = 0


@dataclass(frozen=True)
class Team:
    """Two distinct players playing on the same side."""

    player_1: Player
    player_2: Player

    def __post_init__(self) -> None:
        if self.player_1.id == self.player_2.id:
            raise ValidationError(
                f"A team needs two different players, got '{self.player_1.id}' twice"
            )

    @property
    def players(self) -> tuple[Player, Player]:
        return (self.player_1, self.player_2)


# =============================================================================
# Match Data Classes
# =============================================================================


@dataclass
class DoublesMatch:
    """A doubles match assignment.

    Attributes:
        id: Identifier unique within one generation run
        court: Court label (1-indexed), assigned after selection
        team_1: First team
        team_2: Second team
    """

    id: str
    court: int
    team_1: Team
    team_2: Team

    @property
    def players(self) -> tuple[Player, Player, Player, Player]:
        return (*self.team_1.players, *self.team_2.players)

    def player_ids(self) -> tuple[PlayerId, PlayerId, PlayerId, PlayerId]:
        return tuple(p.id for p in self.players)


# List of match assignments for one generation run
MatchList = list[DoublesMatch]


# =============================================================================
# Policy and Result Data Classes
# =============================================================================


@dataclass
class GenerationPolicy:
    """Parameters for one generation run.

    Attributes:
        mode: Pairing mode
        min_games_per_player: Games every present player should reach
        team_size: Players per team (doubles only)
        gender_rule: Composition rule used by mixed-gender mode
        num_courts: When set, court labels cycle through 1..num_courts
        avoid_back_to_back: Reorder matches so neighbours share no player
        max_team_score_diff: When set, random and mixed-gender modes only
            consider matches whose team scores differ by at most this much
    """

    mode: PairingMode = PairingMode.BY_LEVEL
    min_games_per_player: int = DEFAULT_MIN_GAMES_PER_PLAYER
    team_size: int = TEAM_SIZE
    gender_rule: GenderRule = GenderRule.MIXED_OR_SAME_SEX
    num_courts: int | None = None
    avoid_back_to_back: bool = False
    max_team_score_diff: int | None = None

    def __post_init__(self) -> None:
        try:
            self.mode = PairingMode(self.mode)
        except ValueError as e:
            raise ValidationError(f"Unknown pairing mode: {self.mode!r}") from e
        try:
            self.gender_rule = GenderRule(self.gender_rule)
        except ValueError as e:
            raise ValidationError(f"Unknown gender rule: {self.gender_rule!r}") from e
        if self.min_games_per_player < 1:
            raise ValidationError("Minimum games per player must be at least 1.")
        if self.team_size != TEAM_SIZE:
            raise ValidationError("Only doubles (team size 2) is supported.")
        if self.num_courts is not None and self.num_courts < 1:
            raise ValidationError("Number of courts must be at least 1.")
        if self.max_team_score_diff is not None and self.max_team_score_diff < 0:
            raise ValidationError("Maximum team score difference cannot be negative.")


@dataclass
class GenerationFailure:
    """Input problem that prevented generation.

    Attributes:
        kind: Failure category
        message: Human readable explanation for the admin
        player_ids: Players the failure refers to, if any
    """

    kind: FailureKind
    message: str
    player_ids: list[PlayerId] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Result from the match generator.

    Attributes:
        matches: Generated matches in play order (empty when failed)
        tally: Games assigned to every present player
        failure: Why generation was rejected, or None
        success: Whether generation ran (zero matches can still be a success)
    """

    matches: MatchList = field(default_factory=list)
    tally: GameCountTally = field(default_factory=dict)
    failure: GenerationFailure | None = None
    success: bool = field(init=False)

    def __post_init__(self) -> None:
        self.success = self.failure is None
