# Match Constants
PLAYERS_PER_MATCH = 4
TEAM_SIZE = 2
DEFAULT_MIN_GAMES_PER_PLAYER = 1

# Tier Constants
VALID_TIER_CODES = ("a", "b", "c", "d", "e")
# Display score per tier, highest skill first (from the club level table)
TIER_SCORES = {"a": 10, "b": 8, "c": 6, "d": 4, "e": 2, "n": 1}
# Second sub-level of a tier ("b2") scores one below the first ("b1")
LOWER_SUB_LEVEL_PENALTY = 1

# Gender aliases found in profile records
MALE_ALIASES = frozenset({"m", "male", "man"})
FEMALE_ALIASES = frozenset({"f", "female", "woman", "w"})
MIN_PLAYERS_PER_GENDER = 2

# Level-order fill-in looks this many matches back to avoid rematches
RECENT_MATCH_WINDOW = 2

# Back-to-back reordering
MAX_REORDER_PASSES = 5

# Attendance Constants
PRESENT_STATUS = "present"
GENERATED_MATCH_STATUS = "scheduled"
PLACEHOLDER_NAME_PREFIX = "Player-"
