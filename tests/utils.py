from app_types import Gender, Player, Tier

TIERS = [Tier.A, Tier.B, Tier.C, Tier.D, Tier.E, Tier.N]


def generate_players(n, tier=None, present=True):
    """
    Generates N players with ids P1 to Pn and alternating genders.

    Args:
        n: Number of players to generate
        tier: Tier for every player; cycles through all tiers when None
        present: Attendance flag for every player

    Returns:
        List of Player objects.
    """
    players = []
    for i in range(1, n + 1):
        gender = Gender.MALE if i % 2 == 1 else Gender.FEMALE
        player_tier = tier if tier is not None else TIERS[(i - 1) % len(TIERS)]
        players.append(
            Player(id=f"P{i}", name=f"P{i}", tier=player_tier, gender=gender, present=present)
        )
    return players


def assert_no_double_booking(matches):
    """Every match has four distinct players."""
    for match in matches:
        assert len(set(match.player_ids())) == 4, f"{match.id} repeats a player"


def match_signature(matches):
    """Comparable form of a match sequence: team id pairs in order."""
    return [
        (
            (m.team_1.player_1.id, m.team_1.player_2.id),
            (m.team_2.player_1.id, m.team_2.player_2.id),
        )
        for m in matches
    ]
