import random

import pytest

from app_types import Gender, Player, Tier


@pytest.fixture
def sample_players():
    """Returns a list of eight present players across several tiers."""
    return [
        Player(id="u1", name="Alice", tier=Tier.B, gender=Gender.FEMALE),
        Player(id="u2", name="Bob", tier=Tier.C, gender=Gender.MALE),
        Player(id="u3", name="Charlie", tier=Tier.A, gender=Gender.MALE),
        Player(id="u4", name="Dave", tier=Tier.C, gender=Gender.MALE),
        Player(id="u5", name="Eve", tier=Tier.D, gender=Gender.FEMALE),
        Player(id="u6", name="Frank", tier=Tier.B, gender=Gender.MALE),
        Player(id="u7", name="Grace", tier=Tier.N, gender=Gender.FEMALE),
        Player(id="u8", name="Heidi", tier=Tier.C, gender=Gender.FEMALE),
    ]


@pytest.fixture
def mixed_four():
    """Two men and two women."""
    return [
        Player(id="M1", name="M1", tier=Tier.C, gender=Gender.MALE),
        Player(id="M2", name="M2", tier=Tier.C, gender=Gender.MALE),
        Player(id="F1", name="F1", tier=Tier.C, gender=Gender.FEMALE),
        Player(id="F2", name="F2", tier=Tier.C, gender=Gender.FEMALE),
    ]


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
