"""
Pytest configuration and fixtures for the handball fitness tracker tests
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from records import Group, Player, apply_field_update, create_empty_player
from storage import MemoryStore, PersistenceStore


def make_player(first_name: str = "", last_name: str = "", **raw) -> Player:
    """Player built through field updates so derived fields are consistent"""
    player = create_empty_player()
    player = apply_field_update(player, "first_name", first_name)
    player = apply_field_update(player, "last_name", last_name)
    for field, value in raw.items():
        player = apply_field_update(player, field, value)
    return player


@pytest.fixture(scope="function")
def full_player():
    """Every field populated"""
    return make_player(
        "Jan",
        "Kowalski",
        sprint30m_time=4.12,
        medicine_ball_forward=12.4,
        medicine_ball_backward=10.35,
        five_jump_distance=12.1,
        hand_throw_distance=38.5,
        hand_throw_score=55,
        envelope_time=21.3,
        envelope_score=47,
    )


@pytest.fixture(scope="function")
def partial_player():
    """Some measurements missing"""
    return make_player(
        "Anna",
        "Nowak",
        sprint30m_time=5.31,
        medicine_ball_forward=9.0,
        five_jump_distance=7.5,
    )


@pytest.fixture(scope="function")
def sample_groups(full_player, partial_player):
    """Two populated groups and an empty one"""
    return [
        Group(name="Grupa 1", players=[full_player, partial_player]),
        Group(name="Juniorzy", players=[make_player("Piotr", "Wiśniewski", sprint30m_time=3.65)]),
        Group(name="Grupa 3", players=[]),
    ]


@pytest.fixture(scope="function")
def memory_kv():
    return MemoryStore()


@pytest.fixture(scope="function")
def store(memory_kv):
    return PersistenceStore(memory_kv)
