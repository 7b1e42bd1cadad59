"""
Group and player list helpers

Copy-on-write operations on the group list a file holds. A file always keeps
at least one group.
"""

from typing import Any, List

from loguru import logger

from .models import Group, Player, DEFAULT_GROUP_NAME, create_empty_player
from .derivation import apply_field_update


def new_group(index: int) -> Group:
    """Empty group named "Grupa <index>" (1-based)"""
    return Group(name=DEFAULT_GROUP_NAME.format(index=index), players=[])


def default_groups() -> List[Group]:
    """Starting content of a new sheet"""
    return [new_group(1)]


def ensure_groups(groups: List[Group]) -> List[Group]:
    """Never hand an empty group list to the editor"""
    return list(groups) if groups else default_groups()


def add_group(groups: List[Group]) -> List[Group]:
    return [*groups, new_group(len(groups) + 1)]


def remove_group(groups: List[Group], index: int) -> List[Group]:
    """Drop a group; the last remaining group is kept"""
    if len(groups) <= 1:
        logger.warning("Refusing to remove the last group")
        return list(groups)
    if not 0 <= index < len(groups):
        raise IndexError(f"Group index out of range: {index}")
    return [g for i, g in enumerate(groups) if i != index]


def rename_group(groups: List[Group], index: int, name: str) -> List[Group]:
    updated = list(groups)
    updated[index] = groups[index].model_copy(update={"name": name})
    return updated


def add_player(group: Group) -> Group:
    return group.model_copy(update={"players": [*group.players, create_empty_player()]})


def remove_player(group: Group, index: int) -> Group:
    if not 0 <= index < len(group.players):
        raise IndexError(f"Player index out of range: {index}")
    players = [p for i, p in enumerate(group.players) if i != index]
    return group.model_copy(update={"players": players})


def update_player(group: Group, index: int, field: str, value: Any) -> Group:
    """Apply a field edit to one row and return the new group"""
    players: List[Player] = list(group.players)
    players[index] = apply_field_update(players[index], field, value)
    return group.model_copy(update={"players": players})
