"""
Stored payload schemas

What actually goes into the key/value store: catalog entries and groups of
players reduced to the fields typed in by the user.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter

from records import Player, STORED_FIELDS


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoredFileInfo(BaseModel):
    """Catalog entry"""
    id: str = Field(..., description="Opaque file id")
    name: str = Field(..., description="Display name")
    last_modified: datetime = Field(default_factory=utc_now, alias="lastModified")

    class Config:
        populate_by_name = True


class StoredPlayer(BaseModel):
    """Player without derived fields"""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    sprint30m_time: Optional[float] = Field(None, alias="sprint30m_time")
    medicine_ball_forward: Optional[float] = Field(None, alias="medicineBall_forward")
    medicine_ball_backward: Optional[float] = Field(None, alias="medicineBall_backward")
    five_jump_distance: Optional[float] = Field(None, alias="fiveJump_distance")
    hand_throw_distance: Optional[float] = Field(None, alias="handThrow_distance")
    hand_throw_score: Optional[float] = Field(None, alias="handThrow_score")
    envelope_time: Optional[float] = Field(None, alias="envelope_time")
    envelope_score: Optional[float] = Field(None, alias="envelope_score")

    class Config:
        populate_by_name = True

    @classmethod
    def from_player(cls, player: Player) -> "StoredPlayer":
        return cls.model_validate({name: getattr(player, name) for name in STORED_FIELDS})

    def to_player(self) -> Player:
        """Player with derived fields still unset"""
        return Player.model_validate(self.model_dump())


class StoredGroup(BaseModel):
    name: str
    players: List[StoredPlayer] = Field(default_factory=list)


catalog_adapter = TypeAdapter(List[StoredFileInfo])
payload_adapter = TypeAdapter(List[StoredGroup])
