"""
Player / Group models

Pydantic models for the test sheet. Attribute names are snake_case; the
aliases are the wire names used in stored payloads.
"""

from typing import Optional, List, Dict, Union
from pydantic import BaseModel, Field, field_validator


NAME_MAX_LENGTH = 15
DEFAULT_GROUP_NAME = "Grupa {index}"


# ==================== Field groups ====================

# Measurements typed in by the user
RAW_FIELDS = (
    "sprint30m_time",
    "medicine_ball_forward",
    "medicine_ball_backward",
    "five_jump_distance",
    "hand_throw_distance",
    "envelope_time",
)

# Scores typed in by the user (no point table)
MANUAL_SCORE_FIELDS = (
    "hand_throw_score",
    "envelope_score",
)

# Always recomputed from RAW_FIELDS, never stored
DERIVED_FIELDS = (
    "sprint30m_score",
    "medicine_ball_sum",
    "medicine_ball_score",
    "five_jump_score",
)

NAME_FIELDS = ("first_name", "last_name")

# Everything that survives a save
STORED_FIELDS = NAME_FIELDS + RAW_FIELDS + MANUAL_SCORE_FIELDS


class Player(BaseModel):
    """Single player's test record

    Computed scores are ints; an imported sheet may carry a hand-adjusted
    fractional score, which is kept as it is.
    """

    # Identity
    first_name: str = Field(default="", alias="firstName", description="First name")
    last_name: str = Field(default="", alias="lastName", description="Last name")

    # 30 m sprint
    sprint30m_time: Optional[float] = Field(None, alias="sprint30m_time", description="Time (s)")
    sprint30m_score: Optional[Union[int, float]] = Field(None, alias="sprint30m_score", description="Points")

    # Medicine ball throw
    medicine_ball_forward: Optional[float] = Field(None, alias="medicineBall_forward", description="Forward throw (m)")
    medicine_ball_backward: Optional[float] = Field(None, alias="medicineBall_backward", description="Backward throw (m)")
    medicine_ball_sum: Optional[float] = Field(None, alias="medicineBall_sum", description="Forward + backward (m)")
    medicine_ball_score: Optional[Union[int, float]] = Field(None, alias="medicineBall_score", description="Points")

    # Five-jump
    five_jump_distance: Optional[float] = Field(None, alias="fiveJump_distance", description="Distance (m)")
    five_jump_score: Optional[Union[int, float]] = Field(None, alias="fiveJump_score", description="Points")

    # Hand throw (manual score)
    hand_throw_distance: Optional[float] = Field(None, alias="handThrow_distance", description="Distance (m)")
    hand_throw_score: Optional[float] = Field(None, alias="handThrow_score", description="Points")

    # Envelope run (manual score)
    envelope_time: Optional[float] = Field(None, alias="envelope_time", description="Time (s)")
    envelope_score: Optional[float] = Field(None, alias="envelope_score", description="Points")

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def truncate_name(cls, v) -> str:
        """Names are capped at 15 characters"""
        if v is None:
            return ""
        return str(v)[:NAME_MAX_LENGTH]

    class Config:
        populate_by_name = True
        allow_inf_nan = False

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_wire(self) -> Dict[str, object]:
        return self.model_dump(by_alias=True)


class Group(BaseModel):
    """Named, ordered list of players (one spreadsheet sheet)"""

    name: str = Field(..., description="Group label / sheet name")
    players: List[Player] = Field(default_factory=list)


# ==================== Field name lookup ====================

FIELD_ALIASES: Dict[str, str] = {
    info.alias: name for name, info in Player.model_fields.items() if info.alias
}


def resolve_field(name: str) -> str:
    """Attribute name for either an attribute name or a wire name"""
    if name in Player.model_fields:
        return name
    if name in FIELD_ALIASES:
        return FIELD_ALIASES[name]
    raise KeyError(name)


def create_empty_player() -> Player:
    """New row: empty names, every measurement unset"""
    return Player()
