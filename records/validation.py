"""
Manual input checks

Sanitizing of typed values and per-field plausibility ranges. Out-of-range
values are reported, not rejected: the editor shows the message and the
value is still stored.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .models import Player, resolve_field


class ValidationSeverity(str, Enum):
    """Issue severity"""
    ERROR = "error"       # value could not be used
    WARNING = "warning"   # value stored, outside the expected range


class ValidationIssue(BaseModel):
    """Single problem with one field"""
    field: str = Field(..., description="Player attribute")
    severity: ValidationSeverity = Field(..., description="Severity")
    message: str = Field(..., description="Message shown next to the cell")
    value: Optional[Any] = Field(None, description="Offending value")


class ValidationResult(BaseModel):
    """Outcome of checking a player"""
    issues: List[ValidationIssue] = Field(default_factory=list)
    validated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def has_errors(self) -> bool:
        return any(i.severity == ValidationSeverity.ERROR for i in self.issues)


class RangeRule(BaseModel):
    min: float
    max: float
    message: str


NUMBER_REQUIRED_MESSAGE = "Wymagana liczba"

VALIDATION_RULES: Dict[str, RangeRule] = {
    "sprint30m_time": RangeRule(min=0.1, max=99.99, message="Czas 30m: 0.1 - 99.99 s"),
    "medicine_ball_forward": RangeRule(min=0, max=30, message="Lekarska (przód): 0 - 30 m"),
    "medicine_ball_backward": RangeRule(min=0, max=30, message="Lekarska (tył): 0 - 30 m"),
    "five_jump_distance": RangeRule(min=0, max=25, message="Pięcioskok: 0 - 25 m"),
    "hand_throw_distance": RangeRule(min=0, max=60, message="Rzut ręczny: 0 - 60 m"),
    "hand_throw_score": RangeRule(min=0, max=80, message="Wynik: 0 - 80 pkt"),
    "envelope_time": RangeRule(min=0.1, max=999.9, message="Czas koperty: 0.1 - 999.9 s"),
    "envelope_score": RangeRule(min=0, max=80, message="Wynik: 0 - 80 pkt"),
}


def parse_numeric_input(text: Optional[str]) -> Optional[float]:
    """
    Turn a typed cell value into a number

    Empty / whitespace → None. Anything that is not a finite number raises
    ValueError with the message shown to the user.
    """
    if text is None:
        return None
    stripped = str(text).strip()
    if stripped == "":
        return None
    try:
        value = float(stripped)
    except ValueError:
        raise ValueError(NUMBER_REQUIRED_MESSAGE) from None
    if not math.isfinite(value):
        raise ValueError(NUMBER_REQUIRED_MESSAGE)
    return value


def check_range(field: str, value: Optional[float]) -> Optional[ValidationIssue]:
    """Range issue for a single value, if any"""
    name = resolve_field(field)
    rule = VALIDATION_RULES.get(name)
    if rule is None or value is None:
        return None
    if value < rule.min or value > rule.max:
        return ValidationIssue(
            field=name,
            severity=ValidationSeverity.WARNING,
            message=rule.message,
            value=value,
        )
    return None


def validate_player(player: Player) -> ValidationResult:
    """Range-check every field that has a rule"""
    result = ValidationResult()
    for name in VALIDATION_RULES:
        issue = check_range(name, getattr(player, name))
        if issue:
            result.issues.append(issue)
    return result
