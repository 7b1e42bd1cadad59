"""
Derived field rules

Every derived field is a pure function of the raw measurements. Updates
return a new Player; the input record is left untouched.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Tuple

from scoring import sprint30m_score, medicine_ball_score, five_jump_score

from .models import Player, DERIVED_FIELDS, resolve_field


class FieldUpdateError(ValueError):
    """Unknown field, or a write to a derived field"""


def medicine_ball_total(forward: Optional[float], backward: Optional[float]) -> Optional[float]:
    """Forward + backward rounded half-up to 2 places; None unless both are present"""
    if forward is None or backward is None:
        return None
    total = Decimal(repr(forward + backward)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(total)


def _sprint_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"sprint30m_score": sprint30m_score(data["sprint30m_time"])}


def _medicine_ball_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    total = medicine_ball_total(data["medicine_ball_forward"], data["medicine_ball_backward"])
    return {
        "medicine_ball_sum": total,
        "medicine_ball_score": medicine_ball_score(total),
    }


def _five_jump_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"five_jump_score": five_jump_score(data["five_jump_distance"])}


# raw field -> rule producing the derived fields that depend on it
DEPENDENCY_RULES = {
    "sprint30m_time": _sprint_fields,
    "medicine_ball_forward": _medicine_ball_fields,
    "medicine_ball_backward": _medicine_ball_fields,
    "five_jump_distance": _five_jump_fields,
}

ALL_RULES: Tuple = (_sprint_fields, _medicine_ball_fields, _five_jump_fields)


def apply_field_update(player: Player, field: str, value: Any) -> Player:
    """
    Set one raw/manual field and re-derive the fields that depend on it

    Args:
        player: current record (not modified)
        field: attribute name or wire name (e.g. "medicineBall_forward")
        value: new value; None clears the field

    Returns:
        New Player satisfying the derived-field invariant

    Raises:
        FieldUpdateError: unknown field or derived field
        pydantic.ValidationError: value is not a finite number / string
    """
    try:
        name = resolve_field(field)
    except KeyError:
        raise FieldUpdateError(f"Unknown player field: {field}") from None

    if name in DERIVED_FIELDS:
        raise FieldUpdateError(f"{field} is computed and cannot be set directly")

    data = player.model_dump()
    data[name] = value

    rule = DEPENDENCY_RULES.get(name)
    if rule is not None:
        # Validate first so the rule sees the coerced float, not e.g. a str
        data[name] = getattr(Player.model_validate(data), name)
        data.update(rule(data))

    return Player.model_validate(data)


def recompute_derived(player: Player) -> Player:
    """Rebuild all derived fields from the raw measurements"""
    data = player.model_dump()
    for rule in ALL_RULES:
        data.update(rule(data))
    return Player.model_validate(data)


def satisfies_invariant(player: Player) -> bool:
    """True when the derived fields match the raw measurements"""
    return recompute_derived(player) == player
