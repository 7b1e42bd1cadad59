"""
Player test records

Models, derived field rules, list helpers and input checks
"""

from .models import (
    Player,
    Group,
    NAME_MAX_LENGTH,
    RAW_FIELDS,
    MANUAL_SCORE_FIELDS,
    DERIVED_FIELDS,
    NAME_FIELDS,
    STORED_FIELDS,
    resolve_field,
    create_empty_player,
)
from .derivation import (
    FieldUpdateError,
    apply_field_update,
    recompute_derived,
    satisfies_invariant,
    medicine_ball_total,
)
from .groups import (
    new_group,
    default_groups,
    ensure_groups,
    add_group,
    remove_group,
    rename_group,
    add_player,
    remove_player,
    update_player,
)
from .validation import (
    ValidationSeverity,
    ValidationIssue,
    ValidationResult,
    VALIDATION_RULES,
    NUMBER_REQUIRED_MESSAGE,
    parse_numeric_input,
    check_range,
    validate_player,
)

__all__ = [
    # Models
    "Player",
    "Group",
    "NAME_MAX_LENGTH",
    "RAW_FIELDS",
    "MANUAL_SCORE_FIELDS",
    "DERIVED_FIELDS",
    "NAME_FIELDS",
    "STORED_FIELDS",
    "resolve_field",
    "create_empty_player",
    # Derivation
    "FieldUpdateError",
    "apply_field_update",
    "recompute_derived",
    "satisfies_invariant",
    "medicine_ball_total",
    # Groups
    "new_group",
    "default_groups",
    "ensure_groups",
    "add_group",
    "remove_group",
    "rename_group",
    "add_player",
    "remove_player",
    "update_player",
    # Validation
    "ValidationSeverity",
    "ValidationIssue",
    "ValidationResult",
    "VALIDATION_RULES",
    "NUMBER_REQUIRED_MESSAGE",
    "parse_numeric_input",
    "check_range",
    "validate_player",
]
