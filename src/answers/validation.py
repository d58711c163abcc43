"""
Answer field validation.

Only fields listed in VALIDATION_INFO are ever written to the graph;
anything else a caller passes in is dropped.
"""

import re
from dataclasses import dataclass
from typing import Any

from src.shared.exceptions import ValidationError


@dataclass(frozen=True)
class FieldRule:
    """Constraints for a single answer property."""

    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern | None = None
    message: str = ""


VALIDATION_INFO: dict[str, FieldRule] = {
    "answername": FieldRule(
        required=True,
        min_length=2,
        max_length=16,
        pattern=re.compile(r"[A-Za-z0-9_]+"),
        message="2-16 characters; letters, numbers, and underscores only.",
    ),
}


def validate(props: dict[str, Any], required: bool = False) -> dict[str, Any]:
    """Select the known properties from ``props`` and validate them.

    By default only properties that are present are checked, so partial
    updates need not repeat the identity key. Pass ``required=True`` to
    also insist that every required property is present (creation).

    Returns:
        The known, validated subset of ``props``. Absent or empty values
        are left out.

    Raises:
        ValidationError: On the first property that fails its rule.
    """
    safe_props: dict[str, Any] = {}

    for prop, rule in VALIDATION_INFO.items():
        val = props.get(prop)
        if validate_prop(prop, val, rule, required):
            safe_props[prop] = val

    return safe_props


def validate_prop(prop: str, val: Any, rule: FieldRule, required: bool = False) -> bool:
    """Check one value against its rule.

    Returns:
        False if the value is absent and allowed to be, True if it is present and valid.
    """
    if val is None or val == "":
        if rule.required and required:
            raise ValidationError(f"Missing {prop} (required).", field=prop)
        return False

    requirements = f"Requirements: {rule.message}"

    if not isinstance(val, str):
        raise ValidationError(f"Invalid {prop} (format). {requirements}", field=prop)

    if rule.min_length is not None and len(val) < rule.min_length:
        raise ValidationError(f"Invalid {prop} (too short). {requirements}", field=prop)

    if rule.max_length is not None and len(val) > rule.max_length:
        raise ValidationError(f"Invalid {prop} (too long). {requirements}", field=prop)

    if rule.pattern is not None and not rule.pattern.fullmatch(val):
        raise ValidationError(f"Invalid {prop} (format). {requirements}", field=prop)

    return True
