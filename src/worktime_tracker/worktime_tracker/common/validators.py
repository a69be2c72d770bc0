from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_positive_id(value, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} is invalid") from e
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def optional_text(value: Optional[str], field_name: str, max_len: int = 255) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value or None
