"""
Request validation helpers shared by every resource.

Pure functions, no I/O. They raise `ValidationError` so the central handler
turns them into 400 responses.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .errors import ValidationError

CATEGORIES = ("income", "expense")


def _is_missing(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


def missing_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> list[str]:
    return [name for name in fields if _is_missing(payload.get(name))]


def require_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    fields = list(fields)
    missing = missing_fields(payload, fields)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(fields)} are mandatory.",
            error=f"Missing: {', '.join(missing)}",
        )


def normalize_category(value: str | None) -> str:
    category = (value or "").strip().lower()
    if category not in CATEGORIES:
        raise ValidationError('Invalid category. Allowed values are "income" or "expense".')
    return category


def optional_category(value: str | None) -> str | None:
    if value is None or not str(value).strip():
        return None
    return normalize_category(value)


def merge_update(existing: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge a partial update over a stored row.

    Only keys present in `updates` are considered. A `None` or blank-string
    value keeps the stored one.
    """
    merged: dict[str, Any] = {}
    for name, value in updates.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            merged[name] = existing.get(name)
        else:
            merged[name] = value
    return merged
