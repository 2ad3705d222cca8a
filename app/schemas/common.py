"""
Shared schema helpers: response envelope, pagination, date normalisation
and structured validation errors.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


# ── Envelope ──────────────────────────────────────────────────────────────────

class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            total_items=total,
            items_per_page=limit,
        )


def success_response(data: Any = None, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return body


def error_response(message: str, errors: Optional[List[str]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


# ── Validation ────────────────────────────────────────────────────────────────

def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Turn pydantic error dicts into `field: message` strings."""
    messages = []
    for err in errors:
        # Request errors are prefixed with their location ("body", "query")
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages


def validate_payload(schema: Type[ModelT], data: Any) -> Tuple[Optional[ModelT], List[str]]:
    """Validate `data` against `schema` without raising.

    Returns the parsed model and an empty list, or None and the list of
    human-readable error messages.
    """
    try:
        return schema.model_validate(data), []
    except ValidationError as exc:
        return None, format_validation_errors(exc.errors())


# ── Field helpers ─────────────────────────────────────────────────────────────

def parse_datetime(value: Any) -> Any:
    """Accept ISO dates/datetimes (with or without "Z"); let pydantic reject the rest."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored datetimes are naive UTC; convert aware inputs."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def strip_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def paginate(page: int, limit: int, max_limit: int) -> Tuple[int, int, int]:
    """Clamp page/limit and return (page, limit, offset)."""
    page = max(page, 1)
    limit = min(max(limit, 1), max_limit)
    return page, limit, (page - 1) * limit
