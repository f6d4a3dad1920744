"""
Declarative request validation and sanitization.

A schema maps field names to FieldRule instances. Rules are plain data: a
closed set of kinds (type, required, enum, length bounds, nested schema,
sanitize mode) plus an optional named check looked up in a fixed registry.
Schemas are built once at import time with ``define_schema`` and are
read-only afterwards.

Usage:
    SCHEMA = define_schema(
        title=FieldRule(FieldType.STRING, required=True, max_length=200,
                        sanitize=SanitizeMode.TEXT),
    )
    result = validate({"title": "  Grace  "}, SCHEMA)
    assert result.data == {"title": "Grace"}
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .models import ValidationResult

DEFAULT_TEXT_MAX_LENGTH = 10_000
DEFAULT_HTML_MAX_LENGTH = 50_000

_WHITESPACE_RUN = re.compile(r"\s+")
_SCRIPT_BLOCK = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script\s*>",
    re.IGNORECASE,
)
_SCRIPT_OPEN = re.compile(r"<script\b[^>]*>?", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_EVENT_HANDLER = re.compile(
    r"\s+on[a-z]+\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]+)",
    re.IGNORECASE,
)
_JAVASCRIPT_URI = re.compile(r"javascript\s*:", re.IGNORECASE)
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class FieldType(str, Enum):
    """JSON value types a field may be declared as."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class SanitizeMode(str, Enum):
    """How a string value is cleaned before it reaches a handler."""

    NONE = "none"
    TEXT = "text"  # Single-line plain text
    HTML = "html"  # Rich/markdown content, line breaks preserved


class Check(str, Enum):
    """Named value checks available to schemas."""

    JSON = "json"
    UUID = "uuid"
    EMAIL = "email"
    STRIPE_PRICE_ID = "stripe_price_id"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for a single field."""

    type: FieldType
    required: bool = False
    enum: Optional[tuple[str, ...]] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    sanitize: SanitizeMode = SanitizeMode.NONE
    check: Optional[Check] = None
    schema: Optional[Mapping[str, "FieldRule"]] = None


Schema = Mapping[str, FieldRule]


def define_schema(**fields: FieldRule) -> Schema:
    """Build a read-only schema from keyword field rules."""
    return MappingProxyType(dict(fields))


# ---------------------------------------------------------------------------
# Sanitizers and helpers
# ---------------------------------------------------------------------------


def sanitize_string(value: Any, max_length: int = DEFAULT_TEXT_MAX_LENGTH) -> str:
    """
    Clean a plain-text value.

    Removes null bytes, collapses whitespace runs to a single space, trims,
    and truncates to ``max_length``. Applying it to its own output returns
    the same string.
    """
    if not isinstance(value, str):
        return ""

    cleaned = value.replace("\0", "")
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned).strip()
    return cleaned[:max_length].rstrip()


def sanitize_html(value: Any, max_length: int = DEFAULT_HTML_MAX_LENGTH) -> str:
    """
    Clean rich content (saved sermons, markdown documents).

    Removes null bytes, ``<script>`` blocks, inline event-handler attributes
    and ``javascript:`` URIs. Line breaks are kept.
    """
    if not isinstance(value, str):
        return ""

    cleaned = value.replace("\0", "")
    cleaned = _SCRIPT_BLOCK.sub("", cleaned)
    cleaned = _SCRIPT_OPEN.sub("", cleaned)
    cleaned = _TAG.sub(lambda m: _EVENT_HANDLER.sub("", m.group(0)), cleaned)
    cleaned = _JAVASCRIPT_URI.sub("", cleaned)
    return cleaned.strip()[:max_length]


def validate_email(value: Any) -> Optional[str]:
    """Return the normalized (trimmed, lowercase) email, or None if invalid."""
    if not isinstance(value, str):
        return None

    normalized = value.strip().lower()
    if len(normalized) > 254 or not _EMAIL.match(normalized):
        return None
    return normalized


def is_uuid(value: Any) -> bool:
    """Whether a value is a UUID string (any version)."""
    return isinstance(value, str) and bool(_UUID.match(value.strip()))


def _is_json(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


_CHECKS: dict[Check, Callable[[Any], bool]] = {
    Check.JSON: _is_json,
    Check.UUID: is_uuid,
    Check.EMAIL: lambda value: validate_email(value) is not None,
    Check.STRIPE_PRICE_ID: lambda value: isinstance(value, str) and value.startswith("price_"),
}


def _matches_type(value: Any, field_type: FieldType) -> bool:
    # bool is a subclass of int; JSON true/false are not numbers
    if field_type == FieldType.STRING:
        return isinstance(value, str)
    if field_type == FieldType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if field_type == FieldType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if field_type == FieldType.BOOLEAN:
        return isinstance(value, bool)
    if field_type == FieldType.OBJECT:
        return isinstance(value, dict)
    if field_type == FieldType.ARRAY:
        return isinstance(value, list)
    return False


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate(payload: Mapping[str, Any], schema: Schema, strict: bool = True) -> ValidationResult:
    """
    Validate and sanitize a payload against a schema.

    Every violation is collected; a field stops at its first failing rule
    but the remaining fields are still checked.

    Args:
        payload: Decoded request data
        schema: Field rules
        strict: Reject keys that the schema does not declare

    Returns:
        ValidationResult whose ``data`` holds only schema-declared fields,
        each sanitized according to its rule
    """
    errors: list[str] = []
    data: dict[str, Any] = {}

    if strict:
        unexpected = [key for key in payload if key not in schema]
        if unexpected:
            errors.append(f"Unexpected fields: {', '.join(unexpected)}")

    for field, rule in schema.items():
        value = payload.get(field)

        if _is_missing(value):
            if rule.required:
                errors.append(f"{field} is required")
            continue

        if not _matches_type(value, rule.type):
            errors.append(f"{field} must be of type {rule.type.value}")
            continue

        if rule.enum is not None and value not in rule.enum:
            errors.append(f"{field} must be one of: {', '.join(rule.enum)}")
            continue

        if rule.type == FieldType.STRING:
            if rule.min_length is not None and len(value) < rule.min_length:
                errors.append(f"{field} must be at least {rule.min_length} characters")
                continue
            if rule.max_length is not None and len(value) > rule.max_length:
                errors.append(f"{field} must be at most {rule.max_length} characters")
                continue

        if rule.check is not None and not _CHECKS[rule.check](value):
            errors.append(f"{field} failed validation")
            continue

        if rule.sanitize == SanitizeMode.TEXT:
            value = sanitize_string(value, rule.max_length or DEFAULT_TEXT_MAX_LENGTH)
        elif rule.sanitize == SanitizeMode.HTML:
            value = sanitize_html(value, rule.max_length or DEFAULT_HTML_MAX_LENGTH)

        if rule.sanitize != SanitizeMode.NONE and value == "":
            # Whitespace-only or script-only input sanitizes to nothing
            if rule.required:
                errors.append(f"{field} is required")
            continue

        if rule.type == FieldType.OBJECT and rule.schema is not None:
            nested = validate(value, rule.schema, strict)
            if not nested.valid:
                errors.extend(f"{field}.{message}" for message in nested.errors)
                continue
            value = nested.data

        data[field] = value

    return ValidationResult(valid=not errors, errors=errors, data=data)


def validate_request(body: Any, schema: Schema) -> ValidationResult:
    """
    Validate a decoded request body in strict mode.

    A body that is not a JSON object is rejected outright.
    """
    if not isinstance(body, dict):
        return ValidationResult(
            valid=False,
            errors=["Request body must be a valid JSON object"],
            data=None,
        )

    return validate(body, schema, strict=True)
