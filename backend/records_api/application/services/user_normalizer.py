"""Validation & normalization of untrusted user input.

Every function here is pure: it turns a raw mapping (request body or query
parameters) into a typed domain value, or raises a domain ``ValidationError``.
Nothing in this module touches storage.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from records_api.application.schemas.user import AGE_MAX, AGE_MIN, UserCreate, UserUpdate
from records_api.domain.entities import NewUser, UserChanges, UserFilters, UserStatus
from records_api.domain.exceptions import ValidationError, ValidationErrorKind

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

# Integers outside this range cannot be bound as a SQL BIGINT.
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_MISSING_TYPES = frozenset({"missing", "string_too_short"})
_RANGE_TYPES = frozenset({
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
})


def normalize_create(raw: Mapping[str, Any]) -> NewUser:
    """Validate a creation payload. ``status`` defaults to active."""
    try:
        payload = UserCreate.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise _translate(exc) from exc

    return NewUser(
        name=payload.name,
        email=payload.email,
        age=payload.age,
        status=payload.status,
    )


def normalize_update(raw: Mapping[str, Any]) -> UserChanges:
    """Validate a partial update, checking only the fields actually supplied.

    A payload with no recognised fields yields an empty ``UserChanges``.
    """
    try:
        payload = UserUpdate.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise _translate(exc) from exc

    supplied = {name: getattr(payload, name) for name in payload.model_fields_set}
    return UserChanges(**supplied)


def normalize_filters(raw: Mapping[str, Any]) -> UserFilters:
    """Build filter criteria from query parameters.

    Unparseable numeric bounds are dropped rather than rejected; pagination
    falls back to its defaults.
    """
    status = _clean_text(raw.get("status"))
    if status is not None:
        try:
            status = UserStatus(status)
        except ValueError:
            raise ValidationError(
                ValidationErrorKind.INVALID_FORMAT,
                "status",
                _status_message(),
            ) from None

    limit = _parse_int(raw.get("limit"))
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    offset = _parse_int(raw.get("offset"))
    if offset is None or offset < 0:
        offset = DEFAULT_OFFSET

    return UserFilters(
        name=_clean_text(raw.get("name")),
        email=_clean_text(raw.get("email")),
        status=status,
        age_min=_parse_int(raw.get("age_min")),
        age_max=_parse_int(raw.get("age_max")),
        limit=limit,
        offset=offset,
    )


def normalize_user_id(raw: Any) -> int:
    """Parse an id-like parameter, rejecting anything that is not an integer."""
    user_id = _parse_int(raw)
    if user_id is None:
        raise ValidationError(
            ValidationErrorKind.INVALID_FORMAT, "id", "Invalid user ID"
        )
    return user_id


# ── Helpers ──────────────────────────────────────────────────────────


def _parse_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except (ValueError, TypeError):
            return None
    return value if _INT64_MIN <= value <= _INT64_MAX else None


def _clean_text(raw: Any) -> str | None:
    if raw is None:
        return None
    text = str(raw)
    return text if text else None


def _status_message() -> str:
    allowed = ", ".join(s.value for s in UserStatus)
    return f"Status must be one of: {allowed}"


def _translate(exc: PydanticValidationError) -> ValidationError:
    """Map the first pydantic error onto the domain error taxonomy.

    Pydantic reports errors in field declaration order (name, email, age,
    status), so the first error is the one a caller should see first.
    """
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else "body"
    error_type = error["type"]

    if error_type in _MISSING_TYPES or error.get("input") is None:
        return ValidationError(
            ValidationErrorKind.MISSING_FIELD,
            field,
            f"{field.capitalize()} is required",
        )
    if error_type in _RANGE_TYPES:
        return ValidationError(
            ValidationErrorKind.OUT_OF_RANGE,
            field,
            f"{field.capitalize()} must be between {AGE_MIN} and {AGE_MAX}",
        )
    if field == "email":
        message = "Invalid email format"
    elif field == "status":
        message = _status_message()
    else:
        message = f"Invalid {field}: {error['msg']}"
    return ValidationError(ValidationErrorKind.INVALID_FORMAT, field, message)
