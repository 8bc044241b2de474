# fitcoach/validation.py
"""
Request payload checks.

Each ``clean_*`` function takes the decoded JSON body and returns a dict of
model-attribute names to validated values. With ``partial=True`` omitted
fields are left out of the result instead of being reported as missing.
All problems are collected and raised together as one ValidationError.
"""

import math
import re
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .models.user import ROLES

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6

# Column limits: Integer columns are 32-bit signed, names are String(255).
MAX_INT = 2**31 - 1
MAX_TEXT_LENGTH = 255

_MISSING = object()


# ------------------------------
# Field helpers
# ------------------------------
def _as_mapping(data: Any) -> Dict[str, Any]:
    # JSON bodies that are not objects are treated as empty
    return data if isinstance(data, dict) else {}


def _add(errors: List[Dict[str, str]], field: str, message: str) -> None:
    errors.append({"field": field, "message": message})


def _as_int(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


def _as_float(v: Any) -> Optional[float]:
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v.strip())
        except ValueError:
            return None
    return None


def _text(data, field, message, errors, partial):
    raw = data.get(field, _MISSING)
    if raw is _MISSING or raw is None:
        if not partial:
            _add(errors, field, message)
        return _MISSING
    if not isinstance(raw, str) or not raw.strip():
        _add(errors, field, message)
        return _MISSING
    value = raw.strip()
    if len(value) > MAX_TEXT_LENGTH:
        _add(errors, field, f"{field} must be at most {MAX_TEXT_LENGTH} characters")
        return _MISSING
    return value


def _int_at_least(data, field, minimum, message, errors, partial):
    raw = data.get(field, _MISSING)
    if raw is _MISSING or raw is None:
        if not partial:
            _add(errors, field, message)
        return _MISSING
    value = _as_int(raw)
    if value is None or value < minimum:
        _add(errors, field, message)
        return _MISSING
    if value > MAX_INT:
        _add(errors, field, f"{field} must be at most {MAX_INT}")
        return _MISSING
    return value


def _float_at_least(data, field, minimum, message, errors, partial):
    raw = data.get(field, _MISSING)
    if raw is _MISSING or raw is None:
        if not partial:
            _add(errors, field, message)
        return _MISSING
    value = _as_float(raw)
    if value is None or not math.isfinite(value) or value < minimum:
        _add(errors, field, message)
        return _MISSING
    return value


def _finish(errors, cleaned):
    if errors:
        raise ValidationError(errors)
    return {k: v for k, v in cleaned.items() if v is not _MISSING}


# ------------------------------
# Payloads
# ------------------------------
def clean_registration(data: Dict[str, Any]) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    data = _as_mapping(data)

    email = data.get("email")
    email = email.strip().lower() if isinstance(email, str) else ""
    if not EMAIL_RE.match(email) or len(email) > MAX_TEXT_LENGTH:
        _add(errors, "email", "Please include a valid email")

    password = data.get("password")  # do NOT strip passwords
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        _add(errors, "password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    role = data.get("role")
    if role not in ROLES:
        _add(errors, "role", 'Role must be either "trainer" or "user"')

    return _finish(errors, {"email": email, "password": password, "role": role})


def clean_login(data: Dict[str, Any]) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    data = _as_mapping(data)

    email = data.get("email")
    email = email.strip().lower() if isinstance(email, str) else ""
    if not EMAIL_RE.match(email) or len(email) > MAX_TEXT_LENGTH:
        _add(errors, "email", "Please include a valid email")

    password = data.get("password")
    if not isinstance(password, str) or not password:
        _add(errors, "password", "Password is required")

    return _finish(errors, {"email": email, "password": password})


def clean_program(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    data = _as_mapping(data)
    name = _text(data, "programName", "Program name is required", errors, partial)
    return _finish(errors, {"program_name": name})


def clean_training_day(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    data = _as_mapping(data)
    day_number = _int_at_least(
        data, "dayNumber", 1, "Day number must be a positive integer", errors, partial
    )
    return _finish(errors, {"day_number": day_number})


def clean_exercise(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    data = _as_mapping(data)
    name = _text(data, "name", "Exercise name is required", errors, partial)
    return _finish(errors, {"name": name})


def clean_set(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    data = _as_mapping(data)
    reps = _int_at_least(data, "reps", 1, "Reps must be at least 1", errors, partial)
    weight = _float_at_least(
        data, "weight", 0, "Weight must be a non-negative number", errors, partial
    )
    return _finish(errors, {"reps": reps, "weight": weight})


def clean_user_id(data: Dict[str, Any]) -> int:
    user_id = _as_int(_as_mapping(data).get("userId"))
    if user_id is None or not 1 <= user_id <= MAX_INT:
        raise ValidationError.single("userId", "User ID is required")
    return user_id


def id_in_range(value: int) -> bool:
    """Ids outside the Integer column range can never match a row."""
    return 1 <= value <= MAX_INT


def parse_page_args(args, default_size: int):
    """Read ``page``/``limit`` query args as integers (lower bound is checked later)."""
    errors: List[Dict[str, str]] = []

    page = _as_int(args.get("page", 1))
    if page is None or page > MAX_INT:
        _add(errors, "page", "page must be an integer")

    limit = _as_int(args.get("limit", default_size))
    if limit is None or limit > MAX_INT:
        _add(errors, "limit", "limit must be an integer")

    if errors:
        raise ValidationError(errors)
    return page, limit
