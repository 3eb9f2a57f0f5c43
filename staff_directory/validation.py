# validation.py
"""
Request-payload validation for employee writes.

``validate_create`` and ``validate_update`` turn a decoded JSON body into an
``EmployeeCreate`` / ``EmployeeUpdate`` or raise ``MissingFields`` /
``ValidationError``. Nothing in here touches the database.
"""
import math
import re
from dataclasses import asdict, dataclass, fields
from typing import Optional

from staff_directory.errors import MissingFields, ValidationError

REQUIRED_FIELDS = ("name", "email", "phone", "department", "position", "salary")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class EmployeeCreate:
    name: str
    email: str
    phone: str
    department: str
    position: str
    salary: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EmployeeUpdate:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    salary: Optional[float] = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_text(field: str, value, errors: dict):
    if not isinstance(value, str):
        errors[field] = f"{field} must be a string"
        return None
    value = value.strip()
    if not value:
        errors[field] = f"{field} must not be empty"
        return None
    return value


def _check_email(value, errors: dict):
    if not isinstance(value, str):
        errors["email"] = "email must be a string"
        return None
    value = value.strip().lower()
    if not EMAIL_RE.match(value):
        errors["email"] = "email must be a valid email address"
        return None
    return value


def _check_salary(value, errors: dict):
    # bool is an int subclass; true/false is not a salary
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors["salary"] = "salary must be a number"
        return None
    if not math.isfinite(value):
        errors["salary"] = "salary must be a non-negative number"
        return None
    if value < 0:
        errors["salary"] = "salary must not be negative"
        return None
    return value


def _check_value(field: str, value, errors: dict):
    if field == "email":
        return _check_email(value, errors)
    if field == "salary":
        return _check_salary(value, errors)
    return _check_text(field, value, errors)


def _require_object(data):
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"body": "Request body must be a JSON object"})
    return data


def validate_create(data) -> EmployeeCreate:
    data = _require_object(data)

    missing = [f for f in REQUIRED_FIELDS if _is_blank(data.get(f))]
    if missing:
        raise MissingFields(missing)

    errors = {}
    cleaned = {f: _check_value(f, data[f], errors) for f in REQUIRED_FIELDS}
    if errors:
        raise ValidationError(errors)
    return EmployeeCreate(**cleaned)


def validate_update(data) -> EmployeeUpdate:
    """Partial update: every field is optional, but a field that is sent must be valid."""
    data = _require_object(data)

    errors = {}
    cleaned = {}
    for field in REQUIRED_FIELDS:
        if field not in data:
            continue
        if data[field] is None:
            errors[field] = f"{field} must not be empty"
            continue
        cleaned[field] = _check_value(field, data[field], errors)
    if errors:
        raise ValidationError(errors)
    return EmployeeUpdate(**cleaned)
