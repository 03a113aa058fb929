"""
utils.py
Validation, dates, exports.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone

import pandas as pd

import config
from exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", re.IGNORECASE)

PUBLIC_COLUMNS = [
    "id",
    "first_name",
    "last_name",
    "email",
    "is_active",
    "registration_date",
    "renewal_date",
    "membership_type_id",
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime | date) -> datetime:
    """Naive datetimes are taken to be UTC already; a bare date means midnight UTC."""
    if not isinstance(dt, datetime):
        return datetime.combine(dt, time.min, timezone.utc)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    # fixed width so stored values sort as text
    return as_utc(dt).isoformat(timespec="microseconds")


def parse_iso(d: str) -> datetime:
    return as_utc(datetime.fromisoformat(d))


def add_months(start: datetime, months: int) -> datetime:
    """
    Add months while keeping day in valid range (e.g., Jan 31 + 1 month => Feb 28/29).
    """
    y = start.year + (start.month - 1 + months) // 12
    m = (start.month - 1 + months) % 12 + 1
    # last day of target month
    if m == 12:
        next_month = datetime(y + 1, 1, 1)
    else:
        next_month = datetime(y, m + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return start.replace(year=y, month=m, day=min(start.day, last_day))


def add_years(start: datetime, years: int = 1) -> datetime:
    return add_months(start, 12 * years)


def is_valid_email(email: str) -> bool:
    if not email or not email.strip():
        return False
    return EMAIL_RE.match(email.strip()) is not None


def is_valid_membership_type(membership_type_id) -> bool:
    return (
        isinstance(membership_type_id, int)
        and not isinstance(membership_type_id, bool)
        and membership_type_id > 0
    )


def validate_registration_inputs(
    first_name: str, last_name: str, email: str, password: str, membership_type_id
) -> list[ValidationError]:
    """
    Check registration fields in order; every failing field gets one entry.
    """
    errors: list[ValidationError] = []
    if not first_name or not first_name.strip():
        errors.append(ValidationError("first_name", "First name is required."))
    if not last_name or not last_name.strip():
        errors.append(ValidationError("last_name", "Last name is required."))
    if not email or not email.strip():
        errors.append(ValidationError("email", "Email is required."))
    elif not is_valid_email(email):
        errors.append(ValidationError("email", "Email must look like name@domain.tld."))
    if not password or not password.strip():
        errors.append(ValidationError("password", "Password is required."))
    elif len(password) < config.MIN_PASSWORD_LENGTH:
        errors.append(
            ValidationError(
                "password",
                f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters.",
            )
        )
    if not is_valid_membership_type(membership_type_id):
        errors.append(ValidationError("membership_type_id", "Membership type must be a positive integer."))
    return errors


def members_to_csv_bytes(members) -> bytes:
    df = pd.DataFrame([m.to_public_dict() for m in members], columns=PUBLIC_COLUMNS)
    return df.to_csv(index=False).encode("utf-8")
