"""
models.py
Member entity and its column layout.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

# Column order of the members table
MEMBER_COLUMNS = (
    "id",
    "first_name",
    "last_name",
    "email",
    "password_hash",
    "is_active",
    "registration_date",
    "renewal_date",
    "membership_type_id",
)

# Columns an update is allowed to write
MUTABLE_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "password_hash",
    "is_active",
    "membership_type_id",
)


@dataclass(frozen=True)
class Member:
    id: int | None
    first_name: str
    last_name: str
    email: str
    password_hash: str
    is_active: bool
    registration_date: datetime
    renewal_date: datetime
    membership_type_id: int

    def to_public_dict(self) -> dict:
        """Everything except the credential, dates as ISO strings."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "is_active": self.is_active,
            "registration_date": self.registration_date.isoformat(),
            "renewal_date": self.renewal_date.isoformat(),
            "membership_type_id": self.membership_type_id,
        }
