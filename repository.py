"""
repository.py
Member <-> row mapping. Every operation is one parameterized statement.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any

import config
import utils
from db import Store
from exceptions import PersistenceError, StoreError
from models import MEMBER_COLUMNS, MUTABLE_COLUMNS, Member

logger = config.get_logger("repository")

_SELECT = f"SELECT {', '.join(MEMBER_COLUMNS)} FROM members"
_UPDATE = f"UPDATE members SET {', '.join(f'{c} = :{c}' for c in MUTABLE_COLUMNS)} WHERE id = :id"


def row_to_member(row) -> Member:
    return Member(
        id=int(row["id"]),
        first_name=str(row["first_name"]),
        last_name=str(row["last_name"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        is_active=bool(row["is_active"]),
        registration_date=utils.parse_iso(row["registration_date"]),
        renewal_date=utils.parse_iso(row["renewal_date"]),
        membership_type_id=int(row["membership_type_id"]),
    )


class MemberRepository:
    def __init__(self, store: Store) -> None:
        self.store = store

    def _query(self, operation: str, sql: str, params: dict[str, Any] | None = None) -> list[Member]:
        try:
            rows = self.store.execute_query(sql, params)
        except StoreError as exc:
            raise PersistenceError(operation, str(exc)) from exc
        return [row_to_member(r) for r in rows]

    def _write(self, operation: str, sql: str, params: dict[str, Any]) -> int:
        try:
            return self.store.execute_non_query(sql, params)
        except StoreError as exc:
            raise PersistenceError(operation, str(exc)) from exc

    # Reads

    def get_by_id(self, member_id: int) -> Member | None:
        rows = self._query("get_by_id", f"{_SELECT} WHERE id = :id", {"id": member_id})
        return rows[0] if rows else None

    def get_by_email(self, email: str) -> Member | None:
        rows = self._query(
            "get_by_email",
            f"{_SELECT} WHERE email = :email ORDER BY id ASC LIMIT 1",
            {"email": email},
        )
        return rows[0] if rows else None

    def get_all(self) -> list[Member]:
        return self._query("get_all", f"{_SELECT} ORDER BY id ASC")

    def get_renewing_between(self, start: datetime, end: datetime) -> list[Member]:
        """Active members whose renewal date falls in [start, end]."""
        return self._query(
            "get_renewing_between",
            f"""
            {_SELECT}
            WHERE is_active = 1 AND renewal_date BETWEEN :start AND :end
            ORDER BY renewal_date ASC, id ASC
            """,
            {"start": utils.to_iso(start), "end": utils.to_iso(end)},
        )

    # Writes

    def create(self, member: Member) -> Member:
        params = {
            "first_name": member.first_name,
            "last_name": member.last_name,
            "email": member.email,
            "password_hash": member.password_hash,
            "is_active": int(member.is_active),
            "registration_date": utils.to_iso(member.registration_date),
            "renewal_date": utils.to_iso(member.renewal_date),
            "membership_type_id": member.membership_type_id,
        }
        try:
            new_id = self.store.execute_insert(
                """
                INSERT INTO members(first_name, last_name, email, password_hash, is_active,
                                    registration_date, renewal_date, membership_type_id)
                VALUES(:first_name, :last_name, :email, :password_hash, :is_active,
                       :registration_date, :renewal_date, :membership_type_id)
                """,
                params,
            )
        except StoreError as exc:
            raise PersistenceError("create", str(exc)) from exc
        logger.debug("member row inserted | id=%s", new_id)
        return replace(member, id=new_id)

    def update(self, member: Member) -> int:
        """Write the mutable columns; registration and renewal dates are left alone."""
        return self._write(
            "update",
            _UPDATE,
            {
                "id": member.id,
                "first_name": member.first_name,
                "last_name": member.last_name,
                "email": member.email,
                "password_hash": member.password_hash,
                "is_active": int(member.is_active),
                "membership_type_id": member.membership_type_id,
            },
        )

    def set_active(self, member_id: int, is_active: bool) -> int:
        return self._write(
            "set_active",
            "UPDATE members SET is_active = :is_active WHERE id = :id",
            {"id": member_id, "is_active": int(is_active)},
        )

    def set_renewal(self, member_id: int, renewal_date: datetime) -> int:
        """Renewing always reactivates."""
        return self._write(
            "set_renewal",
            "UPDATE members SET renewal_date = :renewal_date, is_active = 1 WHERE id = :id",
            {"id": member_id, "renewal_date": utils.to_iso(renewal_date)},
        )

    def set_membership_type(self, member_id: int, membership_type_id: int) -> int:
        return self._write(
            "set_membership_type",
            "UPDATE members SET membership_type_id = :membership_type_id WHERE id = :id",
            {"id": member_id, "membership_type_id": membership_type_id},
        )

    def delete(self, member_id: int) -> int:
        return self._write("delete", "DELETE FROM members WHERE id = :id", {"id": member_id})
