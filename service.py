"""
service.py
Member lifecycle: registration, lookups, update, deactivate, renew,
change membership type, delete.

Rules enforced:
    (1) Input is validated before the store is touched
    (2) New memberships renew one year after registration
    (3) Renewal dates must lie strictly in the future
    (4) Membership type ids are positive
    (5) Id-targeted changes fail with NotFoundError when the member is absent
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable

import auth
import config
import utils
from exceptions import ConcurrentModificationError, NotFoundError, PersistenceError, ValidationError
from models import Member
from repository import MemberRepository

logger = config.get_logger("service")


class MemberService:
    """
    Validates caller intent and turns it into persisted member state.
    """

    def __init__(self, repository: MemberRepository, clock: Callable[[], datetime] = utils.utc_now) -> None:
        self.repository = repository
        self.clock = clock

    # Registration

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        membership_type_id: int = config.DEFAULT_MEMBERSHIP_TYPE_ID,
    ) -> Member:
        """
        Creates and persists a new, active member.

        Raises:
            ValidationError: On the first invalid field (no store access happens).
            PersistenceError: If the insert fails.
        """
        logger.info("register called | email=%s membershipTypeId=%s", email.strip() if email else email, membership_type_id)

        errors = utils.validate_registration_inputs(first_name, last_name, email, password, membership_type_id)
        if errors:
            logger.warning("register rejected | field=%s", errors[0].field)
            raise errors[0]

        registered = self.clock()
        member = Member(
            id=None,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email.strip(),
            password_hash=auth.hash_password(password),
            is_active=True,
            registration_date=registered,
            renewal_date=utils.add_years(registered, 1),
            membership_type_id=membership_type_id,
        )

        try:
            created = self.repository.create(member)
        except PersistenceError:
            logger.exception("register failed | email=%s", member.email)
            raise

        logger.info("Member registered | id=%s", created.id)
        return created

    # Lookups

    def get_by_id(self, member_id: int) -> Member | None:
        logger.info("get_by_id called | id=%s", member_id)
        return self.repository.get_by_id(member_id)

    def get_by_email(self, email: str) -> Member | None:
        # emails are stored stripped
        email = email.strip()
        logger.info("get_by_email called | email=%s", email)
        return self.repository.get_by_email(email)

    def get_all(self) -> list[Member]:
        logger.info("get_all called")
        return self.repository.get_all()

    def list_expiring(self, within_days: int = config.DEFAULT_EXPIRING_DAYS, as_of: datetime | None = None) -> list[Member]:
        """
        Active members whose renewal falls within the next `within_days` days.
        """
        if within_days < 0:
            raise ValidationError("within_days", "Window must not be negative.")
        start = utils.as_utc(as_of) if as_of is not None else self.clock()
        logger.info("list_expiring called | from=%s days=%s", start.isoformat(), within_days)
        return self.repository.get_renewing_between(start, start + timedelta(days=within_days))

    def export_roster_csv(self) -> bytes:
        """
        CSV of every member without credential material.
        """
        logger.info("export_roster_csv called")
        return utils.members_to_csv_bytes(self.repository.get_all())

    # Changes

    def update(self, member: Member) -> bool:
        """
        Persists the mutable fields of an already validated member.

        Raises:
            NotFoundError: If the member has no id or no row matches it.
            PersistenceError: If the store rejects the write.
        """
        logger.info("update called | id=%s", member.id)
        if member.id is None:
            raise NotFoundError(None)

        try:
            affected = self.repository.update(member)
        except PersistenceError:
            logger.exception("update failed | id=%s", member.id)
            raise

        if affected == 0:
            raise NotFoundError(member.id)
        logger.info("Member updated | id=%s", member.id)
        return True

    def deactivate(self, member_id: int) -> bool:
        logger.info("deactivate called | id=%s", member_id)
        self._require(member_id)
        self._apply("deactivate", member_id, lambda: self.repository.set_active(member_id, False))
        logger.info("Member deactivated | id=%s", member_id)
        return True

    def renew_membership(self, member_id: int, new_renewal_date: datetime | date) -> bool:
        """
        Moves the renewal date forward and reactivates the member.

        Raises:
            ValidationError: If new_renewal_date is not strictly after now. A plain date
                means midnight UTC of that day.
            NotFoundError: If the member does not exist.
        """
        logger.info("renew_membership called | id=%s", member_id)
        renewal = utils.as_utc(new_renewal_date)
        if renewal <= self.clock():
            raise ValidationError("new_renewal_date", "Renewal date must be in the future.")

        self._require(member_id)
        self._apply("renew_membership", member_id, lambda: self.repository.set_renewal(member_id, renewal))
        logger.info("Membership renewed | id=%s until=%s", member_id, renewal.isoformat())
        return True

    def change_membership_type(self, member_id: int, new_membership_type_id: int) -> bool:
        logger.info("change_membership_type called | id=%s type=%s", member_id, new_membership_type_id)
        if not utils.is_valid_membership_type(new_membership_type_id):
            raise ValidationError("membership_type_id", "Membership type must be a positive integer.")

        self._require(member_id)
        self._apply(
            "change_membership_type",
            member_id,
            lambda: self.repository.set_membership_type(member_id, new_membership_type_id),
        )
        logger.info("Membership type changed | id=%s type=%s", member_id, new_membership_type_id)
        return True

    def delete(self, member_id: int) -> bool:
        """
        Permanently removes the member. An unknown id is not reported.
        """
        logger.info("delete called | id=%s", member_id)
        try:
            affected = self.repository.delete(member_id)
        except PersistenceError:
            logger.exception("delete failed | id=%s", member_id)
            raise
        logger.info("Member deleted | id=%s rows=%s", member_id, affected)
        return True

    # Internal helpers

    def _require(self, member_id: int) -> Member:
        member = self.repository.get_by_id(member_id)
        if member is None:
            logger.warning("member not found | id=%s", member_id)
            raise NotFoundError(member_id)
        return member

    def _apply(self, operation: str, member_id: int, write: Callable[[], int]) -> None:
        try:
            affected = write()
        except PersistenceError:
            logger.exception("%s failed | id=%s", operation, member_id)
            raise
        if affected == 0:
            # row vanished after the lookup
            raise ConcurrentModificationError(operation, f"member {member_id} was removed concurrently")
