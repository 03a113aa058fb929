"""
exceptions.py
Error taxonomy for membership accounts (validation, not found, store, persistence).
"""


class MembershipError(Exception):
    """Base exception for membership account errors."""


class ValidationError(MembershipError):
    """Caller-supplied input violates a precondition."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(MembershipError):
    """Requested member id does not exist."""

    def __init__(self, member_id) -> None:
        super().__init__(f"Member not found: id={member_id}")
        self.member_id = member_id


class StoreError(MembershipError):
    """The backing database failed to execute a statement."""


class PersistenceError(MembershipError):
    """A repository read or write could not be completed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class ConcurrentModificationError(PersistenceError):
    """The target row changed between lookup and write; safe to retry."""
