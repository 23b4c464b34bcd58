"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidFilter(ValidationError):
    """A filter or page value could not be parsed or is out of range."""


class ScopeViolation(DomainError):
    """A record owned by another user reached the aggregator."""


class MalformedRecord(DomainError):
    """A storage row could not be normalized into an activity record."""

    def __init__(self, source: str, row_id, reason: str):
        super().__init__(f"Malformed {source} row {row_id}: {reason}")
        self.source = source
        self.row_id = row_id
        self.reason = reason


class UpstreamUnavailable(DomainError):
    """The storage layer failed while loading data."""


LOAD_FAILED_MESSAGE = "Failed to load activity data. Please try again."


def user_not_found(username: str) -> str:
    """Return message for missing user."""
    return f"User '{username}' not found"


def bank_not_found(bank_id: int) -> str:
    """Return message for missing bank."""
    return f"Bank {bank_id} not found"


def credit_card_not_found(card_id: int) -> str:
    """Return message for missing credit card."""
    return f"Credit card {card_id} not found"


def scope_violation(record_id, owner_id: int, expected_owner_id: int) -> str:
    """Return message for a record outside the requesting owner's scope."""
    return (
        f"Record {record_id} belongs to user {owner_id}, "
        f"not to requesting user {expected_owner_id}"
    )


def income_not_found(income_id: int) -> str:
    """Return message for missing income entry."""
    return f"Income transaction {income_id} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense transaction {expense_id} not found"
