"""Domain-level exceptions.

Every business failure is a subclass of DomainException and carries an
ErrorKind, so each storage backend reports the same failure the same way
and the HTTP and CLI layers can translate them without knowing which
backend raised them. Anything that is not a DomainException is an
infrastructure failure and is never re-labelled as one of these kinds.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    IDENTIFIER_MISMATCH = "IDENTIFIER_MISMATCH"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind


class ValidationError(DomainException):
    """Caller-supplied data was rejected before reaching storage."""


class InvalidIdentifierError(ValidationError):
    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self) -> None:
        super().__init__("Invalid product ID: ID cannot be empty")


class IdentifierMismatchError(ValidationError):
    """Update addressed one product but carried another product's ID."""

    kind = ErrorKind.IDENTIFIER_MISMATCH

    def __init__(self, path_id: str, body_id: str) -> None:
        super().__init__(
            f"Product ID in path ('{path_id}') does not match ID in body ('{body_id}')"
        )
        self.path_id = path_id
        self.body_id = body_id


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID '{product_id}' not found")
        self.product_id = product_id


class EntityAlreadyExistsError(DomainException):
    """An entity with the same identifier is already stored."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with ID '{product_id}' already exists")
        self.product_id = product_id
