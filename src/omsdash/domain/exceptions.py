"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Note that a status change aimed at an unknown order id is deliberately NOT
an error: the simulated feed and a user action may race against an id that
was valid when the command was dispatched.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class MalformedSeedError(DomainException):
    """The seed document does not conform to the Order shape."""


class DuplicateIdError(DomainException):
    """An order with the same id is already in the repository."""


class InvalidTransitionError(DomainException):
    """The active transition policy forbids the requested status change."""
