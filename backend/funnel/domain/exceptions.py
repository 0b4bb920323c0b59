class DomainError(Exception):
    """Base class for errors raised by the funnel domain and application layers."""


class InvariantViolation(DomainError):
    pass


class InvalidTransition(DomainError):
    pass


class ValidationError(DomainError):
    pass


class NotFound(DomainError):
    pass


class Forbidden(DomainError):
    pass


class PersistenceError(DomainError):
    """The store rejected or failed a write; local state must not be trusted."""
    pass


class Conflict(DomainError):
    pass
