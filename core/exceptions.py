# core/exceptions.py
"""
Errors raised by reconciliation requests. ``code`` is a stable identifier
(e.g. ``CLIENT_NOT_FOUND``, ``YEAR_INVALID``, ``DATA_ACCESS_FAILED``) that
callers and support events key on; the message is for people.
"""


class DomainError(Exception):
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or type(self).__name__


class ValidationError(DomainError):
    """A request lacks a client or a usable year."""


class NotFoundError(DomainError):
    """The client, or the contract asked for, does not exist for this client."""


class BusinessRuleError(DomainError):
    """An operation cannot proceed in the current state (e.g. exporting without a summary)."""


class DataAccessError(DomainError):
    """The data-access collaborator failed; wraps the original exception as ``__cause__``."""
