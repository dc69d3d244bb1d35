from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    Every domain error carries a short machine readable ``code`` so API
    callers can branch on the reason without parsing the message.
    """

    default_code = "domain_error"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.default_code


class ValidationError(DomainError):
    """Raised when input data is invalid (malformed time, missing window...)."""

    default_code = "invalid_input"


class TransitionError(DomainError):
    """Raised when an attendance transition is not allowed from the current status."""

    default_code = "illegal_transition"


class ConfigurationError(DomainError):
    """Raised when payroll configuration (rates, brackets) is missing or broken."""

    default_code = "configuration_error"
