"""Custom exceptions for prazo."""


class PrazoError(Exception):
    """Base exception for all prazo errors."""

    pass


class ValidationError(PrazoError):
    """Raised when a workspace document fails validation."""

    pass


class ParseError(PrazoError):
    """Raised when a workspace document cannot be read or decoded."""

    pass
