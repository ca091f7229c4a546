"""Exception types raised by the campaign services."""


class HempActionError(Exception):
    """Base class for every error the services raise on purpose."""


class ValidationError(HempActionError):
    """Caller supplied bad input (zip code, form fields, template data)."""


class ResolutionError(ValidationError):
    """The zip code doesn't map to a recognized address."""


class UpstreamError(HempActionError):
    """The civic-data or email provider failed or answered with garbage."""


class NotFoundError(HempActionError):
    """A referenced user or lawmaker does not exist."""


class PreconditionError(NotFoundError):
    """The record exists but lacks something the operation needs."""


class PersistenceError(HempActionError):
    """A storage write failed."""


class ConfigurationError(HempActionError):
    """Required settings are missing."""


UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: Exception) -> bool:
    """True when a PostgREST error is a PostgreSQL unique-constraint violation."""
    return str(getattr(exc, "code", "")) == UNIQUE_VIOLATION


INVALID_TEXT_REPRESENTATION = "22P02"


def is_invalid_id(exc: Exception) -> bool:
    """True when PostgreSQL rejected a malformed key (e.g. a non-uuid id)."""
    return str(getattr(exc, "code", "")) == INVALID_TEXT_REPRESENTATION
