"""
Request-visible failure kinds raised by the repositories, the SQL builders
and the authorization gate.

These carry no HTTP knowledge. The status code for each kind lives in
``jobly.api.errors.ERROR_STATUS_CODES`` and is applied at the boundary only.
Anything that is not a ``JoblyError`` is an unexpected failure and propagates
to a generic 500.
"""


class JoblyError(Exception):
    """Base class for every classified failure."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidInputError(JoblyError):
    """Request content is malformed or inconsistent (empty update, inverted bounds)."""


class NotFoundError(JoblyError):
    """The target key does not exist."""


class AlreadyExistsError(JoblyError):
    """The identifying key is already taken."""


class UnauthenticatedError(JoblyError):
    """Missing, invalid or expired credential."""


class ForbiddenError(JoblyError):
    """Authenticated, but lacking the privilege or ownership the route needs."""
