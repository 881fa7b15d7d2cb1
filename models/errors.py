"""
Error taxonomy for Explorer

Every error the content pipeline knows about carries a human-readable message
that can be shown to the user verbatim, plus a machine-readable kind.
"""


class ContentError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ContentError):
    """Empty input or missing identity. Raised before any network call."""
    kind = "validation"


class UnauthorizedError(ContentError):
    """No identity credential is available, or it was rejected."""
    kind = "unauthorized"


class GatewayError(ContentError):
    """An upstream call (network, provider, malformed provider output) failed."""
    kind = "gateway"


class NotFoundError(ContentError):
    """A saved item does not exist or belongs to somebody else."""
    kind = "not_found"
