"""Authentication and authorization failures."""


class InvalidCredentialError(Exception):
    """A session credential could not be verified (bad signature, expired, malformed)."""


class UnauthorizedError(Exception):
    """The operation needs an authenticated customer and none was presented."""


class ForbiddenError(Exception):
    """The caller is authenticated but lacks the role the operation needs."""
