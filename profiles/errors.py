"""Profile service error taxonomy.

Unauthenticated visitors and missing profiles are not errors: they are
ordinary routing branches. Only collaborator failures are raised.
"""


class ProfileError(Exception):
    """Base class for failures surfaced to the web layer."""


class StoreUnavailable(ProfileError):
    """The profile store could not complete a read or write."""


class IdentityUnavailable(ProfileError):
    """The identity provider could not be reached."""


class ProfileExists(ProfileError):
    """A profile for this (role, user) pair was created concurrently."""


class AuthRejected(Exception):
    """The auth server refused the credentials or token."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(message)
