"""Exception hierarchy for Kit.

Every failure raised by the core derives from KitError so the CLI can
report it without a traceback.
"""


class KitError(Exception):
    """Base class for all Kit errors."""

    pass


class AlreadyExistsError(KitError):
    """Raised when a repository, destination or ref is already present."""

    pass


class NotFoundError(KitError):
    """Raised when an object, ref or file cannot be found."""

    pass


class InvalidRemoteError(KitError):
    """Raised when a remote path is not a usable Kit repository."""

    pass


class InvalidKeyError(KitError):
    """Raised when a hash or ref name is malformed."""

    pass


class IoFailureError(KitError):
    """Raised when an underlying read, write or copy fails."""

    pass


class SerializationError(KitError):
    """Raised when metadata cannot be encoded or decoded."""

    pass
