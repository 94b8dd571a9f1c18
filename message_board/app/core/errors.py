"""
Error taxonomy for the message service.

Storage failures derive from :class:`MessageStoreError` so the HTTP layer
can map any of them to a status code without knowing which medium raised
it.  :class:`ApiError` is what endpoints raise; the application turns it
into a ``{"error": ..., "details": ...}`` JSON body.
"""


class MessageStoreError(Exception):
    """Base class for failures reported by a message store."""


class StorageUnavailable(MessageStoreError):
    """The storage medium could not be opened, prepared, read or written."""


class MessageNotFound(MessageStoreError):
    """The singleton message row is missing."""


class VersionConflict(MessageStoreError):
    """The stored version did not match the version the writer expected."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected message version {expected}, but the current version is {actual}.")
        self.expected = expected
        self.actual = actual


class MessageValidationError(ValueError):
    """Client-supplied message content is not acceptable."""


class ApiError(Exception):
    """An error that should be returned to the HTTP client as-is."""

    def __init__(self, status_code: int, error: str, details: str) -> None:
        super().__init__(f"{status_code} {error}: {details}")
        self.status_code = status_code
        self.error = error
        self.details = details
