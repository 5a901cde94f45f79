from typing import Optional


class ConfigurationError(RuntimeError):
    """Startup configuration is missing or unusable."""
    pass


class StoreError(Exception):
    """Base exception for record store failures."""
    pass


class InvalidTransition(StoreError):
    """A status change the transition table does not allow."""

    def __init__(self, table: str, status: str):
        super().__init__(f"{table}: status cannot be set to {status!r}")
        self.table = table
        self.status = status


class MatchError(Exception):
    """Base exception for a match whose lookup or status updates did not complete.

    `record` is the new record as written when its own status update landed.
    """

    def __init__(self, message: str, record: Optional[dict] = None):
        super().__init__(message)
        self.record = record


class MatchConflict(MatchError):
    """A record was no longer open when its status update landed."""
    pass


class SubmissionFailed(Exception):
    """The donation/request itself could not be created."""
    pass
