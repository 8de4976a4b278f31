"""Custom exceptions for Noruno."""


class NorunoError(Exception):
    """Base exception for all Noruno errors."""


class ReminderParseError(NorunoError, ValueError):
    """Raised when a due date matches neither supported format."""

    def __init__(self, due_date: str):
        super().__init__(f"Cannot parse due date '{due_date}': invalid format")
        self.due_date = due_date


class NotFoundError(NorunoError, LookupError):
    """Raised when a requested entity does not exist."""

    def __init__(self, kind: str, entity_id: object):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class PersistenceError(NorunoError):
    """Raised when the storage backend fails to read or write.

    The in-memory collection may already hold the mutation that failed to
    persist; it is not rolled back.
    """


class TransportError(NorunoError):
    """Raised when an email could not be delivered to the SMTP server."""


class ConfigurationError(NorunoError):
    """Raised when required settings are missing or invalid."""


class InvalidOperationError(NorunoError, ValueError):
    """Raised when an operation is rejected because of its inputs."""
