"""Exceptions raised by the configured sinks core."""


class SinksError(Exception):
    """Base class for configured sinks errors."""


class ReadError(SinksError):
    """The persisted document is missing, empty or corrupt."""


class WriteError(SinksError):
    """The persisted document could not be written."""


class ValidationError(SinksError):
    """One or more field-level violations on a candidate entity."""

    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class StaleTokenError(SinksError):
    """A command carried a token that is not the current session token."""

    def __init__(self, expected: int, received):
        super().__init__(f"Stale token {received!r} (current is {expected})")
        self.expected = expected
        self.received = received


class ScanError(SinksError):
    """A single switch status probe failed."""

    def __init__(self, ip: str, reason: str):
        super().__init__(f"Scan of {ip} failed: {reason}")
        self.ip = ip
        self.reason = reason


class EntityNotFoundError(SinksError, LookupError):
    """A command referenced a switch or speaker that does not exist."""

    def __init__(self, kind: str, entity_id: int):
        super().__init__(f"{kind.capitalize()} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id
