"""
Exception taxonomy for the policy-state engine and its collaborators.

Every failure surfaces as its own class so callers can decide whether to
report to an operator or abort a batched operation.
"""


class GuardError(Exception):
    """Base exception for guard-console operations."""
    pass


class InvalidAddress(GuardError):
    """Raised when an account/asset identifier is not a well-formed address."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class EncodingError(GuardError):
    """Raised when a pool-key field cannot be encoded at its fixed width."""
    pass


class MalformedPolicy(GuardError):
    """Raised when a policy or defaults tuple is missing fields or has bad values."""
    pass


class TransportFailure(GuardError):
    """Raised when any read or write against the ledger fails or times out."""

    def __init__(self, message: str, operation: str = None):
        super().__init__(message)
        self.operation = operation


class UnresolvedName(GuardError):
    """Raised when a human-readable alias does not map to a known address."""

    def __init__(self, name: str):
        super().__init__(f"{name} unresolved in PolicyRegistry")
        self.name = name
