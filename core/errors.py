"""
Nameserver Errors
=================
Failure taxonomy shared by the store, the registration service and the
HTTP layer. Everything raised past core/ is a NameserverError.
"""


class NameserverError(Exception):
    """Base class for nameserver failures."""


class StoreError(NameserverError):
    """Persistence failure: connectivity, constraint or serialization."""


class DuplicateAddress(StoreError):
    """Another registration already holds this address."""

    def __init__(self, address: str):
        super().__init__(f"address already registered: {address}")
        self.address = address


class ParentNotFound(NameserverError):
    """A non-root node's parent record is missing from the store."""

    def __init__(self, position: int, parent_position: int):
        super().__init__(
            f"no record at parent position {parent_position} (child position {position})"
        )
        self.position = position
        self.parent_position = parent_position


class StartupError(NameserverError):
    """Store unreachable or schema could not be created."""
