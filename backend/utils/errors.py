# backend/utils/errors.py


class GameRentalError(Exception):
    """Base class for errors reported to the operator at a menu action boundary."""


class RecordNotFound(GameRentalError, LookupError):
    pass


class AllocationError(GameRentalError, LookupError):
    """Stored identifiers could not be turned into a fresh one."""


class InputError(GameRentalError):
    """Operator input was malformed or could not be read."""


class TransactionError(GameRentalError):
    """A write inside an atomic block failed and the block was rolled back."""

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


class PermissionDenied(GameRentalError):
    pass


class DatabaseConnectionError(GameRentalError, ConnectionError):
    pass


class EndOfInput(InputError):
    """The operator's input stream is closed."""
