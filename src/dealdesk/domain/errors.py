# src/dealdesk/domain/errors.py


class DealDeskError(Exception):
    """Base class for errors raised by dealdesk."""


class UnknownFieldError(DealDeskError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown input field: {self.name!r}"


class PersistenceError(DealDeskError):
    """Stored input state could not be read, decoded or written."""


class ExportError(DealDeskError):
    """The report document could not be built or delivered."""
