"""Custom exceptions for calc-tools."""


class CalcToolsError(Exception):
    """Base exception for all calc-tools errors."""

    pass


class ConfigurationError(CalcToolsError):
    """Raised when configuration is invalid or missing."""

    pass


class InvalidInputError(CalcToolsError):
    """Raised when calculator input fails validation.

    ``errors`` maps each offending field to a human-readable message so
    callers can surface field-level feedback.
    """

    def __init__(self, errors: dict[str, str], message: str | None = None):
        self.errors = dict(errors)
        if message is None:
            message = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(message or "Invalid input")


class UnknownParticipantError(InvalidInputError):
    """Raised when an expense references a name that is not a participant."""

    def __init__(self, field: str, name: str):
        self.name = name
        super().__init__({field: f"'{name}' is not a participant"})


class DuplicateParticipantError(InvalidInputError):
    """Raised when the same participant name is listed more than once."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            {"participants": f"'{name}' is listed more than once"},
            message=(
                f"Participant name '{name}' is ambiguous: names identify "
                f"participants, so each must be unique"
            ),
        )


class RoundingError(CalcToolsError):
    """Raised when the rounding residual exceeds the safety threshold."""

    pass
