"""Input Enforcement: argument checks shared by every ledger component.

Invariants:
    - Text is "empty" when nothing is left after stripping whitespace
    - Stored text keeps the caller's exact value (no normalization on write)
    - Durations are strictly positive integers; bool is not an integer here
"""

from ecertify.core.errors import InvalidInputError


def require_text(value: str | None, field: str) -> str:
    """Raise InvalidInputError if value is missing or blank. Returns value unchanged.

    Stricter than a zero-length check: whitespace-only text such as " " is
    rejected as well, for every text field including content references.
    """
    if value is None or not isinstance(value, str) or not value.strip():
        label = field.replace("_", " ")
        raise InvalidInputError(f"{label.capitalize()} cannot be empty", field)
    return value


def require_positive_duration(duration: int, field: str = "duration") -> int:
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidInputError("Duration must be greater than 0", field)
    return duration
