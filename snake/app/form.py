"""Field validation errors collected while binding request data."""

from __future__ import annotations


class ValidError(Exception):
    """A single field that failed validation."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ValidError(key={self.key!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidError):
            return NotImplemented
        return (self.key, self.message) == (other.key, other.message)

    def __hash__(self) -> int:
        return hash((self.key, self.message))


class ValidErrors(list):
    """A list of field errors that reads as their messages joined by commas."""

    def errors(self) -> list[str]:
        """The messages of the errors, in order."""
        return [str(err) for err in self]

    def __str__(self) -> str:
        return ",".join(self.errors())