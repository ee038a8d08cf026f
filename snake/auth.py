"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

DEFAULT_COST = 10


class PasswordMismatchError(ValueError):
    """The plain password does not match the hash, or the hash is malformed."""


def encrypt(source: str) -> str:
    """Hash ``source`` with bcrypt at the default cost."""
    hashed = bcrypt.hashpw(source.encode("utf-8"), bcrypt.gensalt(rounds=DEFAULT_COST))
    return hashed.decode("ascii")


def compare(hashed_password: str, password: str) -> None:
    """Raise PasswordMismatchError unless ``password`` matches ``hashed_password``."""
    try:
        matched = bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as exc:
        raise PasswordMismatchError("hashed password is malformed") from exc
    if not matched:
        raise PasswordMismatchError("hashed password does not match the given password")