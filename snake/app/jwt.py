"""Signing and parsing of user login tokens."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Mapping

import jwt

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]
DEFAULT_TIMEOUT = 86400


class MissingHeaderError(ValueError):
    """The Authorization header was empty."""

    def __init__(self) -> None:
        super().__init__("the length of the `Authorization` header is zero")


@dataclass
class Payload:
    """The data carried by a token."""

    user_id: int = 0


def sign(payload: Mapping[str, Any], secret: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Sign ``payload`` with HS256, valid from now for ``timeout`` seconds."""
    now = int(time.time())
    claims: dict[str, Any] = {"nbf": now, "iat": now, "exp": now + timeout}
    claims.update(payload)
    return jwt.encode(claims, secret, algorithm="HS256")


def parse(token_string: str, secret: str) -> Payload:
    """Validate ``token_string`` with ``secret`` and return its payload.

    Raises ``jwt.InvalidTokenError`` (or a subclass) when the token is not valid.
    """
    claims = jwt.decode(token_string, secret, algorithms=_HMAC_ALGORITHMS)
    try:
        return Payload(user_id=int(claims["user_id"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("token has no valid user_id claim") from exc


def parse_request(header: str, secret: str) -> Payload:
    """Parse a ``Bearer <token>`` Authorization header value."""
    if not header:
        raise MissingHeaderError()
    token = ""
    parts = header.split()
    if header.startswith("Bearer") and len(parts) >= 2 and parts[0] == "Bearer":
        token = parts[1]
    return parse(token, secret)