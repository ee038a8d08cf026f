"""Login verification codes kept in Redis."""

from __future__ import annotations

import logging
import random
from typing import Any

logger = logging.getLogger(__name__)

VERIFY_CODE_KEY = "app:login:vcode:{}"
MAX_DURATION = 10 * 60
"""Lifetime of a verification code, in seconds."""

PHONE_WHITE_LIST = frozenset({13010102020})


class VCodeError(Exception):
    """Generating or reading a verification code failed."""


def is_test_phone(phone: int) -> bool:
    """Whether ``phone`` is a test number that always passes verification."""
    return phone in PHONE_WHITE_LIST


class VCodeService:
    """Generates and checks six-digit login codes.

    ``client`` is a Redis client offering ``set(key, value, ex=seconds)`` and ``get(key)``.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def gen_login_vcode(self, phone: str) -> int:
        """Create a code for ``phone``, store it for ten minutes and return it."""
        code = f"{random.randrange(1_000_000):06d}"
        key = VERIFY_CODE_KEY.format(phone)
        try:
            self.client.set(key, code, ex=MAX_DURATION)
        except Exception as exc:
            raise VCodeError("gen login code from redis set err") from exc
        return int(code)

    def check_login_vcode(self, phone: int, vcode: int) -> bool:
        """Whether ``vcode`` is the code stored for ``phone``."""
        if is_test_phone(phone):
            return True
        try:
            stored = self.get_login_vcode(phone)
        except VCodeError as exc:
            logger.warning("[vcode_service] get verify code err, %s", exc)
            return False
        return vcode == stored

    def get_login_vcode(self, phone: int) -> int:
        """Return the code stored for ``phone``, or 0 when there is none."""
        key = VERIFY_CODE_KEY.format(phone)
        try:
            value = self.client.get(key)
        except Exception as exc:
            raise VCodeError("redis get login vcode err") from exc
        if value is None:
            return 0
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        try:
            return int(value)
        except ValueError as exc:
            raise VCodeError("stored verify code is not a number") from exc