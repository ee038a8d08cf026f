"""Value encodings used by the cache drivers."""

from __future__ import annotations

import gzip
import json
from abc import ABC, abstractmethod
from typing import Any

import msgpack


class Encoding(ABC):
    """Turns values into bytes and back."""

    @abstractmethod
    def marshal(self, value: Any) -> bytes:
        """Encode ``value`` into bytes."""

    @abstractmethod
    def unmarshal(self, data: bytes) -> Any:
        """Decode ``data`` back into a value."""


class JSONEncoding(Encoding):
    """Compact JSON."""

    def marshal(self, value: Any) -> bytes:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def unmarshal(self, data: bytes) -> Any:
        return json.loads(data)


class JSONGzipEncoding(Encoding):
    """Compact JSON compressed with gzip at the best compression level."""

    def marshal(self, value: Any) -> bytes:
        return gzip_encode(JSONEncoding().marshal(value))

    def unmarshal(self, data: bytes) -> Any:
        return json.loads(gzip_decode(data))


class MsgPackEncoding(Encoding):
    """MessagePack."""

    def marshal(self, value: Any) -> bytes:
        return msgpack.packb(value, use_bin_type=True)

    def unmarshal(self, data: bytes) -> Any:
        return msgpack.unpackb(data, raw=False)


def marshal(encoding: Encoding | None, value: Any) -> bytes:
    """Encode ``value`` with ``encoding``.

    A value offering ``marshal_binary()`` is encoded by it when no encoding is
    given, or when the encoding cannot handle the value.
    """
    binary = getattr(value, "marshal_binary", None)
    if encoding is None:
        if binary is None:
            raise ValueError("no encoding given and the value has no binary form")
        return binary()
    try:
        return encoding.marshal(value)
    except (TypeError, ValueError, OverflowError):
        if binary is None:
            raise
        return binary()


def unmarshal(encoding: Encoding | None, data: bytes) -> Any:
    """Decode ``data`` with ``encoding``."""
    if encoding is None:
        raise ValueError("no encoding given")
    return encoding.unmarshal(data)


def gzip_encode(data: bytes) -> bytes:
    """Compress ``data`` with gzip at the best compression level."""
    return gzip.compress(data, compresslevel=9)


def gzip_decode(data: bytes) -> bytes:
    """Decompress gzip ``data``."""
    return gzip.decompress(data)