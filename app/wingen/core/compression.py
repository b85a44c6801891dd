"""Reversible text compression for share tokens.

Share tokens end up in URL fragments, so the compressed form must only use
URL-safe characters. The codec depends on the :class:`Compressor` protocol;
:class:`DeflateCompressor` is the default implementation.
"""

import base64
import binascii
import zlib
from typing import Protocol


class Compressor(Protocol):
    """A reversible str -> str compressor producing URL-safe output."""

    def compress(self, text: str) -> str:
        """Compress text into a URL-safe string."""
        ...

    def decompress(self, data: str) -> str:
        """Restore text produced by :meth:`compress`.

        Raises:
            ValueError: If ``data`` is not valid compressor output.
        """
        ...


class DeflateCompressor:
    """Deflate compression with unpadded URL-safe base64 output."""

    def __init__(self, level: int = 9) -> None:
        self._level = level

    def compress(self, text: str) -> str:
        raw = zlib.compress(text.encode("utf-8"), self._level)
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    def decompress(self, data: str) -> str:
        padded = data + "=" * (-len(data) % 4)
        try:
            raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid token encoding: {e}") from e

        try:
            return zlib.decompress(raw).decode("utf-8")
        except zlib.error as e:
            raise ValueError(f"Invalid compressed data: {e}") from e
        except UnicodeDecodeError as e:
            raise ValueError(f"Compressed data is not UTF-8 text: {e}") from e


default_compressor = DeflateCompressor()
