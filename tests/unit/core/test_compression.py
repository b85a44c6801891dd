"""Unit tests for share token compression."""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st
from wingen.core.compression import DeflateCompressor, default_compressor

URL_SAFE = re.compile(r"^[A-Za-z0-9_-]*$")


class TestDeflateCompressor:
    """Tests for DeflateCompressor."""

    def test_output_is_url_safe(self) -> None:
        """Compressed text uses only URL-safe characters and no padding."""
        token = default_compressor.compress('{"selectedIds":["a","b"]}' * 5)
        assert URL_SAFE.match(token)
        assert "=" not in token

    def test_compresses_repetitive_text(self) -> None:
        """Repetitive payloads get shorter."""
        text = '{"selectedIds":["visual-studio-code","google-chrome"]}' * 20
        assert len(default_compressor.compress(text)) < len(text)

    @pytest.mark.parametrize("data", ["", "!!!!", "abc", "not-a-valid-token"])
    def test_invalid_input_raises_value_error(self, data: str) -> None:
        """Garbage input raises ValueError."""
        with pytest.raises(ValueError):
            DeflateCompressor().decompress(data)

    def test_valid_base64_but_not_deflate(self) -> None:
        """Decodable base64 that is not deflate data raises ValueError."""
        with pytest.raises(ValueError, match="Invalid compressed data"):
            default_compressor.decompress("aGVsbG8gd29ybGQ")

    @given(st.text())
    def test_round_trip(self, text: str) -> None:
        """decompress(compress(s)) == s for any text."""
        assert default_compressor.decompress(default_compressor.compress(text)) == text
