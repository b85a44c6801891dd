"""Selection codec.

Converts selection payloads to compact, URL-safe share tokens and back, and
parses selections pasted as JSON, bare tokens or share URLs. Every inbound
payload is validated against :class:`SelectionPayload` before it is returned.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote

from pydantic import ValidationError

from wingen.core.compression import Compressor, default_compressor
from wingen.models.selection import SelectionPayload

logger = logging.getLogger(__name__)

SHARE_MARKER = "#/share/"
SHARE_PATH_PREFIX = "/share/"


class SelectionCodecError(Exception):
    """Base exception for selection codec errors."""


class EncodingError(SelectionCodecError):
    """Raised when a payload cannot be encoded into a share token."""


class EmptyTokenError(SelectionCodecError):
    """Raised when a share token is empty."""


class DecodeError(SelectionCodecError):
    """Raised when a share token cannot be decompressed."""


class MalformedPayloadError(SelectionCodecError):
    """Raised when decoded or pasted text is not valid JSON."""


class SelectionValidationError(SelectionCodecError):
    """Raised when a payload does not match the selection schema."""


class ShareInputError(SelectionCodecError):
    """Raised when pasted input does not contain a share token."""


def first_issue(error: ValidationError) -> str:
    """Format the first validation issue as '<field>: <message>'."""
    issues = error.errors()
    if not issues:
        return str(error)
    issue = issues[0]
    location = ".".join(str(part) for part in issue["loc"])
    return f"{location}: {issue['msg']}" if location else issue["msg"]


def _validate(value: Any) -> SelectionPayload:
    try:
        return SelectionPayload.model_validate(value)
    except ValidationError as e:
        raise SelectionValidationError(f"Selection payload is invalid: {first_issue(e)}") from e


def _parse_json(text: str, message: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(message) from e


def encode_share_payload(
    payload: SelectionPayload | Mapping[str, Any],
    compressor: Compressor | None = None,
) -> str:
    """Encode a selection payload into a share token.

    Args:
        payload: A SelectionPayload or its camelCase dictionary form.
        compressor: Compressor to use. Defaults to deflate + URL-safe base64.

    Returns:
        URL-safe share token.

    Raises:
        EncodingError: If the payload is invalid or compression yields nothing.
    """
    compressor = compressor or default_compressor

    if isinstance(payload, SelectionPayload):
        normalized = payload
    else:
        try:
            normalized = SelectionPayload.model_validate(payload)
        except ValidationError as e:
            raise EncodingError(f"Cannot encode invalid payload: {first_issue(e)}") from e

    text = json.dumps(normalized.to_dict(), separators=(",", ":"))
    token = compressor.compress(text)
    if not token:
        raise EncodingError("Failed to encode share payload.")

    logger.debug(
        "Encoded %d id(s) into a %d character token", len(normalized.selected_ids), len(token)
    )
    return token


def decode_share_token(token: str, compressor: Compressor | None = None) -> SelectionPayload:
    """Decode a share token into a validated selection payload.

    Args:
        token: Share token (surrounding whitespace is ignored).
        compressor: Compressor the token was produced with.

    Returns:
        Normalized SelectionPayload.

    Raises:
        EmptyTokenError: If the token is blank.
        DecodeError: If the token cannot be decompressed.
        MalformedPayloadError: If the decompressed text is not JSON.
        SelectionValidationError: If the JSON does not match the schema.
    """
    compressor = compressor or default_compressor

    trimmed = token.strip()
    if not trimmed:
        raise EmptyTokenError("Share token is empty.")

    try:
        decoded = compressor.decompress(trimmed)
    except ValueError as e:
        raise DecodeError("Share token could not be decoded.") from e
    if not decoded:
        raise DecodeError("Share token could not be decoded.")

    parsed = _parse_json(decoded, "Share token did not decode to JSON.")
    return _validate(parsed)


def parse_selection_json(text: str) -> SelectionPayload:
    """Parse selection JSON text into a validated payload.

    Raises:
        MalformedPayloadError: If the text is not valid JSON.
        SelectionValidationError: If the JSON does not match the schema.
    """
    parsed = _parse_json(text, "Selection JSON is not valid JSON.")
    return _validate(parsed)


def extract_token_from_input(value: str) -> str:
    """Extract a share token from pasted input.

    Accepts a full share URL (``...#/share/<token>``), a bare share path
    (``/share/<token>``) or a raw token. The token is percent-decoded.

    Raises:
        ShareInputError: If the input is empty or a share URL has no token.
    """
    trimmed = value.strip()
    if not trimmed:
        raise ShareInputError("Input is empty.")

    marker_index = trimmed.find(SHARE_MARKER)
    if marker_index >= 0:
        token_part = trimmed[marker_index + len(SHARE_MARKER) :].strip()
        if not token_part:
            raise ShareInputError("Share URL does not contain a token.")
        return unquote(token_part)

    if trimmed.startswith(SHARE_PATH_PREFIX):
        token_part = trimmed[len(SHARE_PATH_PREFIX) :].strip()
        if not token_part:
            raise ShareInputError("Share URL does not contain a token.")
        return unquote(token_part)

    return unquote(trimmed)


def parse_from_text(text: str, compressor: Compressor | None = None) -> SelectionPayload:
    """Parse pasted text that holds selection JSON, a share token or a share URL.

    Raises:
        ShareInputError: If the input is empty or a share URL has no token.
        SelectionCodecError: Any decode or validation failure.
    """
    trimmed = text.strip()
    if not trimmed:
        raise ShareInputError("Import input is empty.")

    if trimmed.startswith("{"):
        return parse_selection_json(trimmed)

    return decode_share_token(extract_token_from_input(trimmed), compressor)


def share_url_for_token(base_url: str, token: str) -> str:
    """Build a shareable URL around an already encoded token.

    Any fragment already present in ``base_url`` is dropped.
    """
    base = base_url.split("#", 1)[0]
    return f"{base}{SHARE_MARKER}{quote(token, safe='')}"


def build_share_url(
    base_url: str,
    payload: SelectionPayload | Mapping[str, Any],
    compressor: Compressor | None = None,
) -> str:
    """Build a shareable URL embedding the encoded payload.

    Args:
        base_url: Address of the web front end (any existing fragment is dropped).
        payload: Selection to share.
        compressor: Compressor to use.

    Returns:
        URL of the form ``<base_url>#/share/<token>``.
    """
    return share_url_for_token(base_url, encode_share_payload(payload, compressor))
