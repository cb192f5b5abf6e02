"""Inbound callback verification and parsing."""

from __future__ import annotations

import binascii
from enum import IntEnum
from typing import Any, Mapping
from urllib.parse import parse_qsl

from pydantic import ValidationError

from ..crypto.encoding import decode_safe_url_base64, decode_safe_url_base64_bytes
from ..crypto.sign_checkers import SignChecker, has_signature
from ..crypto.signatures import decrypt_aes_gcm
from ..domain.callback import CallbackQuery, CallbackType, ParsedCallback
from ..domain.errors import (
    CallbackError,
    DecryptionFailedError,
    FieldMismatchError,
    InvalidSignatureError,
    TenantMismatchError,
)


class CallbackValidator:
    """Verifies a callback and turns its payload into a :class:`ParsedCallback`.

    Signed callbacks (``ss1``/``ss2``/``ss3`` present) are checked with
    ``sign_checker`` before the payload is decoded. Callbacks without a
    signature are decrypted with AES-256-GCM using ``password``.
    """

    def __init__(self, project_id: int, sign_checker: SignChecker, password: str) -> None:
        self._project_id = project_id
        self._sign_checker = sign_checker
        self._password = password

    def validate_and_parse_data(self, query: CallbackQuery) -> ParsedCallback:
        """Verify ``query`` and return the parsed payload.

        Raises:
            InvalidSignatureError: The detached signature does not verify.
            DecryptionFailedError: The encrypted payload cannot be decrypted.
            TenantMismatchError: The payload belongs to another project.
            CallbackError: The verified payload cannot be decoded.
        """
        if has_signature(query):
            if not self._sign_checker.check_sign(query):
                raise InvalidSignatureError()
            try:
                decoded = decode_safe_url_base64(query.data)
            except (binascii.Error, UnicodeDecodeError) as e:
                raise CallbackError("Malformed callback data") from e
        else:
            decoded = self._decrypt(query.data)

        raw = parse_query_string(decoded)
        self._check_project_id(raw)

        fields: dict[str, Any] = dict(raw)
        if not fields.get("type"):
            fields["type"] = detect_type(raw)
        try:
            return ParsedCallback.model_validate(fields)
        except ValidationError as e:
            raise CallbackError(f"Malformed callback payload: {e}") from e

    def check_expected_fields(
        self, data: ParsedCallback, expected: Mapping[str, Any]
    ) -> None:
        """Ensure every field in ``expected`` matches ``data`` by string value.

        Raises:
            FieldMismatchError: On the first field that differs.
        """
        for key, expected_value in expected.items():
            actual_value = data.get(key)
            if _stringify(actual_value) != _stringify(expected_value):
                raise FieldMismatchError(key, expected_value, actual_value)

    def _decrypt(self, data: str) -> str:
        try:
            blob = decode_safe_url_base64_bytes(data)
        except binascii.Error as e:
            raise DecryptionFailedError() from e
        decrypted = decrypt_aes_gcm(blob, self._password)
        if decrypted is None:
            raise DecryptionFailedError()
        return decrypted

    def _check_project_id(self, raw: Mapping[str, str]) -> None:
        project_id = raw.get("projectid")
        if not project_id:
            return
        # Plain ASCII digits only; int() would also take "12_345" or " 12345".
        matches = (
            project_id.isascii()
            and project_id.isdigit()
            and int(project_id) == self._project_id
        )
        if not matches:
            raise TenantMismatchError(self._project_id, project_id)


def parse_query_string(query: str) -> dict[str, str]:
    """Parse a query string; for repeated keys the last value wins."""
    return dict(parse_qsl(query, keep_blank_values=True))


def detect_type(raw: Mapping[str, str]) -> CallbackType:
    """Micro payments carry both ``to`` and ``from``; everything else is macro."""
    if raw.get("to") and raw.get("from"):
        return "micro"
    return "macro"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, IntEnum)):
        return str(int(value))
    return str(value)
