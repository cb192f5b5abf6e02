"""Callback signature checkers.

Three schemes are supported and chosen purely from which signature fields a
callback carries:

- SS1: ``md5(data || password)`` compared with ``ss1``.
- SS2: RSA-SHA1 signature of ``data`` in ``ss2``.
- SS3: RSA-SHA256 signature of ``data`` in ``ss3``. Takes precedence over SS2.

A callback with none of the fields uses the encrypted transport instead and
has no checker.
"""

from __future__ import annotations

import hmac
from typing import Optional, Protocol

from ..domain.callback import CallbackQuery
from .signatures import sign_md5, verify_rsa_signature


class SignChecker(Protocol):
    def check_sign(self, query: CallbackQuery) -> bool: ...


class SS1SignChecker:
    """Verifies the symmetric keyed MD5 signature."""

    def __init__(self, password: str) -> None:
        self._password = password

    def check_sign(self, query: CallbackQuery) -> bool:
        if not query.ss1:
            return False
        expected = sign_md5(query.data, self._password)
        return hmac.compare_digest(expected, query.ss1)


class SSOpenSslSignChecker:
    """Verifies SS3 (RSA-SHA256) or, when SS3 is absent, SS2 (RSA-SHA1)."""

    def __init__(self, public_key_pem: str) -> None:
        self._public_key_pem = public_key_pem

    def check_sign(self, query: CallbackQuery) -> bool:
        if query.ss3:
            return verify_rsa_signature(
                query.data, query.ss3, self._public_key_pem, "sha256"
            )
        if query.ss2:
            return verify_rsa_signature(
                query.data, query.ss2, self._public_key_pem, "sha1"
            )
        return False


def has_signature(query: CallbackQuery) -> bool:
    """Whether the callback carries a detached signature (any of ss1/ss2/ss3)."""
    return bool(query.ss1 or query.ss2 or query.ss3)


def uses_rsa_scheme(query: CallbackQuery) -> bool:
    """Whether verification needs the RSA public key (ss2 or ss3 present)."""
    return bool(query.ss2 or query.ss3)


def select_sign_checker(
    query: CallbackQuery,
    password: str,
    public_key_pem: Optional[str] = None,
) -> SignChecker:
    """Pick the checker for ``query``.

    Raises:
        ValueError: If an RSA scheme is required but no public key was given.
    """
    if uses_rsa_scheme(query):
        if not public_key_pem:
            raise ValueError("RSA public key is required for ss2/ss3 callbacks")
        return SSOpenSslSignChecker(public_key_pem)
    return SS1SignChecker(password)
