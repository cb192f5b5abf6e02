"""Test fixtures: fake HTTP collaborator and callback builders."""

from .fake_http import FakeHttpFetcher
from .callbacks import (
    encode_payload,
    encrypted_callback,
    rsa_sign_b64,
    ss1_callback,
    ss2_callback,
    ss3_callback,
)

__all__ = [
    "FakeHttpFetcher",
    "encode_payload",
    "encrypted_callback",
    "rsa_sign_b64",
    "ss1_callback",
    "ss2_callback",
    "ss3_callback",
]
