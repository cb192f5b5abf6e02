"""Shared pytest fixtures for WebToPay tests."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from tests.fixtures import FakeHttpFetcher
from webtopay.client import WebToPayClient
from webtopay.routes import PRODUCTION_ROUTES

PROJECT_ID = 12345
PASSWORD = "S"


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Generate the processor's signing key once per test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """Public half of the processor key as PEM (SubjectPublicKeyInfo)."""
    return (
        rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("utf-8")
    )


@pytest.fixture
def project_id() -> int:
    return PROJECT_ID


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def http_fetcher(rsa_public_key_pem: str) -> FakeHttpFetcher:
    """Fake HTTP collaborator serving the public key at the production URL."""
    return FakeHttpFetcher({PRODUCTION_ROUTES.public_key: rsa_public_key_pem})


@pytest.fixture
def client(http_fetcher: FakeHttpFetcher) -> WebToPayClient:
    return WebToPayClient(PROJECT_ID, PASSWORD, http_client=http_fetcher)


@pytest.fixture
def callback_fields() -> dict[str, str]:
    """A typical macro payment callback payload."""
    return {
        "projectid": str(PROJECT_ID),
        "orderid": "ORD-1",
        "lang": "eng",
        "amount": "1500",
        "currency": "EUR",
        "payment": "hanza",
        "country": "LT",
        "status": "1",
        "requestid": "R1",
        "version": "1.6",
    }
