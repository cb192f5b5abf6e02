"""Use case tests for WebToPayClient - fast tests using an in-memory HTTP fetcher."""

from __future__ import annotations

import asyncio
from urllib.parse import parse_qs, urlparse

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from tests.fixtures import (
    FakeHttpFetcher,
    encrypted_callback,
    ss1_callback,
    ss2_callback,
    ss3_callback,
)
from tests.fixtures.catalog import SAMPLE_XML
from webtopay import (
    ConfigError,
    DecryptionFailedError,
    FieldMismatchError,
    InvalidSignatureError,
    PaymentStatus,
    PublicKeyFetchError,
    TenantMismatchError,
    WebToPayClient,
)
from webtopay.crypto.encoding import decode_safe_url_base64
from webtopay.env import Settings
from webtopay.routes import PRODUCTION_ROUTES, SANDBOX_ROUTES

BASE_PARAMS = {
    "orderid": "ORDER-1",
    "accepturl": "https://shop.example/accept",
    "cancelurl": "https://shop.example/cancel",
    "callbackurl": "https://shop.example/callback",
}


class TestConstruction:
    def test_valid_config(self, http_fetcher: FakeHttpFetcher) -> None:
        client = WebToPayClient(12345, "S", http_client=http_fetcher)
        assert client.project_id == 12345
        assert client.routes == PRODUCTION_ROUTES

    @pytest.mark.parametrize("project_id", [0, -1, None, "123", 12.0, True])
    def test_missing_project_id(self, project_id) -> None:
        with pytest.raises(ConfigError, match="project_id"):
            WebToPayClient(project_id, "S", http_client=FakeHttpFetcher())

    def test_missing_password(self) -> None:
        with pytest.raises(ConfigError, match="password"):
            WebToPayClient(12345, "", http_client=FakeHttpFetcher())

    def test_sandbox_routes(self) -> None:
        client = WebToPayClient(1, "S", sandbox=True, http_client=FakeHttpFetcher())
        assert client.routes == SANDBOX_ROUTES

    def test_url_overrides(self) -> None:
        client = WebToPayClient(
            1,
            "S",
            payment_url="https://pay.test/",
            public_key_url="https://key.test/public.key",
            payment_method_list_url="https://methods.test/",
            http_client=FakeHttpFetcher(),
        )
        assert client.routes.payment == "https://pay.test/"
        assert client.routes.public_key == "https://key.test/public.key"
        assert client.routes.payment_method_list == "https://methods.test/"
        # defaults are not mutated
        assert PRODUCTION_ROUTES.payment == "https://bank.paysera.com/pay/"

    def test_from_settings(self) -> None:
        settings = Settings(
            project_id=77, password="pw", environment="sandbox", payment_url="https://p/"
        )
        client = WebToPayClient.from_settings(settings, http_client=FakeHttpFetcher())
        assert client.project_id == 77
        assert client.routes.payment == "https://p/"
        assert client.routes.public_key == SANDBOX_ROUTES.public_key


class TestOutboundRequests:
    def test_build_payment_url_production(self, client: WebToPayClient) -> None:
        url = client.build_payment_url(BASE_PARAMS)
        assert url.startswith("https://bank.paysera.com/pay/?data=")
        query = parse_qs(urlparse(url).query)
        request = client.build_request(BASE_PARAMS)
        assert query["data"] == [request.data]
        assert query["sign"] == [request.sign]

    def test_build_payment_url_sandbox(self) -> None:
        client = WebToPayClient(1, "S", sandbox=True, http_client=FakeHttpFetcher())
        assert client.build_payment_url(BASE_PARAMS).startswith(
            "https://sandbox.paysera.com/pay/?data="
        )

    def test_build_repeat_request(self, client: WebToPayClient) -> None:
        request = client.build_repeat_request("ORDER-1", 1000, "EUR")
        assert "repeat_request=1" in decode_safe_url_base64(request.data)

    def test_build_repeat_payment_url(self, client: WebToPayClient) -> None:
        url = client.build_repeat_payment_url("ORDER-1", 1000, "EUR")
        query = parse_qs(urlparse(url).query)
        assert query["data"] == [client.build_repeat_request("ORDER-1", 1000, "EUR").data]


@pytest.mark.asyncio
async def test_validates_ss1_callback_without_network(
    client: WebToPayClient,
    http_fetcher: FakeHttpFetcher,
    callback_fields: dict[str, str],
) -> None:
    parsed = await client.validate_callback(ss1_callback(callback_fields, "S"))

    assert parsed.orderid == "ORD-1"
    assert parsed.status == PaymentStatus.SUCCESSFUL
    assert parsed.type == "macro"
    assert http_fetcher.requested_urls == []


@pytest.mark.asyncio
async def test_accepts_plain_mapping(
    client: WebToPayClient, callback_fields: dict[str, str]
) -> None:
    query = ss1_callback(callback_fields, "S")
    parsed = await client.validate_callback({"data": query.data, "ss1": query.ss1})
    assert parsed.orderid == "ORD-1"


@pytest.mark.asyncio
async def test_rejects_invalid_ss1(
    client: WebToPayClient, callback_fields: dict[str, str]
) -> None:
    query = ss1_callback(callback_fields, "wrong-password")
    with pytest.raises(InvalidSignatureError):
        await client.validate_callback(query)


@pytest.mark.asyncio
async def test_rejects_wrong_project_id(client: WebToPayClient) -> None:
    query = ss1_callback({"projectid": "999", "orderid": "1"}, "S")
    with pytest.raises(TenantMismatchError):
        await client.validate_callback(query)


@pytest.mark.asyncio
async def test_ss3_callback_fetches_public_key(
    client: WebToPayClient,
    http_fetcher: FakeHttpFetcher,
    rsa_private_key: rsa.RSAPrivateKey,
    callback_fields: dict[str, str],
) -> None:
    parsed = await client.validate_callback(ss3_callback(callback_fields, rsa_private_key))

    assert parsed.orderid == "ORD-1"
    assert http_fetcher.requested_urls == [PRODUCTION_ROUTES.public_key]


@pytest.mark.asyncio
async def test_public_key_is_cached(
    client: WebToPayClient,
    http_fetcher: FakeHttpFetcher,
    rsa_private_key: rsa.RSAPrivateKey,
    callback_fields: dict[str, str],
) -> None:
    await client.validate_callback(ss3_callback(callback_fields, rsa_private_key))
    await client.validate_callback(ss2_callback(callback_fields, rsa_private_key))

    assert http_fetcher.requested_urls == [PRODUCTION_ROUTES.public_key]


@pytest.mark.asyncio
async def test_concurrent_validations_share_one_fetch(
    rsa_public_key_pem: str,
    rsa_private_key: rsa.RSAPrivateKey,
    callback_fields: dict[str, str],
) -> None:
    fetcher = FakeHttpFetcher(
        {PRODUCTION_ROUTES.public_key: rsa_public_key_pem}, delay=0.01
    )
    client = WebToPayClient(12345, "S", http_client=fetcher)
    query = ss3_callback(callback_fields, rsa_private_key)

    results = await asyncio.gather(*(client.validate_callback(query) for _ in range(10)))

    assert all(r.orderid == "ORD-1" for r in results)
    assert fetcher.requested_urls == [PRODUCTION_ROUTES.public_key]


@pytest.mark.asyncio
async def test_valid_ss3_with_invalid_ss2(
    client: WebToPayClient,
    rsa_private_key: rsa.RSAPrivateKey,
    callback_fields: dict[str, str],
) -> None:
    query = ss3_callback(callback_fields, rsa_private_key).model_copy(
        update={"ss2": "invalid"}
    )
    parsed = await client.validate_callback(query)
    assert parsed.orderid == "ORD-1"


@pytest.mark.asyncio
async def test_public_key_fetch_failure_is_fatal(
    rsa_private_key: rsa.RSAPrivateKey, callback_fields: dict[str, str]
) -> None:
    fetcher = FakeHttpFetcher(error=TimeoutError("timed out"))
    client = WebToPayClient(12345, "S", http_client=fetcher)
    query = ss3_callback(callback_fields, rsa_private_key)

    with pytest.raises(PublicKeyFetchError, match="timed out"):
        await client.validate_callback(query)
    # Nothing was cached, so the next call tries again
    with pytest.raises(PublicKeyFetchError):
        await client.validate_callback(query)
    assert len(fetcher.requested_urls) == 2


@pytest.mark.asyncio
async def test_empty_public_key_is_rejected(
    rsa_private_key: rsa.RSAPrivateKey, callback_fields: dict[str, str]
) -> None:
    fetcher = FakeHttpFetcher({PRODUCTION_ROUTES.public_key: "  \n"})
    client = WebToPayClient(12345, "S", http_client=fetcher)
    with pytest.raises(PublicKeyFetchError, match="empty"):
        await client.validate_callback(ss3_callback(callback_fields, rsa_private_key))


@pytest.mark.asyncio
async def test_encrypted_callback(
    client: WebToPayClient,
    http_fetcher: FakeHttpFetcher,
    callback_fields: dict[str, str],
) -> None:
    parsed = await client.validate_callback(encrypted_callback(callback_fields, "S"))
    assert parsed.orderid == "ORD-1"
    assert http_fetcher.requested_urls == []


@pytest.mark.asyncio
async def test_undecryptable_callback(client: WebToPayClient) -> None:
    with pytest.raises(DecryptionFailedError):
        await client.validate_callback({"data": "A" * 64})


@pytest.mark.asyncio
async def test_validate_with_expected(
    client: WebToPayClient, callback_fields: dict[str, str]
) -> None:
    query = ss1_callback(callback_fields, "S")

    parsed = await client.validate_callback_with_expected(
        query, {"orderid": "ORD-1", "amount": 1500}
    )
    assert parsed.amount == "1500"

    with pytest.raises(FieldMismatchError) as exc_info:
        await client.validate_callback_with_expected(query, {"amount": "1600"})
    assert (exc_info.value.field, exc_info.value.expected, exc_info.value.actual) == (
        "amount",
        "1600",
        "1500",
    )


class TestPaymentMethods:
    @pytest.mark.asyncio
    async def test_fetches_and_parses(self) -> None:
        url = f"{PRODUCTION_ROUTES.payment_method_list}123/currency:EUR"
        fetcher = FakeHttpFetcher({url: SAMPLE_XML})
        client = WebToPayClient(123, "S", http_client=fetcher)

        methods = await client.get_payment_methods()

        assert methods.project_id == 123
        assert [c.code for c in methods.countries] == ["LT", "EE"]
        assert fetcher.requested_urls == [url]

    @pytest.mark.asyncio
    async def test_amount_in_url(self) -> None:
        url = f"{PRODUCTION_ROUTES.payment_method_list}123/currency:USD/amount:1000"
        fetcher = FakeHttpFetcher({url: SAMPLE_XML})
        client = WebToPayClient(123, "S", http_client=fetcher)

        methods = await client.get_payment_methods(currency="USD", amount=1000)

        assert methods.currency == "USD"
        assert fetcher.requested_urls == [url]

    @pytest.mark.asyncio
    async def test_caches_per_currency_and_amount(self) -> None:
        base = f"{PRODUCTION_ROUTES.payment_method_list}123"
        fetcher = FakeHttpFetcher(
            {
                f"{base}/currency:EUR": SAMPLE_XML,
                f"{base}/currency:EUR/amount:500": SAMPLE_XML,
            }
        )
        client = WebToPayClient(123, "S", http_client=fetcher)

        first = await client.get_payment_methods("EUR")
        second = await client.get_payment_methods("EUR")
        await client.get_payment_methods("EUR", 500)

        assert first is second
        assert fetcher.requested_urls == [f"{base}/currency:EUR", f"{base}/currency:EUR/amount:500"]
