"""High-level client bundling request signing, callback validation and catalog access."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional, Type, Union
from types import TracebackType

from pydantic import ValidationError

from .application.callback_validator import CallbackValidator
from .application.payment_methods import DEFAULT_CURRENCY, PaymentMethodListProvider
from .application.request_builder import RequestBuilder, RequestParams, build_payment_url
from .crypto.sign_checkers import SignChecker, select_sign_checker, uses_rsa_scheme
from .domain.callback import CallbackQuery, ParsedCallback
from .domain.errors import CallbackError, ConfigError, PublicKeyFetchError
from .domain.payment_methods import PaymentMethodList
from .domain.request import SignedRequest
from .domain.shared import HttpFetcher
from .env import Settings
from .infrastructure.http.http_client import AsyncHttpClient
from .routes import Routes, get_routes

logger = logging.getLogger(__name__)

CallbackInput = Union[CallbackQuery, Mapping[str, Any]]


class WebToPayClient:
    """Client for a single WebToPay project.

    Request building is synchronous and never touches the network. Callback
    validation is async because SS2/SS3 callbacks need the processor's RSA
    public key, which is fetched on first use and cached for the lifetime of
    the client. Concurrent first uses share a single fetch.
    """

    def __init__(
        self,
        project_id: int,
        password: str,
        *,
        sandbox: bool = False,
        payment_url: Optional[str] = None,
        public_key_url: Optional[str] = None,
        payment_method_list_url: Optional[str] = None,
        http_client: Optional[HttpFetcher] = None,
        timeout: float = 10.0,
    ) -> None:
        if (
            not isinstance(project_id, int)
            or isinstance(project_id, bool)
            or project_id <= 0
        ):
            raise ConfigError("project_id is required")
        if not password:
            raise ConfigError("password is required")

        self._project_id = project_id
        self._password = password

        routes = get_routes("sandbox" if sandbox else "production")
        overrides = {
            "payment": payment_url,
            "public_key": public_key_url,
            "payment_method_list": payment_method_list_url,
        }
        self._routes = routes.model_copy(
            update={k: v for k, v in overrides.items() if v}
        )

        self._owns_http = http_client is None
        self._http: HttpFetcher = (
            http_client if http_client is not None else AsyncHttpClient(timeout=timeout)
        )
        self._request_builder = RequestBuilder(project_id, password)
        self._payment_methods: Optional[PaymentMethodListProvider] = None

        self._public_key: Optional[str] = None
        self._public_key_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[HttpFetcher] = None
    ) -> "WebToPayClient":
        return cls(
            settings.project_id,
            settings.password,
            sandbox=settings.sandbox,
            payment_url=settings.payment_url,
            public_key_url=settings.public_key_url,
            payment_method_list_url=settings.payment_method_list_url,
            http_client=http_client,
            timeout=settings.http_timeout,
        )

    @property
    def project_id(self) -> int:
        return self._project_id

    @property
    def routes(self) -> Routes:
        return self._routes

    # ---- Outbound requests ----

    def build_request(self, params: RequestParams) -> SignedRequest:
        return self._request_builder.build_request(params)

    def build_payment_url(self, params: RequestParams) -> str:
        return self._request_builder.build_request_url(params, self._routes.payment)

    def build_repeat_request(
        self, order_id: str, amount: int, currency: str
    ) -> SignedRequest:
        return self._request_builder.build_repeat_request(order_id, amount, currency)

    def build_repeat_payment_url(self, order_id: str, amount: int, currency: str) -> str:
        request = self.build_repeat_request(order_id, amount, currency)
        return build_payment_url(self._routes.payment, request)

    # ---- Callbacks ----

    async def validate_callback(self, query: CallbackInput) -> ParsedCallback:
        """Verify and parse a callback.

        Raises:
            CallbackError: If the callback fails verification or parsing.
        """
        validator, callback_query = await self._prepare_validator(query)
        try:
            return validator.validate_and_parse_data(callback_query)
        except CallbackError as e:
            logger.warning("Rejected callback for project %s: %s", self._project_id, e)
            raise

    async def validate_callback_with_expected(
        self, query: CallbackInput, expected: Mapping[str, Any]
    ) -> ParsedCallback:
        """Verify and parse a callback, then check it against ``expected`` fields."""
        validator, callback_query = await self._prepare_validator(query)
        try:
            result = validator.validate_and_parse_data(callback_query)
            validator.check_expected_fields(result, expected)
        except CallbackError as e:
            logger.warning("Rejected callback for project %s: %s", self._project_id, e)
            raise
        return result

    async def get_public_key(self) -> str:
        """Return the processor's RSA public key, fetching it once.

        Raises:
            PublicKeyFetchError: If the key cannot be retrieved.
        """
        if self._public_key is not None:
            return self._public_key

        async with self._public_key_lock:
            if self._public_key is not None:
                return self._public_key

            url = self._routes.public_key
            logger.info("Fetching WebToPay public key from %s", url)
            try:
                key = await self._http.fetch(url)
            except Exception as e:
                raise PublicKeyFetchError(f"Failed to fetch public key: {e}") from e
            if not key.strip():
                raise PublicKeyFetchError("Fetched public key is empty")

            self._public_key = key
            return key

    # ---- Payment methods ----

    async def get_payment_methods(
        self,
        currency: str = DEFAULT_CURRENCY,
        amount: Optional[int] = None,
    ) -> PaymentMethodList:
        if self._payment_methods is None:
            self._payment_methods = PaymentMethodListProvider(
                self._project_id, self._routes.payment_method_list, self._http
            )
        return await self._payment_methods.get_payment_method_list(currency, amount)

    # ---- Lifecycle ----

    async def aclose(self) -> None:
        if self._owns_http and isinstance(self._http, AsyncHttpClient):
            await self._http.aclose()

    async def __aenter__(self) -> "WebToPayClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def _prepare_validator(
        self, query: CallbackInput
    ) -> tuple[CallbackValidator, CallbackQuery]:
        if isinstance(query, CallbackQuery):
            callback_query = query
        else:
            try:
                callback_query = CallbackQuery.model_validate(dict(query))
            except ValidationError as e:
                raise CallbackError(f"Malformed callback query: {e}") from e
        checker = await self._get_sign_checker(callback_query)
        validator = CallbackValidator(self._project_id, checker, self._password)
        return validator, callback_query

    async def _get_sign_checker(self, query: CallbackQuery) -> SignChecker:
        public_key = await self.get_public_key() if uses_rsa_scheme(query) else None
        return select_sign_checker(query, self._password, public_key)
