"""Signed outbound request construction."""

from __future__ import annotations

from typing import Any, Mapping, Union
from urllib.parse import quote, urlencode

from ..crypto.encoding import encode_safe_url_base64
from ..crypto.signatures import sign_md5
from ..domain.request import PaymentRequestParams, SignedRequest
from ..routes import API_VERSION
from .request_validators import to_string_params, validate_request_params

RequestParams = Union[PaymentRequestParams, Mapping[str, Any]]


class RequestBuilder:
    """Builds ``data``/``sign`` pairs for a single project."""

    def __init__(self, project_id: int, password: str) -> None:
        self._project_id = project_id
        self._password = password

    def build_request(self, params: RequestParams) -> SignedRequest:
        """Validate, encode and sign a payment request.

        ``projectid`` and ``version`` always come from the builder, overriding
        any value supplied by the caller.

        Raises:
            RequestValidationError: If a field violates the request schema.
        """
        if isinstance(params, PaymentRequestParams):
            params = params.to_params()
        full_params = {
            **params,
            "projectid": self._project_id,
            "version": API_VERSION,
        }
        string_params = to_string_params(full_params)
        validate_request_params(string_params)
        return self._create_request(string_params)

    def build_request_url(self, params: RequestParams, base_url: str) -> str:
        """Return ``base_url`` with the signed ``data`` and ``sign`` attached."""
        return build_payment_url(base_url, self.build_request(params))

    def build_repeat_request(
        self, order_id: str, amount: int, currency: str
    ) -> SignedRequest:
        """Build a request re-triggering an existing order."""
        params = to_string_params(
            {
                "projectid": self._project_id,
                "orderid": order_id,
                "version": API_VERSION,
                "amount": amount,
                "currency": currency,
                "repeat_request": 1,
            }
        )
        return self._create_request(params)

    def _create_request(self, params: Mapping[str, str]) -> SignedRequest:
        query_string = urlencode(params)
        data = encode_safe_url_base64(query_string)
        return SignedRequest(data=data, sign=sign_md5(data, self._password))


def build_payment_url(base_url: str, request: SignedRequest) -> str:
    return (
        f"{base_url}?data={quote(request.data, safe='')}"
        f"&sign={quote(request.sign, safe='')}"
    )
