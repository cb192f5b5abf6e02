"""WebToPay payment gateway client."""

from .client import WebToPayClient
from .crypto.encoding import decode_safe_url_base64, encode_safe_url_base64
from .domain.callback import CallbackQuery, ParsedCallback, PaymentStatus
from .domain.errors import (
    CallbackError,
    CatalogParseError,
    ConfigError,
    DecryptionFailedError,
    ErrorCode,
    FieldMismatchError,
    InvalidSignatureError,
    MaxLengthExceededError,
    MissingFieldError,
    PatternMismatchError,
    PublicKeyFetchError,
    RequestValidationError,
    TenantMismatchError,
    WebToPayError,
)
from .domain.payment_methods import (
    PaymentMethod,
    PaymentMethodCountry,
    PaymentMethodGroup,
    PaymentMethodList,
)
from .domain.request import PaymentRequestParams, SignedRequest
from .domain.shared import HttpFetcher
from .routes import API_VERSION, Environment, Routes

__all__ = [
    "API_VERSION",
    "CallbackError",
    "CallbackQuery",
    "CatalogParseError",
    "ConfigError",
    "DecryptionFailedError",
    "Environment",
    "ErrorCode",
    "FieldMismatchError",
    "HttpFetcher",
    "InvalidSignatureError",
    "MaxLengthExceededError",
    "MissingFieldError",
    "ParsedCallback",
    "PatternMismatchError",
    "PaymentMethod",
    "PaymentMethodCountry",
    "PaymentMethodGroup",
    "PaymentMethodList",
    "PaymentRequestParams",
    "PaymentStatus",
    "PublicKeyFetchError",
    "RequestValidationError",
    "Routes",
    "SignedRequest",
    "TenantMismatchError",
    "WebToPayClient",
    "WebToPayError",
    "decode_safe_url_base64",
    "encode_safe_url_base64",
]
