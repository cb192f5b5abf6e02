"""Callback wire shapes and the parsed callback record."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

CallbackType = Literal["micro", "macro"]


class PaymentStatus(IntEnum):
    """Payment status codes reported in the ``status`` callback field."""

    NOT_EXECUTED = 0
    SUCCESSFUL = 1
    ACCEPTED = 2
    ADDITIONAL_INFO = 3
    EXECUTED_NO_CONFIRMATION = 4
    REFUNDED = 5


def coerce_payment_status(value: Any) -> Union[PaymentStatus, int, None]:
    """Map a wire status value to ``PaymentStatus``.

    Codes outside the enumeration are kept as plain integers.
    """
    if value is None or value == "":
        return None
    code = int(value)
    try:
        return PaymentStatus(code)
    except ValueError:
        return code


class CallbackQuery(BaseModel):
    """Inbound callback query parameters."""

    model_config = ConfigDict(extra="ignore")

    data: str
    ss1: Optional[str] = None
    ss2: Optional[str] = None
    ss3: Optional[str] = None


class ParsedCallback(BaseModel):
    """Decoded callback payload.

    Known fields are exposed as attributes; any other field sent by the
    payment processor is kept verbatim as an extra string attribute.
    """

    model_config = ConfigDict(extra="allow")

    projectid: Optional[str] = None
    orderid: Optional[str] = None
    lang: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    type: Optional[str] = None
    status: Optional[Union[PaymentStatus, int]] = Field(
        default=None, union_mode="left_to_right"
    )
    requestid: Optional[str] = None
    version: Optional[str] = None

    # Payer
    name: Optional[str] = None
    surename: Optional[str] = None
    account: Optional[str] = None
    p_email: Optional[str] = None

    # Payment details
    payment: Optional[str] = None
    country: Optional[str] = None
    paytext: Optional[str] = None
    pay_amount: Optional[str] = None
    pay_currency: Optional[str] = None
    payment_country: Optional[str] = None
    payer_ip_country: Optional[str] = None
    payer_country: Optional[str] = None
    test: Optional[str] = None
    request_amount: Optional[str] = None
    request_currency: Optional[str] = None
    personcodestatus: Optional[str] = None
    identification_successful: Optional[str] = None

    # Refunds
    refund_amount: Optional[str] = None
    refund_currency: Optional[str] = None
    refund_commission_amount: Optional[str] = None
    refund_commission_currency: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> Union[PaymentStatus, int, None]:
        return coerce_payment_status(v)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a field by wire name, including extra fields."""
        if key in type(self).model_fields:
            value = getattr(self, key)
            return default if value is None else value
        extra = self.model_extra or {}
        return extra.get(key, default)

    def as_dict(self) -> dict[str, Any]:
        """Return all populated fields keyed by their wire names."""
        return self.model_dump(exclude_none=True)
