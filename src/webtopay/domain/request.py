"""Outbound request models."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class RequestSpec:
    """Validation rule for a single outbound field.

    A ``maxlen`` of 0 means the length is unbounded.
    """

    field: str
    maxlen: int
    required: bool = False
    regex: Optional[re.Pattern[str]] = None


class SignedRequest(BaseModel):
    """Encoded request payload and its MD5 signature."""

    model_config = ConfigDict(frozen=True)

    data: str
    sign: str


class PaymentRequestParams(BaseModel):
    """Caller-supplied fields of a payment request.

    ``projectid`` and ``version`` are filled in by the request builder.
    """

    orderid: str
    accepturl: str
    cancelurl: str
    callbackurl: str

    amount: Optional[int] = None
    currency: Optional[str] = None
    payment: Optional[str] = None
    country: Optional[str] = None
    paytext: Optional[str] = None
    lang: Optional[str] = None
    test: Optional[Literal[0, 1]] = None
    time_limit: Optional[str] = None
    only_payments: Optional[str] = None
    disallow_payments: Optional[str] = None
    buyer_consent: Optional[Literal[0, 1]] = None
    personcode: Optional[str] = None
    developerid: Optional[int] = None

    p_firstname: Optional[str] = None
    p_lastname: Optional[str] = None
    p_email: Optional[str] = None
    p_street: Optional[str] = None
    p_city: Optional[str] = None
    p_state: Optional[str] = None
    p_zip: Optional[str] = None
    p_countrycode: Optional[str] = None

    repeat_request: Optional[Literal[0, 1]] = None

    def to_params(self) -> dict[str, Any]:
        """Return the populated fields in declaration order."""
        return self.model_dump(exclude_none=True)
