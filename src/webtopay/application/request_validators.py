"""Pure validation functions for outbound payment requests.

The field table below is data: adding a field or changing a limit never
requires touching :func:`validate_request_params`.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from ..domain.errors import (
    MaxLengthExceededError,
    MissingFieldError,
    PatternMismatchError,
)
from ..domain.request import RequestSpec

_DIGITS = re.compile(r"^\d+$")
_BOOL_FLAG = re.compile(r"^[01]$")
_COUNTRY = re.compile(r"^[A-Z]{2}$")

REQUEST_SPECS: tuple[RequestSpec, ...] = (
    RequestSpec("projectid", 11, required=True, regex=_DIGITS),
    RequestSpec("orderid", 40, required=True),
    RequestSpec("accepturl", 255, required=True),
    RequestSpec("cancelurl", 255, required=True),
    RequestSpec("callbackurl", 255, required=True),
    RequestSpec("version", 9, required=True, regex=re.compile(r"^\d+\.\d+$")),
    RequestSpec("lang", 3, regex=re.compile(r"^[a-z]{3}$", re.IGNORECASE)),
    RequestSpec("amount", 11, regex=_DIGITS),
    RequestSpec("currency", 3, regex=re.compile(r"^[A-Z]{3}$")),
    RequestSpec("payment", 20),
    RequestSpec("country", 2, regex=_COUNTRY),
    RequestSpec("paytext", 255),
    RequestSpec("p_firstname", 255),
    RequestSpec("p_lastname", 255),
    RequestSpec("p_email", 255),
    RequestSpec("p_street", 255),
    RequestSpec("p_city", 255),
    RequestSpec("p_state", 20),
    RequestSpec("p_zip", 20),
    RequestSpec("p_countrycode", 2, regex=_COUNTRY),
    RequestSpec("test", 1, regex=_BOOL_FLAG),
    RequestSpec("time_limit", 19),
    RequestSpec("personcode", 255),
    RequestSpec("developerid", 11, regex=_DIGITS),
    RequestSpec("buyer_consent", 1, regex=_BOOL_FLAG),
    RequestSpec("only_payments", 0),
    RequestSpec("disallow_payments", 0),
)


def validate_request_params(
    params: Mapping[str, str],
    specs: Sequence[RequestSpec] = REQUEST_SPECS,
) -> None:
    """Check ``params`` against ``specs`` in order, stopping at the first violation.

    Fields without a rule in the table are passed through unchecked.

    Raises:
        MissingFieldError: A required field is absent or empty.
        MaxLengthExceededError: A value is longer than its rule allows.
        PatternMismatchError: A value does not match its pattern.
    """
    for spec in specs:
        value = params.get(spec.field)

        if not value:
            if spec.required:
                raise MissingFieldError(spec.field)
            continue

        if spec.maxlen > 0 and len(value) > spec.maxlen:
            raise MaxLengthExceededError(spec.field, spec.maxlen)

        if spec.regex is not None and not spec.regex.fullmatch(value):
            raise PatternMismatchError(spec.field)


def to_string_params(params: Mapping[str, Any]) -> dict[str, str]:
    """Stringify values and drop ``None`` entries, preserving key order."""
    result: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            result[key] = "1" if value else "0"
        elif isinstance(value, int):
            result[key] = str(int(value))
        else:
            result[key] = str(value)
    return result
