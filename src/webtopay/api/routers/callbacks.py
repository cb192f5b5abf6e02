"""Payment callback route."""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from prometheus_client import Counter, Histogram

from ...client import WebToPayClient
from ...domain.callback import CallbackQuery
from ...domain.errors import CallbackError, PublicKeyFetchError
from ..dependencies import get_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webtopay", tags=["webtopay"])


callback_requests_total = Counter(
    "webtopay_callback_requests_total",
    "Total payment callbacks processed",
    ["status"],
)

callback_request_duration_seconds = Histogram(
    "webtopay_callback_request_duration_seconds",
    "Wall time to validate a payment callback",
    ["status"],
)


def _observe(label: str, start_time: float) -> None:
    callback_requests_total.labels(status=label).inc()
    elapsed = time.perf_counter() - start_time
    callback_request_duration_seconds.labels(status=label).observe(elapsed)


@router.get("/callback", response_class=PlainTextResponse)
async def receive_callback(
    data: str = Query(..., description="Encoded or encrypted callback payload"),
    ss1: Optional[str] = Query(None),
    ss2: Optional[str] = Query(None),
    ss3: Optional[str] = Query(None),
    client: WebToPayClient = Depends(get_client),
) -> PlainTextResponse:
    """Validate a payment status callback and acknowledge it with ``OK``."""
    start_time = time.perf_counter()
    query = CallbackQuery(data=data, ss1=ss1, ss2=ss2, ss3=ss3)
    try:
        parsed = await client.validate_callback(query)
    except PublicKeyFetchError:
        _observe("server_error", start_time)
        logger.exception("Could not obtain the public key to verify a callback")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Callback verification temporarily unavailable",
        )
    except CallbackError as e:
        _observe("client_error", start_time)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        _observe("server_error", start_time)
        logger.exception("Failed to process payment callback")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process callback",
        )

    _observe("success", start_time)
    logger.info(
        "Accepted callback for order %s with status %s", parsed.orderid, parsed.status
    )
    return PlainTextResponse("OK")
