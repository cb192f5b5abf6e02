"""Payment methods catalog retrieval."""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.payment_methods import PaymentMethodList
from ..domain.shared import HttpFetcher
from ..infrastructure.xml.payment_methods_parser import parse_payment_methods_xml

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "EUR"


class PaymentMethodListProvider:
    """Fetches payment method lists and caches them per (currency, amount)."""

    def __init__(self, project_id: int, base_url: str, http_client: HttpFetcher) -> None:
        self._project_id = project_id
        self._base_url = base_url
        self._http = http_client
        self._cache: dict[tuple[str, Optional[int]], PaymentMethodList] = {}

    def build_url(self, currency: str, amount: Optional[int] = None) -> str:
        url = f"{self._base_url}{self._project_id}/currency:{currency}"
        if amount is not None:
            url += f"/amount:{int(amount)}"
        return url

    async def get_payment_method_list(
        self,
        currency: str = DEFAULT_CURRENCY,
        amount: Optional[int] = None,
    ) -> PaymentMethodList:
        cache_key = (currency, amount)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        url = self.build_url(currency, amount)
        logger.debug("Fetching payment methods from %s", url)
        xml = await self._http.fetch(url)
        result = parse_payment_methods_xml(xml, self._project_id, currency)

        self._cache[cache_key] = result
        return result

    def clear_cache(self) -> None:
        self._cache.clear()
