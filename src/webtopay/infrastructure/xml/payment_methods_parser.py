from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional

from ...domain.errors import CatalogParseError
from ...domain.payment_methods import (
    PaymentMethod,
    PaymentMethodCountry,
    PaymentMethodGroup,
    PaymentMethodList,
)

_ROOT_TAGS = ("payment_types", "webtopay")


def parse_payment_methods_xml(
    xml: str, project_id: int, currency: str
) -> PaymentMethodList:
    """Map the payment methods XML document onto :class:`PaymentMethodList`.

    An unrecognized root element yields an empty list.

    Raises:
        CatalogParseError: If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as e:
        raise CatalogParseError(f"Invalid payment methods XML: {e}") from e

    if root.tag not in _ROOT_TAGS:
        return PaymentMethodList(project_id=project_id, currency=currency)

    countries = [_parse_country(node) for node in root.findall("country")]
    return PaymentMethodList(project_id=project_id, currency=currency, countries=countries)


def _parse_country(node: ET.Element) -> PaymentMethodCountry:
    return PaymentMethodCountry(
        code=node.get("code", ""),
        title=_parse_localized(node, "title"),
        groups=[_parse_group(g) for g in node.findall("payment_group")],
    )


def _parse_group(node: ET.Element) -> PaymentMethodGroup:
    return PaymentMethodGroup(
        key=node.get("key", ""),
        title=_parse_localized(node, "title"),
        methods=[_parse_method(m) for m in node.findall("payment_type")],
    )


def _parse_method(node: ET.Element) -> PaymentMethod:
    return PaymentMethod(
        key=node.get("key", ""),
        title=_parse_localized(node, "title"),
        logo_url=_parse_localized(node, "logo_url"),
        min_amount=_parse_amount(node.get("min")),
        max_amount=_parse_amount(node.get("max")),
        currency=node.get("currency") or None,
        is_iban=node.get("is_iban") == "1",
        base_currency=node.get("base_currency") or None,
    )


def _parse_localized(node: ET.Element, tag: str) -> dict[str, str]:
    # Elements without a language attribute are treated as English.
    return {
        child.get("language", "en"): (child.text or "").strip()
        for child in node.findall(tag)
    }


def _parse_amount(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise CatalogParseError(f"Invalid amount limit: {value!r}") from e
