"""Unit tests for the payment methods XML parser and catalog entities."""

from __future__ import annotations

import pytest

from webtopay.domain.errors import CatalogParseError
from webtopay.infrastructure.xml.payment_methods_parser import parse_payment_methods_xml

from tests.fixtures.catalog import SAMPLE_XML


@pytest.fixture
def catalog():
    return parse_payment_methods_xml(SAMPLE_XML, 123, "EUR")


class TestParsePaymentMethodsXml:
    def test_parses_countries(self, catalog) -> None:
        assert catalog.project_id == 123
        assert catalog.currency == "EUR"
        assert [c.code for c in catalog.countries] == ["LT", "EE"]

    def test_parses_country_titles(self, catalog) -> None:
        assert catalog.countries[0].title == {"lt": "Lietuva", "en": "Lithuania"}

    def test_parses_groups(self, catalog) -> None:
        groups = catalog.countries[0].groups
        assert [g.key for g in groups] == ["e-banking", "card"]
        assert groups[0].title["lt"] == "El. bankininkystė"

    def test_parses_methods(self, catalog) -> None:
        seb = catalog.countries[0].groups[0].methods[0]
        assert seb.key == "hanza"
        assert seb.min_amount == 10
        assert seb.max_amount == 1000000
        assert seb.currency == "EUR"
        assert seb.is_iban is True
        assert seb.base_currency == "EUR"
        assert seb.title["en"] == "SEB bank"
        assert seb.logo_url["lt"].endswith("seb_lt.png")

    def test_method_defaults(self, catalog) -> None:
        card = catalog.countries[0].groups[1].methods[0]
        assert card.min_amount is None
        assert card.max_amount is None
        assert card.currency is None
        assert card.is_iban is False
        assert card.base_currency is None
        assert card.logo_url == {}

    def test_webtopay_root(self) -> None:
        xml = '<webtopay><country code="LV"><title>Latvia</title></country></webtopay>'
        result = parse_payment_methods_xml(xml, 1, "EUR")
        assert result.countries[0].code == "LV"
        assert result.countries[0].title == {"en": "Latvia"}

    def test_unknown_root_gives_empty_list(self) -> None:
        result = parse_payment_methods_xml("<error>denied</error>", 1, "EUR")
        assert result.countries == []

    def test_malformed_xml(self) -> None:
        with pytest.raises(CatalogParseError):
            parse_payment_methods_xml("<payment_types><country>", 1, "EUR")

    def test_invalid_amount_limit(self) -> None:
        xml = (
            '<payment_types><country code="LT"><payment_group key="g">'
            '<payment_type key="m" min="abc"/></payment_group></country></payment_types>'
        )
        with pytest.raises(CatalogParseError, match="amount"):
            parse_payment_methods_xml(xml, 1, "EUR")


class TestCatalogEntities:
    def test_get_country(self, catalog) -> None:
        assert catalog.get_country("ee").code == "EE"
        assert catalog.get_country("PL") is None

    def test_method_title_fallback(self, catalog) -> None:
        luminor = catalog.get_country("EE").groups[0].methods[0]
        assert luminor.get_title("lt") == "Luminor"
        assert luminor.get_title("en") == "Luminor"

    def test_iter_methods(self, catalog) -> None:
        keys = [m.key for m in catalog.get_country("LT").iter_methods()]
        assert keys == ["hanza", "vb2", "card"]

    def test_filter_by_amount(self, catalog) -> None:
        filtered = catalog.filter_by_amount(5)
        lt = filtered.get_country("LT")
        assert [m.key for m in lt.iter_methods()] == ["vb2", "card"]
        assert [m.key for m in filtered.get_country("EE").iter_methods()] == ["nordea_ee"]
        # original is untouched
        assert len(catalog.get_country("LT").iter_methods()) == 3

    def test_filter_drops_empty_groups(self, catalog) -> None:
        filtered = catalog.filter_by_amount(600000)
        lt = filtered.get_country("LT")
        assert [g.key for g in lt.groups] == ["e-banking", "card"]
        assert filtered.get_country("EE").groups == []
