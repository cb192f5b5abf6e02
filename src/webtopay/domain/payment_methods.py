"""Payment methods catalog entities."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PaymentMethod(BaseModel):
    key: str
    title: dict[str, str] = Field(default_factory=dict)
    logo_url: dict[str, str] = Field(default_factory=dict)
    min_amount: Optional[int] = None
    max_amount: Optional[int] = None
    currency: Optional[str] = None
    is_iban: bool = False
    base_currency: Optional[str] = None

    def get_title(self, language: str = "en") -> str:
        """Return the localized title, falling back to English then to the key."""
        return self.title.get(language) or self.title.get("en") or self.key

    def is_available_for(self, amount: int) -> bool:
        """Whether ``amount`` (in minor units) lies within the method's limits."""
        if self.min_amount is not None and amount < self.min_amount:
            return False
        if self.max_amount is not None and amount > self.max_amount:
            return False
        return True


class PaymentMethodGroup(BaseModel):
    key: str
    title: dict[str, str] = Field(default_factory=dict)
    methods: list[PaymentMethod] = Field(default_factory=list)


class PaymentMethodCountry(BaseModel):
    code: str
    title: dict[str, str] = Field(default_factory=dict)
    groups: list[PaymentMethodGroup] = Field(default_factory=list)

    def iter_methods(self) -> list[PaymentMethod]:
        return [method for group in self.groups for method in group.methods]


class PaymentMethodList(BaseModel):
    """Payment methods available to a project for one currency."""

    project_id: int
    currency: str
    countries: list[PaymentMethodCountry] = Field(default_factory=list)

    def get_country(self, code: str) -> Optional[PaymentMethodCountry]:
        code = code.upper()
        for country in self.countries:
            if country.code.upper() == code:
                return country
        return None

    def filter_by_amount(self, amount: int) -> PaymentMethodList:
        """Return a copy keeping only methods that accept ``amount``.

        Groups left without methods are dropped.
        """
        countries: list[PaymentMethodCountry] = []
        for country in self.countries:
            groups = []
            for group in country.groups:
                methods = [m for m in group.methods if m.is_available_for(amount)]
                if methods:
                    groups.append(group.model_copy(update={"methods": methods}))
            countries.append(country.model_copy(update={"groups": groups}))
        return self.model_copy(update={"countries": countries})
