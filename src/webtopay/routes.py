"""Default endpoint URLs per environment."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Environment = Literal["production", "sandbox"]

API_VERSION = "1.6"


class Routes(BaseModel):
    public_key: str
    payment: str
    payment_method_list: str


PRODUCTION_ROUTES = Routes(
    public_key="https://www.paysera.com/download/public.key",
    payment="https://bank.paysera.com/pay/",
    payment_method_list="https://www.paysera.com/payment-methods/",
)

SANDBOX_ROUTES = Routes(
    public_key="https://sandbox.paysera.com/download/public.key",
    payment="https://sandbox.paysera.com/pay/",
    payment_method_list="https://sandbox.paysera.com/payment-methods/",
)


def get_routes(env: Environment) -> Routes:
    """Return a fresh copy of the default routes for ``env``."""
    routes = SANDBOX_ROUTES if env == "sandbox" else PRODUCTION_ROUTES
    return routes.model_copy()
