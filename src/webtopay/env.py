from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, field_validator

from .routes import Environment


class Settings(BaseModel):
    """Typed settings built from environment variables."""

    project_id: int
    password: str
    environment: Environment = "production"

    # Endpoint overrides; None means the environment default.
    payment_url: Optional[str] = None
    public_key_url: Optional[str] = None
    payment_method_list_url: Optional[str] = None

    http_timeout: float = 10.0

    # Callback service settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: list[str] = ["*"]

    app_name: str = "WebToPay Callbacks"
    app_version: str = "1.0.0"

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("project_id must be a positive integer")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("password cannot be empty")
        return v

    @property
    def sandbox(self) -> bool:
        return self.environment == "sandbox"


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    project_id_str = os.environ.get("WEBTOPAY_PROJECT_ID", "0")
    sandbox_str = os.environ.get("WEBTOPAY_SANDBOX", "false")

    return Settings(
        project_id=int(project_id_str) if project_id_str.strip() else 0,
        password=os.environ.get("WEBTOPAY_PASSWORD", ""),
        environment="sandbox" if sandbox_str.lower() == "true" else "production",
        payment_url=os.environ.get("WEBTOPAY_PAYMENT_URL") or None,
        public_key_url=os.environ.get("WEBTOPAY_PUBLIC_KEY_URL") or None,
        payment_method_list_url=os.environ.get("WEBTOPAY_PAYMENT_METHOD_LIST_URL")
        or None,
        http_timeout=float(os.environ.get("WEBTOPAY_HTTP_TIMEOUT", "10.0")),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("API_PORT", "8000")),
        api_debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        api_cors_origins=os.environ.get("API_CORS_ORIGINS", "*").split(","),
        app_name=os.environ.get("APP_NAME", "WebToPay Callbacks"),
        app_version=os.environ.get("APP_VERSION", "1.0.0"),
    )
