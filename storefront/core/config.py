"""Storefront Service Configuration"""

import os
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Restaurant Storefront"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # Restaurant backend
    backend_base_url: str = "http://localhost:8001"
    request_timeout_seconds: float = 15.0

    # Session tokens
    session_secret: str = "dev-session-secret"
    session_algorithm: str = "HS256"
    session_max_age_hours: int = 24
    session_cleanup_interval_seconds: float = 3600.0

    # PayPal
    paypal_api_base: str = "https://api-m.sandbox.paypal.com"
    paypal_client_id: Optional[str] = None
    paypal_client_secret: Optional[str] = None
    paypal_client_secret_path: Optional[str] = None
    paypal_checkout_url: str = "https://www.paypal.com/checkoutnow"

    # GCash
    gcash_enabled: bool = True

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def get_paypal_client_secret(self) -> Optional[str]:
        """Get PayPal client secret from file or inline"""
        if self.paypal_client_secret:
            return self.paypal_client_secret

        if self.paypal_client_secret_path and os.path.exists(self.paypal_client_secret_path):
            with open(self.paypal_client_secret_path, "r") as f:
                return f.read().strip()

        return None

    @property
    def paypal_configured(self) -> bool:
        """Check if PayPal credentials are configured"""
        return all([
            self.paypal_client_id,
            self.get_paypal_client_secret(),
        ])


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
