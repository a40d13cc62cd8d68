"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Northwind API
    northwind_api_base_url: str = "http://localhost:8001"
    northwind_api_key: str = ""

    # Service
    service_name: str = "northwind-portal"
    log_level: str = "INFO"

    # HTTP Client (transport-level only, the client itself never retries)
    http_timeout_seconds: float = 10.0

    # Dashboard
    dashboard_account_limit: int = 100
    dashboard_transfer_page_size: int = 20
    mock_transaction_seed: Optional[int] = None  # None = fresh labels per request

    # Transfers
    default_currency: str = "USD"
    default_transfer_type: str = "ACH"


settings = Settings()
