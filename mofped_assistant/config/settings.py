"""Configuration management for the MoFPED Help Assistant."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Content store
    database_path: Path = Path("./data/mofped.db")

    # Official website
    site_url: str = "https://www.finance.go.ug"
    site_name: str = "finance.go.ug"
    contact_page_url: str = "https://www.finance.go.ug/contact-us"
    services_page_url: str = "https://www.finance.go.ug/services"
    location_urls: list[str] = [
        "https://www.finance.go.ug/contact-us",
        "https://www.finance.go.ug/about-us",
        "https://www.finance.go.ug/contact",
        "https://www.finance.go.ug",
    ]
    contact_urls: list[str] = [
        "https://www.finance.go.ug/contact-us",
        "https://www.finance.go.ug/contact",
    ]
    service_urls: list[str] = [
        "https://www.finance.go.ug/services",
        "https://www.finance.go.ug/how-to-apply",
        "https://www.gov.ug/services",
    ]
    user_agent: str = "Mozilla/5.0 (compatible; MoFPED-Help-Assistant/1.0)"

    # Timeouts (seconds)
    request_timeout: float = 15.0
    fetch_timeout: float = 10.0

    # Search
    document_search_limit: int = 5
    service_search_limit: int = 3

    # Static external-system facts
    external_systems_path: Path = PACKAGE_DATA_DIR / "external_systems.json"

    # API
    rate_limit_per_minute: int = 30
    cors_origins: list[str] = [
        "https://finance.go.ug",
        "https://www.finance.go.ug",
        "http://localhost:3000",
    ]
    # Peers allowed to name the client in X-Forwarded-For (e.g. the reverse proxy)
    trusted_proxies: list[str] = []
    max_query_length: int = 1000
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("request_timeout", "fetch_timeout", mode="after")
    @classmethod
    def positive_timeout(cls, value: float) -> float:
        """Timeouts must be positive."""
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("document_search_limit", "service_search_limit", "max_query_length")
    @classmethod
    def positive_limit(cls, value: int) -> int:
        """Limits must be positive."""
        if value <= 0:
            raise ValueError("limit must be positive")
        return value

    @field_validator("user_agent", "site_url", mode="after")
    @classmethod
    def strip_value(cls, value: str) -> str:
        """Remove BOM and surrounding whitespace picked up from .env files."""
        return value.lstrip("\ufeff").strip()

    def ensure_directories(self) -> None:
        """Create the database directory if it doesn't exist."""
        self.database_path.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
