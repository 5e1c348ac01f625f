from datetime import date

from pydantic_settings import BaseSettings

from app.data.airports import DEFAULT_FALLBACK_HUBS, DEFAULT_PRIMARY_DESTINATIONS


class Settings(BaseSettings):
    # Amadeus
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_env: str = "live"  # "live" or "test"
    amadeus_live_url: str = "https://api.amadeus.com"
    amadeus_test_url: str = "https://test.api.amadeus.com"
    amadeus_timeout_seconds: float = 30.0
    amadeus_max_concurrency: int = 10
    amadeus_max_results: int = 5

    # Carrier sent as excludeAirlineCodes when the exclude flag is on
    excluded_carrier: str = "AC"

    # Search defaults
    default_origin: str = "YUL"
    default_departure_date: date = date(2025, 8, 18)
    default_return_from: date = date(2025, 8, 27)
    default_return_to: date = date(2025, 8, 31)
    default_currency: str = "CAD"
    default_max_stopovers: int = 1
    default_cabin: str = "M"
    default_exclude_carrier: bool = True
    primary_destinations: str = ",".join(DEFAULT_PRIMARY_DESTINATIONS)
    fallback_hubs: str = ",".join(DEFAULT_FALLBACK_HUBS)

    # Sandbox broadening
    broadening_enabled: bool = True
    broadening_threshold: int = 1  # broaden when primary yields fewer offers than this
    broadening_min_stopovers: int = 2
    broadening_return_extension_days: int = 3

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def primary_destination_list(self) -> list[str]:
        return _split_codes(self.primary_destinations)

    @property
    def fallback_hub_list(self) -> list[str]:
        return _split_codes(self.fallback_hubs)

    @property
    def has_credentials(self) -> bool:
        return bool(self.amadeus_client_id and self.amadeus_client_secret)

    @property
    def environment(self) -> str:
        return "test" if self.amadeus_env.strip().lower() == "test" else "live"

    @property
    def is_sandbox(self) -> bool:
        return self.environment == "test"

    @property
    def amadeus_base_url(self) -> str:
        return self.amadeus_test_url if self.is_sandbox else self.amadeus_live_url

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def _split_codes(raw: str) -> list[str]:
    return [code.strip().upper() for code in raw.split(",") if code.strip()]


settings = Settings()
