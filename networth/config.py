from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NETWORTH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    seed_path: str = "data/seed.json"
    log_level: str = "INFO"

    # Display only: amounts are stored and aggregated in the base currency.
    base_currency: str = "EUR"
    exchange_rates: dict[str, float] = Field(
        default_factory=lambda: {"USD": 1.08, "GBP": 0.85, "HUF": 395.0}
    )

    default_growth_rate: float = 5.0
    default_monthly_contribution: float = 100.0
    default_projection_years: int = 10
    recent_transactions: int = 5


def load_settings() -> Settings:
    return Settings()


def convert(amount: float, currency: str, settings: Settings) -> float:
    if currency == settings.base_currency:
        return amount
    return amount * settings.exchange_rates[currency]
