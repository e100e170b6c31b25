from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "SetCounter"
    debug: bool = False

    scryfall_base_url: str = "https://api.scryfall.com"
    user_agent: str = "SetCounter/1.0"

    # Timeout for a single HTTP request to Scryfall
    http_timeout_seconds: float = 30.0

    # Cards resolved concurrently per run
    max_concurrent_lookups: int = 8

    # Upper bound for one card's full resolution (name lookup + every prints page)
    lookup_timeout_seconds: float = 10.0

    # Session coordinators kept in memory; idle ones beyond this are evicted
    max_sessions: int = 1000


settings = Settings()
