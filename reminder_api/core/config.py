from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    app_env: str = "dev"

    # Airtable (reservation store, read-only)
    airtable_api_key: str
    airtable_base_id: str
    airtable_table_id: str
    airtable_user_id_field: str = "userId_"  # Field matched against the incoming userId
    airtable_api_url: str = "https://api.airtable.com/v0"
    airtable_timeout_seconds: float = 10.0

    # LINE Messaging API
    line_push_url: str = "https://api.line.me/v2/bot/message/push"
    line_channel_access_token: str | None = (
        None  # Single-channel deployments: registered under the default account
    )
    line_channel_access_tokens: dict[str, str] = {}  # JSON object: account label -> token
    line_default_account: str = "default"

    # Reminder text
    reminder_timezone: str = "Asia/Taipei"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings once per process.

    Required fields raise ValidationError if missing (fail-fast).
    """
    return Settings()
