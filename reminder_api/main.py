import logging

from fastapi import FastAPI

from reminder_api.api.send import router as send_router
from reminder_api.core.config import get_settings
from reminder_api.middleware.correlation_id import CorrelationIdMiddleware
from reminder_api.services.credentials import build_credential_registry
from reminder_api.services.messaging.reminder_message import resolve_timezone

logger = logging.getLogger(__name__)

app = FastAPI(title="LINE Reservation Reminder")

app.add_middleware(CorrelationIdMiddleware)


@app.on_event("startup")
async def startup_event():
    """Validate configuration and build the credential registry (fail-fast)."""
    settings = get_settings()

    required_settings = [
        "airtable_api_key",
        "airtable_base_id",
        "airtable_table_id",
    ]
    missing = [key for key in required_settings if not getattr(settings, key, None)]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables: {', '.join(k.upper() for k in missing)}. "
            "Please check your .env file or environment configuration."
        )

    # Both raise ConfigurationError: unknown timezone, default account without token
    resolve_timezone(settings.reminder_timezone)
    credentials = build_credential_registry(settings)
    app.state.credentials = credentials

    # Log configuration summary (no secrets)
    logger.info(
        "Startup: Configuration loaded - "
        f"Environment: {settings.app_env}, "
        f"LINE accounts: {', '.join(credentials.labels)}, "
        f"Default account: {credentials.default_label}, "
        f"Reminder timezone: {settings.reminder_timezone}"
    )


@app.get("/health")
def health():
    """
    Health check endpoint with credential and integration visibility.

    Never exposes tokens or API keys.
    """
    settings = get_settings()
    credentials = getattr(app.state, "credentials", None)
    return {
        "ok": True,
        "credentials": {
            "accounts": credentials.labels if credentials else [],
            "default_account": settings.line_default_account,
        },
        "integrations": {
            "airtable_base_id": settings.airtable_base_id,
            "airtable_table_id": settings.airtable_table_id,
            "airtable_timeout_seconds": settings.airtable_timeout_seconds,
        },
    }


app.include_router(send_router, prefix="/api", tags=["send"])
