"""
Reminder message formatting.
"""

from datetime import date, datetime

import pytz

from reminder_api.api.errors import ConfigurationError

DEFAULT_TIMEZONE = "Asia/Taipei"

REMINDER_TEMPLATE = (
    "嗨嗨~🔉預約提醒通知\n"
    "我們明天 {time} 見唷🌝🌝\n"
    "Hi! Reservation reminder: see you tomorrow at {time} 🌝"
)


def resolve_timezone(name: str) -> pytz.BaseTzInfo:
    """Look up a timezone name. Unknown names are a configuration error."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigurationError(f"Unknown REMINDER_TIMEZONE: {name!r}") from e


def parse_date(value: str, tz: pytz.BaseTzInfo) -> datetime | None:
    """
    Parse an ISO-8601 date string into an aware datetime.

    Date-only values and a trailing "Z" mean UTC. Naive date-times are taken
    to be in tz. Returns None if the value cannot be parsed.
    """
    text = value.strip()
    try:
        day = date.fromisoformat(text)
    except ValueError:
        day = None
    if day is not None:
        return datetime(day.year, day.month, day.day, tzinfo=pytz.utc)

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = tz.localize(parsed)
    except (ValueError, OverflowError):
        return None
    return parsed


def format_reminder_time(value: str, timezone: str = DEFAULT_TIMEZONE) -> str:
    """
    Format value as zero-padded 24-hour HH:MM in timezone.

    Invalid or out-of-range dates produce an empty string instead of raising.
    """
    tz = resolve_timezone(timezone)
    parsed = parse_date(value, tz)
    if parsed is None:
        return ""
    try:
        return parsed.astimezone(tz).strftime("%H:%M")
    except (ValueError, OverflowError):
        return ""


def build_reminder_message(value: str, timezone: str = DEFAULT_TIMEZONE) -> str:
    """Render the bilingual reminder for the appointment at value."""
    return REMINDER_TEMPLATE.format(time=format_reminder_time(value, timezone))
