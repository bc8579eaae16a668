"""
Reservation reminder smoke test script.

Runs one reminder through the same lookup -> push flow the API uses, with the
real configuration from the environment / .env. A successful run delivers a
real LINE message.

Usage:
    python scripts/reminder_smoke.py --user-id Uxxxxxxxx --date 2024-01-01T09:30:00+08:00
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reminder_api.api.errors import ReminderError
from reminder_api.core.config import get_settings
from reminder_api.services.credentials import build_credential_registry
from reminder_api.services.dispatch import send_reservation_reminder
from reminder_api.services.integrations.http_client import create_httpx_client
from reminder_api.services.messaging import build_reminder_message


async def send_test_reminder(user_id: str, date: str) -> int:
    """Send one reminder and print the outcome. Returns a process exit code."""
    settings = get_settings()
    credentials = build_credential_registry(settings)

    print("📤 Sending reservation reminder...")
    print(f"   To: {user_id}")
    print(f"   Message: {build_reminder_message(date, settings.reminder_timezone)!r}")
    print()

    try:
        async with create_httpx_client() as client:
            result = await send_reservation_reminder(
                user_id,
                date,
                settings=settings,
                credentials=credentials,
                client=client,
            )
    except ReminderError as e:
        print(f"❌ {e.status_code} {e.error}")
        if e.detail:
            print(f"   Detail: {e.detail}")
        return 1

    print("✅ Result:")
    print(f"   Status: {result['status']}")
    print(f"   Account: {result['account']}")
    return 0


def main():
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(description="Send one reservation reminder via LINE")
    parser.add_argument("--user-id", required=True, help="LINE user id stored on the reservation")
    parser.add_argument("--date", required=True, help="Appointment date/time (ISO 8601)")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    settings = get_settings()
    print("=" * 60)
    print("LINE Reservation Reminder Smoke Test")
    print("=" * 60)
    print()
    print(f"Airtable table: {settings.airtable_base_id}/{settings.airtable_table_id}")
    print(f"Default account: {settings.line_default_account}")
    print()

    sys.exit(asyncio.run(send_test_reminder(args.user_id, args.date)))


if __name__ == "__main__":
    main()
