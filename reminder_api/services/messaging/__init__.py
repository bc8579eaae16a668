# Messaging: LINE push sender and reminder text
# Re-export so "from reminder_api.services.messaging import ..." works.

from reminder_api.services.messaging.line import build_push_payload, send_line_message
from reminder_api.services.messaging.reminder_message import (
    build_reminder_message,
    format_reminder_time,
)

__all__ = [
    "build_push_payload",
    "build_reminder_message",
    "format_reminder_time",
    "send_line_message",
]
