"""Canned payloads for the triggers that invoke delivery."""

from shared.enums import Category
from shared.models import NotificationPayload


def build_test_notification() -> NotificationPayload:
    return NotificationPayload(
        title="Notification Test",
        body=(
            "This notification proves your alerts are working! "
            "Check your phone for this message."
        ),
        category=Category.TEST,
    )


def build_weekly_update_reminder() -> NotificationPayload:
    return NotificationPayload(
        title="Weekly Job Update Reminder",
        body=(
            "Time to submit your weekly job updates! Please review and submit "
            "progress reports for all active projects."
        ),
        category=Category.REMINDER,
        data={"trigger_day": "monday"},
    )
