"""Tests for Jinja2 email rendering."""

from datetime import datetime, timezone

from shared.enums import Category
from shared.models import NotificationPayload

from fallback_delivery.messages import build_test_notification, build_weekly_update_reminder
from fallback_delivery.rendering import render_email

_NOW = datetime(2025, 3, 3, 21, 30, tzinfo=timezone.utc)


class TestRenderEmail:
    def test_subject_marked_by_category(self) -> None:
        reminder = render_email(
            build_weekly_update_reminder(), app_name="Crew", timezone="UTC", now=_NOW
        )
        test = render_email(
            build_test_notification(), app_name="Crew", timezone="UTC", now=_NOW
        )

        assert reminder.subject == "\N{BELL} Weekly Job Update Reminder"
        assert test.subject.endswith("Notification Test")
        assert reminder.subject[0] != test.subject[0]

    def test_bodies_contain_title_body_and_brand(self) -> None:
        payload = NotificationPayload(title="Pour delayed", body="Rain expected Tuesday")

        rendered = render_email(payload, app_name="Crew", timezone="UTC", now=_NOW)

        for part in (rendered.text, rendered.html):
            assert "Pour delayed" in part
            assert "Rain expected Tuesday" in part
            assert "Crew" in part

    def test_sent_at_in_local_timezone(self) -> None:
        payload = NotificationPayload(title="t", body="b", category=Category.INFO)

        rendered = render_email(
            payload, app_name="Crew", timezone="Australia/Melbourne", now=_NOW
        )

        # 21:30 UTC on 3 Mar is 08:30 AEDT on 4 Mar.
        assert "04 Mar 2025, 08:30 AM" in rendered.text

    def test_plain_text_not_escaped(self) -> None:
        payload = NotificationPayload(title="Q&A", body="Tom & Jerry")

        rendered = render_email(payload, app_name="Crew", timezone="UTC", now=_NOW)

        assert "Tom & Jerry" in rendered.text
        assert "Tom &amp; Jerry" in rendered.html
