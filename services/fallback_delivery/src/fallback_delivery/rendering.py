"""Jinja2 rendering of notification emails (plain-text and HTML variants)."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from jinja2 import FileSystemLoader, StrictUndefined, select_autoescape
from jinja2.sandbox import SandboxedEnvironment

from shared.enums import Category
from shared.models import NotificationPayload

_TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = SandboxedEnvironment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)

_SUBJECT_MARKERS: dict[Category, str] = {
    Category.REMINDER: "\N{BELL}",
    Category.ALERT: "\N{WARNING SIGN}",
    Category.INFO: "\N{INFORMATION SOURCE}",
    Category.SUCCESS: "\N{WHITE HEAVY CHECK MARK}",
    Category.TEST: "\N{TEST TUBE}",
}


@dataclass(frozen=True, slots=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


def render_email(
    payload: NotificationPayload,
    *,
    app_name: str,
    timezone: str,
    now: datetime,
) -> RenderedEmail:
    """Render the subject and both bodies for *payload*.

    HTML output is autoescaped; *now* is shown in the recipient's
    *timezone*.
    """
    sent_at = now.astimezone(ZoneInfo(timezone)).strftime("%d %b %Y, %I:%M %p")
    context = {
        "app_name": app_name,
        "title": payload.title,
        "body": payload.body,
        "category": str(payload.category),
        "sent_at": sent_at,
    }
    return RenderedEmail(
        subject=f"{_SUBJECT_MARKERS[payload.category]} {payload.title}",
        text=_env.get_template("notification.txt").render(context),
        html=_env.get_template("notification.html").render(context),
    )
