"""Phone number and SMS text helpers for email-to-SMS relay."""

import re

SMS_MAX_LENGTH = 160
ELLIPSIS = "..."
COUNTRY_CODE = "61"

_SEPARATORS = re.compile(r"[\s\-()]")


def normalize_phone(phone: str) -> str:
    """Turn a loosely typed Australian mobile number into ``61XXXXXXXXX``.

    Accepts spaces, dashes and parentheses, and a leading ``0``, ``+61``,
    ``61`` or bare national number. Already-normalized input is returned
    unchanged.
    """
    cleaned = _SEPARATORS.sub("", phone)
    if cleaned.startswith("0"):
        return COUNTRY_CODE + cleaned[1:]
    if cleaned.startswith("+" + COUNTRY_CODE):
        return cleaned[1:]
    if not cleaned.startswith(COUNTRY_CODE):
        return COUNTRY_CODE + cleaned
    return cleaned


def truncate_sms(text: str) -> str:
    """Cap *text* at one SMS segment, marking the cut with an ellipsis."""
    if len(text) <= SMS_MAX_LENGTH:
        return text
    return text[: SMS_MAX_LENGTH - len(ELLIPSIS)] + ELLIPSIS
