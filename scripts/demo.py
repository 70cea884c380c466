#!/usr/bin/env python3
"""Demo: push a test notification through the fallback chain.

Reads SMTP_* and VAPID_* settings from the environment. Runs the chain
in-process and prints every attempt, or with --enqueue hands the job to a
running worker instead.

Usage:
    python scripts/demo.py --email will@example.com [--phone "0412 345 678"]
        [--carrier optus] [--enqueue]
"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from shared.config import PushConfig, SMTPConfig
from shared.enums import Carrier
from shared.models import RecipientProfile

from fallback_delivery.celery import build_orchestrator
from fallback_delivery.config import DeliveryConfig
from fallback_delivery.messages import build_test_notification
from fallback_delivery.reporters import LoggingOutcomeReporter
from fallback_delivery.tasks import enqueue_test_notification


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test notification")
    parser.add_argument("--email", required=True, help="Recipient email address")
    parser.add_argument("--phone", default=None, help="Recipient mobile number")
    parser.add_argument(
        "--carrier",
        choices=[c.value for c in Carrier],
        default=Carrier.AUTO.value,
        help="Carrier gateway to try first (default: auto)",
    )
    parser.add_argument(
        "--enqueue",
        action="store_true",
        help="Send via the Celery worker instead of in-process",
    )
    args = parser.parse_args()

    try:
        recipient = RecipientProfile(
            email=args.email, phone=args.phone, carrier_hint=Carrier(args.carrier)
        )
    except ValidationError as exc:
        print(f"Invalid recipient: {exc}")
        sys.exit(2)

    if args.enqueue:
        enqueue_test_notification(recipient)
        print("Queued test notification. Check the worker logs for the trail.")
        return

    orchestrator = build_orchestrator(
        DeliveryConfig(), SMTPConfig(), PushConfig(), LoggingOutcomeReporter()
    )
    result = asyncio.run(orchestrator.deliver(recipient, build_test_notification()))

    for attempt in result.attempts:
        print(f"  {attempt.channel:6s} {attempt.outcome:10s} {attempt.target or '-'}")
        print(f"         {attempt.reason}")
        for relay in attempt.relays:
            mark = "ok" if relay.accepted else "x"
            print(f"           [{mark}] {relay.address} {relay.reason}")

    print(f"\n{'Delivered' if result.succeeded else 'NOT delivered'}: {result.summary()}")
    sys.exit(0 if result.succeeded else 1)


if __name__ == "__main__":
    main()
