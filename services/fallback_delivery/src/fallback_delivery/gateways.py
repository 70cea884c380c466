"""Carrier email-to-SMS gateways and the sequential relay multiplexer.

A message is relayed by mailing ``<number>@<gateway domain>``. The first
gateway whose relay is accepted by the mail transport wins. Acceptance only
means the relay took the message; there is no confirmation that the carrier
put it on the handset.
"""

import logging
from dataclasses import dataclass

from shared.enums import Carrier
from shared.models import GatewayRelay

from fallback_delivery.transport import MailTransport, compose_email

logger = logging.getLogger(__name__)

# Enumeration order is the try order when no carrier is known.
CARRIER_GATEWAYS: dict[Carrier, str] = {
    Carrier.TELSTRA: "sms.telstra.com",
    Carrier.OPTUS: "optusmobile.com.au",
    Carrier.VODAFONE: "sms.vodafone.com.au",
    Carrier.TPG: "tpgmobile.net",
    Carrier.BOOST: "boostmobile.net.au",
}

BACKUP_GATEWAYS: tuple[str, ...] = (
    "vtext.com.au",
    "messaging.optus.com.au",
    "vtext.com",
    "txt.att.net",
    "messaging.sprintpcs.com",
    "tmomail.net",
    "mms.att.net",
)


def gateway_order(carrier_hint: Carrier | None) -> list[str]:
    """Return gateway domains in the order they should be tried.

    A known carrier goes first, then every backup gateway, then the other
    carriers. Without a hint (or with ``auto``) all carriers are tried
    before the backups.
    """
    if carrier_hint is None or carrier_hint not in CARRIER_GATEWAYS:
        return [*CARRIER_GATEWAYS.values(), *BACKUP_GATEWAYS]

    preferred = CARRIER_GATEWAYS[carrier_hint]
    others = [d for c, d in CARRIER_GATEWAYS.items() if c != carrier_hint]
    return [preferred, *BACKUP_GATEWAYS, *others]


@dataclass(frozen=True, slots=True)
class RelayOutcome:
    accepted_by: GatewayRelay | None
    relays: tuple[GatewayRelay, ...]


class GatewayMultiplexer:
    """Tries one SMS text against successive gateways until one accepts."""

    def __init__(self, transport: MailTransport) -> None:
        self._transport = transport

    async def relay(
        self,
        number: str,
        text: str,
        carrier_hint: Carrier | None = None,
    ) -> RelayOutcome:
        relays: list[GatewayRelay] = []

        for domain in gateway_order(carrier_hint):
            address = f"{number}@{domain}"
            # Gateways read the body; an empty subject keeps the SMS clean.
            message = compose_email(self._transport.sender, address, "", text)
            try:
                await self._transport.send(message)
            except Exception as exc:
                reason = str(exc) or type(exc).__name__
                logger.info(
                    "Gateway rejected relay",
                    extra={"gateway": domain, "address": address, "reason": reason},
                )
                relays.append(
                    GatewayRelay(
                        gateway=domain, address=address, accepted=False, reason=reason
                    )
                )
                continue

            accepted = GatewayRelay(gateway=domain, address=address, accepted=True)
            relays.append(accepted)
            logger.info(
                "Gateway accepted relay",
                extra={"gateway": domain, "address": address, "tries": len(relays)},
            )
            return RelayOutcome(accepted_by=accepted, relays=tuple(relays))

        return RelayOutcome(accepted_by=None, relays=tuple(relays))
