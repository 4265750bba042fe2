from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

STANDARD_DOMAIN = "s.whatsapp.net"
LINKED_DOMAIN = "lid"


class Provider(str, Enum):
    """Outbound delivery backends."""

    TWILIO = "twilio"
    WEB = "web"


@dataclass(frozen=True, slots=True)
class StandardJid:
    """Phone-number JID, e.g. ``15551234567@s.whatsapp.net``."""

    digits: str

    @property
    def jid(self) -> str:
        return f"{self.digits}@{STANDARD_DOMAIN}"

    def __str__(self) -> str:
        return self.jid


@dataclass(frozen=True, slots=True)
class LinkedId:
    """Opaque linked id (``<id>@lid``); needs a reverse mapping to find the phone."""

    id: str

    @property
    def jid(self) -> str:
        return f"{self.id}@{LINKED_DOMAIN}"

    def __str__(self) -> str:
        return self.jid


ProtocolAddress = StandardJid | LinkedId
