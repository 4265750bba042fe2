"""Conversions between raw phone numbers, E.164 and WhatsApp JIDs.

Twilio addresses WhatsApp users as ``whatsapp:+15551234567`` while the Web
session speaks JIDs: ``15551234567@s.whatsapp.net`` for phone-number accounts
and ``<id>@lid`` for linked ids, which need a reverse lookup to recover the
phone number.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from typing import TYPE_CHECKING

from .models import LINKED_DOMAIN, STANDARD_DOMAIN, LinkedId, ProtocolAddress, StandardJid
from .protocols import LinkedIdStoreProtocol
from .verbose import is_verbose, log_verbose

if TYPE_CHECKING:
    from .config import RelaySettings

logger = logging.getLogger("relay_bridge.addressing")

CHANNEL_PREFIX = "whatsapp:"

# ASCII digits only; \d would also accept other scripts' numerals.
_STANDARD_JID_RE = re.compile(rf"^(\d+)(?::\d+)?@{re.escape(STANDARD_DOMAIN)}$", re.ASCII)
_LINKED_ID_RE = re.compile(rf"^(\d+)(?::\d+)?@{re.escape(LINKED_DOMAIN)}$", re.ASCII)
_NON_PHONE_CHARS_RE = re.compile(r"[^\d+]", re.ASCII)


def with_channel_prefix(number: str) -> str:
    if number.startswith(CHANNEL_PREFIX):
        return number
    return f"{CHANNEL_PREFIX}{number}"


def normalize_e164(number: str) -> str:
    """Best-effort E.164: ``"whatsapp:+1 (555) 123-4567"`` -> ``"+15551234567"``.

    Never raises. Input without any digits degrades to ``"+"``.
    """
    without_prefix = number.removeprefix(CHANNEL_PREFIX).strip()
    digits = _NON_PHONE_CHARS_RE.sub("", without_prefix).replace("+", "")
    return f"+{digits}"


def to_protocol_address(number: str) -> StandardJid:
    digits = normalize_e164(number).lstrip("+")
    return StandardJid(digits=digits)


def to_whatsapp_jid(number: str) -> str:
    return to_protocol_address(number).jid


def parse_protocol_address(address: str) -> ProtocolAddress | None:
    """Classify a JID, dropping any ``:<device>`` suffix."""
    match = _STANDARD_JID_RE.match(address)
    if match:
        return StandardJid(digits=match.group(1))
    match = _LINKED_ID_RE.match(address)
    if match:
        return LinkedId(id=match.group(1))
    return None


def from_protocol_address(
    address: str,
    store: LinkedIdStoreProtocol | None = None,
    settings: RelaySettings | None = None,
) -> str | None:
    """Resolve a JID back to an E.164 number.

    Phone-number JIDs resolve directly without touching any store. Linked ids
    are looked up in ``store``; when it is omitted, the store configured by
    ``settings`` (or the environment) is opened for this lookup only. Returns
    None when the address is unrecognised or the linked id has no usable
    mapping; callers skip such messages.
    """
    parsed = parse_protocol_address(address)
    if isinstance(parsed, StandardJid):
        return f"+{parsed.digits}"
    if isinstance(parsed, LinkedId):
        phone = _lookup_linked_id(parsed.id, store, settings)
        if phone:
            return f"+{phone}"
        if is_verbose():
            log_verbose(f"LID mapping not found for {parsed.id}; skipping inbound message")
    return None


def _lookup_linked_id(
    linked_id: str,
    store: LinkedIdStoreProtocol | None,
    settings: RelaySettings | None,
) -> str | None:
    owned: LinkedIdStoreProtocol | None = None
    try:
        if store is None:
            if settings is None:
                from .config import RelaySettings

                settings = RelaySettings()
            store = owned = settings.build_linked_id_store()
        return store.get(linked_id)
    # pydantic's ValidationError is a ValueError
    except (OSError, ValueError, sqlite3.Error) as exc:
        logger.debug("Linked-id store read failed for %s: %s", linked_id, exc)
        return None
    finally:
        close = getattr(owned, "close", None)
        if close is not None:
            close()
