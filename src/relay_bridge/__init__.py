"""Address normalization and message chunking for a WhatsApp/Twilio relay."""

from .addressing import (
    from_protocol_address,
    normalize_e164,
    parse_protocol_address,
    to_protocol_address,
    to_whatsapp_jid,
    with_channel_prefix,
)
from .chunking import split_into_chunks
from .models import LinkedId, Provider, StandardJid

__version__ = "0.1.0"

__all__ = [
    "LinkedId",
    "Provider",
    "StandardJid",
    "from_protocol_address",
    "normalize_e164",
    "parse_protocol_address",
    "split_into_chunks",
    "to_protocol_address",
    "to_whatsapp_jid",
    "with_channel_prefix",
]
