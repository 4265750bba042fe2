"""Protocol interfaces for relay_bridge collaborators.

The linked-id reverse map is owned by whatever component first observes a
linked id; the resolver only needs a point lookup against it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LinkedIdStoreProtocol(Protocol):
    """Read-only view of the linked-id -> phone digits mapping."""

    def get(self, linked_id: str) -> str | None:
        """Return the phone digits for a linked id, or None when absent.

        Implementations may raise OSError, ValueError or sqlite3.Error when
        the backing storage is unreadable.
        """
        ...
