"""Small filesystem, timing and validation helpers shared across the relay."""

from __future__ import annotations

import asyncio
from pathlib import Path

from .models import Provider


def ensure_dir(path: str | Path) -> Path:
    """Create ``path`` and any missing parents. Existing directories are fine."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


async def sleep(ms: float) -> None:
    await asyncio.sleep(ms / 1000)


def normalize_path(path: str) -> str:
    """Make a webhook route path absolute (``"hook"`` -> ``"/hook"``)."""
    if not path.startswith("/"):
        return f"/{path}"
    return path


def assert_provider(value: str | Provider) -> Provider:
    """Return the matching Provider or raise ValueError."""
    try:
        return Provider(value)
    except ValueError:
        raise ValueError("Provider must be 'twilio' or 'web'") from None
