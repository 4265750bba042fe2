from __future__ import annotations

DEFAULT_MAX_CHARS = 400

_SENTENCE_END = ".!?"


def _sentence_split_index(window: str) -> int | None:
    # Last terminator that ends the window or is followed by whitespace.
    for i in range(len(window) - 1, -1, -1):
        if window[i] in _SENTENCE_END:
            if i == len(window) - 1 or window[i + 1].isspace():
                return i + 1
    return None


def split_into_chunks(text: str | None, max_chars: int = DEFAULT_MAX_CHARS) -> list[str]:
    """Split text into readable chunks of at most ``max_chars`` characters.

    Prefers the last sentence boundary inside each window, then the last
    space, and finally cuts hard at ``max_chars`` (which may split a word or
    a multi-codepoint character).

    Args:
        text: Message body. Empty or whitespace-only text yields no chunks.
        max_chars: Hard upper bound on chunk length (default 400).

    Returns:
        Non-empty, trimmed chunks in order.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")
    if not text or not text.strip():
        return []
    trimmed = text.strip()
    if len(trimmed) <= max_chars:
        return [trimmed]

    chunks: list[str] = []
    remaining = trimmed
    while remaining:
        remaining = remaining.strip()
        if not remaining:
            break
        if len(remaining) <= max_chars:
            chunks.append(remaining)
            break

        window = remaining[:max_chars]
        split_index = _sentence_split_index(window)
        if split_index is None:
            last_space = window.rfind(" ")
            split_index = last_space if last_space > 0 else max_chars

        chunks.append(remaining[:split_index].strip())
        remaining = remaining[split_index:]

    return [chunk for chunk in chunks if chunk]
