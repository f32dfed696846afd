"""Render search results as chat messages of bounded length."""

from __future__ import annotations

from models import Paper, SearchResult

NOTHING_FOUND_NOTICE = "Nothing found."
MORE_RESULTS_NOTICE = "There are more results; refine your query."

# Telegram rejects longer texts; the limit counts UTF-16 code units.
TELEGRAM_MAX_MESSAGE_LENGTH = 4096


def format_header(query: str) -> str:
    return f'Results for "{query}":\n\n'


def format_paper(paper: Paper) -> str:
    return f"{paper.title} from {paper.author}\n{paper.link}\n\n"


def format_results(query: str, result: SearchResult, max_message_length: int) -> list[str]:
    """Split a search result into messages of at most ``max_message_length`` chars.

    Every message starts with the same header. A paper block is never split
    by the configured limit: a block that alone exceeds it is sent in a message
    of its own, cut into pieces only past Telegram's hard limit.
    """
    header = format_header(query)
    if not result.papers:
        return [header + NOTHING_FOUND_NOTICE]

    messages: list[str] = []
    buffer = header

    for paper in result.papers:
        block = format_paper(paper)
        if len(buffer) + len(block) > max_message_length and buffer != header:
            messages.append(buffer)
            buffer = header
        buffer += block

    if result.capped:
        if len(buffer) + len(MORE_RESULTS_NOTICE) > max_message_length and buffer != header:
            messages.append(buffer)
            buffer = header
        buffer += MORE_RESULTS_NOTICE

    if buffer != header:
        messages.append(buffer)
    return [chunk for message in messages for chunk in _split_to_platform_limit(message)]


def _split_to_platform_limit(message: str) -> list[str]:
    """Cut a message the platform would reject into consecutive pieces, dropping nothing."""
    if len(message.encode("utf-16-le")) // 2 <= TELEGRAM_MAX_MESSAGE_LENGTH:
        return [message]

    chunks: list[str] = []
    current: list[str] = []
    used = 0
    for char in message:
        width = 2 if ord(char) > 0xFFFF else 1
        if used + width > TELEGRAM_MAX_MESSAGE_LENGTH:
            chunks.append("".join(current))
            current, used = [], 0
        current.append(char)
        used += width
    if current:
        chunks.append("".join(current))
    return chunks
