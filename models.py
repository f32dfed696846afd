"""Shared typed models for the paper bot."""

from __future__ import annotations

from dataclasses import dataclass

PAPER_TYPE = "paper"


@dataclass(frozen=True, slots=True)
class Paper:
    """One catalog entry keyed by its paper name (e.g. P0001)."""

    name: str
    type: str | None = None
    title: str | None = None
    author: str | None = None
    link: str | None = None

    @property
    def is_searchable(self) -> bool:
        """True when every displayed field is present and the entry is a paper."""
        return (
            self.type == PAPER_TYPE
            and self.title is not None
            and self.author is not None
            and self.link is not None
        )


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Matched papers in discovery order; capped is set when matches were dropped."""

    papers: tuple[Paper, ...] = ()
    capped: bool = False


@dataclass(frozen=True, slots=True)
class PaperRequest:
    """Paper reference written inline in a chat message, e.g. [P2300R7]."""

    paper_type: str
    number: str
    revision: int | None = None

    @property
    def pattern(self) -> str:
        base = f"{self.paper_type}{self.number}"
        if self.revision is None:
            return base
        return f"{base}R{self.revision}"
