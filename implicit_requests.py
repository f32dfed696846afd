"""Find inline paper references such as [P2300R7] or <CWG1234> in free text."""

from __future__ import annotations

import re

from models import PaperRequest

# Longer prefixes first so LEWG is not read as L + EWG.
PAPER_TYPES: tuple[str, ...] = ("LEWG", "EDIT", "CWG", "EWG", "LWG", "FS", "SD", "N", "P", "D")

_REQUEST_RE = re.compile(
    r"[\[{<]"
    r"(?P<type>" + "|".join(PAPER_TYPES) + r")"
    r"(?P<number>[0-9]+)"
    r"(?:R(?P<revision>[0-9]+)?)?"
    r"[\]}>]",
    re.IGNORECASE | re.ASCII,
)


def find_paper_requests(text: str) -> list[PaperRequest]:
    """Return every bracketed paper reference in ``text``, in order of appearance.

    Opening and closing brackets may be any of ``[] {} <>`` and need not pair
    up. Paper types are normalized to upper case.
    """
    requests: list[PaperRequest] = []
    for match in _REQUEST_RE.finditer(text):
        revision = match.group("revision")
        requests.append(
            PaperRequest(
                paper_type=match.group("type").upper(),
                number=match.group("number"),
                revision=int(revision) if revision is not None else None,
            )
        )
    return requests
