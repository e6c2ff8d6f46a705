"""
Value records produced by the JSON traversals, and their retention filters.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileCandidate:
    """One downloadable item discovered in the page payload."""

    url: str = ""
    identifier: str = ""
    vote_score: int | None = None
    formatted_date: str | None = None


@dataclass(frozen=True)
class DownloadResolution:
    """The binary-download id found on a candidate's detail page."""

    identifier: str = ""


def is_blank(value: str | None) -> bool:
    """Return ``True`` for ``None``, ``""`` or whitespace-only strings."""
    return value is None or not value.strip()


def is_retained(candidate: FileCandidate, extension: str) -> bool:
    """A candidate counts only with a non-blank url containing *extension*
    and a non-blank identifier."""
    return (
        not is_blank(candidate.url)
        and extension in candidate.url
        and not is_blank(candidate.identifier)
    )


def is_resolved(resolution: DownloadResolution) -> bool:
    """A resolution counts only with a non-blank identifier."""
    return not is_blank(resolution.identifier)
