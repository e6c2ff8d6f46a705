"""
Derive a readable local file name from a candidate's url.

Portal links look like ``/<section>/<category>/<title><ext><n>``; the name
becomes ``"Category - Title - <date> - <vote>"``.
"""

import re
import urllib.parse

from portal_fetcher.config import NO_NAME_FILE, NO_NAME_SEGMENT
from portal_fetcher.extraction.records import FileCandidate, is_blank
from portal_fetcher.utils.log import log

_UNSAFE_CHARS_RE = re.compile(r"[/\\\x00]")


def to_title_case(segment: str | None) -> str:
    """
    Convert a hyphen-separated slug into Title Case.

    Example: ``"that-name"`` -> ``"That Name"``.  Blank input gives
    ``"no-name"``.
    """
    if is_blank(segment):
        return NO_NAME_SEGMENT
    parts = [p[0].upper() + p[1:] for p in segment.split("-") if p]
    return " ".join(parts).strip()


def strip_extension_suffix(segment: str, extension: str) -> str:
    """Remove a trailing ``<extension><digits>`` from *segment*."""
    return re.sub(re.escape(extension) + r"\d+$", "", segment)


def derive_file_name(candidate: FileCandidate, extension: str) -> str:
    """Build the file name for *candidate*, or ``"no name"`` when its url
    does not have at least four path segments."""
    try:
        path = urllib.parse.urlsplit(candidate.url).path
        segments = path.split("/")
        while segments and not segments[-1]:
            segments.pop()

        if len(segments) < 4:
            log.error("URL does not have the expected structure: %s", candidate.url)
            return NO_NAME_FILE

        category = to_title_case(segments[2])
        title = to_title_case(strip_extension_suffix(segments[3], extension))
        date = candidate.formatted_date or ""
        vote = candidate.vote_score if candidate.vote_score is not None else 0
        return f"{category} - {title} - {date} - {vote}"
    except Exception:
        log.error("Error creating file name for %s", candidate.url, exc_info=True)
        return NO_NAME_FILE


def safe_file_name(name: str) -> str:
    """Replace path separators so *name* stays inside the download dir."""
    cleaned = _UNSAFE_CHARS_RE.sub("_", name).strip()
    if cleaned in ("", ".", ".."):
        return NO_NAME_FILE
    return cleaned
