"""
Mine a decoded page payload for file candidates and download ids.

Both walks share one shape: a top-level probe over the root (and, for an
array root, each direct element) that uses a deep first-match lookup,
followed by a pre-order walk that reads only the direct fields of every
object.  The walk never stops at a match.
"""

import math
import re
from datetime import datetime
from typing import Any

from portal_fetcher.config import FieldMap
from portal_fetcher.extraction.json_tree import find_value, iter_objects, node_text
from portal_fetcher.extraction.records import (
    DownloadResolution,
    FileCandidate,
    is_resolved,
    is_retained,
)
from portal_fetcher.utils.log import log

DATE_KEY = "date"
ID_KEY = "id"

_EPOCH_RE = re.compile(r"[+-]?\d+")


def format_epoch_date(value: Any) -> str | None:
    """Render epoch seconds as a local ``YYYY-MM-DD`` date.

    Returns ``None`` when *value* does not read as an integer.
    """
    text = node_text(value)
    if not _EPOCH_RE.fullmatch(text):
        return None
    try:
        return datetime.fromtimestamp(int(text)).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return None


def _vote(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # json.loads yields inf/nan for 1e400, Infinity and NaN
    if not math.isfinite(value):
        return None
    return int(value)


def build_candidate(node: dict, fields: FieldMap) -> FileCandidate:
    """Build a candidate from the direct fields of one object node."""
    return FileCandidate(
        url=node_text(node[fields.url_field]) if fields.url_field in node else "",
        identifier=node_text(node[ID_KEY]) if ID_KEY in node else "",
        vote_score=_vote(node.get(fields.rate_field)),
        formatted_date=format_epoch_date(node[DATE_KEY]) if DATE_KEY in node else None,
    )


def probe_candidate(node: Any, fields: FieldMap) -> FileCandidate:
    """Build the representative candidate for a top-level node.

    The url is the first url-field string anywhere below *node*.  The
    probe carries no identifier.
    """
    link = find_value(node, fields.url_field)
    if not isinstance(link, str):
        return FileCandidate()
    vote = None
    if fields.extension in link:
        rate = node.get(fields.rate_field) if isinstance(node, dict) else None
        vote = rate if isinstance(rate, int) and not isinstance(rate, bool) else -1
    return FileCandidate(url=link, vote_score=vote)


def _top_level(root: Any) -> list[Any]:
    if isinstance(root, list):
        return [root, *root]
    return [root]


def collect_candidates(root: Any, fields: FieldMap) -> list[FileCandidate]:
    """Return every retained file candidate in *root*.

    Probe candidates come first, then walk candidates in pre-order.
    Duplicates are kept.
    """
    if root is None:
        log.info("[PARSE] No JSON to process.")
        return []

    candidates = [
        c for c in (probe_candidate(n, fields) for n in _top_level(root))
        if is_retained(c, fields.extension)
    ]
    for obj in iter_objects(root):
        candidate = build_candidate(obj, fields)
        if is_retained(candidate, fields.extension):
            candidates.append(candidate)

    log.debug("[PARSE] %d file candidate(s) found", len(candidates))
    return candidates


def _probe_resolution(node: Any, fields: FieldMap) -> DownloadResolution:
    value = find_value(node, fields.id_field)
    if isinstance(value, str):
        return DownloadResolution(identifier=value)
    return DownloadResolution()


def resolve_download(root: Any, fields: FieldMap) -> DownloadResolution | None:
    """Return the first download id in *root*, or ``None``."""
    if root is None:
        log.info("[PARSE] No JSON to process.")
        return None

    for node in _top_level(root):
        resolution = _probe_resolution(node, fields)
        if is_resolved(resolution):
            return resolution

    for obj in iter_objects(root):
        if fields.id_field not in obj:
            continue
        resolution = DownloadResolution(identifier=node_text(obj[fields.id_field]))
        if is_resolved(resolution):
            return resolution
    return None
