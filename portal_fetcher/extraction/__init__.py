"""JSON-in-HTML extraction: payload location, tree walks and records."""

from portal_fetcher.extraction.html_parser import extract_data_content_json
from portal_fetcher.extraction.records import DownloadResolution, FileCandidate
from portal_fetcher.extraction.traversal import (
    collect_candidates,
    format_epoch_date,
    resolve_download,
)

__all__ = [
    "extract_data_content_json",
    "DownloadResolution",
    "FileCandidate",
    "collect_candidates",
    "format_epoch_date",
    "resolve_download",
]
