"""
Portal download flow.

One run is strictly sequential:

    login → page fetch → extract candidates → detail fetch
          → resolve download id → binary fetch → file write → archive

Every step logs and returns ``None`` on failure; nothing already archived
is rolled back.
"""

import sqlite3
import urllib.parse
from datetime import datetime
from pathlib import Path
from typing import Any

import requests

from portal_fetcher.auth import login
from portal_fetcher.config import (
    DOWNLOAD_CHUNK,
    REQUEST_TIMEOUT,
    FieldMap,
    PortalSettings,
)
from portal_fetcher.core.archive import DownloadArchive, DownloadedFileRecord
from portal_fetcher.core.storage import ensure_dir, stream_to_file
from portal_fetcher.extraction.html_parser import extract_data_content_json
from portal_fetcher.extraction.records import DownloadResolution, FileCandidate, is_blank
from portal_fetcher.extraction.traversal import collect_candidates, resolve_download
from portal_fetcher.naming import derive_file_name, safe_file_name
from portal_fetcher.session import build_session, cookie_headers
from portal_fetcher.utils.log import log


class FileDownloader:
    """
    Logs in to the portal, mines the resource page for the top-ranked
    file, resolves its download id and stores the binary once.
    """

    def __init__(
        self,
        settings: PortalSettings,
        fields: FieldMap,
        archive: DownloadArchive,
        session: requests.Session | None = None,
        verify_ssl: bool = True,
        force: bool = False,
    ) -> None:
        self.settings = settings
        self.fields = fields
        self.archive = archive
        self.force = force
        self.session = session or build_session(verify_ssl=verify_ssl)
        self.download_dir = Path(settings.download_dir)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_and_download_files(self, page_name: str | None = None) -> DownloadedFileRecord | None:
        """Run the whole flow once; return the archived record, if any."""
        cookie = login(self.session, self.settings)
        if cookie is None:
            log.error("[LOGIN] Failed to log in to the portal.")
            return None
        headers = cookie_headers(cookie)

        resource_url = self.settings.resource_url
        if not is_blank(page_name):
            resource_url += page_name

        try:
            html = self._get_text(resource_url, headers)
            if not html:
                log.info("[FETCH] No content returned from the portal.")
                return None

            candidates = self.process_html_content(html)
            if not candidates:
                log.info("[PARSE] No downloadable files found on %s", resource_url)
                return None
            candidate = candidates[0]
            log.info("[PARSE] Selected %s (id=%s, vote=%s)",
                     candidate.url, candidate.identifier, candidate.vote_score)

            detail_url = urllib.parse.urljoin(resource_url, candidate.url)
            detail_html = self._get_text(detail_url, headers)
            resolution = self.process_html_download_content(detail_html)
        except requests.RequestException as exc:
            log.error("[ERR] Error fetching or parsing the portal page: %s", exc)
            return None

        if resolution is None or is_blank(resolution.identifier):
            log.info("[PARSE] No download id found on %s", candidate.url)
            return None

        try:
            download_url = self.fields.download_url(resolution.identifier)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            log.error("[ERR] Bad download template %r: %s",
                      self.fields.download_template, exc)
            return None
        try:
            existing = self.archive.find_by_source_url(download_url)
        except sqlite3.Error as exc:
            log.error("[ERR] Archive lookup failed for %s: %s", download_url, exc)
            return None
        if existing is not None and not self.force:
            log.info("[SKIP] File already downloaded: %s → %s",
                     download_url, existing.local_path)
            return existing

        return self.download_file(download_url, headers, candidate)

    def process_html_content(self, html: str) -> list[FileCandidate]:
        """Extract the page payload and collect its file candidates."""
        return collect_candidates(extract_data_content_json(html), self.fields)

    def process_html_download_content(self, html: str | None) -> DownloadResolution | None:
        """Extract the detail-page payload and resolve its download id."""
        return resolve_download(extract_data_content_json(html), self.fields)

    def download_file(
        self,
        file_url: str,
        headers: dict[str, str],
        candidate: FileCandidate,
    ) -> DownloadedFileRecord | None:
        """Fetch *file_url*, write it under the download dir and archive it.

        No record is saved unless the write completes, and a file whose
        write or archive step failed is removed again.
        """
        local_path = None
        try:
            with self.session.get(
                file_url, headers=headers, timeout=REQUEST_TIMEOUT, stream=True
            ) as resp:
                if not resp.ok:
                    log.info("[ERR] Failed to download file: %s (HTTP %s)",
                             file_url, resp.status_code)
                    return None

                ensure_dir(self.download_dir)
                name = safe_file_name(derive_file_name(candidate, self.fields.extension))
                local_path = self.download_dir / name
                size = _content_length(resp.headers)
                written = stream_to_file(
                    local_path, resp.iter_content(chunk_size=DOWNLOAD_CHUNK), total=size
                )

            record = DownloadedFileRecord(
                source_url=file_url,
                local_path=str(local_path.resolve()),
                downloaded_at=datetime.now(),
            )
            self.archive.save(record, replace=self.force)
        except (requests.RequestException, OSError, sqlite3.Error) as exc:
            log.error("[ERR] Error downloading file: %s => %s", file_url, exc)
            if local_path is not None:
                local_path.unlink(missing_ok=True)
            return None

        log.info("[SAVE] Downloaded and saved file: %s (%d bytes)",
                 record.local_path, written)
        return record

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_text(self, url: str, headers: dict[str, str]) -> str:
        log.info("[FETCH] GET %s", url)
        resp = self.session.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return resp.text


def _content_length(headers: Any) -> int | None:
    try:
        return int(headers.get("Content-Length", ""))
    except (TypeError, ValueError):
        return None
