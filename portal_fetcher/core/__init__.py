"""Core download flow – orchestrator, archive and file storage."""

from portal_fetcher.core.archive import DownloadArchive, DownloadedFileRecord
from portal_fetcher.core.downloader import FileDownloader
from portal_fetcher.core.storage import ensure_dir, stream_to_file

__all__ = [
    "DownloadArchive",
    "DownloadedFileRecord",
    "FileDownloader",
    "ensure_dir",
    "stream_to_file",
]
