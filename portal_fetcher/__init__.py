"""
portal_fetcher
==============
Log in to a session-cookie web portal, mine the JSON document embedded in a
page's ``data-content`` attribute for downloadable files, and fetch the
top-ranked one exactly once.

Package structure
-----------------
portal_fetcher/
├── __init__.py       – package init and public API
├── config.py         – constants, FieldMap and PortalSettings
├── exceptions.py     – outer-surface exceptions
├── auth.py           – login and session-cookie capture
├── session.py        – requests.Session factory
├── naming.py         – local file-name derivation
├── cli.py            – argparse CLI (``python -m portal_fetcher``)
├── extraction/       – payload location and JSON tree walks
│   ├── html_parser.py
│   ├── json_tree.py
│   ├── records.py
│   └── traversal.py
├── core/             – download flow, SQLite archive, file storage
│   ├── archive.py
│   ├── downloader.py
│   └── storage.py
└── utils/
    └── log.py        – colorlog setup

Quick start
-----------
    from portal_fetcher import FieldMap, PortalSettings, DownloadArchive, FileDownloader

    fields = FieldMap(url_field="link", rate_field="votes", id_field="fileId",
                      extension=".pdf",
                      download_template="https://portal.example/files/%s")
    settings = PortalSettings(login_url="https://portal.example/login",
                              resource_url="https://portal.example/library/",
                              username="me", password="secret")
    FileDownloader(settings, fields, DownloadArchive("downloads.sqlite")).fetch_and_download_files()
"""

from .config     import FieldMap, PortalSettings
from .core       import DownloadArchive, DownloadedFileRecord, FileDownloader
from .extraction import (
    DownloadResolution,
    FileCandidate,
    collect_candidates,
    extract_data_content_json,
    resolve_download,
)
from .naming     import derive_file_name, to_title_case

__all__ = [
    "FieldMap",
    "PortalSettings",
    "DownloadArchive",
    "DownloadedFileRecord",
    "FileDownloader",
    "DownloadResolution",
    "FileCandidate",
    "collect_candidates",
    "extract_data_content_json",
    "resolve_download",
    "derive_file_name",
    "to_title_case",
]
