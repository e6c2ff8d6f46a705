"""
Configuration constants and settings for the portal fetcher.

Credentials and field names can be supplied via ``PORTAL_*`` environment
variables; the CLI overrides any of them per run.
"""

import os
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT = "downloads"
DEFAULT_DB = "downloaded_files.sqlite"

# HTML attribute whose value is a serialised JSON document
DATA_ATTRIBUTE = "data-content"

# ---------------------------------------------------------------------------
# Transport tuning
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = 30
MAX_RETRIES = 3

# Chunk size for streaming binary downloads to disk (512 KiB)
DOWNLOAD_CHUNK = 524288

# ---------------------------------------------------------------------------
# Fallback file names (compared literally elsewhere – do not change)
# ---------------------------------------------------------------------------
NO_NAME_FILE = "no name"
NO_NAME_SEGMENT = "no-name"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


@dataclass(frozen=True)
class FieldMap:
    """JSON key names that drive the traversal, plus the download template.

    All values are opaque: they are used as dict keys, substring needles
    and format arguments, never validated.
    """

    url_field: str = "url"
    rate_field: str = "rate"
    id_field: str = "id"
    extension: str = ".pdf"
    download_template: str = ""

    def download_url(self, identifier: str) -> str:
        """Fill *identifier* into the download template.

        Accepts both ``%s`` and ``{}`` placeholders.
        """
        if "%s" in self.download_template:
            return self.download_template % identifier
        return self.download_template.format(identifier)

    @classmethod
    def from_env(cls) -> "FieldMap":
        return cls(
            url_field=_env("PORTAL_URL_FIELD", "url"),
            rate_field=_env("PORTAL_RATE_FIELD", "rate"),
            id_field=_env("PORTAL_ID_FIELD", "id"),
            extension=_env("PORTAL_EXT", ".pdf"),
            download_template=_env("PORTAL_DOWNLOAD_TEMPLATE"),
        )


@dataclass(frozen=True)
class PortalSettings:
    """Where to log in, what to fetch and where downloads land."""

    login_url: str = ""
    resource_url: str = ""
    username: str = ""
    password: str = ""
    download_dir: str = DEFAULT_OUTPUT
    db_path: str = DEFAULT_DB

    @classmethod
    def from_env(cls) -> "PortalSettings":
        return cls(
            login_url=_env("PORTAL_LOGIN_URL"),
            resource_url=_env("PORTAL_RESOURCE_URL"),
            username=_env("PORTAL_USER"),
            password=_env("PORTAL_PASSWORD"),
            download_dir=_env("PORTAL_DOWNLOAD_DIR", DEFAULT_OUTPUT),
            db_path=_env("PORTAL_DB", DEFAULT_DB),
        )
