"""
Command-line interface for the portal fetcher.

    portal-fetcher download [PAGE]   log in, mine the page, fetch one file
    portal-fetcher list              print archived downloads as JSON
"""

import argparse
import getpass
import json
import logging
import sys
import time
from dataclasses import replace

import urllib3

from portal_fetcher.config import FieldMap, PortalSettings
from portal_fetcher.core.archive import DownloadArchive
from portal_fetcher.core.downloader import FileDownloader
from portal_fetcher.exceptions import ConfigurationError
from portal_fetcher.utils.log import log, setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    env_settings = PortalSettings.from_env()
    env_fields = FieldMap.from_env()

    parser = argparse.ArgumentParser(
        description="Log in to a portal, mine its embedded JSON for the "
                    "top-ranked file and download it once.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Every option can also be set via PORTAL_* environment variables\n"
            "(PORTAL_LOGIN_URL, PORTAL_RESOURCE_URL, PORTAL_USER, PORTAL_PASSWORD,\n"
            " PORTAL_URL_FIELD, PORTAL_RATE_FIELD, PORTAL_ID_FIELD, PORTAL_EXT,\n"
            " PORTAL_DOWNLOAD_TEMPLATE, PORTAL_DOWNLOAD_DIR, PORTAL_DB).\n"
            "\n"
            "Examples:\n"
            "  python -m portal_fetcher download\n"
            "  python -m portal_fetcher download reports/march\n"
            "  python -m portal_fetcher list\n"
        ),
    )
    parser.add_argument(
        "--login-url", default=env_settings.login_url,
        help="Login form URL",
    )
    parser.add_argument(
        "--resource-url", default=env_settings.resource_url,
        help="Protected page URL (PAGE is appended to it)",
    )
    parser.add_argument(
        "--user", default=env_settings.username,
        help="Portal username",
    )
    parser.add_argument(
        "--password", default=env_settings.password,
        help="Portal password (overrides PORTAL_PASSWORD env var)",
    )
    parser.add_argument(
        "--output", default=env_settings.download_dir,
        help=f"Download directory (default: {env_settings.download_dir})",
    )
    parser.add_argument(
        "--db", default=env_settings.db_path,
        help=f"Download archive database (default: {env_settings.db_path})",
    )
    parser.add_argument(
        "--url-field", default=env_fields.url_field,
        help=f"JSON key holding file links (default: {env_fields.url_field})",
    )
    parser.add_argument(
        "--rate-field", default=env_fields.rate_field,
        help=f"JSON key holding the vote score (default: {env_fields.rate_field})",
    )
    parser.add_argument(
        "--id-field", default=env_fields.id_field,
        help=f"JSON key holding the download id (default: {env_fields.id_field})",
    )
    parser.add_argument(
        "--ext", default=env_fields.extension,
        help=f"Substring a file link must contain (default: {env_fields.extension})",
    )
    parser.add_argument(
        "--download-template", default=env_fields.download_template,
        help="Download URL template taking the id, e.g. "
             "'https://portal/files/%%s/download'",
    )
    parser.add_argument(
        "--force", action="store_true", default=False,
        help="Download again even if the file is already archived",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    dl = sub.add_parser("download", help="Fetch the top-ranked file once")
    dl.add_argument("page", nargs="?", default=None,
                    help="Page name appended to the resource URL")
    sub.add_parser("list", help="Print archived downloads as JSON")
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> tuple[PortalSettings, FieldMap]:
    settings = PortalSettings(
        login_url=args.login_url,
        resource_url=args.resource_url,
        username=args.user,
        password=args.password,
        download_dir=args.output,
        db_path=args.db,
    )
    fields = FieldMap(
        url_field=args.url_field,
        rate_field=args.rate_field,
        id_field=args.id_field,
        extension=args.ext,
        download_template=args.download_template,
    )
    return settings, fields


def _require(settings: PortalSettings, fields: FieldMap) -> None:
    missing = [
        name for name, value in (
            ("--login-url", settings.login_url),
            ("--resource-url", settings.resource_url),
            ("--download-template", fields.download_template),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError("Missing required setting(s): " + ", ".join(missing))


def run_download(args: argparse.Namespace) -> None:
    settings, fields = _settings_from_args(args)
    _require(settings, fields)

    if not settings.password:
        settings = replace(settings, password=getpass.getpass("Portal password: "))

    archive = DownloadArchive(settings.db_path)
    downloader = FileDownloader(
        settings,
        fields,
        archive,
        verify_ssl=args.verify_ssl,
        force=args.force,
    )

    print("Download process initiated", flush=True)
    t0 = time.monotonic()
    downloader.fetch_and_download_files(args.page)
    log.info("Total elapsed time: %.1f s", time.monotonic() - t0)


def run_list(args: argparse.Namespace) -> None:
    archive = DownloadArchive(args.db)
    records = [r.to_dict() for r in archive.find_all()]
    print(json.dumps(records, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    try:
        if args.command == "download":
            run_download(args)
        else:
            run_list(args)
    except ConfigurationError as exc:
        log.error("%s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
