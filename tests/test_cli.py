"""
Tests for the command-line interface and environment-driven settings.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from portal_fetcher import cli
from portal_fetcher.config import FieldMap, PortalSettings
from portal_fetcher.core.archive import DownloadArchive, DownloadedFileRecord
from portal_fetcher.utils.log import log


REQUIRED = [
    "--login-url", "https://portal.example/login",
    "--resource-url", "https://portal.example/library/",
    "--download-template", "https://portal.example/files/%s",
    "--password", "s3cret",
]


class TestSettingsFromEnv(unittest.TestCase):
    def test_field_map_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            fields = FieldMap.from_env()
        self.assertEqual(
            (fields.url_field, fields.rate_field, fields.id_field, fields.extension),
            ("url", "rate", "id", ".pdf"),
        )
        self.assertEqual(fields.download_template, "")

    def test_field_map_from_env(self):
        env = {
            "PORTAL_URL_FIELD": "href",
            "PORTAL_RATE_FIELD": "votes",
            "PORTAL_ID_FIELD": "binaryId",
            "PORTAL_EXT": ".zip",
            "PORTAL_DOWNLOAD_TEMPLATE": "https://p/dl/%s",
        }
        with patch.dict(os.environ, env, clear=True):
            fields = FieldMap.from_env()
        self.assertEqual(fields.id_field, "binaryId")
        self.assertEqual(fields.download_url("5"), "https://p/dl/5")

    def test_portal_settings_from_env(self):
        env = {"PORTAL_USER": "bob", "PORTAL_DOWNLOAD_DIR": "/data/files"}
        with patch.dict(os.environ, env, clear=True):
            settings = PortalSettings.from_env()
        self.assertEqual(settings.username, "bob")
        self.assertEqual(settings.download_dir, "/data/files")
        self.assertEqual(settings.db_path, "downloaded_files.sqlite")


class TestParseArgs(unittest.TestCase):
    def test_download_with_page(self):
        args = cli.parse_args(REQUIRED + ["download", "reports"])
        self.assertEqual(args.command, "download")
        self.assertEqual(args.page, "reports")

    def test_download_without_page(self):
        args = cli.parse_args(REQUIRED + ["download"])
        self.assertIsNone(args.page)

    def test_env_defaults_used(self):
        with patch.dict(os.environ, {"PORTAL_ID_FIELD": "binaryId"}):
            args = cli.parse_args(["list"])
        self.assertEqual(args.id_field, "binaryId")

    def test_command_required(self):
        with redirect_stdout(io.StringIO()), patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.parse_args([])


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db = str(Path(self._tmp.name) / "archive.sqlite")

    def tearDown(self):
        self._tmp.cleanup()
        log.handlers.clear()

    def test_download_prints_acknowledgement_and_runs(self):
        out = io.StringIO()
        with patch.object(cli.FileDownloader, "fetch_and_download_files",
                          return_value=None) as run, redirect_stdout(out):
            cli.main(REQUIRED + ["--db", self.db, "download", "reports"])
        self.assertIn("Download process initiated", out.getvalue())
        run.assert_called_once_with("reports")

    def test_missing_template_exits_with_config_error(self):
        argv = ["--login-url", "https://p/login", "--resource-url", "https://p/",
                "--download-template", "", "--db", self.db, "download"]
        with self.assertRaises(SystemExit) as ctx:
            cli.main(argv)
        self.assertEqual(ctx.exception.code, 2)

    def test_password_prompt(self):
        argv = [a for a in REQUIRED if a not in ("--password", "s3cret")]
        with patch.dict(os.environ, {"PORTAL_PASSWORD": ""}), \
                patch("portal_fetcher.cli.getpass.getpass", return_value="typed") as prompt, \
                patch.object(cli, "FileDownloader") as downloader_cls, \
                redirect_stdout(io.StringIO()):
            cli.main(argv + ["--db", self.db, "download"])
        prompt.assert_called_once()
        settings = downloader_cls.call_args.args[0]
        self.assertEqual(settings.password, "typed")

    def test_list_prints_records(self):
        DownloadArchive(self.db).save(DownloadedFileRecord(
            source_url="https://portal.example/files/1",
            local_path="/data/a.pdf",
            downloaded_at=datetime(2024, 3, 1, 8, 0, 0),
        ))
        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(["--db", self.db, "list"])
        self.assertEqual(json.loads(out.getvalue()), [{
            "source_url": "https://portal.example/files/1",
            "local_path": "/data/a.pdf",
            "downloaded_at": "2024-03-01T08:00:00",
        }])


if __name__ == "__main__":
    unittest.main()
