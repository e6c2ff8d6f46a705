"""
Tests for local file-name derivation.
"""

import unittest

from portal_fetcher.extraction.records import FileCandidate
from portal_fetcher.naming import (
    derive_file_name,
    safe_file_name,
    strip_extension_suffix,
    to_title_case,
)


class TestToTitleCase(unittest.TestCase):
    def test_hyphenated_slug(self):
        self.assertEqual(to_title_case("march-report-2024"), "March Report 2024")

    def test_empty_and_none(self):
        self.assertEqual(to_title_case(""), "no-name")
        self.assertEqual(to_title_case(None), "no-name")
        self.assertEqual(to_title_case("   "), "no-name")

    def test_repeated_hyphens_collapse(self):
        self.assertEqual(to_title_case("a--b-"), "A B")

    def test_rest_of_word_is_kept(self):
        self.assertEqual(to_title_case("q3-FY-results"), "Q3 FY Results")


class TestStripExtensionSuffix(unittest.TestCase):
    def test_strips_extension_with_digits(self):
        self.assertEqual(strip_extension_suffix("report.pdf12", ".pdf"), "report")

    def test_requires_trailing_digits(self):
        self.assertEqual(strip_extension_suffix("report.pdf", ".pdf"), "report.pdf")

    def test_extension_is_literal(self):
        self.assertEqual(strip_extension_suffix("reportXpdf1", ".pdf"), "reportXpdf1")


class TestDeriveFileName(unittest.TestCase):
    def test_full_name(self):
        candidate = FileCandidate(
            url="https://host/x/finance/march-report.pdf12",
            identifier="1",
            vote_score=7,
            formatted_date="2024-03-01",
        )
        self.assertEqual(
            derive_file_name(candidate, ".pdf"),
            "Finance - March Report - 2024-03-01 - 7",
        )

    def test_missing_date_and_vote(self):
        candidate = FileCandidate(url="https://host/x/finance/march-report.pdf12", identifier="1")
        self.assertEqual(derive_file_name(candidate, ".pdf"), "Finance - March Report -  - 0")

    def test_two_segments(self):
        candidate = FileCandidate(url="https://host/finance", identifier="1")
        self.assertEqual(derive_file_name(candidate, ".pdf"), "no name")

    def test_trailing_slash_does_not_count_as_segment(self):
        candidate = FileCandidate(url="https://host/x/finance/", identifier="1")
        self.assertEqual(derive_file_name(candidate, ".pdf"), "no name")

    def test_relative_url(self):
        candidate = FileCandidate(url="/docs/legal/privacy-policy.pdf3", vote_score=2,
                                  formatted_date="2023-12-31")
        self.assertEqual(
            derive_file_name(candidate, ".pdf"),
            "Legal - Privacy Policy - 2023-12-31 - 2",
        )

    def test_empty_title_segment(self):
        candidate = FileCandidate(url="https://host/x/finance/.pdf1/extra")
        self.assertEqual(derive_file_name(candidate, ".pdf"), "Finance - no-name -  - 0")

    def test_unparseable_url(self):
        candidate = FileCandidate(url="http://[::1/x/y/z")
        self.assertEqual(derive_file_name(candidate, ".pdf"), "no name")


class TestSafeFileName(unittest.TestCase):
    def test_plain_name_untouched(self):
        self.assertEqual(safe_file_name("Finance - Report - 2024-03-01 - 7"),
                         "Finance - Report - 2024-03-01 - 7")

    def test_separators_replaced(self):
        self.assertEqual(safe_file_name("a/b\\c"), "a_b_c")

    def test_dot_names(self):
        self.assertEqual(safe_file_name(".."), "no name")


if __name__ == "__main__":
    unittest.main()
