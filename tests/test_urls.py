"""Tests for songlink/urls.py"""

import sys
import os
import unittest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from songlink.urls import normalize_url, find_first_url, extract_command_url


class TestNormalizeUrl(unittest.TestCase):
    """Test normalize_url function."""

    def test_strips_brackets_and_trailing_dot(self):
        """Chat auto-link brackets and sentence punctuation are removed."""
        self.assertEqual(
            normalize_url("<https://open.spotify.com/track/x>."),
            "https://open.spotify.com/track/x",
        )

    def test_adds_scheme_and_strips_comma(self):
        """Scheme-less input gets https:// prepended."""
        self.assertEqual(
            normalize_url("open.spotify.com/track/x,"),
            "https://open.spotify.com/track/x",
        )

    def test_keeps_http_scheme(self):
        """An existing http:// scheme is not upgraded."""
        self.assertEqual(normalize_url("  http://example.com/a  "), "http://example.com/a")

    def test_strips_repeated_trailing_punctuation(self):
        """All trailing ) . , ] > characters are stripped."""
        self.assertEqual(normalize_url("https://x.com/a)),."), "https://x.com/a")

    def test_whitespace_between_trailing_punctuation_is_stripped(self):
        """Spaces mixed into trailing punctuation go too, so a second pass changes nothing."""
        self.assertEqual(normalize_url("https://x/a. )"), "https://x/a")
        self.assertEqual(normalize_url("< https://x/a >"), "https://x/a")

    def test_unchanged_when_already_clean(self):
        """Clean URLs pass through untouched."""
        url = "https://music.apple.com/us/album/1?i=2"
        self.assertEqual(normalize_url(url), url)

    def test_empty_input_never_fails(self):
        """Empty or missing input still yields a best-effort string."""
        self.assertEqual(normalize_url(""), "https://")
        self.assertEqual(normalize_url(None), "https://")
        self.assertEqual(normalize_url("   "), "https://")

    def test_idempotent(self):
        """Normalizing twice gives the same result as once."""
        samples = [
            "<https://open.spotify.com/track/x>.",
            "open.spotify.com/track/x,",
            "x .",
            "<>",
            "< open.spotify.com/track/y >",
            "https://a.b/c)]",
            "",
            "<<https://a.b>>",
        ]
        for sample in samples:
            with self.subTest(sample=sample):
                once = normalize_url(sample)
                self.assertEqual(normalize_url(once), once)


class TestFindFirstUrl(unittest.TestCase):
    """Test find_first_url function."""

    def test_returns_first_of_many(self):
        """Only the first link in the text is returned."""
        text = "listen https://open.spotify.com/track/1 and https://tidal.com/track/2"
        self.assertEqual(find_first_url(text), "https://open.spotify.com/track/1")

    def test_no_match(self):
        """Plain text has no link."""
        self.assertIsNone(find_first_url("no links here, just open.spotify.com"))
        self.assertIsNone(find_first_url(""))

    def test_match_runs_to_whitespace(self):
        """The match includes trailing punctuation up to whitespace."""
        self.assertEqual(find_first_url("see (https://x.com/a). ok"), "https://x.com/a).")


class TestExtractCommandUrl(unittest.TestCase):
    """Test extract_command_url function."""

    def test_first_token(self):
        self.assertEqual(extract_command_url("  https://a.b/c  extra words"), "https://a.b/c")

    def test_missing_argument(self):
        self.assertIsNone(extract_command_url(None))
        self.assertIsNone(extract_command_url(""))
        self.assertIsNone(extract_command_url("   "))


if __name__ == "__main__":
    unittest.main()
