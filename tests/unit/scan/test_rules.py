"""Tests for exclusion, identity, and content-category rules."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from largedirs.scan import CancellationToken, ExclusionPolicy, IdentityKey, NullIdentityProber, StatIdentityProber, classify


class ExclusionPolicyTests(unittest.TestCase):
    def test_builtin_pseudo_directories_match_by_basename(self) -> None:
        policy = ExclusionPolicy()

        for name in ("proc", "sys", "dev", "run", "tmp", "var", "TMP"):
            self.assertTrue(policy.is_excluded(f"/data/{name}"), name)
        self.assertFalse(policy.is_excluded("/data/variables"))
        self.assertFalse(policy.is_excluded("/data/proc/inner"))

    def test_user_prefixes_match_as_text_prefixes(self) -> None:
        policy = ExclusionPolicy.build(["/home/user/cache"])

        self.assertTrue(policy.is_excluded("/home/user/cache"))
        self.assertTrue(policy.is_excluded("/home/user/cache/deep"))
        self.assertTrue(policy.is_excluded("/home/user/cache2"))
        self.assertFalse(policy.is_excluded("/home/user/docs"))

    def test_trailing_separator_on_prefix_spares_siblings(self) -> None:
        policy = ExclusionPolicy.build(["/data/cache/"])

        self.assertEqual(policy.prefixes, ("/data/cache/",))
        self.assertTrue(policy.is_excluded("/data/cache/deep"))
        self.assertFalse(policy.is_excluded("/data/cache-keep"))

    def test_mounts_match_on_path_boundaries(self) -> None:
        policy = ExclusionPolicy().with_mounts(["/mnt/nas"])

        self.assertTrue(policy.is_excluded("/mnt/nas"))
        self.assertTrue(policy.is_excluded("/mnt/nas/photos"))
        self.assertFalse(policy.is_excluded("/mnt/nas2"))

    def test_with_mounts_keeps_existing_rules(self) -> None:
        policy = ExclusionPolicy.build(["/srv/skip"], mounts=["/mnt/a"]).with_mounts(["/mnt/b"])

        self.assertTrue(policy.is_excluded("/srv/skip/x"))
        self.assertTrue(policy.is_excluded("/mnt/a/x"))
        self.assertTrue(policy.is_excluded("/mnt/b/x"))


class IdentityProberTests(unittest.TestCase):
    def test_stat_prober_matches_two_spellings_of_one_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a" / "b").mkdir(parents=True)
            prober = StatIdentityProber()

            first, first_supported = prober.identify(root / "a")
            second, second_supported = prober.identify(Path(os.path.join(root, "a", "b", "..")))
            other, _ = prober.identify(root / "a" / "b")

            if not first_supported:
                self.skipTest("filesystem reports no inode numbers")
            self.assertTrue(second_supported)
            self.assertIsInstance(first, IdentityKey)
            self.assertEqual(first, second)
            self.assertNotEqual(first, other)

    def test_stat_prober_reports_unsupported_for_missing_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            key, supported = StatIdentityProber().identify(Path(tmp) / "missing")

        self.assertIsNone(key)
        self.assertFalse(supported)

    def test_null_prober_never_supports_identity(self) -> None:
        self.assertEqual(NullIdentityProber().identify(Path("/")), (None, False))


class ClassifyTests(unittest.TestCase):
    def test_known_extensions_are_case_insensitive(self) -> None:
        self.assertEqual(classify("Holiday.JPEG"), "Image")
        self.assertEqual(classify("movie.mkv"), "Video")
        self.assertEqual(classify("disk.VMDK"), "Disk Image")
        self.assertEqual(classify("report.xlsx"), "Spreadsheet")
        self.assertEqual(classify("deck.pptx"), "Presentation")

    def test_rotated_logs_beat_archive_suffix(self) -> None:
        self.assertEqual(classify("syslog.log.gz"), "Log")
        self.assertEqual(classify("backup.tar.gz"), "Archive")

    def test_unknown_and_extensionless_names_are_other(self) -> None:
        self.assertEqual(classify("README"), "Other")
        self.assertEqual(classify(".bashrc"), "Other")
        self.assertEqual(classify("data.unknownext"), "Other")


class CancellationTokenTests(unittest.TestCase):
    def test_cancel_is_sticky(self) -> None:
        token = CancellationToken()
        self.assertFalse(token.cancelled)

        token.cancel()
        token.cancel()

        self.assertTrue(token.cancelled)


if __name__ == "__main__":
    unittest.main()
