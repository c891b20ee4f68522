# Copyright Red Hat
#
# tests/fsdiff/test_recorder.py - Change recorder tests.
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from unittest.mock import patch
import os

from filespec import FileSpecArgumentError
from filespec.fsdiff.engine import diff
from filespec.fsdiff.options import DiffOptions, ENGINE_BUILTIN, ENGINE_EXTERNAL
from filespec.fsdiff.recorder import ChangeRecorder, record_changes, _relative_names
from filespec.helpers import write
from filespec.testcase import FileSpecSetupMixin

from tests._util import have_gnu_diff

_FILE_DIFF = (
    "--- a/file.txt\n"
    "+++ b/file.txt\n"
    "@@ -1 +1 @@\n"
    "-hello\n"
    "\\ No newline at end of file\n"
    "+goodbye\n"
    "\\ No newline at end of file\n"
)


class RecorderTestsBase(FileSpecSetupMixin):
    engine = None

    def _record(self, path, action, **kwargs):
        return record_changes(
            path, action, options=DiffOptions(engine=self.engine), **kwargs
        )

    def test_record_changes_file(self):
        write("example/file.txt", "hello")
        changes = self._record(
            "example/file.txt", lambda: write("example/file.txt", "goodbye")
        )
        self.assertEqual(changes, _FILE_DIFF)

    def test_record_changes_directory(self):
        write("example/file.txt", "hello")
        changes = self._record("example", lambda: write("example/file.txt", "goodbye"))
        self.assertEqual(changes, _FILE_DIFF)

    def test_record_changes_directory_trailing_slash(self):
        write("example/file.txt", "hello")
        changes = self._record("example/", lambda: write("example/file.txt", "goodbye"))
        self.assertEqual(changes, _FILE_DIFF)

    def test_record_changes_current_directory(self):
        write("file.txt", "hello")
        changes = self._record(".", lambda: write("file.txt", "goodbye"))
        self.assertEqual(changes, _FILE_DIFF)

    def test_record_changes_parent_directory(self):
        write("example/file.txt", "hello")
        write("example/sub/keep.txt", "keep\n")
        os.chdir("example/sub")
        changes = self._record("..", lambda: write("../file.txt", "goodbye"))
        self.assertEqual(changes, _FILE_DIFF)

    def test_record_changes_nested_and_new(self):
        write("example/sub/a.txt", "a\n")

        def action():
            write("example/sub/a.txt", "b\n")
            write("example/new.txt", "new\n")

        self.assertEqual(
            self._record("example", action),
            "--- a/new.txt\n"
            "+++ b/new.txt\n"
            "@@ -0,0 +1 @@\n"
            "+new\n"
            "--- a/sub/a.txt\n"
            "+++ b/sub/a.txt\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n",
        )

    def test_record_changes_no_changes(self):
        write("example/file.txt", "hello")
        self.assertEqual(self._record("example", lambda: None), "")

    def test_record_changes_excludes(self):
        write("example/file.txt", "hello")
        write("example/cache.tmp", "1")

        def action():
            write("example/cache.tmp", "2")
            write("example/.git/HEAD", "ref")

        self.assertEqual(self._record("example", action, exclude=["*.tmp"]), "")

    def test_record_changes_binary(self):
        write("example/data.bin", b"\x00\x01")
        changes = self._record(
            "example", lambda: write("example/data.bin", b"\x00\x02")
        )
        self.assertEqual(changes, "Binary files a/data.bin and b/data.bin differ\n")

    def test_record_changes_matches_manual_snapshots(self):
        write("example/file.txt", "hello\nworld\n")
        write("manual/before/example/file.txt", "hello\nworld\n")

        changes = self._record(
            "example", lambda: write("example/file.txt", "hello\nthere\n")
        )

        write("manual/after/example/file.txt", "hello\nthere\n")
        manual = diff(
            "before",
            "after",
            options=DiffOptions(engine=self.engine),
            cwd=os.path.abspath("manual"),
        )
        self.assertEqual(_relative_names(manual, "example/"), changes)

    def test_record_changes_action_error(self):
        write("example/file.txt", "hello")
        with ChangeRecorder("example", options=DiffOptions(engine=self.engine)) as rec:
            scratch = rec._scratch
            self.assertTrue(os.path.isdir(os.path.join(scratch, "before", "example")))

        self.assertFalse(os.path.exists(scratch))

        error = ValueError("action failed")

        def action():
            raise error

        with patch("filespec.fsdiff.recorder.diff") as mock_diff:
            with self.assertRaises(ValueError) as cm:
                with ChangeRecorder("example") as rec:
                    scratch = rec._scratch
                    action()
        self.assertIs(cm.exception, error)
        mock_diff.assert_not_called()
        self.assertIsNone(rec.diff)
        self.assertFalse(os.path.exists(scratch))

    def test_record_changes_missing_path(self):
        with self.assertRaises(FileNotFoundError):
            self._record("missing.txt", lambda: None)

    def test_record_changes_cwd_rejected(self):
        write("example/file.txt", "hello")
        with self.assertRaises(FileSpecArgumentError):
            self._record("example", lambda: None, cwd="/")


@unittest.skipUnless(have_gnu_diff(), "GNU diff not available")
class TestExternalRecorder(RecorderTestsBase, unittest.TestCase):
    engine = ENGINE_EXTERNAL


class TestBuiltinRecorder(RecorderTestsBase, unittest.TestCase):
    engine = ENGINE_BUILTIN


class TestRelativeNames(unittest.TestCase):
    def test_file_prefix(self):
        self.assertEqual(
            _relative_names("--- before/f.txt\n+++ after/f.txt\n", ""),
            "--- a/f.txt\n+++ b/f.txt\n",
        )

    def test_directory_prefix(self):
        self.assertEqual(
            _relative_names(
                "--- before/ex/sub/f\n+++ after/ex/sub/f\n"
                "File before/ex/d is a directory while file after/ex/d is a regular file\n",
                "ex/",
            ),
            "--- a/sub/f\n+++ b/sub/f\n"
            "File a/d is a directory while file b/d is a regular file\n",
        )

