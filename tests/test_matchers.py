# Copyright Red Hat
#
# tests/test_matchers.py - File matcher tests.
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import stat
import re
import os

from filespec.helpers import mkdir, write
from filespec.matchers import (
    be_a_directory,
    be_a_file,
    be_executable,
    has_content,
    has_entries,
    have_content,
    have_entries,
    is_directory,
    is_executable,
    is_file,
    list_entries,
)
from filespec.testcase import FileSpecSetupMixin


class TestPredicates(FileSpecSetupMixin, unittest.TestCase):
    def test_is_file(self):
        write("foo")
        mkdir("bar")
        self.assertTrue(is_file("foo"))
        self.assertFalse(is_file("bar"))
        self.assertFalse(is_file("missing"))

    def test_is_directory(self):
        write("foo")
        mkdir("bar")
        self.assertFalse(is_directory("foo"))
        self.assertTrue(is_directory("bar"))
        self.assertFalse(is_directory("missing"))

    def test_is_executable(self):
        write("foo")
        self.assertFalse(is_executable("foo"))
        os.chmod("foo", os.stat("foo").st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        self.assertTrue(is_executable("foo"))

    def test_is_executable_missing(self):
        self.assertFalse(is_executable("missing"))

    def test_has_content(self):
        write("foo.txt", "hello")
        self.assertTrue(has_content("foo.txt", "hello"))
        self.assertTrue(has_content("foo.txt", re.compile("he")))
        self.assertFalse(has_content("foo.txt", "hell"))
        self.assertFalse(has_content("foo.txt", re.compile("^bye")))

    def test_has_content_missing(self):
        with self.assertRaises(FileNotFoundError):
            has_content("missing.txt", "hello")

    def test_list_entries(self):
        write("foo/bar.txt")
        write("foo/bar/buzz.txt")
        write("foo/.gitignore")
        mkdir("foo/empty")
        self.assertEqual(
            list_entries("foo"), [".gitignore", "bar.txt", "bar/buzz.txt"]
        )

    def test_list_entries_hidden_directory(self):
        write("foo/.config/settings.ini")
        self.assertEqual(list_entries("foo"), [".config/settings.ini"])

    def test_has_entries_order_independent(self):
        write("foo/bar.txt")
        write("foo/bar/buzz.txt")
        write("foo/.gitignore")
        self.assertTrue(has_entries("foo", ["bar.txt", "bar/buzz.txt", ".gitignore"]))
        self.assertFalse(has_entries("foo", ["bar.txt", "bar/buzz.txt"]))
        self.assertFalse(
            has_entries("foo", ["bar.txt", "bar/buzz.txt", ".gitignore", "x"])
        )


class TestMatchers(FileSpecSetupMixin, unittest.TestCase):
    def test_be_a_file_messages(self):
        matcher = be_a_file()
        self.assertFalse(matcher.matches("foo"))
        self.assertEqual(matcher.failure_message("foo"), "expected 'foo' to be a file")
        self.assertEqual(
            matcher.failure_message_when_negated("foo"),
            "expected 'foo' not to be a file",
        )

    def test_be_a_directory(self):
        mkdir("foo")
        self.assertTrue(be_a_directory().matches("foo"))
        self.assertEqual(be_a_directory().description, "be a directory")

    def test_be_executable(self):
        write("foo")
        self.assertFalse(be_executable().matches("foo"))
        self.assertEqual(
            be_executable().failure_message("foo"), "expected 'foo' to be executable"
        )

    def test_have_content_message(self):
        write("foo.txt", "hello")
        matcher = have_content("goodbye")
        self.assertFalse(matcher.matches("foo.txt"))
        message = matcher.failure_message("foo.txt")
        self.assertTrue(
            message.startswith("expected 'hello' to have content: 'goodbye'")
        )
        self.assertIn("Diff:", message)
        self.assertIn("-goodbye", message)
        self.assertIn("+hello", message)

    def test_have_content_pattern_message(self):
        write("foo.txt", "hello")
        matcher = have_content(re.compile("bye"))
        self.assertFalse(matcher.matches("foo.txt"))
        message = matcher.failure_message("foo.txt")
        self.assertIn("expected 'hello' to have content: re.compile('bye')", message)
        self.assertNotIn("Diff:", message)

    def test_have_content_negated_message(self):
        write("foo.txt", "hello")
        matcher = have_content("hello")
        self.assertTrue(matcher.matches("foo.txt"))
        self.assertEqual(
            matcher.failure_message_when_negated("foo.txt"),
            "expected 'hello' not to have content: 'hello'",
        )

    def test_have_entries_message(self):
        write("foo/bar.txt")
        matcher = have_entries(["baz.txt", "bar.txt"])
        self.assertFalse(matcher.matches("foo"))
        message = matcher.failure_message("foo")
        self.assertIn("expected 'foo' to contain files: ['bar.txt', 'baz.txt']", message)
        self.assertIn("actual files: ['bar.txt']", message)

    def test_matcher_repr(self):
        self.assertEqual(repr(be_a_file()), "<BeAFile: be a file>")
