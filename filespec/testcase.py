# Copyright Red Hat
#
# filespec/testcase.py - File assertion helpers unittest integration
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
``unittest`` integration for the file helpers and matchers.

Example::

    class TestGenerator(FileSpecTestCase):
        def test_generate(self):
            self.write("config.ini", "[main]\\n")
            changes = self.record_changes(".", generate)
            self.assertIsFile("output.txt")
            self.assertHasContent("output.txt", re.compile("generated"))
"""
from contextlib import ExitStack
from typing import Iterable
import unittest
import logging

from filespec import helpers
from filespec.fsdiff import diff, record_changes
from filespec.matchers import (
    FileMatcher,
    be_a_directory,
    be_a_file,
    be_executable,
    have_content,
    have_entries,
)

_log = logging.getLogger(__name__)


class FileSpecSetupMixin:
    """
    Run each test in a fresh, empty temporary working directory that is
    removed after the test.
    """

    def setUp(self):
        super().setUp()
        with ExitStack() as stack:
            self.working_dir = stack.enter_context(helpers.working_directory())
            self.addCleanup(stack.pop_all().close)
        _log.debug("Running %s in %s", self.id(), self.working_dir)


class FileHelpersMixin:
    """
    Expose the file helpers and diff functions as test case methods.
    """

    mkdir = staticmethod(helpers.mkdir)
    write = staticmethod(helpers.write)
    read = staticmethod(helpers.read)
    diff = staticmethod(diff)
    record_changes = staticmethod(record_changes)


class FileAssertionsMixin:
    """
    File assertion methods for ``unittest.TestCase`` subclasses.
    """

    def assertMatches(self, actual, matcher: FileMatcher, msg=None):
        """Fail unless ``matcher`` matches ``actual``."""
        if not matcher.matches(actual):
            self.fail(self._formatMessage(msg, matcher.failure_message(actual)))

    def assertNotMatches(self, actual, matcher: FileMatcher, msg=None):
        """Fail if ``matcher`` matches ``actual``."""
        if matcher.matches(actual):
            self.fail(
                self._formatMessage(msg, matcher.failure_message_when_negated(actual))
            )

    def assertIsFile(self, path, msg=None):
        self.assertMatches(path, be_a_file(), msg)

    def assertIsNotFile(self, path, msg=None):
        self.assertNotMatches(path, be_a_file(), msg)

    def assertIsDirectory(self, path, msg=None):
        self.assertMatches(path, be_a_directory(), msg)

    def assertIsNotDirectory(self, path, msg=None):
        self.assertNotMatches(path, be_a_directory(), msg)

    def assertIsExecutable(self, path, msg=None):
        self.assertMatches(path, be_executable(), msg)

    def assertIsNotExecutable(self, path, msg=None):
        self.assertNotMatches(path, be_executable(), msg)

    def assertHasContent(self, path, expected, msg=None):
        self.assertMatches(path, have_content(expected), msg)

    def assertHasEntries(self, path, expected: Iterable[str], msg=None):
        self.assertMatches(path, have_entries(expected), msg)


class FileSpecTestCase(
    FileSpecSetupMixin, FileHelpersMixin, FileAssertionsMixin, unittest.TestCase
):
    """
    A ``unittest.TestCase`` with file helpers, file assertions and a
    per-test temporary working directory.
    """


__all__ = [
    "FileAssertionsMixin",
    "FileHelpersMixin",
    "FileSpecSetupMixin",
    "FileSpecTestCase",
]
