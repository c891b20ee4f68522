# Copyright Red Hat
#
# filespec/matchers.py - File assertion helpers matchers
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Predicates and matcher objects for making assertions about files.

Each predicate is a plain function checking the file system at the time it
is called. Matchers wrap a predicate together with the descriptions used
to build assertion failure messages.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging
import difflib
import re
import os

from filespec import FILESPEC_SUBSYSTEM_MATCHERS
from filespec.helpers import read

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_matchers(msg, *args, **kwargs):
    """A wrapper for matchers subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_MATCHERS}, **kwargs)


PathArg = Union[str, "os.PathLike[str]"]
ContentExpectation = Union[str, "re.Pattern[str]"]


def is_file(path: PathArg) -> bool:
    """Return ``True`` if ``path`` exists and is a regular file."""
    return os.path.isfile(path)


def is_directory(path: PathArg) -> bool:
    """Return ``True`` if ``path`` exists and is a directory."""
    return os.path.isdir(path)


def is_executable(path: PathArg) -> bool:
    """Return ``True`` if ``path`` exists and is executable by this process."""
    return os.path.exists(path) and os.access(path, os.X_OK)


def content_matches(content: str, expected: ContentExpectation) -> bool:
    """
    Return ``True`` if ``content`` equals ``expected``, or, if ``expected``
    is a compiled regular expression, if it matches anywhere in
    ``content``.
    """
    if isinstance(expected, re.Pattern):
        return expected.search(content) is not None
    return content == expected


def has_content(path: PathArg, expected: ContentExpectation) -> bool:
    """
    Return ``True`` if the content of the file at ``path`` matches
    ``expected``. Errors reading the file propagate to the caller.
    """
    return content_matches(read(path), expected)


def list_entries(path: PathArg) -> List[str]:
    """
    Return the sorted relative paths of all regular files below ``path``,
    including hidden files, using ``/`` as the separator.

    :param path: The directory to list.
    :type path: ``str`` or ``os.PathLike``
    :returns: A sorted list of relative file paths.
    :rtype: ``List[str]``
    """
    root = Path(path)
    entries = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            full_path = Path(dirpath) / name
            if full_path.is_file():
                entries.append(full_path.relative_to(root).as_posix())
    return sorted(entries)


def has_entries(path: PathArg, expected: Iterable[str]) -> bool:
    """
    Return ``True`` if the files below ``path`` are exactly ``expected``,
    in any order.
    """
    return list_entries(path) == sorted(expected)


def _describe(value) -> str:
    if isinstance(value, (str, bytes)):
        return repr(value)
    if isinstance(value, os.PathLike):
        return repr(os.fspath(value))
    return repr(value)


class FileMatcher(ABC):
    """
    Base class for file matchers.
    """

    @abstractmethod
    def matches(self, actual: PathArg) -> bool:
        """
        Return ``True`` if ``actual`` satisfies this matcher.

        :param actual: The path under test.
        :type actual: ``str`` or ``os.PathLike``
        :returns: ``True`` on a match.
        :rtype: ``bool``
        """

    @property
    @abstractmethod
    def description(self) -> str:
        """
        A short description of the expectation, e.g. "be a file".

        :rtype: ``str``
        """

    def describe_actual(self, actual: PathArg) -> str:
        """
        Describe the value under test for failure messages.

        :param actual: The path under test.
        :returns: A printable description.
        :rtype: ``str``
        """
        return _describe(actual)

    def failure_message(self, actual: PathArg) -> str:
        """
        Return the message for a failed positive expectation.

        :param actual: The path under test.
        :rtype: ``str``
        """
        return f"expected {self.describe_actual(actual)} to {self.description}"

    def failure_message_when_negated(self, actual: PathArg) -> str:
        """
        Return the message for a failed negative expectation.

        :param actual: The path under test.
        :rtype: ``str``
        """
        return f"expected {self.describe_actual(actual)} not to {self.description}"

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self.description}>"


class BeAFile(FileMatcher):
    """Match paths that are regular files."""

    def matches(self, actual: PathArg) -> bool:
        return is_file(actual)

    @property
    def description(self) -> str:
        return "be a file"


class BeADirectory(FileMatcher):
    """Match paths that are directories."""

    def matches(self, actual: PathArg) -> bool:
        return is_directory(actual)

    @property
    def description(self) -> str:
        return "be a directory"


class BeExecutable(FileMatcher):
    """Match paths that are executable."""

    def matches(self, actual: PathArg) -> bool:
        return is_executable(actual)

    @property
    def description(self) -> str:
        return "be executable"


class HaveContent(FileMatcher):
    """
    Match files whose content equals a string or matches a compiled
    regular expression.
    """

    def __init__(self, expected: ContentExpectation):
        self.expected = expected
        self.actual_content: Optional[str] = None

    def matches(self, actual: PathArg) -> bool:
        self.actual_content = read(actual)
        matched = content_matches(self.actual_content, self.expected)
        _log_debug_matchers("Content of %s matches %r: %s", actual, self.expected, matched)
        return matched

    @property
    def description(self) -> str:
        return f"have content: {_describe(self.expected)}"

    def describe_actual(self, actual: PathArg) -> str:
        if self.actual_content is None:
            self.actual_content = read(actual)
        return _describe(self.actual_content)

    def failure_message(self, actual: PathArg) -> str:
        message = super().failure_message(actual)
        if not isinstance(self.expected, str):
            return message
        diff_lines = difflib.unified_diff(
            self.expected.splitlines(),
            self.actual_content.splitlines(),
            fromfile="expected",
            tofile="actual",
            lineterm="",
        )
        return message + "\nDiff:\n" + "\n".join(diff_lines)


class HaveEntries(FileMatcher):
    """
    Match directories containing exactly the given relative file paths.
    """

    def __init__(self, expected: Iterable[str]):
        self.expected = sorted(expected)
        self.actual_entries: Optional[List[str]] = None

    def matches(self, actual: PathArg) -> bool:
        self.actual_entries = list_entries(actual)
        _log_debug_matchers("Entries of %s: %s", actual, self.actual_entries)
        return self.actual_entries == self.expected

    @property
    def description(self) -> str:
        return f"contain files: {self.expected!r}"

    def failure_message(self, actual: PathArg) -> str:
        if self.actual_entries is None:
            self.actual_entries = list_entries(actual)
        return (
            super().failure_message(actual)
            + f"\n  actual files: {self.actual_entries!r}"
        )


def be_a_file() -> BeAFile:
    """Return a matcher for regular files."""
    return BeAFile()


def be_a_directory() -> BeADirectory:
    """Return a matcher for directories."""
    return BeADirectory()


def be_executable() -> BeExecutable:
    """Return a matcher for executable paths."""
    return BeExecutable()


def have_content(expected: ContentExpectation) -> HaveContent:
    """
    Return a matcher for file content.

    :param expected: The exact content, or a compiled regular expression.
    :type expected: ``Union[str, re.Pattern]``
    :returns: A new ``HaveContent`` matcher.
    :rtype: ``HaveContent``
    """
    return HaveContent(expected)


def have_entries(expected: Iterable[str]) -> HaveEntries:
    """
    Return a matcher for the set of files below a directory.

    :param expected: Relative file paths, in any order.
    :type expected: ``Iterable[str]``
    :returns: A new ``HaveEntries`` matcher.
    :rtype: ``HaveEntries``
    """
    return HaveEntries(expected)


__all__ = [
    "BeADirectory",
    "BeAFile",
    "BeExecutable",
    "FileMatcher",
    "HaveContent",
    "HaveEntries",
    "be_a_directory",
    "be_a_file",
    "be_executable",
    "content_matches",
    "has_content",
    "has_entries",
    "have_content",
    "have_entries",
    "is_directory",
    "is_executable",
    "is_file",
    "list_entries",
]
