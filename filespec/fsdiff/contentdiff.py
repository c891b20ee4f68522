# Copyright Red Hat
#
# filespec/fsdiff/contentdiff.py - File assertion helpers content diffs
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Content diff support for the builtin diff engine.

Output follows the format of ``diff --unified --new-file`` with header
timestamps already removed.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional
import logging
import difflib

from filespec import FILESPEC_SUBSYSTEM_FSDIFF

from .filetypes import FileTypeDetector
from .treewalk import EntryPair, PairType

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_fsdiff(msg, *args, **kwargs):
    """A wrapper for fsdiff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_FSDIFF}, **kwargs)


#: Lines of context around each change
CONTEXT_LINES = 3

NO_NEWLINE_MARKER = "\\ No newline at end of file\n"


def _read_bytes(path: Optional[Path]) -> bytes:
    if path is None:
        return b""
    with open(path, "rb") as fp:
        return fp.read()


def _split_lines(text: str) -> List[str]:
    """
    Split ``text`` on newlines only, keeping line endings. A final line
    without a newline is kept as-is.

    :param text: The text to split.
    :type text: ``str``
    :returns: A list of lines.
    :rtype: ``List[str]``
    """
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _format_range(start: int, length: int) -> str:
    """
    Format a unified diff hunk range: a single line is written without a
    count and an empty range refers to the line before it.

    :param start: Zero-based index of the first line.
    :type start: ``int``
    :param length: Number of lines in the range.
    :type length: ``int``
    :returns: The formatted range.
    :rtype: ``str``
    """
    beginning = start + 1
    if not length:
        beginning -= 1
    if length == 1:
        return f"{beginning}"
    return f"{beginning},{length}"


def _emit(prefix: str, line: str) -> str:
    if line.endswith("\n"):
        return prefix + line
    return prefix + line + "\n" + NO_NEWLINE_MARKER


class ContentDifferBase(ABC):
    """
    Base class for content diff implementations.
    """

    @abstractmethod
    def generate_diff(
        self, pair: EntryPair, old_data: bytes, new_data: bytes
    ) -> str:
        """
        Generate the diff text for ``pair``.

        :param pair: The entries being compared.
        :type pair: ``EntryPair``
        :param old_data: Content of the original entry.
        :type old_data: ``bytes``
        :param new_data: Content of the updated entry.
        :type new_data: ``bytes``
        :returns: Diff text, or the empty string if there are no changes.
        :rtype: ``str``
        """


class TextContentDiffer(ContentDifferBase):
    """
    Unified diff of text files.
    """

    def __init__(self, context: int = CONTEXT_LINES):
        self.context = context

    def generate_diff(
        self, pair: EntryPair, old_data: bytes, new_data: bytes
    ) -> str:
        old_lines = _split_lines(old_data.decode("utf8", errors="surrogateescape"))
        new_lines = _split_lines(new_data.decode("utf8", errors="surrogateescape"))

        matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
        hunks = []
        for group in matcher.get_grouped_opcodes(self.context):
            first, last = group[0], group[-1]
            old_range = _format_range(first[1], last[2] - first[1])
            new_range = _format_range(first[3], last[4] - first[3])
            hunk = [f"@@ -{old_range} +{new_range} @@\n"]
            for tag, i1, i2, j1, j2 in group:
                if tag == "equal":
                    hunk.extend(_emit(" ", line) for line in old_lines[i1:i2])
                    continue
                if tag in ("replace", "delete"):
                    hunk.extend(_emit("-", line) for line in old_lines[i1:i2])
                if tag in ("replace", "insert"):
                    hunk.extend(_emit("+", line) for line in new_lines[j1:j2])
            hunks.append("".join(hunk))

        if not hunks:
            return ""
        _log_debug_fsdiff(
            "Generated %d hunks for %s / %s", len(hunks), pair.old_name, pair.new_name
        )
        return f"--- {pair.old_name}\n+++ {pair.new_name}\n" + "".join(hunks)


class BinaryContentDiffer(ContentDifferBase):
    """
    Report differing binary files.
    """

    def generate_diff(
        self, pair: EntryPair, old_data: bytes, new_data: bytes
    ) -> str:
        if old_data == new_data:
            return ""
        return f"Binary files {pair.old_name} and {pair.new_name} differ\n"


class ContentDifferManager:
    """
    Select and run the content differ for each paired entry.
    """

    def __init__(self, detector: Optional[FileTypeDetector] = None):
        """
        Initialise a new ``ContentDifferManager``.

        :param detector: The file type detector to use.
        :type detector: ``Optional[FileTypeDetector]``
        """
        self.detector = detector or FileTypeDetector()
        self.text_differ = TextContentDiffer()
        self.binary_differ = BinaryContentDiffer()

    def generate_content_diff(self, pair: EntryPair) -> str:
        """
        Generate the diff text for one ``EntryPair``.

        :param pair: The entries to compare.
        :type pair: ``EntryPair``
        :returns: Diff text, or the empty string if the entries match.
        :rtype: ``str``
        """
        if pair.pair_type == PairType.TYPE_CHANGED:
            old_kind, new_kind = pair.kinds
            return (
                f"File {pair.old_name} is a {old_kind} "
                f"while file {pair.new_name} is a {new_kind}\n"
            )

        old_data = _read_bytes(pair.old_path)
        new_data = _read_bytes(pair.new_path)
        if old_data == new_data:
            return ""

        if self.detector.is_binary(pair.old_path) or self.detector.is_binary(
            pair.new_path
        ):
            return self.binary_differ.generate_diff(pair, old_data, new_data)
        return self.text_differ.generate_diff(pair, old_data, new_data)


__all__ = [
    "BinaryContentDiffer",
    "ContentDifferBase",
    "ContentDifferManager",
    "TextContentDiffer",
]
