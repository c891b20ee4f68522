# Copyright Red Hat
#
# filespec/fsdiff/filetypes.py - File assertion helpers file type detection
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Text/binary file type detection for the builtin diff engine.
"""
from pathlib import Path
from typing import Optional
import logging

from filespec import FILESPEC_SUBSYSTEM_FSDIFF

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_fsdiff(msg, *args, **kwargs):
    """A wrapper for fsdiff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_FSDIFF}, **kwargs)


#: Number of leading bytes inspected when sniffing for binary content.
_SNIFF_SIZE = 8192

_MIME_EMPTY = "inode/x-empty"
_MIME_TEXT = "text/plain"
_MIME_BINARY = "application/octet-stream"


class FileTypeInfo:
    """
    File type information for a single file.
    """

    def __init__(
        self,
        mime_type: str,
        description: str,
        encoding: Optional[str] = None,
    ):
        """
        Initialise a new ``FileTypeInfo`` object.

        :param mime_type: The detected MIME type.
        :type mime_type: ``str``
        :param description: A human readable description of the type.
        :type description: ``str``
        :param encoding: The detected character encoding, or "binary".
        :type encoding: ``Optional[str]``
        """
        self.mime_type = mime_type
        self.description = description
        self.encoding = encoding

    def __str__(self):
        return (
            f"MIME type: {self.mime_type}, "
            f"Description: {self.description}, "
            f"Encoding: {self.encoding if self.encoding else 'unknown'}"
        )

    @property
    def is_binary(self) -> bool:
        """
        Return ``True`` if this file should be compared as binary data.

        :returns: ``True`` for binary content or ``False`` otherwise.
        :rtype: ``bool``
        """
        if self.mime_type == _MIME_EMPTY or self.mime_type.startswith("text/"):
            return False
        return self.encoding == "binary" or self.encoding is None


def _detect_with_magic(file_path: Path) -> FileTypeInfo:
    """
    Detect the type of ``file_path`` using libmagic.

    :param file_path: The path to the file to inspect.
    :type file_path: ``Path``
    :returns: File type information for ``file_path``.
    :rtype: ``FileTypeInfo``
    """
    # libmagic is only loaded when requested.
    import magic  # pylint: disable=import-outside-toplevel

    # Older file-magic builds do not have magic.error
    if hasattr(magic, "error"):
        magic_errors = (magic.error, OSError, ValueError)
    else:
        magic_errors = (OSError, ValueError)

    try:
        fm = magic.detect_from_filename(str(file_path))
        return FileTypeInfo(fm.mime_type, fm.name, fm.encoding)
    except magic_errors as err:
        _log_warn("Error detecting file type for %s: %s", str(file_path), err)
        return FileTypeInfo(_MIME_BINARY, "unknown", "binary")


def _guess_file_type(file_path: Path) -> FileTypeInfo:
    """
    Guess the type of ``file_path`` by looking for NUL bytes in the first
    block of the file, as diff(1) does.

    :param file_path: The path to the file to inspect.
    :type file_path: ``Path``
    :returns: File type information for ``file_path``.
    :rtype: ``FileTypeInfo``
    """
    with open(file_path, "rb") as fp:
        head = fp.read(_SNIFF_SIZE)
    if not head:
        return FileTypeInfo(_MIME_EMPTY, "empty", "binary")
    if b"\0" in head:
        return FileTypeInfo(_MIME_BINARY, "data", "binary")
    return FileTypeInfo(_MIME_TEXT, "text", "utf-8")


class FileTypeDetector:
    """
    Detect whether files hold text or binary content.
    """

    def __init__(self, use_magic: bool = False):
        """
        Initialise a new ``FileTypeDetector``.

        :param use_magic: Use libmagic rather than content sniffing.
        :type use_magic: ``bool``
        """
        self.use_magic = use_magic

    def detect_file_type(self, file_path: Path) -> FileTypeInfo:
        """
        Detect file type information for ``file_path``.

        :param file_path: The path to the file to inspect.
        :type file_path: ``Path``.
        :returns: File type information for ``file_path``.
        :rtype: ``FileTypeInfo``
        """
        if self.use_magic:
            info = _detect_with_magic(file_path)
        else:
            info = _guess_file_type(file_path)
        _log_debug_fsdiff("Detected file type for %s: %s", file_path, info)
        return info

    def is_binary(self, file_path: Optional[Path]) -> bool:
        """
        Return ``True`` if ``file_path`` exists and holds binary content.

        :param file_path: The path to test, or ``None`` for a missing file.
        :type file_path: ``Optional[Path]``
        :returns: ``True`` if the file is binary.
        :rtype: ``bool``
        """
        if file_path is None or not file_path.is_file():
            return False
        return self.detect_file_type(file_path).is_binary


__all__ = [
    "FileTypeDetector",
    "FileTypeInfo",
]
