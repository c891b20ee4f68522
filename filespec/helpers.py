# Copyright Red Hat
#
# filespec/helpers.py - File assertion helpers filesystem helpers
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Helpers for creating, writing and reading test fixture files.
"""
from contextlib import contextmanager
from typing import Iterator, Union
import tempfile
import logging
import shutil
import os

from filespec import FILESPEC_SUBSYSTEM_HELPERS

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_helpers(msg, *args, **kwargs):
    """A wrapper for helpers subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_HELPERS}, **kwargs)


PathType = Union[str, "os.PathLike[str]"]


def mkdir(path: PathType):
    """
    Create the directory ``path`` and any missing parents. It is not an
    error if ``path`` already exists as a directory.

    :param path: The directory to create.
    :type path: ``str`` or ``os.PathLike``
    """
    if not os.fspath(path):
        return
    _log_debug_helpers("Creating directory %s", path)
    os.makedirs(path, exist_ok=True)


def write(path: PathType, content: Union[str, bytes] = ""):
    """
    Write ``content`` to the file at ``path``, creating parent directories
    as needed and replacing any existing content.

    :param path: The file to write.
    :type path: ``str`` or ``os.PathLike``
    :param content: The new file content. ``bytes`` values are written
                    verbatim.
    :type content: ``Union[str, bytes]``
    """
    mkdir(os.path.dirname(os.fspath(path)))
    _log_debug_helpers("Writing %d characters to %s", len(content), path)
    if isinstance(content, bytes):
        with open(path, "wb") as fp:
            fp.write(content)
    else:
        with open(path, "w", encoding="utf8", newline="") as fp:
            fp.write(content)


def read(path: PathType) -> str:
    """
    Return the full content of the file at ``path``.

    :param path: The file to read.
    :type path: ``str`` or ``os.PathLike``
    :returns: The file content.
    :rtype: ``str``
    """
    with open(path, "r", encoding="utf8", newline="") as fp:
        return fp.read()


@contextmanager
def working_directory(prefix: str = "filespec") -> Iterator[str]:
    """
    Run the body of a ``with`` statement inside a fresh, empty temporary
    directory. The previous working directory is restored and the
    temporary directory removed on exit, whether or not the body raised.

    :param prefix: Prefix for the temporary directory name.
    :type prefix: ``str``
    :returns: The path of the temporary working directory.
    :rtype: ``Iterator[str]``
    """
    tmp_dir = tempfile.mkdtemp(prefix=prefix)
    old_cwd = os.getcwd()
    _log_debug_helpers("Entering working directory %s", tmp_dir)
    try:
        os.chdir(tmp_dir)
        yield tmp_dir
    finally:
        os.chdir(old_cwd)
        shutil.rmtree(tmp_dir, ignore_errors=True)
        _log_debug_helpers("Removed working directory %s", tmp_dir)


__all__ = [
    "mkdir",
    "write",
    "read",
    "working_directory",
]
