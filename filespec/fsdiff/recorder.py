# Copyright Red Hat
#
# filespec/fsdiff/recorder.py - File assertion helpers change recorder
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Record the changes an action makes to a file or directory.
"""
from typing import Any, Callable, Iterable, Optional
import tempfile
import logging
import shutil
import os
import re

from filespec import FILESPEC_SUBSYSTEM_FSDIFF, FileSpecArgumentError
from filespec.helpers import mkdir

from .engine import diff, PathArg
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_fsdiff(msg, *args, **kwargs):
    """A wrapper for fsdiff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_FSDIFF}, **kwargs)


#: Snapshot directory names inside the scratch root
BEFORE = "before"
AFTER = "after"


def _relative_names(output: str, prefix: str) -> str:
    """
    Rewrite snapshot paths in diff output as ``a/``/``b/`` names relative
    to the recorded path.

    :param output: Diff text comparing ``before`` with ``after``.
    :type output: ``str``
    :param prefix: The snapshot path prefix to replace, including the
                   recorded directory name for directory snapshots.
    :type prefix: ``str``
    :returns: The rewritten diff text.
    :rtype: ``str``
    """
    old = re.escape(f"{BEFORE}/{prefix}")
    new = re.escape(f"{AFTER}/{prefix}")
    rewrites = (
        (re.compile(rf"^--- {old}", re.MULTILINE), "--- a/"),
        (re.compile(rf"^\+\+\+ {new}", re.MULTILINE), "+++ b/"),
        (
            re.compile(rf"^Binary files {old}(.*) and {new}(.*) differ$", re.MULTILINE),
            r"Binary files a/\1 and b/\2 differ",
        ),
        (
            re.compile(rf"^File {old}(.*) is a (.*) while file {new}(.*) is a ", re.MULTILINE),
            r"File a/\1 is a \2 while file b/\3 is a ",
        ),
    )
    for regex, repl in rewrites:
        output = regex.sub(repl, output)
    return output


class ChangeRecorder:
    """
    Context manager recording the changes made to ``path`` by the body of
    a ``with`` statement.

    On entry a copy of ``path`` is taken into a private scratch directory.
    On a normal exit a second copy is taken and the diff between the two
    is stored in ``diff``. The scratch directory is always removed and
    exceptions raised by the body propagate unchanged.
    """

    def __init__(
        self,
        path: PathArg,
        exclude: Iterable[str] = (),
        options: Optional[DiffOptions] = None,
        **kwargs: Any,
    ):
        """
        Initialise a new ``ChangeRecorder``.

        :param path: The file or directory to observe.
        :type path: ``str`` or ``os.PathLike``
        :param exclude: Additional base name patterns to ignore.
        :type exclude: ``Iterable[str]``
        :param options: Diff options; defaults to ``DiffOptions()``.
        :type options: ``Optional[DiffOptions]``
        :param kwargs: Additional execution options passed to ``diff()``.
        """
        if "cwd" in kwargs:
            raise FileSpecArgumentError(
                "ChangeRecorder always runs diff in its scratch directory"
            )
        self.path = os.fspath(path)
        self.exclude = tuple(exclude)
        self.options = options
        self.kwargs = kwargs
        self.basename = os.path.basename(os.path.abspath(self.path))
        self.is_dir = False
        self.diff: Optional[str] = None
        self._scratch: Optional[str] = None

    def _snapshot_path(self, side: str) -> str:
        return os.path.join(self._scratch, side, self.basename)

    def _snapshot(self, side: str):
        dest = self._snapshot_path(side)
        _log_debug_fsdiff("Copying %s to %s", self.path, dest)
        if os.path.isdir(self.path):
            shutil.copytree(self.path, dest, symlinks=True)
        else:
            shutil.copy2(self.path, dest)

    def _release(self):
        if self._scratch is not None:
            shutil.rmtree(self._scratch, ignore_errors=True)
            _log_debug_fsdiff("Removed scratch directory %s", self._scratch)
            self._scratch = None

    def __enter__(self) -> "ChangeRecorder":
        self.diff = None
        self._scratch = tempfile.mkdtemp(prefix="filespec")
        try:
            self.is_dir = os.path.isdir(self.path)
            if not self.is_dir:
                mkdir(os.path.dirname(self._snapshot_path(BEFORE)))
                mkdir(os.path.dirname(self._snapshot_path(AFTER)))
            self._snapshot(BEFORE)
        except BaseException:
            self._release()
            raise
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        try:
            if exc_type is None:
                self._snapshot(AFTER)
                output = diff(
                    BEFORE,
                    AFTER,
                    exclude=self.exclude,
                    options=self.options,
                    cwd=self._scratch,
                    **self.kwargs,
                )
                prefix = f"{self.basename}/" if self.is_dir else ""
                self.diff = _relative_names(output, prefix)
        finally:
            self._release()
        return False


def record_changes(
    path: PathArg,
    action: Callable[[], Any],
    exclude: Iterable[str] = (),
    options: Optional[DiffOptions] = None,
    **kwargs: Any,
) -> str:
    """
    Run ``action`` and return a unified diff of the changes it made to
    ``path``.

    File names in the diff headers are relative to ``path`` and prefixed
    with ``a/`` and ``b/``. If ``action`` raises, no diff is computed and
    the exception propagates unchanged.

    :param path: The file or directory to observe.
    :type path: ``str`` or ``os.PathLike``
    :param action: A callable taking no arguments.
    :type action: ``Callable[[], Any]``
    :param exclude: Additional base name patterns to ignore.
    :type exclude: ``Iterable[str]``
    :param options: Diff options; defaults to ``DiffOptions()``.
    :type options: ``Optional[DiffOptions]``
    :param kwargs: Additional execution options passed to ``diff()``.
    :returns: The diff text.
    :rtype: ``str``
    """
    with ChangeRecorder(path, exclude=exclude, options=options, **kwargs) as recorder:
        action()
    return recorder.diff


__all__ = [
    "ChangeRecorder",
    "record_changes",
]
