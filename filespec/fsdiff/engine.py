# Copyright Red Hat
#
# filespec/fsdiff/engine.py - File assertion helpers diff engine
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Unified diffs of two files or directory trees.
"""
from subprocess import run, PIPE, STDOUT
from typing import Any, Iterable, List, Optional, Union
import logging
import os
import re

from filespec import (
    FILESPEC_SUBSYSTEM_FSDIFF,
    FileSpecArgumentError,
    FileSpecCalloutError,
)

from .contentdiff import ContentDifferManager
from .filetypes import FileTypeDetector
from .options import DiffOptions, ENGINE_BUILTIN
from .treewalk import TreeWalker

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_fsdiff(msg, *args, **kwargs):
    """A wrapper for fsdiff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_FSDIFF}, **kwargs)


#: Per-file command banner written by ``diff --recursive``
_BANNER_RE = re.compile(r"^diff --unified.*\n", re.MULTILINE)

#: File header lines carrying a modification timestamp
_HEADER_TIMESTAMP_RE = re.compile(r"^([+-]{3})\s(.*)\t\d{4}-.*$", re.MULTILINE)

#: diff(1) exit status values below this are not errors
_DIFF_TROUBLE = 2

#: Execution options understood by the builtin engine
_BUILTIN_KWARGS = ("cwd",)

PathArg = Union[str, "os.PathLike[str]"]


def normalize_diff_output(output: str) -> str:
    """
    Remove the per-file command banners and header timestamps from diff
    output so that it does not depend on the time or the machine.

    :param output: Raw ``diff --unified`` output.
    :type output: ``str``
    :returns: The normalised diff text.
    :rtype: ``str``
    """
    output = _BANNER_RE.sub("", output)
    return _HEADER_TIMESTAMP_RE.sub(r"\1 \2", output)


def _diff_command(before: str, after: str, options: DiffOptions) -> List[str]:
    """
    Build the argument list for the external diff program.

    :param before: The original path.
    :param after: The updated path.
    :param options: The effective diff options.
    :returns: The command to run.
    :rtype: ``List[str]``
    """
    cmd = [options.diff_command, "--unified", "--new-file", "--recursive"]
    for pattern in options.effective_excludes():
        cmd += ["--exclude", pattern]
    cmd += [before, after]
    return cmd


def _external_diff(
    before: str, after: str, options: DiffOptions, **kwargs: Any
) -> str:
    """
    Compare ``before`` and ``after`` by calling out to diff(1).

    :param before: The original path.
    :param after: The updated path.
    :param options: The effective diff options.
    :param kwargs: Execution options passed through to ``subprocess.run``.
    :returns: The combined stdout/stderr text of the diff program.
    :rtype: ``str``
    """
    cmd = _diff_command(before, after, options)
    _log_debug_fsdiff("Calling %s", " ".join(cmd))
    try:
        result = run(
            cmd,
            stdout=PIPE,
            stderr=STDOUT,
            check=False,
            **kwargs,
        )
    except FileNotFoundError as err:
        raise FileSpecCalloutError(
            f"{options.diff_command} not found while comparing "
            f"'{before}' and '{after}': {err}"
        ) from err

    if result.returncode >= _DIFF_TROUBLE:
        _log_warn(
            "%s exited with status %d comparing '%s' and '%s'",
            options.diff_command,
            result.returncode,
            before,
            after,
        )
    else:
        _log_debug_fsdiff("%s exited with status %d", cmd[0], result.returncode)
    return (result.stdout or b"").decode("utf8", errors="surrogateescape")


def _builtin_diff(
    before: str, after: str, options: DiffOptions, **kwargs: Any
) -> str:
    """
    Compare ``before`` and ``after`` in-process.

    :param before: The original path.
    :param after: The updated path.
    :param options: The effective diff options.
    :param kwargs: Execution options (only ``cwd`` is supported).
    :returns: The diff text.
    :rtype: ``str``
    """
    unknown = sorted(set(kwargs) - set(_BUILTIN_KWARGS))
    if unknown:
        raise FileSpecArgumentError(
            f"Unsupported options for builtin diff engine: {', '.join(unknown)}"
        )
    cwd = kwargs.get("cwd")
    walker = TreeWalker(options)
    manager = ContentDifferManager(FileTypeDetector(options.use_magic_file_type))
    return "".join(
        manager.generate_content_diff(pair)
        for pair in walker.walk_pairs(before, after, cwd=os.fspath(cwd) if cwd else None)
    )


def diff(
    before: PathArg,
    after: PathArg,
    exclude: Iterable[str] = (),
    options: Optional[DiffOptions] = None,
    **kwargs: Any,
) -> str:
    """
    Return a unified diff of two files or directory trees.

    Files present on only one side are compared against an empty file.
    Entries whose base names match ``exclude`` or the default exclusion
    patterns are skipped at any depth. The diff program's exit status is
    not reported: an empty string means no differences were found.

    :param before: The original file or directory.
    :type before: ``str`` or ``os.PathLike``
    :param after: The updated file or directory.
    :type after: ``str`` or ``os.PathLike``
    :param exclude: Additional base name patterns to ignore.
    :type exclude: ``Iterable[str]``
    :param options: Diff options; defaults to ``DiffOptions()``.
    :type options: ``Optional[DiffOptions]``
    :param kwargs: Execution options, for example ``cwd``.
    :returns: The normalised unified diff text.
    :rtype: ``str``
    """
    options = (options or DiffOptions()).with_excludes(exclude)
    before = os.fspath(before)
    after = os.fspath(after)

    if options.engine == ENGINE_BUILTIN:
        output = _builtin_diff(before, after, options, **kwargs)
    else:
        output = _external_diff(before, after, options, **kwargs)

    return normalize_diff_output(output)


__all__ = [
    "diff",
    "normalize_diff_output",
]
