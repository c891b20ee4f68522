# Copyright Red Hat
#
# filespec/fsdiff/treewalk.py - File assertion helpers tree walk
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tree walking support for the builtin diff engine.

Pairs up the entries of two file system trees in the order diff(1) visits
them, skipping excluded names and treating an entry missing from one side
as an empty file.
"""
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterator, Optional, Tuple
from pathlib import Path
from enum import Enum
import logging
import os

from filespec import FILESPEC_SUBSYSTEM_FSDIFF

from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_fsdiff(msg, *args, **kwargs):
    """A wrapper for fsdiff subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": FILESPEC_SUBSYSTEM_FSDIFF}, **kwargs)


class PairType(Enum):
    """
    Enum for the kinds of paired tree entries.
    """

    FILES = "files"
    TYPE_CHANGED = "type_changed"


_KIND_DIR = "directory"
_KIND_FILE = "regular file"


@dataclass(frozen=True)
class EntryPair:
    """
    A pair of corresponding entries from the two compared trees.
    """

    #: The kind of pairing
    pair_type: PairType
    #: Display name of the original entry
    old_name: str
    #: Display name of the updated entry
    new_name: str
    #: Resolved original path or ``None`` if missing
    old_path: Optional[Path]
    #: Resolved updated path or ``None`` if missing
    new_path: Optional[Path]
    #: File kind descriptions for ``TYPE_CHANGED`` pairs
    kinds: Tuple[str, str] = ("", "")


def _kind(path: Optional[Path]) -> Optional[str]:
    if path is None or not path.exists():
        return None
    return _KIND_DIR if path.is_dir() else _KIND_FILE


def _join(name: str, child: str) -> str:
    return f"{name}{child}" if name.endswith("/") else f"{name}/{child}"


class TreeWalker:
    """
    Walk two file system trees in parallel.
    """

    def __init__(self, options: DiffOptions):
        """
        Initialise a new ``TreeWalker``.

        :param options: Options controlling exclusion.
        :type options: ``DiffOptions``
        """
        self.exclude_patterns: Tuple[str, ...] = options.effective_excludes()

    def is_excluded(self, name: str) -> bool:
        """
        Return ``True`` if the base name ``name`` matches an exclusion
        pattern.

        :param name: The entry base name.
        :type name: ``str``
        :returns: ``True`` if excluded.
        :rtype: ``bool``
        """
        return any(fnmatchcase(name, pat) for pat in self.exclude_patterns)

    def walk_pairs(
        self, before: str, after: str, cwd: Optional[str] = None
    ) -> Iterator[EntryPair]:
        """
        Yield ``EntryPair`` objects for every file present in either
        ``before`` or ``after``, in sorted name order.

        :param before: The original file or directory.
        :type before: ``str``
        :param after: The updated file or directory.
        :type after: ``str``
        :param cwd: Directory against which relative paths are resolved.
        :type cwd: ``Optional[str]``
        :returns: An iterator over paired entries.
        :rtype: ``Iterator[EntryPair]``
        """
        base = Path(cwd) if cwd else Path()
        old_path = base / before
        new_path = base / after
        old_kind = _kind(old_path)
        new_kind = _kind(new_path)

        if old_kind is None and new_kind is None:
            raise FileNotFoundError(f"{before}: No such file or directory")

        # A file compared with a directory is compared with the file of the
        # same name inside that directory.
        if old_kind == _KIND_FILE and new_kind == _KIND_DIR:
            after = _join(after, old_path.name)
            new_path = new_path / old_path.name
        elif old_kind == _KIND_DIR and new_kind == _KIND_FILE:
            before = _join(before, new_path.name)
            old_path = old_path / new_path.name

        yield from self._walk(before, after, old_path, new_path)

    def _walk(
        self, old_name: str, new_name: str, old_path: Path, new_path: Path
    ) -> Iterator[EntryPair]:
        old_kind = _kind(old_path)
        new_kind = _kind(new_path)

        if old_kind is not None and new_kind is not None and old_kind != new_kind:
            yield EntryPair(
                PairType.TYPE_CHANGED,
                old_name,
                new_name,
                old_path,
                new_path,
                kinds=(old_kind, new_kind),
            )
            return

        if _KIND_DIR not in (old_kind, new_kind):
            yield EntryPair(
                PairType.FILES,
                old_name,
                new_name,
                old_path if old_kind else None,
                new_path if new_kind else None,
            )
            return

        names = set()
        for path, kind in ((old_path, old_kind), (new_path, new_kind)):
            if kind == _KIND_DIR:
                names.update(os.listdir(path))

        for name in sorted(names):
            if self.is_excluded(name):
                _log_debug_fsdiff("Excluding %s", _join(old_name, name))
                continue
            yield from self._walk(
                _join(old_name, name),
                _join(new_name, name),
                old_path / name,
                new_path / name,
            )


__all__ = [
    "EntryPair",
    "PairType",
    "TreeWalker",
]
