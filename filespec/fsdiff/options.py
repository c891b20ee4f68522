# Copyright Red Hat
#
# filespec/fsdiff/options.py - File assertion helpers diff options
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
File system diff options.
"""
from dataclasses import dataclass, field, replace
from typing import Iterable, Tuple
import logging

from filespec import FileSpecArgumentError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Paths excluded from every comparison unless ``use_default_excludes`` is
#: disabled: VCS metadata, OS metadata, dependency trees, build products,
#: lock and log files.
DEFAULT_EXCLUDE_PATTERNS = (
    ".git",
    ".svn",
    ".venv",
    ".DS_Store",
    "node_modules",
    "*.o",
    "*.pyc",
    "*.class",
    "*.lock",
    "*.log",
)

#: Shell out to a GNU compatible ``diff`` program.
ENGINE_EXTERNAL = "external"
#: Compare in-process. Output follows diff(1) format but may align
#: ambiguous edits differently, so it is not byte-identical to external.
ENGINE_BUILTIN = "builtin"

DIFF_ENGINES = (ENGINE_EXTERNAL, ENGINE_BUILTIN)


@dataclass(frozen=True)
class DiffOptions:
    """
    File system comparison options.
    """

    #: Additional basename patterns to exclude (glob notation)
    exclude_patterns: Tuple[str, ...] = field(default_factory=tuple)
    #: Also exclude ``DEFAULT_EXCLUDE_PATTERNS``
    use_default_excludes: bool = True
    #: Comparison engine: "external" or "builtin". Builtin output is not
    #: guaranteed to be byte-identical to external output for ambiguous edits.
    engine: str = ENGINE_EXTERNAL
    #: Program to run for the external engine
    diff_command: str = "diff"
    #: Detect binary files using libmagic in the builtin engine
    use_magic_file_type: bool = False

    def __post_init__(self):
        if self.engine not in DIFF_ENGINES:
            raise FileSpecArgumentError(
                f"Unknown diff engine '{self.engine}' "
                f"(expected one of: {', '.join(DIFF_ENGINES)})"
            )
        if not isinstance(self.exclude_patterns, tuple):
            object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))

    def __str__(self):
        """
        Return a human readable string representation of this
        ``DiffOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        items = [
            (key, val) if not isinstance(val, tuple) else (key, " ".join(val))
            for key, val in self.__dict__.items()
        ]
        return "\n".join(f"{key}={val}" for key, val in items)

    def effective_excludes(self) -> Tuple[str, ...]:
        """
        Return the ordered exclusion patterns to apply to a comparison:
        caller supplied patterns first, followed by the defaults.

        :returns: The merged exclusion patterns.
        :rtype: ``Tuple[str, ...]``
        """
        if not self.use_default_excludes:
            return self.exclude_patterns
        return self.exclude_patterns + DEFAULT_EXCLUDE_PATTERNS

    def with_excludes(self, patterns: Iterable[str]) -> "DiffOptions":
        """
        Return a copy of these options with ``patterns`` placed in front of
        the existing exclusion patterns.

        :param patterns: Extra patterns to exclude.
        :type patterns: ``Iterable[str]``
        :returns: A new ``DiffOptions`` instance.
        :rtype: ``DiffOptions``
        """
        patterns = tuple(patterns)
        if not patterns:
            return self
        options = replace(self, exclude_patterns=patterns + self.exclude_patterns)
        _log_debug("Extended DiffOptions excludes: %s", repr(options))
        return options


__all__ = [
    "DEFAULT_EXCLUDE_PATTERNS",
    "DIFF_ENGINES",
    "ENGINE_BUILTIN",
    "ENGINE_EXTERNAL",
    "DiffOptions",
]
