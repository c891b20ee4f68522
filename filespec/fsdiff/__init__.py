# Copyright Red Hat
#
# filespec/fsdiff/__init__.py - File assertion helpers fs diff package
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
File system diff package.

Provides unified diffs of files and directory trees and recording of the
changes made to a path by an action. The main entry points are ``diff``,
``record_changes`` and ``DiffOptions``.
"""
from .engine import diff, normalize_diff_output
from .options import DEFAULT_EXCLUDE_PATTERNS, DiffOptions
from .recorder import ChangeRecorder, record_changes

__all__ = [
    "DEFAULT_EXCLUDE_PATTERNS",
    "ChangeRecorder",
    "DiffOptions",
    "diff",
    "normalize_diff_output",
    "record_changes",
]
