# Copyright Red Hat
#
# filespec/__init__.py - File assertion helpers package initialisation
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Filespec top-level package.
"""
from ._filespec import *  # noqa: F401, F403
from ._filespec import __all__ as _filespec_all

from .helpers import mkdir, write, read, working_directory
from .fsdiff import ChangeRecorder, DiffOptions, diff, record_changes
from .matchers import (
    be_a_directory,
    be_a_file,
    be_executable,
    have_content,
    have_entries,
)
from .testcase import (
    FileAssertionsMixin,
    FileHelpersMixin,
    FileSpecSetupMixin,
    FileSpecTestCase,
)

__version__ = "0.1.0"

__all__ = _filespec_all + [
    "mkdir",
    "write",
    "read",
    "working_directory",
    "ChangeRecorder",
    "DiffOptions",
    "diff",
    "record_changes",
    "be_a_directory",
    "be_a_file",
    "be_executable",
    "have_content",
    "have_entries",
    "FileAssertionsMixin",
    "FileHelpersMixin",
    "FileSpecSetupMixin",
    "FileSpecTestCase",
]
