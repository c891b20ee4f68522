# Copyright Red Hat
#
# filespec/_filespec.py - File assertion helpers global definitions
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level filespec package.
"""
import logging

_log = logging.getLogger("filespec")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Filespec debugging subsystem mask
FILESPEC_DEBUG_HELPERS = 1
FILESPEC_DEBUG_FSDIFF = 2
FILESPEC_DEBUG_MATCHERS = 4
FILESPEC_DEBUG_ALL = (
    FILESPEC_DEBUG_HELPERS | FILESPEC_DEBUG_FSDIFF | FILESPEC_DEBUG_MATCHERS
)

# Filespec debugging subsystem names
FILESPEC_SUBSYSTEM_HELPERS = "filespec.helpers"
FILESPEC_SUBSYSTEM_FSDIFF = "filespec.fsdiff"
FILESPEC_SUBSYSTEM_MATCHERS = "filespec.matchers"

_DEBUG_MASK_TO_SUBSYSTEM = {
    FILESPEC_DEBUG_HELPERS: FILESPEC_SUBSYSTEM_HELPERS,
    FILESPEC_DEBUG_FSDIFF: FILESPEC_SUBSYSTEM_FSDIFF,
    FILESPEC_DEBUG_MATCHERS: FILESPEC_SUBSYSTEM_MATCHERS,
}

_debug_subsystems = set()


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        if record.levelno != logging.DEBUG:
            return True

        if not hasattr(record, "subsystem"):
            return True

        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``filespec`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    filespec_log = logging.getLogger("filespec")

    for handler in filespec_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``filespec`` package.

    :param mask: the logical OR of the ``FILESPEC_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > FILESPEC_DEBUG_ALL:
        raise ValueError(f"Invalid filespec debug mask: {mask}")

    enabled_subsystems = []
    for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items():
        if mask & flag:
            enabled_subsystems.append(subsystem_name)

    filespec_log = logging.getLogger("filespec")
    for handler in filespec_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)


#
# Filespec exception types
#


class FileSpecError(Exception):
    """
    Base class for filespec errors.
    """


class FileSpecCalloutError(FileSpecError):
    """
    An error calling out to an external program.
    """


class FileSpecArgumentError(FileSpecError):
    """
    An invalid argument was passed to a filespec API call.
    """


__all__ = [
    "FILESPEC_DEBUG_HELPERS",
    "FILESPEC_DEBUG_FSDIFF",
    "FILESPEC_DEBUG_MATCHERS",
    "FILESPEC_DEBUG_ALL",
    # Debug logging - subsystem name interface
    "SubsystemFilter",
    "FILESPEC_SUBSYSTEM_HELPERS",
    "FILESPEC_SUBSYSTEM_FSDIFF",
    "FILESPEC_SUBSYSTEM_MATCHERS",
    # Debug logging - mask interface
    "set_debug_mask",
    "get_debug_mask",
    "FileSpecError",
    "FileSpecCalloutError",
    "FileSpecArgumentError",
]
