# Copyright Red Hat
#
# tests/fsdiff/__init__.py - fs diff test package
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
