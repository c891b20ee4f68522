# Copyright Red Hat
#
# tests/fsdiff/test_treewalk.py - TreeWalker tests.
#
# This file is part of the filespec project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest

from filespec.fsdiff.options import DiffOptions
from filespec.fsdiff.treewalk import PairType, TreeWalker
from filespec.helpers import mkdir, write
from filespec.testcase import FileSpecSetupMixin


class TestTreeWalker(FileSpecSetupMixin, unittest.TestCase):
    def test_TreeWalker_excludes(self):
        walker = TreeWalker(DiffOptions(exclude_patterns=("*.tmp",)))
        self.assertEqual(walker.exclude_patterns[0], "*.tmp")
        self.assertIn(".git", walker.exclude_patterns)
        self.assertTrue(walker.is_excluded("x.tmp"))
        self.assertTrue(walker.is_excluded("node_modules"))
        self.assertFalse(walker.is_excluded("x.txt"))
        # Matching is case sensitive
        self.assertFalse(walker.is_excluded("X.LOG"))

    def test_walk_pairs_sorted_union(self):
        write("before/b.txt")
        write("before/a/x.txt")
        write("after/c.txt")
        write("after/a/x.txt")
        walker = TreeWalker(DiffOptions())
        pairs = list(walker.walk_pairs("before", "after"))
        self.assertEqual(
            [(p.old_name, p.new_name) for p in pairs],
            [
                ("before/a/x.txt", "after/a/x.txt"),
                ("before/b.txt", "after/b.txt"),
                ("before/c.txt", "after/c.txt"),
            ],
        )
        self.assertIsNone(pairs[1].new_path)
        self.assertIsNone(pairs[2].old_path)
        self.assertTrue(all(p.pair_type == PairType.FILES for p in pairs))

    def test_walk_pairs_excluded_directory(self):
        write("before/.git/HEAD")
        write("after/.git/HEAD", "x")
        write("after/keep.txt")
        walker = TreeWalker(DiffOptions())
        names = [p.old_name for p in walker.walk_pairs("before", "after")]
        self.assertEqual(names, ["before/keep.txt"])

    def test_walk_pairs_type_changed(self):
        mkdir("before/d")
        write("after/d")
        walker = TreeWalker(DiffOptions())
        (pair,) = walker.walk_pairs("before", "after")
        self.assertEqual(pair.pair_type, PairType.TYPE_CHANGED)
        self.assertEqual(pair.kinds, ("directory", "regular file"))

    def test_walk_pairs_file_against_directory(self):
        write("a.txt", "x")
        write("d/a.txt", "y")
        walker = TreeWalker(DiffOptions())
        (pair,) = walker.walk_pairs("a.txt", "d")
        self.assertEqual((pair.old_name, pair.new_name), ("a.txt", "d/a.txt"))

    def test_walk_pairs_directory_only_on_one_side(self):
        mkdir("before")
        write("after/sub/deep/f.txt")
        walker = TreeWalker(DiffOptions())
        (pair,) = walker.walk_pairs("before", "after")
        self.assertEqual(pair.old_name, "before/sub/deep/f.txt")
        self.assertIsNone(pair.old_path)

    def test_walk_pairs_cwd(self):
        write("root/before/f")
        write("root/after/f")
        walker = TreeWalker(DiffOptions())
        (pair,) = walker.walk_pairs("before", "after", cwd="root")
        self.assertEqual(pair.old_name, "before/f")
        self.assertTrue(pair.old_path.is_file())

    def test_walk_pairs_both_missing(self):
        walker = TreeWalker(DiffOptions())
        with self.assertRaises(FileNotFoundError):
            list(walker.walk_pairs("nothere", "nowhere"))
