"""Tests for the repeat matcher."""

import unittest

from doubletap.key_utils import canonicalize
from doubletap.keys import CTRL_X_SUBMAPS, PREFIX_STROKES, CtrlC, CtrlH, CtrlX
from doubletap.matchers import is_repeat, repeat_suffix


class IsRepeatTests(unittest.TestCase):
    """A second press is compared against what the user actually re-types."""

    def test_single_stroke_requires_exact_match(self):
        """Bare keys repeat only themselves."""
        self.assertTrue(is_repeat(("f2",), ("f2",)))
        self.assertFalse(is_repeat(("f2",), ("f3",)))
        self.assertFalse(is_repeat(("x",), ("X",)))

    def test_well_known_prefix_only_needs_last_stroke(self):
        """C-x . is repeated by a bare '.'."""
        trigger = canonicalize("C-x .")

        self.assertTrue(is_repeat(trigger, (".",)))
        self.assertFalse(is_repeat(trigger, ("x",)))
        self.assertFalse(is_repeat(trigger, ("C-x",)))

    def test_every_well_known_prefix(self):
        """C-c and C-h behave like C-x."""
        self.assertEqual(PREFIX_STROKES, {CtrlX, CtrlC, CtrlH})
        for prefix in PREFIX_STROKES:
            with self.subTest(prefix=prefix):
                self.assertTrue(is_repeat((prefix, "k"), ("k",)))

    def test_unknown_two_stroke_prefix_needs_full_sequence(self):
        """Prefixes outside the known set are compared in full."""
        trigger = canonicalize("M-g g")

        self.assertFalse(is_repeat(trigger, ("g",)))
        self.assertTrue(is_repeat(trigger, ("M-g", "g")))

    def test_known_second_level_tables(self):
        """C-x 4, 5, 6, v and RET are entry points of nested tables."""
        self.assertEqual(set(CTRL_X_SUBMAPS), {"4", "5", "6", "v", "enter"})
        for second in ["4", "5", "6", "v", "RET"]:
            with self.subTest(second=second):
                trigger = canonicalize(f"C-x {second} b")
                self.assertTrue(is_repeat(trigger, ("b",)))
                self.assertFalse(is_repeat(trigger, ("c",)))

    def test_unknown_three_stroke_prefix_never_matches(self):
        """Three-stroke keys outside the known tables cannot be resolved."""
        trigger = canonicalize("C-x 8 e")

        self.assertIsNone(repeat_suffix(trigger))
        self.assertFalse(is_repeat(trigger, ("e",)))
        self.assertFalse(is_repeat(trigger, trigger))

        self.assertFalse(is_repeat(canonicalize("C-c 4 b"), ("b",)))

    def test_longer_sequences_use_exact_equality(self):
        """Four or more strokes compare as whole sequences."""
        trigger = canonicalize("C-x 4 C-o x")

        self.assertTrue(is_repeat(trigger, trigger))
        self.assertFalse(is_repeat(trigger, ("x",)))

    def test_accepts_lists(self):
        """Sequences of any type compare by content."""
        self.assertTrue(is_repeat(["C-x", "."], ["."]))


if __name__ == "__main__":
    unittest.main()
