import unittest

from changeloggy.grouping.commit_types import (
    COMMIT_TYPES,
    INTERNAL_TYPES,
    RENDER_ORDER,
    is_internal,
    is_known_type,
    type_label,
)
from changeloggy.grouping.group_model import ParsedCommit


class TestParsedCommit(unittest.TestCase):
    def test_summary_omits_body_and_type(self) -> None:
        commit = ParsedCommit(
            hash="abc1234",
            description="add widget",
            body="long body",
            author="Alice",
            date="2024-01-01",
            type="feat",
            scope="ui",
            breaking="Breaking change",
        )
        self.assertEqual(
            commit.to_summary(),
            {
                "hash": "abc1234",
                "description": "add widget",
                "scope": "ui",
                "author": "Alice",
                "date": "2024-01-01",
            },
        )
        self.assertTrue(commit.is_breaking)

    def test_defaults(self) -> None:
        commit = ParsedCommit("abc1234", "x", "", "A", "2024-01-01", "other")
        self.assertIsNone(commit.scope)
        self.assertIsNone(commit.breaking)
        self.assertFalse(commit.is_breaking)


class TestCommitTypes(unittest.TestCase):
    def test_enumeration(self) -> None:
        self.assertEqual(
            set(COMMIT_TYPES),
            {
                "feat", "fix", "refactor", "perf", "security", "deps", "docs", "config",
                "style", "test", "chore", "build", "ci", "revert", "other",
            },
        )

    def test_internal_types(self) -> None:
        self.assertEqual(INTERNAL_TYPES, {"chore", "ci", "style", "test", "build", "deps", "config"})
        self.assertTrue(is_internal("ci"))
        self.assertFalse(is_internal("feat"))
        self.assertFalse(is_internal("security"))

    def test_render_order_only_uses_known_types(self) -> None:
        self.assertTrue(all(is_known_type(t) for t in RENDER_ORDER))
        self.assertNotIn("security", RENDER_ORDER)
        self.assertEqual(RENDER_ORDER[:2], ("feat", "fix"))

    def test_labels(self) -> None:
        self.assertEqual(type_label("feat"), "✨ New Features")
        self.assertEqual(type_label("fix"), "🐛 Bug Fixes")


if __name__ == "__main__":
    unittest.main()
