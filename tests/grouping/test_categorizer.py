import unittest

from changeloggy.grouping.categorizer import categorize_commits, filter_by_scope, flatten
from changeloggy.grouping.commit_types import INTERNAL_TYPES
from changeloggy.grouping.group_model import ParsedCommit


def _commit(type_: str, description: str, scope=None, breaking=None) -> ParsedCommit:
    return ParsedCommit(
        hash="abc1234",
        description=description,
        body="",
        author="Lukas",
        date="2024-01-01",
        type=type_,
        scope=scope,
        breaking=breaking,
    )


class TestCategorizeCommits(unittest.TestCase):
    def setUp(self) -> None:
        self.commits = [
            _commit("feat", "add feature", scope="ui"),
            _commit("fix", "fix bug"),
            _commit("chore", "update deps"),
            _commit("feat", "add export", scope="api"),
        ]

    def test_groups_by_type_including_internal(self) -> None:
        categories = categorize_commits(self.commits, include_internal=True)
        self.assertEqual(len(categories["feat"]), 2)
        self.assertEqual(len(categories["fix"]), 1)
        self.assertEqual(len(categories["chore"]), 1)

    def test_internal_types_are_filtered_by_default(self) -> None:
        categories = categorize_commits(self.commits)
        self.assertEqual(set(categories), {"feat", "fix"})
        self.assertNotIn("chore", categories)

    def test_every_internal_type_is_filtered(self) -> None:
        commits = [_commit(t, f"{t} change") for t in sorted(INTERNAL_TYPES)]
        self.assertEqual(categorize_commits(commits), {})
        self.assertEqual(len(categorize_commits(commits, include_internal=True)), len(INTERNAL_TYPES))

    def test_input_order_is_preserved_within_a_bucket(self) -> None:
        categories = categorize_commits(self.commits)
        self.assertEqual([c.description for c in categories["feat"]], ["add feature", "add export"])

    def test_scope_filter_drops_non_matching_scopes(self) -> None:
        categories = categorize_commits(self.commits, scopes=["api"])
        self.assertEqual([c.description for c in categories["feat"]], ["add export"])
        # unscoped commits always pass
        self.assertEqual([c.description for c in categories["fix"]], ["fix bug"])

    def test_empty_scope_list_keeps_everything(self) -> None:
        self.assertEqual(filter_by_scope(self.commits, []), self.commits)
        self.assertEqual(filter_by_scope(self.commits, None), self.commits)

    def test_categorizing_again_is_idempotent(self) -> None:
        first = categorize_commits(self.commits, include_internal=False, scopes=["ui"])
        second = categorize_commits(flatten(first), include_internal=False, scopes=["ui"])
        self.assertEqual(first, second)

    def test_input_is_not_mutated(self) -> None:
        original = list(self.commits)
        categorize_commits(self.commits, scopes=["api"])
        self.assertEqual(self.commits, original)

    def test_scenario_from_subjects(self) -> None:
        from changeloggy.parsing.commit_parser import parse_commit
        from changeloggy.vcs.git_client import RawCommit

        subjects = ["feat(ui): add widget", "fix: crash on start", "chore: bump deps"]
        parsed = [parse_commit(RawCommit("f" * 40, s, "", "A", "2024-01-01")) for s in subjects]
        categories = categorize_commits(parsed, include_internal=False)
        self.assertEqual(list(categories), ["feat", "fix"])
        self.assertEqual((categories["feat"][0].description, categories["feat"][0].scope), ("add widget", "ui"))
        self.assertEqual(categories["fix"][0].description, "crash on start")


if __name__ == "__main__":
    unittest.main()
