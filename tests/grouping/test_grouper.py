import unittest
from datetime import datetime, timedelta, timezone

from ai_changelog.grouping.grouper import group_by_category, sort_by_date
from ai_changelog.vcs.git_client import Commit

BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def make_commit(hash_: str, prefix: str, hours: int = 0) -> Commit:
    return Commit(
        hash=hash_,
        subject=f"{prefix}: change {hash_}",
        author="Alice",
        timestamp=BASE_TIME + timedelta(hours=hours),
        prefix=prefix,
    )


class TestSortByDate(unittest.TestCase):
    def test_newest_first(self) -> None:
        commits = [make_commit("a", "feat", 2), make_commit("b", "fix", 3), make_commit("c", "feat", 1)]
        result = sort_by_date(commits)
        self.assertEqual([c.hash for c in result], ["b", "a", "c"])

    def test_does_not_mutate_input(self) -> None:
        commits = [make_commit("a", "feat", 1), make_commit("b", "fix", 5)]
        original = list(commits)
        result = sort_by_date(commits)
        self.assertEqual(commits, original)
        self.assertIsNot(result, commits)

    def test_ties_keep_input_order(self) -> None:
        commits = [
            make_commit("a", "feat", 1),
            make_commit("b", "fix", 1),
            make_commit("c", "docs", 2),
            make_commit("d", "chore", 1),
        ]
        result = sort_by_date(commits)
        self.assertEqual([c.hash for c in result], ["c", "a", "b", "d"])

    def test_non_increasing_timestamps(self) -> None:
        commits = [make_commit(str(i), "feat", hours) for i, hours in enumerate([4, 1, 7, 1, 3, 9])]
        result = sort_by_date(commits)
        for newer, older in zip(result, result[1:]):
            self.assertGreaterEqual(newer.timestamp, older.timestamp)

    def test_empty_and_none(self) -> None:
        self.assertEqual(sort_by_date([]), [])
        self.assertEqual(sort_by_date(None), [])


class TestGroupByCategory(unittest.TestCase):
    def test_sorted_then_grouped(self) -> None:
        commits = [make_commit("f2", "feat", 2), make_commit("x3", "fix", 3), make_commit("f1", "feat", 1)]
        sections = group_by_category(sort_by_date(commits))
        self.assertEqual([s.title for s in sections], ["New Features", "Bug Fixes"])
        self.assertEqual([c.hash for c in sections[0].commits], ["f2", "f1"])
        self.assertEqual([c.hash for c in sections[1].commits], ["x3"])

    def test_fixed_precedence_regardless_of_input_order(self) -> None:
        commits = [
            make_commit("1", "other"),
            make_commit("2", "style"),
            make_commit("3", "test"),
            make_commit("4", "chore"),
            make_commit("5", "refactor"),
            make_commit("6", "docs"),
            make_commit("7", "perf"),
            make_commit("8", "fix"),
            make_commit("9", "feat"),
        ]
        expected = [
            "New Features",
            "Bug Fixes",
            "Performance",
            "Documentation",
            "Internal Changes",
            "Maintenance",
            "Testing",
            "Style",
            "Other",
        ]
        self.assertEqual([s.title for s in group_by_category(commits)], expected)
        self.assertEqual([s.title for s in group_by_category(reversed(commits))], expected)

    def test_other_is_last(self) -> None:
        commits = [make_commit("1", "other"), make_commit("2", "docs"), make_commit("3", "other")]
        sections = group_by_category(commits)
        self.assertEqual([s.title for s in sections], ["Documentation", "Other"])
        self.assertEqual([c.hash for c in sections[-1].commits], ["1", "3"])

    def test_unknown_prefix_lands_in_other(self) -> None:
        sections = group_by_category([make_commit("1", "build")])
        self.assertEqual(len(sections), 1)
        self.assertEqual(sections[0].title, "Other")

    def test_absent_categories_produce_no_section(self) -> None:
        sections = group_by_category([make_commit("1", "fix")])
        self.assertEqual([s.title for s in sections], ["Bug Fixes"])
        self.assertTrue(all(s.commits for s in sections))

    def test_empty_input(self) -> None:
        self.assertEqual(group_by_category([]), [])
        self.assertEqual(group_by_category(None), [])


if __name__ == "__main__":
    unittest.main()
