import unittest
from datetime import datetime, timezone

from ai_changelog.grouping.group_model import (
    CATEGORY_ORDER,
    Section,
    get_display_name,
    normalize_category,
)
from ai_changelog.vcs.git_client import Commit


class TestGroupModel(unittest.TestCase):
    def test_display_names(self) -> None:
        cases = [
            ("feat", "New Features"),
            ("fix", "Bug Fixes"),
            ("perf", "Performance"),
            ("docs", "Documentation"),
            ("refactor", "Internal Changes"),
            ("chore", "Maintenance"),
            ("test", "Testing"),
            ("style", "Style"),
            ("other", "Other"),
            ("build", "Other"),
            (None, "Other"),
        ]
        for prefix, expected in cases:
            with self.subTest(prefix=prefix):
                self.assertEqual(get_display_name(prefix), expected)

    def test_category_order_ends_with_other(self) -> None:
        self.assertEqual(
            CATEGORY_ORDER,
            ("feat", "fix", "perf", "docs", "refactor", "chore", "test", "style", "other"),
        )

    def test_normalize_category(self) -> None:
        self.assertEqual(normalize_category("docs"), "docs")
        self.assertEqual(normalize_category("ci"), "other")

    def test_section_dataclass(self) -> None:
        commit = Commit(
            hash="abc123",
            subject="feat: add new feature",
            author="Test Author",
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
            prefix="feat",
        )
        section = Section(title="New Features", commits=(commit,))
        self.assertEqual(section.title, "New Features")
        self.assertEqual(len(section.commits), 1)
        self.assertEqual(section.commits[0].hash, "abc123")
        with self.assertRaises(AttributeError):
            section.title = "Changed"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
