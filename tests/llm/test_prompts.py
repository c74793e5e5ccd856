import unittest
from datetime import datetime, timezone

from ai_changelog.llm.prompts import build_changelog_prompt, build_summary_prompt
from ai_changelog.vcs.git_client import Commit


def make_commit(hash_: str, subject: str) -> Commit:
    return Commit(
        hash=hash_,
        subject=subject,
        author="Alice",
        timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
        prefix="feat",
    )


class TestPrompts(unittest.TestCase):
    def test_changelog_prompt_lists_commits_with_short_hash(self) -> None:
        prompt = build_changelog_prompt(
            [make_commit("abc1234def", "feat: add login"), make_commit("xyz", "fix: crash")]
        )
        self.assertIn("Highlights", prompt)
        self.assertIn("Bug Fixes", prompt)
        self.assertTrue(prompt.rstrip().endswith("- fix: crash (xyz)"))
        self.assertIn("- feat: add login (abc1234)\n", prompt)
        self.assertNotIn("abc1234def", prompt)

    def test_summary_prompt_lists_subjects(self) -> None:
        prompt = build_summary_prompt([make_commit("abc1234def", "feat: add login")])
        self.assertIn("Commits:\n- feat: add login\n", prompt)
        self.assertNotIn("abc1234", prompt)

    def test_empty_input(self) -> None:
        self.assertEqual(build_changelog_prompt([]), "")
        self.assertEqual(build_summary_prompt([]), "")


if __name__ == "__main__":
    unittest.main()
