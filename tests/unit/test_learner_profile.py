"""
Unit tests for the learner profile document.

Run: pytest tests/unit/test_learner_profile.py -v
"""
from datetime import date

import pytest

from rails_tutor.core.exceptions import DocumentReadError, TutorError
from rails_tutor.learning.learner_profile import LearnerProfileStore, parse_profile

DAY_ONE = date(2025, 3, 1)
DAY_TWO = date(2025, 3, 8)

PROFILE = """# Learner Profile

Background notes gathered before the first tutorial.

## Interview 01-03-2025

**Q:** What is your background?

**A:** Five years of Django,
mostly REST APIs.

> Teaching note: compare ActiveRecord with the Django ORM.

**Q:** What do you want to build?

**A:** A Hotwire app for a small team.

## Interview 08-03-2025

**Q:** How do you like to learn?

**A:** Reading real code first.
"""


@pytest.fixture
def profile_store(tmp_path):
    return LearnerProfileStore(tmp_path / "learner_profile.md")


class TestParseProfile:
    def test_sessions_and_entries(self, tmp_path):
        profile = parse_profile(PROFILE, tmp_path / "p.md")

        assert [s.held_on for s in profile.sessions] == ["01-03-2025", "08-03-2025"]
        first = profile.sessions[0].entries
        assert [e.question for e in first] == ["What is your background?", "What do you want to build?"]
        assert first[0].answer == "Five years of Django,\nmostly REST APIs."
        assert first[0].note == "compare ActiveRecord with the Django ORM."
        assert first[1].note is None
        assert len(profile.entries) == 3

    def test_non_interview_sections_are_ignored(self, tmp_path):
        text = PROFILE + "\n## Goals\n\n**Q:** stray\n"
        assert len(parse_profile(text, tmp_path / "p.md").sessions) == 2


class TestLearnerProfileStore:
    def test_missing_file_loads_empty(self, profile_store):
        profile = profile_store.load()
        assert profile.sessions == []

    def test_append_creates_document(self, profile_store):
        assert profile_store.append("Why Rails?", "Joining a Rails team.", on=DAY_ONE) is True

        text = profile_store.path.read_text(encoding="utf-8")
        assert text == (
            "# Learner Profile\n\n"
            "## Interview 01-03-2025\n\n"
            "**Q:** Why Rails?\n\n"
            "**A:** Joining a Rails team.\n"
        )

    def test_same_day_entries_share_a_session(self, profile_store):
        profile_store.append("Q one?", "A one.", on=DAY_ONE)
        profile_store.append("Q two?", "A two.", note="Go slower.", on=DAY_ONE)

        profile = profile_store.load()
        assert len(profile.sessions) == 1
        assert [e.question for e in profile.sessions[0].entries] == ["Q one?", "Q two?"]
        assert profile.sessions[0].entries[1].note == "Go slower."

    def test_new_day_starts_new_session(self, profile_store):
        profile_store.append("Q one?", "A one.", on=DAY_ONE)
        profile_store.append("Q two?", "A two.", on=DAY_TWO)
        assert [s.held_on for s in profile_store.load().sessions] == ["01-03-2025", "08-03-2025"]

    def test_retry_is_a_no_op(self, profile_store):
        profile_store.append("Q one?", "A one.", on=DAY_ONE)
        before = profile_store.path.read_text(encoding="utf-8")

        assert profile_store.append("Q one?", "A one.", on=DAY_ONE) is False
        assert profile_store.path.read_text(encoding="utf-8") == before

    def test_retry_with_markdown_answer_is_a_no_op(self, profile_store):
        answer = "Mostly Django.\n\n## Side projects\n\n- a Hotwire app\n- a gem"
        assert profile_store.append("Background?", answer, on=DAY_ONE) is True
        assert profile_store.append("Background?", answer, on=DAY_ONE) is False

        profile = profile_store.load()
        assert [s.held_on for s in profile.sessions] == ["01-03-2025"]
        assert profile.entries[0].answer == "Mostly Django.\n\n#### Side projects\n\n- a Hotwire app\n- a gem"

    def test_non_utf8_document(self, profile_store):
        profile_store.path.write_bytes(b"# Learner Profile\n\xff\n")
        with pytest.raises(DocumentReadError):
            profile_store.load()

    def test_existing_document_is_only_appended_to(self, profile_store):
        profile_store.path.write_text(PROFILE, encoding="utf-8")
        profile_store.append("Favourite gem?", "Pagy.", on=date(2025, 3, 15))

        text = profile_store.path.read_text(encoding="utf-8")
        assert text.startswith(PROFILE.rstrip("\n"))
        assert text.endswith("## Interview 15-03-2025\n\n**Q:** Favourite gem?\n\n**A:** Pagy.\n")

    def test_empty_question_rejected(self, profile_store):
        with pytest.raises(TutorError):
            profile_store.append(" ", "A.")
