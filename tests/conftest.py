"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from rails_tutor.content.frontmatter import TutorialMeta
from rails_tutor.content.parser import ParsedTutorial
from rails_tutor.learning.tutorial_store import TutorialStore

SAMPLE_TUTORIAL = """---
concepts: [has_many, belongs_to, inverse_of]
source_repo: basecamp/fizzy
description: How ActiveRecord wires associations
understanding_score: 6
prerequisites: [01-03-2025-activerecord-basics]
created: 02-03-2025
last_updated: 05-03-2025
last_quizzed: 05-03-2025
---

# ActiveRecord Associations

Associations are declared with class macros on the model:

```ruby
class Card < ApplicationRecord
  belongs_to :board
end
```

```bash
# run the generator first
bin/rails generate model Card board:references
```

## Q&A

### Q: Why does inverse_of matter?
_Asked 03-03-2025_

It lets both sides of the association share one object in memory.

```ruby
## not a heading, just a comment
card.board.equal?(board)
```

## Quiz History

### Quiz 05-03-2025 (score 6/10)

**Q1:** What does belongs_to add?

**A1:** A reader and a writer for the parent record.

**Q2:** Where is the foreign key stored?

**A2:** On the table of the model that declares belongs_to.
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def build_tutorial_text(
    concepts: tuple[str, ...] = ("routing",),
    prerequisites: tuple[str, ...] = (),
    score: int | None = None,
    created: str = "01-03-2025",
    last_updated: str | None = None,
    last_quizzed: str | None = None,
    title: str = "Routing",
) -> str:
    """Render a minimal tutorial file with the given metadata."""

    def flow(items: tuple[str, ...]) -> str:
        return "[" + ", ".join(items) + "]"

    return (
        "---\n"
        f"concepts: {flow(concepts)}\n"
        "source_repo: basecamp/campfire\n"
        f"description: Notes on {title}\n"
        f"understanding_score: {'null' if score is None else score}\n"
        f"prerequisites: {flow(prerequisites)}\n"
        f"created: {created}\n"
        f"last_updated: {last_updated or created}\n"
        f"last_quizzed: {last_quizzed or 'null'}\n"
        "---\n"
        f"\n# {title}\n\nBody text.\n\n## Q&A\n\n## Quiz History\n"
    )


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TUTORIAL


@pytest.fixture
def tutorials_dir(tmp_path) -> Path:
    directory = tmp_path / "tutorials"
    directory.mkdir()
    return directory


@pytest.fixture
def store(tutorials_dir) -> TutorialStore:
    return TutorialStore(tutorials_dir)


@pytest.fixture
def write_tutorial(tutorials_dir):
    """Write a tutorial file; pass raw ``text`` or metadata keywords."""

    def _write(identifier: str, text: str | None = None, **fields) -> Path:
        path = tutorials_dir / f"{identifier}.md"
        path.write_text(text if text is not None else build_tutorial_text(**fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_tutorial():
    """Build an in-memory ParsedTutorial without touching disk."""

    def _make(
        identifier: str,
        score: int | None = None,
        last_quizzed: str | None = None,
        prerequisites: list[str] | None = None,
        created: str = "01-03-2025",
    ) -> ParsedTutorial:
        meta = TutorialMeta(
            concepts=["routing"],
            source_repo="basecamp/campfire",
            description="Notes",
            understanding_score=score,
            prerequisites=prerequisites or [],
            created=created,
            last_updated=last_quizzed or created,
            last_quizzed=last_quizzed,
        )
        return ParsedTutorial(identifier=identifier, meta=meta, body=f"\n# {identifier}\n")

    return _make
