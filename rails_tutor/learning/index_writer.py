"""Render the index README that describes the knowledge base."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from loguru import logger

from rails_tutor.adaptive.path_sequencer import PathSequencer
from rails_tutor.content.parser import ParsedTutorial
from rails_tutor.core.exceptions import PrerequisiteError

INDEX_HEADER = """# rails-tutor notes

Tutorials written during rails-tutor sessions on Ruby on Rails internals
and related frameworks. Each tutorial teaches one concept and keeps a log of
the questions asked and quizzes taken since.

## Layout

- `{tutorials}/` one markdown file per topic, named `DD-MM-YYYY-<slug>.md`,
  with YAML front matter (concepts, source repo, score, prerequisites, dates)
- `{profile}` interview notes about the learner's background and goals
- `{index}` this file, regenerated by `rails-tutor index`

## Update workflow

1. `rails-tutor new "<topic>"` when a new concept is taught
2. `rails-tutor ask <id>` to log a follow-up question and its answer
3. `rails-tutor quiz <id>` to log a quiz and update the understanding score
4. `rails-tutor due` to see which tutorials need another quiz
5. `rails-tutor index` to refresh this file
"""


def _relative(path: Path, start: Path) -> str:
    return Path(os.path.relpath(path, start)).as_posix()


def _cell(text: str) -> str:
    return text.replace("|", "\\|")


def render_index(
    tutorials: Mapping[str, ParsedTutorial],
    tutorials_dir: Path,
    profile_path: Path,
    index_path: Path,
    score_max: int = 10,
) -> str:
    """Render the README text; tutorials are listed in study order."""
    base = index_path.parent
    header = INDEX_HEADER.format(
        tutorials=_relative(tutorials_dir, base),
        profile=_relative(profile_path, base),
        index=index_path.name,
    )

    try:
        order = PathSequencer.from_tutorials(tutorials).study_order()
    except PrerequisiteError as e:
        logger.warning(f"Listing tutorials alphabetically: {e}")
        order = sorted(tutorials)

    lines = [header, "## Tutorials", ""]
    if not order:
        lines.append("_No tutorials yet._")
    else:
        lines.append("| Tutorial | Concepts | Score | Last quizzed |")
        lines.append("|----------|----------|-------|--------------|")
        for identifier in order:
            tutorial = tutorials[identifier]
            meta = tutorial.meta
            link = _relative(tutorials_dir / f"{identifier}.md", base)
            score = "-" if meta.understanding_score is None else f"{meta.understanding_score}/{score_max}"
            lines.append(
                f"| [{_cell(tutorial.title)}]({link}) "
                f"| {_cell(', '.join(meta.concepts))} "
                f"| {score} "
                f"| {meta.last_quizzed or 'never'} |"
            )

    return "\n".join(lines) + "\n"


def write_index(
    tutorials: Mapping[str, ParsedTutorial],
    tutorials_dir: Path,
    profile_path: Path,
    index_path: Path,
    score_max: int = 10,
) -> Path:
    text = render_index(tutorials, tutorials_dir, profile_path, index_path, score_max)
    index_path.parent.mkdir(parents=True, exist_ok=True)
    index_path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote index for {len(tutorials)} tutorials to {index_path}")
    return index_path
