"""
YAML front matter for tutorial files.

A tutorial starts with a ``---`` fenced YAML block holding its metadata.
Required keys are declared on ``TutorialMeta``; unknown keys are kept as
pydantic extras so that a load/dump cycle reproduces every field.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from rails_tutor.core.dates import parse_date
from rails_tutor.core.exceptions import FrontMatterError

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

REQUIRED_KEYS = (
    "concepts",
    "source_repo",
    "description",
    "understanding_score",
    "prerequisites",
    "created",
    "last_updated",
    "last_quizzed",
)


class TutorialMeta(BaseModel):
    """Front matter metadata of one tutorial."""

    model_config = ConfigDict(extra="allow", strict=True)

    concepts: list[str]
    source_repo: str
    description: str
    understanding_score: int | None
    prerequisites: list[str]
    created: str
    last_updated: str
    last_quizzed: str | None

    @field_validator("created", "last_updated", "last_quizzed")
    @classmethod
    def _check_date(cls, value: str | None) -> str | None:
        if value is not None:
            parse_date(value)
        return value

    @property
    def created_on(self) -> date:
        return parse_date(self.created)

    @property
    def last_updated_on(self) -> date:
        return parse_date(self.last_updated)

    @property
    def last_quizzed_on(self) -> date | None:
        return parse_date(self.last_quizzed) if self.last_quizzed else None

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


def split_front_matter(text: str) -> tuple[str, str]:
    """Split raw file text into (yaml_text, body)."""
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        raise FrontMatterError("File does not start with a '---' front matter block")
    return match.group(1), text[match.end():]


def load_front_matter(yaml_text: str) -> TutorialMeta:
    """Parse and validate a front matter block."""
    try:
        raw = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Front matter is not valid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise FrontMatterError("Front matter must be a key/value mapping")

    missing = [key for key in REQUIRED_KEYS if key not in raw]
    if missing:
        raise FrontMatterError(f"Front matter is missing required keys: {', '.join(missing)}")

    try:
        return TutorialMeta.model_validate(raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise FrontMatterError(f"Invalid front matter: {problems}") from e


def dump_front_matter(meta: TutorialMeta) -> str:
    """Serialize metadata as YAML, required keys first, scalar lists in flow style."""
    data = {key: getattr(meta, key) for key in REQUIRED_KEYS}
    data.update(meta.extra_fields)
    return yaml.safe_dump(
        data,
        sort_keys=False,
        default_flow_style=None,
        allow_unicode=True,
        width=float("inf"),
    )


def render_front_matter(meta: TutorialMeta) -> str:
    return f"---\n{dump_front_matter(meta)}---\n"
