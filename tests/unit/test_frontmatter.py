"""
Unit tests for tutorial front matter.

Run: pytest tests/unit/test_frontmatter.py -v
"""
import pytest
import yaml

from rails_tutor.content.frontmatter import (
    REQUIRED_KEYS,
    dump_front_matter,
    load_front_matter,
    split_front_matter,
)
from rails_tutor.core.exceptions import FrontMatterError


def _yaml_of(text: str) -> str:
    yaml_text, _ = split_front_matter(text)
    return yaml_text


class TestSplitFrontMatter:
    def test_splits_yaml_from_body(self, sample_text):
        yaml_text, body = split_front_matter(sample_text)
        assert yaml_text.startswith("concepts:")
        assert body.startswith("\n# ActiveRecord Associations")

    def test_missing_opening_fence(self):
        with pytest.raises(FrontMatterError):
            split_front_matter("# Just a heading\n")

    def test_unclosed_block(self):
        with pytest.raises(FrontMatterError):
            split_front_matter("---\nconcepts: []\n# no closing fence\n")


class TestLoadFrontMatter:
    def test_loads_required_fields(self, sample_text):
        meta = load_front_matter(_yaml_of(sample_text))
        assert meta.concepts == ["has_many", "belongs_to", "inverse_of"]
        assert meta.source_repo == "basecamp/fizzy"
        assert meta.understanding_score == 6
        assert meta.prerequisites == ["01-03-2025-activerecord-basics"]
        assert meta.created_on.isoformat() == "2025-03-02"
        assert meta.last_quizzed_on.isoformat() == "2025-03-05"

    def test_null_score_and_quiz_date(self, sample_text):
        text = sample_text.replace("understanding_score: 6", "understanding_score: null")
        text = text.replace("last_quizzed: 05-03-2025", "last_quizzed: null")
        meta = load_front_matter(_yaml_of(text))
        assert meta.understanding_score is None
        assert meta.last_quizzed_on is None

    def test_missing_key_is_reported(self, sample_text):
        text = sample_text.replace("source_repo: basecamp/fizzy\n", "")
        with pytest.raises(FrontMatterError, match="source_repo"):
            load_front_matter(_yaml_of(text))

    def test_iso_date_is_rejected(self, sample_text):
        text = sample_text.replace("created: 02-03-2025", "created: 2025-03-02")
        with pytest.raises(FrontMatterError, match="created"):
            load_front_matter(_yaml_of(text))

    def test_unpadded_date_is_rejected(self, sample_text):
        text = sample_text.replace("created: 02-03-2025", "created: 2-3-2025")
        with pytest.raises(FrontMatterError):
            load_front_matter(_yaml_of(text))

    def test_quoted_score_is_rejected(self, sample_text):
        text = sample_text.replace("understanding_score: 6", 'understanding_score: "6"')
        with pytest.raises(FrontMatterError, match="understanding_score"):
            load_front_matter(_yaml_of(text))

    def test_non_mapping(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            load_front_matter("- just\n- a list\n")

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError, match="YAML"):
            load_front_matter("concepts: [unclosed\n")


class TestDumpFrontMatter:
    def test_round_trip_reproduces_fields(self, sample_text):
        original = yaml.safe_load(_yaml_of(sample_text))
        meta = load_front_matter(_yaml_of(sample_text))

        dumped = dump_front_matter(meta)

        assert yaml.safe_load(dumped) == original
        assert load_front_matter(dumped) == meta

    def test_required_keys_come_first_in_order(self, sample_text):
        meta = load_front_matter(_yaml_of(sample_text) + "tags: [rails]\n")
        keys = [line.split(":", 1)[0] for line in dump_front_matter(meta).splitlines()]
        assert keys == [*REQUIRED_KEYS, "tags"]

    def test_lists_use_flow_style(self, sample_text):
        meta = load_front_matter(_yaml_of(sample_text))
        dumped = dump_front_matter(meta)
        assert "concepts: [has_many, belongs_to, inverse_of]" in dumped
        assert "created: 02-03-2025" in dumped

    def test_nulls_and_empty_lists(self, sample_text):
        text = sample_text.replace("last_quizzed: 05-03-2025", "last_quizzed: null")
        text = text.replace("prerequisites: [01-03-2025-activerecord-basics]", "prerequisites: []")
        dumped = dump_front_matter(load_front_matter(_yaml_of(text)))
        assert "last_quizzed: null" in dumped
        assert "prerequisites: []" in dumped

    def test_extra_fields_survive(self, sample_text):
        meta = load_front_matter(_yaml_of(sample_text) + "difficulty: hard\n")
        assert meta.extra_fields == {"difficulty": "hard"}
        assert yaml.safe_load(dump_front_matter(meta))["difficulty"] == "hard"
