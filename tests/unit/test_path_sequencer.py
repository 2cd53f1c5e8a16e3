"""
Unit tests for PathSequencer prerequisite ordering.

Run: pytest tests/unit/test_path_sequencer.py -v
"""
import pytest

from rails_tutor.adaptive.path_sequencer import PathSequencer
from rails_tutor.core.exceptions import PrerequisiteError, TutorialNotFoundError

GRAPH = {
    "mvc": [],
    "activerecord": ["mvc"],
    "associations": ["activerecord", "mvc"],
    "turbo": ["mvc"],
    "turbo-streams": ["turbo", "associations"],
}


@pytest.fixture
def sequencer():
    return PathSequencer(GRAPH)


class TestPrerequisiteChain:
    def test_dependencies_come_first(self, sequencer):
        assert sequencer.prerequisite_chain("associations") == ["mvc", "activerecord", "associations"]

    def test_diamond_lists_each_tutorial_once(self, sequencer):
        chain = sequencer.prerequisite_chain("turbo-streams")
        assert chain == ["mvc", "turbo", "activerecord", "associations", "turbo-streams"]
        assert len(chain) == len(set(chain))

    def test_every_tutorial_follows_its_prerequisites(self, sequencer):
        chain = sequencer.prerequisite_chain("turbo-streams")
        for node in chain:
            for prerequisite in GRAPH[node]:
                assert chain.index(prerequisite) < chain.index(node)

    def test_no_prerequisites(self, sequencer):
        assert sequencer.prerequisite_chain("mvc") == ["mvc"]

    def test_unknown_target(self, sequencer):
        with pytest.raises(TutorialNotFoundError):
            sequencer.prerequisite_chain("missing")

    def test_unknown_prerequisite_skipped_by_default(self):
        sequencer = PathSequencer({"a": ["ghost"], "b": ["a"]})
        assert sequencer.prerequisite_chain("b") == ["a", "b"]

    def test_unknown_prerequisite_strict(self):
        sequencer = PathSequencer({"a": ["ghost"]})
        with pytest.raises(PrerequisiteError, match="ghost"):
            sequencer.prerequisite_chain("a", strict=True)

    def test_cycle_raises(self):
        sequencer = PathSequencer({"a": ["b"], "b": ["c"], "c": ["a"]})
        with pytest.raises(PrerequisiteError, match="a -> b -> c -> a"):
            sequencer.prerequisite_chain("a")


class TestStudyOrder:
    def test_topological_with_alphabetical_ties(self, sequencer):
        assert sequencer.study_order() == [
            "mvc",
            "activerecord",
            "associations",
            "turbo",
            "turbo-streams",
        ]

    def test_ignores_unknown_prerequisites(self):
        assert PathSequencer({"b": ["ghost"], "a": []}).study_order() == ["a", "b"]

    def test_cycle_raises(self):
        with pytest.raises(PrerequisiteError):
            PathSequencer({"a": ["b"], "b": ["a"], "c": []}).study_order()

    def test_empty_graph(self):
        assert PathSequencer({}).study_order() == []


class TestGraphHealth:
    def test_find_cycles(self):
        sequencer = PathSequencer({"a": ["b"], "b": ["a"], "c": ["c"], "d": []})
        assert sequencer.find_cycles() == [["a", "b", "a"], ["c", "c"]]

    def test_acyclic_graph_has_no_cycles(self, sequencer):
        assert sequencer.find_cycles() == []

    def test_missing_references(self):
        sequencer = PathSequencer({"a": ["ghost", "b"], "b": [], "c": ["phantom"]})
        assert sequencer.missing_references() == {"a": ["ghost"], "c": ["phantom"]}

    def test_from_tutorials(self, make_tutorial):
        tutorials = {
            "01-03-2025-mvc": make_tutorial("01-03-2025-mvc"),
            "02-03-2025-routing": make_tutorial("02-03-2025-routing", prerequisites=["01-03-2025-mvc"]),
        }
        chain = PathSequencer.from_tutorials(tutorials).prerequisite_chain("02-03-2025-routing")
        assert chain == ["01-03-2025-mvc", "02-03-2025-routing"]
