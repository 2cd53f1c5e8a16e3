"""
Learning Path Sequencer.

Orders tutorials by their prerequisite graph:
- prerequisite_chain(): everything a tutorial depends on, dependencies first
- study_order(): every tutorial, topologically sorted
- find_cycles() / missing_references(): graph health for validation
"""
from __future__ import annotations

import heapq
from collections.abc import Mapping, Sequence

from loguru import logger

from rails_tutor.content.parser import ParsedTutorial
from rails_tutor.core.exceptions import PrerequisiteError, TutorialNotFoundError


class PathSequencer:
    """
    Sequence tutorials so that prerequisites always come first.

    Works on a plain ``{identifier: [prerequisite identifiers]}`` graph.
    """

    def __init__(self, graph: Mapping[str, Sequence[str]]):
        self.graph = {node: list(prereqs) for node, prereqs in graph.items()}

    @classmethod
    def from_tutorials(cls, tutorials: Mapping[str, ParsedTutorial]) -> PathSequencer:
        return cls(
            {identifier: tutorial.meta.prerequisites for identifier, tutorial in tutorials.items()}
        )

    def prerequisite_chain(self, identifier: str, strict: bool = False) -> list[str]:
        """
        Resolve the transitive prerequisites of a tutorial.

        Args:
            identifier: Tutorial to resolve
            strict: Raise on unknown prerequisites instead of skipping them

        Returns:
            Identifiers in dependency order, ending with ``identifier``

        Raises:
            TutorialNotFoundError: If ``identifier`` is not in the graph
            PrerequisiteError: On a cycle, or an unknown prerequisite when strict
        """
        if identifier not in self.graph:
            raise TutorialNotFoundError(f"Tutorial not found: {identifier}")

        ordered: list[str] = []
        visited: set[str] = set()
        visiting: list[str] = []

        def visit(node: str) -> None:
            if node in visited:
                return
            if node in visiting:
                cycle = visiting[visiting.index(node):] + [node]
                raise PrerequisiteError(f"Circular prerequisite detected: {' -> '.join(cycle)}")

            visiting.append(node)
            for prerequisite in self.graph[node]:
                if prerequisite not in self.graph:
                    if strict:
                        raise PrerequisiteError(
                            f"Tutorial '{node}' has unknown prerequisite '{prerequisite}'"
                        )
                    logger.warning(f"{node}: skipping unknown prerequisite '{prerequisite}'")
                    continue
                visit(prerequisite)
            visiting.pop()
            visited.add(node)
            ordered.append(node)

        visit(identifier)
        return ordered

    def study_order(self) -> list[str]:
        """
        Topologically sort every tutorial, ties broken by identifier.

        Raises:
            PrerequisiteError: If the graph has a cycle
        """
        dependents: dict[str, list[str]] = {node: [] for node in self.graph}
        pending: dict[str, int] = {}

        for node, prereqs in self.graph.items():
            known = {p for p in prereqs if p in self.graph}
            pending[node] = len(known)
            for prerequisite in known:
                dependents[prerequisite].append(node)

        ready = [node for node, count in pending.items() if count == 0]
        heapq.heapify(ready)
        ordered = []

        while ready:
            node = heapq.heappop(ready)
            ordered.append(node)
            for dependent in dependents[node]:
                pending[dependent] -= 1
                if pending[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(ordered) != len(self.graph):
            cycles = self.find_cycles()
            described = "; ".join(" -> ".join(cycle) for cycle in cycles)
            raise PrerequisiteError(f"Circular prerequisites detected: {described}")

        return ordered

    def find_cycles(self) -> list[list[str]]:
        """Return one closed path (first node repeated at the end) per distinct cycle."""
        cycles: list[list[str]] = []
        seen: set[frozenset[str]] = set()
        visited: set[str] = set()

        def visit(node: str, path: list[str]) -> None:
            if node in path:
                cycle = path[path.index(node):] + [node]
                key = frozenset(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle)
                return
            if node in visited:
                return

            path.append(node)
            for prerequisite in self.graph[node]:
                if prerequisite in self.graph:
                    visit(prerequisite, path)
            path.pop()
            visited.add(node)

        for node in sorted(self.graph):
            visit(node, [])

        return cycles

    def missing_references(self) -> dict[str, list[str]]:
        """Map each tutorial to the prerequisites that do not exist."""
        missing = {}
        for node, prereqs in self.graph.items():
            unknown = [p for p in prereqs if p not in self.graph]
            if unknown:
                missing[node] = unknown
        return missing
