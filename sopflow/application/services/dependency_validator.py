"""Dependency graph validator for template tasks.

Dependencies are declared by template-local key and must form a DAG over the
template's own tasks. Dangling references are reported before cycles; both
are reported deterministically (template order, then declaration order).
"""

from collections.abc import Sequence

from sopflow.domain.entities import TaskTemplateEntity
from sopflow.domain.exceptions import (
    CyclicDependencyException,
    DanglingDependencyException,
)

_WHITE, _GREY, _BLACK = 0, 1, 2


class DependencyGraphValidator:
    """Validates that depends-on edges are internal and acyclic."""

    def validate(self, tasks: Sequence[TaskTemplateEntity]) -> None:
        """Raise if any dependency is dangling or the graph has a cycle.

        Raises:
            DanglingDependencyException: A task depends on a key not in tasks.
            CyclicDependencyException: Dependencies form a cycle (self-loops included).
        """
        keys = {t.key for t in tasks}
        for task in tasks:
            for dep in task.depends_on:
                if dep not in keys:
                    raise DanglingDependencyException(task.key, dep)

        cycle = self.find_cycle(tasks)
        if cycle is not None:
            raise CyclicDependencyException(cycle)

    def find_cycle(self, tasks: Sequence[TaskTemplateEntity]) -> list[str] | None:
        """Return the first cycle found as a key path (first key repeated at end), or None.

        Iterative depth-first search with white/grey/black colouring; a grey
        node reached again closes a cycle. Unknown keys are ignored here.
        """
        edges = {t.key: [d for d in t.depends_on] for t in tasks}
        color = dict.fromkeys(edges, _WHITE)

        for root in edges:
            if color[root] != _WHITE:
                continue
            path: list[str] = [root]
            stack = [iter(edges[root])]
            color[root] = _GREY
            while stack:
                dep = next(stack[-1], None)
                if dep is None:
                    color[path.pop()] = _BLACK
                    stack.pop()
                    continue
                if dep not in color:
                    continue
                if color[dep] == _GREY:
                    start = path.index(dep)
                    return path[start:] + [dep]
                if color[dep] == _WHITE:
                    color[dep] = _GREY
                    path.append(dep)
                    stack.append(iter(edges[dep]))
        return None
