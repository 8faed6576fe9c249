from __future__ import annotations

from dataclasses import dataclass

from contracts.layout import Level


@dataclass(frozen=True, slots=True)
class NodeId:
    """
    Hierarchical node identifier, e.g. (1, 2, 3) at LINE -> "b1_p2_l3".

    `path` holds the 1-based sibling counter of every level down to `level`.
    """

    level: Level
    path: tuple[int, ...]

    @property
    def index(self) -> int:
        return self.path[-1]

    @property
    def text(self) -> str:
        return "_".join(f"{lvl.id_prefix}{n}" for lvl, n in zip(Level, self.path))

    def __str__(self) -> str:
        return self.text


class IdentifierScheme:
    """
    Per-level 1-based counters.

    Entering a node increments its level counter and zeroes every deeper counter,
    so child numbering restarts at 1 under each new parent.
    """

    def __init__(self) -> None:
        self._counters: dict[Level, int] = {level: 0 for level in Level}

    def enter(self, level: Level) -> NodeId:
        self._counters[level] += 1
        deeper = level.child
        while deeper is not None:
            self._counters[deeper] = 0
            deeper = deeper.child
        path = tuple(self._counters[lvl] for lvl in Level if lvl <= level)
        return NodeId(level=level, path=path)
