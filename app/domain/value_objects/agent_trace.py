"""AgentTrace — ordered, append-only log of pipeline steps returned to the caller."""

from __future__ import annotations

from collections.abc import Iterable


class AgentTrace:
    def __init__(self) -> None:
        self._steps: list[str] = []

    def add(self, step: str) -> None:
        self._steps.append(step)

    def extend(self, steps: Iterable[str]) -> None:
        for step in steps:
            self.add(step)

    @property
    def steps(self) -> tuple[str, ...]:
        return tuple(self._steps)

    def to_list(self) -> list[str]:
        return list(self._steps)

    def __contains__(self, step: object) -> bool:
        return step in self._steps

    def __len__(self) -> int:
        return len(self._steps)
