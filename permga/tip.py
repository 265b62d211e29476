"""Tool indexing problem instances."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field

from .chromosome import Chromosome
from .instance import Instance


def _next(tokens: Iterator[str], what: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ValueError(f"unexpected end of input while reading {what}") from None


def _next_int(tokens: Iterator[str], what: str) -> int:
    token = _next(tokens, what)
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"expected an integer for {what}, got {token!r}") from None


@dataclass
class TIPInstance(Instance):
    """Tools to place on a circular magazine, with their switch frequencies."""

    file_path: str
    tools: int
    slots: int
    empty_spaces: int
    wsa_cost: int
    hs_chromosome: list[int] = field(default_factory=list)
    frequency_matrix: list[list[int]] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, file_path: str = "") -> "TIPInstance":
        """Parse an instance from its whitespace-separated text form."""
        tokens = iter(text.split())
        tools = _next_int(tokens, "tool count")
        slots = _next_int(tokens, "slot count")
        hs = []
        for _ in range(slots):
            value = _next(tokens, "slot assignment")
            if value == "x":
                hs.append(-1)
            else:
                try:
                    hs.append(int(value) - 1)
                except ValueError:
                    raise ValueError(f"invalid slot assignment {value!r}") from None
        wsa_cost = _next_int(tokens, "WSA cost")
        matrix = [
            [_next_int(tokens, "frequency") for _ in range(tools)]
            for _ in range(tools)
        ]
        return cls(
            file_path=str(file_path),
            tools=tools,
            slots=slots,
            empty_spaces=slots - tools,
            wsa_cost=wsa_cost,
            hs_chromosome=hs,
            frequency_matrix=matrix,
        )

    @classmethod
    def from_file(cls, file_path: str | os.PathLike) -> "TIPInstance":
        """Read an instance from a file; raises OSError if it cannot be opened."""
        with open(file_path, encoding="utf-8") as fh:
            return cls.from_text(fh.read(), str(file_path))

    def fitness(self, chromosome: Chromosome) -> int:
        """Total frequency-weighted circular distance between tool positions."""
        tool_index = {chromosome.permutation[i]: i for i in range(self.tools)}
        total = 0
        for i in range(self.tools):
            row = self.frequency_matrix[i]
            for j in range(i + 1, self.tools):
                freq = row[j]
                if not freq:
                    continue
                dist = abs(tool_index.get(i, 0) - tool_index.get(j, 0))
                total += freq * min(dist, self.tools - dist + self.empty_spaces)
        return total