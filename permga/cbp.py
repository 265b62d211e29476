"""Cyclic bandwidth problem instances."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field

from .chromosome import Chromosome
from .instance import Instance


def _next_int(tokens: Iterator[str], what: str) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise ValueError(f"unexpected end of input while reading {what}") from None
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"expected an integer for {what}, got {token!r}") from None


@dataclass
class CBPInstance(Instance):
    """An undirected graph whose nodes are laid out on a cycle."""

    file_path: str
    node_count: int
    edge_count: int
    critic_nodes: int
    adjacency_matrix: list[list[bool]] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, file_path: str = "") -> "CBPInstance":
        """Parse an instance: a header line, then node, critic and edge counts and 1-based edges."""
        _, _, body = text.partition("\n")
        tokens = iter(body.split())
        node_count = _next_int(tokens, "node count")
        critic_nodes = _next_int(tokens, "critic node count")
        edge_count = _next_int(tokens, "edge count")
        matrix = [[False] * node_count for _ in range(node_count)]
        for _ in range(edge_count):
            a = _next_int(tokens, "edge endpoint")
            b = _next_int(tokens, "edge endpoint")
            if not (1 <= a <= node_count and 1 <= b <= node_count):
                raise ValueError(f"edge ({a}, {b}) refers to a node out of range")
            matrix[a - 1][b - 1] = True
            matrix[b - 1][a - 1] = True
        return cls(
            file_path=str(file_path),
            node_count=node_count,
            edge_count=edge_count,
            critic_nodes=critic_nodes,
            adjacency_matrix=matrix,
        )

    @classmethod
    def from_file(cls, file_path: str | os.PathLike) -> "CBPInstance":
        """Read an instance from a file; raises OSError if it cannot be opened."""
        with open(file_path, encoding="utf-8") as fh:
            return cls.from_text(fh.read(), str(file_path))

    def fitness(self, chromosome: Chromosome) -> int:
        """Largest cyclic distance between the positions of adjacent nodes."""
        n = self.node_count
        position = [0] * n
        for i, node in enumerate(chromosome.permutation[:n]):
            position[node] = i
        best = 0
        for i, row in enumerate(self.adjacency_matrix):
            for j in range(i + 1, n):
                if not row[j]:
                    continue
                d = abs(position[i] - position[j])
                best = max(best, min(d, n - d))
        return best