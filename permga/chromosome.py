"""A permutation candidate solution with its fitness and origin."""

from __future__ import annotations

from dataclasses import dataclass, field

from .origin import Origin

FITNESS_MAX = 2**31 - 1
"""Fitness of a chromosome that has not been evaluated yet."""


@dataclass
class Chromosome:
    """A permutation of genes, its fitness (lower is better) and its origin."""

    permutation: list[int] = field(default_factory=list)
    fitness: int = FITNESS_MAX
    origin: Origin = Origin.RANDOM

    @classmethod
    def filled(cls, n: int, value: int, origin: Origin) -> "Chromosome":
        """Return a chromosome of ``n`` genes all set to ``value``."""
        return cls([value] * n, FITNESS_MAX, origin)

    def normalize(self) -> None:
        """Rotate the permutation so that gene 0 comes first, if it is present."""
        try:
            pos = self.permutation.index(0)
        except ValueError:
            return
        self.permutation = self.permutation[pos:] + self.permutation[:pos]

    def copy(self) -> "Chromosome":
        """Return an independent copy."""
        return Chromosome(list(self.permutation), self.fitness, self.origin)

    def __getitem__(self, index: int) -> int:
        return self.permutation[index]

    def __setitem__(self, index: int, value: int) -> None:
        self.permutation[index] = value

    def __len__(self) -> int:
        return len(self.permutation)