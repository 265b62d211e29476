"""The problem interface the genetic algorithm optimises."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .chromosome import Chromosome


class Instance(ABC):
    """A problem instance that scores permutations; lower fitness is better."""

    @abstractmethod
    def fitness(self, chromosome: Chromosome) -> int:
        """Return the cost of the chromosome's permutation."""