"""A fixed-size population of chromosomes."""

from __future__ import annotations

from collections.abc import Iterator

from .chromosome import Chromosome


class Population:
    """A fixed number of chromosomes, initially unevaluated and empty."""

    def __init__(self, size: int) -> None:
        self._size = size
        self._chromosomes = [Chromosome() for _ in range(size)]

    def sort_by_fitness(self) -> None:
        """Order the chromosomes by ascending fitness."""
        self._chromosomes.sort(key=lambda c: c.fitness)

    def back(self) -> Chromosome:
        """Return the last chromosome."""
        return self._chromosomes[self._size - 1]

    def __getitem__(self, index: int) -> Chromosome:
        return self._chromosomes[index]

    def __setitem__(self, index: int, chromosome: Chromosome) -> None:
        self._chromosomes[index] = chromosome

    def __len__(self) -> int:
        return len(self._chromosomes)

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self._chromosomes)