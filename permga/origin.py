"""Where a chromosome came from."""

from __future__ import annotations

from enum import Enum


class Origin(Enum):
    """The operator that produced a chromosome; each value is its report label."""

    RANDOM = "INITIAL"
    CYCLIC_CROSSOVER = "CYCLIC_CROSSOVER"
    ORDER_CROSSOVER = "ORDER_CROSSOVER"
    SWAP_MUTATION = "SWAP_MUTATION"
    TWOOPT_MUTATION = "TWOOPT_MUTATION"
    REINSERTION_MUTATION = "REINSERTION_MUTATION"

    def __str__(self) -> str:
        return self.value