"""A biased random-key style genetic algorithm over permutations."""

from __future__ import annotations

import json
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from .chromosome import Chromosome
from .instance import Instance
from .origin import Origin
from .population import Population
from .tip import TIPInstance

_TOP_INDIVIDUALS = 20


@dataclass(frozen=True)
class ConvergenceEntry:
    """A generation in which the best fitness improved."""

    generation: int
    best_fitness: int
    origin: Origin
    elapsed_seconds: float


class GA:
    """Genetic algorithm minimising an instance's fitness over permutations of ``n`` genes.

    ``mutation_type`` 4 leaves mutants unchanged; any other value picks one of
    swap, 2-opt or reinsertion at random.  ``crossover_type`` is 1 (cyclic),
    2 (order) or 3 (either, chosen at random).
    """

    def __init__(
        self,
        instance: Instance,
        n: int,
        p: int,
        pe: float,
        pm: float,
        rhoe: float,
        max_gens: int,
        max_gens_without_improvement: int,
        wheel_bias: float,
        mutation_type: int,
        crossover_type: int,
        normalize_permutation: bool,
        threads: int,
        seed: int,
        max_time: int,
    ) -> None:
        if crossover_type not in (1, 2, 3):
            raise ValueError(f"unknown crossover type {crossover_type}")
        self.instance = instance
        self.n = n
        self.p = p
        self.pe = pe
        self.pm = pm
        self.rhoe = rhoe
        self.max_gens = max_gens
        self.max_gens_without_improvement = max_gens_without_improvement
        self.wheel_bias = wheel_bias
        self.mutation_type = mutation_type
        self.crossover_type = crossover_type
        self.normalize_permutation = bool(normalize_permutation)
        self.threads = threads
        self.seed = seed
        self.max_time = max_time

        self.current_gen = 0
        self.gens_without_improvement = 0
        self.elapsed_minutes = 0
        self.convergence_log: list[ConvergenceEntry] = []
        self.rng = random.Random(seed)
        self.population = self.create_initial_population()

    # ------------------------------------------------------------------ loop

    def _advance(self) -> bool:
        generation = self.current_gen
        self.current_gen += 1
        if generation >= self.max_gens:
            return False
        stale = self.gens_without_improvement
        self.gens_without_improvement += 1
        return stale < self.max_gens_without_improvement

    def run(self) -> None:
        """Evolve until a generation, stagnation or time limit is reached."""
        self.current_gen = 0
        self.gens_without_improvement = 0
        start = time.monotonic()

        while self._advance():
            elapsed = time.monotonic() - start
            self.elapsed_minutes = int(elapsed // 60)
            if self.elapsed_minutes >= self.max_time:
                break

            self.calculate_population_fitness(self.population)
            self.population.sort_by_fitness()
            best = self.population[0]
            if not self.convergence_log or best.fitness < self.convergence_log[-1].best_fitness:
                self.gens_without_improvement = 0
                self.convergence_log.append(
                    ConvergenceEntry(self.current_gen, best.fitness, best.origin, elapsed)
                )

            self.population = self.reproduction(self.population)

    def calculate_population_fitness(self, population: Population) -> None:
        """Evaluate every chromosome of the population in place."""
        for chromosome in population:
            chromosome.fitness = self.instance.fitness(chromosome)

    # ----------------------------------------------------------- reproduction

    def _bias(self, fitness: int) -> float:
        if fitness == 0:
            return float("inf")
        try:
            return (1.0 / fitness) ** self.wheel_bias
        except OverflowError:
            return float("inf")

    def reproduction(self, current: Population) -> Population:
        """Build the next generation from a population sorted by fitness."""
        nxt = Population(self.p)
        elite_end = min(int(self.pe * self.p), self.p)
        mutant_end = min(elite_end + int(self.pm * self.p), self.p)

        for i in range(elite_end):
            nxt[i] = current[i].copy()

        biased = [self._bias(c.fitness) for c in current]
        total = sum(biased)

        mutations: dict[int, tuple[Callable[[Chromosome], None], Origin]] = {
            1: (self.swap_mutation, Origin.SWAP_MUTATION),
            2: (self.two_opt_mutation, Origin.TWOOPT_MUTATION),
            3: (self.reinsertion_mutation, Origin.REINSERTION_MUTATION),
        }
        for i in range(elite_end, mutant_end):
            mutant = current[self.biased_wheel_selection(biased, total)].copy()
            kind = self.mutation_type if self.mutation_type == 4 else self.rng.randint(1, 3)
            if kind in mutations:
                operator, origin = mutations[kind]
                operator(mutant)
                mutant.origin = origin
            if self.normalize_permutation:
                mutant.normalize()
            nxt[i] = mutant

        for i in range(mutant_end, self.p, 2):
            parent1 = current[self.biased_wheel_selection(biased, total)]
            parent2 = current[self.biased_wheel_selection(biased, total)]
            if self.crossover_type == 1:
                first, second = self.cyclic_crossover(parent1, parent2)
            elif self.crossover_type == 2:
                first, second = self.order_crossover(parent1, parent2)
            elif self.rng.randint(0, 1):
                first, second = self.cyclic_crossover(parent1, parent2)
            else:
                first, second = self.order_crossover(parent1, parent2)
            if self.normalize_permutation:
                first.normalize()
                second.normalize()
            nxt[i] = first
            if i + 1 < self.p:
                nxt[i + 1] = second

        return nxt

    def biased_wheel_selection(self, biased_fitness: list[float], total: float) -> int:
        """Pick an index with probability proportional to its biased fitness."""
        r = self.rng.uniform(0.0, total)
        accum = 0.0
        for i, weight in enumerate(biased_fitness):
            accum += weight
            if accum >= r:
                return i
        return len(biased_fitness) - 1

    # -------------------------------------------------------------- operators

    def _gene_index(self) -> int:
        return self.rng.randint(0, self.n - 1)

    def _distinct_pair(self) -> tuple[int, int]:
        if self.n < 2:
            raise ValueError("mutation needs at least two genes")
        i = self._gene_index()
        j = self._gene_index()
        while j == i:
            j = self._gene_index()
        return i, j

    def swap_mutation(self, chromosome: Chromosome) -> None:
        """Exchange two distinct genes."""
        i, j = self._distinct_pair()
        perm = chromosome.permutation
        perm[i], perm[j] = perm[j], perm[i]

    def two_opt_mutation(self, chromosome: Chromosome) -> None:
        """Reverse the segment between two distinct positions, inclusive."""
        i, j = sorted(self._distinct_pair())
        perm = chromosome.permutation
        perm[i : j + 1] = perm[i : j + 1][::-1]

    def reinsertion_mutation(self, chromosome: Chromosome) -> None:
        """Move one gene to another position."""
        source, target = self._distinct_pair()
        perm = chromosome.permutation
        perm.insert(target, perm.pop(source))

    def cyclic_crossover(self, c1: Chromosome, c2: Chromosome) -> tuple[Chromosome, Chromosome]:
        """Cycle crossover starting from a random position."""
        o1 = Chromosome.filled(self.n, -1, Origin.CYCLIC_CROSSOVER)
        o2 = Chromosome.filled(self.n, -1, Origin.CYCLIC_CROSSOVER)
        visited = [False] * self.n
        position_in_c1 = {gene: i for i, gene in enumerate(c1.permutation[: self.n])}

        idx = self._gene_index()
        while not visited[idx]:
            visited[idx] = True
            o1[idx] = c1[idx]
            o2[idx] = c2[idx]
            idx = position_in_c1.get(c2[idx], 0)

        for i, seen in enumerate(visited):
            if not seen:
                o1[i] = c2[i]
                o2[i] = c1[i]
        return o1, o2

    def order_crossover(self, c1: Chromosome, c2: Chromosome) -> tuple[Chromosome, Chromosome]:
        """Order crossover keeping a random segment of each parent."""
        o1 = Chromosome.filled(self.n, -1, Origin.ORDER_CROSSOVER)
        o2 = Chromosome.filled(self.n, -1, Origin.ORDER_CROSSOVER)
        start, end = sorted((self._gene_index(), self._gene_index()))

        o1.permutation[start : end + 1] = c1.permutation[start : end + 1]
        o2.permutation[start : end + 1] = c2.permutation[start : end + 1]

        def fill(offspring: Chromosome, donor: Chromosome) -> None:
            used = set(offspring.permutation[start : end + 1])
            pos = (end + 1) % self.n
            for i in range(self.n):
                gene = donor[(end + 1 + i) % self.n]
                if gene not in used:
                    offspring[pos] = gene
                    used.add(gene)
                    pos = (pos + 1) % self.n

        fill(o1, c2)
        fill(o2, c1)
        return o1, o2

    # ------------------------------------------------------------ population

    def create_random_chromosome(self) -> Chromosome:
        """Return a uniformly shuffled permutation of ``0..n-1``."""
        perm = list(range(self.n))
        self.rng.shuffle(perm)
        return Chromosome(perm, origin=Origin.RANDOM)

    def create_initial_population(self) -> Population:
        """Return ``p`` random chromosomes."""
        population = Population(self.p)
        for i in range(self.p):
            chromosome = self.create_random_chromosome()
            if self.normalize_permutation:
                chromosome.normalize()
            population[i] = chromosome
        return population

    # --------------------------------------------------------------- reports

    def _parameters(self) -> dict[str, Any]:
        return {
            "n": self.n,
            "p": self.p,
            "pe": self.pe,
            "pm": self.pm,
            "rhoe": self.rhoe,
            "maxGens": self.max_gens,
            "maxGensWithoutImprovement": self.max_gens_without_improvement,
            "wheelBias": self.wheel_bias,
            "mutationType": self.mutation_type,
            "threads": self.threads,
            "seed": self.seed,
            "maxTime": self.max_time,
        }

    def _results(self) -> dict[str, Any]:
        convergence = [
            {
                "generation": entry.generation,
                "fitness": entry.best_fitness,
                "origin": str(entry.origin),
                "elapsedSeconds": entry.elapsed_seconds,
            }
            for entry in self.convergence_log
        ]
        top = [
            {
                "fitness": c.fitness,
                "origin": str(c.origin),
                "permutation": list(c.permutation),
            }
            for c in list(self.population)[: min(_TOP_INDIVIDUALS, self.p)]
        ]
        return {"convergence": convergence, "top_individuals": top}

    def cbp_report(self) -> dict[str, Any]:
        """Parameters, convergence log and best individuals as a dictionary."""
        return {"parameters": self._parameters(), **self._results()}

    def tip_report(self) -> dict[str, Any]:
        """Like :meth:`cbp_report`, plus a description of the TIP instance."""
        inst = self.instance
        if not isinstance(inst, TIPInstance):
            raise TypeError("tip_report needs a TIPInstance")
        return {
            "instance": {
                "filePath": inst.file_path,
                "tools": inst.tools,
                "slots": inst.slots,
                "emptySpaces": inst.empty_spaces,
                "WSACost": inst.wsa_cost,
            },
            **self.cbp_report(),
        }

    @staticmethod
    def _write(report: dict[str, Any], stream: TextIO) -> None:
        stream.write(json.dumps(report, indent=4, sort_keys=True) + "\n")

    def tip_json_output(self, stream: TextIO) -> None:
        """Write the TIP report as indented JSON."""
        self._write(self.tip_report(), stream)

    def cbp_json_output(self, stream: TextIO) -> None:
        """Write the CBP report as indented JSON."""
        self._write(self.cbp_report(), stream)