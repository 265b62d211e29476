import io
import json

import pytest

from permga.cbp import CBPInstance
from permga.chromosome import Chromosome
from permga.ga import GA, ConvergenceEntry
from permga.origin import Origin
from permga.population import Population
from permga.tip import TIPInstance

TIP_TEXT = """5 6
1 2 3 4 5 x
3
0 1 0 2 0
1 0 3 0 1
0 3 0 1 0
2 0 1 0 4
0 1 0 4 0
"""

CBP_TEXT = "header line\n4 0 4\n1 2\n2 3\n3 4\n4 1\n"


@pytest.fixture
def tip():
    return TIPInstance.from_text(TIP_TEXT, "sample.txt")


def make_ga(instance, **overrides):
    params = dict(
        n=5, p=20, pe=0.1, pm=0.2, rhoe=0.6, max_gens=15,
        max_gens_without_improvement=15, wheel_bias=2.0, mutation_type=1,
        crossover_type=2, normalize_permutation=False, threads=1, seed=7,
        max_time=10,
    )
    params.update(overrides)
    return GA(instance, **params)


def test_random_chromosome_is_permutation(tip):
    ga = make_ga(tip)
    c = ga.create_random_chromosome()
    assert sorted(c.permutation) == list(range(5))
    assert c.origin is Origin.RANDOM


def test_initial_population_normalized(tip):
    ga = make_ga(tip, normalize_permutation=True)
    pop = ga.create_initial_population()
    assert len(pop) == 20
    assert all(c[0] == 0 for c in pop)


def test_same_seed_same_population(tip):
    a = make_ga(tip)
    b = make_ga(tip)
    assert [c.permutation for c in a.population] == [c.permutation for c in b.population]


def test_swap_mutation_changes_two_positions(tip):
    ga = make_ga(tip)
    c = Chromosome(list(range(5)))
    ga.swap_mutation(c)
    diffs = [i for i in range(5) if c[i] != i]
    assert len(diffs) == 2
    assert sorted(c.permutation) == list(range(5))


@pytest.mark.parametrize("op", ["two_opt_mutation", "reinsertion_mutation"])
def test_mutations_keep_genes(tip, op):
    ga = make_ga(tip)
    for _ in range(20):
        c = Chromosome(list(range(5)))
        getattr(ga, op)(c)
        assert sorted(c.permutation) == list(range(5))
        assert c.permutation != list(range(5))


def test_mutation_needs_two_genes(tip):
    ga = make_ga(tip, n=1)
    with pytest.raises(ValueError):
        ga.swap_mutation(Chromosome([0]))


def test_cyclic_crossover_positions(tip):
    ga = make_ga(tip)
    c1 = Chromosome([0, 1, 2, 3, 4])
    c2 = Chromosome([3, 4, 0, 2, 1])
    for _ in range(10):
        o1, o2 = ga.cyclic_crossover(c1, c2)
        assert sorted(o1.permutation) == list(range(5))
        assert sorted(o2.permutation) == list(range(5))
        assert o1.origin is Origin.CYCLIC_CROSSOVER
        for i in range(5):
            assert {o1[i], o2[i]} == {c1[i], c2[i]}


def test_order_crossover_permutations(tip):
    ga = make_ga(tip)
    c1 = Chromosome([0, 1, 2, 3, 4])
    c2 = Chromosome([4, 2, 0, 3, 1])
    for _ in range(10):
        o1, o2 = ga.order_crossover(c1, c2)
        assert sorted(o1.permutation) == list(range(5))
        assert sorted(o2.permutation) == list(range(5))
        assert o2.origin is Origin.ORDER_CROSSOVER


def test_crossover_of_identical_parents(tip):
    ga = make_ga(tip)
    parent = Chromosome([2, 0, 4, 1, 3])
    for op in (ga.cyclic_crossover, ga.order_crossover):
        o1, o2 = op(parent, parent.copy())
        assert o1.permutation == parent.permutation
        assert o2.permutation == parent.permutation


def test_biased_wheel_selection_picks_only_weighted(tip):
    ga = make_ga(tip)
    picks = {ga.biased_wheel_selection([0.0, 1.0, 0.0], 1.0) for _ in range(50)}
    assert picks == {1}


def test_calculate_population_fitness(tip):
    ga = make_ga(tip)
    ga.calculate_population_fitness(ga.population)
    for c in ga.population:
        assert c.fitness == tip.fitness(c)


def test_reproduction_keeps_elite(tip):
    ga = make_ga(tip)
    ga.calculate_population_fitness(ga.population)
    ga.population.sort_by_fitness()
    nxt = ga.reproduction(ga.population)
    assert isinstance(nxt, Population) and len(nxt) == 20
    assert nxt[0].permutation == ga.population[0].permutation
    assert nxt[1].permutation == ga.population[1].permutation
    for c in nxt:
        assert sorted(c.permutation) == list(range(5))


def test_mutation_type_four_leaves_mutants(tip):
    ga = make_ga(tip, mutation_type=4, pe=0.0, pm=1.0)
    ga.calculate_population_fitness(ga.population)
    parents = {tuple(c.permutation) for c in ga.population}
    nxt = ga.reproduction(ga.population)
    assert all(tuple(c.permutation) in parents for c in nxt)
    assert all(c.origin is Origin.RANDOM for c in nxt)


def test_run_convergence_improves(tip):
    ga = make_ga(tip)
    ga.run()
    log = ga.convergence_log
    assert log and isinstance(log[0], ConvergenceEntry)
    fits = [e.best_fitness for e in log]
    assert all(a > b for a, b in zip(fits, fits[1:]))
    gens = [e.generation for e in log]
    assert gens == sorted(set(gens))
    assert gens[0] == 1


def test_run_deterministic(tip):
    a = make_ga(tip)
    b = make_ga(tip)
    a.run()
    b.run()
    assert [e.best_fitness for e in a.convergence_log] == [e.best_fitness for e in b.convergence_log]


def test_run_zero_time_does_nothing(tip):
    ga = make_ga(tip, max_time=0)
    ga.run()
    assert ga.convergence_log == []


def test_invalid_crossover_type(tip):
    with pytest.raises(ValueError):
        make_ga(tip, crossover_type=9)


def test_tip_report_and_json(tip):
    ga = make_ga(tip)
    ga.run()
    report = ga.tip_report()
    assert report["instance"]["filePath"] == "sample.txt"
    assert report["instance"]["emptySpaces"] == tip.slots - tip.tools
    assert report["parameters"]["p"] == 20
    assert len(report["top_individuals"]) == 20
    assert report["convergence"][0]["origin"] == "INITIAL"
    out = io.StringIO()
    ga.tip_json_output(out)
    parsed = json.loads(out.getvalue())
    assert parsed == report
    assert list(parsed) == sorted(parsed)


def test_tip_report_needs_tip_instance():
    cbp = CBPInstance.from_text(CBP_TEXT)
    ga = make_ga(cbp, n=4, p=6)
    with pytest.raises(TypeError):
        ga.tip_report()


def test_cbp_json_output():
    cbp = CBPInstance.from_text(CBP_TEXT)
    ga = make_ga(cbp, n=4, p=6)
    ga.run()
    out = io.StringIO()
    ga.cbp_json_output(out)
    parsed = json.loads(out.getvalue())
    assert "instance" not in parsed
    assert parsed["parameters"]["n"] == 4
    assert len(parsed["top_individuals"]) == 6
    assert out.getvalue().endswith("\n")