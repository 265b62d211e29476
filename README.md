# permga

A genetic algorithm that searches over permutations. It solves two problems:

- **TIP** (tool indexing problem): tools are placed in the slots of a circular magazine. The cost of a layout is the sum, over every pair of tools, of their switching frequency times the circular distance between them, where going round the long way also passes the empty slots.
- **CBP** (cyclic bandwidth problem): the nodes of a graph are laid out on a cycle. The cost of a layout is the largest cyclic distance between the two ends of any edge.

Lower fitness is better. Each generation is evaluated and sorted. The elite share of it is copied over unchanged. Mutants of parents picked by a biased roulette wheel come next, and crossover offspring fill the rest. The run stops after a set number of generations, after a number of generations with no improvement, or once the time limit in minutes is reached.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
permga-tip --filePath=instance.txt --p=500 --maxGens=2000 --seed=7
permga-cbp --filePath=graph.txt --mutationType=4 --crossoverType=3
```

Both commands print a JSON report to standard output, indented by four spaces with its keys sorted. The report holds:

- `parameters`: the settings of the run;
- `convergence`: one entry per generation in which the best fitness improved, with `generation`, `fitness`, `origin` (the operator that produced the best individual) and `elapsedSeconds`;
- `top_individuals`: the best 20 individuals of the final population (fewer if the population is smaller), each with `fitness`, `origin` and `permutation`.

The TIP report also has an `instance` section with `filePath`, `tools`, `slots`, `emptySpaces` and `WSACost`.

If the instance file cannot be opened or parsed, the command prints `error: ...` to standard error and exits with status 1.

Options take the form `--name=value`. Unknown arguments are ignored. A numeric value that cannot be read counts as 0.

| Option | Default | Meaning |
|---|---|---|
| `--filePath` | | instance file |
| `--p` | 1000 | population size |
| `--pe` | 0.10 | elite fraction |
| `--pm` | 0.20 | mutant fraction |
| `--rhoe` | 0.60 | reported only |
| `--wheelBias` | 50.0 | exponent applied to `1/fitness` for selection |
| `--mutationType` | 1 | `4` leaves mutants unchanged; any other value picks swap, 2-opt or reinsertion at random |
| `--crossoverType` | 2 | `1` cyclic, `2` order, `3` either at random; any other value is an error |
| `--maxGens` | 1000 | generation limit |
| `--maxGensWithoutImprovement` | 1000 | stagnation limit |
| `--threads` | 4 | reported only |
| `--seed` | 123 | random seed |
| `--maxTime` | 10 | time limit in whole minutes |
| `--normalizePermutation` | 0 | when non-zero, rotate every permutation so that it starts with 0 |

## Instance files

A TIP file holds, separated by whitespace:

1. the number of tools and the number of slots;
2. one entry per slot, either a tool number counted from 1 or `x`;
3. the WSA cost;
4. a tools × tools frequency matrix.

Only the upper triangle of the frequency matrix enters the cost.

A CBP file has a header line, which is ignored. After it come the node count, the critical-node count and the edge count. Then comes one pair of node numbers counted from 1 for each edge. An edge that names a node out of range is an error.

Both `TIPInstance` and `CBPInstance` offer `from_file(path)` and `from_text(text, file_path="")`. Malformed input raises `ValueError`, and a file that cannot be opened raises `OSError`.

## Library use

```python
import sys

from permga.ga import GA
from permga.tip import TIPInstance

instance = TIPInstance.from_file("instance.txt")
ga = GA(instance, instance.tools, 200, 0.1, 0.2, 0.6, 500, 500, 50.0, 1, 2, False, 1, 42, 10)
ga.run()
report = ga.tip_report()
print(report["top_individuals"][0]["fitness"])
ga.tip_json_output(sys.stdout)
```

The `GA` arguments in order are: instance, `n` (number of genes), `p`, `pe`, `pm`, `rhoe`, `max_gens`, `max_gens_without_improvement`, `wheel_bias`, `mutation_type`, `crossover_type`, `normalize_permutation`, `threads`, `seed`, `max_time`.

`CBPInstance` in `permga.cbp` works the same way; pass `instance.node_count` as `n` and use `cbp_report()` or `cbp_json_output(stream)`. `tip_report()` raises `TypeError` for any instance other than a `TIPInstance`.

Any object with a `fitness(chromosome)` method can be optimised, for example a subclass of `permga.instance.Instance`. After `run()` the convergence log is in `ga.convergence_log` as `ConvergenceEntry` records, and the final population is in `ga.population`. The operators are available on their own as well: `swap_mutation`, `two_opt_mutation`, `reinsertion_mutation`, `cyclic_crossover` and `order_crossover`. The mutations need at least two genes.

## Limits

Fitness is evaluated one chromosome at a time in a single thread. The `threads` setting is only carried into the report. The same holds for `rhoe`, which is recorded but does not steer the search.