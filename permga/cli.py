"""Command-line entry points for the TIP and CBP solvers."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Callable

from .cbp import CBPInstance
from .ga import GA
from .instance import Instance
from .tip import TIPInstance

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class Options:
    """Solver settings taken from the command line."""

    file_path: str = ""
    p: int = 1000
    pe: float = 0.10
    pm: float = 0.20
    rhoe: float = 0.60
    wheel_bias: float = 50.0
    mutation_type: int = 1
    crossover_type: int = 2
    max_gens: int = 1000
    max_gens_without_improvement: int = 1000
    threads: int = 4
    seed: int = 123
    max_time: int = 10
    normalize_permutation: bool = False


_FIELDS: list[tuple[str, str, Callable[[str], object]]] = [
    ("--filePath=", "file_path", str),
    ("--p=", "p", _atoi),
    ("--pe=", "pe", _atof),
    ("--pm=", "pm", _atof),
    ("--rhoe=", "rhoe", _atof),
    ("--maxGens=", "max_gens", _atoi),
    ("--maxGensWithoutImprovement=", "max_gens_without_improvement", _atoi),
    ("--wheelBias=", "wheel_bias", _atof),
    ("--threads=", "threads", _atoi),
    ("--seed=", "seed", _atoi),
    ("--maxTime=", "max_time", _atoi),
    ("--mutationType=", "mutation_type", _atoi),
    ("--crossoverType=", "crossover_type", _atoi),
    ("--normalizePermutation=", "normalize_permutation", lambda v: _atoi(v) != 0),
]


def parse_arguments(argv: list[str]) -> Options:
    """Read ``--name=value`` arguments; unknown arguments are ignored."""
    options = Options()
    for arg in argv:
        for prefix, name, convert in _FIELDS:
            if arg.startswith(prefix):
                setattr(options, name, convert(arg[len(prefix):]))
                break
    return options


def _solve(
    argv: list[str] | None,
    load: Callable[[str], Instance],
    size: Callable[[Instance], int],
    report: Callable[[GA], None],
) -> int:
    options = parse_arguments(sys.argv[1:] if argv is None else argv)
    try:
        instance = load(options.file_path)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    ga = GA(
        instance,
        size(instance),
        options.p,
        options.pe,
        options.pm,
        options.rhoe,
        options.max_gens,
        options.max_gens_without_improvement,
        options.wheel_bias,
        options.mutation_type,
        options.crossover_type,
        options.normalize_permutation,
        options.threads,
        options.seed,
        options.max_time,
    )
    ga.run()
    report(ga)
    return 0


def main_tip(argv: list[str] | None = None) -> int:
    """Solve a tool indexing instance and print the JSON report."""
    return _solve(
        argv,
        TIPInstance.from_file,
        lambda inst: inst.tools,
        lambda ga: ga.tip_json_output(sys.stdout),
    )


def main_cbp(argv: list[str] | None = None) -> int:
    """Solve a cyclic bandwidth instance and print the JSON report."""
    return _solve(
        argv,
        CBPInstance.from_file,
        lambda inst: inst.node_count,
        lambda ga: ga.cbp_json_output(sys.stdout),
    )