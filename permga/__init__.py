"""Genetic algorithm over permutations for tool indexing and cyclic bandwidth problems."""

__version__ = "0.1.0"