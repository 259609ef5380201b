from dataclasses import dataclass, field
from typing import Literal
from random import Random


@dataclass
class Stats:
    products: int = 0
    rounds: int = 0


@dataclass
class Config:
    # Variant of the Schreier-Sims algorithm used to build stabilizer chains.
    #
    # 'deterministic': Sift every Schreier generator, the result is always a
    #                  complete strong generating set.
    # 'random':        Sift product replacement random elements until
    #                  exit_rounds rounds in a row make no progress.
    construction: Literal['deterministic', 'random'] = 'deterministic'

    # How the transversal of every level is stored.
    #
    # 'explicit':               One permutation per orbit point.
    # 'schreier_trees':         One edge per orbit point, lookups multiply
    #                           along the path to the root.
    # 'shallow_schreier_trees': Schreier trees with extra shortcut edges
    #                           bounding the depth.
    transversals: Literal[
        'explicit', 'schreier_trees', 'shallow_schreier_trees'
    ] = 'shallow_schreier_trees'

    # Strategy to build shallow Schreier trees.
    #
    # 'gap':   Use the algorithm implemented by GAP and described in Seress's
    #          "Permutation Group Algorithms" 4.4.3.
    # 'halve': Variant of 'gap' which adds a generator for the deepest point of
    #          the orbit instead of the first exceeding the threshold.
    shallow_tree: Literal['gap', 'halve'] = 'gap'

    # Exit the randomized algorithm after the given number of rounds without
    # progress.
    exit_rounds: int = 10

    # Remove redundant strong generators after construction.
    reduce_gens: bool = False

    # Parameters for black box random element generation. See GAP's
    # documentation for ProductReplacer.
    rng_accus: int = 5
    rng_extra_slots: int = 5
    rng_scramble: int = 30
    rng_scramble_factor: int = 4

    stats: Stats = field(default_factory=lambda: Stats())
    rng: Random = field(default_factory=lambda: Random())
