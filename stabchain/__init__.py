"""
Permutation groups via bases and strong generating sets.
"""

from .block_system import BlockSystem
from .bsgs import BSGS, IncompleteStrongGeneratingSet
from .config import Config, Stats
from .decomposition import (
    WreathDecomposition, disjoint_decomposition, find_wreath_decomposition,
    wreath_decomposition)
from .gap import (
    GroupDescription, format_generators, format_group, parse_generators,
    parse_group)
from .orbit import Orbit, OrbitPartition, orbit
from .partial_perm import PartialPerm
from .perm import ParseError, Perm, format_perm, mult_perms, parse_perm
from .perm_group import PermGroup
from .perm_set import PermSet
from .report import LoggingReporter, Reporter
from .transversal import NotInOrbit
