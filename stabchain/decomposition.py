"""
Decompositions of permutation groups into disjoint direct products and wreath
products.
"""

import math

from .block_system import BlockSystem
from .perm import Perm
from .perm_group import PermGroup


def disjoint_decomposition(group, complete=True,
                           disjoint_orbit_optimization=False):
    """Decompose a group into a direct product of subgroups with pairwise
    disjoint supports.

    The complete mode finds the finest such decomposition. The incomplete
    mode only merges strong generators with overlapping supports, which is
    much faster but can miss decompositions. If no decomposition exists, [G]
    is returned.
    """
    if complete:
        return _disjoint_decomposition_complete(
            group, disjoint_orbit_optimization)
    return _disjoint_decomposition_incomplete(group)


def _disjoint_decomposition_incomplete(group):
    classes = []
    for g in group.generators():
        classes.append(([g], set(g.moved_points())))

    merged = True
    while merged:
        merged = False
        for i in range(len(classes)):
            for j in range(i + 1, len(classes)):
                if classes[i][1].isdisjoint(classes[j][1]):
                    continue
                gens, moved = classes.pop(j)
                classes[i][0].extend(gens)
                classes[i][1].update(moved)
                merged = True
                break
            if merged:
                break

    if len(classes) < 2:
        return [group]

    classes.sort(key=lambda c: min(c[1]))
    return [PermGroup(group.degree, gens, cfg=group.cfg)
            for gens, moved in classes]


def _disjoint_decomposition_complete(group, disjoint_orbit_optimization):
    if group.is_trivial():
        return [group]

    orbits = group.orbits().non_trivial()
    if disjoint_orbit_optimization:
        classes = _dependency_classes(group, orbits)
    else:
        classes = [[points] for points in orbits]

    result = []
    stack = [(classes, group)]
    while stack:
        classes, g = stack.pop()
        split = _find_split(classes, g)
        if split is None:
            result.append(g)
            continue
        (classes1, g1), (classes2, g2) = split
        stack.append((classes2, g2))
        stack.append((classes1, g1))
    return result


def _find_split(classes, group):
    """Find a bipartition of the orbit classes such that the group is the
    direct product of its actions on both halves.
    """
    k = len(classes)
    # The last class always goes into the second half, this enumerates every
    # bipartition exactly once.
    for mask in range(1, 2 ** (k - 1)):
        classes1 = [c for i, c in enumerate(classes) if mask >> i & 1]
        classes2 = [c for i, c in enumerate(classes) if not mask >> i & 1]

        g1 = group.restricted(_points(classes1))
        g2 = group.restricted(_points(classes2))
        if g1.order() * g2.order() == group.order():
            return (classes1, g1), (classes2, g2)
    return None


def _points(classes):
    return [x for orbits in classes for points in orbits for x in points]


def orbits_dependent(group, orbit1, orbit2, stabilizer=None):
    """Return whether fixing every point of orbit1 restricts the action on
    orbit2.

    If the orbits are independent, the action of the group on orbit2 equals
    the action of the pointwise stabilizer of orbit1 on orbit2.
    """
    if stabilizer is None:
        stabilizer = group.pointwise_stabilizer(orbit1)
    action = group.restricted(orbit2)
    stabilizer_action = stabilizer.restricted(orbit2)
    return action.order() != stabilizer_action.order()


def _dependency_classes(group, orbits):
    """Merge dependent orbits into classes that can't be separated by a
    disjoint decomposition.
    """
    parent = list(range(len(orbits)))

    def find(i):
        while parent[i] != i:
            i = parent[i]
        return i

    stabilizers = [group.pointwise_stabilizer(points) for points in orbits]
    for i in range(len(orbits)):
        for j in range(len(orbits)):
            if i == j or find(i) == find(j):
                continue
            if orbits_dependent(group, orbits[i], orbits[j], stabilizers[i]):
                parent[max(find(i), find(j))] = min(find(i), find(j))

    classes = {}
    for i, points in enumerate(orbits):
        classes.setdefault(find(i), []).append(points)
    return list(classes.values())


class WreathDecomposition:
    """Result of a wreath product decomposition attempt.

    status is one of:

    'found':            G = H wr K with the given block system. The base group
                        is generated by block_stabilizers, block_permuter is
                        the image sigma(K) of the block permuting group.
    'not_decomposable': G is primitive, i.e. has no non-trivial block system.
    'unknown':          No decomposition was found, but one might exist.
    """
    FOUND = 'found'
    NOT_DECOMPOSABLE = 'not_decomposable'
    UNKNOWN = 'unknown'

    def __init__(self, status, block_system=None, block_permuter=None,
                 block_stabilizers=()):
        self.status = status
        self.block_system = block_system
        self.block_permuter = block_permuter
        self.block_stabilizers = list(block_stabilizers)

    def __bool__(self):
        return self.status == self.FOUND

    def groups(self):
        """Return [sigma(K), H_1, ..., H_d] or [] if nothing was found.
        """
        if not self:
            return []
        return [self.block_permuter] + self.block_stabilizers

    def __repr__(self):
        return (f'WreathDecomposition({self.status!r}, '
                f'block_system={self.block_system})')


def find_wreath_decomposition(group):
    """Try to decompose a group as wreath product H wr K.

    Every non-trivial block system is tried in turn, see
    wreath_decomposition.
    """
    if group.degree == 1:
        return WreathDecomposition(WreathDecomposition.NOT_DECOMPOSABLE)

    transitive = group.is_transitive()
    systems = BlockSystem.non_trivial(group, assume_transitivity=transitive)
    for bs in systems:
        result = wreath_decomposition(group, bs)
        if result:
            return result

    if transitive and not systems:
        return WreathDecomposition(WreathDecomposition.NOT_DECOMPOSABLE)
    return WreathDecomposition(WreathDecomposition.UNKNOWN)


def wreath_decomposition(group, bs):
    """Check whether group is the wreath product described by a block system.

    With K the group induced on the blocks and H_i the pointwise stabilizer
    of the complement of block i, the group must contain the canonical image
    sigma(K), every H_i must be H_1 moved onto block i, and the order must be
    |K| * |H_1| * ... * |H_d|.
    """
    unknown = WreathDecomposition(WreathDecomposition.UNKNOWN)
    if bs.trivial():
        return unknown

    permuter = bs.block_permuter(group.generators(), cfg=group.cfg)
    images = [_block_permuter_image(bs, k) for k in permuter.generators()]
    if not all(group.contains_element(p) for p in images):
        return unknown

    sigma = PermGroup(group.degree, images, cfg=group.cfg,
                      known_order=permuter.order())

    stabilizers = _block_stabilizers(group, bs)
    if stabilizers is None:
        return unknown

    order = sigma.order() * math.prod(h.order() for h in stabilizers)
    if order != group.order():
        return unknown

    return WreathDecomposition(
        WreathDecomposition.FOUND, bs, sigma, stabilizers)


def _block_permuter_image(bs, k):
    """Lift a permutation of blocks to a permutation of points, moving each
    block onto its image block in sorted order.
    """
    images = [None] * bs.degree
    for i, block in enumerate(bs):
        target = bs[k[i + 1] - 1]
        for x, y in zip(block, target):
            images[x - 1] = y
    return Perm(images)


def _transport(degree, block1, block2):
    """Return the involution exchanging two disjoint blocks in sorted order.
    """
    images = list(range(1, degree + 1))
    for x, y in zip(block1, block2):
        images[x - 1], images[y - 1] = y, x
    return Perm(images)


def _block_stabilizers(group, bs):
    def complement(block):
        return [x for x in range(1, group.degree + 1) if x not in block]

    first = group.pointwise_stabilizer(complement(bs[0]))
    stabilizers = [first]
    for block in bs[1:]:
        h = group.pointwise_stabilizer(complement(block))
        if h.order() != first.order():
            return None
        transported = first.conjugated(_transport(group.degree, bs[0], block))
        if not all(h.contains_element(p) for p in transported.generators()):
            return None
        stabilizers.append(h)
    return stabilizers
