"""
Block systems of permutation groups.

A block system is a partition of 1..n into blocks of equal size that is
invariant under the group, i.e. every group element maps every block onto
some block.
"""

import itertools

from .orbit import OrbitPartition
from .perm import Perm
from .perm_group import PermGroup


class BlockSystem:
    def __init__(self, degree, blocks):
        self.degree = degree
        self.blocks = sorted(sorted(block) for block in blocks)
        self._index = [None] * (degree + 1)
        for i, block in enumerate(self.blocks):
            for x in block:
                self._index[x] = i

        if None in self._index[1:]:
            raise ValueError('blocks do not cover every point')

    @classmethod
    def from_classes(cls, classes):
        """Build a block system from a list mapping each point x to the label
        classes[x - 1] of its block.
        """
        blocks = {}
        for x, label in enumerate(classes, 1):
            blocks.setdefault(label, []).append(x)
        return cls(len(classes), blocks.values())

    def __len__(self):
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def __getitem__(self, i):
        return self.blocks[i]

    def block_index(self, x):
        return self._index[x]

    def block_size(self):
        return len(self.blocks[0])

    def trivial(self):
        return len(self.blocks) in (1, self.degree)

    def __eq__(self, other):
        if not isinstance(other, BlockSystem):
            return NotImplemented
        return self.degree == other.degree and self.blocks == other.blocks

    def __hash__(self):
        return hash(tuple(map(tuple, self.blocks)))

    def __repr__(self):
        return f'BlockSystem({self.degree}, {self.blocks})'

    def __str__(self):
        return '{%s}' % ', '.join(
            '{%s}' % ', '.join(map(str, block)) for block in self.blocks)

    def block_permuter(self, gens, cfg=None):
        """Return the group induced on the blocks by the given generators.

        Block i of the system is point i + 1 of the resulting group.
        """
        images = []
        for g in gens:
            images.append(Perm(
                [self._index[g[block[0]]] + 1 for block in self.blocks]))
        return PermGroup(len(self.blocks), images, cfg=cfg)

    @staticmethod
    def is_block(gens, block):
        """Return whether every generator maps block onto itself or onto a
        disjoint set.
        """
        block = set(block)
        for g in gens:
            image = {g[x] for x in block}
            if image != block and not image.isdisjoint(block):
                return False
        return True

    @staticmethod
    def block_stabilizers(gens, block):
        """Return the generators mapping block onto itself.
        """
        block = set(block)
        return [g for g in gens if {g[x] for x in block} == block]

    @classmethod
    def from_block(cls, gens, block, degree):
        """Return the block system formed by the images of block.

        Points outside the orbit of block become singleton blocks.
        """
        gens = list(gens)
        first = tuple(sorted(block))
        blocks = [first]
        seen = {first}
        queue = [first]

        while queue:
            b = queue.pop(0)
            for g in gens:
                image = tuple(sorted(g[x] for x in b))
                if image not in seen:
                    seen.add(image)
                    blocks.append(image)
                    queue.append(image)

        covered = set(itertools.chain.from_iterable(blocks))
        blocks.extend((x,) for x in range(1, degree + 1) if x not in covered)
        return cls(degree, blocks)

    @classmethod
    def minimal(cls, gens, initial_class, degree):
        """Return the finest block system with initial_class in one block.

        This is Atkinson's algorithm. Starting from the initial class, pairs
        of points that must lie in a common block are merged in a union find
        structure, and the images of every merged pair are merged in turn.
        """
        gens = list(gens)
        parent = list(range(degree + 1))

        def find(x):
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        def merge(x, y):
            x, y = find(x), find(y)
            if x == y:
                return False
            parent[max(x, y)] = min(x, y)
            return True

        initial_class = list(initial_class)
        first = initial_class[0]
        queue = []
        for x in initial_class[1:]:
            if merge(first, x):
                queue.append((first, x))

        while queue:
            x, y = queue.pop()
            for g in gens:
                a, b = g[x], g[y]
                if merge(a, b):
                    queue.append((a, b))

        block = [x for x in range(1, degree + 1) if find(x) == find(first)]
        return cls.from_block(gens, block, degree)

    @classmethod
    def non_trivial(cls, group, assume_transitivity=False):
        """Find non-trivial block systems of a group.

        For transitive groups, every minimal block system containing the
        first point together with one point of each orbit of its stabilizer
        is returned.

        For other groups, the block systems of the action on every orbit are
        combined. Block systems with blocks spanning multiple orbits are not
        found.
        """
        if assume_transitivity or group.is_transitive():
            return cls._non_trivial_transitive(group)
        return cls._non_trivial_non_transitive(group)

    @classmethod
    def _non_trivial_transitive(cls, group):
        if group.degree < 3:
            return []

        gens = list(group.generators())
        stabilizer = group.pointwise_stabilizer([1])
        representatives = [
            points[0] for points in stabilizer.orbits() if points[0] != 1]

        result = []
        for r in representatives:
            bs = cls.minimal(gens, [1, r], group.degree)
            if not bs.trivial() and bs not in result:
                result.append(bs)
        return result

    @classmethod
    def _non_trivial_non_transitive(cls, group):
        choices = []
        for points in OrbitPartition(group.degree, group.generators()):
            singletons = [[x] for x in points]
            if len(points) == 1:
                choices.append([singletons])
                continue

            index = {x: i for i, x in enumerate(points, 1)}
            gens = [Perm([index[g[x]] for x in points])
                    for g in group.generators()]
            action = PermGroup(len(points), gens, cfg=group.cfg)

            orbit_choices = [singletons, [list(points)]]
            for bs in cls._non_trivial_transitive(action):
                orbit_choices.append(
                    [[points[x - 1] for x in block] for block in bs])
            choices.append(orbit_choices)

        result = []
        for combination in itertools.product(*choices):
            blocks = list(itertools.chain.from_iterable(combination))
            if len({len(block) for block in blocks}) != 1:
                continue
            bs = cls(group.degree, blocks)
            if not bs.trivial() and bs not in result:
                result.append(bs)
        return result
