"""
Permutation groups represented by a base and strong generating set.
"""

import math

from .bsgs import BSGS
from .gap import format_group
from .orbit import OrbitPartition, orbit
from .perm import Perm
from .perm_set import as_perm_set


class PermGroup:
    """A permutation group acting on 1..degree.

    The group is represented by a stabilizer chain built from the given
    generators using the variant of the Schreier-Sims algorithm selected by
    cfg.construction. Elements are never stored explicitly.
    """
    def __init__(self, degree=1, generators=None, cfg=None, reporter=None,
                 known_order=None, bsgs=None):
        if bsgs is None:
            generators = as_perm_set(generators or (), degree)
            bsgs = BSGS(degree, generators, cfg=cfg, reporter=reporter,
                        known_order=known_order)
        self.bsgs = bsgs
        self._order = bsgs.order()

    @classmethod
    def from_bsgs(cls, bsgs):
        return cls(bsgs=bsgs)

    @classmethod
    def from_description(cls, description, cfg=None, reporter=None,
                         check_order=True):
        """Build a group from a parsed group description.

        The declared order is used as exit condition for the randomized
        Schreier-Sims algorithm. With check_order, a group whose order
        differs from the declared one raises a ValueError.
        """
        group = cls(description.degree, description.generators, cfg=cfg,
                    reporter=reporter, known_order=description.order)
        if check_order and group.order() != description.order:
            raise ValueError(
                f'generators {description.generators} generate a group of '
                f'order {group.order()}, not {description.order}')
        return group

    @classmethod
    def symmetric(cls, degree, cfg=None):
        """Return S_n, generated by the adjacent transpositions.
        """
        gens = [Perm.from_cycles(degree, [[i, i + 1]])
                for i in range(1, degree)]
        return cls.from_bsgs(BSGS.from_strong_generators(
            degree, range(1, degree), gens, cfg=cfg))

    @classmethod
    def cyclic(cls, degree, cfg=None):
        """Return C_n, generated by (1,2,...,n).
        """
        if degree == 1:
            return cls(1, cfg=cfg)
        gen = Perm.from_cycles(degree, [range(1, degree + 1)])
        return cls.from_bsgs(BSGS.from_strong_generators(
            degree, [1], [gen], cfg=cfg))

    @classmethod
    def alternating(cls, degree, cfg=None):
        """Return A_n, generated by the 3-cycles (i,i+1,i+2).
        """
        if degree < 3:
            return cls(degree, cfg=cfg)
        gens = [Perm.from_cycles(degree, [[i, i + 1, i + 2]])
                for i in range(1, degree - 1)]
        return cls.from_bsgs(BSGS.from_strong_generators(
            degree, range(1, degree - 1), gens, cfg=cfg))

    @classmethod
    def dihedral(cls, degree, cfg=None):
        """Return the dihedral group of order 2n acting on an n-gon.

        D_1 is <(1,2)> and D_2 is the Klein four group <(1,2),(3,4)>.
        """
        if degree == 1:
            return cls(2, [Perm.from_cycles(2, [[1, 2]])], cfg=cfg)
        if degree == 2:
            return cls(4, [Perm.from_cycles(4, [[1, 2]]),
                          Perm.from_cycles(4, [[3, 4]])], cfg=cfg)

        rotation = Perm.from_cycles(degree, [range(1, degree + 1)])
        reflection = Perm([1] + [degree + 2 - i for i in range(2, degree + 1)])
        return cls.from_bsgs(BSGS.from_strong_generators(
            degree, [1, 2], [rotation, reflection], cfg=cfg))

    @classmethod
    def direct_product(cls, groups, cfg=None):
        """Return the direct product acting on consecutive ranges of points.
        """
        groups = list(groups)
        total_degree = sum(g.degree for g in groups)

        gens = []
        offset = 0
        for g in groups:
            for p in g.generators():
                gens.append(p.shifted(offset).extended(total_degree))
            offset += g.degree

        return cls(total_degree, gens, cfg=cfg,
                   known_order=math.prod(g.order() for g in groups))

    @classmethod
    def wreath_product(cls, lhs, rhs, cfg=None):
        """Return lhs wr rhs.

        Acts on rhs.degree blocks of lhs.degree consecutive points, lhs acts
        on every block and rhs permutes the blocks.
        """
        m, d = lhs.degree, rhs.degree
        n = m * d

        gens = []
        for i in range(d):
            for h in lhs.generators():
                gens.append(h.shifted(i * m).extended(n))

        for k in rhs.generators():
            images = []
            for block in range(1, d + 1):
                offset = (k[block] - 1) * m
                images.extend(offset + j for j in range(1, m + 1))
            gens.append(Perm(images))

        return cls(n, gens, cfg=cfg,
                   known_order=lhs.order() ** d * rhs.order())

    @property
    def degree(self):
        return self.bsgs.degree

    @property
    def cfg(self):
        return self.bsgs.cfg

    def order(self):
        return self._order

    def generators(self):
        """Return the strong generating set of the group.
        """
        return self.bsgs.strong_generators()

    def is_trivial(self):
        return self._order == 1

    def smallest_moved_point(self):
        return self.generators().smallest_moved_point()

    def largest_moved_point(self):
        return self.generators().largest_moved_point()

    def contains_element(self, perm):
        """Return whether perm is an element of the group.
        """
        return self.bsgs.contains(perm)

    def __contains__(self, perm):
        return self.contains_element(perm)

    def random_element(self):
        """Return a uniformly distributed random element.
        """
        return self.bsgs.sample()

    def __iter__(self):
        """Iterate over all elements.

        The elements are produced on the fly by counting through the
        transversals of all levels like a mixed radix number. Every element is
        returned exactly once, and in the same order every time.
        """
        identity = Perm.identity(self.degree)
        factors = [
            [level.transversal.transversal(b)
             for b in level.transversal.orbit()]
            for level in reversed(self.bsgs.levels)]

        if not factors:
            yield identity
            return

        state = [0] * len(factors)
        partial = []
        p = identity
        for factor in factors:
            p = p * factor[0]
            partial.append(p)

        while True:
            yield partial[-1]

            i = len(factors) - 1
            while i >= 0 and state[i] + 1 == len(factors[i]):
                state[i] = 0
                i -= 1
            if i < 0:
                return

            state[i] += 1
            for j in range(i, len(factors)):
                prev = partial[j - 1] if j > 0 else identity
                partial[j] = prev * factors[j][state[j]]

    def orbits(self):
        return OrbitPartition(self.degree, self.generators())

    def is_transitive(self):
        return len(orbit(1, self.generators())) == self.degree

    def is_symmetric(self):
        return self._order == math.factorial(self.degree)

    def is_shifted_symmetric(self):
        """Return whether this is the symmetric group on its moved points.
        """
        moved = self.generators().support()
        return self._order == math.factorial(len(moved))

    def is_alternating(self):
        return (self.degree > 2 and
                self._order == math.factorial(self.degree) // 2)

    def is_shifted_alternating(self):
        """Return whether this is the alternating group on its moved points.
        """
        moved = self.generators().support()
        return (len(moved) > 2 and
                self._order == math.factorial(len(moved)) // 2)

    def pointwise_stabilizer(self, points):
        """Return the subgroup fixing every given point.
        """
        points = list(dict.fromkeys(points))
        bsgs = self.bsgs.copy()
        bsgs.change_base(points)
        return PermGroup.from_bsgs(bsgs.subchain(len(points)))

    def restricted(self, points):
        """Return the action on an invariant set of points.

        The result has the same degree and fixes every other point.
        """
        gens = [g.restricted(points) for g in self.generators()]
        return PermGroup(self.degree, gens, cfg=self.cfg)

    def conjugated(self, w):
        """Return w^-1 G w.
        """
        bsgs = self.bsgs.copy()
        bsgs.conjugate(w)
        return PermGroup.from_bsgs(bsgs)

    def disjoint_decomposition(self, complete=True,
                               disjoint_orbit_optimization=False):
        """Find a disjoint subgroup decomposition.

        See stabchain.decomposition.disjoint_decomposition.
        """
        from .decomposition import disjoint_decomposition
        return disjoint_decomposition(
            self, complete, disjoint_orbit_optimization)

    def wreath_decomposition(self):
        """Find a wreath product decomposition.

        Returns [sigma(K), H_1, ..., H_d] or an empty list, see
        stabchain.decomposition.find_wreath_decomposition.
        """
        from .decomposition import find_wreath_decomposition
        return find_wreath_decomposition(self).groups()

    def __eq__(self, other):
        if not isinstance(other, PermGroup):
            return NotImplemented
        if self.degree != other.degree or self._order != other._order:
            return False
        return all(self.contains_element(g) for g in other.generators())

    __hash__ = None

    def __repr__(self):
        return f'PermGroup({self})'

    def __str__(self):
        return format_group(self.degree, self._order, self.generators())
