"""
Transversals of basepoint orbits.

A transversal for the orbit of a root point provides for every orbit point
delta a permutation u_delta mapping the root to delta. Three storage
strategies are implemented, they only differ in memory use and lookup cost:

* SchreierTree stores an edge (generator index, polarity, parent) for every
  point and multiplies along the path to the root on lookup.
* ShallowSchreierTree adds extra shortcut generators until the tree is
  shallow enough, following Seress's "Permutation Group Algorithms" 4.4.3.
* ExplicitTransversal additionally stores every u_delta.

Generators are passed as (g, g_inv) pairs. Both are used as tree edges.
"""

import copy

from .config import Config
from .perm import Perm


class NotInOrbit(ValueError):
    pass


class SchreierTree:
    """A Schreier tree for the orbit of a root point.
    """
    def __init__(self, root, degree, cfg=None):
        self.root = root
        self.degree = degree
        self.cfg = cfg or Config()
        self.gens = []
        self.tree_gens = []
        self.tree = {root: None}
        self.points = [root]
        self.depth = 0

    def copy(self):
        t = copy.copy(self)
        t.gens = list(self.gens)
        t.tree_gens = list(self.tree_gens)
        t.tree = dict(self.tree)
        t.points = list(self.points)
        return t

    def build(self, gens):
        """Build the tree for the orbit of the root under gens.
        """
        self.gens = list(gens)
        self.tree_gens = list(self.gens)
        self.bfs()

    def bfs(self, mode=None):
        """Breadth first search over the tree generators.

        With mode 'gap' the search aborts as soon as a point is discovered at
        a depth of at least twice the number of tree generators and returns
        that point. With mode 'halve' the search completes and returns the
        deepest point if it is too deep. Otherwise None is returned.
        """
        self.tree = {self.root: None}
        self.points = [self.root]
        queue = [(self.root, 0)]
        a, depth = self.root, 0
        limit = 2 * len(self.tree_gens)

        while queue:
            a, depth = queue.pop(0)

            for i, gen_pair in enumerate(self.tree_gens):
                for pol, gen in enumerate(gen_pair):
                    b = gen[a]
                    if b in self.tree:
                        continue

                    self.tree[b] = (i, pol, a)
                    self.points.append(b)
                    queue.append((b, depth + 1))

                    if mode == 'gap' and depth + 1 >= limit:
                        return b

        if mode == 'halve' and self.tree_gens and depth >= limit:
            return a

        self.depth = depth
        return None

    def __contains__(self, point):
        return point in self.tree

    def __len__(self):
        return len(self.tree)

    def orbit(self):
        """Return the orbit points in discovery order, root first.
        """
        return self.points

    def edges(self, delta):
        """Return the tree edges on the path from delta up to the root.
        """
        if delta not in self.tree:
            raise NotInOrbit(f'{delta} not in the orbit of {self.root}')
        path = []
        while delta != self.root:
            i, pol, parent = self.tree[delta]
            path.append((i, pol))
            delta = parent
        return path

    def transversal(self, delta):
        """Return u_delta with u_delta[root] == delta.
        """
        u = Perm.identity(self.degree)
        for i, pol in reversed(self.edges(delta)):
            u = u * self.tree_gens[i][pol]
            self.cfg.stats.products += 1
        return u

    def to_root(self, delta, p=None):
        """Return p * u_delta^-1, which maps p^-1[delta] to the root.
        """
        if p is None:
            p = Perm.identity(self.degree)
        for i, pol in self.edges(delta):
            p = p * self.tree_gens[i][1 - pol]
            self.cfg.stats.products += 1
        return p

    def incoming(self, point, index):
        """Return whether generator index was used as the tree edge from
        point to its image.

        In that case the Schreier generator for this pair is the identity.
        """
        b = self.gens[index][0][point]
        return self.tree.get(b) == (index, 0, point)


class ShallowSchreierTree(SchreierTree):
    """A Schreier tree whose depth is bounded by adding shortcut generators.
    """
    def build(self, gens):
        self.gens = list(gens)
        self.tree_gens = list(self.gens)

        while True:
            a = self.bfs(self.cfg.shallow_tree)
            if a is None:
                break
            # we add a new (tree only) generator to reach the element `a`
            # that was too far from the root in a single step.
            u = self.transversal(a)
            self.tree_gens.append((u, ~u))


class ExplicitTransversal(SchreierTree):
    """A transversal storing one permutation per orbit point.
    """
    def copy(self):
        t = super().copy()
        t.perms = dict(self.perms)
        t.inverses = dict(self.inverses)
        return t

    def build(self, gens):
        super().build(gens)
        self.perms = {self.root: Perm.identity(self.degree)}
        self.inverses = {}
        for b in self.points[1:]:
            i, pol, a = self.tree[b]
            self.perms[b] = self.perms[a] * self.tree_gens[i][pol]
            self.cfg.stats.products += 1

    def transversal(self, delta):
        if delta not in self.tree:
            raise NotInOrbit(f'{delta} not in the orbit of {self.root}')
        return self.perms[delta]

    def to_root(self, delta, p=None):
        if delta not in self.tree:
            raise NotInOrbit(f'{delta} not in the orbit of {self.root}')
        if delta not in self.inverses:
            self.inverses[delta] = ~self.perms[delta]
        if p is None:
            return self.inverses[delta]
        self.cfg.stats.products += 1
        return p * self.inverses[delta]


TRANSVERSALS = {
    'explicit': ExplicitTransversal,
    'schreier_trees': SchreierTree,
    'shallow_schreier_trees': ShallowSchreierTree,
}


def make_transversal(root, degree, cfg):
    """Create an empty transversal of the kind selected by cfg.transversals.
    """
    try:
        cls = TRANSVERSALS[cfg.transversals]
    except KeyError:
        raise ValueError(
            f'unknown transversal storage {cfg.transversals!r}') from None
    t = cls(root, degree, cfg)
    t.build([])
    return t
