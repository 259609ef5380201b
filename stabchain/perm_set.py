"""
Duplicate free generator sets.
"""


class PermSet:
    """An ordered, duplicate free collection of permutations of one degree.

    Smallest and largest moved points are cached per element so that
    repeated queries don't rescan every permutation.
    """
    def __init__(self, perms=(), degree=None):
        self.degree = degree
        self._perms = []
        self._index = set()
        self._moved = {}
        self._smallest = None
        self._largest = None
        self._dirty = False
        self.update(perms)

    def add(self, perm):
        """Add a permutation unless it is already contained.
        """
        if self.degree is None:
            self.degree = perm.degree
        elif perm.degree != self.degree:
            raise ValueError(
                f'permutation of degree {perm.degree} in a set of degree '
                f'{self.degree}')

        if perm in self._index:
            return
        self._index.add(perm)
        self._perms.append(perm)
        self._dirty = True

    def update(self, perms):
        for perm in perms:
            self.add(perm)

    def __contains__(self, perm):
        return perm in self._index

    def __iter__(self):
        return iter(self._perms)

    def __len__(self):
        return len(self._perms)

    def __getitem__(self, i):
        return self._perms[i]

    def __eq__(self, other):
        if not isinstance(other, PermSet):
            return NotImplemented
        return self._index == other._index

    def __repr__(self):
        return 'PermSet([%s])' % ', '.join(map(str, self._perms))

    def empty(self):
        return not self._perms

    def trivial(self):
        """Return whether the set contains only identities.
        """
        return all(p.is_identity() for p in self._perms)

    def _moved_extremes(self, perm):
        if perm not in self._moved:
            self._moved[perm] = (
                perm.smallest_moved_point(), perm.largest_moved_point())
        return self._moved[perm]

    def _update_extremes(self):
        if not self._dirty:
            return
        extremes = [self._moved_extremes(p) for p in self._perms]
        smallest = [lo for lo, hi in extremes if lo is not None]
        largest = [hi for lo, hi in extremes if hi is not None]
        self._smallest = min(smallest, default=None)
        self._largest = max(largest, default=None)
        self._dirty = False

    def smallest_moved_point(self):
        self._update_extremes()
        return self._smallest

    def largest_moved_point(self):
        self._update_extremes()
        return self._largest

    def support(self):
        """Return the sorted list of points moved by some element.
        """
        moved = set()
        for p in self._perms:
            moved.update(p.moved_points())
        return sorted(moved)

    def inverses(self):
        return PermSet((~p for p in self._perms), self.degree)

    def with_inverses(self):
        out = PermSet(self._perms, self.degree)
        out.update(~p for p in self._perms)
        return out

    def minimized(self):
        """Return a copy without identities.
        """
        return PermSet(
            (p for p in self._perms if not p.is_identity()), self.degree)

    def restricted(self, points):
        return PermSet((p.restricted(points) for p in self._perms), self.degree)

    def shifted(self, k):
        return PermSet(
            (p.shifted(k) for p in self._perms),
            None if self.degree is None else self.degree + k)

    def extended(self, n):
        return PermSet((p.extended(n) for p in self._perms), n)


def as_perm_set(generators, degree=None):
    """Wrap any iterable of permutations in a PermSet.
    """
    if isinstance(generators, PermSet):
        return generators
    return PermSet(generators, degree)
