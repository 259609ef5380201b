"""
Orbits of points and point sets.
"""


def orbit(seed, gens):
    """Compute the orbit of a point or of a collection of points.

    Returns the orbit points in the order they were discovered.
    """
    if isinstance(seed, int):
        seed = [seed]

    points = list(dict.fromkeys(seed))
    seen = set(points)
    queue = list(points)

    while queue:
        a = queue.pop(0)
        for gen in gens:
            b = gen[a]
            if b not in seen:
                seen.add(b)
                points.append(b)
                queue.append(b)

    return points


class Orbit:
    """The orbit of a point under a generating set.
    """
    def __init__(self, seed, gens):
        self.points = orbit(seed, gens)
        self._members = set(self.points)

    def __contains__(self, point):
        return point in self._members

    def __iter__(self):
        return iter(self.points)

    def __len__(self):
        return len(self.points)

    def __repr__(self):
        return f'Orbit({self.points})'


class OrbitPartition:
    """Partition of 1..n into the orbits of a generating set.

    Orbits are numbered in the order of their smallest points.
    """
    def __init__(self, degree, gens=(), partitions=None):
        self.degree = degree
        self._index = [None] * (degree + 1)
        self._orbits = []

        if partitions is not None:
            for points in partitions:
                self._add(sorted(points))
            return

        gens = list(gens)
        for x in range(1, degree + 1):
            if self._index[x] is None:
                self._add(sorted(orbit(x, gens)))

    def _add(self, points):
        for x in points:
            self._index[x] = len(self._orbits)
        self._orbits.append(points)

    @property
    def num_partitions(self):
        return len(self._orbits)

    def partition_index(self, x):
        return self._index[x]

    def __getitem__(self, i):
        return self._orbits[i]

    def __iter__(self):
        return iter(self._orbits)

    def __len__(self):
        return len(self._orbits)

    def non_trivial(self):
        """Return the orbits containing more than one point.
        """
        return [points for points in self._orbits if len(points) > 1]

    def __repr__(self):
        return f'OrbitPartition({self._orbits})'
