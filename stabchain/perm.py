"""
Permutations of the points 1..n.

A permutation is stored as the tuple of its images shifted to 0..n-1, so a
product is the same list comprehension as for plain image lists. Products are
read from left to right, `(p * q)[x] == q[p[x]]`, which is the order in which
the stabilizer chain code composes transversal elements.
"""

import re


class ParseError(ValueError):
    """Raised for malformed textual permutations, partial permutations and
    group descriptions.
    """
    pass


class Perm:
    """An immutable permutation of 1..n.
    """
    __slots__ = ('_perm', '_hash')

    def __init__(self, images=()):
        perm = tuple(i - 1 for i in images)
        if set(perm) != set(range(len(perm))):
            raise ValueError('not a permutation')
        self._perm = perm
        self._hash = None

    @classmethod
    def _from_zero_based(cls, perm):
        p = cls.__new__(cls)
        p._perm = perm
        p._hash = None
        return p

    @classmethod
    def identity(cls, n):
        """Return the identity permutation on 1..n.
        """
        return cls._from_zero_based(tuple(range(n)))

    @classmethod
    def from_cycles(cls, n, cycles):
        """Return the product of the given cycles acting on 1..n.
        """
        out = list(range(n))
        for cycle in cycles:
            p = list(range(n))
            cycle = [i - 1 for i in cycle]
            if len(set(cycle)) != len(cycle):
                raise ValueError(f'repeated point in cycle {cycle!r}')
            for i, j in zip(cycle, cycle[1:]):
                p[i] = j
            if cycle:
                p[cycle[-1]] = cycle[0]
            out = [p[i] for i in out]
        return cls._from_zero_based(tuple(out))

    @property
    def degree(self):
        return len(self._perm)

    @property
    def images(self):
        """The image sequence (p[1], ..., p[n]).
        """
        return tuple(i + 1 for i in self._perm)

    def __getitem__(self, x):
        return self._perm[x - 1] + 1

    def __len__(self):
        return len(self._perm)

    def __mul__(self, other):
        q = other._perm
        return Perm._from_zero_based(tuple(q[i] for i in self._perm))

    def __invert__(self):
        inv = [0] * len(self._perm)
        for i, j in enumerate(self._perm):
            inv[j] = i
        return Perm._from_zero_based(tuple(inv))

    def __pow__(self, n):
        if n == 0:
            return Perm.identity(self.degree)
        elif n < 0:
            return (~self) ** -n

        q = self ** (n >> 1)
        q = q * q
        if n & 1:
            q = q * self
        return q

    def __eq__(self, other):
        if not isinstance(other, Perm):
            return NotImplemented
        return self._perm == other._perm

    def __lt__(self, other):
        return self._perm < other._perm

    def __le__(self, other):
        return self._perm <= other._perm

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(self._perm)
        return self._hash

    def __repr__(self):
        return f'Perm({self.degree}, {self})'

    def __str__(self):
        return format_perm(self)

    def is_identity(self):
        return all(i == j for i, j in enumerate(self._perm))

    def moved_points(self):
        return [i + 1 for i, j in enumerate(self._perm) if i != j]

    def smallest_moved_point(self):
        for i, j in enumerate(self._perm):
            if i != j:
                return i + 1
        return None

    def largest_moved_point(self):
        for i in range(len(self._perm) - 1, -1, -1):
            if self._perm[i] != i:
                return i + 1
        return None

    def cycles(self):
        """Return the non-trivial cycles, each starting at its smallest point.
        """
        seen = set()
        out = []
        for i, j in enumerate(self._perm):
            if i in seen or i == j:
                continue
            cycle = [i + 1]
            seen.add(i)
            while j != i:
                seen.add(j)
                cycle.append(j + 1)
                j = self._perm[j]
            out.append(cycle)
        return out

    def shifted(self, k):
        """Relabel every point x as x + k, fixing 1..k.
        """
        return Perm._from_zero_based(
            tuple(range(k)) + tuple(i + k for i in self._perm))

    def extended(self, n):
        """Extend to degree n, fixing the points after the current degree.
        """
        return Perm._from_zero_based(
            self._perm + tuple(range(len(self._perm), n)))

    def restricted(self, points):
        """Restrict to an invariant set of points, fixing everything else.
        """
        p = list(range(len(self._perm)))
        for x in points:
            p[x - 1] = self._perm[x - 1]
        return Perm._from_zero_based(tuple(p))

    def sign(self):
        """Return +1 for even and -1 for odd permutations.
        """
        parity = sum(len(cycle) - 1 for cycle in self.cycles())
        return -1 if parity & 1 else 1


def mult_perms(perms, n=None):
    """Multiply a sequence of permutations, the first one applied first.
    """
    w = None
    for p in perms:
        w = p if w is None else w * p
    if w is None:
        return Perm.identity(n or 0)
    return w


def format_perm(p):
    """Display a permutation as a product of cycles in GAP's syntax.
    """
    out = ['(%s)' % ','.join(map(str, cycle)) for cycle in p.cycles()]
    if not out:
        return '()'
    return ''.join(out)


ELEMENT_SEP_RE = r' *[, ] *'
CYCLE_RE = rf'\(( *\d+({ELEMENT_SEP_RE}\d+)* *)?\) *'


def parse_perm(s, n=0):
    """Parse a permutation given as a product of cycles in GAP's syntax.

    The degree of the result is the larger of n and the largest point
    mentioned in s.
    """
    cycles = []
    stripped = re.subn(r'\s', ' ', s)[0].strip()
    if not stripped:
        raise ParseError(f'could not parse permutation {s!r}')
    for match in re.finditer(CYCLE_RE + r'|.', stripped):
        cycle = match.group().strip()
        if len(cycle) == 1:
            raise ParseError(f'could not parse permutation {s!r}')
        cycle = cycle[1:-1].strip()
        if not cycle:
            continue
        cycle = list(map(int, re.split(ELEMENT_SEP_RE, cycle)))
        if 0 in cycle or len(set(cycle)) != len(cycle):
            raise ParseError(f'invalid cycle in permutation {s!r}')
        cycles.append(cycle)
    n = max(n, max(map(max, cycles), default=0))
    return Perm.from_cycles(n, cycles)
