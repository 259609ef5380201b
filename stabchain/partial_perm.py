"""
Partial permutations, i.e. injective partial maps on 0..n-1.

Undefined images are represented by -1. Trailing undefined entries are
dropped on construction so that equal maps compare equal regardless of the
length of the list they were built from.
"""

import re

from .perm import Perm, ParseError


class PartialPerm:
    """An immutable injective partial map on 0..n-1.
    """
    __slots__ = ('_pperm', 'dom', 'im')

    def __init__(self, mapping=()):
        pperm = list(mapping)
        while pperm and pperm[-1] == -1:
            pperm.pop()

        images = [j for j in pperm if j != -1]
        if any(j < -1 for j in pperm):
            raise ValueError('invalid image in partial permutation')
        if len(set(images)) != len(images):
            raise ValueError('partial permutation is not injective')

        self._pperm = tuple(pperm)
        self.dom = [i for i, j in enumerate(pperm) if j != -1]
        self.im = sorted(images)

    @classmethod
    def identity(cls, n):
        """Return the identity on 0..n-1.
        """
        return cls(range(n))

    @classmethod
    def from_dom_im(cls, dom, im):
        """Return the partial permutation mapping dom[k] to im[k].
        """
        if len(dom) != len(im):
            raise ValueError('domain and image differ in size')
        pperm = [-1] * (max(dom, default=-1) + 1)
        for i, j in zip(dom, im):
            pperm[i] = j
        return cls(pperm)

    @classmethod
    def parse(cls, s):
        """Parse the chain and cycle notation produced by str().
        """
        stripped = re.sub(r'\s', '', s)
        if stripped == '()':
            return cls()

        token_re = r'\[(\d+(?:,\d+)*)\]|\((\d+(?:,\d+)*)\)'
        if not re.fullmatch(f'(?:{token_re})+', stripped):
            raise ParseError(f'could not parse partial permutation {s!r}')

        mapping = {}

        def add(i, j):
            if i in mapping:
                raise ParseError(
                    f'point {i} mapped twice in partial permutation {s!r}')
            mapping[i] = j

        for match in re.finditer(token_re, stripped):
            chain, cycle = match.groups()
            if chain is not None:
                points = list(map(int, chain.split(',')))
                for i, j in zip(points, points[1:]):
                    add(i, j)
            else:
                points = list(map(int, cycle.split(',')))
                for i, j in zip(points, points[1:] + points[:1]):
                    add(i, j)

        pperm = [-1] * (max(mapping, default=-1) + 1)
        for i, j in mapping.items():
            pperm[i] = j
        try:
            return cls(pperm)
        except ValueError as e:
            raise ParseError(f'{e}: {s!r}') from e

    def __getitem__(self, i):
        if 0 <= i < len(self._pperm):
            return self._pperm[i]
        return -1

    def __len__(self):
        return len(self._pperm)

    @property
    def dom_min(self):
        return self.dom[0] if self.dom else -1

    @property
    def dom_max(self):
        return self.dom[-1] if self.dom else -1

    @property
    def im_min(self):
        return self.im[0] if self.im else -1

    @property
    def im_max(self):
        return self.im[-1] if self.im else -1

    def empty(self):
        return not self.dom

    def id(self):
        """Return whether every defined point is mapped to itself.
        """
        return all(self._pperm[i] == i for i in self.dom)

    def __invert__(self):
        inv = [-1] * (self.im_max + 1)
        for i in self.dom:
            inv[self._pperm[i]] = i
        return PartialPerm(inv)

    def __mul__(self, other):
        return PartialPerm(other[j] if j != -1 else -1 for j in self._pperm)

    def __eq__(self, other):
        if not isinstance(other, PartialPerm):
            return NotImplemented
        return self._pperm == other._pperm

    def __hash__(self):
        return hash(self._pperm)

    def restricted(self, points):
        """Restrict the domain to the given points.
        """
        points = set(points)
        return PartialPerm(
            j if i in points else -1 for i, j in enumerate(self._pperm))

    def to_perm(self, degree):
        """Complete to a permutation of 1..degree.

        Partial point i becomes point i + 1. Every chain is closed into a
        cycle by mapping its last point to its first one and all other
        undefined points are fixed.
        """
        if max(self.dom_max, self.im_max) >= degree:
            raise ValueError(
                f'partial permutation does not fit into degree {degree}')

        perm = list(range(degree))
        for i in self.dom:
            perm[i] = self._pperm[i]

        for start in self._chain_starts():
            end = start
            while self[end] != -1:
                end = self[end]
            perm[end] = start

        return Perm._from_zero_based(tuple(perm))

    def _chain_starts(self):
        im = set(self.im)
        return [i for i in self.dom if i not in im]

    def __repr__(self):
        return f'PartialPerm({list(self._pperm)})'

    def __str__(self):
        if not self.dom:
            return '()'

        out = []
        seen = set()

        for start in self._chain_starts():
            chain = [start]
            j = self[start]
            while j != -1:
                chain.append(j)
                j = self[j]
            seen.update(chain)
            out.append('[%s]' % ', '.join(map(str, chain)))

        for start in self.dom:
            if start in seen:
                continue
            cycle = [start]
            j = self[start]
            while j != start:
                cycle.append(j)
                j = self[j]
            seen.update(cycle)
            out.append('(%s)' % ', '.join(map(str, cycle)))

        return ''.join(out)
