"""
Text format for permutations, generator lists and group descriptions.

Permutations use GAP's cycle syntax, e.g. (1,2,3)(4,5) with () for the
identity. A group description looks like

    degree:5,order:120,gens:[(1,2,3,4,5),(1,2)]
"""

import re
from collections import namedtuple

from .perm import CYCLE_RE, ParseError, format_perm, parse_perm

__all__ = [
    'GroupDescription', 'ParseError', 'format_perm', 'format_generators',
    'format_group', 'parse_perm', 'parse_generators', 'parse_group',
]

PERM_RE = rf'(?:{CYCLE_RE})+'
GENERATORS_RE = rf' *\[ *(?:{PERM_RE}(?:, *{PERM_RE})*)?\] *'
GROUP_RE = r' *degree *: *(\d+) *, *order *: *(\d+) *, *gens *: *(.*)'


class GroupDescription(namedtuple(
        'GroupDescription', ['degree', 'order', 'generators'])):
    __slots__ = ()

    def to_group(self, cfg=None, reporter=None):
        """Build the described group, checking its order.
        """
        from .perm_group import PermGroup
        return PermGroup.from_description(self, cfg=cfg, reporter=reporter)

    def __str__(self):
        return format_group(self.degree, self.order, self.generators)


def format_generators(gens):
    return '[%s]' % ','.join(format_perm(p) for p in gens)


def format_group(degree, order, gens):
    return f'degree:{degree},order:{order},gens:{format_generators(gens)}'


def parse_generators(s, degree):
    """Parse a list of permutations of the given degree.
    """
    stripped = re.sub(r'\s', ' ', s)
    if not re.fullmatch(GENERATORS_RE, stripped):
        raise ParseError(f'malformed generator list {s!r}')

    gens = []
    for match in re.finditer(PERM_RE, stripped):
        p = parse_perm(match.group(), degree)
        if p.degree != degree:
            raise ParseError(
                f'permutation {match.group().strip()!r} moves points beyond '
                f'degree {degree}')
        gens.append(p)
    return gens


def parse_group(s):
    """Parse a group description into a GroupDescription.
    """
    match = re.fullmatch(GROUP_RE, re.sub(r'\s', ' ', s))
    if not match:
        raise ParseError(f'malformed group description {s!r}')

    degree, order = int(match[1]), int(match[2])
    if degree < 1:
        raise ParseError(f'invalid degree in group description {s!r}')
    if order < 1:
        raise ParseError(f'invalid order in group description {s!r}')

    return GroupDescription(degree, order, parse_generators(match[3], degree))
