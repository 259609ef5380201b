import unittest
from random import Random

from stabchain.config import Config
from stabchain.gap import (
    GroupDescription, format_generators, format_group, parse_generators,
    parse_group)
from stabchain.perm import ParseError, Perm
from stabchain.perm_group import PermGroup


def cycles(n, *cs):
    return Perm.from_cycles(n, cs)


class TestFormat(unittest.TestCase):
    def test_generators(self):
        self.assertEqual(format_generators([]), '[]')
        self.assertEqual(
            format_generators([cycles(5, [1, 2, 3]), cycles(5, [4, 5])]),
            '[(1,2,3),(4,5)]')
        self.assertEqual(format_generators([Perm.identity(3)]), '[()]')

    def test_group(self):
        self.assertEqual(
            format_group(5, 6, [cycles(5, [1, 2, 3]), cycles(5, [4, 5])]),
            'degree:5,order:6,gens:[(1,2,3),(4,5)]')


class TestParse(unittest.TestCase):
    def test_parse_generators(self):
        gens = parse_generators('[(1,2,3),(4,5)]', 6)
        self.assertEqual(gens, [cycles(6, [1, 2, 3]), cycles(6, [4, 5])])
        self.assertEqual(parse_generators('[]', 3), [])
        self.assertEqual(parse_generators(' [ (1,2)(3,4), () ] ', 4),
                         [cycles(4, [1, 2], [3, 4]), Perm.identity(4)])

    def test_parse_group(self):
        text = 'degree:5,order:6,gens:[(1,2,3),(4,5)]'
        desc = parse_group(text)
        self.assertEqual(desc, GroupDescription(
            5, 6, [cycles(5, [1, 2, 3]), cycles(5, [4, 5])]))
        self.assertEqual(str(desc), text)

        desc = parse_group('degree: 4, order: 4,\ngens: [(1,2,3,4)]')
        self.assertEqual(desc.degree, 4)
        self.assertEqual(desc.order, 4)

    def test_errors(self):
        for text in [
                'degree:3,order:2,gens:[(1,4)]',
                'degree:3,gens:[]',
                'degree:3,order:2,gens:(1,2)',
                'degree:3,order:2,gens:[(1,2),]',
                'degree:3,order:2,gens:[(1,2]',
                'degree:0,order:1,gens:[]',
                'degree:3,order:0,gens:[]',
                'order:2,degree:3,gens:[]',
                '',
        ]:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_group(text)

    def test_to_group(self):
        desc = parse_group('degree:5,order:6,gens:[(1,2,3),(4,5)]')
        self.assertEqual(desc.to_group().order(), 6)

        cfg = Config(construction='random', rng=Random(4))
        self.assertEqual(desc.to_group(cfg=cfg).order(), 6)

        with self.assertRaises(ValueError):
            parse_group('degree:3,order:5,gens:[(1,2)]').to_group()

    def test_group_roundtrip(self):
        for g in [PermGroup.symmetric(4), PermGroup.dihedral(5),
                  PermGroup(3), PermGroup.cyclic(6)]:
            text = str(g)
            desc = parse_group(text)
            self.assertEqual(str(desc), text)
            self.assertEqual(PermGroup.from_description(desc), g)


if __name__ == '__main__':
    unittest.main()
