import unittest

from stabchain.block_system import BlockSystem
from stabchain.decomposition import (
    WreathDecomposition, disjoint_decomposition, find_wreath_decomposition,
    orbits_dependent, wreath_decomposition)
from stabchain.perm import Perm
from stabchain.perm_group import PermGroup


def cycles(n, *cs):
    return Perm.from_cycles(n, cs)


class TestDisjointDecomposition(unittest.TestCase):
    def test_direct_product(self):
        g = PermGroup.direct_product(
            [PermGroup.symmetric(3), PermGroup.cyclic(2)])
        for complete in [True, False]:
            for optimization in [True, False]:
                factors = g.disjoint_decomposition(complete, optimization)
                self.assertEqual([f.order() for f in factors], [6, 2])
                self.assertEqual(factors[0].generators().support(), [1, 2, 3])
                self.assertEqual(factors[1].generators().support(), [4, 5])

    def test_three_factors(self):
        g = PermGroup(7, [cycles(7, [1, 2]), cycles(7, [3, 4, 5]),
                          cycles(7, [6, 7])])
        factors = disjoint_decomposition(g)
        self.assertEqual([f.order() for f in factors], [2, 3, 2])
        self.assertEqual([f.smallest_moved_point() for f in factors],
                         [1, 3, 6])

    def test_factors_reconstruct(self):
        gens = [cycles(8, [1, 2, 3]), cycles(8, [1, 2]), cycles(8, [4, 5]),
                cycles(8, [6, 7, 8])]
        g = PermGroup(8, gens)
        for complete in [True, False]:
            factors = disjoint_decomposition(g, complete)
            self.assertEqual(len(factors), 3)
            product = PermGroup(
                8, [p for f in factors for p in f.generators()])
            self.assertEqual(product, g)
            for p in gens:
                self.assertIn(p, product)

    def test_indecomposable(self):
        g = PermGroup(4, [cycles(4, [1, 2], [3, 4])])
        self.assertEqual(disjoint_decomposition(g), [g])
        self.assertEqual(
            disjoint_decomposition(g, disjoint_orbit_optimization=True), [g])
        self.assertEqual(disjoint_decomposition(g, complete=False), [g])

        s4 = PermGroup.symmetric(4)
        self.assertEqual(disjoint_decomposition(s4), [s4])

    def test_complete_finds_more(self):
        # (1,2)(3,4) and (1,2) have overlapping supports, but the group is
        # <(1,2)> x <(3,4)>
        g = PermGroup(4, [cycles(4, [1, 2], [3, 4]), cycles(4, [1, 2])])
        factors = disjoint_decomposition(g)
        self.assertEqual([f.order() for f in factors], [2, 2])
        self.assertEqual(disjoint_decomposition(g, complete=False), [g])

    def test_trivial(self):
        g = PermGroup(3)
        self.assertEqual(disjoint_decomposition(g), [g])

    def test_orbits_dependent(self):
        g = PermGroup(4, [cycles(4, [1, 2], [3, 4])])
        self.assertTrue(orbits_dependent(g, [1, 2], [3, 4]))

        g = PermGroup(4, [cycles(4, [1, 2]), cycles(4, [3, 4])])
        self.assertFalse(orbits_dependent(g, [1, 2], [3, 4]))
        self.assertFalse(orbits_dependent(g, [3, 4], [1, 2]))


class TestWreathDecomposition(unittest.TestCase):
    def test_wreath_product(self):
        g = PermGroup.wreath_product(PermGroup.symmetric(2),
                                     PermGroup.symmetric(3))
        result = find_wreath_decomposition(g)
        self.assertEqual(result.status, WreathDecomposition.FOUND)
        self.assertTrue(result)
        self.assertEqual(result.block_system.blocks, [[1, 2], [3, 4], [5, 6]])
        self.assertEqual(result.block_permuter.order(), 6)
        self.assertEqual([h.order() for h in result.block_stabilizers],
                         [2, 2, 2])

        groups = g.wreath_decomposition()
        self.assertEqual(len(groups), 4)
        self.assertIn(cycles(6, [1, 3], [2, 4]), groups[0])
        self.assertIn(cycles(6, [3, 4]), groups[2])

    def test_dihedral(self):
        result = find_wreath_decomposition(PermGroup.dihedral(4))
        self.assertEqual(result.status, WreathDecomposition.FOUND)
        self.assertEqual(result.block_system.blocks, [[1, 3], [2, 4]])
        self.assertEqual([h.order() for h in result.groups()], [2, 2, 2])

    def test_primitive(self):
        result = find_wreath_decomposition(PermGroup.symmetric(4))
        self.assertEqual(result.status, WreathDecomposition.NOT_DECOMPOSABLE)
        self.assertFalse(result)
        self.assertEqual(result.groups(), [])
        self.assertEqual(PermGroup.symmetric(4).wreath_decomposition(), [])

        result = find_wreath_decomposition(PermGroup(1))
        self.assertEqual(result.status, WreathDecomposition.NOT_DECOMPOSABLE)

    def test_unknown(self):
        result = find_wreath_decomposition(PermGroup.cyclic(4))
        self.assertEqual(result.status, WreathDecomposition.UNKNOWN)
        self.assertEqual(result.groups(), [])

    def test_with_block_system(self):
        g = PermGroup.dihedral(4)
        result = wreath_decomposition(g, BlockSystem(4, [[1, 3], [2, 4]]))
        self.assertTrue(result)

        result = wreath_decomposition(g, BlockSystem(4, [[1, 2, 3, 4]]))
        self.assertEqual(result.status, WreathDecomposition.UNKNOWN)


if __name__ == '__main__':
    unittest.main()
