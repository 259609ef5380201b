import itertools
import unittest
from random import Random

from stabchain.bsgs import BSGS, IncompleteStrongGeneratingSet
from stabchain.config import Config
from stabchain.perm import Perm
from stabchain.report import LoggingReporter, Reporter


def cycles(n, *cs):
    return Perm.from_cycles(n, cs)


def configs(seed=0):
    for construction, transversals in itertools.product(
            ['deterministic', 'random'],
            ['explicit', 'schreier_trees', 'shallow_schreier_trees']):
        yield Config(construction=construction, transversals=transversals,
                     rng=Random(seed))


class RecordingReporter(Reporter):
    def __init__(self):
        self.events = []

    def base_extended(self, level, point):
        self.events.append(('base_extended', level, point))

    def strong_generator_added(self, level, perm):
        self.events.append(('strong_generator_added', level))

    def schreier_sims_finished(self, construction, base, order, stats):
        self.events.append(('schreier_sims_finished', construction, order))

    def base_changed(self, old_base, new_base):
        self.events.append(('base_changed', old_base, new_base))


class TestSchreierSims(unittest.TestCase):
    def setUp(self):
        self.s6 = [cycles(6, [1, 2, 3, 4, 5, 6]), cycles(6, [1, 2])]
        # a group of order 8 acting on the vertices of a cube
        self.cube = [cycles(8, [1, 2, 4, 3], [5, 6, 8, 7]),
                     cycles(8, [1, 5], [2, 6], [3, 7], [4, 8])]

    def test_orders(self):
        for cfg in configs():
            with self.subTest(construction=cfg.construction,
                              transversals=cfg.transversals):
                bsgs = BSGS(6, self.s6, cfg=cfg)
                bsgs.build_verified()
                self.assertEqual(bsgs.order(), 720)

                bsgs = BSGS(8, self.cube, cfg=cfg)
                bsgs.build_verified()
                self.assertEqual(bsgs.order(), 8)

    def test_deterministic_is_complete(self):
        for cfg in configs():
            if cfg.construction != 'deterministic':
                continue
            bsgs = BSGS(6, self.s6, cfg=cfg)
            bsgs.verify()
            self.assertEqual(bsgs.order(), 720)

    def test_known_order(self):
        cfg = Config(construction='random', exit_rounds=50, rng=Random(1))
        bsgs = BSGS(6, self.s6, cfg=cfg, known_order=720)
        self.assertEqual(bsgs.order(), 720)

    def test_trivial(self):
        bsgs = BSGS(4, [Perm.identity(4)])
        self.assertTrue(bsgs.base_empty())
        self.assertEqual(bsgs.order(), 1)
        self.assertTrue(bsgs.contains(Perm.identity(4)))
        self.assertFalse(bsgs.contains(cycles(4, [1, 2])))

    def test_base_prefix(self):
        bsgs = BSGS(6, self.s6, base=[4, 2])
        self.assertEqual(bsgs.base[:2], [4, 2])
        self.assertEqual(bsgs.order(), 720)

    def test_membership(self):
        bsgs = BSGS(8, self.cube)
        for g in self.cube:
            self.assertTrue(bsgs.contains(g))
        self.assertTrue(bsgs.contains(self.cube[0] * self.cube[1]))
        self.assertFalse(bsgs.contains(cycles(8, [1, 2])))

        residue, level = bsgs.sift(cycles(8, [1, 2]))
        self.assertFalse(residue.is_identity())
        self.assertLessEqual(level, len(bsgs))

    def test_stabilizer_chain(self):
        s4 = [cycles(4, [1, 2, 3, 4]), cycles(4, [1, 2])]
        bsgs = BSGS(4, s4)
        orders = [chain.order() for chain in bsgs.stabilizer_chain()]
        self.assertEqual(orders, [24, 6, 2, 1])

    def test_sample(self):
        cfg = Config(rng=Random(3))
        bsgs = BSGS(6, self.s6, cfg=cfg)
        for _ in range(20):
            self.assertTrue(bsgs.contains(bsgs.sample()))

        stabilizer = bsgs.subchain(1)
        b = bsgs.base[0]
        for _ in range(20):
            self.assertEqual(stabilizer.sample()[b], b)

    def test_reporter(self):
        reporter = RecordingReporter()
        BSGS(6, self.s6, reporter=reporter)
        kinds = [event[0] for event in reporter.events]
        self.assertIn('base_extended', kinds)
        self.assertIn('strong_generator_added', kinds)
        self.assertEqual(reporter.events[-1],
                         ('schreier_sims_finished', 'deterministic', 720))

    def test_logging_reporter(self):
        with self.assertLogs('stabchain.bsgs', level='DEBUG') as cm:
            BSGS(6, self.s6, reporter=LoggingReporter())
        self.assertTrue(any('extending base' in line for line in cm.output))
        self.assertIn('schreier-sims done', cm.output[-1])

    def test_unknown_construction(self):
        with self.assertRaises(ValueError):
            BSGS(6, self.s6, cfg=Config(construction='bogus'))


class TestVerify(unittest.TestCase):
    def test_incomplete(self):
        gens = [cycles(3, [1, 2, 3]), cycles(3, [1, 2])]
        bsgs = BSGS.from_strong_generators(3, [1], gens)
        self.assertEqual(bsgs.order(), 3)

        with self.assertRaises(IncompleteStrongGeneratingSet) as cm:
            bsgs.verify()
        witness = cm.exception.witness
        self.assertFalse(witness.is_identity())
        self.assertEqual(witness[1], 1)

        self.assertEqual(bsgs.build_verified(), 1)
        self.assertEqual(bsgs.order(), 6)

    def test_from_strong_generators(self):
        gens = [cycles(3, [1, 2, 3]), cycles(3, [2, 3])]
        bsgs = BSGS.from_strong_generators(3, [1, 2], gens)
        bsgs.verify()
        self.assertEqual(bsgs.order(), 6)

        with self.assertRaises(ValueError):
            BSGS.from_strong_generators(3, [1], [cycles(3, [2, 3])])


class TestBaseChange(unittest.TestCase):
    def setUp(self):
        self.s5 = [cycles(5, [1, 2, 3, 4, 5]), cycles(5, [1, 2])]

    def test_change_base(self):
        for cfg in configs(7):
            with self.subTest(construction=cfg.construction,
                              transversals=cfg.transversals):
                bsgs = BSGS(5, self.s5, cfg=cfg)
                bsgs.build_verified()
                bsgs.change_base([5, 4])

                self.assertEqual(bsgs.base[:2], [5, 4])
                self.assertEqual(bsgs.order(), 120)
                bsgs.verify()
                for g in self.s5:
                    self.assertTrue(bsgs.contains(g))
                self.assertEqual(bsgs.order(2), 6)

    def test_redundant_points(self):
        bsgs = BSGS(4, [cycles(4, [1, 2])])
        reporter = RecordingReporter()
        bsgs.reporter = reporter
        bsgs.change_base([3, 1])
        self.assertEqual(bsgs.base, [3, 1])
        self.assertEqual(bsgs.order(), 2)
        self.assertEqual(reporter.events, [('base_changed', [1], [3, 1])])

    def test_copy_is_independent(self):
        bsgs = BSGS(5, self.s5)
        base = bsgs.base
        copy = bsgs.copy()
        copy.change_base([3])
        self.assertEqual(bsgs.base, base)
        self.assertEqual(copy.base[0], 3)
        self.assertEqual(copy.order(), 120)

    def test_conjugate(self):
        s3 = [cycles(5, [1, 2, 3]), cycles(5, [1, 2])]
        bsgs = BSGS(5, s3)
        bsgs.conjugate(cycles(5, [1, 4], [2, 5]))
        self.assertEqual(bsgs.order(), 6)
        self.assertTrue(bsgs.contains(cycles(5, [4, 5])))
        self.assertTrue(bsgs.contains(cycles(5, [3, 4, 5])))
        self.assertFalse(bsgs.contains(cycles(5, [1, 2])))
        bsgs.verify()


class TestReduceGens(unittest.TestCase):
    def test_reduce_gens(self):
        gens = [cycles(5, [i, j]) for i in range(1, 6) for j in range(i + 1, 6)]
        full = BSGS(5, gens)
        reduced = BSGS(5, gens, cfg=Config(reduce_gens=True))

        self.assertEqual(reduced.order(), 120)
        reduced.verify()
        self.assertLessEqual(len(reduced.strong_generators()),
                             len(full.strong_generators()))
        for g in gens:
            self.assertTrue(reduced.contains(g))


if __name__ == '__main__':
    unittest.main()
