"""
Bases and strong generating sets.

A stabilizer chain is a list of levels. Level i has a base point b_i, the
strong generators that fix b_0, ..., b_{i-1} and move b_i (kept together with
their inverses as (g, g_inv) pairs) and a transversal for the orbit of b_i
under the strong generators of level i and of all deeper levels. The chain is
complete when the generators of level i and below generate the pointwise
stabilizer of b_0, ..., b_{i-1}.

Two variants of the Schreier-Sims algorithm build complete chains:

* the deterministic variant sifts every Schreier generator, produced lazily
  by one SchreierGeneratorQueue per level,
* the randomized variant sifts product replacement random elements and stops
  after cfg.exit_rounds rounds without progress, or as soon as a known group
  order is reached.
"""

import copy
import math

from .config import Config
from .perm import Perm
from .perm_set import PermSet
from .report import Reporter
from .rng import GroupRng
from .schreier_queue import SchreierGeneratorQueue
from .transversal import make_transversal


class IncompleteStrongGeneratingSet(ValueError):
    def __init__(self, message, witness=None):
        super().__init__(message)
        self.witness = witness


class Level:
    """One level of a stabilizer chain.
    """
    def __init__(self, basepoint, degree, cfg):
        self.basepoint = basepoint
        self.gens = []
        self.transversal = make_transversal(basepoint, degree, cfg)

    def copy(self):
        level = copy.copy(self)
        level.gens = list(self.gens)
        level.transversal = self.transversal.copy()
        return level

    def __repr__(self):
        return (f'Level(basepoint={self.basepoint}, '
                f'orbit={self.transversal.orbit()}, gens={len(self.gens)})')


class BSGS:
    """A base and strong generating set of a permutation group of 1..degree.

    The base parameter specifies a prefix of the base, it is extended
    automatically as necessary.
    """
    def __init__(self, degree, generators=(), cfg=None, base=(),
                 reporter=None, known_order=None):
        self.degree = degree
        self.cfg = cfg or Config()
        self.reporter = reporter or Reporter()
        self.levels = [Level(b, degree, self.cfg) for b in dict.fromkeys(base)]
        self.rng = None

        generators = [g for g in generators if not g.is_identity()]
        if not generators:
            return

        if self.cfg.construction == 'deterministic':
            self.schreier_sims(generators)
        elif self.cfg.construction == 'random':
            self.schreier_sims_random(generators, known_order)
        else:
            raise ValueError(
                f'unknown construction {self.cfg.construction!r}')

        if self.cfg.reduce_gens:
            self.reduce_gens()

        self.reporter.schreier_sims_finished(
            self.cfg.construction, self.base, self.order(), self.cfg.stats)

    @classmethod
    def from_strong_generators(cls, degree, base, strong_generators,
                               cfg=None, reporter=None):
        """Build a chain from a known base and strong generating set.

        No Schreier-Sims run is performed, the caller guarantees that the
        generators form a strong generating set relative to base.
        """
        bsgs = cls(degree, cfg=cfg, base=base, reporter=reporter)
        for g in strong_generators:
            if g.is_identity():
                continue
            i = bsgs._first_moved_level(g)
            if i is None:
                raise ValueError(f'{g} fixes every base point')
            bsgs.levels[i].gens.append((g, ~g))
        bsgs._rebuild(0, len(bsgs.levels) - 1)
        return bsgs

    def copy(self):
        """Return a copy that can be changed independently.
        """
        bsgs = copy.copy(self)
        bsgs.levels = [level.copy() for level in self.levels]
        bsgs.rng = self.rng.copy() if self.rng is not None else None
        return bsgs

    @property
    def base(self):
        return [level.basepoint for level in self.levels]

    def base_empty(self):
        return not self.levels

    def __len__(self):
        return len(self.levels)

    def generators_at(self, i):
        """Return the strong generator pairs of level i and all deeper levels.
        """
        gens = []
        for level in reversed(self.levels[i:]):
            gens.extend(level.gens)
        return gens

    def strong_generators(self):
        return PermSet((g for g, g_inv in self.generators_at(0)), self.degree)

    def orbit(self, i):
        return self.levels[i].transversal.orbit()

    def transversal(self, i, point):
        return self.levels[i].transversal.transversal(point)

    def order(self, start=0):
        """Compute the order of the group, or of the stabilizer subgroup of
        the given level.
        """
        return math.prod(len(level.transversal)
                         for level in self.levels[start:])

    def stabilizer_chain(self):
        """Return the chain of stabilizer subgroups, starting with the whole
        group and ending with the trivial group.
        """
        return [self.subchain(i) for i in range(len(self.levels) + 1)]

    def subchain(self, i):
        """Return the chain of the stabilizer of the first i base points.
        """
        bsgs = copy.copy(self)
        bsgs.levels = [level.copy() for level in self.levels[i:]]
        bsgs.rng = None
        return bsgs

    def _first_moved_level(self, g):
        for i, level in enumerate(self.levels):
            if g[level.basepoint] != level.basepoint:
                return i
        return None

    def _rebuild(self, lo, hi):
        """Rebuild the transversals of the levels lo to hi.
        """
        for i in range(max(lo, 0), hi + 1):
            self.levels[i].transversal.build(self.generators_at(i))

    def sift(self, p, start=0):
        """Perform sifting on p starting at the given level.

        Applies transversal elements to p to fix the base points one after
        another. Returns the residue and the index of the level where sifting
        stopped, which is len(self) if every base point was fixed.
        """
        for i in range(start, len(self.levels)):
            level = self.levels[i]
            b = p[level.basepoint]
            if b not in level.transversal:
                return p, i
            p = level.transversal.to_root(b, p)
        return p, len(self.levels)

    def contains(self, p):
        residue, _ = self.sift(p)
        return residue.is_identity()

    def add_gen(self, gen, lowest=0):
        """Sift gen and add the residue as strong generator if necessary.

        Returns whether a strong generator was added.
        """
        h, j = self.sift(gen, lowest)
        if h.is_identity():
            return False
        self.add_nonmember_gen(h, j, lowest)
        return True

    def add_nonmember_gen(self, h, j, lowest=0):
        """Add the sift residue h of a non-member as strong generator of
        level j, extending the base if j is past the last level.
        """
        if j == len(self.levels):
            point = h.smallest_moved_point()
            self.levels.append(Level(point, self.degree, self.cfg))
            self.reporter.base_extended(j, point)

        self.levels[j].gens.append((h, ~h))
        self.reporter.strong_generator_added(j, h)
        self._rebuild(lowest, j)

    def schreier_sims(self, generators):
        """Deterministic Schreier-Sims algorithm.

        Works from the deepest level upwards. Every Schreier generator of a
        level is sifted through the deeper levels. A non-trivial residue is
        added as strong generator at the level where sifting stopped, which
        invalidates the queues of all levels above it, and processing
        continues at that level.
        """
        for g in generators:
            self.add_gen(g)

        queues = [SchreierGeneratorQueue() for _ in self.levels]

        i = len(self.levels) - 1
        while i >= 0:
            queue = queues[i]
            queue.update(self.generators_at(i), self.levels[i].transversal)

            for schreier_gen in queue:
                h, j = self.sift(schreier_gen, i + 1)
                if h.is_identity():
                    continue

                self.add_nonmember_gen(h, j)
                while len(queues) < len(self.levels):
                    queues.append(SchreierGeneratorQueue())
                for stale in queues[:j + 1]:
                    stale.invalidate()
                i = j
                break
            else:
                i -= 1

    def schreier_sims_random(self, generators, known_order=None):
        """Randomized Schreier-Sims algorithm.

        It exits after cfg.exit_rounds many rounds without progress, or as
        soon as the group order reaches known_order if that is given.
        """
        if self.rng is None:
            self.rng = GroupRng(self.cfg)

        for g in generators:
            self.rng.add_gen(g)
            self.add_gen(g)

        stationary_rounds = 0
        while stationary_rounds < self.cfg.exit_rounds:
            if known_order is not None and self.order() >= known_order:
                break
            stationary_rounds += 1
            if self.random_round():
                stationary_rounds = 0

    def random_round(self):
        """One iteration of the randomized Schreier-Sims algorithm.
        """
        self.cfg.stats.rounds += 1
        return self.add_gen(self.rng.sample())

    def verify(self):
        """Sift all Schreier generators of every level.

        Raises an IncompleteStrongGeneratingSet exception if verification
        fails.
        """
        for i in reversed(range(len(self.levels))):
            queue = SchreierGeneratorQueue(
                self.generators_at(i), self.levels[i].transversal)
            for schreier_gen in queue:
                residue, _ = self.sift(schreier_gen, i + 1)
                if not residue.is_identity():
                    raise IncompleteStrongGeneratingSet(
                        "incomplete strong generating set detected"
                        " while sifting Schreier generators",
                        witness=residue)

    def build_verified(self):
        """Continue the randomized algorithm until verification succeeds.

        Returns the number of verification failures.
        """
        failures = 0
        while True:
            try:
                self.verify()
            except IncompleteStrongGeneratingSet as e:
                failures += 1
                self.add_gen(e.witness)
                if self.rng is not None:
                    self.schreier_sims_random([])
            else:
                break
        return failures

    def sample(self, start=0):
        """Return a uniform random element of the stabilizer subgroup of the
        given level.

        This is only correct if the strong generating set is complete.
        """
        return self._sample_levels(self.levels[start:])

    def _sample_levels(self, levels):
        p = Perm.identity(self.degree)
        for level in reversed(levels):
            target = self.cfg.rng.choice(level.transversal.orbit())
            p = p * level.transversal.transversal(target)
            self.cfg.stats.products += 1
        return p

    def remove_redundant_basepoints(self, start=0):
        """Remove base points with trivial orbits, keeping the first start
        levels.
        """
        self.levels[start:] = [
            level for level in self.levels[start:]
            if len(level.transversal) > 1]

    def reduce_gens(self):
        """Removes redundant generators of the strong generating set.

        For each level in the stabilizer chain, starting with the deepest, it
        checks each generator in turn and removes it if it's generated by the
        deeper levels together with the other generators.

        Can raise a IncompleteStrongGeneratingSet exception, but is not
        guaranteed to do so for an incomplete strong generating set.
        """
        for i in reversed(range(len(self.levels))):
            level = self.levels[i]
            k = 0
            while k < len(level.gens):
                gen, gen_inv = level.gens.pop(k)
                self._rebuild(i, i)
                if gen[level.basepoint] in level.transversal:
                    witness, _ = self.sift(gen, i)
                    if witness.is_identity():
                        continue
                    raise IncompleteStrongGeneratingSet(
                        'incomplete strong generating set detected '
                        'while removing redundant generators',
                        witness=witness)
                level.gens.insert(k, (gen, gen_inv))
                k += 1

            self._rebuild(i, i)

    def conjugate(self, w):
        """Replace the group G by w^-1 G w.
        """
        w_inv = ~w
        levels = []
        for level in self.levels:
            conjugated = Level(w[level.basepoint], self.degree, self.cfg)
            conjugated.gens = [
                (w_inv * g * w, w_inv * g_inv * w) for g, g_inv in level.gens]
            self.cfg.stats.products += 4 * len(level.gens)
            levels.append(conjugated)
        self.levels = levels
        self.rng = None
        self._rebuild(0, len(self.levels) - 1)

    def change_base(self, prefix):
        """Change the base to start with the given prefix.

        Base points that already match are kept and points fixed by the
        remaining stabilizer are inserted for free. From the first other
        point on, the chain is regenerated, see regenerate.
        """
        old_base = self.base
        prefix = list(dict.fromkeys(prefix))

        # Inserting redundant base points is free, so we can remove them
        # here to get a shorter chain
        self.remove_redundant_basepoints()

        k = 0
        while k < len(prefix):
            point = prefix[k]
            if k < len(self.levels) and self.levels[k].basepoint == point:
                k += 1
            elif all(g[point] == point for g, _ in self.generators_at(k)):
                level = Level(point, self.degree, self.cfg)
                level.transversal.build(self.generators_at(k))
                self.levels.insert(k, level)
                k += 1
            else:
                break

        if k < len(prefix):
            self.regenerate(k, prefix[k:])

        self.reporter.base_changed(old_base, self.base)

    def regenerate(self, k, prefix):
        """Rebuild the levels from k on for a base starting with prefix.

        This is a Las Vegas algorithm, the order of the stabilizer subgroup
        at level k is known. We start by sifting the old strong generators,
        which seems to be quite effective in reducing the number of random
        samples needed, and continue with uniform samples from the old chain.
        """
        old_levels = self.levels[k:]
        target_order = self.order(k)
        gens = [g for g, g_inv in self.generators_at(k)]

        # keep order, but remove duplicates
        new_base = list(dict.fromkeys(
            list(prefix) + [level.basepoint for level in old_levels]))
        self.levels[k:] = [Level(b, self.degree, self.cfg) for b in new_base]

        while self.order(k) < target_order:
            if gens:
                g = gens.pop(0)
            else:
                g = self._sample_levels(old_levels)
            self.cfg.stats.rounds += 1
            self.add_gen(g, lowest=k)

        self.remove_redundant_basepoints(k + len(prefix))
        self._rebuild(0, k - 1)
