"""
Product replacement generator for random group elements.
"""

from .config import Config
from .perm import Perm


class GroupRng:
    """Generate approximately uniform random elements of a group.

    This uses the "rattle" algorithm as described in GAP's documentation: a
    reservoir of group elements is repeatedly multiplied by random members of
    itself, and a small set of accumulators collects the results.
    """
    def __init__(self, cfg=None):
        self.cfg = cfg or Config()
        self.reservoir = []
        self.accus = []
        self.accu = 0
        self.pending = False

    def copy(self):
        """Return an independent generator sharing the configuration.
        """
        rng = GroupRng(self.cfg)
        rng.reservoir = list(self.reservoir)
        rng.accus = list(self.accus)
        rng.accu = self.accu
        rng.pending = self.pending
        return rng

    def add_gen(self, gen):
        if not self.reservoir:
            identity = Perm.identity(gen.degree)
            self.reservoir = [identity] * self.cfg.rng_extra_slots
            self.accus = [identity] * self.cfg.rng_accus
        self.reservoir.append(gen)
        self.pending = True

    def sample(self):
        """Return the next random element.

        The reservoir is scrambled first if generators were added since the
        last sample.
        """
        if self.pending:
            self.pending = False
            self.scramble()
        return self.stir()

    def _flip(self, p):
        if self.cfg.rng.randrange(2):
            return ~p
        return p

    def _mult(self, a, b):
        self.cfg.stats.products += 1
        return a * b

    def stir(self):
        """Perform a single replacement step and return the new accumulator.
        """
        slots = len(self.reservoir)
        i = self.cfg.rng.randrange(1, slots)
        j = self.cfg.rng.randrange(1, slots)

        # Slot 0 is the rattle, it is never chosen as i or j.
        c = self.reservoir[0] = self._mult(
            self.reservoir[0], self._flip(self.reservoir[i]))
        q = self.reservoir[j] = self._mult(self.reservoir[j], self._flip(c))

        self.accu = (self.accu + 1) % len(self.accus)
        r = self.accus[self.accu] = self._mult(
            self.accus[self.accu], self._flip(q))
        return r

    def scramble(self):
        gens = len(self.reservoir) - self.cfg.rng_extra_slots
        steps = max(self.cfg.rng_scramble, self.cfg.rng_scramble_factor * gens)
        for _ in range(steps):
            self.stir()
