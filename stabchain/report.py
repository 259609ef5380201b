"""
Progress reporting for stabilizer chain construction.

Construction entry points take a reporter argument. The default Reporter
ignores everything, LoggingReporter forwards events to the logging module.
"""

import logging


class Reporter:
    """Receives progress events, does nothing by default.
    """
    def base_extended(self, level, point):
        pass

    def strong_generator_added(self, level, perm):
        pass

    def schreier_sims_finished(self, construction, base, order, stats):
        pass

    def base_changed(self, old_base, new_base):
        pass


class LoggingReporter(Reporter):
    def __init__(self, logger=None, level=logging.DEBUG):
        self.logger = logger or logging.getLogger('stabchain.bsgs')
        self.level = level

    def base_extended(self, level, point):
        self.logger.log(self.level, 'extending base: level %d -> %d',
                        level, point)

    def strong_generator_added(self, level, perm):
        self.logger.log(self.level, 'new strong generator at level %d: %s',
                        level, perm)

    def schreier_sims_finished(self, construction, base, order, stats):
        self.logger.log(
            self.level,
            '%s schreier-sims done: base=%s order=%d products=%d rounds=%d',
            construction, base, order, stats.products, stats.rounds)

    def base_changed(self, old_base, new_base):
        self.logger.log(self.level, 'base change: %s -> %s',
                        old_base, new_base)
