class SchreierGeneratorQueue:
    """Lazily produce the Schreier generators of one stabilizer chain level.

    For every orbit point beta and generator x this yields
    u_beta * x * u_{beta^x}^-1, skipping pairs whose Schreier generator is
    trivially the identity because x is the tree edge leading from beta to
    beta^x.

    The queue keeps its position between iterations. Whenever the level it
    was built from changes, the owner must call invalidate(); the next
    update() then restarts the queue from the new generators and transversal.
    Iterating an invalid queue raises RuntimeError.
    """
    def __init__(self, gens=(), transversal=None):
        self.valid = False
        self.exhausted = True
        self.gens = []
        self.transversal = None
        if transversal is not None:
            self.update(gens, transversal)

    def invalidate(self):
        self.valid = False

    def update(self, gens, transversal):
        """Restart from the given generator pairs and transversal unless the
        queue is still valid.
        """
        if self.valid:
            return
        self.gens = [g for g, g_inv in gens]
        self.transversal = transversal
        self._pairs = self._schreier_pairs()
        self.valid = True
        self.exhausted = False

    def _schreier_pairs(self):
        for beta in list(self.transversal.orbit()):
            u_beta = None
            for index, x in enumerate(self.gens):
                if self.transversal.incoming(beta, index):
                    continue
                if u_beta is None:
                    u_beta = self.transversal.transversal(beta)
                yield self.transversal.to_root(x[beta], u_beta * x)

    def __iter__(self):
        return self

    def __next__(self):
        if not self.valid:
            raise RuntimeError('iterating an invalidated Schreier queue')
        try:
            return next(self._pairs)
        except StopIteration:
            self.exhausted = True
            raise
