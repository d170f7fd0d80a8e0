import numpy as np

class DRNG:
    """Seeded source of combat variance.

    Shared by reference between the engine and the command interpreter, so
    a restart reseeds it in place instead of replacing it.
    """

    def __init__(self, seed: int):
        self.reseed(seed)

    def reseed(self, seed: int) -> None:
        self.seed = seed
        self.g = np.random.Generator(np.random.PCG64(seed))

    def uniform(self, a: float, b: float) -> float:
        """Return a random float in [a, b)."""
        return float(self.g.uniform(a, b))
