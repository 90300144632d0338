"""Early stopping: halt a simulation once the best fitness stops moving."""


class EarlyStopper:
    """
    Tracks stagnation of the best fitness across generations.

    A generation stagnates when its best fitness differs from the previous
    generation's by less than delta. After n_iters consecutive stagnating
    generations, update() signals the simulator to stop.
    """

    def __init__(self, delta: float, n_iters: int):
        """
        Args:
            delta: Minimum change in best fitness that counts as progress. Must be >= 0.
            n_iters: Consecutive stagnating generations tolerated before stopping.
                     Must be >= 0.
        """
        if delta < 0:
            raise ValueError("delta must be non-negative")
        if n_iters < 0:
            raise ValueError("n_iters must be non-negative")
        self.delta = delta
        self.max_iters = n_iters
        self.previous = 0.0
        self.n_iters = 0

    def update(self, fitness: float) -> bool:
        """
        Record the best fitness of the latest generation.

        Returns:
            Whether the simulator should stop
        """
        if abs(fitness - self.previous) < self.delta:
            self.n_iters += 1
        else:
            self.n_iters = 0
        self.previous = fitness

        return self.n_iters >= self.max_iters

    def __repr__(self) -> str:
        return (
            f"EarlyStopper(delta={self.delta}, n_iters={self.max_iters}, "
            f"stagnant={self.n_iters})"
        )
