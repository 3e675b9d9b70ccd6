"""
Convergence policy of the optimizers: a fixed budget of iterations.
"""


class MaxIterationChecker:
    """
    Converges once the number of iterations reaches the maximum.

    An instance can be given as callback to scipy.optimize.minimize: it
    counts the iterations and stops the optimizer by raising StopIteration.
    """

    def __init__(self, max_iterations: int):
        if max_iterations < 1:
            raise ValueError("The maximum number of iterations must be at least 1.")
        self.max_iterations = max_iterations
        self.iteration = 0

    def converged(self, iteration: int) -> bool:
        return self.max_iterations <= iteration

    def __call__(self, *args, **kwargs):
        self.iteration += 1
        if self.converged(self.iteration):
            raise StopIteration
