"""Seeded value distributions driving the synthetic metrics.

Every distribution advances from a caller-supplied random.Random, so the
values a simulator produces depend only on its seed.
"""

from random import Random


class ConstantDistribution:
    """Always yields the same value."""

    def __init__(self, value: float) -> None:
        self.value = value

    def advance(self, rng: Random) -> None:
        pass


class UniformDistribution:
    """Draws uniformly from [low, high) on every step."""

    def __init__(self, low: float, high: float) -> None:
        self.low = low
        self.high = high
        self.value = 0.0

    def advance(self, rng: Random) -> None:
        self.value = rng.uniform(self.low, self.high)


class NormalDistribution:
    """Draws from a normal distribution on every step."""

    def __init__(self, mean: float, stddev: float) -> None:
        self.mean = mean
        self.stddev = stddev
        self.value = 0.0

    def advance(self, rng: Random) -> None:
        self.value = rng.gauss(self.mean, self.stddev)


class RandomWalkDistribution:
    """Accumulates steps drawn from another distribution.

    Args:
        step: Distribution providing the increment on each advance.
        state: Starting value.
    """

    def __init__(self, step: "Distribution", state: float) -> None:
        self.step = step
        self.value = state

    def advance(self, rng: Random) -> None:
        self.step.advance(rng)
        self.value += self.step.value


class ClampedRandomWalkDistribution(RandomWalkDistribution):
    """Random walk kept inside [low, high]."""

    def __init__(
        self, low: float, high: float, step: "Distribution", state: float
    ) -> None:
        super().__init__(step, min(max(state, low), high))
        self.low = low
        self.high = high

    def advance(self, rng: Random) -> None:
        super().advance(rng)
        self.value = min(max(self.value, self.low), self.high)


class MonotonicRandomWalkDistribution(RandomWalkDistribution):
    """Random walk that never decreases (counters)."""

    def advance(self, rng: Random) -> None:
        self.step.advance(rng)
        self.value += abs(self.step.value)


Distribution = (
    ConstantDistribution
    | UniformDistribution
    | NormalDistribution
    | RandomWalkDistribution
    | ClampedRandomWalkDistribution
    | MonotonicRandomWalkDistribution
)
