"""Randomized query parameters shared by every engine.

Engine generators draw their parameters through these helpers in the same
order, so two engines seeded identically produce equivalent queries.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from random import Random

from tsloadgen.devops.measurements import CPU_FIELD_KEYS

HIGH_CPU_WINDOW = timedelta(hours=12)
HIGH_CPU_THRESHOLD = 90.0


@dataclass(frozen=True)
class TimeInterval:
    """Half-open time range [start, end)."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def rand_window(self, rng: Random, window: timedelta) -> "TimeInterval":
        """Pick a window of the given length inside this interval.

        Window starts are whole seconds after self.start.

        Raises:
            ValueError: If the window is longer than the interval.
        """
        slack = self.duration - window
        if slack < timedelta(0):
            raise ValueError(
                f"time range {self.duration} is shorter than the {window} window"
            )
        offset = rng.randrange(0, int(slack.total_seconds()) + 1)
        start = self.start + timedelta(seconds=offset)
        return TimeInterval(start, start + window)


def random_hostnames(rng: Random, count: int, scale_var: int) -> list[str]:
    """Return count distinct hostnames out of host_0 .. host_{scale_var - 1}.

    Raises:
        ValueError: If count is greater than scale_var.
    """
    if count > scale_var:
        raise ValueError(f"cannot pick {count} hosts out of {scale_var}")
    return [f"host_{index}" for index in rng.sample(range(scale_var), count)]


def cpu_metrics(count: int) -> list[str]:
    """Return the first count cpu field names.

    Raises:
        ValueError: If count is outside 1 .. number of cpu fields.
    """
    if not 1 <= count <= len(CPU_FIELD_KEYS):
        raise ValueError(
            f"cpu metric count must be between 1 and {len(CPU_FIELD_KEYS)}, got {count}"
        )
    return list(CPU_FIELD_KEYS[:count])
