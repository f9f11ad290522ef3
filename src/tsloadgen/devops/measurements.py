"""Simulated measurements of the devops model.

A measurement owns one distribution per field and its own clock. tick()
advances both; to_point() copies the current state into a Point.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from random import Random
from typing import NamedTuple

from tsloadgen.core.models import Point
from tsloadgen.devops.distributions import (
    ClampedRandomWalkDistribution,
    ConstantDistribution,
    Distribution,
    MonotonicRandomWalkDistribution,
    NormalDistribution,
    UniformDistribution,
)

CPU_FIELD_KEYS = (
    "usage_user",
    "usage_system",
    "usage_idle",
    "usage_nice",
    "usage_iowait",
    "usage_irq",
    "usage_softirq",
    "usage_steal",
    "usage_guest",
    "usage_guest_nice",
)
SINGLE_CPU_FIELD_KEYS = ("usage_user",)
DISK_FIELD_KEYS = (
    "total",
    "free",
    "used",
    "used_percent",
    "inodes_total",
    "inodes_free",
    "inodes_used",
)
KERNEL_FIELD_KEYS = (
    "boot_time",
    "interrupts",
    "context_switches",
    "processes_forked",
    "disk_pages_in",
    "disk_pages_out",
)
MEM_FIELD_KEYS = (
    "total",
    "available",
    "used",
    "free",
    "cached",
    "buffered",
    "used_percent",
    "available_percent",
    "buffered_percent",
)
NET_FIELD_KEYS = (
    "bytes_sent",
    "bytes_recv",
    "packets_sent",
    "packets_recv",
    "err_in",
    "err_out",
    "drop_in",
    "drop_out",
)

_GIB = 1 << 30
_DISK_TOTAL = 500 * _GIB
_INODES_TOTAL = 32 * (1 << 20)
_BOOT_TIME = 1_451_600_000


class FieldSpec(NamedTuple):
    """A field name, the distribution behind it and whether it is an integer."""

    key: str
    distribution: Distribution
    integer: bool = False


class SimulatedMeasurement:
    """One measurement of a simulated host.

    Args:
        name: Measurement name written to every point.
        start: Timestamp of the first sample.
        fields: Field specs, in emission order.
        rng: Generator shared with the owning simulator.
    """

    def __init__(
        self, name: str, start: datetime, fields: list[FieldSpec], rng: Random
    ) -> None:
        self.name = name
        self.timestamp = start
        self._fields = fields
        self._rng = rng

    @property
    def field_keys(self) -> list[str]:
        return [spec.key for spec in self._fields]

    def tick(self, interval: timedelta) -> None:
        """Advance the clock by interval and every field by one step."""
        self.timestamp += interval
        for spec in self._fields:
            spec.distribution.advance(self._rng)

    def to_point(self, point: Point) -> None:
        """Write measurement name, timestamp and current field values to point."""
        point.set_measurement_name(self.name)
        point.set_timestamp(self.timestamp)
        for spec in self._fields:
            value = spec.distribution.value
            point.append_field(spec.key, int(value) if spec.integer else value)


MeasurementConstructor = Callable[[datetime, Random], SimulatedMeasurement]


def _percent_walk(rng: Random) -> ClampedRandomWalkDistribution:
    return ClampedRandomWalkDistribution(
        0.0, 100.0, NormalDistribution(0.0, 1.0), rng.uniform(0.0, 100.0)
    )


def _clamped_walk(
    rng: Random, high: float, stddev: float
) -> ClampedRandomWalkDistribution:
    return ClampedRandomWalkDistribution(
        0.0, high, NormalDistribution(0.0, stddev), rng.uniform(0.0, high)
    )


def _counter(rng: Random, low: float, high: float) -> MonotonicRandomWalkDistribution:
    return MonotonicRandomWalkDistribution(
        UniformDistribution(low, high), float(rng.randrange(0, 1000))
    )


def new_cpu_measurement(start: datetime, rng: Random) -> SimulatedMeasurement:
    fields = [FieldSpec(key, _percent_walk(rng)) for key in CPU_FIELD_KEYS]
    return SimulatedMeasurement("cpu", start, fields, rng)


def new_single_cpu_measurement(start: datetime, rng: Random) -> SimulatedMeasurement:
    fields = [FieldSpec(key, _percent_walk(rng)) for key in SINGLE_CPU_FIELD_KEYS]
    return SimulatedMeasurement("cpu", start, fields, rng)


def new_disk_measurement(start: datetime, rng: Random) -> SimulatedMeasurement:
    step = 50 * (1 << 20)
    fields = [
        FieldSpec("total", ConstantDistribution(_DISK_TOTAL), integer=True),
        FieldSpec("free", _clamped_walk(rng, _DISK_TOTAL, step), integer=True),
        FieldSpec("used", _clamped_walk(rng, _DISK_TOTAL, step), integer=True),
        FieldSpec("used_percent", _percent_walk(rng)),
        FieldSpec("inodes_total", ConstantDistribution(_INODES_TOTAL), integer=True),
        FieldSpec(
            "inodes_free", _clamped_walk(rng, _INODES_TOTAL, 1000), integer=True
        ),
        FieldSpec(
            "inodes_used", _clamped_walk(rng, _INODES_TOTAL, 1000), integer=True
        ),
    ]
    return SimulatedMeasurement("disk", start, fields, rng)


def new_kernel_measurement(start: datetime, rng: Random) -> SimulatedMeasurement:
    fields = [
        FieldSpec("boot_time", ConstantDistribution(_BOOT_TIME), integer=True),
        FieldSpec("interrupts", _counter(rng, 0, 1000), integer=True),
        FieldSpec("context_switches", _counter(rng, 0, 1000), integer=True),
        FieldSpec("processes_forked", _counter(rng, 0, 10), integer=True),
        FieldSpec("disk_pages_in", _counter(rng, 0, 100), integer=True),
        FieldSpec("disk_pages_out", _counter(rng, 0, 100), integer=True),
    ]
    return SimulatedMeasurement("kernel", start, fields, rng)


def new_mem_measurement(start: datetime, rng: Random) -> SimulatedMeasurement:
    total = float(rng.choice((8, 12, 16, 32)) * _GIB)
    fields = [
        FieldSpec("total", ConstantDistribution(total), integer=True),
        FieldSpec("available", _clamped_walk(rng, total, 10 * (1 << 20)), integer=True),
        FieldSpec("used", _clamped_walk(rng, total, 10 * (1 << 20)), integer=True),
        FieldSpec("free", _clamped_walk(rng, total, 10 * (1 << 20)), integer=True),
        FieldSpec("cached", _clamped_walk(rng, total, 10 * (1 << 20)), integer=True),
        FieldSpec("buffered", _clamped_walk(rng, total, 10 * (1 << 20)), integer=True),
        FieldSpec("used_percent", _percent_walk(rng)),
        FieldSpec("available_percent", _percent_walk(rng)),
        FieldSpec("buffered_percent", _percent_walk(rng)),
    ]
    return SimulatedMeasurement("mem", start, fields, rng)


def new_net_measurement(start: datetime, rng: Random) -> SimulatedMeasurement:
    fields = [
        FieldSpec("bytes_sent", _counter(rng, 0, 1 << 20), integer=True),
        FieldSpec("bytes_recv", _counter(rng, 0, 1 << 20), integer=True),
        FieldSpec("packets_sent", _counter(rng, 0, 1000), integer=True),
        FieldSpec("packets_recv", _counter(rng, 0, 1000), integer=True),
        FieldSpec("err_in", _counter(rng, 0, 2), integer=True),
        FieldSpec("err_out", _counter(rng, 0, 2), integer=True),
        FieldSpec("drop_in", _counter(rng, 0, 2), integer=True),
        FieldSpec("drop_out", _counter(rng, 0, 2), integer=True),
    ]
    return SimulatedMeasurement("net", start, fields, rng)
