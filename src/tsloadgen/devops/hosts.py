"""Simulated hosts and the constructors for each use case."""

from collections.abc import Callable
from datetime import datetime, timedelta
from random import Random

from tsloadgen.core.models import Point
from tsloadgen.devops.measurements import (
    MeasurementConstructor,
    SimulatedMeasurement,
    new_cpu_measurement,
    new_disk_measurement,
    new_kernel_measurement,
    new_mem_measurement,
    new_net_measurement,
    new_single_cpu_measurement,
)

# Tag keys of every host, in emission order.
MACHINE_TAG_KEYS = (
    "hostname",
    "region",
    "datacenter",
    "rack",
    "os",
    "arch",
    "team",
    "service",
    "service_version",
    "service_environment",
)

REGIONS = {
    "us-east-1": ("us-east-1a", "us-east-1b", "us-east-1c", "us-east-1e"),
    "us-west-1": ("us-west-1a", "us-west-1b"),
    "us-west-2": ("us-west-2a", "us-west-2b", "us-west-2c"),
    "eu-west-1": ("eu-west-1a", "eu-west-1b", "eu-west-1c"),
    "eu-central-1": ("eu-central-1a", "eu-central-1b"),
    "ap-southeast-1": ("ap-southeast-1a", "ap-southeast-1b"),
    "ap-southeast-2": ("ap-southeast-2a", "ap-southeast-2b"),
    "ap-northeast-1": ("ap-northeast-1a", "ap-northeast-1c"),
    "sa-east-1": ("sa-east-1a", "sa-east-1b", "sa-east-1c"),
}
MACHINE_OS = ("Ubuntu16.10", "Ubuntu16.04LTS", "Ubuntu15.10")
MACHINE_ARCH = ("x64", "x86")
MACHINE_TEAM = ("SF", "NYC", "LON", "CHI")
MACHINE_SERVICE_ENVIRONMENT = ("production", "staging", "test")

DEVOPS_MEASUREMENTS: tuple[MeasurementConstructor, ...] = (
    new_cpu_measurement,
    new_disk_measurement,
    new_kernel_measurement,
    new_mem_measurement,
    new_net_measurement,
)


class Host:
    """A simulated machine: fixed tag values plus a set of measurements.

    Args:
        index: Position of the host in the population; sets the hostname.
        start: Timestamp of the first sample.
        rng: Generator shared with the owning simulator.
        measurements: Constructors for the measurements this host reports.
    """

    def __init__(
        self,
        index: int,
        start: datetime,
        rng: Random,
        measurements: tuple[MeasurementConstructor, ...],
    ) -> None:
        region = rng.choice(sorted(REGIONS))
        self.tag_values = (
            f"host_{index}",
            region,
            rng.choice(REGIONS[region]),
            str(rng.randrange(0, 100)),
            rng.choice(MACHINE_OS),
            rng.choice(MACHINE_ARCH),
            rng.choice(MACHINE_TEAM),
            str(rng.randrange(0, 20)),
            str(rng.randrange(0, 2)),
            rng.choice(MACHINE_SERVICE_ENVIRONMENT),
        )
        self.simulated_measurements: list[SimulatedMeasurement] = [
            construct(start, rng) for construct in measurements
        ]

    @property
    def hostname(self) -> str:
        return self.tag_values[0]

    def tick_all(self, interval: timedelta) -> None:
        for measurement in self.simulated_measurements:
            measurement.tick(interval)

    def to_point(self, point: Point, measurement_index: int) -> None:
        """Write host tags and one measurement's current state to point."""
        for key, value in zip(MACHINE_TAG_KEYS, self.tag_values):
            point.append_tag(key, value)
        self.simulated_measurements[measurement_index].to_point(point)


HostConstructor = Callable[[int, datetime, Random], Host]


def new_host(index: int, start: datetime, rng: Random) -> Host:
    """Host reporting the full devops measurement set."""
    return Host(index, start, rng, DEVOPS_MEASUREMENTS)


def new_host_cpu_only(index: int, start: datetime, rng: Random) -> Host:
    """Host reporting only the ten-field cpu measurement."""
    return Host(index, start, rng, (new_cpu_measurement,))


def new_host_cpu_single(index: int, start: datetime, rng: Random) -> Host:
    """Host reporting a cpu measurement with a single field."""
    return Host(index, start, rng, (new_single_cpu_measurement,))
