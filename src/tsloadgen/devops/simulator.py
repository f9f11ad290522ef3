"""Simulators for the devops, cpu-only and cpu-single use cases.

Simulated time is split into epochs of one sampling interval. Every epoch
visits each (measurement, host) pair once; hosts beyond the current epoch's
population are still visited but report that no record was produced, so
the population can grow from the initial to the target scale.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from random import Random

from tsloadgen.core.config import ConfigurationError
from tsloadgen.core.models import Point
from tsloadgen.devops.hosts import (
    HostConstructor,
    new_host,
    new_host_cpu_only,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DevopsSimulatorConfig:
    """Configuration for a simulator reporting several measurements per host.

    Attributes:
        start: First simulated timestamp (UTC).
        end: End of simulated time (UTC).
        init_host_count: Hosts producing records in the first epoch.
        host_count: Hosts producing records in the last epoch.
        interval: Simulated time between two samples of one host.
        seed: Seed of the simulator's random generator.
        host_constructor: Builds each simulated host.
    """

    start: datetime
    end: datetime
    init_host_count: int
    host_count: int
    interval: timedelta
    seed: int
    host_constructor: HostConstructor = new_host

    def to_simulator(self) -> "DevopsSimulator":
        return DevopsSimulator(self)


@dataclass(frozen=True)
class CPUOnlySimulatorConfig:
    """Configuration for a simulator reporting only the cpu measurement."""

    start: datetime
    end: datetime
    init_host_count: int
    host_count: int
    interval: timedelta
    seed: int
    host_constructor: HostConstructor = new_host_cpu_only

    def to_simulator(self) -> "CPUOnlySimulator":
        return CPUOnlySimulator(self)


class _CommonDevopsSimulator:
    """State and bookkeeping shared by the devops simulators."""

    def __init__(self, config: DevopsSimulatorConfig | CPUOnlySimulatorConfig) -> None:
        if config.init_host_count > config.host_count:
            raise ConfigurationError(
                f"initial host count {config.init_host_count} "
                f"cannot be greater than host count {config.host_count}"
            )
        if config.host_count < 1:
            raise ConfigurationError("host count must be at least 1")
        if config.init_host_count < 0:
            raise ConfigurationError("initial host count cannot be negative")
        if config.interval <= timedelta(0):
            raise ConfigurationError("interval must be positive")

        self._rng = Random(config.seed)
        self._interval = config.interval
        self._hosts = [
            config.host_constructor(index, config.start, self._rng)
            for index in range(config.host_count)
        ]
        self._measurement_count = len(self._hosts[0].simulated_measurements)

        self._init_hosts = config.init_host_count
        self._epoch_hosts = config.init_host_count
        self._epoch = 0
        self._epochs = max((config.end - config.start) // config.interval, 0)

        self._host_index = 0
        self._made_points = 0
        self._max_points = self._epochs * config.host_count * self._measurement_count
        logger.debug(
            "simulator created",
            extra={
                "hosts": config.host_count,
                "epochs": self._epochs,
                "max_points": self._max_points,
            },
        )

    @property
    def epoch_hosts(self) -> int:
        """Hosts producing records in the current epoch."""
        return self._epoch_hosts

    def finished(self) -> bool:
        return self._made_points >= self._max_points

    def fields(self) -> Mapping[str, Sequence[str]]:
        """Return measurement name -> field names reported by every host."""
        return {
            measurement.name: measurement.field_keys
            for measurement in self._hosts[0].simulated_measurements
        }

    def _tick_all_hosts(self) -> None:
        for host in self._hosts:
            host.tick_all(self._interval)
        self._adjust_hosts_for_epoch()

    def _adjust_hosts_for_epoch(self) -> None:
        self._epoch += 1
        if self._epochs <= 1:
            self._epoch_hosts = len(self._hosts)
            return
        missing = len(self._hosts) - self._init_hosts
        self._epoch_hosts = min(
            self._init_hosts + missing * self._epoch // (self._epochs - 1),
            len(self._hosts),
        )

    def _populate_point(self, point: Point, measurement_index: int) -> bool:
        self._hosts[self._host_index].to_point(point, measurement_index)
        produced = self._host_index < self._epoch_hosts
        self._made_points += 1
        self._host_index += 1
        return produced


class DevopsSimulator(_CommonDevopsSimulator):
    """Generates every devops measurement for every host.

    Within an epoch all hosts report the first measurement, then all hosts
    report the second, and so on.
    """

    def __init__(self, config: DevopsSimulatorConfig) -> None:
        super().__init__(config)
        self._measurement_index = 0

    def next(self, point: Point) -> bool:
        if self._host_index == len(self._hosts):
            self._host_index = 0
            self._measurement_index += 1
        if self._measurement_index == self._measurement_count:
            self._measurement_index = 0
            self._tick_all_hosts()
        return self._populate_point(point, self._measurement_index)


class CPUOnlySimulator(_CommonDevopsSimulator):
    """Generates the cpu measurement for every host."""

    def next(self, point: Point) -> bool:
        if self._host_index == len(self._hosts):
            self._host_index = 0
            self._tick_all_hosts()
        return self._populate_point(point, 0)
