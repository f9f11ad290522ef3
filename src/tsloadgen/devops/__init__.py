"""Synthetic devops model: hosts, their measurements and the simulators."""

from tsloadgen.devops.hosts import (
    MACHINE_TAG_KEYS,
    Host,
    new_host,
    new_host_cpu_only,
    new_host_cpu_single,
)
from tsloadgen.devops.simulator import (
    CPUOnlySimulator,
    CPUOnlySimulatorConfig,
    DevopsSimulator,
    DevopsSimulatorConfig,
)

__all__ = [
    "MACHINE_TAG_KEYS",
    "CPUOnlySimulator",
    "CPUOnlySimulatorConfig",
    "DevopsSimulator",
    "DevopsSimulatorConfig",
    "Host",
    "new_host",
    "new_host_cpu_only",
    "new_host_cpu_single",
]
