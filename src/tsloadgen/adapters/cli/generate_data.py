"""tsloadgen-data: generate synthetic time-series data in a bulk-load format.

Supported formats:
    cassandra    Cassandra series CSV
    influx       InfluxDB line protocol
    mongo        MongoDB BSON documents
    timescaledb  TimescaleDB pseudo-CSV

Supported use cases:
    devops      scale var is the number of hosts to simulate, each reporting
                cpu, disk, kernel, mem and net every log interval
    cpu-only    same as devops but only the cpu measurement
    cpu-single  same as cpu-only but with a single cpu field

Generation scales out over processes with the interleaved generation flags:
run one process per group id with the same seed and the union of their
outputs is the full data set.
"""

import argparse
import logging
import sys
from typing import BinaryIO

from tsloadgen.adapters.logging import configure_logging
from tsloadgen.adapters.profiling import start_memory_profile
from tsloadgen.core.config import (
    DEFAULT_LOG_INTERVAL,
    DEFAULT_TIMESTAMP_END,
    DEFAULT_TIMESTAMP_START,
    FORMAT_CHOICES,
    USE_CASE_CHOICES,
    USE_CASE_CPU_ONLY,
    USE_CASE_CPU_SINGLE,
    USE_CASE_DEVOPS,
    ConfigurationError,
    GenerationConfig,
    parse_duration,
    parse_timestamp,
    resolve_seed,
    validate_use_case,
)
from tsloadgen.core.driver import GenerationError, run_simulator, write_schema_header
from tsloadgen.core.encoding import get_serializer
from tsloadgen.core.ports import SimulatorConfig
from tsloadgen.devops import (
    MACHINE_TAG_KEYS,
    CPUOnlySimulatorConfig,
    DevopsSimulatorConfig,
    new_host,
    new_host_cpu_only,
    new_host_cpu_single,
)

logger = logging.getLogger(__name__)

OUTPUT_BUFFER_SIZE = 4 << 20

_SIMULATORS = {
    USE_CASE_CPU_ONLY: (CPUOnlySimulatorConfig, new_host_cpu_only),
    USE_CASE_CPU_SINGLE: (CPUOnlySimulatorConfig, new_host_cpu_single),
    USE_CASE_DEVOPS: (DevopsSimulatorConfig, new_host),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsloadgen-data",
        description="Generate synthetic time-series data for bulk loading.",
    )
    parser.add_argument(
        "--format",
        default="",
        help=f"Format to emit. (choices: {', '.join(FORMAT_CHOICES)})",
    )
    parser.add_argument(
        "--use-case",
        default="",
        help=f"Use case to model. (choices: {', '.join(USE_CASE_CHOICES)})",
    )
    parser.add_argument(
        "--initial-scale-var",
        type=int,
        default=0,
        help="Initial scaling variable specific to the use case (e.g., devices in "
        "'devops'). 0 means to use --scale-var value.",
    )
    parser.add_argument(
        "--scale-var",
        type=int,
        default=1,
        help="Scaling variable specific to the use case (e.g., devices in 'devops').",
    )
    parser.add_argument(
        "--timestamp-start",
        default=DEFAULT_TIMESTAMP_START,
        help="Beginning timestamp (RFC3339).",
    )
    parser.add_argument(
        "--timestamp-end",
        default=DEFAULT_TIMESTAMP_END,
        help="Ending timestamp (RFC3339).",
    )
    parser.add_argument(
        "--seed", type=int, default=0, help="PRNG seed (0 uses the current timestamp)."
    )
    parser.add_argument(
        "--debug", type=int, choices=(0, 1, 2), default=0, help="Debug printing."
    )
    parser.add_argument(
        "--interleaved-generation-group-id",
        type=int,
        default=0,
        help="Group (0-indexed) to perform round-robin serialization within. "
        "Use this to scale up data generation to multiple processes.",
    )
    parser.add_argument(
        "--interleaved-generation-groups",
        type=int,
        default=1,
        help="The number of round-robin serialization groups. "
        "Use this to scale up data generation to multiple processes.",
    )
    parser.add_argument(
        "--profile-file", default=None, help="File to which to write a memory profile."
    )
    parser.add_argument(
        "--log-interval",
        default=DEFAULT_LOG_INTERVAL,
        help="Duration between host data points (e.g., 10s, 1m).",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    """Build the run configuration from parsed flags.

    Raises:
        ConfigurationError: If a timestamp or duration does not parse, or a
            group id, group count or initial scale var is negative.
    """
    group_id = args.interleaved_generation_group_id
    total_groups = args.interleaved_generation_groups
    if group_id < 0 or total_groups < 0:
        raise ConfigurationError("interleaved generation flags cannot be negative")
    if args.initial_scale_var < 0:
        raise ConfigurationError("initial scale var cannot be negative")
    initial_scale_var = args.initial_scale_var or args.scale_var
    return GenerationConfig(
        format=args.format,
        use_case=args.use_case,
        initial_scale_var=initial_scale_var,
        scale_var=args.scale_var,
        timestamp_start=parse_timestamp(args.timestamp_start),
        timestamp_end=parse_timestamp(args.timestamp_end),
        seed=resolve_seed(args.seed),
        interval=parse_duration(args.log_interval),
        group_id=group_id,
        total_groups=total_groups,
        profile_file=args.profile_file,
        debug=args.debug,
    )


def get_simulator_config(config: GenerationConfig) -> SimulatorConfig:
    """Return the simulator configuration for the configured use case.

    Raises:
        ConfigurationError: If the use case is unknown.
    """
    validate_use_case(config.use_case)
    common = {
        "start": config.timestamp_start,
        "end": config.timestamp_end,
        "init_host_count": config.initial_scale_var,
        "host_count": config.scale_var,
        "interval": config.interval,
        "seed": config.seed,
    }
    config_type, host_constructor = _SIMULATORS[config.use_case]
    return config_type(**common, host_constructor=host_constructor)


def generate(config: GenerationConfig, out: BinaryIO) -> int:
    """Write the configured data set (this group's share of it) to out.

    Returns:
        Number of records written.

    Raises:
        ConfigurationError: If the configuration is invalid.
        GenerationError: If writing to out fails.
    """
    config.validate()
    sim = get_simulator_config(config).to_simulator()
    serializer = get_serializer(config.format)
    if serializer.schema_header:
        write_schema_header(sim, MACHINE_TAG_KEYS, out)
    return run_simulator(sim, serializer, out, config.group_id, config.total_groups)


def _flush_best_effort(out: BinaryIO) -> None:
    try:
        out.flush()
    except OSError as exc:
        logger.error("failed to flush output: %s", exc)


def main(argv: list[str] | None = None, stdout: BinaryIO | None = None) -> int:
    """Run the data generator.

    Args:
        argv: Command line arguments (default: sys.argv[1:]).
        stdout: Binary sink for the generated data (default: process stdout).

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    try:
        config = config_from_args(args)
        config.validate()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    logger.info("using random seed %d", config.seed)

    stop_profile = None
    if config.profile_file:
        try:
            stop_profile = start_memory_profile(config.profile_file)
        except ConfigurationError as exc:
            logger.error("%s", exc)
            return 1

    if stdout is None:
        out = open(
            sys.stdout.fileno(), "wb", buffering=OUTPUT_BUFFER_SIZE, closefd=False
        )
    else:
        out = stdout
    try:
        written = generate(config, out)
        out.flush()
    except GenerationError as exc:
        logger.error("%s", exc)
        _flush_best_effort(out)
        return 1
    except SystemExit:
        _flush_best_effort(out)
        raise
    except OSError as exc:
        logger.error("failed to flush output: %s", exc)
        return 1
    finally:
        if stop_profile is not None:
            stop_profile()

    logger.info(
        "generation finished",
        extra={
            "records": written,
            "group_id": config.group_id,
            "total_groups": config.total_groups,
        },
    )
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
