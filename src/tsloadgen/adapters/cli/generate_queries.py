"""tsloadgen-queries: generate benchmark queries for the devops data set.

Queries are written to stdout as one JSON object per line. Generators for
different formats seeded identically draw the same random parameters, so
their outputs describe equivalent workloads.
"""

import argparse
import logging
import sys
from collections import Counter
from random import Random
from typing import TextIO

from tsloadgen.adapters.logging import configure_logging
from tsloadgen.core.config import (
    DEFAULT_TIMESTAMP_END,
    DEFAULT_TIMESTAMP_START,
    QUERY_FORMAT_CHOICES,
    ConfigurationError,
    DatabaseConfig,
    QueryGenerationConfig,
    parse_timestamp,
    resolve_seed,
)
from tsloadgen.core.encoding.ndjson import encode_query
from tsloadgen.querygen.registry import QUERY_TYPES, get_query_generator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsloadgen-queries",
        description="Generate benchmark queries for the devops data set.",
    )
    parser.add_argument(
        "--format",
        default="",
        help=f"Query format to emit. (choices: {', '.join(QUERY_FORMAT_CHOICES)})",
    )
    parser.add_argument(
        "--query-type",
        default="",
        help=f"Query type to generate. (choices: {', '.join(QUERY_TYPES)})",
    )
    parser.add_argument(
        "--scale-var",
        type=int,
        default=1,
        help="Number of hosts in the data set being queried.",
    )
    parser.add_argument(
        "--queries", type=int, default=1000, help="Number of queries to generate."
    )
    parser.add_argument(
        "--seed", type=int, default=0, help="PRNG seed (0 uses the current timestamp)."
    )
    parser.add_argument(
        "--timestamp-start",
        default=DEFAULT_TIMESTAMP_START,
        help="Beginning timestamp of the data set (RFC3339).",
    )
    parser.add_argument(
        "--timestamp-end",
        default=DEFAULT_TIMESTAMP_END,
        help="Ending timestamp of the data set (RFC3339).",
    )
    parser.add_argument("--db-name", default="benchmark", help="Database to query.")
    parser.add_argument(
        "--timescale-use-json-tags",
        action="store_true",
        help="TimescaleDB tags are stored in a JSONB column.",
    )
    parser.add_argument(
        "--timescale-use-time-bucket",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Group TimescaleDB results with time_bucket() instead of date_trunc().",
    )
    parser.add_argument(
        "--debug", type=int, choices=(0, 1, 2), default=0, help="Debug printing."
    )
    return parser


def config_from_args(args: argparse.Namespace) -> QueryGenerationConfig:
    """Build the run configuration from parsed flags.

    Raises:
        ConfigurationError: If a timestamp does not parse.
    """
    return QueryGenerationConfig(
        format=args.format,
        query_type=args.query_type,
        scale_var=args.scale_var,
        queries=args.queries,
        timestamp_start=parse_timestamp(args.timestamp_start),
        timestamp_end=parse_timestamp(args.timestamp_end),
        seed=resolve_seed(args.seed),
        db_config=DatabaseConfig(
            db_name=args.db_name,
            use_json_tags=args.timescale_use_json_tags,
            use_time_bucket=args.timescale_use_time_bucket,
        ),
        debug=args.debug,
    )


def generate(config: QueryGenerationConfig, out: TextIO) -> Counter[str]:
    """Write config.queries queries to out.

    Returns:
        Number of queries written per human label.

    Raises:
        ConfigurationError: If the configuration is invalid or the query
            parameters do not fit the data set (e.g., more hosts requested
            than the scale var provides).
    """
    config.validate(tuple(QUERY_TYPES))
    generator = get_query_generator(
        config.query_type,
        config.format,
        config.db_config,
        config.timestamp_start,
        config.timestamp_end,
        Random(config.seed),
    )
    counts: Counter[str] = Counter()
    for _ in range(config.queries):
        try:
            q = generator.dispatch(config.scale_var)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        # q is recycled by the next dispatch, so encode it now
        out.write(encode_query(q))
        counts[q.human_label] += 1
    return counts


def main(argv: list[str] | None = None, stdout: TextIO | None = None) -> int:
    """Run the query generator.

    Args:
        argv: Command line arguments (default: sys.argv[1:]).
        stdout: Text sink for the generated queries (default: sys.stdout).

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    out = stdout if stdout is not None else sys.stdout

    try:
        config = config_from_args(args)
        logger.info("using random seed %d", config.seed)
        counts = generate(config, out)
        out.flush()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("failed to write queries: %s", exc)
        return 1

    for label, count in sorted(counts.items()):
        logger.info("%s: %d queries", label, count)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
