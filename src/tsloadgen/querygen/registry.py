"""Query type -> engine -> generator factory matrix."""

from datetime import datetime
from random import Random

from tsloadgen.core.config import (
    FORMAT_INFLUX,
    FORMAT_TIMESCALEDB,
    ConfigurationError,
    DatabaseConfig,
)
from tsloadgen.core.ports import QueryGenerator, QueryGeneratorFactory
from tsloadgen.querygen.influx import (
    new_influx_devops_high_cpu,
    new_influx_devops_single_groupby,
)
from tsloadgen.querygen.timescaledb import (
    new_timescaledb_devops_high_cpu,
    new_timescaledb_devops_single_groupby,
)


def _single_groupby(
    metrics: int, hosts: int, hours: int
) -> dict[str, QueryGeneratorFactory]:
    return {
        FORMAT_INFLUX: new_influx_devops_single_groupby(metrics, hosts, hours),
        FORMAT_TIMESCALEDB: new_timescaledb_devops_single_groupby(
            metrics, hosts, hours
        ),
    }


QUERY_TYPES: dict[str, dict[str, QueryGeneratorFactory]] = {
    "high-cpu-all": {
        FORMAT_INFLUX: new_influx_devops_high_cpu(0),
        FORMAT_TIMESCALEDB: new_timescaledb_devops_high_cpu(0),
    },
    "high-cpu-1": {
        FORMAT_INFLUX: new_influx_devops_high_cpu(1),
        FORMAT_TIMESCALEDB: new_timescaledb_devops_high_cpu(1),
    },
    "single-groupby-1-1-1": _single_groupby(1, 1, 1),
    "single-groupby-1-1-12": _single_groupby(1, 1, 12),
    "single-groupby-1-8-1": _single_groupby(1, 8, 1),
    "single-groupby-5-1-1": _single_groupby(5, 1, 1),
    "single-groupby-5-8-1": _single_groupby(5, 8, 1),
}


def get_query_generator(
    query_type: str,
    engine: str,
    db_config: DatabaseConfig,
    start: datetime,
    end: datetime,
    rng: Random | None = None,
) -> QueryGenerator:
    """Build the generator for one query type and engine.

    Raises:
        ConfigurationError: If the query type or engine is unknown.
    """
    try:
        factory = QUERY_TYPES[query_type][engine]
    except KeyError as exc:
        raise ConfigurationError(
            f"no query generator for type '{query_type}' and format '{engine}'"
        ) from exc
    return factory(db_config, start, end, rng)
