"""TimescaleDB query generators for the devops use cases.

TimescaleDBDevops holds everything engine-specific: configuration, the
overall time range, the random generator and the query pool. Use-case
generators wrap one instance and add only their own parameters.
"""

from datetime import datetime, timedelta
from random import Random

from tsloadgen.core.config import DatabaseConfig
from tsloadgen.core.pool import QueryPool
from tsloadgen.core.ports import QueryGeneratorFactory
from tsloadgen.core.queries import TimescaleDBQuery
from tsloadgen.querygen.common import (
    HIGH_CPU_THRESHOLD,
    HIGH_CPU_WINDOW,
    TimeInterval,
    cpu_metrics,
    random_hostnames,
)

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f +0000"


def _sql_time(value: datetime) -> str:
    return value.strftime(_TIME_FORMAT)


class TimescaleDBDevops:
    """Engine-common TimescaleDB query builder.

    Args:
        db_config: Database settings used to render SQL.
        start: Start of the data set's time range.
        end: End of the data set's time range.
        rng: Source of randomized parameters; a fresh Random() if omitted.
    """

    def __init__(
        self,
        db_config: DatabaseConfig,
        start: datetime,
        end: datetime,
        rng: Random | None = None,
    ) -> None:
        self.db_config = db_config
        self.all_interval = TimeInterval(start, end)
        self.rng = rng if rng is not None else Random()
        self._pool: QueryPool[TimescaleDBQuery] = QueryPool(TimescaleDBQuery)
        self._live: TimescaleDBQuery | None = None
        self._next_id = 0

    def new_query(self) -> TimescaleDBQuery:
        """Recycle the live query, if any, and take an empty one from the pool."""
        if self._live is not None:
            self._pool.release(self._live)
        self._live = self._pool.acquire()
        self._next_id += 1
        self._live.id = self._next_id
        return self._live

    def release(self, query: TimescaleDBQuery) -> None:
        """Return query to the pool before the next dispatch."""
        self._pool.release(query)
        if query is self._live:
            self._live = None

    def _host_predicate(self, hostnames: list[str]) -> str:
        quoted = ",".join(f"'{name}'" for name in hostnames)
        column = "tagset->>'hostname'" if self.db_config.use_json_tags else "hostname"
        return f"tags_id IN (SELECT id FROM tags WHERE {column} IN ({quoted}))"

    def high_cpu_for_hosts(
        self, q: TimescaleDBQuery, scale_var: int, hosts: int
    ) -> None:
        """Fill q with a query for cpu readings above the usage threshold.

        Args:
            q: Pooled query to fill in place.
            scale_var: Number of hosts in the data set.
            hosts: Hosts to restrict the query to; 0 means all hosts.
        """
        interval = self.all_interval.rand_window(self.rng, HIGH_CPU_WINDOW)
        predicates = [
            f"usage_user > {HIGH_CPU_THRESHOLD}",
            f"time >= '{_sql_time(interval.start)}'",
            f"time < '{_sql_time(interval.end)}'",
        ]
        if hosts == 0:
            host_label = "all hosts"
        else:
            predicates.append(
                self._host_predicate(random_hostnames(self.rng, hosts, scale_var))
            )
            host_label = f"{hosts} host(s)"

        q.human_label = f"TimescaleDB CPU over threshold, {host_label}"
        q.human_description = f"{q.human_label}: {interval.start.isoformat()}"
        q.hypertable = "cpu"
        q.sql_query = f"SELECT * FROM cpu WHERE {' AND '.join(predicates)}"

    def groupby_time(
        self,
        q: TimescaleDBQuery,
        scale_var: int,
        metrics: int,
        hosts: int,
        hours: int,
    ) -> None:
        """Fill q with a per-minute max of cpu metrics for random hosts.

        Args:
            q: Pooled query to fill in place.
            scale_var: Number of hosts in the data set.
            metrics: Number of cpu metrics to aggregate.
            hosts: Number of random hosts to aggregate over.
            hours: Length of the random time window in hours.
        """
        interval = self.all_interval.rand_window(self.rng, timedelta(hours=hours))
        hostnames = random_hostnames(self.rng, hosts, scale_var)
        selects = ", ".join(
            f"max({metric}) AS max_{metric}" for metric in cpu_metrics(metrics)
        )
        if self.db_config.use_time_bucket:
            bucket = "time_bucket('1 minute', time)"
        else:
            bucket = "date_trunc('minute', time)"

        q.human_label = (
            f"TimescaleDB {metrics} cpu metric(s), random {hosts:4d} hosts, "
            f"random {hours}h0m0s by 1m"
        )
        q.human_description = f"{q.human_label}: {interval.start.isoformat()}"
        q.hypertable = "cpu"
        q.sql_query = (
            f"SELECT {bucket} AS minute, {selects} FROM cpu "
            f"WHERE {self._host_predicate(hostnames)} "
            f"AND time >= '{_sql_time(interval.start)}' "
            f"AND time < '{_sql_time(interval.end)}' "
            "GROUP BY minute ORDER BY minute ASC"
        )


class TimescaleDBDevopsHighCPU:
    """High-cpu queries over a fixed number of hosts."""

    def __init__(self, common: TimescaleDBDevops, hosts: int) -> None:
        self.common = common
        self.hosts = hosts

    def dispatch(self, scale_var: int) -> TimescaleDBQuery:
        """Fill a pooled query; valid until the next dispatch or release."""
        q = self.common.new_query()
        self.common.high_cpu_for_hosts(q, scale_var, self.hosts)
        return q

    def release(self, query: TimescaleDBQuery) -> None:
        self.common.release(query)


class TimescaleDBDevopsSingleGroupby:
    """Per-minute max queries for a fixed metric count, host count and window."""

    def __init__(
        self, common: TimescaleDBDevops, metrics: int, hosts: int, hours: int
    ) -> None:
        self.common = common
        self.metrics = metrics
        self.hosts = hosts
        self.hours = hours

    def dispatch(self, scale_var: int) -> TimescaleDBQuery:
        """Fill a pooled query; valid until the next dispatch or release."""
        q = self.common.new_query()
        self.common.groupby_time(q, scale_var, self.metrics, self.hosts, self.hours)
        return q

    def release(self, query: TimescaleDBQuery) -> None:
        self.common.release(query)


def new_timescaledb_devops_high_cpu(hosts: int) -> QueryGeneratorFactory:
    """Return a factory building TimescaleDBDevopsHighCPU generators."""

    def factory(
        db_config: DatabaseConfig,
        start: datetime,
        end: datetime,
        rng: Random | None = None,
    ) -> TimescaleDBDevopsHighCPU:
        underlying = TimescaleDBDevops(db_config, start, end, rng)
        return TimescaleDBDevopsHighCPU(underlying, hosts)

    return factory


def new_timescaledb_devops_single_groupby(
    metrics: int, hosts: int, hours: int
) -> QueryGeneratorFactory:
    """Return a factory building TimescaleDBDevopsSingleGroupby generators."""

    def factory(
        db_config: DatabaseConfig,
        start: datetime,
        end: datetime,
        rng: Random | None = None,
    ) -> TimescaleDBDevopsSingleGroupby:
        underlying = TimescaleDBDevops(db_config, start, end, rng)
        return TimescaleDBDevopsSingleGroupby(underlying, metrics, hosts, hours)

    return factory
