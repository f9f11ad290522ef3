"""InfluxDB query generators for the devops use cases."""

from datetime import datetime, timedelta
from random import Random
from urllib.parse import urlencode

from tsloadgen.core.config import DatabaseConfig
from tsloadgen.core.pool import QueryPool
from tsloadgen.core.ports import QueryGeneratorFactory
from tsloadgen.core.queries import InfluxQuery
from tsloadgen.querygen.common import (
    HIGH_CPU_THRESHOLD,
    HIGH_CPU_WINDOW,
    TimeInterval,
    cpu_metrics,
    random_hostnames,
)


def _influx_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _host_clause(hostnames: list[str]) -> str:
    return "(" + " or ".join(f"hostname = '{name}'" for name in hostnames) + ")"


class InfluxDevops:
    """Engine-common InfluxQL query builder.

    Args:
        db_config: Database settings; db_name selects the target database.
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
        self._pool: QueryPool[InfluxQuery] = QueryPool(InfluxQuery)
        self._live: InfluxQuery | None = None
        self._next_id = 0

    def new_query(self) -> InfluxQuery:
        """Recycle the live query, if any, and take an empty one from the pool."""
        if self._live is not None:
            self._pool.release(self._live)
        self._live = self._pool.acquire()
        self._next_id += 1
        self._live.id = self._next_id
        return self._live

    def release(self, query: InfluxQuery) -> None:
        self._pool.release(query)
        if query is self._live:
            self._live = None

    def _fill(
        self, q: InfluxQuery, label: str, interval: TimeInterval, influxql: str
    ) -> None:
        q.human_label = label
        q.human_description = f"{label}: {interval.start.isoformat()}"
        q.method = "GET"
        q.path = "/query?" + urlencode({"db": self.db_config.db_name, "q": influxql})
        q.body = ""

    def high_cpu_for_hosts(self, q: InfluxQuery, scale_var: int, hosts: int) -> None:
        """Fill q with a query for cpu readings above the usage threshold.

        hosts == 0 queries every host.
        """
        interval = self.all_interval.rand_window(self.rng, HIGH_CPU_WINDOW)
        influxql = (
            f"SELECT * from cpu where usage_user > {HIGH_CPU_THRESHOLD} "
            f"and time >= '{_influx_time(interval.start)}' "
            f"and time < '{_influx_time(interval.end)}'"
        )
        if hosts == 0:
            host_label = "all hosts"
        else:
            hostnames = random_hostnames(self.rng, hosts, scale_var)
            influxql += " and " + _host_clause(hostnames)
            host_label = f"{hosts} host(s)"
        self._fill(q, f"Influx CPU over threshold, {host_label}", interval, influxql)

    def groupby_time(
        self, q: InfluxQuery, scale_var: int, metrics: int, hosts: int, hours: int
    ) -> None:
        """Fill q with a per-minute max of cpu metrics for random hosts."""
        interval = self.all_interval.rand_window(self.rng, timedelta(hours=hours))
        hostnames = random_hostnames(self.rng, hosts, scale_var)
        selects = ",".join(f"max({metric})" for metric in cpu_metrics(metrics))
        influxql = (
            f"SELECT {selects} from cpu where {_host_clause(hostnames)} "
            f"and time >= '{_influx_time(interval.start)}' "
            f"and time < '{_influx_time(interval.end)}' group by time(1m)"
        )
        label = (
            f"Influx {metrics} cpu metric(s), random {hosts:4d} hosts, "
            f"random {hours}h0m0s by 1m"
        )
        self._fill(q, label, interval, influxql)


class InfluxDevopsHighCPU:
    """High-cpu queries over a fixed number of hosts."""

    def __init__(self, common: InfluxDevops, hosts: int) -> None:
        self.common = common
        self.hosts = hosts

    def dispatch(self, scale_var: int) -> InfluxQuery:
        q = self.common.new_query()
        self.common.high_cpu_for_hosts(q, scale_var, self.hosts)
        return q

    def release(self, query: InfluxQuery) -> None:
        self.common.release(query)


class InfluxDevopsSingleGroupby:
    """Per-minute max queries for a fixed metric count, host count and window."""

    def __init__(
        self, common: InfluxDevops, metrics: int, hosts: int, hours: int
    ) -> None:
        self.common = common
        self.metrics = metrics
        self.hosts = hosts
        self.hours = hours

    def dispatch(self, scale_var: int) -> InfluxQuery:
        q = self.common.new_query()
        self.common.groupby_time(q, scale_var, self.metrics, self.hosts, self.hours)
        return q

    def release(self, query: InfluxQuery) -> None:
        self.common.release(query)


def new_influx_devops_high_cpu(hosts: int) -> QueryGeneratorFactory:
    """Return a factory building InfluxDevopsHighCPU generators."""

    def factory(
        db_config: DatabaseConfig,
        start: datetime,
        end: datetime,
        rng: Random | None = None,
    ) -> InfluxDevopsHighCPU:
        return InfluxDevopsHighCPU(InfluxDevops(db_config, start, end, rng), hosts)

    return factory


def new_influx_devops_single_groupby(
    metrics: int, hosts: int, hours: int
) -> QueryGeneratorFactory:
    """Return a factory building InfluxDevopsSingleGroupby generators."""

    def factory(
        db_config: DatabaseConfig,
        start: datetime,
        end: datetime,
        rng: Random | None = None,
    ) -> InfluxDevopsSingleGroupby:
        underlying = InfluxDevops(db_config, start, end, rng)
        return InfluxDevopsSingleGroupby(underlying, metrics, hosts, hours)

    return factory
